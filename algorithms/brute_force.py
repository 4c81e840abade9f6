from .counters import OperationCounters, ScanResult
from .errors import InvalidArgument


def brute_force_search(text, pattern):
    """Checks the pattern against every alignment in the text (naive baseline)."""
    if text is None:
        raise InvalidArgument("text must not be None")
    if pattern is None:
        raise InvalidArgument("pattern must not be None")

    n = len(text)
    m = len(pattern)
    if m == 0 or n == 0:
        return ScanResult()

    matches = []
    comparisons = 0

    for i in range(n - m + 1):
        match = True
        for j in range(m):
            comparisons += 1
            if text[i + j] != pattern[j]:
                match = False
                break
        if match:
            matches.append(i)

    return ScanResult(
        matches=tuple(matches),
        counters=OperationCounters(char_comparisons=comparisons),
    )
