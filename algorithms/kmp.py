# kmp.py
# Knuth-Morris-Pratt search with operation counting.

from .counters import OperationCounters, ScanResult
from .errors import InvalidArgument


class PrefixTable:
    """
    Longest Proper Prefix which is also Suffix (LPS) array for a pattern.

    lps[i] is the length of the longest proper prefix of pattern[0..i]
    that is also a suffix of it. `steps` is the number of iterations the
    construction loop took (one pattern comparison each).
    """

    __slots__ = ("lps", "steps")

    def __init__(self, lps, steps=0):
        object.__setattr__(self, "lps", tuple(lps))
        object.__setattr__(self, "steps", steps)

    def __setattr__(self, name, value):
        raise AttributeError(f"PrefixTable is read-only; cannot set {name!r}")

    def __delattr__(self, name):
        raise AttributeError(f"PrefixTable is read-only; cannot delete {name!r}")

    @classmethod
    def build(cls, pattern):
        if pattern is None:
            raise InvalidArgument("pattern must not be None")

        m = len(pattern)
        lps = [0] * m
        length = 0
        steps = 0
        i = 1
        while i < m:
            steps += 1
            if pattern[i] == pattern[length]:
                length += 1
                lps[i] = length
                i += 1
            elif length != 0:
                length = lps[length - 1]
            else:
                lps[i] = 0
                i += 1

        return cls(lps, steps)

    def __len__(self):
        return len(self.lps)

    def __getitem__(self, index):
        return self.lps[index]

    def __iter__(self):
        return iter(self.lps)

    def __eq__(self, other):
        if not isinstance(other, PrefixTable):
            return NotImplemented
        return self.lps == other.lps and self.steps == other.steps

    def __hash__(self):
        return hash((self.lps, self.steps))

    def __repr__(self):
        return f"PrefixTable(lps={list(self.lps)}, steps={self.steps})"


def build_prefix_table(pattern):
    """Builds the LPS array for `pattern`."""
    return PrefixTable.build(pattern)


def kmp_search(text, pattern, table=None):
    """
    Finds every occurrence of `pattern` in `text`, overlapping ones included.

    `table` may be a PrefixTable built earlier for the same pattern; it is
    built here when omitted. Returns a ScanResult whose matches are the
    ascending start offsets.
    """
    if text is None:
        raise InvalidArgument("text must not be None")
    if pattern is None:
        raise InvalidArgument("pattern must not be None")
    if table is None:
        table = PrefixTable.build(pattern)
    elif not isinstance(table, PrefixTable):
        raise InvalidArgument(f"table must be a PrefixTable, got {type(table).__name__}")
    elif len(table) != len(pattern):
        raise InvalidArgument(
            f"prefix table length {len(table)} does not match pattern length {len(pattern)}"
        )

    n = len(text)
    m = len(pattern)
    if m == 0 or n == 0:
        return ScanResult()

    lps = table.lps
    matches = []
    comparisons = 0
    fallback_steps = 0
    match_fallbacks = 0
    i = 0  # index for text
    j = 0  # index for pattern

    while i < n:
        comparisons += 1
        if text[i] == pattern[j]:
            i += 1
            j += 1
            if j == m:
                matches.append(i - m)
                j = lps[j - 1]
                match_fallbacks += 1
        elif j != 0:
            j = lps[j - 1]
            fallback_steps += 1
        else:
            i += 1

    counters = OperationCounters(
        char_comparisons=comparisons,
        lps_computations=table.steps,
        fallback_steps=fallback_steps,
        match_fallbacks=match_fallbacks,
    )
    return ScanResult(matches=tuple(matches), counters=counters)
