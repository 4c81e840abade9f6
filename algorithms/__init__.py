from .brute_force import brute_force_search
from .counters import OperationCounters, ScanResult
from .errors import InvalidArgument
from .kmp import PrefixTable, build_prefix_table, kmp_search

__all__ = [
    "InvalidArgument",
    "OperationCounters",
    "PrefixTable",
    "ScanResult",
    "brute_force_search",
    "build_prefix_table",
    "kmp_search",
]
