# counters.py
# Result records shared by the search algorithms and the timing harness.

from dataclasses import dataclass, field, replace
from typing import Optional, Tuple


@dataclass(frozen=True)
class OperationCounters:
    """Structural operation counts for one build/scan cycle."""

    char_comparisons: int = 0
    lps_computations: int = 0
    fallback_steps: int = 0
    match_fallbacks: int = 0

    def __add__(self, other):
        if not isinstance(other, OperationCounters):
            return NotImplemented
        return OperationCounters(
            char_comparisons=self.char_comparisons + other.char_comparisons,
            lps_computations=self.lps_computations + other.lps_computations,
            fallback_steps=self.fallback_steps + other.fallback_steps,
            match_fallbacks=self.match_fallbacks + other.match_fallbacks,
        )

    def to_dict(self) -> dict:
        return {
            "char_comparisons": self.char_comparisons,
            "lps_computations": self.lps_computations,
            "fallback_steps": self.fallback_steps,
            "match_fallbacks": self.match_fallbacks,
        }


@dataclass(frozen=True)
class ScanResult:
    """
    Match offsets and counters from one search.
    `elapsed` is in seconds and is only set by the timing harness.
    """

    matches: Tuple[int, ...] = ()
    counters: OperationCounters = field(default_factory=OperationCounters)
    elapsed: Optional[float] = None

    @property
    def count(self) -> int:
        return len(self.matches)

    @property
    def found(self) -> bool:
        return bool(self.matches)

    def with_elapsed(self, seconds: float) -> "ScanResult":
        return replace(self, elapsed=seconds)
