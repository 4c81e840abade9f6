import logging
import time
from dataclasses import dataclass, field
from typing import List, Optional

from .brute_force import brute_force_search
from .counters import OperationCounters, ScanResult
from .errors import InvalidArgument
from .kmp import PrefixTable, build_prefix_table, kmp_search

logger = logging.getLogger("kmp.harness")


def timed_search(text, pattern, table=None) -> ScanResult:
    """Runs kmp_search and attaches the wall-clock time of the call."""
    start = time.perf_counter()
    result = kmp_search(text, pattern, table)
    return result.with_elapsed(time.perf_counter() - start)


def timed_baseline(text, pattern) -> ScanResult:
    start = time.perf_counter()
    result = brute_force_search(text, pattern)
    return result.with_elapsed(time.perf_counter() - start)


@dataclass
class DatasetRecord:
    """One row handed to the result sink."""

    name: str
    pattern: str
    text_length: int
    result: ScanResult
    baseline: Optional[ScanResult] = None

    @property
    def comparison_ratio(self) -> Optional[float]:
        # comparisons per text character; stays within [1, 2] for KMP
        if not self.text_length:
            return None
        return self.result.counters.char_comparisons / self.text_length

    def to_dict(self) -> dict:
        entry = {
            "dataset": self.name,
            "pattern": self.pattern,
            "pattern_length": len(self.pattern),
            "text_length": self.text_length,
            "matches": list(self.result.matches),
            "match_count": self.result.count,
            "counters": self.result.counters.to_dict(),
            "time_ms": (self.result.elapsed or 0.0) * 1000,
        }
        if self.baseline is not None:
            entry["baseline"] = {
                "algorithm": "Brute Force",
                "comparisons": self.baseline.counters.char_comparisons,
                "time_ms": (self.baseline.elapsed or 0.0) * 1000,
            }
        return entry


@dataclass
class BatchReport:
    records: List[DatasetRecord] = field(default_factory=list)
    total_time_s: float = 0.0
    # build steps counted once per distinct pattern; record counters repeat them per dataset
    table_build_steps: int = 0

    def totals(self) -> OperationCounters:
        total = OperationCounters()
        for record in self.records:
            total = total + record.result.counters
        return total

    def summary(self) -> dict:
        ratios = [r.comparison_ratio for r in self.records if r.comparison_ratio is not None]
        summary = {
            "total_datasets": len(self.records),
            "total_time_s": self.total_time_s,
            "total_text_length": sum(r.text_length for r in self.records),
            "total_matches": sum(r.result.count for r in self.records),
            "counters": self.totals().to_dict(),
            "table_build_steps": self.table_build_steps,
            "kmp_time_ms": sum((r.result.elapsed or 0.0) for r in self.records) * 1000,
            "max_comparison_ratio": max(ratios) if ratios else None,
        }
        baselines = [r.baseline for r in self.records if r.baseline is not None]
        if baselines:
            summary["baseline"] = {
                "algorithm": "Brute Force",
                "comparisons": sum(b.counters.char_comparisons for b in baselines),
                "time_ms": sum((b.elapsed or 0.0) for b in baselines) * 1000,
            }
        return summary


def _table_key(pattern):
    if isinstance(pattern, (str, bytes)):
        return pattern
    return tuple(pattern)


def run_batch(datasets, baseline=False) -> BatchReport:
    """
    Runs KMP over every (name, pattern, text) triple from the dataset supplier.

    One PrefixTable is built per distinct pattern and shared read-only by
    every dataset using it, so `time_ms` covers the scan only.
    """
    batch_start = time.perf_counter()
    tables = {}
    report = BatchReport()

    for name, pattern, text in datasets:
        if pattern is None:
            raise InvalidArgument(f"dataset {name!r} has no pattern")
        key = _table_key(pattern)
        table: Optional[PrefixTable] = tables.get(key)
        if table is None:
            table = build_prefix_table(pattern)
            tables[key] = table
            report.table_build_steps += table.steps

        result = timed_search(text, pattern, table)
        base = timed_baseline(text, pattern) if baseline else None
        record = DatasetRecord(
            name=name,
            pattern=pattern,
            text_length=len(text),
            result=result,
            baseline=base,
        )
        report.records.append(record)
        logger.info(
            "%s: %d matches, %d comparisons over %d characters",
            name, result.count, result.counters.char_comparisons, record.text_length,
        )

    report.total_time_s = time.perf_counter() - batch_start
    logger.info("Processed %d datasets in %.3f s", len(report.records), report.total_time_s)
    return report
