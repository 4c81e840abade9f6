# report.py
# Writes batch results to JSON, CSV and a performance chart.

import csv
import json
import logging
import os

import matplotlib.ticker as mticker
from matplotlib.figure import Figure

logger = logging.getLogger("kmp.report")

CSV_COLUMNS = [
    "dataset", "pattern", "pattern_length", "text_length", "match_count", "matches",
    "char_comparisons", "lps_computations", "fallback_steps", "match_fallbacks",
    "time_ms", "baseline_comparisons", "baseline_time_ms",
]


def _ensure_parent(path):
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)


def write_json_report(report, path):
    data = {
        "summary": report.summary(),
        "datasets": [record.to_dict() for record in report.records],
    }
    _ensure_parent(path)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=4)
    logger.info("JSON report saved to %s", path)
    return path


def write_csv_report(report, path):
    _ensure_parent(path)
    with open(path, "w", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=CSV_COLUMNS)
        writer.writeheader()
        for record in report.records:
            entry = record.to_dict()
            row = {
                "dataset": entry["dataset"],
                "pattern": entry["pattern"],
                "pattern_length": entry["pattern_length"],
                "text_length": entry["text_length"],
                "match_count": entry["match_count"],
                "matches": " ".join(str(m) for m in entry["matches"]),
                "time_ms": f"{entry['time_ms']:.4f}",
                "baseline_comparisons": "",
                "baseline_time_ms": "",
            }
            row.update(entry["counters"])
            if "baseline" in entry:
                row["baseline_comparisons"] = entry["baseline"]["comparisons"]
                row["baseline_time_ms"] = f"{entry['baseline']['time_ms']:.4f}"
            writer.writerow(row)
    logger.info("CSV report saved to %s", path)
    return path


def build_chart(report):
    """Comparisons against text length, with the n and 2n bounds drawn in."""
    fig = Figure(figsize=(8, 5), dpi=100)
    ax = fig.add_subplot(111)

    if not report.records:
        ax.set_title("No Datasets to Display")
        return fig

    records = sorted(report.records, key=lambda r: r.text_length)
    lengths = [r.text_length for r in records]
    comparisons = [r.result.counters.char_comparisons for r in records]

    ax.scatter(lengths, comparisons, color='blue', label='KMP comparisons', zorder=3)
    ax.plot(lengths, lengths, color='gray', linestyle='--', label='n')
    ax.plot(lengths, [2 * n for n in lengths], color='gray', linestyle=':', label='2n')

    baselines = [(r.text_length, r.baseline.counters.char_comparisons)
                 for r in records if r.baseline is not None]
    if baselines:
        ax.scatter([b[0] for b in baselines], [b[1] for b in baselines],
                   color='red', marker='x', label='Brute Force comparisons', zorder=3)

    ax.set_xlabel('Text Length (characters)')
    ax.set_ylabel('Character Comparisons')
    ax.set_title("KMP Comparisons vs Text Length")
    ax.xaxis.set_major_formatter(mticker.FuncFormatter(lambda x, p: format(int(x), ',')))
    ax.yaxis.set_major_locator(mticker.MaxNLocator(integer=True))
    ax.yaxis.set_major_formatter(mticker.FuncFormatter(lambda x, p: format(int(x), ',')))
    ax.legend()
    fig.tight_layout()
    return fig


def write_chart(report, path):
    fig = build_chart(report)
    _ensure_parent(path)
    fig.savefig(path)
    logger.info("Chart saved to %s", path)
    return path
