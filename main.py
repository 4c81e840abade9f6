"""Typer CLI entrypoint for the KMP analyzer."""

import json
import os
from pathlib import Path
from typing import Annotated, Optional

import typer

from algorithms import InvalidArgument, build_prefix_table
from algorithms.run_all import run_batch, timed_search
from config import (
    CHART_NAME,
    DATASET_DIR,
    LOG_PATH,
    OUTPUT_DIR,
    PDF_ENGINE,
    PDF_ENGINES,
    REPORT_CSV_NAME,
    REPORT_JSON_NAME,
)
from file_utils import extract_text
from logging_config import setup_logging
from report import write_chart, write_csv_report, write_json_report
from utils import DatasetError, prepare_text, read_datasets

app = typer.Typer(help="Knuth-Morris-Pratt search with operation counting", rich_markup_mode=None)


@app.callback()
def cli_callback() -> None:
    """Keeps every action an explicit subcommand."""


def _check_pdf_engine(pdf_engine: str) -> str:
    normalized = pdf_engine.lower().strip()
    if normalized not in PDF_ENGINES:
        typer.echo(f"ERROR: --pdf-engine must be one of: {', '.join(PDF_ENGINES)}.")
        raise typer.Exit(code=1)
    return normalized


@app.command("search")
def search_command(
    pattern: Annotated[str, typer.Option(..., help="Pattern to look for.")],
    text: Annotated[Optional[str], typer.Option(help="Text to search.")] = None,
    text_file: Annotated[
        Optional[Path],
        typer.Option(exists=True, dir_okay=False, file_okay=True, help="Read the text from a .txt, .pdf or .docx file."),
    ] = None,
    ignore_case: Annotated[bool, typer.Option("--ignore-case", help="Lower-case text and pattern first.")] = False,
    json_output: Annotated[bool, typer.Option("--json", help="Print one JSON object.")] = False,
    pdf_engine: Annotated[str, typer.Option()] = PDF_ENGINE,
) -> None:
    """Search one text for every occurrence of a pattern."""
    if (text is None) == (text_file is None):
        typer.echo("ERROR: give exactly one of --text or --text-file.")
        raise typer.Exit(code=1)

    if text_file is not None:
        text = extract_text(str(text_file), _check_pdf_engine(pdf_engine))
        if text is None:
            typer.echo(f"ERROR: could not read text from {text_file}")
            raise typer.Exit(code=1)

    text = prepare_text(text, ignore_case)
    pattern = prepare_text(pattern, ignore_case)
    try:
        result = timed_search(text, pattern)
    except InvalidArgument as e:
        typer.echo(f"ERROR: {e}")
        raise typer.Exit(code=1)

    if json_output:
        payload = {
            "pattern": pattern,
            "text_length": len(text),
            "matches": list(result.matches),
            "counters": result.counters.to_dict(),
            "time_ms": result.elapsed * 1000,
        }
        typer.echo(json.dumps(payload))
        return

    counters = result.counters
    typer.echo(f"Pattern: {pattern!r} ({len(pattern)} chars), text: {len(text)} chars")
    typer.echo(f"Matches ({result.count}): {' '.join(str(m) for m in result.matches) or 'none'}")
    typer.echo(f"{'Char comparisons':<20} {counters.char_comparisons:,}")
    typer.echo(f"{'LPS computations':<20} {counters.lps_computations:,}")
    typer.echo(f"{'Fallback steps':<20} {counters.fallback_steps:,}")
    typer.echo(f"{'Match fallbacks':<20} {counters.match_fallbacks:,}")
    typer.echo(f"{'Time (ms)':<20} {result.elapsed * 1000:.4f}")


@app.command("lps")
def lps_command(
    pattern: Annotated[str, typer.Argument(help="Pattern to build the prefix table for.")],
    json_output: Annotated[bool, typer.Option("--json", help="Print one JSON object.")] = False,
) -> None:
    """Print the longest-prefix-suffix table of a pattern."""
    table = build_prefix_table(pattern)
    if json_output:
        typer.echo(json.dumps({"pattern": pattern, "lps": list(table), "steps": table.steps}))
        return

    typer.echo(f"{'index':<8}" + " ".join(f"{i:>3}" for i in range(len(pattern))))
    typer.echo(f"{'pattern':<8}" + " ".join(f"{c:>3}" for c in pattern))
    typer.echo(f"{'lps':<8}" + " ".join(f"{v:>3}" for v in table))
    typer.echo(f"Steps: {table.steps}")


@app.command("batch")
def batch_command(
    datasets: Annotated[Path, typer.Option(file_okay=False, help="Folder of datasets.")] = Path(DATASET_DIR),
    pattern: Annotated[
        Optional[str], typer.Option(help="Pattern for plain documents that have no manifest.")
    ] = None,
    out_dir: Annotated[Path, typer.Option()] = Path(OUTPUT_DIR),
    log_dir: Annotated[Path, typer.Option()] = Path(LOG_PATH),
    ignore_case: Annotated[bool, typer.Option("--ignore-case")] = False,
    baseline: Annotated[
        bool, typer.Option("--baseline", help="Also run the brute-force search for comparison.")
    ] = False,
    chart: Annotated[bool, typer.Option("--chart/--no-chart")] = True,
    pdf_engine: Annotated[str, typer.Option()] = PDF_ENGINE,
    verbose: Annotated[bool, typer.Option("--verbose")] = False,
) -> None:
    """Run KMP over every dataset in a folder and write the reports."""
    engine = _check_pdf_engine(pdf_engine)
    setup_logging(str(log_dir), verbose=verbose)

    try:
        supplier = read_datasets(str(datasets), pattern=pattern, ignore_case=ignore_case, pdf_engine=engine)
        report = run_batch(supplier, baseline=baseline)
    except (DatasetError, InvalidArgument) as e:
        typer.echo(f"ERROR: {e}")
        raise typer.Exit(code=1)

    if not report.records:
        typer.echo(f"ERROR: no datasets found in {datasets}")
        raise typer.Exit(code=1)

    written = [
        write_json_report(report, os.path.join(out_dir, REPORT_JSON_NAME)),
        write_csv_report(report, os.path.join(out_dir, REPORT_CSV_NAME)),
    ]
    if chart:
        written.append(write_chart(report, os.path.join(out_dir, CHART_NAME)))

    summary = report.summary()
    typer.echo(f"Datasets processed: {summary['total_datasets']}")
    typer.echo(f"Total time: {summary['total_time_s']:.2f} s")
    typer.echo(f"{'Dataset':<25} | {'Text':>10} | {'Matches':>8} | {'Comparisons':>12} | {'Ratio':>6}")
    typer.echo("-" * 72)
    for record in report.records:
        ratio = record.comparison_ratio
        typer.echo(
            f"{record.name:<25} | {record.text_length:>10,} | {record.result.count:>8,} | "
            f"{record.result.counters.char_comparisons:>12,} | "
            f"{(f'{ratio:.3f}' if ratio is not None else '-'):>6}"
        )
    if "baseline" in summary:
        typer.echo(f"Brute Force comparisons: {summary['baseline']['comparisons']:,}")
    for path in written:
        typer.echo(f"Saved: {path}")


if __name__ == "__main__":
    app()
