"""Typer CLI for inspecting and editing signout census documents."""

from __future__ import annotations

import json
from typing import Any, Iterable

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from config.settings import get_extraction_settings
from observability.timing import timed
from signout.common.exceptions import SignoutError
from signout.common.logger import setup_logger
from signout.common.text_io import load_document
from signout.reporting.records import compute_census_stats, idr_census, summarize_census
from signout.sample_census import generate_sample_census
from signout.sectioning.editor import sort_sections, toggle_section_task
from signout.sectioning.segmenter import Section, parse_sections
from signout.text_cleaning.emr_cleaner import clean_text_for_emr

app = typer.Typer(help="Segment and summarize hospitalist signout census documents.")
console = Console()
logger = setup_logger("signout_cli")


@app.callback()
def _cli_entry(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log parse timings to stderr."),
) -> None:
    setup_logger("signout_cli", "DEBUG" if verbose else None)


def _load(document: str) -> str:
    try:
        return load_document(document)
    except SignoutError as exc:
        typer.secho(str(exc), err=True, fg=typer.colors.RED)
        raise typer.Exit(code=1)


def _parse(document: str) -> list[Section]:
    text = _load(document)
    with timed("census.parse", tags={"surface": "cli"}) as timing:
        sections = parse_sections(text)
    logger.debug("Parsed %d sections in %.2fms", len(sections), timing.elapsed_ms)
    return sections


def _echo_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, indent=2))


def _dash(value: str | Iterable[str]) -> str:
    if isinstance(value, str):
        return value or "—"
    return ", ".join(value) or "—"


@app.command()
def sections(
    document: str = typer.Argument(..., help="Census file path, '-' for stdin, or raw text."),
    json_output: bool = typer.Option(False, "--json", help="Emit JSON output."),
) -> None:
    """List the sections of DOCUMENT with their keys."""

    parsed = _parse(document)
    if json_output:
        _echo_json([section.to_dict() for section in parsed])
        return

    table = Table(title="Sections", show_lines=False)
    table.add_column("#", justify="right")
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Header")
    table.add_column("Lines", justify="right")
    for idx, section in enumerate(parsed):
        table.add_row(str(idx), section.key, section.header, str(len(section.lines)))
    console.print(table)


@app.command()
def summary(
    document: str = typer.Argument(..., help="Census file path, '-' for stdin, or raw text."),
    json_output: bool = typer.Option(False, "--json", help="Emit JSON output."),
) -> None:
    """Per-patient summary: acuity, dispo, critical labs and open tasks."""

    summaries = summarize_census(_parse(document), get_extraction_settings())
    if json_output:
        _echo_json([item.model_dump(mode="json") for item in summaries])
        return

    table = Table(title="Census Summary", show_lines=False)
    table.add_column("#", justify="right")
    table.add_column("Room", style="cyan", no_wrap=True)
    table.add_column("Name")
    table.add_column("Acuity")
    table.add_column("Dispo")
    table.add_column("Critical Labs")
    table.add_column("Open Tasks", justify="right")
    for item in summaries:
        table.add_row(
            str(item.index),
            _dash(item.room),
            _dash(item.name),
            f"{item.acuity.value} ({item.acuity_reason})",
            _dash(item.dispo),
            _dash(item.critical_lab_values),
            str(item.tasks_remaining),
        )
    console.print(table)


@app.command()
def idr(
    document: str = typer.Argument(..., help="Census file path, '-' for stdin, or raw text."),
    json_output: bool = typer.Option(False, "--json", help="Emit JSON output."),
) -> None:
    """Interdisciplinary rounds view: barriers, therapy and case management."""

    records = idr_census(_parse(document), get_extraction_settings())
    if json_output:
        _echo_json([record.model_dump(mode="json") for record in records])
        return

    table = Table(title="IDR Rounds", show_lines=False)
    table.add_column("Room", style="cyan", no_wrap=True)
    table.add_column("Name")
    table.add_column("Barriers")
    table.add_column("PT")
    table.add_column("OT")
    table.add_column("CM")
    table.add_column("Dispo")
    for record in records:
        table.add_row(
            _dash(record.room),
            _dash(record.name),
            _dash(record.social_barriers),
            _dash(record.pt_status),
            _dash(record.ot_status),
            _dash(record.cm_notes),
            f"{_dash(record.dispo)} [{record.dispo_status.value}]",
        )
    console.print(table)


@app.command()
def stats(
    document: str = typer.Argument(..., help="Census file path, '-' for stdin, or raw text."),
    json_output: bool = typer.Option(False, "--json", help="Emit JSON output."),
) -> None:
    """Census-wide counts."""

    result = compute_census_stats(summarize_census(_parse(document), get_extraction_settings()))
    if json_output:
        _echo_json(result.model_dump(mode="json"))
        return

    table = Table(title="Census Stats", show_lines=False)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    for name, value in result.model_dump().items():
        table.add_row(name.replace("_", " ").title(), str(value))
    console.print(table)


@app.command()
def clean(
    document: str = typer.Argument(..., help="Census file path, '-' for stdin, or raw text."),
) -> None:
    """Print DOCUMENT as plain text for pasting into the EMR."""

    typer.echo(clean_text_for_emr(_load(document)))


@app.command()
def toggle(
    document: str = typer.Argument(..., help="Census file path, '-' for stdin, or raw text."),
    key: str = typer.Argument(..., help="Section key, as listed by `sections`."),
    line_index: int = typer.Argument(..., help="0-based body line index of the task."),
) -> None:
    """Flip one task checkbox and print the updated document."""

    text = _load(document)
    try:
        updated = toggle_section_task(text, key, line_index)
    except SignoutError as exc:
        typer.secho(str(exc), err=True, fg=typer.colors.RED)
        raise typer.Exit(code=1)
    typer.echo(updated)


@app.command()
def sort(
    document: str = typer.Argument(..., help="Census file path, '-' for stdin, or raw text."),
    by: str = typer.Option("name", "--by", help="Sort key: 'name' or 'date'."),
) -> None:
    """Sort patients and renumber their headers."""

    if by not in ("name", "date"):
        typer.secho(f"Unsupported sort key: {by}", err=True, fg=typer.colors.RED)
        raise typer.Exit(code=2)
    typer.echo(sort_sections(_load(document), by=by))  # type: ignore[arg-type]


@app.command()
def sample(
    count: int = typer.Option(10, "--count", "-n", min=0, help="Number of patients."),
    seed: int = typer.Option(0, "--seed", help="Random seed; the same seed gives the same census."),
) -> None:
    """Print a synthetic census for demos."""

    text = generate_sample_census(count, seed=seed)
    if not text:
        console.print(Panel("No patients requested.", style="yellow"))
        return
    typer.echo(text)


def main() -> None:  # pragma: no cover - console script entry
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
