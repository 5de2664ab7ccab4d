"""Command line front end for the extraction engine.

Reads a plain-text document from disk, runs the engine and prints the
schedule. File handling lives here; the engine only ever sees text.
"""

from datetime import date
from pathlib import Path

import typer
from loguru import logger
from rich.console import Console
from rich.json import JSON
from rich.panel import Panel
from rich.table import Table

from coachplan.core.logger import setup_logger
from coachplan.extraction.classifier import classify
from coachplan.extraction.engine import extract_sessions
from coachplan.extraction.errors import ExtractionError
from coachplan.extraction.schemas import ExtractionResult, PlanMetadata, RawDocument
from coachplan.extraction.stats import get_extraction_stats, to_upcoming_sessions

console = Console()

app = typer.Typer(
    name="coachplan",
    help="Detect structure in coaching documents and extract training sessions",
    add_completion=False,
)


def _setup_logging(debug: bool) -> None:
    setup_logger(level="DEBUG" if debug else "WARNING")


def _read_document(path: Path) -> RawDocument:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"[red]Error:[/red] cannot read {path}: {e}", style="bold red")
        raise typer.Exit(1) from e
    return RawDocument(text=text, id=path.stem)


def _parse_base_date(value: str | None) -> date | None:
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        console.print(f"[red]Error:[/red] --base-date must be YYYY-MM-DD, got {value!r}", style="bold red")
        raise typer.Exit(1) from e


def _run(document: RawDocument, plan: PlanMetadata, base_date: str | None, alternative: bool) -> ExtractionResult:
    try:
        return extract_sessions(document, plan, base_date=_parse_base_date(base_date), allow_alternative=alternative)
    except ExtractionError as e:
        console.print(f"[red]Error:[/red] {e}", style="bold red")
        raise typer.Exit(1) from e


def _print_schedule(result: ExtractionResult) -> None:
    academy = result.academy_info
    console.print(
        Panel(
            f"[bold]{academy.name}[/bold]\n{academy.program}\n"
            f"Sport: {academy.sport} | Age group: {academy.age_group} | Difficulty: {academy.difficulty}",
            title="Academy",
        )
    )

    table = Table(title=f"Extracted schedule ({result.organization_pattern.value})")
    table.add_column("Week", justify="right")
    table.add_column("Day")
    table.add_column("Date", no_wrap=True)
    table.add_column("Time")
    table.add_column("Min", justify="right")
    table.add_column("Type")
    table.add_column("Focus")
    table.add_column("Conf.", justify="right")
    for week in result.sessions:
        for daily in week.daily_sessions:
            day_label = daily.day + (" (shared)" if daily.is_shared_session else "")
            for entry in daily.sessions_for_day:
                table.add_row(
                    str(week.week_number),
                    day_label,
                    entry.date.isoformat(),
                    entry.time,
                    str(entry.duration),
                    entry.type,
                    ", ".join(entry.focus),
                    f"{entry.extraction_confidence:.2f}",
                )
    console.print(table)

    report = result.validation
    scores = report.scores
    colour = "green" if report.overall_confidence >= 0.6 else "yellow" if report.overall_confidence >= 0.4 else "red"
    console.print(
        f"\n[{colour}]Overall confidence: {report.overall_confidence:.2f}[/{colour}] "
        f"(structure {scores.structure_score}, content {scores.content_score}, "
        f"consistency {scores.consistency_score}, completeness {scores.completeness_score})"
    )
    for warning in report.warnings:
        console.print(f"  [yellow]warning:[/yellow] {warning}")
    for error in report.errors:
        console.print(f"  [red]error:[/red] {error}")


@app.command()
def extract(
    file: Path = typer.Argument(..., help="Plain-text document to extract"),
    title: str | None = typer.Option(None, "--title", help="Plan title"),
    sport: str | None = typer.Option(None, "--sport", help="Plan sport/category"),
    difficulty: str | None = typer.Option(None, "--difficulty", help="Plan difficulty"),
    academy: str | None = typer.Option(None, "--academy", help="Academy name"),
    base_date: str | None = typer.Option(None, "--base-date", help="First day of the schedule (YYYY-MM-DD)"),
    as_json: bool = typer.Option(False, "--json", help="Print the full result as JSON"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write the JSON result to a file"),
    alternative: bool = typer.Option(False, "--alternative", help="Allow the alternative week extraction pass"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
) -> None:
    """Extract weeks, days and sessions from a document."""
    _setup_logging(debug)
    document = _read_document(file)
    plan = PlanMetadata(id=file.stem, title=title, category=sport, difficulty=difficulty, academy_name=academy)
    result = _run(document, plan, base_date, alternative)

    if output is not None:
        output.write_text(result.model_dump_json(indent=2), encoding="utf-8")
        logger.info(f"Wrote extraction result to {output}")
        console.print(f"[green]Wrote result to {output}[/green]")
    if as_json:
        console.print(JSON(result.model_dump_json()))
        return

    _print_schedule(result)
    stats = get_extraction_stats(result)
    console.print(
        f"\n{stats.total_weeks} week(s), {stats.total_daily_sessions} training day(s), "
        f"{stats.total_session_entries} session(s); equipment: {', '.join(stats.equipment) or 'none found'}"
    )


@app.command()
def detect(
    file: Path = typer.Argument(..., help="Plain-text document to analyze"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
) -> None:
    """Show the detected language and document structure."""
    _setup_logging(debug)
    document = _read_document(file)
    analysis = classify(document.text)

    console.print(f"Language: [bold]{analysis.language.language.value}[/bold] ({analysis.language.confidence.value})")
    console.print(f"Pattern: [bold]{analysis.organization_pattern.value}[/bold]")
    console.print(f"Organization level: {analysis.organization_level.value}")
    console.print(f"Weeks: {analysis.week_structure.detected_weeks or 'none'}")
    console.print(f"Days: {', '.join(analysis.day_structure.detected_days) or 'none'}")
    console.print(f"Session markers: {analysis.session_structure.total_sessions}")
    console.print(f"Structure confidence: {analysis.confidence:.2f}")


@app.command()
def upcoming(
    file: Path = typer.Argument(..., help="Plain-text document to extract"),
    base_date: str | None = typer.Option(None, "--base-date", help="First day of the schedule (YYYY-MM-DD)"),
    limit: int = typer.Option(20, "--limit", "-n", help="Maximum rows to show"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
) -> None:
    """List extracted sessions in date order."""
    _setup_logging(debug)
    document = _read_document(file)
    result = _run(document, PlanMetadata(id=file.stem), base_date, alternative=False)

    table = Table(title="Upcoming sessions")
    table.add_column("Date", no_wrap=True)
    table.add_column("Time", no_wrap=True)
    table.add_column("Title")
    table.add_column("Min", justify="right")
    table.add_column("Location")
    for row in to_upcoming_sessions(result)[:limit]:
        table.add_row(row.date.isoformat(), row.time, row.title, str(row.duration), row.location)
    console.print(table)


if __name__ == "__main__":
    app()
