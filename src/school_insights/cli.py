"""Command-line interface for school insights."""

import asyncio
import json
import logging
import random
from pathlib import Path
from typing import List, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from school_insights.clients import DirectoryError, SchoolDirectoryClient
from school_insights.config import Settings
from school_insights.models import AlertSeverity, AttendanceSnapshot, SchoolRecord
from school_insights.service import SchoolAnalysis, SchoolInsightService

app = typer.Typer(
    name="school-insights",
    help="School Insights - attendance estimation and regional school reports",
    add_completion=False,
)

console = Console()

SEVERITY_STYLES = {
    AlertSeverity.CRITICAL: "bold red",
    AlertSeverity.WARNING: "yellow",
    AlertSeverity.INFO: "green",
}


def _configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.app.log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _load_school(path: Path) -> SchoolRecord:
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return SchoolRecord.model_validate(json.load(f))
    except (OSError, ValueError, ValidationError) as e:
        console.print(f"[red]❌ Could not read school record from {path}: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)


def _build_service(settings: Settings, seed: Optional[int]) -> SchoolInsightService:
    rng = random.Random(seed) if seed is not None else None
    return SchoolInsightService.from_settings(settings, rng=rng)


def _snapshot_table(snapshot: AttendanceSnapshot) -> Table:
    table = Table(title=f"Attendance - {snapshot.date}")
    table.add_column("Group")
    table.add_column("Present", justify="right")
    table.add_column("Absent", justify="right")
    table.add_column("Total", justify="right")
    table.add_column("Rate", justify="right")
    table.add_row("Teachers", str(snapshot.teachers_present), str(snapshot.teachers_absent),
                  str(snapshot.teachers_total), f"{snapshot.teacher_attendance_rate}%")
    table.add_row("Students", str(snapshot.students_present), str(snapshot.students_absent),
                  str(snapshot.students_total), f"{snapshot.student_attendance_rate}%")
    table.add_row("Advisors", str(snapshot.advisors_present),
                  str(snapshot.advisors_total - snapshot.advisors_present),
                  str(snapshot.advisors_total), "")
    return table


def _print_section(title: str, lines: List[str]) -> None:
    console.print(f"\n[bold]{title}[/bold]")
    for line in lines:
        console.print(f"  • {escape(line)}")


def _print_analysis(analysis: SchoolAnalysis) -> None:
    report = analysis.report
    source = analysis.source.value
    if analysis.fallback_reason:
        source += f" ({analysis.fallback_reason})"

    console.print(_snapshot_table(analysis.snapshot))
    console.print(Panel(escape(report.summary), title=analysis.school.name or str(analysis.school.id),
                        subtitle=f"source: {source}"))
    _print_section("Statistics", report.statistics)
    _print_section("Trends", report.trends)
    _print_section("Insights", report.insights)

    console.print("\n[bold]Alerts[/bold]")
    for alert in report.alerts:
        style = SEVERITY_STYLES[alert.severity]
        console.print(f"  [{style}]{alert.severity.value.upper()}[/{style}] {escape(alert.title)}")
        console.print(f"    {escape(alert.description)}")
        console.print(f"    → {escape(alert.action)}")

    _print_section("Sources", report.sources)


@app.command()
def version():
    """Show version information."""
    from school_insights import __version__

    console.print(Panel.fit(
        f"[bold blue]School Insights[/bold blue]\n"
        f"Version: [green]{__version__}[/green]",
        title="Version Info"
    ))


@app.command()
def estimate(
    school_json: Path = typer.Argument(..., help="JSON file holding one school record"),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Seed for reproducible estimates"),
    locale: Optional[str] = typer.Option(None, "--locale", "-l", help="Locale for the date (en, ar)"),
):
    """Estimate today's attendance snapshot for a school."""
    settings = Settings.load()
    _configure_logging(settings)
    if locale:
        settings.app.default_locale = locale

    school = _load_school(school_json)
    service = _build_service(settings, seed)
    console.print(_snapshot_table(service.snapshot_for(school)))


@app.command()
def analyze(
    school_json: Path = typer.Argument(..., help="JSON file holding one school record"),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Seed for reproducible estimates"),
    locale: Optional[str] = typer.Option(None, "--locale", "-l", help="Report language (en, ar)"),
    offline: bool = typer.Option(False, "--offline", help="Skip the regional-insight service"),
    token: Optional[str] = typer.Option(None, "--token", "-t", help="Bearer token for the API"),
):
    """Build the regional report for a school, falling back to local analysis."""
    settings = Settings.load()
    _configure_logging(settings)
    if locale:
        settings.app.default_locale = locale

    school = _load_school(school_json)
    service = _build_service(settings, seed)
    analysis = asyncio.run(service.analyze(school, locale=locale, offline=offline, token=token))
    _print_analysis(analysis)


@app.command()
def schools(
    school_type: Optional[str] = typer.Option(None, "--type", help="Filter by school type"),
    delegation: Optional[str] = typer.Option(None, "--delegation", "-d", help="Filter by delegation"),
    cre: Optional[str] = typer.Option(None, "--cre", "-r", help="Filter by regional commission"),
    search: Optional[str] = typer.Option(None, "--search", "-q", help="Free-text search"),
):
    """List schools from the school directory."""
    settings = Settings.load()
    _configure_logging(settings)
    client = SchoolDirectoryClient.from_config(settings.insight)

    try:
        page = asyncio.run(client.fetch_schools(school_type, delegation, cre, search))
    except DirectoryError as e:
        console.print(f"[red]❌ Failed to load school map data: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    table = Table(title=f"{len(page.schools)} schools displayed")
    for column in ("ID", "Code", "Name", "Type", "Delegation", "CRE"):
        table.add_column(column)
    for school in page.schools:
        table.add_row(str(school.id), school.school_code or "", school.name,
                      school.school_type or "", school.delegation or "", school.region or "")
    console.print(table)


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
