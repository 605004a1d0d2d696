"""Command-line interface for CyberDetox Tracker."""

import json
import logging
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .models.health import HealthMetric, HealthRecord
from .models.log import TestOutcome
from .services.clearance import InvalidUsageFrequencyError
from .services.countdown import time_remaining
from .services.storage import StoreError
from .services.tips import COMMON_SYMPTOMS, DETOX_TIPS, RESOURCES, simulate_test, tip_of_the_day
from .services.tracker import open_tracker
from .utils.config import get_settings

app = typer.Typer(
    name="detox",
    help="CyberDetox Tracker - log symptoms, tests and clearance progress",
    no_args_is_help=True,
)
console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    level = logging.DEBUG if verbose else get_settings().log_level
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def parse_date(date_str: Optional[str]) -> date:
    """Parse a date string or return today.
    
    Supports:
    - None or empty: today
    - "today": today
    - "yesterday": yesterday
    - "-N": N days ago (e.g., "-1" = yesterday, "-7" = a week ago)
    - "YYYY-MM-DD": specific date
    """
    if not date_str or date_str.lower() == "today":
        return date.today()
    
    if date_str.lower() == "yesterday":
        return date.today() - timedelta(days=1)
    
    if date_str.startswith("-") and date_str[1:].isdigit():
        return date.today() - timedelta(days=int(date_str[1:]))
    
    try:
        return datetime.strptime(date_str, "%Y-%m-%d").date()
    except ValueError:
        console.print(f"[red]Invalid date format: {date_str}[/red]")
        console.print("[dim]Use: YYYY-MM-DD, 'yesterday', or -N (days ago)[/dim]")
        raise typer.Exit(1)


def _warn_if_offline(tracker) -> None:
    if tracker.offline:
        console.print("[yellow]Remote store unavailable - using local storage[/yellow]")


@app.command()
def log(
    symptoms: Optional[list[str]] = typer.Option(
        None, "--symptom", "-s",
        help="Symptom experienced (repeatable). Custom text is allowed.",
    ),
    intensity: int = typer.Option(5, "--intensity", "-i", min=1, max=10, help="Intensity 1-10"),
    notes: Optional[str] = typer.Option(None, "--notes", "-n", help="Free-form notes"),
    date_str: Optional[str] = typer.Option(
        None, "--date", "-d",
        help="Date for entry (YYYY-MM-DD). Defaults to today.",
    ),
):
    """Log symptoms for a day."""
    entry_date = parse_date(date_str)
    
    try:
        with open_tracker() as tracker:
            entry = tracker.add_log(symptoms or [], intensity, notes, entry_date)
            _warn_if_offline(tracker)
    except StoreError as e:
        console.print(f"[red]Failed to save entry: {e}[/red]")
        raise typer.Exit(1)
    
    console.print(f"[green]✓ Saved entry {entry.id}[/green] ({entry.entry_date}, intensity {entry.intensity}/10)")


@app.command()
def history(
    limit: int = typer.Option(5, "--limit", "-n", help="Number of entries to show (0 for all)"),
):
    """Show recent symptom logs."""
    with open_tracker() as tracker:
        logs = tracker.list_logs()
        _warn_if_offline(tracker)
    
    if not logs:
        console.print("[yellow]No entries yet. Start logging your journey.[/yellow]")
        raise typer.Exit(0)
    
    shown = logs[:limit] if limit else logs
    
    table = Table(title="History")
    table.add_column("ID", style="dim")
    table.add_column("Date", style="cyan")
    table.add_column("Time")
    table.add_column("Symptoms")
    table.add_column("Intensity", justify="center")
    table.add_column("Notes")
    
    for entry in shown:
        color = "green" if entry.intensity <= 3 else "yellow" if entry.intensity <= 6 else "red"
        table.add_row(
            entry.id or "-",
            entry.entry_date.isoformat(),
            entry.time_of_day,
            entry.display_symptoms,
            f"[{color}]{entry.intensity}/10[/{color}]",
            entry.notes or "",
        )
    
    console.print(table)
    if len(logs) > len(shown):
        console.print(f"[dim]{len(logs) - len(shown)} more entries (use --limit 0 to see all)[/dim]")


@app.command()
def delete(
    log_id: str = typer.Argument(..., help="ID of the log to delete"),
):
    """Delete a symptom log."""
    with open_tracker() as tracker:
        removed = tracker.delete_log(log_id)
    
    if not removed:
        console.print(f"[yellow]No entry found with id {log_id}[/yellow]")
        raise typer.Exit(1)
    console.print(f"[green]✓ Deleted {log_id}[/green]")


@app.command()
def test(
    result: TestOutcome = typer.Argument(..., help="positive or negative"),
    notes: Optional[str] = typer.Option(None, "--notes", "-n"),
    date_str: Optional[str] = typer.Option(None, "--date", "-d", help="Test date"),
):
    """Record a drug test result."""
    with open_tracker() as tracker:
        saved = tracker.add_test_result(result, notes, parse_date(date_str))
        _warn_if_offline(tracker)
    
    color = "green" if saved.passed else "red"
    console.print(f"[{color}]✓ Recorded {saved.result.label.lower()} test for {saved.result_date}[/{color}]")


@app.command()
def results():
    """List recorded test results."""
    with open_tracker() as tracker:
        tests = tracker.list_test_results()
    
    if not tests:
        console.print("[yellow]No test results recorded yet.[/yellow]")
        raise typer.Exit(0)
    
    table = Table(title="Test Results")
    table.add_column("Date", style="cyan")
    table.add_column("Result", justify="center")
    table.add_column("Notes")
    
    for t in tests:
        color = "green" if t.passed else "red"
        table.add_row(t.result_date.isoformat(), f"[{color}]{t.result.label}[/{color}]", t.notes or "")
    
    console.print(table)


def _adjust(metric: HealthMetric, change: int) -> None:
    settings = get_settings()
    with open_tracker() as tracker:
        record = tracker.update_health_metric(metric, change)
    
    if metric is HealthMetric.WATER:
        value, goal, unit = record.water_intake, settings.water_goal_glasses, "glasses"
    else:
        value, goal, unit = record.exercise_minutes, settings.exercise_goal_minutes, "minutes"
    
    pct = HealthRecord.progress(value, goal)
    console.print(f"{metric.value.title()}: {value} of {goal} {unit} ({pct:.0f}%)")


@app.command()
def water(
    change: int = typer.Option(1, "--add", "-a", help="Glasses to add (negative to remove)"),
):
    """Track today's water intake."""
    _adjust(HealthMetric.WATER, change)


@app.command()
def exercise(
    change: int = typer.Option(5, "--add", "-a", help="Minutes to add (negative to remove)"),
):
    """Track today's exercise minutes."""
    _adjust(HealthMetric.EXERCISE, change)


@app.command()
def usage(
    frequency: Optional[str] = typer.Argument(None, help="light, moderate or heavy"),
):
    """Show or change the usage pattern used for estimates."""
    with open_tracker() as tracker:
        if frequency is None:
            current = tracker.get_preferences().usage_frequency
            console.print(f"Usage pattern: [cyan]{current.description}[/cyan]")
            return
        try:
            preferences = tracker.set_usage_frequency(frequency.lower())
        except InvalidUsageFrequencyError as e:
            console.print(f"[red]{e}[/red]")
            raise typer.Exit(1)
    
    console.print(f"[green]✓ Usage pattern set to {preferences.usage_frequency.description}[/green]")


@app.command(name="dark-mode")
def dark_mode():
    """Toggle dark mode for the web interface."""
    with open_tracker() as tracker:
        enabled = tracker.toggle_dark_mode()
    console.print(f"Dark mode {'on' if enabled else 'off'}")


@app.command()
def status():
    """Show the progress dashboard."""
    settings = get_settings()
    with open_tracker() as tracker:
        report = tracker.progress()
        health = tracker.get_health_record()
        _warn_if_offline(tracker)
    
    lines = [
        f"Days clean: [bold]{report.days_clean}[/bold]",
        f"Usage pattern: {report.usage_frequency.description}",
        f"Remaining: [red]{report.remaining_percent}%[/red]",
        f"Pass probability: [green]{report.pass_probability}%[/green]",
        f"Water: {health.water_intake}/{settings.water_goal_glasses} glasses | "
        f"Exercise: {health.exercise_minutes}/{settings.exercise_goal_minutes} min",
    ]
    countdown = time_remaining(settings.target_date)
    if countdown is not None:
        lines.append(f"T-minus: {countdown}")
    
    console.print(Panel("\n".join(lines), title="📊 Progress Dashboard"))
    console.print(f"[bold]Tip:[/bold] {tip_of_the_day()}\n")
    
    if not report.points:
        console.print("[dim]No data yet. Start logging symptoms to see your progress.[/dim]")
        return
    
    table = Table(title="Progress")
    table.add_column("Date", style="cyan")
    table.add_column("Avg intensity", justify="right")
    table.add_column("Remaining %", justify="right")
    for point in report.points:
        table.add_row(point.date.isoformat(), f"{point.avg_intensity:.1f}", str(point.clearance_percent))
    console.print(table)


@app.command()
def export(
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output file"),
):
    """Export all data to a JSON file."""
    with open_tracker() as tracker:
        data = tracker.export_data()
        path = output or Path(tracker.export_filename())
    
    path.write_text(json.dumps(data, indent=2))
    console.print(f"[green]✓ Exported {len(data['logs'])} logs and {len(data['testResults'])} test results to {path}[/green]")


@app.command()
def simulate():
    """Simulate a test against the current pass probability."""
    with open_tracker() as tracker:
        report = tracker.progress()
    
    passed = simulate_test(report.pass_probability)
    verdict = "[green]PASS[/green]" if passed else "[red]FAIL[/red]"
    console.print(Panel(
        f"{verdict}\n\nPass Probability: {report.pass_probability}%\nRemaining: {report.remaining_percent}%",
        title="Test Simulation",
    ))


@app.command()
def resources():
    """Show resources, tips and common symptoms."""
    console.print("[bold]Resources[/bold]")
    for resource in RESOURCES:
        console.print(f"  • {resource['title']}: [link={resource['url']}]{resource['url']}[/link]")
    
    console.print("\n[bold]Success Tips[/bold]")
    for tip in DETOX_TIPS:
        console.print(f"  • {tip}")
    
    console.print("\n[bold]Common Symptoms[/bold]")
    console.print("  " + ", ".join(COMMON_SYMPTOMS))


@app.command()
def config():
    """Show configuration and storage status."""
    settings = get_settings()
    
    table = Table(title="Configuration Status")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    
    remote = (
        f"[green]✓ Firestore ({settings.firestore_project_id})[/green]"
        if settings.has_remote
        else "[yellow]Not configured (local only)[/yellow]"
    )
    table.add_row("Remote store", remote)
    table.add_row("Data directory", str(settings.data_dir.absolute()))
    table.add_row("Target date", settings.target_date.isoformat() if settings.target_date else "-")
    table.add_row("Water goal", f"{settings.water_goal_glasses} glasses")
    table.add_row("Exercise goal", f"{settings.exercise_goal_minutes} minutes")
    
    console.print(table)


@app.command()
def web(
    host: str = typer.Option("127.0.0.1", "--host", "-h", help="Host to bind to"),
    port: int = typer.Option(8000, "--port", "-p", help="Port to bind to"),
):
    """Start the web interface."""
    from .web import run
    
    console.print(f"[green]Starting web interface at http://{host}:{port}[/green]")
    console.print("[dim]Press Ctrl+C to stop[/dim]\n")
    
    run(host=host, port=port)


if __name__ == "__main__":
    app()
