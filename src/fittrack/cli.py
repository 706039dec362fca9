#!/usr/bin/env python3
"""
fittrack CLI.

Daily check-ins, metabolic score and strength training progression.

Usage:
    fittrack score                     # Metabolic score for the last 7 days
    fittrack checkin --weight 92.4 --sleep 7.5 --calories 1800 --steps 9000
    fittrack reopen                    # Re-open today's check-in for editing
    fittrack today                     # Metrics logged today
    fittrack progress                  # Body weight progress
    fittrack plan                      # This week's training plan
    fittrack log-set bench 5 80        # Log 5 reps at 80 kg
    fittrack complete                  # Complete today's planned workout
    fittrack summary                   # Weekly completion summary
    fittrack strength                  # 1RM progress towards targets
"""

import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .config import get_settings
from .db.database import StateStore
from .exceptions import FitTrackError, ValidationError
from .progression import WEEKDAYS, weekday_name
from .tracker import Tracker

console = Console()


def get_score_style(score: float) -> tuple:
    """Get rich color and label for a metabolic score."""
    if score >= 85:
        return "green", "Excellent"
    if score >= 70:
        return "yellow", "Good"
    if score >= 55:
        return "dark_orange", "Fair"
    return "red", "Needs Work"


def parse_date_arg(value: Optional[str]) -> Optional[date]:
    """Parse a --date option (YYYY-MM-DD)."""
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise ValidationError(f"Invalid date '{value}', expected YYYY-MM-DD", field="date") from e


def cmd_score(args, tracker: Tracker):
    """Show the metabolic efficiency score."""
    result = tracker.score()
    color, label = get_score_style(result.score)

    console.print()
    console.print(Panel(
        Text(f"{result.score} / 100  {label}", style=f"bold {color}"),
        title="Metabolic Efficiency",
        box=box.ROUNDED,
    ))

    table = Table(title="Factors", box=box.ROUNDED)
    table.add_column("Factor", style="cyan")
    table.add_column("Score", justify="right")
    table.add_column("Impact")

    for name, factor in result.factors.items():
        factor_color, _ = get_score_style(factor.score)
        table.add_row(name.title(), Text(f"{factor.score:.0f}", style=factor_color), factor.impact.value)
    console.print(table)

    avg = result.avg_data
    console.print(
        f"7-day averages: sleep {avg.sleep_hours:.1f}h, {avg.calories:.0f} kcal, "
        f"{avg.protein:.0f}g protein, {avg.steps:.0f} steps"
    )

    if result.recommendations:
        console.print()
        console.print("[bold]Recommendations[/bold]")
        for rec in result.recommendations:
            console.print(f"  - {rec}")
    console.print()


def cmd_checkin(args, tracker: Tracker):
    """Submit a daily check-in."""
    on_date = parse_date_arg(args.date)
    values = {
        "weight": args.weight,
        "sleep_hours": args.sleep,
        "calories": args.calories,
        "steps": args.steps,
        "protein": args.protein,
        "flow_score": args.flow,
    }

    entry = tracker.submit_checkin(values, on_date)
    day = on_date or tracker.today()

    if entry is None:
        existing = tracker.entry(day)
        if existing is not None and existing.is_submitted:
            console.print(f"[yellow]Check-in for {day} is already submitted.[/yellow]")
            console.print("Run 'fittrack reopen' to edit it.")
        else:
            console.print(f"[red]Check-in for {day} is incomplete.[/red]")
            console.print("Required: --weight, --sleep, --calories, --steps (at least 3 of 4)")
        return 1

    console.print(f"[green]Check-in for {day} submitted.[/green]")

    compliance = tracker.compliance(day)
    table = Table(title="Today's Compliance", box=box.ROUNDED)
    table.add_column("Sleep", justify="right")
    table.add_column("Nutrition", justify="right")
    table.add_column("Movement", justify="right")
    table.add_row(
        f"{compliance.sleep:.0f}%",
        f"{compliance.nutrition:.0f}%",
        f"{compliance.movement:.0f}%",
    )
    console.print(table)
    return 0


def _metric(value, unit: str = "") -> str:
    if value is None:
        return "[dim]Not logged[/dim]"
    return f"{value:g}{unit}"


def cmd_today(args, tracker: Tracker):
    """Show the metrics logged for a day."""
    day = parse_date_arg(args.date) or tracker.today()
    entry = tracker.entry(day)

    table = Table(title=f"Metrics for {day}", box=box.ROUNDED)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")

    if entry is None:
        table.add_row("Check-in", "[dim]Not logged[/dim]")
    else:
        table.add_row("Weight", _metric(entry.weight, " kg"))
        table.add_row("Sleep", _metric(entry.sleep_hours, "h"))
        table.add_row("Calories", _metric(entry.calories))
        table.add_row("Steps", _metric(entry.steps))
        table.add_row("Protein", _metric(entry.protein, "g"))
        table.add_row("Flow", _metric(entry.flow_score, "/10"))
        table.add_row("Status", "[green]Submitted[/green]" if entry.is_submitted else "[yellow]Draft[/yellow]")
    console.print(table)
    return 0


def cmd_progress(args, tracker: Tracker):
    """Show body weight progress."""
    progress = tracker.weight_progress()

    console.print()
    console.print(f"[bold]Data points logged:[/bold] {progress.data_points}")
    if progress.latest_weight is None:
        console.print("Start logging weight data to see your progress.")
        return 0

    console.print(f"[bold]Latest weight:[/bold] {progress.latest_weight:g} kg")

    table = Table(title="Weight Progress", box=box.ROUNDED)
    table.add_column("Date", style="cyan")
    table.add_column("Weight", justify="right")
    table.add_column("Change", justify="right")

    previous = None
    for point in progress.history[-args.limit:]:
        if previous is None:
            change = ""
        else:
            delta = point.weight - previous
            change = Text(f"{delta:+.1f}", style="green" if delta <= 0 else "red")
        table.add_row(point.date, f"{point.weight:g} kg", change)
        previous = point.weight
    console.print(table)
    return 0


def cmd_reopen(args, tracker: Tracker):
    """Re-open a submitted check-in."""
    on_date = parse_date_arg(args.date)
    day = on_date or tracker.today()
    if tracker.reopen_checkin(on_date):
        console.print(f"[green]Check-in for {day} re-opened for editing.[/green]")
        return 0
    console.print(f"[yellow]No submitted check-in for {day}.[/yellow]")
    return 1


def cmd_plan(args, tracker: Tracker):
    """Show this week's training plan."""
    plan = tracker.plan()
    today = weekday_name(tracker.today())

    console.print()
    for day in WEEKDAYS:
        workout = plan.get(day)
        if workout is None:
            continue

        marker = " (today)" if day == today else ""
        table = Table(
            title=f"{day.title()}{marker}: {workout.name} ({workout.type.value}, {workout.estimated_time} min)",
            box=box.ROUNDED,
        )
        table.add_column("Exercise", style="cyan")
        table.add_column("Sets x Reps", justify="right")
        table.add_column("Working Weight", justify="right")

        weights = tracker.working_weights(day)
        for prescription, weight in zip(workout.exercises, weights):
            if prescription.duration is not None:
                table.add_row(prescription.description or prescription.name, f"{prescription.duration} min", "")
                continue

            name = prescription.description if prescription.is_accessory else prescription.name
            if prescription.variant:
                name = f"{name} ({prescription.variant})"
            volume = f"{prescription.sets} x {prescription.reps}"

            if prescription.is_accessory:
                load = "-"
            elif weight is None:
                load = "[red]data not found[/red]"
            else:
                load = f"{weight} kg"
            table.add_row(name, volume, load)

        if workout.exercises:
            console.print(table)
        else:
            console.print(f"[bold]{day.title()}{marker}[/bold]: {workout.name}")
        console.print()
    return 0


def cmd_log_set(args, tracker: Tracker):
    """Log a set for an exercise."""
    exercise = tracker.log_set(args.exercise, args.reps, args.weight, parse_date_arg(args.date))
    if exercise is None:
        console.print("[red]Set not logged: exercise, reps and weight must all be positive.[/red]")
        return 1

    console.print(
        f"[green]Logged {args.exercise}: {args.reps} x {args.weight:g} kg[/green] "
        f"(1RM {exercise.current_1rm:g} kg)"
    )
    return 0


def cmd_complete(args, tracker: Tracker):
    """Complete the planned workout for a date."""
    on_date = parse_date_arg(args.date)
    day = on_date or tracker.today()
    completed = tracker.complete_workout(on_date)
    if completed is None:
        console.print(f"[yellow]No workout recorded for {day} (already completed or not planned).[/yellow]")
        return 1

    console.print(f"[green]Completed {completed.name} on {day}: {completed.total_sets} sets.[/green]")
    return 0


def cmd_summary(args, tracker: Tracker):
    """Show this week's completion summary."""
    summary = tracker.weekly_summary()
    console.print()
    console.print(Panel(
        f"[bold]{summary.completed_days}/{summary.total_days}[/bold] workouts, "
        f"[bold]{summary.total_sets}[/bold] sets",
        title="This Week's Training",
        box=box.ROUNDED,
    ))
    return 0


def cmd_strength(args, tracker: Tracker):
    """Show 1RM progress towards targets."""
    table = Table(title="Current Strength Levels", box=box.ROUNDED)
    table.add_column("Exercise", style="cyan")
    table.add_column("1RM", justify="right")
    table.add_column("Target", justify="right")
    table.add_column("Progress", justify="right")

    for level in tracker.strength_levels():
        style = "green" if level.reached else "white"
        table.add_row(
            level.name.title(),
            f"{level.current_1rm:g} kg",
            f"{level.target:g} kg",
            Text(f"{level.progress_pct:.0f}%", style=style),
        )
    console.print(table)
    return 0


def cmd_stats(args, tracker: Tracker):
    """Show database statistics."""
    stats = tracker.store.get_stats()
    console.print(f"Database: {stats['db_path']}")
    console.print(f"Stored documents: {stats['keys']}")
    if stats["last_saved"]:
        console.print(f"Last saved: {stats['last_saved']}")
    return 0


COMMANDS = {
    "score": cmd_score,
    "checkin": cmd_checkin,
    "reopen": cmd_reopen,
    "today": cmd_today,
    "progress": cmd_progress,
    "plan": cmd_plan,
    "log-set": cmd_log_set,
    "complete": cmd_complete,
    "summary": cmd_summary,
    "strength": cmd_strength,
    "stats": cmd_stats,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fittrack",
        description="fittrack - metabolic score and strength progression tracker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  fittrack checkin --weight 92.4 --sleep 7.5 --calories 1800 --steps 9000
  fittrack score
  fittrack plan
  fittrack log-set squat 5 100 --date 2025-01-09
  fittrack complete
        """,
    )
    parser.add_argument("--db", type=Path, help="Database path (overrides FITTRACK_DB_PATH)")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("score", help="Show metabolic efficiency score")

    checkin_p = subparsers.add_parser("checkin", help="Submit a daily check-in")
    checkin_p.add_argument("--date", "-d", help="Check-in date (YYYY-MM-DD), default today")
    checkin_p.add_argument("--weight", "-w", type=str, help="Body weight (kg)")
    checkin_p.add_argument("--sleep", "-s", type=str, help="Sleep (hours)")
    checkin_p.add_argument("--calories", "-c", type=str, help="Calories eaten")
    checkin_p.add_argument("--steps", type=str, help="Step count")
    checkin_p.add_argument("--protein", "-p", type=str, help="Protein (g)")
    checkin_p.add_argument("--flow", type=str, help="Flow score (1-10)")

    reopen_p = subparsers.add_parser("reopen", help="Re-open a submitted check-in")
    reopen_p.add_argument("--date", "-d", help="Check-in date (YYYY-MM-DD), default today")

    today_p = subparsers.add_parser("today", help="Show the metrics logged for a day")
    today_p.add_argument("--date", "-d", help="Check-in date (YYYY-MM-DD), default today")

    progress_p = subparsers.add_parser("progress", help="Show body weight progress")
    progress_p.add_argument("--limit", "-n", type=int, default=14, help="Most recent entries to list (default: 14)")

    subparsers.add_parser("plan", help="Show this week's training plan")

    log_p = subparsers.add_parser("log-set", help="Log a working set")
    log_p.add_argument("exercise", help="Exercise name (e.g. bench, squat)")
    log_p.add_argument("reps", type=int, help="Repetitions")
    log_p.add_argument("weight", type=float, help="Weight (kg)")
    log_p.add_argument("--date", "-d", help="Training date (YYYY-MM-DD), default today")

    complete_p = subparsers.add_parser("complete", help="Complete the planned workout")
    complete_p.add_argument("--date", "-d", help="Workout date (YYYY-MM-DD), default today")

    subparsers.add_parser("summary", help="Show weekly training summary")
    subparsers.add_parser("strength", help="Show 1RM progress towards targets")
    subparsers.add_parser("stats", help="Show database statistics")

    return parser


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    settings = get_settings()
    setup_logging(settings.log_level)

    try:
        store = StateStore(str(args.db or settings.db_path))
        tracker = Tracker(store)
        return COMMANDS[args.command](args, tracker) or 0
    except FitTrackError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
