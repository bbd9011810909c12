#!/usr/bin/env python3
"""
practice-tracker CLI.

Consistency calendar, 7-day streak and Level Up challenges from the terminal.

Usage:
    practice-tracker calendar                 # This month's consistency calendar
    practice-tracker calendar --month 2026-08 # A past month
    practice-tracker streak                   # Mark today and show the last 7 days
    practice-tracker challenges               # List available challenges
    practice-tracker challenge start 21-day   # Start (or resume) a challenge
    practice-tracker challenge mark           # Mark today as complete
    practice-tracker challenge status         # Progress of the active challenge
    practice-tracker history                  # Completed challenges
"""

import argparse
import sys
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .api.client import ConsistencyClient
from .config import Settings, get_settings
from .exceptions import PracticeTrackerError, ValidationError
from .models.challenge import CHALLENGES, ChallengeData, Completed, InProgress, MarkOutcome
from .services.calendar import EMPTY_STATE_MESSAGE as CALENDAR_EMPTY_MESSAGE
from .services.calendar import CalendarCell, ConsistencyCalendar
from .services.challenges import TROPHY_STREAK, ChallengeTracker, motivational_message
from .services.history import EMPTY_STATE_MESSAGE as HISTORY_EMPTY_MESSAGE
from .services.history import ChallengeHistory
from .services.streak_widget import HomeStreakWidget
from .storage.sqlite import SqliteStore
from .utils.dates import DAY_NAMES, format_date, parse_month_key, today
from .utils.log_sanitizer import configure_logging

console = Console()


def _today(settings: Settings):
    return today(settings.timezone)


def _tracker(settings: Settings) -> ChallengeTracker:
    return ChallengeTracker(
        SqliteStore(settings.store_path),
        today=lambda: _today(settings),
        confirm_switch=settings.confirm_challenge_switch,
    )


def format_cell(cell: Optional[CalendarCell]) -> Text:
    """Render one calendar day with rich styles."""
    if cell is None:
        return Text("")
    label = f"{cell.day_number:>2}"
    if cell.is_future:
        style = "grey50"
    elif cell.active:
        style = "bold black on yellow"
    else:
        style = "white"
    if cell.is_today:
        style += " underline"
    text = Text(label, style=style)
    if cell.in_streak:
        text.append("🔥")
    return text


def format_progress_bar(challenge: ChallengeData, width: int = 30) -> str:
    filled = round(width * challenge.completed_days / challenge.total_days)
    return "█" * filled + "░" * (width - filled)


def cmd_calendar(args, settings: Settings):
    """Show the consistency calendar."""
    with ConsistencyClient.from_settings(settings) as client:
        if not client.is_authenticated:
            console.print("[yellow]Sign in (set PRACTICE_API_TOKEN) to see your calendar.[/yellow]")
            return 1

        cal = ConsistencyCalendar(client, _today(settings))
        cal.load_range()

        if cal.is_empty:
            console.print(Panel(CALENDAR_EMPTY_MESSAGE, title="Your Consistency Calendar"))
            return 0

        if args.month:
            year, month = parse_month_key(args.month)
            if not cal.go_to(year, month):
                console.print(
                    f"[yellow]{args.month} is outside {cal.start_month}..{cal.current_month}[/yellow]"
                )
                return 1

        grid = cal.build_grid()

    table = Table(title=grid.label, box=box.ROUNDED)
    for name in DAY_NAMES:
        table.add_column(name, justify="center")
    for week in grid.weeks:
        table.add_row(*(format_cell(cell) for cell in week))

    console.print()
    console.print(table)
    nav = []
    if cal.can_go_back:
        nav.append("◀ earlier")
    if cal.can_go_forward:
        nav.append("later ▶")
    if nav:
        console.print("   ".join(nav))
    streak = Text(f"Current streak: {cal.current_streak} days", style="bold")
    if cal.show_flame:
        streak.append(" 🔥", style="bold red")
    console.print(streak)
    console.print()
    return 0


def cmd_streak(args, settings: Settings):
    """Mark today and show the 7-day strip."""
    with ConsistencyClient.from_settings(settings) as client:
        widget = HomeStreakWidget(client, _today(settings))
        if not widget.visible:
            console.print("[yellow]Sign in (set PRACTICE_API_TOKEN) to track your streak.[/yellow]")
            return 1
        widget.refresh()

    table = Table(title=f"7 Day Streak  {widget.summary()}", box=box.SIMPLE, show_header=True)
    cells = widget.cells()
    for cell in cells:
        table.add_column(cell.label, justify="center")
    row = []
    for cell in cells:
        mark = Text("🔥" if cell.icon == "flame" else "·")
        if cell.is_today:
            mark.stylize("reverse")
        row.append(mark)
    table.add_row(*row)

    console.print()
    console.print(table)
    if widget.mark_result is not None:
        console.print(f"[dim]Today: {widget.mark_result.describe()}[/dim]")
    console.print("Keep the momentum going!")
    console.print()
    return 0


def cmd_challenges(args, settings: Settings):
    """List the available challenges."""
    table = Table(title="Choose Your Challenge", box=box.ROUNDED)
    table.add_column("Id", style="cyan")
    table.add_column("Challenge", style="bold")
    table.add_column("Days", justify="right")
    table.add_column("Description")
    for c in CHALLENGES:
        table.add_row(c.id, c.title, str(c.total_days), c.description)
    console.print(table)
    return 0


def show_challenge(challenge: ChallengeData):
    body = Text()
    body.append(f"{challenge.completed_days}", style="bold")
    body.append(f" of {challenge.total_days} days\n")
    body.append(format_progress_bar(challenge) + "\n", style="yellow")
    body.append(f"{round(challenge.progress_percent)}% Complete · {challenge.remaining_days} days remaining\n")
    streak_line = f"Current streak: {challenge.streak} 🔥"
    if challenge.streak >= TROPHY_STREAK:
        streak_line += " 🏆"
    body.append(streak_line + "\n", style="bold")
    body.append(motivational_message(challenge), style="italic")
    console.print(Panel(body, title=challenge.type, subtitle=f"started {format_date(challenge.start_date)}"))


def cmd_challenge(args, settings: Settings):
    """Start, mark or show a challenge."""
    tracker = _tracker(settings)

    if args.action == "start":
        if not args.challenge_id:
            console.print("[red]Which challenge? e.g. 'challenge start 7-day'[/red]")
            return 2
        result = tracker.initialize(args.challenge_id, allow_discard=args.force)
        if result.discarded is not None and result.discarded.completed_days > 0:
            console.print(
                f"[yellow]Replaced '{result.discarded.type}' "
                f"({result.discarded.completed_days}/{result.discarded.total_days} days).[/yellow]"
            )
        show_challenge(result.challenge)
        return 0

    state = tracker.resume()

    if args.action == "status":
        if isinstance(state, InProgress):
            show_challenge(state.challenge)
        else:
            console.print("No active challenge. Run 'practice-tracker challenges' to pick one.")
        return 0

    result = tracker.mark_complete()
    if result.outcome == MarkOutcome.COMPLETED and isinstance(result.state, Completed):
        console.print(Panel(
            Text(result.message, justify="center"),
            title="🏆 " + result.title,
            border_style="green",
        ))
    elif result.outcome == MarkOutcome.PROGRESSED:
        console.print(f"[green]{result.title}[/green] {result.message}")
    else:
        console.print(f"[yellow]{result.title}[/yellow] {result.message}")
        return 1
    return 0


def cmd_history(args, settings: Settings):
    """Show completed challenges."""
    history = ChallengeHistory(SqliteStore(settings.store_path))
    summary = history.summary()

    console.print(Panel(f"[bold]{summary.label}[/bold]\n{summary.days_label}", box=box.ROUNDED))
    if history.is_empty:
        console.print(HISTORY_EMPTY_MESSAGE)
        return 0

    table = Table(box=box.SIMPLE)
    table.add_column("Challenge", style="bold")
    table.add_column("Completed on")
    table.add_column("Days", justify="right")
    table.add_column("Streak", justify="right")
    for entry in history.entries():
        table.add_row(
            entry.type,
            entry.completed_date.strftime("%b %d, %Y"),
            f"{entry.completed_days}/{entry.total_days}",
            f"{entry.streak} 🔥",
        )
    console.print(table)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="practice-tracker",
        description="Consistency calendar, daily streak and Level Up challenges",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  practice-tracker calendar --month 2026-08
  practice-tracker streak
  practice-tracker challenge start 21-day
  practice-tracker challenge mark
  practice-tracker history
        """,
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log debug output")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    calendar_p = subparsers.add_parser("calendar", help="Show the consistency calendar")
    calendar_p.add_argument("--month", "-m", help="Month to show (YYYY-MM)")

    subparsers.add_parser("streak", help="Mark today active and show the last 7 days")

    subparsers.add_parser("challenges", help="List available challenges")

    challenge_p = subparsers.add_parser("challenge", help="Work on a Level Up challenge")
    challenge_p.add_argument("action", choices=["start", "mark", "status"])
    challenge_p.add_argument("challenge_id", nargs="?", help="Challenge id, e.g. 7-day")
    challenge_p.add_argument(
        "--force", action="store_true",
        help="Discard an in-progress challenge of another type",
    )

    subparsers.add_parser("history", help="Show completed challenges")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging("DEBUG" if args.verbose else settings.log_level)

    commands = {
        "calendar": cmd_calendar,
        "streak": cmd_streak,
        "challenges": cmd_challenges,
        "challenge": cmd_challenge,
        "history": cmd_history,
    }
    command = commands.get(args.command)
    if command is None:
        parser.print_help()
        return 0

    try:
        return command(args, settings)
    except ValidationError as e:
        console.print(f"[red]{e.message}[/red]")
        return 2
    except PracticeTrackerError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
