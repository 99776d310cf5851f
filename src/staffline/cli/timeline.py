"""
Staffline CLI - Timeline command.

Render the staff timeline as a terminal Gantt chart, or emit the computed
layout as JSON for other front ends.
"""

from pathlib import Path

import typer
from rich.console import Console

from staffline.cli.common import STORE_OPTION_HELP, get_service, parse_day
from staffline.cli.errors import (
    ExitCode,
    print_corrupted_store_error,
    print_invalid_interval_error,
)
from staffline.core.lanes import InvalidIntervalError
from staffline.core.tasks import RecordFileCorruptedError
from staffline.core.timeline import Timeline
from staffline.dashboard import TimelineRenderer

console = Console()


def timeline(
    week_of: str | None = typer.Option(
        None,
        "--week-of",
        "-w",
        help="Show the week around this day (YYYY-MM-DD, default: today)",
    ),
    offset_weeks: int = typer.Option(
        0,
        "--offset-weeks",
        "-n",
        help="Page forward (positive) or back (negative) by whole weeks",
    ),
    show_all: bool = typer.Option(
        False,
        "--all",
        "-a",
        help="Show every task instead of a single week",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output the computed layout as JSON",
    ),
    store: Path | None = typer.Option(
        None,
        "--store",
        help=STORE_OPTION_HELP,
    ),
) -> None:
    """
    Show the staff timeline.

    Each staff member gets one line per lane; a weekly view starts the day
    before the chosen day.

    Examples:
        staffline timeline
        staffline timeline --week-of 2024-05-08 --offset-weeks -1
        staffline timeline --all --json
    """
    anchor = parse_day(week_of) if week_of else None
    service = get_service(store)

    try:
        result: Timeline
        if show_all:
            result = service.full()
        elif anchor is not None or offset_weeks:
            result = service.week(anchor, offset_weeks=offset_weeks)
        else:
            result = service.default()
    except InvalidIntervalError as e:
        print_invalid_interval_error(str(e))
        raise typer.Exit(ExitCode.USER_ERROR)
    except RecordFileCorruptedError as e:
        print_corrupted_store_error(str(e))
        raise typer.Exit(ExitCode.USER_ERROR)

    if json_output:
        typer.echo(result.model_dump_json(indent=2))
        return

    if not result.rows:
        console.print("[dim]No staff on the roster.[/dim] Add someone with: staffline staff add")
        return

    TimelineRenderer(console).print(result)
