"""
Staffline CLI - Lanes command.

Show the lane each task is assigned to, per staff member.
"""

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from staffline.cli.common import STORE_OPTION_HELP, get_service
from staffline.cli.errors import (
    ExitCode,
    print_corrupted_store_error,
    print_invalid_interval_error,
    print_staff_not_found_error,
)
from staffline.core.lanes import InvalidIntervalError, LanedItem, max_lane
from staffline.core.services import UnknownOwnerError
from staffline.core.tasks import RecordFileCorruptedError

console = Console()


def _lanes_to_json(assignments: dict[str, list[LanedItem]]) -> dict[str, object]:
    return {
        owner: {
            "max_lane": max_lane(items),
            "items": [item.model_dump(mode="json") for item in items],
        }
        for owner, items in assignments.items()
    }


def lanes(
    owner: str | None = typer.Option(
        None,
        "--owner",
        "-o",
        help="Only show this staff member",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output as JSON",
    ),
    store: Path | None = typer.Option(
        None,
        "--store",
        help=STORE_OPTION_HELP,
    ),
) -> None:
    """
    Show lane assignments for each staff member's tasks.

    Overlapping tasks of the same person get different lanes; tasks that
    only touch at a boundary may share one.

    Examples:
        staffline lanes
        staffline lanes --owner s1 --json
    """
    service = get_service(store)

    try:
        assignments = service.lanes(owner=owner)
    except UnknownOwnerError as e:
        print_staff_not_found_error(e.owner_id)
        raise typer.Exit(ExitCode.USER_ERROR)
    except InvalidIntervalError as e:
        print_invalid_interval_error(str(e))
        raise typer.Exit(ExitCode.USER_ERROR)
    except RecordFileCorruptedError as e:
        print_corrupted_store_error(str(e))
        raise typer.Exit(ExitCode.USER_ERROR)

    if json_output:
        typer.echo(json.dumps(_lanes_to_json(assignments), indent=2))
        return

    if not assignments:
        console.print("[dim]No tasks found.[/dim]")
        return

    table = Table(title="Lane assignments")
    table.add_column("Owner", style="bold")
    table.add_column("Lane", justify="right")
    table.add_column("Task", style="cyan")
    table.add_column("Start")
    table.add_column("End")

    for owner_key, items in assignments.items():
        for index, item in enumerate(items):
            table.add_row(
                owner_key if index == 0 else "",
                str(item.lane),
                item.id,
                item.start.isoformat(sep=" ", timespec="minutes"),
                item.end.isoformat(sep=" ", timespec="minutes"),
                end_section=index == len(items) - 1,
            )

    console.print(table)
