"""
Staffline CLI - Task commands.

Minimal task maintenance so the timeline has something to show.
"""

import json
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from staffline.cli.common import STORE_OPTION_HELP, get_service, parse_instant, readable_store
from staffline.cli.errors import (
    ExitCode,
    print_error,
    print_record_not_found_error,
    print_staff_not_found_error,
    print_task_not_found_error,
)
from staffline.core.tasks import RecordNotFoundError

console = Console()
app = typer.Typer(help="Manage scheduled tasks")


@app.command()
def add(
    title: str = typer.Argument(..., help="Task title"),
    assignee: str = typer.Option(..., "--assignee", "-a", help="Staff id"),
    start: str = typer.Option(..., "--start", "-s", help="Start (YYYY-MM-DD[THH:MM])"),
    end: str = typer.Option(..., "--end", "-e", help="End, inclusive (YYYY-MM-DD[THH:MM])"),
    category: str = typer.Option("", "--category", "-c", help="Category id"),
    project: str = typer.Option("", "--project", "-p", help="Project id"),
    hours: float = typer.Option(0.0, "--hours", help="Estimated effort in hours"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    store: Path | None = typer.Option(None, "--store", help=STORE_OPTION_HELP),
) -> None:
    """
    Schedule a task for a staff member.

    Times with a UTC offset are stored as UTC.

    Examples:
        staffline task add "Key visual" -a s1 -s 2024-05-01 -e 2024-05-03 --hours 6.5
        staffline task add "Banner" -a s1 -p p1 -s 2024-05-02T10:00+09:00 -e 2024-05-02T18:00+09:00
    """
    start_at = parse_instant(start)
    end_at = parse_instant(end)
    if end_at < start_at:
        print_error(
            "Task ends before it starts",
            reason=f"--end {end} is earlier than --start {start}",
        )
        raise typer.Exit(ExitCode.USER_ERROR)

    records = get_service(store).store
    with readable_store():
        if records.get_staff(assignee) is None:
            print_staff_not_found_error(assignee)
            raise typer.Exit(ExitCode.USER_ERROR)
        if project and records.get_project(project) is None:
            print_record_not_found_error("Project", project, "staffline project list")
            raise typer.Exit(ExitCode.USER_ERROR)

        try:
            task = records.create_task(
                title=title,
                assignee_id=assignee,
                start_date=start_at,
                end_date=end_at,
                project_id=project,
                category_id=category,
                duration=hours,
            )
        except ValidationError as e:
            print_error("Invalid task", reason=str(e))
            raise typer.Exit(ExitCode.USER_ERROR)

    if json_output:
        typer.echo(json.dumps(task.model_dump(mode="json"), indent=2))
    else:
        console.print(f"[green]Created:[/green] {task.id}")


@app.command("list")
def list_tasks(
    assignee: str | None = typer.Option(None, "--assignee", "-a", help="Only this staff id"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    store: Path | None = typer.Option(None, "--store", help=STORE_OPTION_HELP),
) -> None:
    """List scheduled tasks, ordered by start."""
    with readable_store():
        tasks = get_service(store).store.list_tasks(assignee_id=assignee)

    tasks.sort(key=lambda t: t.start_date)

    if json_output:
        typer.echo(json.dumps([t.model_dump(mode="json") for t in tasks], indent=2))
        return

    if not tasks:
        console.print("[dim]No tasks found.[/dim]")
        return

    table = Table(title="Tasks")
    table.add_column("ID", style="cyan")
    table.add_column("Title")
    table.add_column("Assignee")
    table.add_column("Project")
    table.add_column("Start")
    table.add_column("End")
    table.add_column("Hours", justify="right")
    table.add_column("Done")

    for task in tasks:
        table.add_row(
            task.id,
            task.title,
            task.assignee_id,
            task.project_id,
            task.start_date.date().isoformat(),
            task.end_date.date().isoformat(),
            f"{task.duration:.2f}",
            "[green]✓[/green]" if task.completed else "",
        )

    console.print(table)


@app.command()
def done(
    task_id: str = typer.Argument(..., help="Task ID to mark completed"),
    store: Path | None = typer.Option(None, "--store", help=STORE_OPTION_HELP),
) -> None:
    """Mark a task as completed."""
    records = get_service(store).store
    with readable_store():
        task = records.get_task(task_id)
        if task is None:
            print_task_not_found_error(task_id)
            raise typer.Exit(ExitCode.USER_ERROR)
        records.update_task(task.model_copy(update={"completed": True}))

    console.print(f"[green]Completed:[/green] {task_id}")


@app.command()
def remove(
    task_id: str = typer.Argument(..., help="Task ID to remove"),
    store: Path | None = typer.Option(None, "--store", help=STORE_OPTION_HELP),
) -> None:
    """Remove a task."""
    try:
        with readable_store():
            get_service(store).store.delete_task(task_id)
    except RecordNotFoundError:
        print_task_not_found_error(task_id)
        raise typer.Exit(ExitCode.USER_ERROR)

    console.print(f"[green]Removed:[/green] {task_id}")
