"""
Staffline CLI - Staff, category, and project commands.

Reference records that tasks point at: who does the work, how bars are
colored, and which client project the work is for.
"""

import json
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from staffline.cli.common import STORE_OPTION_HELP, get_service, readable_store
from staffline.cli.errors import (
    ExitCode,
    print_error,
    print_record_not_found_error,
    print_staff_not_found_error,
)
from staffline.core.tasks import (
    BusinessType,
    Category,
    Project,
    ProjectPriority,
    RecordNotFoundError,
    Staff,
    StaffRole,
)

console = Console()
staff_app = typer.Typer(help="Manage the staff roster")
category_app = typer.Typer(help="Manage task categories")
project_app = typer.Typer(help="Manage client projects")


# =============================================================================
# Staff
# =============================================================================


@staff_app.command("add")
def add_staff(
    staff_id: str = typer.Argument(..., help="Staff id"),
    name: str = typer.Argument(..., help="Display name"),
    role: StaffRole = typer.Option(StaffRole.DESIGNER, "--role", "-r", help="Job role"),
    store: Path | None = typer.Option(None, "--store", help=STORE_OPTION_HELP),
) -> None:
    """Add or replace a staff member."""
    with readable_store():
        member = get_service(store).store.save_staff(Staff(id=staff_id, name=name, role=role))
    console.print(f"[green]Saved:[/green] {member.id} ({member.role.label})")


@staff_app.command("list")
def list_staff(
    store: Path | None = typer.Option(None, "--store", help=STORE_OPTION_HELP),
) -> None:
    """List the staff roster."""
    with readable_store():
        members = get_service(store).store.list_staff()

    if not members:
        console.print("[dim]No staff on the roster.[/dim]")
        return

    table = Table(title="Staff")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Role")
    for member in members:
        table.add_row(member.id, member.name, member.role.label)
    console.print(table)


@staff_app.command("remove")
def remove_staff(
    staff_id: str = typer.Argument(..., help="Staff id to remove"),
    store: Path | None = typer.Option(None, "--store", help=STORE_OPTION_HELP),
) -> None:
    """Remove a staff member and every task assigned to them."""
    try:
        with readable_store():
            removed = get_service(store).store.delete_staff(staff_id)
    except RecordNotFoundError:
        print_staff_not_found_error(staff_id)
        raise typer.Exit(ExitCode.USER_ERROR)

    console.print(f"[green]Removed:[/green] {staff_id} [dim]({removed} task(s) removed)[/dim]")


# =============================================================================
# Categories
# =============================================================================


@category_app.command("add")
def add_category(
    category_id: str = typer.Argument(..., help="Category id"),
    name: str = typer.Argument(..., help="Category name"),
    color: str = typer.Option("#3B82F6", "--color", help="Bar color as #RRGGBB"),
    store: Path | None = typer.Option(None, "--store", help=STORE_OPTION_HELP),
) -> None:
    """Add or replace a task category."""
    try:
        category = Category(id=category_id, name=name, color=color)
    except ValidationError:
        print_error(f"Invalid color: {color}", solution="Use #RRGGBB, e.g. #FF9500")
        raise typer.Exit(ExitCode.USER_ERROR)

    with readable_store():
        get_service(store).store.save_category(category)
    console.print(f"[green]Saved:[/green] {category.id}")


@category_app.command("list")
def list_categories(
    store: Path | None = typer.Option(None, "--store", help=STORE_OPTION_HELP),
) -> None:
    """List task categories with their bar colors."""
    with readable_store():
        categories = get_service(store).store.list_categories()

    if not categories:
        console.print("[dim]No categories found.[/dim]")
        return

    table = Table(title="Categories")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Color")
    for category in categories:
        table.add_row(category.id, category.name, f"[{category.color}]■[/] {category.color}")
    console.print(table)


@category_app.command("remove")
def remove_category(
    category_id: str = typer.Argument(..., help="Category id to remove"),
    store: Path | None = typer.Option(None, "--store", help=STORE_OPTION_HELP),
) -> None:
    """Remove a category; its tasks fall back to the default bar color."""
    try:
        with readable_store():
            get_service(store).store.delete_category(category_id)
    except RecordNotFoundError:
        print_record_not_found_error("Category", category_id, "staffline category list")
        raise typer.Exit(ExitCode.USER_ERROR)

    console.print(f"[green]Removed:[/green] {category_id}")


# =============================================================================
# Projects
# =============================================================================


@project_app.command("add")
def add_project(
    project_id: str = typer.Argument(..., help="Project id"),
    name: str = typer.Argument(..., help="Project name"),
    category: str = typer.Option("", "--category", "-c", help="Category id"),
    priority: ProjectPriority = typer.Option(
        ProjectPriority.B, "--priority", help="Priority rank (SS is highest)"
    ),
    business_type: BusinessType = typer.Option(
        BusinessType.CREATIVE, "--business", "-b", help="Line of business"
    ),
    store: Path | None = typer.Option(None, "--store", help=STORE_OPTION_HELP),
) -> None:
    """Add or replace a client project."""
    records = get_service(store).store
    with readable_store():
        if category and records.get_category(category) is None:
            print_record_not_found_error("Category", category, "staffline category list")
            raise typer.Exit(ExitCode.USER_ERROR)
        project = records.save_project(
            Project(
                id=project_id,
                name=name,
                category_id=category,
                priority=priority,
                business_type=business_type,
            )
        )
    console.print(f"[green]Saved:[/green] {project.id} ({project.priority.value})")


@project_app.command("list")
def list_projects(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    store: Path | None = typer.Option(None, "--store", help=STORE_OPTION_HELP),
) -> None:
    """List client projects, highest priority first."""
    with readable_store():
        projects = get_service(store).store.list_projects()

    rank = list(ProjectPriority)
    projects.sort(key=lambda p: rank.index(p.priority))

    if json_output:
        typer.echo(json.dumps([p.model_dump(mode="json") for p in projects], indent=2))
        return

    if not projects:
        console.print("[dim]No projects found.[/dim]")
        return

    table = Table(title="Projects")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Priority")
    table.add_column("Business")
    table.add_column("Category")
    table.add_column("Done")
    for project in projects:
        table.add_row(
            project.id,
            project.name,
            f"[bold {project.priority.color}]{project.priority.value}[/]",
            project.business_type.label,
            project.category_id,
            "[green]✓[/green]" if project.completed else "",
        )
    console.print(table)


@project_app.command("remove")
def remove_project(
    project_id: str = typer.Argument(..., help="Project id to remove"),
    store: Path | None = typer.Option(None, "--store", help=STORE_OPTION_HELP),
) -> None:
    """Remove a project. Tasks keep their project id."""
    try:
        with readable_store():
            get_service(store).store.delete_project(project_id)
    except RecordNotFoundError:
        print_record_not_found_error("Project", project_id, "staffline project list")
        raise typer.Exit(ExitCode.USER_ERROR)

    console.print(f"[green]Removed:[/green] {project_id}")
