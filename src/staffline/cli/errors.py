"""
Standardized error handling and exit codes for the staffline CLI.

Provides consistent error messages with actionable guidance and standard
exit codes across all commands.
"""

from enum import IntEnum

from rich.console import Console

console = Console(stderr=True)


class ExitCode(IntEnum):
    """Standard exit codes for staffline CLI operations."""

    SUCCESS = 0
    """Operation completed successfully."""

    GENERAL_ERROR = 1
    """Generic error or unexpected failure."""

    USER_ERROR = 2
    """User input or data error (actionable by user)."""


def print_error(
    problem: str,
    *,
    reason: str | None = None,
    solution: str | None = None,
) -> None:
    """
    Print a standardized error message with actionable guidance.

    Args:
        problem: Brief description of what went wrong
        reason: Optional explanation of why it happened
        solution: Optional command or action to fix it

    Example:
        >>> print_error(
        ...     "Staff member not found: s9",
        ...     solution="staffline staff list",
        ... )
    """
    console.print(f"[red]Error:[/red] {problem}")

    if reason:
        console.print(f"[dim]{reason}[/dim]")

    if solution:
        console.print(f"[cyan]→ Try:[/cyan] {solution}")


def print_staff_not_found_error(staff_id: str) -> None:
    """Print error when a staff id is not on the roster."""
    print_error(
        f"Staff member not found: {staff_id}",
        reason="Tasks can only be assigned to staff on the roster",
        solution="staffline staff list  # or staffline staff add <id> <name>",
    )


def print_task_not_found_error(task_id: str) -> None:
    """Print error when a task id does not exist."""
    print_error(
        f"Task not found: {task_id}",
        reason="The task ID may be incorrect or the task may have been removed",
        solution="staffline task list",
    )


def print_invalid_interval_error(detail: str) -> None:
    """Print error when a task ends before it starts."""
    print_error(
        "Task ends before it starts",
        reason=detail,
        solution="Fix the task dates, or set lanes.on_invalid to 'clamp' in .staffline.json",
    )


def print_corrupted_store_error(detail: str) -> None:
    """Print error when the record file cannot be parsed."""
    print_error(
        "Record file is corrupted",
        reason=detail,
        solution="Check the JSON syntax of the record file",
    )


def print_invalid_date_error(value: str) -> None:
    """Print error when a date argument cannot be parsed."""
    print_error(
        f"Invalid date: {value}",
        reason="Dates must be ISO formatted",
        solution="Use YYYY-MM-DD, e.g. 2024-05-08",
    )


def print_record_not_found_error(label: str, record_id: str, list_command: str) -> None:
    """Print error when a staff, category, or project id does not exist."""
    print_error(
        f"{label} not found: {record_id}",
        solution=list_command,
    )
