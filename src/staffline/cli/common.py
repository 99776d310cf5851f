"""
Helpers shared by staffline CLI commands.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import date, datetime
from pathlib import Path

import typer

from staffline.cli.errors import ExitCode, print_corrupted_store_error, print_invalid_date_error
from staffline.core.lanes import to_naive_utc
from staffline.core.services import TimelineService
from staffline.core.tasks import RecordFileCorruptedError

STORE_OPTION_HELP = "Record file (defaults to store.path from config)"


def get_service(store: Path | None = None) -> TimelineService:
    """Build a TimelineService for the current directory."""
    return TimelineService.from_project_dir(Path.cwd(), store_path=store)


@contextmanager
def readable_store() -> Iterator[None]:
    """Turn a corrupted record file into a user error instead of a traceback."""
    try:
        yield
    except RecordFileCorruptedError as e:
        print_corrupted_store_error(str(e))
        raise typer.Exit(ExitCode.USER_ERROR)


def parse_day(value: str) -> date:
    """Parse a YYYY-MM-DD argument, exiting with a user error if malformed."""
    try:
        return date.fromisoformat(value)
    except ValueError:
        print_invalid_date_error(value)
        raise typer.Exit(ExitCode.USER_ERROR)


def parse_instant(value: str) -> datetime:
    """
    Parse a date or datetime argument, exiting with a user error if malformed.

    Values with a UTC offset are converted to naive UTC, matching how tasks
    are stored.
    """
    try:
        return to_naive_utc(datetime.fromisoformat(value))
    except ValueError:
        print_invalid_date_error(value)
        raise typer.Exit(ExitCode.USER_ERROR)
