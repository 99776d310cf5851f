"""
Timeline service: clean API for timeline and lane queries.

Composes the record store, configuration, and layout code so that any
interface (CLI, future web views) can ask for a laid-out timeline without
reaching into core packages directly.

Usage:
    >>> from staffline.core.services.timeline import TimelineService
    >>> service = TimelineService.from_project_dir(project_dir)
    >>> timeline = service.week()
    >>> lanes = service.lanes(owner="s1")
"""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path

from staffline.core.config import StafflineConfig, load_config
from staffline.core.lanes import InvalidPolicy, LanedItem, assign_lanes_by_owner
from staffline.core.tasks.store import JsonRecordStore, RecordStore
from staffline.core.timeline import DisplayWindow, Timeline, build_timeline

logger = logging.getLogger(__name__)


# ============================================================================
# Typed exceptions
# ============================================================================


class TimelineServiceError(Exception):
    """Base exception for TimelineService errors."""


class UnknownOwnerError(TimelineServiceError):
    """Requested staff member is not on the roster."""

    def __init__(self, owner_id: str) -> None:
        self.owner_id = owner_id
        super().__init__(f"Staff member '{owner_id}' not found")


# ============================================================================
# TimelineService
# ============================================================================


class TimelineService:
    """
    Service for building timelines and lane assignments from stored records.

    Stateless apart from its collaborators: every call reloads records, so
    results always reflect the current store contents.

    Example:
        >>> service = TimelineService(JsonRecordStore(path), StafflineConfig())
        >>> timeline = service.week(anchor=date(2024, 5, 8))
        >>> [row.height_px for row in timeline.rows]
        [100, 60]
    """

    def __init__(self, store: RecordStore, config: StafflineConfig | None = None) -> None:
        self.store = store
        self.config = config or StafflineConfig()

    @classmethod
    def from_project_dir(
        cls,
        project_dir: Path | None = None,
        store_path: Path | None = None,
    ) -> TimelineService:
        """
        Create service from a project directory.

        Args:
            project_dir: Directory holding .staffline.json (defaults to cwd)
            store_path: Explicit record file, overriding the configured one

        Returns:
            Configured TimelineService instance
        """
        project_dir = project_dir or Path.cwd()
        config = load_config(project_dir)

        if store_path is None:
            store_path = Path(config.store.path)
            if not store_path.is_absolute():
                store_path = project_dir / store_path

        logger.debug("Using record store at %s", store_path)
        return cls(JsonRecordStore(store_path), config)

    @property
    def on_invalid(self) -> InvalidPolicy:
        return self.config.lanes.on_invalid

    def default(self, anchor: date | None = None, offset_weeks: int = 0) -> Timeline:
        """Timeline for the configured default view ('week' or 'full')."""
        if self.config.timeline.default_view == "full":
            return self.full()
        return self.week(anchor, offset_weeks=offset_weeks)

    def week(self, anchor: date | None = None, offset_weeks: int = 0) -> Timeline:
        """
        Timeline for the week around anchor (today by default).

        Args:
            anchor: Day the week is built around
            offset_weeks: Pages forward (positive) or back (negative) by weeks
        """
        window = DisplayWindow.weekly(
            anchor or date.today(),
            lead_days=self.config.timeline.week_lead_days,
        )
        return self.for_window(window.shift(7 * offset_weeks))

    def full(self) -> Timeline:
        """Timeline covering every stored task; falls back to this week when empty."""
        window = DisplayWindow.covering(task.to_timed_item() for task in self.store.list_tasks())
        if window is None:
            return self.week()
        return self.for_window(window)

    def for_window(self, window: DisplayWindow) -> Timeline:
        """Timeline for an explicit window."""
        return build_timeline(
            self.store.list_tasks(),
            self.store.list_staff(),
            self.store.list_categories(),
            window,
            settings=self.config.timeline,
            on_invalid=self.on_invalid,
        )

    def lanes(self, owner: str | None = None) -> dict[str, list[LanedItem]]:
        """
        Lane assignment for every owner, or a single one.

        Raises:
            UnknownOwnerError: If owner is given and not on the roster
        """
        if owner is not None and self.store.get_staff(owner) is None:
            raise UnknownOwnerError(owner)

        tasks = self.store.list_tasks(assignee_id=owner)
        return assign_lanes_by_owner(
            (task.to_timed_item() for task in tasks),
            on_invalid=self.on_invalid,
        )
