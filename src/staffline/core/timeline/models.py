"""
Timeline data models.

A Timeline is the laid-out result for one display window: one OwnerRow per
staff member, each holding the bars visible in the window.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, timedelta

from pydantic import BaseModel, ConfigDict, Field, model_validator

from staffline.core.lanes.models import TimedItem

WEEK_DAYS = 7
MONTH_STEP_DAYS = 28


class DisplayWindow(BaseModel):
    """
    An inclusive range of calendar days shown by the timeline.

    Example:
        >>> window = DisplayWindow.weekly(date(2024, 5, 8))
        >>> window.start, window.end
        (datetime.date(2024, 5, 7), datetime.date(2024, 5, 13))
    """

    model_config = ConfigDict(frozen=True)

    start: date = Field(..., description="First day shown")
    end: date = Field(..., description="Last day shown (inclusive)")

    @model_validator(mode="after")
    def check_order(self) -> DisplayWindow:
        if self.end < self.start:
            raise ValueError(f"Window end {self.end} is before start {self.start}")
        return self

    @classmethod
    def weekly(cls, anchor: date, lead_days: int = 1) -> DisplayWindow:
        """Seven-day window starting lead_days before the anchor day."""
        start = anchor - timedelta(days=lead_days)
        return cls(start=start, end=start + timedelta(days=WEEK_DAYS - 1))

    @classmethod
    def covering(cls, items: Iterable[TimedItem]) -> DisplayWindow | None:
        """Smallest window containing every item, or None for no items."""
        items = list(items)
        if not items:
            return None
        first = min(min(item.start, item.end) for item in items)
        last = max(max(item.start, item.end) for item in items)
        return cls(start=first.date(), end=last.date())

    def __len__(self) -> int:
        return (self.end - self.start).days + 1

    def days(self) -> list[date]:
        """Every calendar day in the window, in order."""
        return [self.start + timedelta(days=offset) for offset in range(len(self))]

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    def shift(self, days: int) -> DisplayWindow:
        """Same-length window moved by the given number of days."""
        step = timedelta(days=days)
        return DisplayWindow(start=self.start + step, end=self.end + step)

    def next_week(self) -> DisplayWindow:
        return self.shift(WEEK_DAYS)

    def previous_week(self) -> DisplayWindow:
        return self.shift(-WEEK_DAYS)

    def next_month(self) -> DisplayWindow:
        return self.shift(MONTH_STEP_DAYS)

    def previous_month(self) -> DisplayWindow:
        return self.shift(-MONTH_STEP_DAYS)


class TimelineBar(BaseModel):
    """Placement of one task inside an owner row."""

    task_id: str = Field(..., description="Task identifier")
    title: str = Field(default="", description="Task title")
    color: str = Field(..., description="Bar color as #RRGGBB")
    lane: int = Field(..., ge=0, description="Lane within the owner row")
    start_offset_days: int = Field(..., ge=0, description="Days from window start")
    duration_days: int = Field(..., ge=0, description="Whole days spanned")
    left_pct: float = Field(..., description="Left edge as a percentage of the window")
    width_pct: float = Field(..., description="Width as a percentage of the window")
    top_px: int = Field(..., ge=0, description="Vertical offset inside the row")
    duration_hours: float = Field(default=0.0, ge=0.0, description="Effort in hours")
    completed: bool = Field(default=False, description="Whether the task is done")


class OwnerRow(BaseModel):
    """One staff member's row: its height and the bars visible in the window."""

    owner_id: str = Field(..., description="Staff identifier")
    name: str = Field(default="", description="Staff display name")
    role: str = Field(default="", description="Staff role")
    max_lane: int = Field(default=0, ge=0, description="Highest lane across all owner tasks")
    height_px: int = Field(..., ge=0, description="Reserved row height")
    bars: list[TimelineBar] = Field(default_factory=list)

    @property
    def lane_total(self) -> int:
        """Number of lanes the row reserves."""
        return self.max_lane + 1


class Timeline(BaseModel):
    """The full layout for a display window."""

    window: DisplayWindow
    days: list[date] = Field(default_factory=list)
    rows: list[OwnerRow] = Field(default_factory=list)

    @property
    def bar_count(self) -> int:
        return sum(len(row.bars) for row in self.rows)
