"""
Timeline layout: turn tasks and a display window into positioned bars.

Lanes are assigned per staff member over all of that member's tasks, then
only the bars that intersect the window are kept. Row heights therefore
stay the same while the window is paged back and forth.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from datetime import date, datetime, time, timedelta

from staffline.core.config.models import TimelineConfig
from staffline.core.lanes import InvalidPolicy, assign_lanes, group_by_owner, max_lane
from staffline.core.tasks.models import Category, Staff, Task

from .models import DisplayWindow, OwnerRow, Timeline, TimelineBar

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 86_400


def _day_start(day: date) -> datetime:
    return datetime.combine(day, time.min)


def _days_between(earlier: datetime, later: datetime) -> float:
    return (later - earlier).total_seconds() / SECONDS_PER_DAY


def place_bar(
    task: Task,
    lane: int,
    window: DisplayWindow,
    color: str,
    settings: TimelineConfig,
) -> TimelineBar | None:
    """
    Position one task inside a window.

    Returns None when the task lies entirely outside the window: it ends
    before the first day begins or starts once the last day is over.
    """
    first_day = _day_start(window.start)
    after_last_day = _day_start(window.end + timedelta(days=1))

    if task.end_date < first_day or task.start_date >= after_last_day:
        return None

    day_count = len(window)
    start_offset = max(0, math.floor(_days_between(first_day, task.start_date)))
    duration = max(0, math.ceil(_days_between(task.start_date, task.end_date)))

    return TimelineBar(
        task_id=task.id,
        title=task.title,
        color=color,
        lane=lane,
        start_offset_days=start_offset,
        duration_days=duration,
        left_pct=start_offset * 100 / day_count,
        width_pct=duration * 100 / day_count,
        top_px=lane * settings.row_unit_height + settings.bar_offset,
        duration_hours=task.duration,
        completed=task.completed,
    )


def build_owner_row(
    member: Staff,
    tasks: Sequence[Task],
    window: DisplayWindow,
    colors: dict[str, str],
    settings: TimelineConfig,
    on_invalid: InvalidPolicy = "reject",
) -> OwnerRow:
    """Lay out one staff member's tasks; tasks must already belong to that member."""
    by_id = {task.id: task for task in tasks}
    laned = assign_lanes([task.to_timed_item() for task in tasks], on_invalid=on_invalid)
    top = max_lane(laned)

    bars: list[TimelineBar] = []
    for item in laned:
        task = by_id[item.id]
        if item.end != task.end_date:
            task = task.model_copy(update={"end_date": item.end})
        color = colors.get(task.category_id, settings.default_color)
        bar = place_bar(task, item.lane, window, color, settings)
        if bar is not None:
            bars.append(bar)

    return OwnerRow(
        owner_id=member.id,
        name=member.name,
        role=member.role.value,
        max_lane=top,
        height_px=settings.row_height(top),
        bars=bars,
    )


def build_timeline(
    tasks: Sequence[Task],
    staff: Sequence[Staff],
    categories: Sequence[Category],
    window: DisplayWindow,
    settings: TimelineConfig | None = None,
    on_invalid: InvalidPolicy = "reject",
) -> Timeline:
    """
    Build the timeline for a window.

    Args:
        tasks: All tasks to consider (any owner, any order)
        staff: Roster; one row per member in this order, even without tasks
        categories: Category lookup for bar colors
        window: Days to show
        settings: Row geometry (defaults to TimelineConfig())
        on_invalid: Policy for tasks that end before they start

    Returns:
        Timeline with one OwnerRow per staff member

    Raises:
        InvalidIntervalError: If a task is malformed and on_invalid is "reject"
    """
    settings = settings or TimelineConfig()
    colors = {category.id: category.color for category in categories}
    tasks_by_id = {task.id: task for task in tasks}
    grouped = group_by_owner(task.to_timed_item() for task in tasks)

    known = {member.id for member in staff}
    orphaned = sorted(set(grouped) - known)
    if orphaned:
        logger.warning("Ignoring tasks assigned to unknown staff: %s", ", ".join(orphaned))

    rows = [
        build_owner_row(
            member,
            [tasks_by_id[item.id] for item in grouped.get(member.id, [])],
            window,
            colors,
            settings,
            on_invalid=on_invalid,
        )
        for member in staff
    ]

    timeline = Timeline(window=window, days=window.days(), rows=rows)
    logger.debug(
        "Laid out %d bar(s) across %d row(s) for %s..%s",
        timeline.bar_count,
        len(rows),
        window.start,
        window.end,
    )
    return timeline
