"""Tests for timeline layout: rows, heights, and bar placement."""

from datetime import date, datetime, timedelta, timezone

import pytest

from staffline.core.config.models import TimelineConfig
from staffline.core.lanes import InvalidIntervalError
from staffline.core.tasks.models import Category, Staff, Task
from staffline.core.timeline import DisplayWindow, build_timeline, place_bar

WEEK = DisplayWindow(start=date(2024, 5, 6), end=date(2024, 5, 12))


def _task(tid: str, start: datetime, end: datetime, owner: str = "s1", **kwargs) -> Task:
    return Task(id=tid, title=f"Task {tid}", assignee_id=owner, start_date=start, end_date=end, **kwargs)


def _bars_by_id(timeline, owner_id: str) -> dict:
    row = next(r for r in timeline.rows if r.owner_id == owner_id)
    return {bar.task_id: bar for bar in row.bars}


class TestRows:
    def test_one_row_per_staff_in_roster_order(
        self, sample_tasks, sample_staff, sample_categories
    ) -> None:
        roster = list(reversed(sample_staff)) + [Staff(id="s3", name="Mio")]
        timeline = build_timeline(sample_tasks, roster, sample_categories, WEEK)
        assert [row.owner_id for row in timeline.rows] == ["s2", "s1", "s3"]

    def test_row_heights(self, sample_tasks, sample_staff, sample_categories) -> None:
        timeline = build_timeline(sample_tasks, sample_staff, sample_categories, WEEK)
        heights = {row.owner_id: row.height_px for row in timeline.rows}
        # s1 has two overlapping tasks -> two lanes; s2 has one
        assert heights == {"s1": 2 * 40 + 20, "s2": 40 + 20}

    def test_empty_row_for_staff_without_tasks(self, sample_categories) -> None:
        timeline = build_timeline([], [Staff(id="s3", name="Mio")], sample_categories, WEEK)
        [row] = timeline.rows
        assert row.bars == []
        assert row.max_lane == 0
        assert row.height_px == 60
        assert row.lane_total == 1

    def test_tasks_for_unknown_staff_are_ignored(self, sample_staff) -> None:
        tasks = [_task("x", datetime(2024, 5, 6), datetime(2024, 5, 7), owner="ghost")]
        timeline = build_timeline(tasks, sample_staff, [], WEEK)
        assert timeline.bar_count == 0

    def test_days_listed(self, sample_staff) -> None:
        timeline = build_timeline([], sample_staff, [], WEEK)
        assert timeline.days == WEEK.days()

    def test_custom_geometry(self, sample_tasks, sample_staff, sample_categories) -> None:
        settings = TimelineConfig(row_unit_height=30, row_padding=0, bar_offset=2)
        timeline = build_timeline(
            sample_tasks, sample_staff, sample_categories, WEEK, settings=settings
        )
        s1 = timeline.rows[0]
        assert s1.height_px == 60
        assert _bars_by_id(timeline, "s1")["task-002"].top_px == 32


class TestBars:
    def test_lanes_and_offsets(self, sample_tasks, sample_staff, sample_categories) -> None:
        timeline = build_timeline(sample_tasks, sample_staff, sample_categories, WEEK)
        bars = _bars_by_id(timeline, "s1")

        assert (bars["task-001"].lane, bars["task-001"].start_offset_days) == (0, 0)
        assert (bars["task-002"].lane, bars["task-002"].start_offset_days) == (1, 1)
        # task-003 starts when task-002 ends; touching tasks share lane 0
        assert (bars["task-003"].lane, bars["task-003"].start_offset_days) == (0, 4)

    def test_percentages_and_top(self, sample_tasks, sample_staff, sample_categories) -> None:
        timeline = build_timeline(sample_tasks, sample_staff, sample_categories, WEEK)
        bar = _bars_by_id(timeline, "s1")["task-002"]

        assert bar.duration_days == 3
        assert bar.left_pct == pytest.approx(100 / 7)
        assert bar.width_pct == pytest.approx(300 / 7)
        assert bar.top_px == 1 * 40 + 4

    def test_colors_and_flags(self, sample_tasks, sample_staff, sample_categories) -> None:
        timeline = build_timeline(sample_tasks, sample_staff, sample_categories, WEEK)
        bars = _bars_by_id(timeline, "s1")

        assert bars["task-001"].color == "#FF9500"
        assert bars["task-003"].color == "#34C759"
        assert bars["task-003"].completed is True
        assert bars["task-001"].duration_hours == 6.5

    def test_unknown_category_uses_default_color(self, sample_staff) -> None:
        tasks = [_task("x", datetime(2024, 5, 6), datetime(2024, 5, 7), category_id="nope")]
        timeline = build_timeline(tasks, sample_staff, [], WEEK)
        assert _bars_by_id(timeline, "s1")["x"].color == "#3B82F6"

    def test_partial_day_duration_rounds_up(self, sample_staff) -> None:
        tasks = [_task("x", datetime(2024, 5, 7, 9), datetime(2024, 5, 7, 17))]
        bar = _bars_by_id(build_timeline(tasks, sample_staff, [], WEEK), "s1")["x"]
        assert bar.start_offset_days == 1
        assert bar.duration_days == 1


class TestWindowClipping:
    def test_tasks_outside_window_dropped_but_height_kept(
        self, sample_tasks, sample_staff, sample_categories
    ) -> None:
        later = WEEK.next_week()
        timeline = build_timeline(sample_tasks, sample_staff, sample_categories, later)
        s1 = timeline.rows[0]
        assert s1.bars == []
        assert s1.max_lane == 1
        assert s1.height_px == 100

    def test_task_starting_before_window_pins_to_zero(self, sample_staff) -> None:
        tasks = [_task("x", datetime(2024, 5, 3), datetime(2024, 5, 8))]
        bar = _bars_by_id(build_timeline(tasks, sample_staff, [], WEEK), "s1")["x"]
        assert bar.start_offset_days == 0
        assert bar.duration_days == 5

    def test_task_after_window_dropped(self, sample_staff) -> None:
        tasks = [_task("x", datetime(2024, 5, 13), datetime(2024, 5, 14))]
        assert build_timeline(tasks, sample_staff, [], WEEK).bar_count == 0

    def test_task_starting_on_last_day_kept(self, sample_staff) -> None:
        tasks = [_task("x", datetime(2024, 5, 12), datetime(2024, 5, 14))]
        bar = _bars_by_id(build_timeline(tasks, sample_staff, [], WEEK), "s1")["x"]
        assert bar.start_offset_days == 6

    def test_timed_task_within_last_day_kept(self, sample_staff) -> None:
        tasks = [_task("x", datetime(2024, 5, 12, 9), datetime(2024, 5, 12, 17))]
        bar = _bars_by_id(build_timeline(tasks, sample_staff, [], WEEK), "s1")["x"]
        assert bar.start_offset_days == 6
        assert bar.duration_days == 1

    def test_task_starting_late_on_last_day_kept(self, sample_staff) -> None:
        tasks = [_task("x", datetime(2024, 5, 12, 23, 59), datetime(2024, 5, 13, 8))]
        assert build_timeline(tasks, sample_staff, [], WEEK).bar_count == 1

    def test_aware_task_placed_in_utc(self, sample_staff) -> None:
        tokyo = timezone(timedelta(hours=9))
        # 2024-05-13T05:00+09:00 is 2024-05-12T20:00 UTC
        tasks = [_task("x", datetime(2024, 5, 13, 5, tzinfo=tokyo), datetime(2024, 5, 13, 12))]
        bar = _bars_by_id(build_timeline(tasks, sample_staff, [], WEEK), "s1")["x"]
        assert bar.start_offset_days == 6

    def test_task_ending_on_first_day_kept(self, sample_staff) -> None:
        tasks = [_task("x", datetime(2024, 5, 4), datetime(2024, 5, 6))]
        assert build_timeline(tasks, sample_staff, [], WEEK).bar_count == 1

    def test_place_bar_outside_returns_none(self) -> None:
        task = _task("x", datetime(2024, 4, 1), datetime(2024, 4, 2))
        assert place_bar(task, 0, WEEK, "#000000", TimelineConfig()) is None


class TestInvalidTasks:
    def _bad(self) -> list[Task]:
        return [_task("bad", datetime(2024, 5, 9), datetime(2024, 5, 7))]

    def test_rejected_by_default(self, sample_staff) -> None:
        with pytest.raises(InvalidIntervalError):
            build_timeline(self._bad(), sample_staff, [], WEEK)

    def test_clamped(self, sample_staff) -> None:
        timeline = build_timeline(self._bad(), sample_staff, [], WEEK, on_invalid="clamp")
        bar = _bars_by_id(timeline, "s1")["bad"]
        assert bar.start_offset_days == 3
        assert bar.duration_days == 0

    def test_ignored(self, sample_staff) -> None:
        timeline = build_timeline(self._bad(), sample_staff, [], WEEK, on_invalid="ignore")
        bar = _bars_by_id(timeline, "s1")["bad"]
        assert bar.duration_days == 0
        assert bar.lane == 0


class TestCategoryLookup:
    def test_explicit_lookup_tables(self, sample_staff) -> None:
        tasks = [_task("x", datetime(2024, 5, 6), datetime(2024, 5, 7), category_id="c9")]
        categories = [Category(id="c9", name="Video", color="#8E8E93")]
        bar = _bars_by_id(build_timeline(tasks, sample_staff, categories, WEEK), "s1")["x"]
        assert bar.color == "#8E8E93"
