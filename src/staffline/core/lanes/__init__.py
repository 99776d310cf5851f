"""
Lane assignment for overlapping, owner-scoped intervals.

Given the time-bounded items of one owner, assign each a non-negative lane
so that overlapping items never share one.
"""

from .assigner import (
    INVALID_POLICIES,
    InvalidPolicy,
    assign_lanes,
    assign_lanes_by_owner,
    group_by_owner,
    lane_count,
    max_lane,
    overlaps,
)
from .models import InvalidIntervalError, LanedItem, TimedItem, to_naive_utc

__all__ = [
    # Models
    "TimedItem",
    "LanedItem",
    "InvalidIntervalError",
    "to_naive_utc",
    # Assignment
    "INVALID_POLICIES",
    "InvalidPolicy",
    "assign_lanes",
    "assign_lanes_by_owner",
    "group_by_owner",
    "lane_count",
    "max_lane",
    "overlaps",
]
