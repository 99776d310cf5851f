"""
Timeline layout for staff tasks.

Provides display windows, per-owner rows, and bar placement built on top of
lane assignment.
"""

from .layout import build_owner_row, build_timeline, place_bar
from .models import DisplayWindow, OwnerRow, Timeline, TimelineBar

__all__ = [
    "DisplayWindow",
    "OwnerRow",
    "Timeline",
    "TimelineBar",
    "build_owner_row",
    "build_timeline",
    "place_bar",
]
