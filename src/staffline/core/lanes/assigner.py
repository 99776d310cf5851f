"""
Greedy first-fit lane assignment for overlapping intervals.

Items are processed in start order; each one takes the lowest lane not
already held by an earlier item it overlaps. On interval graphs this uses
exactly as many lanes as the largest set of mutually overlapping items.

Example:
    >>> lanes = assign_lanes(items_for_one_owner)
    >>> height = (max_lane(lanes) + 1) * row_unit_height
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Literal

from .models import InvalidIntervalError, LanedItem, TimedItem

logger = logging.getLogger(__name__)

InvalidPolicy = Literal["reject", "clamp", "ignore"]

INVALID_POLICIES: tuple[str, ...] = ("reject", "clamp", "ignore")


def overlaps(a: TimedItem, b: TimedItem) -> bool:
    """
    Strict overlap test.

    Intervals that only touch at a boundary do not overlap, so a
    zero-duration item overlaps another only when it falls strictly inside it.
    """
    return a.start < b.end and a.end > b.start


def _apply_policy(items: Sequence[TimedItem], on_invalid: InvalidPolicy) -> list[TimedItem]:
    if on_invalid not in INVALID_POLICIES:
        raise ValueError(
            f"Unknown invalid-interval policy '{on_invalid}' "
            f"(expected one of: {', '.join(INVALID_POLICIES)})"
        )

    checked: list[TimedItem] = []
    for item in items:
        if item.is_valid:
            checked.append(item)
        elif on_invalid == "reject":
            raise InvalidIntervalError(item)
        elif on_invalid == "clamp":
            logger.warning("Clamping item %s to zero duration (end before start)", item.id)
            checked.append(item.model_copy(update={"end": item.start}))
        else:
            logger.warning("Item %s ends before it starts; placement is unspecified", item.id)
            checked.append(item)
    return checked


def assign_lanes(
    items: Sequence[TimedItem],
    on_invalid: InvalidPolicy = "reject",
) -> list[LanedItem]:
    """
    Assign a lane to every item of a single owner.

    Args:
        items: Items already filtered to one owner, in any order
        on_invalid: What to do with items whose end precedes their start:
            "reject" raises, "clamp" treats them as zero-duration at start,
            "ignore" places them as-is

    Returns:
        LanedItems in processing order (start ascending, ties keep input order)

    Raises:
        InvalidIntervalError: If an item is malformed and on_invalid is "reject"
    """
    ordered = sorted(_apply_policy(items, on_invalid), key=lambda item: item.start)

    placed: list[LanedItem] = []
    for current in ordered:
        occupied = {other.lane for other in placed if overlaps(current, other)}

        lane = 0
        while lane in occupied:
            lane += 1

        placed.append(LanedItem(**current.model_dump(), lane=lane))

    if placed:
        logger.debug(
            "Assigned %d item(s) of owner %s to %d lane(s)",
            len(placed),
            placed[0].owner_key,
            max_lane(placed) + 1,
        )
    return placed


def max_lane(items: Iterable[LanedItem]) -> int:
    """Highest lane in use, 0 when there are no items."""
    return max((item.lane for item in items), default=0)


def lane_count(items: Iterable[LanedItem]) -> int:
    """Number of distinct lanes in use."""
    return len({item.lane for item in items})


def group_by_owner(items: Iterable[TimedItem]) -> dict[str, list[TimedItem]]:
    """Partition items by owner_key, keeping input order within each owner."""
    groups: dict[str, list[TimedItem]] = {}
    for item in items:
        groups.setdefault(item.owner_key, []).append(item)
    return groups


def assign_lanes_by_owner(
    items: Iterable[TimedItem],
    on_invalid: InvalidPolicy = "reject",
) -> dict[str, list[LanedItem]]:
    """Run assign_lanes independently for every owner present in items."""
    return {
        owner: assign_lanes(owned, on_invalid=on_invalid)
        for owner, owned in group_by_owner(items).items()
    }
