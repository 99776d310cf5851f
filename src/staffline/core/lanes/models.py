"""
Data models for lane assignment.

TimedItem is the only input the lane assigner understands; LanedItem is
the derived output. Neither is persisted.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator


def to_naive_utc(value: datetime) -> datetime:
    """
    Drop timezone info so every instant compares with every other.

    Aware datetimes are converted to UTC first; naive ones are kept as-is.
    """
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class TimedItem(BaseModel):
    """
    A time-bounded item belonging to one owner.

    Both ends are inclusive instants, stored naive (aware input is converted
    to UTC). ``end >= start`` is expected but not enforced here; the assigner
    applies the invalid-interval policy.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Opaque unique identifier")
    start: datetime = Field(..., description="Inclusive start instant")
    end: datetime = Field(..., description="Inclusive end instant")
    owner_key: str = Field(..., description="Grouping key, e.g. a staff id")

    @field_validator("start", "end")
    @classmethod
    def normalize_instant(cls, v: datetime) -> datetime:
        return to_naive_utc(v)

    @property
    def is_valid(self) -> bool:
        """True when the interval is well-formed (end >= start)."""
        return self.end >= self.start


class LanedItem(TimedItem):
    """A TimedItem with the lane it was assigned for one computation."""

    lane: int = Field(..., ge=0, description="Vertical slot, 0 is the top lane")


class InvalidIntervalError(ValueError):
    """Raised when an item ends before it starts."""

    def __init__(self, item: TimedItem) -> None:
        self.item = item
        super().__init__(
            f"Item '{item.id}' ends before it starts "
            f"({item.end.isoformat()} < {item.start.isoformat()})"
        )
