"""
Configuration data models for staffline.

These models define the structure of .staffline.json and
~/.config/staffline/config.json, with validation via Pydantic.
"""

from pydantic import BaseModel, Field

from staffline.core.lanes.assigner import InvalidPolicy
from staffline.core.tasks.models import HEX_COLOR_PATTERN


class TimelineConfig(BaseModel):
    """
    Timeline layout settings.

    Sizes are in pixels and mirror the web dashboard's row geometry.
    """
    row_unit_height: int = Field(
        default=40,
        ge=1,
        description="Height of a single lane"
    )
    row_padding: int = Field(
        default=20,
        ge=0,
        description="Extra height added to every owner row"
    )
    bar_offset: int = Field(
        default=4,
        ge=0,
        description="Top offset of a bar inside its lane"
    )
    week_lead_days: int = Field(
        default=1,
        ge=0,
        description="How many days before the anchor day a weekly window starts"
    )
    default_color: str = Field(
        default="#3B82F6",
        pattern=HEX_COLOR_PATTERN,
        description="Bar color for tasks without a known category"
    )
    default_view: str = Field(
        default="week",
        pattern="^(week|full)$",
        description="View used when no window is requested: 'week' or 'full'"
    )

    def row_height(self, max_lane: int) -> int:
        """Height reserved for a row whose highest lane is max_lane."""
        return (max_lane + 1) * self.row_unit_height + self.row_padding


class LanesConfig(BaseModel):
    """Lane assignment behavior."""
    on_invalid: InvalidPolicy = Field(
        default="reject",
        description="Policy for tasks that end before they start"
    )


class StoreConfig(BaseModel):
    """Where records are kept."""
    path: str = Field(
        default="staffline.json",
        min_length=1,
        description="Record file, relative to the project directory unless absolute"
    )


class StafflineConfig(BaseModel):
    """Root configuration model."""
    timeline: TimelineConfig = Field(default_factory=TimelineConfig)
    lanes: LanesConfig = Field(default_factory=LanesConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)
