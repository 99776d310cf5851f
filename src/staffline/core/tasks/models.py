"""
Record models for staff scheduling.

These models mirror the records kept in the JSON record store:
staff members, task categories, client projects, and the tasks assigned
to staff.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator

from staffline.core.lanes.models import TimedItem, to_naive_utc

HEX_COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"


class StaffRole(str, Enum):
    """Job role of a staff member."""

    DESIGNER = "designer"
    ILLUSTRATOR = "illustrator"
    DIRECTOR = "director"
    VIDEO_CREATOR = "video_creator"
    ENGINEER = "engineer"

    @property
    def label(self) -> str:
        """Human-readable role name."""
        return self.value.replace("_", " ").title()


class ProjectPriority(str, Enum):
    """Project priority, SS being the most urgent."""

    SS = "SS"
    S = "S"
    A = "A"
    B = "B"
    C = "C"

    @property
    def color(self) -> str:
        """Badge color used when listing projects."""
        return {
            ProjectPriority.SS: "#FF3B30",
            ProjectPriority.S: "#FF9500",
            ProjectPriority.A: "#34C759",
            ProjectPriority.B: "#007AFF",
            ProjectPriority.C: "#8E8E93",
        }[self]


class BusinessType(str, Enum):
    """Line of business a project belongs to."""

    VTUBER = "vtuber"
    CREATIVE = "creative"

    @property
    def label(self) -> str:
        return {BusinessType.VTUBER: "VTuber", BusinessType.CREATIVE: "Creative"}[self]


class Staff(BaseModel):
    """A staff member who can be assigned tasks."""

    id: str = Field(..., min_length=1, description="Staff identifier")
    name: str = Field(..., min_length=1, description="Display name")
    role: StaffRole = Field(default=StaffRole.DESIGNER, description="Job role")


class Category(BaseModel):
    """A task category; its color is used for timeline bars."""

    id: str = Field(..., min_length=1, description="Category identifier")
    name: str = Field(..., min_length=1, description="Category name")
    color: str = Field(
        default="#3B82F6",
        pattern=HEX_COLOR_PATTERN,
        description="Bar color as #RRGGBB",
    )


class Project(BaseModel):
    """A client project that tasks are scheduled against."""

    id: str = Field(..., min_length=1, description="Project identifier")
    name: str = Field(..., min_length=1, description="Project name")
    category_id: str = Field(default="", description="Category identifier")
    priority: ProjectPriority = Field(default=ProjectPriority.B, description="Priority rank")
    business_type: BusinessType = Field(
        default=BusinessType.CREATIVE, description="Line of business"
    )
    completed: bool = Field(default=False, description="Whether the project is done")


class Task(BaseModel):
    """
    A unit of work assigned to one staff member over a date range.

    start_date and end_date are both inclusive and stored naive; aware
    values are converted to UTC. duration is the estimated effort in hours,
    kept to two decimal places.
    """

    id: str = Field(..., min_length=1, description="Task identifier")
    title: str = Field(..., min_length=1, description="Task title")
    project_id: str = Field(default="", description="Client project identifier")
    assignee_id: str = Field(..., min_length=1, description="Assigned staff id")
    category_id: str = Field(default="", description="Category identifier")
    start_date: datetime = Field(..., description="Inclusive start")
    end_date: datetime = Field(..., description="Inclusive end")
    duration: float = Field(default=0.0, ge=0.0, description="Effort in hours")
    completed: bool = Field(default=False, description="Whether the task is done")

    @field_validator("start_date", "end_date")
    @classmethod
    def normalize_dates(cls, v: datetime) -> datetime:
        return to_naive_utc(v)

    @field_validator("duration")
    @classmethod
    def round_duration(cls, v: float) -> float:
        """Keep durations to two decimal places."""
        return round(v, 2)

    def to_timed_item(self) -> TimedItem:
        """Project this task onto the lane assigner's input shape."""
        return TimedItem(
            id=self.id,
            start=self.start_date,
            end=self.end_date,
            owner_key=self.assignee_id,
        )
