"""
Staffline - staff task timelines.

Assigns overlapping tasks of the same staff member to separate lanes and
lays them out on a calendar timeline.
"""

__version__ = "0.1.0"

# Re-export the core models for convenience
from staffline.core.lanes import LanedItem, TimedItem, assign_lanes
from staffline.core.tasks.models import Category, Project, Staff, Task

__all__ = [
    "Category",
    "LanedItem",
    "Project",
    "Staff",
    "Task",
    "TimedItem",
    "assign_lanes",
    "__version__",
]
