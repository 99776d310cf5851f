"""
Task records and the record store collaborator.

This module provides the Task, Staff, Category, and Project models as well as the
RecordStore protocol and its JSON file implementation.
"""

from .models import BusinessType, Category, Project, ProjectPriority, Staff, StaffRole, Task
from .store import (
    JsonRecordStore,
    RecordFileCorruptedError,
    RecordNotFoundError,
    RecordStore,
    RecordStoreError,
)

__all__ = [
    # Models
    "BusinessType",
    "Category",
    "Project",
    "ProjectPriority",
    "Staff",
    "StaffRole",
    "Task",
    # Store
    "JsonRecordStore",
    "RecordStore",
    "RecordStoreError",
    "RecordFileCorruptedError",
    "RecordNotFoundError",
]
