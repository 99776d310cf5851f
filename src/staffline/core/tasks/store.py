"""
Record store protocol and JSON file implementation.

The record store is the persistence collaborator for tasks, staff,
categories, and projects. Layout code never touches it directly; services
load plain in-memory lists from it and hand those on.
"""

import json
import logging
import os
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Any, Protocol, TypeVar, runtime_checkable

from pydantic import BaseModel, ValidationError

from .models import Category, Project, Staff, Task

logger = logging.getLogger(__name__)

RECORD_KINDS = ("staff", "categories", "projects", "tasks")

ModelT = TypeVar("ModelT", bound=BaseModel)


class RecordStoreError(Exception):
    """Base exception for record store errors."""


class RecordFileCorruptedError(RecordStoreError):
    """Raised when the record file is not a valid JSON object."""


class RecordNotFoundError(RecordStoreError):
    """Raised when a record id does not exist."""

    def __init__(self, kind: str, record_id: str) -> None:
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"No {kind} record with id '{record_id}'")


@runtime_checkable
class RecordStore(Protocol):
    """
    Protocol for record store implementations.

    Stores provide create/read/update/delete for each record kind. They do
    not validate scheduling rules such as interval ordering.
    """

    def list_tasks(self, assignee_id: str | None = None) -> list[Task]:
        """List tasks, optionally only those assigned to one staff member."""
        ...

    def get_task(self, task_id: str) -> Task | None:
        """Get a task by id, or None if it does not exist."""
        ...

    def create_task(
        self,
        title: str,
        assignee_id: str,
        start_date: datetime,
        end_date: datetime,
        project_id: str = "",
        category_id: str = "",
        duration: float = 0.0,
    ) -> Task:
        """Create a task with a store-generated id."""
        ...

    def update_task(self, task: Task) -> Task:
        """Replace an existing task. Raises RecordNotFoundError if missing."""
        ...

    def delete_task(self, task_id: str) -> None:
        """Delete a task. Raises RecordNotFoundError if missing."""
        ...

    def list_staff(self) -> list[Staff]:
        """List staff members in roster order."""
        ...

    def get_staff(self, staff_id: str) -> Staff | None:
        """Get a staff member by id, or None if it does not exist."""
        ...

    def save_staff(self, staff: Staff) -> Staff:
        """Insert or replace a staff member."""
        ...

    def delete_staff(self, staff_id: str) -> int:
        """
        Delete a staff member together with their tasks.

        Returns the number of tasks removed. Raises RecordNotFoundError if
        the staff member is missing.
        """
        ...

    def list_categories(self) -> list[Category]:
        """List task categories."""
        ...

    def get_category(self, category_id: str) -> Category | None:
        """Get a category by id, or None if it does not exist."""
        ...

    def save_category(self, category: Category) -> Category:
        """Insert or replace a category."""
        ...

    def delete_category(self, category_id: str) -> None:
        """Delete a category. Raises RecordNotFoundError if missing."""
        ...

    def list_projects(self) -> list[Project]:
        """List client projects."""
        ...

    def get_project(self, project_id: str) -> Project | None:
        """Get a project by id, or None if it does not exist."""
        ...

    def save_project(self, project: Project) -> Project:
        """Insert or replace a project."""
        ...

    def delete_project(self, project_id: str) -> None:
        """Delete a project. Raises RecordNotFoundError if missing."""
        ...


class JsonRecordStore:
    """
    Record store backed by a single JSON file.

    File format:
        {
            "staff": [{"id": "s1", "name": "Aiko", "role": "designer"}],
            "categories": [{"id": "c1", "name": "Design", "color": "#FF9500"}],
            "projects": [{"id": "p1", "name": "Launch", "priority": "S", ...}],
            "tasks": [
                {
                    "id": "task-001",
                    "title": "Key visual",
                    "assignee_id": "s1",
                    "start_date": "2024-05-01T00:00:00",
                    "end_date": "2024-05-03T00:00:00",
                    ...
                }
            ]
        }

    Writes go through a temporary file and an atomic rename. Reads are
    cached until the file's mtime changes.

    Example:
        >>> store = JsonRecordStore(Path("staffline.json"))
        >>> tasks = store.list_tasks(assignee_id="s1")
    """

    def __init__(self, path: Path):
        """
        Initialize the store.

        Args:
            path: Path to the JSON record file (created on first write)
        """
        self.path = Path(path)
        self._cache: dict[str, Any] | None = None
        self._cache_mtime: float | None = None

    # ------------------------------------------------------------------
    # File handling
    # ------------------------------------------------------------------

    def _load(self) -> dict[str, Any]:
        """
        Load and parse the record file with caching.

        A missing file reads as an empty store.

        Raises:
            RecordFileCorruptedError: If the file is not a JSON object
        """
        if not self.path.exists():
            return {kind: [] for kind in RECORD_KINDS}

        current_mtime = os.path.getmtime(self.path)
        if self._cache is not None and self._cache_mtime == current_mtime:
            return self._cache

        logger.debug("Loading records from %s", self.path)
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise RecordFileCorruptedError(f"Failed to parse {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise RecordFileCorruptedError(f"{self.path} must contain a JSON object")
        for kind in RECORD_KINDS:
            if not isinstance(data.get(kind), list):
                data[kind] = []

        self._cache = data
        self._cache_mtime = current_mtime
        return data

    def _save(self, data: dict[str, Any]) -> None:
        """Write the record file atomically."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, temp_path = tempfile.mkstemp(
            dir=self.path.parent, prefix=".staffline_", suffix=".json.tmp"
        )

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
                f.write("\n")

            os.replace(temp_path, self.path)

            self._cache = None
            self._cache_mtime = None

        except Exception:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise

    def _parse_all(self, kind: str, model: type[ModelT]) -> list[ModelT]:
        records: list[ModelT] = []
        for raw in self._load()[kind]:
            try:
                records.append(model.model_validate(raw))
            except ValidationError as e:
                logger.warning(
                    "Skipping malformed %s record %r: %s",
                    kind,
                    raw.get("id") if isinstance(raw, dict) else raw,
                    e.errors()[0]["msg"],
                )
        return records

    def _upsert(self, kind: str, record: BaseModel) -> None:
        data = self._load()
        # Copy so a failed save leaves the cache untouched
        rows = list(data[kind])
        dumped = record.model_dump(mode="json")
        for index, raw in enumerate(rows):
            if isinstance(raw, dict) and raw.get("id") == dumped["id"]:
                rows[index] = dumped
                break
        else:
            rows.append(dumped)
        self._save({**data, kind: rows})

    def _without(self, data: dict[str, Any], kind: str, record_id: str) -> list[Any]:
        """Rows of kind minus record_id; raises RecordNotFoundError if it was absent."""
        rows = [
            raw for raw in data[kind] if not (isinstance(raw, dict) and raw.get("id") == record_id)
        ]
        if len(rows) == len(data[kind]):
            raise RecordNotFoundError(kind, record_id)
        return rows

    def _next_task_id(self) -> str:
        existing_ids = {
            raw.get("id", "") for raw in self._load()["tasks"] if isinstance(raw, dict)
        }
        task_num = 1
        while True:
            task_id = f"task-{task_num:03d}"
            if task_id not in existing_ids:
                return task_id
            task_num += 1

    # ------------------------------------------------------------------
    # Tasks
    # ------------------------------------------------------------------

    def list_tasks(self, assignee_id: str | None = None) -> list[Task]:
        tasks = self._parse_all("tasks", Task)
        if assignee_id is not None:
            tasks = [task for task in tasks if task.assignee_id == assignee_id]
        return tasks

    def get_task(self, task_id: str) -> Task | None:
        for task in self.list_tasks():
            if task.id == task_id:
                return task
        return None

    def create_task(
        self,
        title: str,
        assignee_id: str,
        start_date: datetime,
        end_date: datetime,
        project_id: str = "",
        category_id: str = "",
        duration: float = 0.0,
    ) -> Task:
        task = Task(
            id=self._next_task_id(),
            title=title,
            project_id=project_id,
            assignee_id=assignee_id,
            category_id=category_id,
            start_date=start_date,
            end_date=end_date,
            duration=duration,
        )
        self._upsert("tasks", task)
        logger.debug("Created task %s for %s", task.id, assignee_id)
        return task

    def update_task(self, task: Task) -> Task:
        if self.get_task(task.id) is None:
            raise RecordNotFoundError("tasks", task.id)
        self._upsert("tasks", task)
        return task

    def delete_task(self, task_id: str) -> None:
        data = self._load()
        self._save({**data, "tasks": self._without(data, "tasks", task_id)})

    # ------------------------------------------------------------------
    # Staff, categories, and projects
    # ------------------------------------------------------------------

    def list_staff(self) -> list[Staff]:
        return self._parse_all("staff", Staff)

    def get_staff(self, staff_id: str) -> Staff | None:
        for member in self.list_staff():
            if member.id == staff_id:
                return member
        return None

    def save_staff(self, staff: Staff) -> Staff:
        self._upsert("staff", staff)
        return staff

    def delete_staff(self, staff_id: str) -> int:
        data = self._load()
        staff = self._without(data, "staff", staff_id)
        tasks = [
            raw
            for raw in data["tasks"]
            if not (isinstance(raw, dict) and raw.get("assignee_id") == staff_id)
        ]
        removed = len(data["tasks"]) - len(tasks)
        self._save({**data, "staff": staff, "tasks": tasks})
        logger.debug("Deleted staff %s and %d task(s)", staff_id, removed)
        return removed

    def list_categories(self) -> list[Category]:
        return self._parse_all("categories", Category)

    def get_category(self, category_id: str) -> Category | None:
        for category in self.list_categories():
            if category.id == category_id:
                return category
        return None

    def save_category(self, category: Category) -> Category:
        self._upsert("categories", category)
        return category

    def delete_category(self, category_id: str) -> None:
        data = self._load()
        self._save({**data, "categories": self._without(data, "categories", category_id)})

    def list_projects(self) -> list[Project]:
        return self._parse_all("projects", Project)

    def get_project(self, project_id: str) -> Project | None:
        for project in self.list_projects():
            if project.id == project_id:
                return project
        return None

    def save_project(self, project: Project) -> Project:
        self._upsert("projects", project)
        return project

    def delete_project(self, project_id: str) -> None:
        data = self._load()
        self._save({**data, "projects": self._without(data, "projects", project_id)})
