"""
Pytest configuration and shared fixtures.

Provides fixtures for temp project directories, sample staff/categories/tasks,
a populated JSON record store, and environment isolation.
"""

import json
from datetime import datetime

import pytest

from staffline.core.config import clear_cache
from staffline.core.tasks.models import Category, Staff, StaffRole, Task
from staffline.core.tasks.store import JsonRecordStore

# ==============================================================================
# Environment Isolation
# ==============================================================================


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep user config, .env files and STAFFLINE_* vars out of every test."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    for var in (
        "STAFFLINE_STORE_PATH",
        "STAFFLINE_ON_INVALID",
        "STAFFLINE_ROW_HEIGHT",
        "STAFFLINE_DEFAULT_VIEW",
    ):
        monkeypatch.delenv(var, raising=False)
    clear_cache()
    yield
    clear_cache()


# ==============================================================================
# Directory Fixtures
# ==============================================================================


@pytest.fixture
def project_dir(tmp_path):
    """Provide an empty project directory."""
    project = tmp_path / "project"
    project.mkdir()
    return project


# ==============================================================================
# Sample Data Fixtures
# ==============================================================================


def _day(n: int, hour: int = 0) -> datetime:
    """Midnight (or the given hour) of day n in May 2024."""
    return datetime(2024, 5, n, hour)


@pytest.fixture
def sample_staff():
    """Provide a two-person roster."""
    return [
        Staff(id="s1", name="Aiko", role=StaffRole.DESIGNER),
        Staff(id="s2", name="Ren", role=StaffRole.ENGINEER),
    ]


@pytest.fixture
def sample_categories():
    """Provide two categories with distinct colors."""
    return [
        Category(id="c1", name="Design", color="#FF9500"),
        Category(id="c2", name="Build", color="#34C759"),
    ]


@pytest.fixture
def sample_tasks():
    """
    Provide tasks for s1 and s2.

    s1 has two overlapping tasks and one that follows later;
    s2 has a single task.
    """
    return [
        Task(
            id="task-001",
            title="Key visual",
            assignee_id="s1",
            category_id="c1",
            start_date=_day(6),
            end_date=_day(8),
            duration=6.5,
        ),
        Task(
            id="task-002",
            title="Banner set",
            assignee_id="s1",
            category_id="c1",
            start_date=_day(7),
            end_date=_day(10),
            duration=4,
        ),
        Task(
            id="task-003",
            title="Thumbnail",
            assignee_id="s1",
            category_id="c2",
            start_date=_day(10),
            end_date=_day(11),
            duration=1.25,
            completed=True,
        ),
        Task(
            id="task-004",
            title="Landing page",
            assignee_id="s2",
            category_id="c2",
            start_date=_day(6),
            end_date=_day(9),
            duration=12,
        ),
    ]


@pytest.fixture
def store_path(project_dir, sample_staff, sample_categories, sample_tasks):
    """Write the sample records to staffline.json and return its path."""
    path = project_dir / "staffline.json"
    data = {
        "staff": [m.model_dump(mode="json") for m in sample_staff],
        "categories": [c.model_dump(mode="json") for c in sample_categories],
        "tasks": [t.model_dump(mode="json") for t in sample_tasks],
    }
    path.write_text(json.dumps(data, indent=2))
    return path


@pytest.fixture
def store(store_path):
    """Provide a JsonRecordStore over the sample records."""
    return JsonRecordStore(store_path)
