"""
.env support for staffline settings.

STAFFLINE_* variables may live in .env files as well as in the shell. Files
are read lowest precedence first (user, project .env, project .env.local),
later files win over earlier ones, and no file overrides a variable the
shell already exports.
"""

import logging
import os
from collections.abc import Sequence
from pathlib import Path

from dotenv import dotenv_values

from .loader import get_xdg_config_home

logger = logging.getLogger(__name__)


def env_file_paths(project_dir: Path | None = None) -> list[Path]:
    """Candidate .env files, lowest precedence first."""
    project_dir = project_dir or Path.cwd()
    return [
        get_xdg_config_home() / "staffline" / ".env",
        project_dir / ".env",
        project_dir / ".env.local",
    ]


def load_layered_env(
    project_dir: Path | None = None,
    paths: Sequence[Path] | None = None,
) -> dict[str, str]:
    """
    Export variables from .env files into os.environ.

    Args:
        project_dir: Directory holding the project .env files (defaults to cwd)
        paths: Explicit files to read instead of env_file_paths(project_dir)

    Returns:
        The variables that were actually set
    """
    layered: dict[str, str] = {}
    for path in env_file_paths(project_dir) if paths is None else paths:
        if path.is_file():
            layered.update({k: v for k, v in dotenv_values(path).items() if v is not None})

    applied = {key: value for key, value in layered.items() if key not in os.environ}
    os.environ.update(applied)

    if applied:
        logger.debug("Loaded %s from .env files", ", ".join(sorted(applied)))
    return applied
