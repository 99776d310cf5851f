"""
Configuration models and loading.

This module provides Pydantic models for staffline configuration
with multi-layer merging: defaults < user < project < env vars.
"""

from .loader import (
    clear_cache,
    get_project_config_path,
    get_user_config_path,
    get_xdg_config_home,
    load_config,
)
from .models import LanesConfig, StafflineConfig, StoreConfig, TimelineConfig

__all__ = [
    # Models
    "LanesConfig",
    "StafflineConfig",
    "StoreConfig",
    "TimelineConfig",
    # Loader functions
    "clear_cache",
    "get_project_config_path",
    "get_user_config_path",
    "get_xdg_config_home",
    "load_config",
]
