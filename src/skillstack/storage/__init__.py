"""Storage utilities for SkillStack."""

from skillstack.storage.paths import (
    expand_path,
    find_project_config,
    get_default_snapshot_path,
    get_default_store_path,
    get_global_config_path,
    get_skillstack_home,
)

__all__ = [
    "expand_path",
    "find_project_config",
    "get_default_snapshot_path",
    "get_default_store_path",
    "get_global_config_path",
    "get_skillstack_home",
]
