"""
Path utilities for SkillStack.

Provides consistent path resolution for configuration and published
snapshot files.
"""

import os
from pathlib import Path


def get_skillstack_home() -> Path:
    """
    Get the SkillStack home directory.

    Resolution order:
    1. SKILLSTACK_HOME environment variable
    2. Default: ~/.skillstack

    Returns:
        Path to the SkillStack home directory.
    """
    env_home = os.environ.get("SKILLSTACK_HOME")
    if env_home:
        return Path(env_home).expanduser().resolve()
    return Path.home() / ".skillstack"


def get_global_config_path() -> Path:
    """
    Get the path to the global configuration file.

    Returns:
        Path to ~/.skillstack/config.yaml
    """
    return get_skillstack_home() / "config.yaml"


def get_default_snapshot_path() -> Path:
    """
    Get the default published snapshot path.

    Returns:
        Path to ~/.skillstack/skill-summaries.json
    """
    return get_skillstack_home() / "skill-summaries.json"


def get_default_store_path() -> Path:
    """
    Get the default skill store export path.

    Returns:
        Path to ~/.skillstack/skills.yaml
    """
    return get_skillstack_home() / "skills.yaml"


def find_project_config(start_path: Path | None = None) -> Path | None:
    """
    Find the project configuration file by traversing up the directory tree.

    Looks for .skillstack/project.yaml starting from the given path
    (or current directory) and moving up to the root.

    Args:
        start_path: Starting directory to search from. Defaults to cwd.

    Returns:
        Path to the project config if found, None otherwise.
    """
    current = Path.cwd() if start_path is None else Path(start_path).resolve()

    while True:
        project_config = current / ".skillstack" / "project.yaml"
        if project_config.exists():
            return project_config
        if current == current.parent:
            return None
        current = current.parent


def expand_path(path: str | Path) -> Path:
    """
    Expand a path string, handling ~ and environment variables.

    Args:
        path: Path string or Path object.

    Returns:
        Expanded and resolved Path.
    """
    if isinstance(path, str):
        path = os.path.expandvars(path)
        path = os.path.expanduser(path)
    return Path(path).resolve()
