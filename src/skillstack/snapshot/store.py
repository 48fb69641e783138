"""
Backend store access for SkillStack snapshots.

Reads the exported skill summaries (YAML or JSON) that a snapshot is built
from.
"""

import json
from pathlib import Path
from typing import Any

import yaml

from skillstack.search.exceptions import SnapshotBuildError


def load_summaries(path: Path) -> list[dict[str, Any]]:
    """Load skill summaries from a store export.

    The export is a list of summaries, or a mapping with a ``skills`` list.
    Files ending in .json are parsed as JSON, anything else as YAML.

    Args:
        path: Path to the store export.

    Returns:
        The summaries, in file order.

    Raises:
        SnapshotBuildError: If the file is missing, unreadable, or not a list.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise SnapshotBuildError(f"Skill store not found: {path}", str(path)) from e
    except OSError as e:
        raise SnapshotBuildError(f"Cannot read {path}: {e}", str(path)) from e

    try:
        if path.suffix.lower() == ".json":
            data = json.loads(content)
        else:
            data = yaml.safe_load(content)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise SnapshotBuildError(f"Invalid skill store {path}: {e}", str(path)) from e

    if data is None:
        return []
    if isinstance(data, dict):
        data = data.get("skills", [])
    if not isinstance(data, list):
        raise SnapshotBuildError(f"Skill store must contain a list of skills: {path}", str(path))

    return data
