"""
Configuration loader for SkillStack.

Layers, lowest precedence first:
1. Model defaults
2. ~/.skillstack/config.yaml
3. .skillstack/project.yaml in the working tree (searched upward)
4. SKILLSTACK_* environment variables
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from skillstack.config.merger import deep_merge, set_nested_value
from skillstack.config.schema import Config
from skillstack.storage.paths import find_project_config, get_global_config_path

logger = logging.getLogger(__name__)

ENV_PREFIX = "SKILLSTACK_"

# Read by storage.paths, not a config key
ENV_HOME = "SKILLSTACK_HOME"

_TRUE_WORDS = frozenset({"true", "yes", "on"})
_FALSE_WORDS = frozenset({"false", "no", "off"})


class ConfigurationError(Exception):
    """Raised when configuration loading or validation fails."""


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Read one config layer.

    A missing or empty file is an empty layer.

    Raises:
        ConfigurationError: If the file is unreadable, malformed, or not a mapping.
    """
    try:
        content = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read {path}: {e}") from e

    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ConfigurationError(f"Config file must contain a mapping: {path}")
    return content


def _resolve_env_key(config: dict[str, Any], parts: list[str]) -> str:
    """
    Map underscore-separated env parts onto existing config keys.

    Keys that contain underscores themselves (debounce_ms) are matched
    greedily against the current config level.

    Examples:
        >>> _resolve_env_key({"search": {"debounce_ms": 200}}, ["search", "debounce", "ms"])
        'search.debounce_ms'
    """
    path: list[str] = []
    current: Any = config
    i = 0

    while i < len(parts):
        for j in range(len(parts), i, -1):
            candidate = "_".join(parts[i:j])
            if isinstance(current, dict) and candidate in current:
                path.append(candidate)
                current = current[candidate]
                i = j
                break
        else:
            path.append("_".join(parts[i:]))
            break

    return ".".join(path)


def _parse_env_value(value: str) -> Any:
    """Coerce an env string to int, float, bool or a comma list; else keep it."""
    for cast in (int, float):
        try:
            return cast(value)
        except ValueError:
            pass

    lowered = value.strip().lower()
    if lowered in _TRUE_WORDS:
        return True
    if lowered in _FALSE_WORDS:
        return False

    if "," in value:
        return [item.strip() for item in value.split(",")]
    return value


def apply_env_overrides(config: dict[str, Any]) -> dict[str, Any]:
    """
    Apply SKILLSTACK_<SECTION>_<KEY> variables onto a config dictionary.

    SKILLSTACK_SEARCH_DEBOUNCE_MS=250 sets ``search.debounce_ms`` to 250.
    """
    for name, raw in os.environ.items():
        if not name.startswith(ENV_PREFIX) or name == ENV_HOME:
            continue

        parts = name[len(ENV_PREFIX) :].lower().split("_")
        key = _resolve_env_key(config, parts)
        logger.debug(f"Config override from {name}: {key}")
        config = set_nested_value(config, key, _parse_env_value(raw))

    return config


def load_config(
    project_path: Path | None = None,
    skip_project: bool = False,
    skip_env: bool = False,
) -> Config:
    """
    Load the effective configuration.

    Args:
        project_path: Where to start looking for a project config (default: cwd).
        skip_project: Ignore the project layer.
        skip_env: Ignore environment overrides.

    Raises:
        ConfigurationError: If any layer is unreadable or the result is invalid.
    """
    layers: list[dict[str, Any]] = [load_yaml_file(get_global_config_path())]

    if not skip_project:
        project_file = find_project_config(project_path)
        if project_file is not None:
            layers.append(load_yaml_file(project_file))

    merged = Config().model_dump()
    for layer in layers:
        merged = deep_merge(merged, layer)

    if not skip_env:
        merged = apply_env_overrides(merged)

    try:
        return Config.model_validate(merged)
    except ValidationError as e:
        raise ConfigurationError(f"Configuration validation failed: {e}") from e


def get_config_sources(project_path: Path | None = None) -> dict[str, Path | None]:
    """Map each config layer name to its file, or None when absent."""
    global_path = get_global_config_path()
    return {
        "global": global_path if global_path.exists() else None,
        "project": find_project_config(project_path),
    }
