"""
SkillStack configuration.

Usage:
    from skillstack.config import load_config

    config = load_config()
    config.search.debounce_ms
"""

from skillstack.config.loader import (
    ConfigurationError,
    apply_env_overrides,
    get_config_sources,
    load_config,
    load_yaml_file,
)
from skillstack.config.merger import deep_merge, get_nested_value, set_nested_value
from skillstack.config.schema import (
    Config,
    LoggingConfig,
    SearchConfig,
    SnapshotConfig,
)

__all__ = [
    "Config",
    "ConfigurationError",
    "LoggingConfig",
    "SearchConfig",
    "SnapshotConfig",
    "apply_env_overrides",
    "deep_merge",
    "get_config_sources",
    "get_nested_value",
    "load_config",
    "load_yaml_file",
    "set_nested_value",
]
