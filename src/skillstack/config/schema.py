"""
Pydantic configuration schema for SkillStack.

This module defines all configuration models with validation.
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from skillstack.storage.paths import (
    expand_path,
    get_default_snapshot_path,
    get_default_store_path,
)

# =============================================================================
# Search Configuration
# =============================================================================


class SearchConfig(BaseModel):
    """Query and input handling configuration."""

    model_config = ConfigDict(extra="allow")

    debounce_ms: int = Field(default=200, ge=0, le=1000)
    fuzzy_tolerance: float = Field(default=0.2, ge=0.0, le=1.0)


# =============================================================================
# Snapshot Configuration
# =============================================================================


class SnapshotConfig(BaseModel):
    """Snapshot publishing and loading configuration."""

    model_config = ConfigDict(extra="allow")

    # Remote snapshot URL; takes precedence over path when set
    url: str | None = None
    path: str | None = None
    store_path: str | None = None
    max_age_seconds: int = Field(default=86400, ge=0)
    timeout: float | None = Field(default=None, gt=0)
    precompute_index: bool = False


# =============================================================================
# Logging Configuration
# =============================================================================


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"


# =============================================================================
# Root Configuration
# =============================================================================


class Config(BaseModel):
    """Root SkillStack configuration."""

    model_config = ConfigDict(extra="allow")

    search: SearchConfig = Field(default_factory=SearchConfig)
    snapshot: SnapshotConfig = Field(default_factory=SnapshotConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    def get_snapshot_path(self) -> Path:
        """Get the published snapshot file path."""
        if self.snapshot.path:
            return expand_path(self.snapshot.path)
        return get_default_snapshot_path()

    def get_store_path(self) -> Path:
        """Get the skill store export path."""
        if self.snapshot.store_path:
            return expand_path(self.snapshot.store_path)
        return get_default_store_path()

    def get_snapshot_source(self) -> str:
        """Get where clients load the snapshot from (URL or file path)."""
        return self.snapshot.url or str(self.get_snapshot_path())
