"""
SkillStack snapshot publishing and loading.

Usage:
    from skillstack.snapshot import build_snapshot, load_summaries, write_snapshot

    snapshot = build_snapshot(load_summaries(Path("skills.yaml")))
    write_snapshot(snapshot, Path("public/skill-summaries.json"))
"""

from skillstack.snapshot.builder import (
    CACHE_CONTROL,
    SNAPSHOT_MAX_AGE,
    build_snapshot,
    refresh_snapshot,
    snapshot_is_stale,
    write_snapshot,
)
from skillstack.snapshot.client import SnapshotClient
from skillstack.snapshot.store import load_summaries

__all__ = [
    "CACHE_CONTROL",
    "SNAPSHOT_MAX_AGE",
    "SnapshotClient",
    "build_snapshot",
    "load_summaries",
    "refresh_snapshot",
    "snapshot_is_stale",
    "write_snapshot",
]
