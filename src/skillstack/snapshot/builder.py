"""
Snapshot builder for SkillStack.

Produces the flat, statically published list of searchable skills that
clients load into their search index, and regenerates it once it is older
than its cache lifetime.
"""

import json
import logging
import time
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from skillstack.search.exceptions import SnapshotBuildError
from skillstack.search.index import SearchIndex
from skillstack.search.models import SearchableRecord, SnapshotRecord
from skillstack.snapshot.store import load_summaries

logger = logging.getLogger(__name__)

# 24 hours, matching the daily regeneration schedule.
SNAPSHOT_MAX_AGE = 86400
CACHE_CONTROL = f"public, max-age={SNAPSHOT_MAX_AGE}"


def build_snapshot(summaries: Iterable[Any]) -> list[dict[str, Any]]:
    """Build a snapshot from skill summaries.

    Each summary is validated as a searchable record; malformed ones are
    skipped with a warning so the published file only holds records the
    index will accept. Records are ordered by installs (most installed
    first, stable for ties) and published as ``SnapshotRecord`` with a
    0-based positional id. Fields outside the record contract are dropped.

    Args:
        summaries: Skill summaries from the backend store.

    Returns:
        JSON-ready snapshot records.
    """
    records: list[SearchableRecord] = []
    for position, summary in enumerate(summaries):
        try:
            records.append(SearchableRecord.from_wire(summary))
        except ValidationError as e:
            logger.warning(
                f"Skipping malformed skill summary at position {position}: "
                f"{e.error_count()} invalid field(s)"
            )

    ordered = sorted(records, key=lambda record: record.installs, reverse=True)

    return [
        SnapshotRecord.from_wire({"id": position, **record.stored_fields()}).to_wire()
        for position, record in enumerate(ordered)
    ]


def write_snapshot(
    snapshot: list[dict[str, Any]],
    path: Path,
    precompute: bool = False,
) -> Path:
    """Publish a snapshot as a static JSON file.

    Args:
        snapshot: Records from ``build_snapshot``.
        path: Output file.
        precompute: Publish the serialized index instead of the record list,
            so clients skip tokenization.

    Returns:
        The written path.

    Raises:
        SnapshotBuildError: If the file cannot be written.
    """
    payload: Any = SearchIndex.build(snapshot).to_dict() if precompute else snapshot

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_suffix(path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
        tmp_path.replace(path)
    except OSError as e:
        raise SnapshotBuildError(f"Cannot write snapshot {path}: {e}", str(path)) from e

    logger.info(f"Wrote snapshot with {len(snapshot)} record(s) to {path}")
    return path


def snapshot_is_stale(path: Path, max_age: int = SNAPSHOT_MAX_AGE, now: float | None = None) -> bool:
    """Check whether a published snapshot needs regenerating.

    Args:
        path: Published snapshot file.
        max_age: Maximum age in seconds.
        now: Current timestamp (default: time.time()).

    Returns:
        True if the file is missing or older than max_age.
    """
    if not path.exists():
        return True
    current = time.time() if now is None else now
    return current - path.stat().st_mtime >= max_age


def refresh_snapshot(
    store_path: Path,
    output_path: Path,
    max_age: int = SNAPSHOT_MAX_AGE,
    force: bool = False,
    precompute: bool = False,
) -> bool:
    """Regenerate the published snapshot if it is stale.

    This is the entry point for the daily schedule.

    Args:
        store_path: Backend store export.
        output_path: Published snapshot file.
        max_age: Maximum age in seconds before regenerating.
        force: Regenerate regardless of age.
        precompute: Publish a serialized index.

    Returns:
        True if the snapshot was regenerated.

    Raises:
        SnapshotBuildError: If the store cannot be read or the file written.
    """
    if not force and not snapshot_is_stale(output_path, max_age):
        logger.debug(f"Snapshot {output_path} is fresh, skipping rebuild")
        return False

    snapshot = build_snapshot(load_summaries(store_path))
    write_snapshot(snapshot, output_path, precompute=precompute)
    return True
