"""
Snapshot client for SkillStack.

Fetches the published snapshot over HTTP(S) or from a local file.
"""

import json
import logging
from pathlib import Path
from typing import Any

import httpx

from skillstack.search.exceptions import SnapshotFetchError
from skillstack.storage.paths import expand_path

logger = logging.getLogger(__name__)


class SnapshotClient:
    """Fetch a snapshot payload from a URL or path.

    The payload is returned as parsed JSON: either a list of snapshot
    records or a precomputed serialized index.
    """

    def __init__(self, source: str | Path, timeout: float | None = None):
        """Initialize the client.

        Args:
            source: http(s) URL or filesystem path of the snapshot.
            timeout: Request timeout in seconds (default: httpx default).
        """
        self.source = str(source)
        self.timeout = timeout

    @property
    def is_remote(self) -> bool:
        return self.source.startswith(("http://", "https://"))

    async def fetch(self) -> Any:
        """Fetch and parse the snapshot.

        Returns:
            Parsed JSON payload.

        Raises:
            SnapshotFetchError: On transport, HTTP status, or parse failure.
        """
        if self.is_remote:
            return await self._fetch_remote()
        return self._fetch_local()

    async def _fetch_remote(self) -> Any:
        client_kwargs: dict[str, Any] = {"follow_redirects": True}
        if self.timeout is not None:
            client_kwargs["timeout"] = self.timeout

        try:
            async with httpx.AsyncClient(**client_kwargs) as client:
                response = await client.get(self.source, headers={"Accept": "application/json"})
                response.raise_for_status()
        except httpx.TimeoutException as e:
            raise SnapshotFetchError(f"Snapshot request timed out: {e}", self.source) from e
        except httpx.HTTPStatusError as e:
            raise SnapshotFetchError(
                f"Snapshot request failed with HTTP {e.response.status_code}", self.source
            ) from e
        except httpx.HTTPError as e:
            raise SnapshotFetchError(f"Snapshot request failed: {e}", self.source) from e

        try:
            payload = response.json()
        except ValueError as e:
            raise SnapshotFetchError(f"Snapshot response is not valid JSON: {e}", self.source) from e

        logger.debug(f"Fetched snapshot from {self.source}")
        return payload

    def _fetch_local(self) -> Any:
        path = expand_path(self.source)
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            raise SnapshotFetchError(f"Snapshot file not found: {path}", self.source) from e
        except OSError as e:
            raise SnapshotFetchError(f"Cannot read snapshot {path}: {e}", self.source) from e
        except json.JSONDecodeError as e:
            raise SnapshotFetchError(f"Snapshot file is not valid JSON: {e}", self.source) from e
