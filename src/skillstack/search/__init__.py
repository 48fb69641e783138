"""
SkillStack search subsystem.

Client-side full-text search over a published skill snapshot:
- SearchIndex: inverted index over skill names, built or reconstructed
- SearchEngine: fuzzy/prefix matching with install-count tie-breaking
- SearchController: lazy loading and debounced querying

Usage:
    from skillstack.search import SearchController
    from skillstack.snapshot import SnapshotClient

    client = SnapshotClient("https://example.com/api/skill-summaries")
    async with SearchController(client.fetch, on_change=render) as controller:
        controller.focus()
        controller.set_query("react hooks")
"""

# Models
from skillstack.search.models import (
    QueryResult,
    SearchableRecord,
    SnapshotRecord,
)

# Exceptions
from skillstack.search.exceptions import (
    IndexFormatError,
    SearchError,
    SnapshotBuildError,
    SnapshotFetchError,
)

# Index
from skillstack.search.index import (
    INDEX_FORMAT_VERSION,
    SearchIndex,
    tokenize,
)

# Engine
from skillstack.search.engine import (
    MAX_RESULTS,
    SearchEngine,
    edit_distance,
    max_edits,
    search,
)

# Controller
from skillstack.search.controller import (
    INDEX_UNAVAILABLE,
    LoadState,
    SearchController,
    SearchView,
)

__all__ = [
    # Models
    "QueryResult",
    "SearchableRecord",
    "SnapshotRecord",
    # Exceptions
    "IndexFormatError",
    "SearchError",
    "SnapshotBuildError",
    "SnapshotFetchError",
    # Index
    "INDEX_FORMAT_VERSION",
    "SearchIndex",
    "tokenize",
    # Engine
    "MAX_RESULTS",
    "SearchEngine",
    "edit_distance",
    "max_edits",
    "search",
    # Controller
    "INDEX_UNAVAILABLE",
    "LoadState",
    "SearchController",
    "SearchView",
]
