"""
Debounce and lazy-load controller for SkillStack search.

Bridges raw input events to the query engine:
- the snapshot is fetched on first focus, once, and built into an index
- keystrokes update a live value; a committed value follows after the
  input settles, and only the committed value is searched
- the "/" hotkey focuses search outside text-entry elements

Everything runs on a single asyncio event loop. The controller owns its
index, its debounce timer and its fetch task, and releases them on dispose.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from skillstack.search.engine import SearchEngine
from skillstack.search.exceptions import SearchError
from skillstack.search.index import SearchIndex
from skillstack.search.models import QueryResult

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_MS = 200
INDEX_UNAVAILABLE = "Search index unavailable"
SEARCH_HOTKEY = "/"
TEXT_ENTRY_ELEMENTS = frozenset({"input", "textarea"})


class LoadState(Enum):
    """Index lifecycle states."""

    UNLOADED = "unloaded"
    LOADING = "loading"
    READY = "ready"


@dataclass(frozen=True)
class SearchView:
    """What a renderer consumes from the controller."""

    results: list[QueryResult] = field(default_factory=list)
    is_loading: bool = False
    # Queries run synchronously once the index is ready.
    is_pending: bool = False
    error: str | None = None
    query: str = ""


class SearchController:
    """Owns the search index and mediates between input events and queries.

    States:
        UNLOADED: no index; ``focus`` starts a fetch.
        LOADING: fetch in flight; further ``focus`` calls are no-ops.
        READY: index built; queries are answered synchronously.

    A failed fetch returns to UNLOADED so the next focus retries.
    """

    def __init__(
        self,
        fetch_snapshot: Callable[[], Awaitable[Any]],
        debounce_ms: int = DEFAULT_DEBOUNCE_MS,
        on_change: Callable[[SearchView], None] | None = None,
        engine: SearchEngine | None = None,
    ):
        """Initialize the controller.

        Args:
            fetch_snapshot: Coroutine function returning the snapshot payload
                (a record list or a serialized index).
            debounce_ms: Settle delay before a typed query is committed.
            on_change: Called with a fresh SearchView whenever it changes.
            engine: Query engine (default: SearchEngine()).
        """
        if debounce_ms < 0:
            raise ValueError(f"debounce_ms must be >= 0: {debounce_ms}")

        self._fetch_snapshot = fetch_snapshot
        self._debounce = debounce_ms / 1000
        self._on_change = on_change
        self._engine = engine or SearchEngine()

        self._state = LoadState.UNLOADED
        self._index: SearchIndex | None = None
        self._load_task: asyncio.Task | None = None
        self._timer: asyncio.TimerHandle | None = None
        self._disposed = False

        self._live_query = ""
        self._committed_query = ""
        self._results: list[QueryResult] = []
        self._error: str | None = None

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def state(self) -> LoadState:
        """Get the index lifecycle state."""
        return self._state

    @property
    def index(self) -> SearchIndex | None:
        """Get the built index, if ready."""
        return self._index

    @property
    def live_query(self) -> str:
        """Get the value as last typed."""
        return self._live_query

    @property
    def committed_query(self) -> str:
        """Get the settled value that queries run against."""
        return self._committed_query

    @property
    def results(self) -> list[QueryResult]:
        """Get the results for the committed query."""
        return list(self._results)

    @property
    def error(self) -> str | None:
        """Get the last load error message, if any."""
        return self._error

    @property
    def disposed(self) -> bool:
        return self._disposed

    @property
    def view(self) -> SearchView:
        """Get the current renderer view."""
        return SearchView(
            results=list(self._results),
            is_loading=self._state is LoadState.LOADING,
            is_pending=False,
            error=self._error,
            query=self._live_query,
        )

    # -------------------------------------------------------------------------
    # Lazy loading
    # -------------------------------------------------------------------------

    def focus(self) -> None:
        """Handle focus on the search input.

        Starts the snapshot fetch on first use. Must be called from within
        the running event loop.
        """
        if self._disposed or self._state is not LoadState.UNLOADED:
            return

        self._state = LoadState.LOADING
        self._error = None
        self._load_task = asyncio.get_running_loop().create_task(self._load())
        logger.debug("Search index loading")
        self._notify()

    async def wait_until_ready(self) -> bool:
        """Wait for an in-flight load to finish.

        Returns:
            True if the index is ready.
        """
        task = self._load_task
        if task is not None and not task.done():
            try:
                await asyncio.shield(task)
            except asyncio.CancelledError:
                if not task.cancelled():
                    raise
        return self._state is LoadState.READY

    async def _load(self) -> None:
        """Fetch the snapshot and build the index."""
        try:
            payload = await self._fetch_snapshot()
            index = SearchIndex.load(payload)
        except SearchError as e:
            self._fail(f"Search index unavailable: {e}")
            return
        except Exception as e:
            self._fail(f"Unexpected error loading search index: {e}")
            return

        if self._disposed:
            return

        self._index = index
        self._state = LoadState.READY
        self._load_task = None
        logger.info(f"Search index ready ({len(index)} records)")
        self._refresh()

    def _fail(self, message: str) -> None:
        """Revert to UNLOADED after a failed load."""
        if self._disposed:
            return
        logger.warning(message)
        self._state = LoadState.UNLOADED
        self._load_task = None
        self._error = INDEX_UNAVAILABLE
        self._notify()

    # -------------------------------------------------------------------------
    # Input
    # -------------------------------------------------------------------------

    def set_query(self, value: str) -> None:
        """Handle a keystroke.

        Updates the live value now and schedules the committed value.
        Clearing a non-empty query commits immediately.

        Args:
            value: Full current input value.
        """
        if self._disposed:
            return

        previous = self._live_query
        self._live_query = value
        self._cancel_timer()

        cleared = not value.strip() and bool(previous.strip() or self._committed_query.strip())
        if cleared or self._debounce == 0:
            self._commit(value)
            return

        self._timer = asyncio.get_running_loop().call_later(self._debounce, self._commit, value)
        self._notify()

    def flush(self) -> None:
        """Commit a pending debounced value now."""
        if self._timer is None or self._disposed:
            return
        self._cancel_timer()
        self._commit(self._live_query)

    def clear(self) -> None:
        """Handle the clear-search action."""
        self.set_query("")

    def handle_key(
        self,
        key: str,
        active_element: str | None = None,
        ctrl: bool = False,
        meta: bool = False,
    ) -> bool:
        """Handle a global key press.

        Args:
            key: The key pressed.
            active_element: Tag name of the focused element, if any.
            ctrl: Whether Ctrl is held.
            meta: Whether Meta/Cmd is held.

        Returns:
            True if the key was consumed to focus search.
        """
        if key != SEARCH_HOTKEY or ctrl or meta or self._disposed:
            return False
        if active_element and active_element.lower() in TEXT_ENTRY_ELEMENTS:
            return False
        self.focus()
        return True

    def _commit(self, value: str) -> None:
        self._timer = None
        if self._disposed:
            return
        self._committed_query = value
        self._refresh()

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    # -------------------------------------------------------------------------
    # Results
    # -------------------------------------------------------------------------

    def _refresh(self) -> None:
        """Re-run the committed query against the current index."""
        if self._state is LoadState.READY and self._index is not None:
            self._results = self._engine.search(self._index, self._committed_query)
        else:
            self._results = []
        self._notify()

    def _notify(self) -> None:
        if self._on_change is not None and not self._disposed:
            self._on_change(self.view)

    # -------------------------------------------------------------------------
    # Teardown
    # -------------------------------------------------------------------------

    def dispose(self) -> None:
        """Release the timer and any in-flight fetch.

        No state is applied and no callback fires after this.
        """
        if self._disposed:
            return
        self._disposed = True
        self._cancel_timer()
        if self._load_task is not None and not self._load_task.done():
            self._load_task.cancel()
        self._load_task = None
        logger.debug("Search controller disposed")

    async def __aenter__(self) -> "SearchController":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        self.dispose()
