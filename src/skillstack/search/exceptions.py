"""
Search exceptions for SkillStack.

Defines the errors raised while loading, building, and publishing the
search index.
"""


class SearchError(Exception):
    """Base exception for search subsystem errors."""

    pass


class SnapshotFetchError(SearchError):
    """Network or parse failure while loading the snapshot."""

    def __init__(self, message: str, source: str | None = None):
        super().__init__(message)
        self.source = source


class IndexFormatError(SearchError):
    """A payload that cannot be reconstructed into a search index."""

    pass


class SnapshotBuildError(SearchError):
    """The backend store could not be read while publishing a snapshot."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path
