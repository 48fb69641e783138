"""
Search index for SkillStack.

Builds an in-memory inverted index over skill names from a snapshot, and
reconstructs one from its serialized form without re-tokenizing.
"""

import json
import logging
import re
from bisect import bisect_left
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError

from skillstack.search.exceptions import IndexFormatError
from skillstack.search.models import STORED_FIELDS, SearchableRecord

logger = logging.getLogger(__name__)

INDEX_FORMAT_VERSION = 1
INDEXED_FIELDS = ("name",)

# Underscore counts as a boundary even though \w treats it as a word character.
_TOKEN_SPLIT = re.compile(r"[\W_]+")


def tokenize(text: str) -> list[str]:
    """Split text into case-folded alphanumeric tokens.

    Args:
        text: Text to tokenize.

    Returns:
        Tokens in order of appearance, empty tokens dropped.

    Examples:
        >>> tokenize("React Hooks-Guide_v2")
        ['react', 'hooks', 'guide', 'v2']
    """
    return [token for token in _TOKEN_SPLIT.split(text.casefold()) if token]


class SearchIndex:
    """Inverted index over record names with a side table of stored fields.

    Instances are never mutated after construction. Rebuilding produces a
    new index that replaces the old one wholesale.
    """

    def __init__(
        self,
        documents: list[dict[str, Any]],
        terms: dict[str, dict[int, int]],
    ):
        """Initialize from already-validated structures.

        Use ``build``, ``from_dict`` or ``load`` instead of calling this
        directly.

        Args:
            documents: Stored fields keyed by internal id (list position).
            terms: Map of token to {internal id: term frequency}.
        """
        self._documents = documents
        self._terms = terms
        self._vocabulary = sorted(terms)

    def __len__(self) -> int:
        return len(self._documents)

    def __repr__(self) -> str:
        return f"SearchIndex(documents={len(self._documents)}, tokens={len(self._terms)})"

    @property
    def vocabulary(self) -> list[str]:
        """Get all indexed tokens in sorted order."""
        return self._vocabulary

    def document(self, doc_id: int) -> dict[str, Any]:
        """Get a copy of the stored fields for an internal id."""
        doc = self._documents[doc_id]
        return {**doc, "technologies": list(doc["technologies"])}

    def postings(self, token: str) -> dict[int, int]:
        """Get the internal ids (and term frequencies) containing a token."""
        return self._terms.get(token, {})

    def tokens_with_prefix(self, prefix: str) -> list[str]:
        """Get indexed tokens starting with prefix, in sorted order."""
        start = bisect_left(self._vocabulary, prefix)
        matches = []
        for token in self._vocabulary[start:]:
            if not token.startswith(prefix):
                break
            matches.append(token)
        return matches

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def build(cls, records: Iterable[Mapping[str, Any] | SearchableRecord]) -> "SearchIndex":
        """Build an index from snapshot records.

        Malformed records and records repeating an already indexed
        (source, skillId) pair are skipped and logged.

        Args:
            records: Snapshot records, as dicts or models.

        Returns:
            The built index (empty if no records were accepted).
        """
        documents: list[dict[str, Any]] = []
        terms: dict[str, dict[int, int]] = {}
        seen: set[tuple[str, str]] = set()
        skipped = 0

        for position, raw in enumerate(records):
            try:
                if isinstance(raw, SearchableRecord):
                    record = raw
                else:
                    record = SearchableRecord.from_wire(raw)
            except ValidationError as e:
                skipped += 1
                logger.warning(
                    f"Skipping malformed snapshot record at position {position}: "
                    f"{e.error_count()} invalid field(s)"
                )
                continue

            if record.key in seen:
                skipped += 1
                logger.warning(f"Skipping duplicate snapshot record {record.source}/{record.record_id}")
                continue
            seen.add(record.key)

            doc_id = len(documents)
            documents.append(record.stored_fields())
            for token in tokenize(record.name):
                postings = terms.setdefault(token, {})
                postings[doc_id] = postings.get(doc_id, 0) + 1

        logger.debug(f"Built search index: {len(documents)} records, {len(terms)} tokens, {skipped} skipped")
        return cls(documents, terms)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SearchIndex":
        """Reconstruct an index from its serialized form.

        Args:
            data: Dictionary produced by ``to_dict``.

        Returns:
            The reconstructed index.

        Raises:
            IndexFormatError: If the data is not a valid serialized index.
        """
        version = data.get("version")
        if version != INDEX_FORMAT_VERSION:
            raise IndexFormatError(f"Unsupported index format version: {version!r}")

        fields = data.get("fields")
        if fields != list(INDEXED_FIELDS):
            raise IndexFormatError(f"Unsupported indexed fields: {fields!r}")

        raw_documents = data.get("documents")
        raw_terms = data.get("terms")
        if not isinstance(raw_documents, list) or not isinstance(raw_terms, dict):
            raise IndexFormatError("Serialized index requires 'documents' list and 'terms' mapping")

        count = data.get("documentCount", len(raw_documents))
        if count != len(raw_documents):
            raise IndexFormatError(f"documentCount is {count!r} but {len(raw_documents)} document(s) present")

        documents = []
        seen: set[tuple[str, str]] = set()
        for position, raw in enumerate(raw_documents):
            try:
                record = SearchableRecord.from_wire(raw)
            except ValidationError as e:
                raise IndexFormatError(f"Invalid document at position {position}: {e}") from e
            if record.key in seen:
                raise IndexFormatError(
                    f"Duplicate document {record.source}/{record.record_id} at position {position}"
                )
            seen.add(record.key)
            documents.append(record.stored_fields())

        terms: dict[str, dict[int, int]] = {}
        try:
            for token, postings in raw_terms.items():
                terms[str(token)] = {int(doc_id): int(tf) for doc_id, tf in postings.items()}
        except (AttributeError, TypeError, ValueError) as e:
            raise IndexFormatError(f"Invalid term postings: {e}") from e

        for token, postings in terms.items():
            for doc_id in postings:
                if not 0 <= doc_id < len(documents):
                    raise IndexFormatError(f"Token {token!r} references unknown document {doc_id}")

        return cls(documents, terms)

    @classmethod
    def from_json(cls, text: str | bytes) -> "SearchIndex":
        """Reconstruct an index from a JSON document."""
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise IndexFormatError(f"Invalid index JSON: {e}") from e
        if not isinstance(data, dict):
            raise IndexFormatError("Serialized index must be a JSON object")
        return cls.from_dict(data)

    @classmethod
    def load(cls, payload: Any) -> "SearchIndex":
        """Create an index from a fetched snapshot payload.

        A list is a snapshot and gets built; a mapping is a precomputed
        serialized index and gets reconstructed. Strings are parsed as JSON
        first.

        Raises:
            IndexFormatError: If the payload has neither shape.
        """
        if isinstance(payload, (str, bytes)):
            try:
                payload = json.loads(payload)
            except json.JSONDecodeError as e:
                raise IndexFormatError(f"Invalid snapshot JSON: {e}") from e

        if isinstance(payload, list):
            return cls.build(payload)
        if isinstance(payload, Mapping):
            return cls.from_dict(payload)
        raise IndexFormatError(f"Unsupported snapshot payload: {type(payload).__name__}")

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Serialize the index to a JSON-compatible dictionary."""
        return {
            "version": INDEX_FORMAT_VERSION,
            "fields": list(INDEXED_FIELDS),
            "storeFields": list(STORED_FIELDS),
            "documentCount": len(self._documents),
            "documents": [self.document(doc_id) for doc_id in range(len(self._documents))],
            "terms": {
                token: {str(doc_id): tf for doc_id, tf in sorted(self._terms[token].items())}
                for token in self._vocabulary
            },
        }

    def to_json(self, indent: int | None = None) -> str:
        """Serialize the index to a JSON string."""
        return json.dumps(self.to_dict(), indent=indent)
