"""
Query engine for SkillStack search.

Runs fuzzy and prefix matching of query terms against the tokens of a
built SearchIndex and ranks the matching records.

Scoring:
- exact token match: 1.0
- prefix match: 0.5 scaled by how much of the token the term covers
- fuzzy match within the edit budget: 0.45 / (1 + edits)

Each query term contributes its best weight against a record's tokens and
a record's score is the sum over terms. Equal scores are ordered by
installs (descending).
"""

import logging

from rapidfuzz import process
from rapidfuzz.distance import Levenshtein

from skillstack.search.index import SearchIndex, tokenize
from skillstack.search.models import QueryResult

logger = logging.getLogger(__name__)

MAX_RESULTS = 50
DEFAULT_FUZZY_TOLERANCE = 0.2

EXACT_WEIGHT = 1.0
PREFIX_WEIGHT = 0.5
FUZZY_WEIGHT = 0.45


def max_edits(term: str, tolerance: float = DEFAULT_FUZZY_TOLERANCE) -> int:
    """Get the number of edits a query term tolerates.

    Args:
        term: Query term.
        tolerance: Fraction of the term length allowed as edits.

    Returns:
        floor(tolerance * len(term)), or 0 for terms of length 1 or less.
    """
    if len(term) <= 1:
        return 0
    # Small epsilon keeps e.g. 0.2 * 5 from flooring to 0 on float error.
    return int(len(term) * tolerance + 1e-9)


def edit_distance(a: str, b: str, limit: int) -> int:
    """Levenshtein distance between a and b, bounded by limit.

    Returns:
        The distance, or limit + 1 if it exceeds the limit.
    """
    return Levenshtein.distance(a, b, score_cutoff=limit)


class SearchEngine:
    """Fuzzy/prefix query engine over a SearchIndex.

    Stateless apart from its tuning, so one engine can serve any number of
    indexes.
    """

    def __init__(self, tolerance: float = DEFAULT_FUZZY_TOLERANCE):
        """Initialize the engine.

        Args:
            tolerance: Fraction of term length allowed as fuzzy edits.
        """
        if not 0.0 <= tolerance <= 1.0:
            raise ValueError(f"Fuzzy tolerance must be between 0 and 1: {tolerance}")
        self.tolerance = tolerance

    def match_term(self, index: SearchIndex, term: str) -> dict[str, float]:
        """Find the indexed tokens matching one query term.

        Args:
            index: Index to match against.
            term: A single tokenized query term.

        Returns:
            Map of matching token to its best weight.
        """
        matches: dict[str, float] = {}
        budget = max_edits(term, self.tolerance)

        for token in index.tokens_with_prefix(term):
            if token == term:
                matches[token] = EXACT_WEIGHT
            else:
                matches[token] = PREFIX_WEIGHT * len(term) / len(token)

        if budget > 0:
            for token, distance, _ in process.extract_iter(
                term,
                index.vocabulary,
                scorer=Levenshtein.distance,
                score_cutoff=budget,
            ):
                weight = EXACT_WEIGHT if distance == 0 else FUZZY_WEIGHT / (1 + distance)
                if weight > matches.get(token, 0.0):
                    matches[token] = weight

        return matches

    def search(self, index: SearchIndex, query: str) -> list[QueryResult]:
        """Search an index.

        Args:
            index: Built index to search.
            query: Raw query string.

        Returns:
            Up to MAX_RESULTS ranked results. Empty for an empty or
            whitespace-only query.
        """
        terms = tokenize(query.strip())
        if not terms or len(index) == 0:
            return []

        scores: dict[int, float] = {}
        for term in terms:
            best: dict[int, float] = {}
            for token, weight in self.match_term(index, term).items():
                for doc_id in index.postings(token):
                    if weight > best.get(doc_id, 0.0):
                        best[doc_id] = weight
            for doc_id, weight in best.items():
                scores[doc_id] = scores.get(doc_id, 0.0) + weight

        ranked = sorted(
            ((round(score, 9), doc_id) for doc_id, score in scores.items()),
            key=lambda item: (-item[0], -index.document(item[1])["installs"], item[1]),
        )

        logger.debug(f"Query {query!r}: {len(ranked)} match(es)")
        return [
            QueryResult.model_validate({**index.document(doc_id), "score": score})
            for score, doc_id in ranked[:MAX_RESULTS]
        ]


_default_engine = SearchEngine()


def search(index: SearchIndex, query: str) -> list[QueryResult]:
    """Search an index with the default engine settings.

    Args:
        index: Built index to search.
        query: Raw query string.

    Returns:
        Ranked results, at most MAX_RESULTS.
    """
    return _default_engine.search(index, query)
