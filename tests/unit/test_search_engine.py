"""
Unit tests for the SkillStack query engine.
"""

import pytest

from skillstack.search import (
    MAX_RESULTS,
    SearchEngine,
    SearchIndex,
    edit_distance,
    max_edits,
    search,
)


def _record(record_id: str, name: str, installs: int = 0, source: str = "a/b") -> dict:
    return {
        "source": source,
        "skillId": record_id,
        "name": name,
        "installs": installs,
        "technologies": [],
    }


# =============================================================================
# Edit Distance Tests
# =============================================================================


class TestEditDistance:
    """Tests for bounded Levenshtein distance and edit budgets."""

    def test_identical(self):
        assert edit_distance("react", "react", 1) == 0

    def test_substitution(self):
        assert edit_distance("reqct", "react", 1) == 1

    def test_insertion_and_deletion(self):
        assert edit_distance("rect", "react", 1) == 1
        assert edit_distance("reactt", "react", 1) == 1

    def test_exceeds_limit(self):
        """Test distances above the limit report limit + 1."""
        assert edit_distance("svelte", "react", 1) == 2
        assert edit_distance("ab", "abcdef", 2) == 3

    def test_max_edits(self):
        """Test the edit budget is proportional to term length."""
        assert max_edits("") == 0
        assert max_edits("a") == 0
        assert max_edits("vue") == 0
        assert max_edits("reac") == 0
        assert max_edits("react") == 1
        assert max_edits("typescript") == 2
        assert max_edits("react", tolerance=0.0) == 0

    def test_invalid_tolerance(self):
        with pytest.raises(ValueError):
            SearchEngine(tolerance=1.5)


# =============================================================================
# Matching Tests
# =============================================================================


class TestMatching:
    """Tests for exact, prefix, and fuzzy matching."""

    @pytest.fixture
    def index(self) -> SearchIndex:
        return SearchIndex.build([{**_record("x", "React Hooks Guide", 100), "id": 0}])

    def test_exact(self, index):
        results = search(index, "react")
        assert [r.record_id for r in results] == ["x"]

    def test_prefix(self, index):
        results = search(index, "reac")
        assert [r.record_id for r in results] == ["x"]

    def test_fuzzy(self, index):
        results = search(index, "reqct")
        assert [r.record_id for r in results] == ["x"]

    def test_case_insensitive(self, index):
        assert [r.record_id for r in search(index, "REACT")] == ["x"]

    def test_no_match(self, index):
        assert search(index, "angular") == []

    def test_short_terms_are_not_fuzzy(self):
        """Test a 3-letter term needs an exact or prefix hit."""
        index = SearchIndex.build([_record("x", "Vue Basics")])
        assert search(index, "vux") == []
        assert len(search(index, "vu")) == 1

    def test_any_term_matches(self):
        """Test a record matches if any query term matches."""
        index = SearchIndex.build([_record("x", "Supabase Postgres")])
        assert len(search(index, "angular postgres")) == 1

    def test_results_carry_stored_fields(self):
        index = SearchIndex.build(
            [
                {
                    "source": "vercel-labs/skills",
                    "skillId": "next",
                    "name": "Next Cache",
                    "description": "Caching for Next.js",
                    "installs": 42,
                    "technologies": ["nextjs", "react"],
                }
            ]
        )
        result = search(index, "next")[0]
        assert result.source == "vercel-labs/skills"
        assert result.record_id == "next"
        assert result.description == "Caching for Next.js"
        assert result.installs == 42
        assert result.technologies == ["nextjs", "react"]
        assert result.score > 0


# =============================================================================
# Ranking Tests
# =============================================================================


class TestRanking:
    """Tests for scoring and ordering."""

    def test_exact_beats_prefix_and_fuzzy(self):
        """Test an exact token match outranks prefix and fuzzy matches."""
        index = SearchIndex.build(
            [
                _record("prefix", "Reactive Streams", installs=9000),
                _record("fuzzy", "Reacts Patterns", installs=5000),
                _record("exact", "React Patterns", installs=1),
            ]
        )
        results = search(index, "react")
        assert results[0].record_id == "exact"
        assert {r.record_id for r in results} == {"exact", "prefix", "fuzzy"}

    def test_more_matching_terms_rank_higher(self):
        index = SearchIndex.build(
            [
                _record("one", "React Testing", installs=1000),
                _record("two", "React Hooks Testing", installs=1),
            ]
        )
        results = search(index, "react hooks")
        assert [r.record_id for r in results] == ["two", "one"]

    def test_tie_broken_by_installs(self):
        """Test equal scores sort by installs descending."""
        index = SearchIndex.build(
            [
                {**_record("basics", "Vue Basics", installs=10), "id": 0},
                {**_record("advanced", "Vue Advanced", installs=500), "id": 1},
            ]
        )
        results = search(index, "vue")
        assert [r.name for r in results] == ["Vue Advanced", "Vue Basics"]
        assert results[0].score == results[1].score

    def test_tie_break_law(self):
        """Test every equal-score pair is ordered by installs."""
        index = SearchIndex.build(
            [_record(f"s{i}", f"Skill Pack {i}", installs=(i * 37) % 101) for i in range(30)]
        )
        results = search(index, "skill")
        for earlier, later in zip(results, results[1:]):
            if earlier.score == later.score:
                assert earlier.installs >= later.installs
            else:
                assert earlier.score > later.score

    def test_results_unique(self, sample_snapshot):
        """Test no two results share (source, skillId)."""
        index = SearchIndex.build(sample_snapshot + sample_snapshot)
        results = search(index, "react vue supabase")
        keys = [r.key for r in results]
        assert len(keys) == len(set(keys))


# =============================================================================
# Limits and Empty Queries
# =============================================================================


class TestLimits:
    """Tests for the result cap and empty queries."""

    def test_cap(self):
        """Test results are truncated to MAX_RESULTS."""
        index = SearchIndex.build([_record(f"s{i}", f"Python Tool {i}", installs=i) for i in range(120)])
        results = search(index, "python")
        assert len(results) == MAX_RESULTS == 50
        assert results[0].installs == 119

    def test_under_cap(self):
        index = SearchIndex.build([_record(f"s{i}", f"Python Tool {i}") for i in range(7)])
        assert len(search(index, "python")) == 7

    @pytest.mark.parametrize("query", ["", "   ", "\t\n", "--", "/"])
    def test_empty_query(self, sample_snapshot, query):
        """Test empty and whitespace-only queries return nothing."""
        assert search(SearchIndex.build(sample_snapshot), query) == []

    def test_empty_index(self):
        assert search(SearchIndex.build([]), "anything") == []

    def test_engine_tolerance(self):
        """Test a zero tolerance disables fuzzy matching."""
        index = SearchIndex.build([_record("x", "React Hooks Guide")])
        assert SearchEngine(tolerance=0.0).search(index, "reqct") == []
        assert len(SearchEngine(tolerance=0.2).search(index, "reqct")) == 1
