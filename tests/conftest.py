"""
Pytest configuration and fixtures for skillstack tests.
"""

import json
import os
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest
from typer.testing import CliRunner


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def mock_skillstack_home(temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Provide an isolated ~/.skillstack directory with no config or env overrides."""
    home = temp_dir / ".skillstack"
    home.mkdir()

    for key in list(os.environ):
        if key.startswith("SKILLSTACK_"):
            monkeypatch.delenv(key)
    monkeypatch.setenv("SKILLSTACK_HOME", str(home))
    monkeypatch.chdir(temp_dir)

    return home


@pytest.fixture
def sample_summaries() -> list[dict]:
    """Provide skill summaries as exported from the backend store."""
    return [
        {
            "source": "vercel-labs/agent-skills",
            "skillId": "react-best-practices",
            "name": "React Best Practices",
            "description": "Performance patterns for React components",
            "installs": 1200,
            "technologies": ["react", "nextjs"],
        },
        {
            "source": "acme/skills",
            "skillId": "react-hooks",
            "name": "React Hooks Guide",
            "installs": 100,
            "technologies": ["react"],
        },
        {
            "source": "vuejs/skills",
            "skillId": "vue-basics",
            "name": "Vue Basics",
            "description": "Getting started with Vue",
            "installs": 10,
            "technologies": ["vue"],
        },
        {
            "source": "vuejs/skills",
            "skillId": "vue-advanced",
            "name": "Vue Advanced",
            "installs": 500,
            "technologies": ["vue"],
        },
        {
            "source": "supabase/agent-skills",
            "skillId": "postgres",
            "name": "Supabase Postgres",
            "description": "Row level security and migrations",
            "installs": 800,
            "technologies": ["supabase", "postgres"],
        },
    ]


@pytest.fixture
def sample_snapshot(sample_summaries: list[dict]) -> list[dict]:
    """Provide a snapshot built from the sample summaries."""
    from skillstack.snapshot import build_snapshot

    return build_snapshot(sample_summaries)


@pytest.fixture
def snapshot_file(temp_dir: Path, sample_snapshot: list[dict]) -> Path:
    """Provide a published snapshot file."""
    path = temp_dir / "skill-summaries.json"
    path.write_text(json.dumps(sample_snapshot))
    return path
