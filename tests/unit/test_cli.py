"""
Unit tests for the skillstack CLI.
"""

import json

import yaml

from skillstack import __version__
from skillstack.cli.app import app
from skillstack.cli.output import format_installs


class TestRootCommand:
    """Tests for the root application."""

    def test_version(self, cli_runner):
        result = cli_runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help(self, cli_runner):
        result = cli_runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "search" in result.output
        assert "snapshot" in result.output

    def test_format_installs(self):
        assert format_installs(999) == "999"
        assert format_installs(1200) == "1.2K"
        assert format_installs(3_400_000) == "3.4M"


class TestSearchCommand:
    """Tests for 'skillstack search'."""

    def test_search(self, cli_runner, mock_skillstack_home, snapshot_file):
        result = cli_runner.invoke(app, ["search", "react", "--snapshot", str(snapshot_file)])
        assert result.exit_code == 0
        assert "2 results" in result.output

    def test_search_json(self, cli_runner, mock_skillstack_home, snapshot_file):
        result = cli_runner.invoke(app, ["search", "vue", "--snapshot", str(snapshot_file), "--json"])
        assert result.exit_code == 0

        records = json.loads(result.stdout)
        assert [record["skillId"] for record in records] == ["vue-advanced", "vue-basics"]
        assert "description" not in records[0]

    def test_search_uses_configured_snapshot(self, cli_runner, mock_skillstack_home, sample_snapshot):
        (mock_skillstack_home / "skill-summaries.json").write_text(json.dumps(sample_snapshot))
        result = cli_runner.invoke(app, ["search", "postgres", "--json"])
        assert result.exit_code == 0
        assert json.loads(result.stdout)[0]["skillId"] == "postgres"

    def test_search_no_results(self, cli_runner, mock_skillstack_home, snapshot_file):
        result = cli_runner.invoke(app, ["search", "angular", "--snapshot", str(snapshot_file)])
        assert result.exit_code == 0
        assert "No skills found" in result.output

    def test_search_blank_query(self, cli_runner, mock_skillstack_home, snapshot_file):
        result = cli_runner.invoke(app, ["search", "  ", "--snapshot", str(snapshot_file)])
        assert result.exit_code == 0
        assert "Enter a search query" in result.output

    def test_search_unavailable_snapshot(self, cli_runner, mock_skillstack_home, temp_dir):
        result = cli_runner.invoke(app, ["search", "react", "--snapshot", str(temp_dir / "missing.json")])
        assert result.exit_code == 1
        assert "Search index unavailable" in result.output

    def test_search_invalid_config(self, cli_runner, mock_skillstack_home, snapshot_file):
        (mock_skillstack_home / "config.yaml").write_text(yaml.dump({"search": {"debounce_ms": "soon"}}))
        result = cli_runner.invoke(app, ["search", "react", "--snapshot", str(snapshot_file)])
        assert result.exit_code == 1
        assert "validation failed" in result.output


class TestSnapshotCommands:
    """Tests for 'skillstack snapshot'."""

    def test_build(self, cli_runner, mock_skillstack_home, temp_dir, sample_summaries):
        store = temp_dir / "skills.yaml"
        store.write_text(yaml.dump(sample_summaries))
        output = temp_dir / "public" / "skill-summaries.json"

        result = cli_runner.invoke(app, ["snapshot", "build", "--store", str(store), "-o", str(output)])
        assert result.exit_code == 0
        assert "Published 5 skill(s)" in result.output
        assert "max-age=86400" in result.output

        records = json.loads(output.read_text())
        assert [record["id"] for record in records] == [0, 1, 2, 3, 4]
        assert records[0]["skillId"] == "react-best-practices"

    def test_build_precompute(self, cli_runner, mock_skillstack_home, temp_dir, sample_summaries):
        store = temp_dir / "skills.yaml"
        store.write_text(yaml.dump(sample_summaries))
        output = temp_dir / "index.json"

        result = cli_runner.invoke(
            app, ["snapshot", "build", "--store", str(store), "-o", str(output), "--precompute"]
        )
        assert result.exit_code == 0
        assert json.loads(output.read_text())["documentCount"] == 5

    def test_build_missing_store(self, cli_runner, mock_skillstack_home, temp_dir):
        result = cli_runner.invoke(app, ["snapshot", "build", "--store", str(temp_dir / "missing.yaml")])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_refresh(self, cli_runner, mock_skillstack_home, sample_summaries):
        (mock_skillstack_home / "skills.yaml").write_text(yaml.dump(sample_summaries))

        result = cli_runner.invoke(app, ["snapshot", "refresh"])
        assert result.exit_code == 0
        assert "Snapshot rebuilt" in result.output
        assert (mock_skillstack_home / "skill-summaries.json").exists()

        result = cli_runner.invoke(app, ["snapshot", "refresh"])
        assert result.exit_code == 0
        assert "Snapshot is fresh" in result.output

        result = cli_runner.invoke(app, ["snapshot", "refresh", "--force"])
        assert "Snapshot rebuilt" in result.output

    def test_info(self, cli_runner, mock_skillstack_home, snapshot_file):
        result = cli_runner.invoke(app, ["snapshot", "info", "--snapshot", str(snapshot_file)])
        assert result.exit_code == 0
        assert "Records:" in result.output
        assert "5" in result.output

    def test_info_missing(self, cli_runner, mock_skillstack_home, temp_dir):
        result = cli_runner.invoke(app, ["snapshot", "info", "--snapshot", str(temp_dir / "missing.json")])
        assert result.exit_code == 1


class TestConfigCommands:
    """Tests for 'skillstack config'."""

    def test_show_json(self, cli_runner, mock_skillstack_home):
        result = cli_runner.invoke(app, ["config", "show", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["search"]["debounce_ms"] == 200

    def test_show_section(self, cli_runner, mock_skillstack_home, monkeypatch):
        monkeypatch.setenv("SKILLSTACK_SEARCH_DEBOUNCE_MS", "350")
        result = cli_runner.invoke(app, ["config", "show", "search", "--json"])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["debounce_ms"] == 350

    def test_show_unknown_section(self, cli_runner, mock_skillstack_home):
        result = cli_runner.invoke(app, ["config", "show", "nope"])
        assert result.exit_code == 1
        assert "Unknown config section" in result.output

    def test_show_yaml(self, cli_runner, mock_skillstack_home):
        result = cli_runner.invoke(app, ["config", "show"])
        assert result.exit_code == 0
        assert "debounce_ms" in result.output

    def test_path(self, cli_runner, mock_skillstack_home):
        result = cli_runner.invoke(app, ["config", "path"])
        assert result.exit_code == 0
        assert "global" in result.output
        assert "project" in result.output
