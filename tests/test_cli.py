"""
Tests for CLI module.

Tests command-line interface commands and output. Network calls are
replaced by monkeypatched coroutines.
"""

import json

import pytest
import yaml
from typer.testing import CliRunner

from answer_engine import __version__
from answer_engine.cli import app
from answer_engine.cli import main as cli_main
from answer_engine.core.exceptions import InvalidQueryError
from answer_engine.core.models import AggregateResponse, IdentifiedResult


def sample_response(query: str) -> AggregateResponse:
    return AggregateResponse(
        query=query,
        answer="Mars is the fourth planet...[1]",
        sources=(
            IdentifiedResult(
                title="Mars",
                snippet="Mars is the fourth planet...",
                url="https://en.wikipedia.org/wiki/Mars",
                domain="wikipedia.org",
                favicon="W",
                id=1,
            ),
        ),
        related_questions=("How does Mars work?",),
    )


class TestCLI:
    """Tests for CLI commands."""

    @pytest.fixture
    def runner(self) -> CliRunner:
        """Provide a CLI test runner."""
        return CliRunner()

    def test_cli_help(self, runner: CliRunner):
        """CLI should show help."""
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        assert "Usage" in result.output

    def test_version(self, runner: CliRunner):
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_search_help(self, runner: CliRunner):
        """Search command should show help."""
        result = runner.invoke(app, ["search", "--help"])

        assert result.exit_code == 0
        assert "--source" in result.output

    def test_images_help(self, runner: CliRunner):
        result = runner.invoke(app, ["images", "--help"])

        assert result.exit_code == 0


class TestSearchCommand:
    """Tests for search command."""

    @pytest.fixture
    def runner(self) -> CliRunner:
        """Provide a CLI test runner."""
        return CliRunner()

    @pytest.fixture
    def calls(self, monkeypatch) -> list[tuple[str, str]]:
        """Replace the aggregate call and record its arguments."""
        recorded: list[tuple[str, str]] = []

        async def fake_search(settings, query, source):
            recorded.append((query, source))
            return sample_response(query)

        monkeypatch.setattr(cli_main, "_search_async", fake_search)
        return recorded

    def test_search_missing_query(self, runner: CliRunner):
        """Search without query should fail."""
        result = runner.invoke(app, ["search"])

        assert result.exit_code != 0

    def test_search_renders_answer(self, runner: CliRunner, calls):
        """Answer, sources and related questions are printed."""
        result = runner.invoke(app, ["search", "Mars"])

        assert result.exit_code == 0
        assert "Mars is the fourth planet" in result.output
        assert "wikipedia.org" in result.output
        assert "How does Mars work?" in result.output
        assert calls == [("Mars", "All")]

    def test_search_without_sources(self, runner: CliRunner, monkeypatch):
        """An empty source list is reported instead of an empty table."""

        async def fake_search(settings, query, source):
            return AggregateResponse(query=query, answer="Here's what I found")

        monkeypatch.setattr(cli_main, "_search_async", fake_search)

        result = runner.invoke(app, ["search", "Mars"])

        assert result.exit_code == 0
        assert "No sources found" in result.output

    def test_search_source_option(self, runner: CliRunner, calls):
        result = runner.invoke(app, ["search", "Mars", "--source", "News"])

        assert result.exit_code == 0
        assert calls == [("Mars", "News")]

    def test_search_json(self, runner: CliRunner, calls):
        """--json prints the response mapping."""
        result = runner.invoke(app, ["search", "Mars", "--json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["query"] == "Mars"
        assert data["sources"][0]["id"] == 1
        assert data["sources"][0]["domain"] == "wikipedia.org"
        assert data["related_questions"] == ["How does Mars work?"]

    def test_search_no_sources(self, runner: CliRunner, calls):
        result = runner.invoke(app, ["search", "Mars", "--no-sources"])

        assert result.exit_code == 0
        assert "Sources" not in result.output

    def test_search_invalid_query(self, runner: CliRunner, monkeypatch):
        """Query errors are printed and exit with status 1."""
        async def fake_search(settings, query, source):
            raise InvalidQueryError("Query must be a non-empty string")

        monkeypatch.setattr(cli_main, "_search_async", fake_search)

        result = runner.invoke(app, ["search", " "])

        assert result.exit_code == 1
        assert "Query must be a non-empty string" in result.output

    def test_search_metrics(self, runner: CliRunner, calls):
        result = runner.invoke(app, ["search", "Mars", "--metrics"])

        assert result.exit_code == 0
        assert "Provider Metrics" in result.output

    def test_search_json_metrics_keeps_stdout_json(self, runner: CliRunner, calls):
        """With --json the metrics table goes to stderr."""
        result = runner.invoke(app, ["search", "Mars", "--json", "--metrics"])

        assert result.exit_code == 0
        assert json.loads(result.stdout)["query"] == "Mars"
        assert "Provider Metrics" in result.stderr


class TestImagesCommand:
    """Tests for images command."""

    @pytest.fixture
    def runner(self) -> CliRunner:
        """Provide a CLI test runner."""
        return CliRunner()

    def test_images_table(self, runner: CliRunner, monkeypatch):
        async def fake_images(settings, query, limit):
            return (
                IdentifiedResult(
                    title="Mars globe.jpg",
                    snippet="",
                    url="https://commons.wikimedia.org/wiki/File%3AMars%20globe.jpg",
                    domain="wikimedia.org",
                    favicon="WM",
                    id=1,
                ),
            )

        monkeypatch.setattr(cli_main, "_images_async", fake_images)

        result = runner.invoke(app, ["images", "Mars", "--limit", "1"])

        assert result.exit_code == 0
        assert "Images (1 found)" in result.output

    def test_images_empty(self, runner: CliRunner, monkeypatch):
        async def fake_images(settings, query, limit):
            return ()

        monkeypatch.setattr(cli_main, "_images_async", fake_images)

        result = runner.invoke(app, ["images", "Mars", "--json"])

        assert result.exit_code == 0
        assert json.loads(result.stdout) == []


class TestConfigCommand:
    """Tests for config command."""

    @pytest.fixture
    def runner(self) -> CliRunner:
        """Provide a CLI test runner."""
        return CliRunner()

    def test_config_show(self, runner: CliRunner):
        """Config show should display every section."""
        result = runner.invoke(app, ["config", "--show"])

        assert result.exit_code == 0
        for section in ("providers", "aggregator", "synthesis", "logging"):
            assert section in result.output

    def test_config_init(self, runner: CliRunner, temp_dir):
        """Config init writes a loadable YAML file."""
        output = temp_dir / "answer-engine.yaml"

        result = runner.invoke(app, ["config", "--init", "--output", str(output)])

        assert result.exit_code == 0
        data = yaml.safe_load(output.read_text())
        assert data["aggregator"]["max_sources"] == 8

    def test_config_file_option(self, runner: CliRunner, temp_dir):
        """--config loads settings from a file."""
        config_path = temp_dir / "config.yaml"
        config_path.write_text("aggregator:\n  max_sources: 4\n")

        result = runner.invoke(app, ["--config", str(config_path), "config", "--show"])

        assert result.exit_code == 0
        assert "max_sources: 4" in result.output

    def test_invalid_config_file(self, runner: CliRunner, temp_dir):
        """An invalid config file exits with an error."""
        config_path = temp_dir / "config.yaml"
        config_path.write_text("aggregator:\n  max_sources: 0\n")

        result = runner.invoke(app, ["--config", str(config_path), "config", "--show"])

        assert result.exit_code == 1
        assert "Configuration error" in result.output
