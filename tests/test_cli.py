"""Tests for the command-line interface."""

import pytest
from typer.testing import CliRunner

from artswap.cli import app

runner = CliRunner()


@pytest.fixture
def database(tmp_path):
    return f"duckdb:///{tmp_path / 'cli.duckdb'}"


@pytest.fixture
def seeded(fixture_path, database):
    result = runner.invoke(app, ["seed", str(fixture_path), "--database", database])
    assert result.exit_code == 0, result.output
    return database


class TestCli:
    """Tests for CLI commands."""

    def test_match_json(self, seeded):
        result = runner.invoke(app, ["match", "spring", "--database", seeded, "--json"])

        assert result.exit_code == 0, result.output
        assert '"combined_score": 3' in result.output

    def test_show_after_match(self, seeded):
        runner.invoke(app, ["match", "spring", "--database", seeded])

        result = runner.invoke(app, ["show", "spring", "--database", seeded])

        assert result.exit_code == 0
        assert "mountain" in result.output

    def test_close_refuses_closed_event(self, seeded):
        result = runner.invoke(app, ["close", "spring", "--database", seeded])

        assert result.exit_code == 1
        assert "cannot move" in result.output

    def test_validate_missing_file(self):
        result = runner.invoke(app, ["validate", "/nonexistent/config.yaml"])
        assert result.exit_code == 1

    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "artswap v" in result.output
