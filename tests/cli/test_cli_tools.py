"""Tests for ``hudu-mcp tools`` and ``hudu-mcp resources``."""

from __future__ import annotations

import json
from unittest.mock import MagicMock

from click.testing import CliRunner

from hudu_mcp.cli import main


class TestToolsList:
    def test_table(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["tools", "list"])

        assert result.exit_code == 0
        assert "Hudu Tools" in result.output
        assert "navigation" in result.output

    def test_json(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["tools", "list", "--json"])

        assert result.exit_code == 0
        tools = json.loads(result.output)
        names = {tool["name"] for tool in tools}
        assert {"articles", "articles.query", "search", "admin"} <= names
        assert all("inputSchema" in tool for tool in tools)

    def test_needs_no_configuration(self, monkeypatch) -> None:
        monkeypatch.delenv("HUDU_BASE_URL", raising=False)
        monkeypatch.delenv("HUDU_API_KEY", raising=False)
        runner = CliRunner()
        result = runner.invoke(main, ["tools", "list", "--json"])

        assert result.exit_code == 0


class TestResourcesList:
    def test_table(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["resources", "list"])

        assert result.exit_code == 0
        assert "Hudu Resources" in result.output
        assert "res://article/list" in result.output


class TestMainGroup:
    def test_version(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["--version"])

        assert result.exit_code == 0
        assert "1.0.0" in result.output

    def test_log_level_forwarded(self, quiet_logging: MagicMock) -> None:
        runner = CliRunner()
        runner.invoke(main, ["--log-level", "debug", "tools", "list", "--json"])

        quiet_logging.assert_called_once_with("debug")
