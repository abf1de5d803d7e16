"""Tests for ``hudu-mcp serve``."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest
from click.testing import CliRunner

from hudu_mcp.cli import main

_ENV = {"HUDU_BASE_URL": "https://docs.example.com", "HUDU_API_KEY": "secret"}


@pytest.fixture
def configured(monkeypatch: pytest.MonkeyPatch) -> None:
    for key, value in _ENV.items():
        monkeypatch.setenv(key, value)
    monkeypatch.delenv("MCP_SERVER_PORT", raising=False)


@pytest.fixture
def unconfigured(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in _ENV:
        monkeypatch.delenv(key, raising=False)
    # A stray .env must not fill the gap.
    monkeypatch.setattr("hudu_mcp.config.load_dotenv", lambda: False)


class TestServeStdio:
    @pytest.mark.usefixtures("configured")
    def test_runs_stdio_server(self) -> None:
        with patch("hudu_mcp.cli_commands.serve.StdioServer") as mock_server_cls:
            mock_server_cls.return_value.serve = AsyncMock()

            runner = CliRunner()
            result = runner.invoke(main, ["serve", "stdio"])

            assert result.exit_code == 0
            mock_server_cls.return_value.serve.assert_awaited_once()

    @pytest.mark.usefixtures("unconfigured")
    def test_missing_configuration(self) -> None:
        with patch("hudu_mcp.cli_commands.serve.StdioServer") as mock_server_cls:
            runner = CliRunner()
            result = runner.invoke(main, ["serve", "stdio"])

            assert result.exit_code == 1
            mock_server_cls.assert_not_called()


class TestServeHttp:
    @pytest.mark.usefixtures("configured")
    def test_runs_uvicorn(self) -> None:
        with patch("hudu_mcp.cli_commands.serve.uvicorn.run") as mock_run:
            runner = CliRunner()
            result = runner.invoke(main, ["serve", "http", "--host", "127.0.0.1", "--port", "8123"])

            assert result.exit_code == 0
            mock_run.assert_called_once()
            assert mock_run.call_args.kwargs["host"] == "127.0.0.1"
            assert mock_run.call_args.kwargs["port"] == 8123

    @pytest.mark.usefixtures("configured")
    def test_port_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MCP_SERVER_PORT", "4010")
        with patch("hudu_mcp.cli_commands.serve.uvicorn.run") as mock_run:
            runner = CliRunner()
            result = runner.invoke(main, ["serve", "http"])

            assert result.exit_code == 0
            assert mock_run.call_args.kwargs["port"] == 4010

    @pytest.mark.usefixtures("configured")
    def test_invalid_port(self) -> None:
        with patch("hudu_mcp.cli_commands.serve.uvicorn.run") as mock_run:
            runner = CliRunner()
            result = runner.invoke(main, ["serve", "http", "--port", "70000"])

            assert result.exit_code == 1
            mock_run.assert_not_called()

    @pytest.mark.usefixtures("unconfigured")
    def test_missing_configuration(self) -> None:
        with patch("hudu_mcp.cli_commands.serve.uvicorn.run") as mock_run:
            runner = CliRunner()
            result = runner.invoke(main, ["serve", "http"])

            assert result.exit_code == 1
            mock_run.assert_not_called()
