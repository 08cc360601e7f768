"""Tests for ``gitea-mcp serve`` CLI command."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, patch

from click.testing import CliRunner

from gitea_mcp.cli import main
from gitea_mcp.protocol.errors import MessageTooLargeError

if TYPE_CHECKING:
    from pathlib import Path

# Unset anything the developer's shell may export.
_CLEAN_ENV: dict[str, str | None] = {
    "GITEA_URL": None,
    "GITEA_TOKEN": None,
    "GITEA_OWNER": None,
    "GITEA_REPO": None,
    "GITEA_MCP_TIMEOUT": None,
    "GITEA_MCP_LOG_LEVEL": None,
    "GITEA_MCP_OTLP_ENDPOINT": None,
    "GITEA_MCP_TRACE_CONSOLE": None,
}


def _invoke(args: list[str], env: dict[str, str] | None = None) -> tuple[object, AsyncMock]:
    with patch("gitea_mcp.cli_commands.serve._serve", new_callable=AsyncMock) as mock_serve:
        runner = CliRunner()
        result = runner.invoke(main, ["serve", *args], env={**_CLEAN_ENV, **(env or {})})
    return result, mock_serve


class TestServeCommand:
    def test_flags(self) -> None:
        result, mock_serve = _invoke(
            ["--url", "https://gitea.example.com", "--token", "t", "--owner", "acme", "--repo", "widgets"]
        )

        assert result.exit_code == 0, result.output
        config = mock_serve.await_args.args[0]
        assert config.base_url == "https://gitea.example.com"
        assert config.token == "t"
        assert config.default_owner == "acme"
        assert config.default_repo == "widgets"

    def test_environment(self) -> None:
        result, mock_serve = _invoke(
            [],
            env={
                "GITEA_URL": "https://env.example.com",
                "GITEA_TOKEN": "env-token",
                "GITEA_OWNER": "acme",
                "GITEA_MCP_TIMEOUT": "12.5",
            },
        )

        assert result.exit_code == 0, result.output
        config = mock_serve.await_args.args[0]
        assert config.base_url == "https://env.example.com"
        assert config.timeout == 12.5
        assert config.default_repo == ""

    def test_flag_beats_environment(self) -> None:
        result, mock_serve = _invoke(
            ["--token", "flag-token"],
            env={"GITEA_URL": "https://env.example.com", "GITEA_TOKEN": "env-token"},
        )

        assert result.exit_code == 0, result.output
        assert mock_serve.await_args.args[0].token == "flag-token"

    def test_environment_beats_config_file(self, tmp_path: Path) -> None:
        config_file = tmp_path / "gitea-mcp.yaml"
        config_file.write_text(
            "url: https://file.example.com\ntoken: file-token\nrepo: widgets\n",
            encoding="utf-8",
        )
        result, mock_serve = _invoke(
            ["--config", str(config_file)],
            env={"GITEA_TOKEN": "env-token"},
        )

        assert result.exit_code == 0, result.output
        config = mock_serve.await_args.args[0]
        assert config.base_url == "https://file.example.com"
        assert config.token == "env-token"
        assert config.default_repo == "widgets"

    def test_missing_required_values(self) -> None:
        result, mock_serve = _invoke([])

        assert result.exit_code == 1
        assert "Configuration error" in result.output
        assert "url is required" in result.output
        mock_serve.assert_not_awaited()

    def test_message_size_below_floor(self) -> None:
        result, _ = _invoke(["--url", "https://g.example.com", "--token", "t", "--max-message-size", "10"])

        assert result.exit_code == 1
        assert "max_message_size" in result.output

    def test_bad_config_file(self, tmp_path: Path) -> None:
        config_file = tmp_path / "gitea-mcp.yaml"
        config_file.write_text("- not a mapping\n", encoding="utf-8")
        result, _ = _invoke(["--config", str(config_file)])

        assert result.exit_code == 1
        assert "must be a mapping" in result.output

    def test_transport_failure_exits_nonzero(self) -> None:
        with patch(
            "gitea_mcp.cli_commands.serve._serve",
            new_callable=AsyncMock,
            side_effect=MessageTooLargeError(10),
        ):
            runner = CliRunner()
            result = runner.invoke(
                main,
                ["serve", "--url", "https://g.example.com", "--token", "t"],
                env=_CLEAN_ENV,
            )

        assert result.exit_code == 1
        assert "Transport error" in result.output

    def test_otlp_endpoint_configures_telemetry(self) -> None:
        with patch("gitea_mcp.utils.telemetry.configure_telemetry") as mock_configure:
            result, _ = _invoke(
                ["--url", "https://g.example.com", "--token", "t"],
                env={"GITEA_MCP_OTLP_ENDPOINT": "http://localhost:4317"},
            )

        assert result.exit_code == 0, result.output
        mock_configure.assert_called_once_with(export_to_console=False, otlp_endpoint="http://localhost:4317")

    def test_trace_console_configures_telemetry(self) -> None:
        with patch("gitea_mcp.utils.telemetry.configure_telemetry") as mock_configure:
            result, mock_serve = _invoke(["--url", "https://g.example.com", "--token", "t", "--trace-console"])

        assert result.exit_code == 0, result.output
        assert mock_serve.await_args.args[0].trace_console is True
        mock_configure.assert_called_once_with(export_to_console=True, otlp_endpoint=None)

    def test_trace_console_from_config_file(self, tmp_path: Path) -> None:
        config_file = tmp_path / "gitea-mcp.yaml"
        config_file.write_text("url: https://g.example.com\ntoken: t\ntrace_console: true\n", encoding="utf-8")
        with patch("gitea_mcp.utils.telemetry.configure_telemetry") as mock_configure:
            result, _ = _invoke(["--config", str(config_file)])

        assert result.exit_code == 0, result.output
        mock_configure.assert_called_once_with(export_to_console=True, otlp_endpoint=None)

    def test_telemetry_left_alone_by_default(self) -> None:
        with patch("gitea_mcp.utils.telemetry.configure_telemetry") as mock_configure:
            result, _ = _invoke(["--url", "https://g.example.com", "--token", "t"])

        assert result.exit_code == 0, result.output
        mock_configure.assert_not_called()
