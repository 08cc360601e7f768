"""``gitea-mcp serve``: run the MCP server over stdin/stdout."""

from __future__ import annotations

import asyncio
import logging
import sys

import click

from gitea_mcp.cli_commands._output import print_error
from gitea_mcp.config import ConfigError, ServerConfig, load_config_file
from gitea_mcp.protocol.errors import TransportError

logger = logging.getLogger(__name__)

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@click.command()
@click.option("--url", envvar="GITEA_URL", default=None, help="Gitea base URL.")
@click.option("--token", envvar="GITEA_TOKEN", default=None, help="Gitea access token.")
@click.option("--owner", envvar="GITEA_OWNER", default=None, help="Default repository owner.")
@click.option("--repo", envvar="GITEA_REPO", default=None, help="Default repository name.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="YAML config file; flags and environment variables take precedence.",
)
@click.option(
    "--timeout",
    envvar="GITEA_MCP_TIMEOUT",
    type=float,
    default=None,
    help="HTTP timeout in seconds (default 30).",
)
@click.option(
    "--max-message-size",
    type=int,
    default=None,
    help="Largest accepted input line in bytes (default and minimum 10 MiB).",
)
@click.option(
    "--log-level",
    envvar="GITEA_MCP_LOG_LEVEL",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default=None,
    help="Log level for messages on stderr (default WARNING).",
)
@click.option(
    "--otlp-endpoint",
    envvar="GITEA_MCP_OTLP_ENDPOINT",
    default=None,
    help="Export traces via OTLP/gRPC to this endpoint.",
)
@click.option(
    "--trace-console",
    envvar="GITEA_MCP_TRACE_CONSOLE",
    is_flag=True,
    help="Print finished spans as JSON to stderr.",
)
def serve(
    url: str | None,
    token: str | None,
    owner: str | None,
    repo: str | None,
    config_path: str | None,
    timeout: float | None,
    max_message_size: int | None,
    log_level: str | None,
    otlp_endpoint: str | None,
    trace_console: bool,
) -> None:
    """Serve Gitea tools over stdio until end of input."""
    try:
        file_values = load_config_file(config_path) if config_path else {}
        config = ServerConfig.resolve(
            file_values,
            url=url,
            token=token,
            owner=owner,
            repo=repo,
            timeout=timeout,
            max_message_size=max_message_size,
            log_level=log_level,
            otlp_endpoint=otlp_endpoint,
            trace_console=trace_console or None,
        )
    except ConfigError as exc:
        print_error("Configuration error", exc)
        sys.exit(1)

    logging.basicConfig(stream=sys.stderr, level=config.log_level_number, format=_LOG_FORMAT)

    if config.otlp_endpoint or config.trace_console:
        from gitea_mcp.utils.telemetry import configure_telemetry

        try:
            configure_telemetry(
                export_to_console=config.trace_console,
                otlp_endpoint=config.otlp_endpoint,
            )
        except ImportError as exc:
            print_error("Telemetry error", exc)
            sys.exit(1)

    logger.info("Serving %s (default repo %s/%s)", config.base_url, config.default_owner, config.default_repo)

    try:
        asyncio.run(_serve(config))
    except TransportError as exc:
        print_error("Transport error", exc)
        sys.exit(1)


async def _serve(config: ServerConfig) -> None:
    from gitea_mcp.gitea.client import GiteaClient
    from gitea_mcp.protocol.server import MCPServer
    from gitea_mcp.protocol.transport import StdioServerTransport
    from gitea_mcp.tools import build_registry

    registry = build_registry()
    transport = StdioServerTransport.from_stdio(max_message_size=config.max_message_size)
    async with GiteaClient(config.base_url, config.token, timeout=config.timeout) as client:
        server = MCPServer(
            registry,
            client,
            default_owner=config.default_owner,
            default_repo=config.default_repo,
        )
        await server.serve(transport)
