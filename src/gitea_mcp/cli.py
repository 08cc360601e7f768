"""gitea-mcp CLI entrypoint."""

from __future__ import annotations

import click

from gitea_mcp import __version__


@click.group()
@click.version_option(version=__version__, prog_name="gitea-mcp")
def main() -> None:
    """gitea-mcp: Gitea tools for agents over the Model Context Protocol."""


# Register subcommands
from gitea_mcp.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
