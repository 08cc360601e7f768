"""``gitea-mcp tools``: print the tool catalogue."""

from __future__ import annotations

import click

from gitea_mcp.cli_commands._output import console, print_tools_json, print_tools_table


@click.command()
@click.option("--json", "as_json", is_flag=True, help="Print the tool descriptors as JSON.")
def tools(as_json: bool) -> None:
    """List the tools the server exposes. No Gitea instance is needed."""
    from gitea_mcp.tools import build_registry

    registry = build_registry()
    if as_json:
        print_tools_json(registry.list())
        return

    print_tools_table(registry.list())
    console.print(f"{len(registry)} tools")
