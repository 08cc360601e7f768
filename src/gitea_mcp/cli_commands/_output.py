"""Shared CLI output formatters.

Standard output belongs to protocol traffic while the server runs, so
diagnostics always go to :data:`err_console`.
"""

from __future__ import annotations

import json

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from gitea_mcp.protocol.models import ToolDef  # noqa: TC001

console = Console()
err_console = Console(stderr=True)


def print_tools_table(tools: list[ToolDef]) -> None:
    """Pretty-print the tool catalogue as a table."""
    table = Table(title="Gitea Tools")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Description")
    table.add_column("Required")

    for tool in tools:
        required = ", ".join(tool.input_schema.required or []) or "-"
        table.add_row(tool.name, _truncate(tool.description), required)

    console.print(table)


def print_tools_json(tools: list[ToolDef]) -> None:
    """Print the catalogue as the JSON array ``tools/list`` would return."""
    click.echo(json.dumps([tool.to_wire() for tool in tools], indent=2, ensure_ascii=False))


def print_error(label: str, exc: BaseException | str) -> None:
    err_console.print(f"[red]{label}:[/red] {escape(str(exc))}", highlight=False, soft_wrap=True)


def _truncate(text: str, max_len: int = 80) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
