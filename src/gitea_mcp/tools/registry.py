"""ToolRegistry: the ordered tool catalogue and name-based dispatch."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from gitea_mcp.gitea.errors import GiteaError
from gitea_mcp.protocol.errors import DuplicateToolError, RegistryFrozenError, ToolNotFoundError
from gitea_mcp.protocol.models import ToolResult
from gitea_mcp.tools.errors import ToolError
from gitea_mcp.utils.telemetry import ATTR_TOOL_IS_ERROR, ATTR_TOOL_NAME, get_tracer

if TYPE_CHECKING:
    from collections.abc import Iterator

    from gitea_mcp.gitea.client import GiteaClient
    from gitea_mcp.protocol.models import ToolDef
    from gitea_mcp.tools.params import ToolHandler

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)


@dataclass(frozen=True)
class ToolEntry:
    """One registered tool: its descriptor and the handler that runs it."""

    tool: ToolDef
    handler: ToolHandler

    @property
    def name(self) -> str:
        return self.tool.name


class ToolRegistry:
    """Insertion-ordered catalogue of tools, unique by name.

    Usage::

        registry = ToolRegistry()
        registry.register(tool_def, handler)
        registry.freeze()

        tools = registry.list()                             # descriptors, in order
        result = await registry.call(client, "list_labels", {"owner": "acme", "repo": "widgets"})
    """

    def __init__(self) -> None:
        self._entries: list[ToolEntry] = []
        self._frozen = False

    def register(self, tool: ToolDef, handler: ToolHandler) -> None:
        """Append a tool.

        Raises:
            DuplicateToolError: A tool with the same name is already registered.
            RegistryFrozenError: The registry has been frozen.
        """
        if self._frozen:
            raise RegistryFrozenError(f"Cannot register {tool.name!r}: registry is frozen")
        if tool.name in self:
            raise DuplicateToolError(tool.name)
        self._entries.append(ToolEntry(tool=tool, handler=handler))

    def freeze(self) -> ToolRegistry:
        """Stop accepting registrations; returns ``self`` for chaining."""
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def list(self) -> list[ToolDef]:
        """Return tool descriptors in registration order."""
        return [entry.tool for entry in self._entries]

    def names(self) -> list[str]:
        return [entry.name for entry in self._entries]

    def get(self, name: str) -> ToolEntry | None:
        """Return the first entry called *name*, if any."""
        for entry in self._entries:
            if entry.name == name:
                return entry
        return None

    def __contains__(self, name: object) -> bool:
        return any(entry.name == name for entry in self._entries)

    def __iter__(self) -> Iterator[ToolEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    async def call(
        self,
        client: GiteaClient,
        name: str,
        arguments: dict[str, Any],
    ) -> ToolResult:
        """Run the tool called *name* and wrap its outcome as a :class:`ToolResult`.

        Handler failures become results with ``is_error`` set; they never
        propagate.

        Raises:
            ToolNotFoundError: No tool is registered under *name*.
        """
        entry = self.get(name)
        if entry is None:
            raise ToolNotFoundError(name)

        with _tracer.start_as_current_span("gitea_mcp.tool.call") as span:
            span.set_attribute(ATTR_TOOL_NAME, name)
            result = await self._run(entry, client, arguments)
            span.set_attribute(ATTR_TOOL_IS_ERROR, bool(result.is_error))
            return result

    @staticmethod
    async def _run(entry: ToolEntry, client: GiteaClient, arguments: dict[str, Any]) -> ToolResult:
        try:
            value = await entry.handler(client, arguments)
        except (ToolError, GiteaError) as exc:
            logger.info("Tool %s failed: %s", entry.name, exc)
            return ToolResult.from_error(str(exc))
        except Exception as exc:
            logger.exception("Tool %s raised unexpectedly", entry.name)
            return ToolResult.from_error(str(exc) or type(exc).__name__)

        try:
            text = json.dumps(value, indent=2, ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            return ToolResult.from_error(f"marshaling result: {exc}")
        return ToolResult.from_text(text)
