"""Protocol layer: JSON-RPC 2.0 / MCP messages, stdio transport and server."""

from gitea_mcp.protocol.errors import (
    DuplicateToolError,
    MessageTooLargeError,
    ProtocolError,
    RegistryFrozenError,
    ToolNotFoundError,
    TransportError,
)
from gitea_mcp.protocol.models import ToolDef, ToolResult
from gitea_mcp.protocol.server import MCPServer
from gitea_mcp.protocol.transport import DEFAULT_MAX_MESSAGE_SIZE, StdioServerTransport

__all__ = [
    "DEFAULT_MAX_MESSAGE_SIZE",
    "DuplicateToolError",
    "MCPServer",
    "MessageTooLargeError",
    "ProtocolError",
    "RegistryFrozenError",
    "StdioServerTransport",
    "ToolDef",
    "ToolNotFoundError",
    "ToolResult",
    "TransportError",
]
