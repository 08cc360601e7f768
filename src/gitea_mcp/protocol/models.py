"""MCP models: JSON-RPC 2.0 messages, tool definitions and tool results.

Implements the message format used by the Model Context Protocol for the
``initialize`` handshake, tool discovery (``tools/list``) and execution
(``tools/call``).
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, FiniteFloat

from gitea_mcp import __version__

PROTOCOL_VERSION = "2025-03-26"
SERVER_NAME = "gitea-mcp"

# NaN and infinities have no JSON spelling, so they can never be echoed back.
RequestId = int | FiniteFloat | str

# ---------------------------------------------------------------------------
# JSON-RPC 2.0 envelope
# ---------------------------------------------------------------------------


class JsonRpcRequest(BaseModel):
    """A JSON-RPC 2.0 request.

    Notifications (no ``id``) are filtered out before validation.
    """

    model_config = ConfigDict(strict=True)

    jsonrpc: str = "2.0"
    id: RequestId | None = None
    method: str
    params: Any = None


class JsonRpcError(BaseModel):
    """A JSON-RPC 2.0 error object."""

    code: int
    message: str


class JsonRpcResponse(BaseModel):
    """A JSON-RPC 2.0 response message."""

    jsonrpc: str = "2.0"
    id: RequestId | None = None
    result: dict[str, Any] | None = None
    error: JsonRpcError | None = None

    @classmethod
    def success(cls, request_id: RequestId | None, result: BaseModel) -> JsonRpcResponse:
        return cls(id=request_id, result=result.model_dump(by_alias=True, exclude_none=True))

    @classmethod
    def failure(cls, request_id: RequestId | None, code: int, message: str) -> JsonRpcResponse:
        return cls(id=request_id, error=JsonRpcError(code=code, message=message))

    def to_wire(self) -> dict[str, Any]:
        """Serialize for the wire, omitting absent ``id``/``result``/``error``."""
        return self.model_dump(exclude_none=True)


# ---------------------------------------------------------------------------
# Tool descriptors
# ---------------------------------------------------------------------------


class SchemaProperty(BaseModel):
    """A single property of a tool's input schema."""

    type: str
    description: str | None = None
    enum: list[str] | None = None


class InputSchema(BaseModel):
    """Restricted JSON Schema describing a tool's arguments.

    Descriptive only: the server never validates arguments against it.
    """

    type: Literal["object"] = "object"
    properties: dict[str, SchemaProperty] = Field(default_factory=dict)
    required: list[str] | None = None


class ToolDef(BaseModel):
    """A tool definition as returned by ``tools/list``."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: str
    description: str = ""
    input_schema: InputSchema = Field(default_factory=InputSchema, alias="inputSchema")

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


# ---------------------------------------------------------------------------
# Method payloads
# ---------------------------------------------------------------------------


class ServerInfo(BaseModel):
    name: str = SERVER_NAME
    version: str = __version__


class ToolsCapability(BaseModel):
    """Empty marker: the server supports tools."""


class Capabilities(BaseModel):
    tools: ToolsCapability = Field(default_factory=ToolsCapability)


class InitializeResult(BaseModel):
    """Result of the ``initialize`` handshake."""

    model_config = ConfigDict(populate_by_name=True)

    protocol_version: str = Field(default=PROTOCOL_VERSION, alias="protocolVersion")
    server_info: ServerInfo = Field(default_factory=ServerInfo, alias="serverInfo")
    capabilities: Capabilities = Field(default_factory=Capabilities)


class ToolsListResult(BaseModel):
    """Result of ``tools/list``."""

    tools: list[ToolDef] = []


class ToolCallParams(BaseModel):
    """Params of a ``tools/call`` request."""

    model_config = ConfigDict(strict=True)

    name: str = Field(min_length=1)
    arguments: Any = None


class TextContent(BaseModel):
    """A text content block in a tool result."""

    type: Literal["text"] = "text"
    text: str


class ToolResult(BaseModel):
    """Result of ``tools/call``.

    ``is_error`` flags a failed tool run inside an otherwise successful
    RPC response; it is left unset on success.
    """

    model_config = ConfigDict(populate_by_name=True)

    content: list[TextContent]
    is_error: bool | None = Field(default=None, alias="isError")

    @classmethod
    def from_text(cls, text: str) -> ToolResult:
        return cls(content=[TextContent(text=text)])

    @classmethod
    def from_error(cls, message: str) -> ToolResult:
        return cls(content=[TextContent(text=f"Error: {message}")], is_error=True)
