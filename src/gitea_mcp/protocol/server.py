"""MCPServer: answers JSON-RPC requests read from a line-framed stream.

Requests are handled one at a time, in input order. Supported methods are
``initialize``, ``tools/list`` and ``tools/call``; requests without an
``id`` are notifications and are never answered.
"""

from __future__ import annotations

import json
import logging
import math
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from gitea_mcp.protocol.errors import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    ToolNotFoundError,
)
from gitea_mcp.protocol.models import (
    InitializeResult,
    JsonRpcRequest,
    JsonRpcResponse,
    RequestId,
    ToolCallParams,
    ToolsListResult,
)
from gitea_mcp.tools.arguments import resolve_arguments
from gitea_mcp.utils.telemetry import ATTR_RPC_METHOD, get_tracer

if TYPE_CHECKING:
    from gitea_mcp.gitea.client import GiteaClient
    from gitea_mcp.protocol.transport import StdioServerTransport
    from gitea_mcp.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)


class MCPServer:
    """Routes MCP requests to a tool registry backed by a Gitea client.

    Usage::

        async with GiteaClient(url, token) as client:
            server = MCPServer(build_registry(), client, default_owner="acme")
            await server.serve(StdioServerTransport.from_stdio())
    """

    def __init__(
        self,
        registry: ToolRegistry,
        client: GiteaClient,
        *,
        default_owner: str = "",
        default_repo: str = "",
    ) -> None:
        self._registry = registry
        self._client = client
        self._default_owner = default_owner
        self._default_repo = default_repo

    @property
    def registry(self) -> ToolRegistry:
        return self._registry

    async def serve(self, transport: StdioServerTransport) -> None:
        """Answer requests until end of input.

        Raises:
            TransportError: The input or output stream failed, or a message
                exceeded the transport's size limit.
        """
        logger.debug("Serving %d tools", len(self._registry))
        while (line := await transport.receive()) is not None:
            if not line.strip():
                continue
            response = await self.handle_message(line)
            if response is not None:
                await transport.send(response)
        logger.debug("End of input, shutting down")

    async def handle_message(self, line: bytes) -> dict[str, Any] | None:
        """Handle one raw message and return the wire response, if any."""
        try:
            data = json.loads(line.decode("utf-8"), parse_constant=_reject_constant)
        except (ValueError, RecursionError) as exc:
            logger.warning("Unparseable message: %s", exc)
            return JsonRpcResponse.failure(None, PARSE_ERROR, "Parse error").to_wire()

        if not isinstance(data, dict):
            logger.warning("Message is not a JSON object: %s", type(data).__name__)
            return JsonRpcResponse.failure(None, INVALID_REQUEST, "Invalid Request").to_wire()

        if data.get("id") is None:
            logger.debug("Ignoring notification %r", data.get("method"))
            return None

        try:
            request = JsonRpcRequest.model_validate(data)
        except ValidationError:
            request_id = _valid_id(data["id"])
            logger.warning("Malformed request envelope (id=%r)", data["id"])
            return JsonRpcResponse.failure(request_id, INVALID_REQUEST, "Invalid Request").to_wire()

        logger.debug("<- %s (id=%r)", request.method, request.id)
        response = await self._dispatch(request)
        logger.debug("-> id=%r %s", response.id, "error" if response.error else "result")
        return response.to_wire()

    async def _dispatch(self, request: JsonRpcRequest) -> JsonRpcResponse:
        with _tracer.start_as_current_span("gitea_mcp.rpc.request") as span:
            span.set_attribute(ATTR_RPC_METHOD, request.method)

            if request.method == "initialize":
                return JsonRpcResponse.success(request.id, InitializeResult())
            if request.method == "tools/list":
                return JsonRpcResponse.success(request.id, ToolsListResult(tools=self._registry.list()))
            if request.method == "tools/call":
                return await self._call_tool(request)

            logger.warning("Method not found: %s", request.method)
            return JsonRpcResponse.failure(
                request.id, METHOD_NOT_FOUND, f"Method not found: {request.method}"
            )

    async def _call_tool(self, request: JsonRpcRequest) -> JsonRpcResponse:
        try:
            params = ToolCallParams.model_validate(request.params)
        except ValidationError:
            logger.warning("Invalid tools/call params (id=%r)", request.id)
            return JsonRpcResponse.failure(request.id, INVALID_PARAMS, "Invalid tool call params")

        arguments = resolve_arguments(
            params.arguments,
            default_owner=self._default_owner,
            default_repo=self._default_repo,
        )

        try:
            result = await self._registry.call(self._client, params.name, arguments)
        except ToolNotFoundError as exc:
            logger.warning("%s", exc)
            return JsonRpcResponse.failure(request.id, INTERNAL_ERROR, str(exc))

        return JsonRpcResponse.success(request.id, result)


def _valid_id(value: Any) -> RequestId | None:
    """Return *value* if it can be echoed back as a request id."""
    if isinstance(value, bool):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, (int, float, str)):
        return value
    return None


def _reject_constant(token: str) -> Any:
    """Refuse the non-standard ``NaN``, ``Infinity`` and ``-Infinity`` tokens."""
    raise ValueError(f"invalid JSON constant {token}")
