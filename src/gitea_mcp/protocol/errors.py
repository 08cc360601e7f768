"""Error codes and exception types for the JSON-RPC protocol layer."""

from __future__ import annotations

# JSON-RPC 2.0 error codes
PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


class ProtocolError(Exception):
    """Base error for all protocol-layer failures."""


class TransportError(ProtocolError):
    """Reading from or writing to the message stream failed."""


class MessageTooLargeError(TransportError):
    """An incoming message exceeded the configured maximum size."""

    def __init__(self, limit: int) -> None:
        self.limit = limit
        super().__init__(f"Message exceeds maximum size of {limit} bytes")


class ToolNotFoundError(ProtocolError):
    """Requested tool does not exist in the registry."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"unknown tool: {name}")


class DuplicateToolError(ProtocolError):
    """A tool with the same name is already registered."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Tool already registered: {name}")


class RegistryFrozenError(ProtocolError):
    """The registry no longer accepts registrations."""
