"""Stdio transport: newline-delimited JSON over a pair of byte streams.

The server reads one message per line from an input stream and writes one
message per line to an output stream. Reads run in a worker thread so a
blocked ``stdin`` never stalls the event loop.
"""

from __future__ import annotations

import asyncio
import json
import sys
from typing import Any, BinaryIO

from gitea_mcp.protocol.errors import MessageTooLargeError, TransportError

DEFAULT_MAX_MESSAGE_SIZE = 10 * 1024 * 1024


class StdioServerTransport:
    """Line-framed message stream over binary input and output streams.

    Usage::

        transport = StdioServerTransport.from_stdio()
        while (line := await transport.receive()) is not None:
            ...
            await transport.send({"jsonrpc": "2.0", "id": 1, "result": {}})
    """

    def __init__(
        self,
        reader: BinaryIO,
        writer: BinaryIO,
        *,
        max_message_size: int = DEFAULT_MAX_MESSAGE_SIZE,
    ) -> None:
        self._reader = reader
        self._writer = writer
        self._max_message_size = max_message_size

    @classmethod
    def from_stdio(cls, *, max_message_size: int = DEFAULT_MAX_MESSAGE_SIZE) -> StdioServerTransport:
        """Build a transport over the process's standard input and output."""
        return cls(sys.stdin.buffer, sys.stdout.buffer, max_message_size=max_message_size)

    @property
    def max_message_size(self) -> int:
        return self._max_message_size

    async def receive(self) -> bytes | None:
        """Read the next line, without its terminator.

        Returns ``None`` at end of input.

        Raises:
            MessageTooLargeError: The line is longer than ``max_message_size``.
            TransportError: The input stream failed.
        """
        # One extra byte leaves room for the terminator of a maximum-size line.
        limit = self._max_message_size + 1
        try:
            line = await asyncio.to_thread(self._reader.readline, limit)
        except (OSError, ValueError) as exc:
            raise TransportError(f"Failed to read from input stream: {exc}") from exc

        if not line:
            return None
        if line.endswith(b"\n"):
            return line[:-1]
        if len(line) >= limit:
            raise MessageTooLargeError(self._max_message_size)
        # Final line without a terminator.
        return line

    async def send(self, message: dict[str, Any]) -> None:
        """Write *message* as one compact JSON line and flush.

        Raises:
            ValueError: *message* holds NaN or an infinity, which JSON cannot express.
            TransportError: The output stream failed.
        """
        data = json.dumps(message, ensure_ascii=False, separators=(",", ":"), allow_nan=False)
        try:
            self._writer.write(data.encode("utf-8") + b"\n")
            self._writer.flush()
        except (OSError, ValueError) as exc:
            raise TransportError(f"Failed to write to output stream: {exc}") from exc
