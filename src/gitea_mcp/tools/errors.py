"""Error types raised by tool handlers."""

from __future__ import annotations


class ToolError(Exception):
    """Base error for failures inside a tool handler."""


class ToolInputError(ToolError):
    """A required argument is missing or malformed."""
