"""Gitea MCP: Model Context Protocol server for Gitea repository resources."""

from __future__ import annotations

__version__ = "0.1.0"
