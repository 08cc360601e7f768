"""Helpers for declaring tool input schemas."""

from __future__ import annotations

from gitea_mcp.protocol.models import InputSchema, SchemaProperty

OWNER = SchemaProperty(type="string", description="Repository owner")
REPO = SchemaProperty(type="string", description="Repository name")
PAGE = SchemaProperty(type="integer", description="Page number")
LIMIT = SchemaProperty(type="integer", description="Page size")

STATE_FILTER = ["open", "closed", "all"]
STATE_VALUES = ["open", "closed"]


def string(description: str, enum: list[str] | None = None) -> SchemaProperty:
    return SchemaProperty(type="string", description=description, enum=enum)


def integer(description: str) -> SchemaProperty:
    return SchemaProperty(type="integer", description=description)


def array(description: str) -> SchemaProperty:
    return SchemaProperty(type="array", description=description)


def repo_schema(*, required: tuple[str, ...] = (), **properties: SchemaProperty) -> InputSchema:
    """Build an object schema whose first properties are ``owner`` and ``repo``."""
    return InputSchema(
        properties={"owner": OWNER, "repo": REPO, **properties},
        required=list(required) or None,
    )
