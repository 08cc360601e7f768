"""Argument resolution: normalize call arguments and inject defaults."""

from __future__ import annotations

from typing import Any


def resolve_arguments(
    arguments: Any,
    *,
    default_owner: str = "",
    default_repo: str = "",
) -> dict[str, Any]:
    """Return the argument map a handler will see.

    Anything that is not a JSON object becomes an empty map. ``owner`` and
    ``repo`` are filled from the configured defaults only when the caller
    did not pass the key at all.
    """
    resolved: dict[str, Any] = dict(arguments) if isinstance(arguments, dict) else {}

    if "owner" not in resolved and default_owner:
        resolved["owner"] = default_owner
    if "repo" not in resolved and default_repo:
        resolved["repo"] = default_repo

    return resolved
