"""Typed tool parameters built from untyped argument maps.

Tool arguments arrive as arbitrary JSON. Each handler declares a
:class:`ToolParams` subclass whose fields use the loose types below: a
value of the wrong type is treated as absent instead of failing
validation, and the handler then decides whether the parameter was
required.
"""

from __future__ import annotations

import functools
import math
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Annotated, Any, Self, TypeVar
from urllib.parse import quote

from pydantic import BaseModel, BeforeValidator, ConfigDict, ValidationError

from gitea_mcp.tools.errors import ToolInputError

if TYPE_CHECKING:
    from gitea_mcp.gitea.client import GiteaClient

OWNER_REPO_REQUIRED = "owner and repo are required (set via parameters or GITEA_OWNER/GITEA_REPO)"

# ---------------------------------------------------------------------------
# Loose coercions
# ---------------------------------------------------------------------------


def _loose_str(value: Any) -> str | None:
    if isinstance(value, str) and value:
        return value
    return None


def _loose_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _loose_str_list(value: Any) -> list[str] | None:
    if not isinstance(value, list):
        return None
    return [item for item in value if isinstance(item, str)]  # pyright: ignore[reportUnknownVariableType]


def _loose_int_list(value: Any) -> list[int] | None:
    if not isinstance(value, list):
        return None
    numbers: list[int] = []
    for item in value:  # pyright: ignore[reportUnknownVariableType]
        number = _loose_int(item)
        if number is not None:
            numbers.append(number)
    return numbers


def _id_or_name(value: Any) -> str | None:
    text = _loose_str(value)
    if text is not None:
        return text
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        number = _loose_int(value)
        if number is not None and number > 0:
            return str(number)
    return None


OptionalStr = Annotated[str | None, BeforeValidator(_loose_str)]
OptionalInt = Annotated[int | None, BeforeValidator(_loose_int)]
OptionalStrList = Annotated[list[str] | None, BeforeValidator(_loose_str_list)]
OptionalIntList = Annotated[list[int] | None, BeforeValidator(_loose_int_list)]
IdOrName = Annotated[str | None, BeforeValidator(_id_or_name)]


# ---------------------------------------------------------------------------
# Parameter models
# ---------------------------------------------------------------------------


class ToolParams(BaseModel):
    """Base for every tool's parameters: the target repository."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    owner: OptionalStr = None
    repo: OptionalStr = None

    @classmethod
    def parse(cls, arguments: dict[str, Any]) -> Self:
        try:
            return cls.model_validate(arguments)
        except ValidationError as exc:
            raise ToolInputError(f"invalid arguments: {exc}") from exc

    def repo_path(self) -> str:
        """Return ``/repos/{owner}/{repo}``; both parts are mandatory."""
        if not self.owner or not self.repo:
            raise ToolInputError(OWNER_REPO_REQUIRED)
        return f"/repos/{segment(self.owner)}/{segment(self.repo)}"


class PageParams(ToolParams):
    page: OptionalInt = None
    limit: OptionalInt = None


# ---------------------------------------------------------------------------
# Helpers for handlers
# ---------------------------------------------------------------------------

T = TypeVar("T")


def require(value: T | None, name: str) -> T:
    """Return *value*, or fail naming the parameter if it is missing, zero or empty."""
    if not value:
        raise ToolInputError(f"{name} is required")
    return value


def require_all(**values: Any) -> None:
    """Fail naming every listed parameter unless all of them are set."""
    if all(values.values()):
        return
    names = list(values)
    joined = names[0] if len(names) == 1 else ", ".join(names[:-1]) + " and " + names[-1]
    raise ToolInputError(f"{joined} are required")


def positive(value: int | None) -> int | None:
    return value if value is not None and value > 0 else None


def compact(**values: Any) -> dict[str, Any]:
    """Drop unset (``None``) and empty-string values."""
    return {key: value for key, value in values.items() if value is not None and value != ""}


def query(**values: Any) -> dict[str, str]:
    """Build a query-string mapping from the set values."""
    return {key: str(value) for key, value in compact(**values).items()}


def segment(value: str | int) -> str:
    """Percent-encode one path segment."""
    return quote(str(value), safe="")


# ---------------------------------------------------------------------------
# Handler adapter
# ---------------------------------------------------------------------------

P = TypeVar("P", bound=ToolParams)
ToolHandler = Callable[["GiteaClient", dict[str, Any]], Awaitable[Any]]


def tool_handler(
    params_model: type[P],
) -> Callable[[Callable[[GiteaClient, P], Awaitable[Any]]], ToolHandler]:
    """Adapt ``handler(client, params)`` to the registry's ``(client, arguments)`` shape.

    The argument map is converted into *params_model* before the handler runs.
    """

    def decorator(func: Callable[[GiteaClient, P], Awaitable[Any]]) -> ToolHandler:
        @functools.wraps(func)
        async def wrapper(client: GiteaClient, arguments: dict[str, Any]) -> Any:
            return await func(client, params_model.parse(arguments))

        return wrapper

    return decorator
