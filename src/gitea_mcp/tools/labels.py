"""Label tools."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from gitea_mcp.protocol.models import ToolDef
from gitea_mcp.tools.params import (
    IdOrName,
    OptionalInt,
    OptionalStr,
    PageParams,
    ToolParams,
    compact,
    positive,
    query,
    require,
    require_all,
    segment,
    tool_handler,
)
from gitea_mcp.tools.schema import LIMIT, PAGE, integer, repo_schema, string

if TYPE_CHECKING:
    from gitea_mcp.gitea.client import GiteaClient
    from gitea_mcp.tools.registry import ToolRegistry


class GetLabelParams(ToolParams):
    id: IdOrName = None


class CreateLabelParams(ToolParams):
    name: OptionalStr = None
    color: OptionalStr = None
    description: OptionalStr = None


class LabelParams(ToolParams):
    id: OptionalInt = None


class EditLabelParams(LabelParams):
    name: OptionalStr = None
    color: OptionalStr = None
    description: OptionalStr = None


@tool_handler(PageParams)
async def list_labels(client: GiteaClient, params: PageParams) -> Any:
    return await client.get(
        f"{params.repo_path()}/labels",
        query(page=positive(params.page), limit=positive(params.limit)),
    )


@tool_handler(GetLabelParams)
async def get_label(client: GiteaClient, params: GetLabelParams) -> Any:
    base = params.repo_path()
    label = require(params.id, "id")
    return await client.get(f"{base}/labels/{segment(label)}")


@tool_handler(CreateLabelParams)
async def create_label(client: GiteaClient, params: CreateLabelParams) -> Any:
    base = params.repo_path()
    require_all(name=params.name, color=params.color)
    body = compact(name=params.name, color=params.color, description=params.description)
    return await client.post(f"{base}/labels", body)


@tool_handler(EditLabelParams)
async def edit_label(client: GiteaClient, params: EditLabelParams) -> Any:
    base = params.repo_path()
    label_id = require(params.id, "id")
    body = compact(name=params.name, color=params.color, description=params.description)
    return await client.patch(f"{base}/labels/{label_id}", body)


@tool_handler(LabelParams)
async def delete_label(client: GiteaClient, params: LabelParams) -> dict[str, str]:
    base = params.repo_path()
    label_id = require(params.id, "id")
    await client.delete(f"{base}/labels/{label_id}")
    return {"status": "deleted"}


def register(registry: ToolRegistry) -> None:
    registry.register(
        ToolDef(
            name="list_labels",
            description="List labels in a repository",
            input_schema=repo_schema(page=PAGE, limit=LIMIT),
        ),
        list_labels,
    )
    registry.register(
        ToolDef(
            name="get_label",
            description="Get a single label by ID or name",
            input_schema=repo_schema(required=("id",), id=string("Label ID or name")),
        ),
        get_label,
    )
    registry.register(
        ToolDef(
            name="create_label",
            description="Create a new label in a repository",
            input_schema=repo_schema(
                required=("name", "color"),
                name=string("Label name"),
                color=string("Label color (hex code, e.g. '#00aabb')"),
                description=string("Label description"),
            ),
        ),
        create_label,
    )
    registry.register(
        ToolDef(
            name="edit_label",
            description="Edit an existing label",
            input_schema=repo_schema(
                required=("id",),
                id=integer("Label ID"),
                name=string("New label name"),
                color=string("New label color (hex code)"),
                description=string("New label description"),
            ),
        ),
        edit_label,
    )
    registry.register(
        ToolDef(
            name="delete_label",
            description="Delete a label from a repository",
            input_schema=repo_schema(required=("id",), id=integer("Label ID")),
        ),
        delete_label,
    )
