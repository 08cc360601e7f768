"""Project board tools: projects, their columns and the issues placed on them.

An issue's position on a board is a :class:`BoardPlacement`. Assigning an
item places it in a column; placing it at :data:`UNASSIGNED` takes it off
the board.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from gitea_mcp.protocol.models import ToolDef
from gitea_mcp.tools.errors import ToolInputError
from gitea_mcp.tools.params import (
    OptionalInt,
    OptionalStr,
    PageParams,
    ToolParams,
    compact,
    positive,
    query,
    require,
    require_all,
    tool_handler,
)
from gitea_mcp.tools.schema import LIMIT, PAGE, STATE_FILTER, STATE_VALUES, integer, repo_schema, string

if TYPE_CHECKING:
    from gitea_mcp.gitea.client import GiteaClient
    from gitea_mcp.tools.registry import ToolRegistry

PROJECT_ID = integer("Project ID")
COLUMN_ID = integer("Column ID")
ITEM_ID = integer("Project item ID")
CARD_TYPE = integer("Card type (0=text only, 1=images and text)")


# ---------------------------------------------------------------------------
# Board placement
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BoardPlacement:
    """Where an issue sits: a project board and one of its columns."""

    project_id: int
    column_id: int

    @property
    def on_board(self) -> bool:
        return self.project_id > 0 and self.column_id > 0


UNASSIGNED = BoardPlacement(project_id=0, column_id=0)


async def place_item(
    client: GiteaClient,
    base: str,
    placement: BoardPlacement,
    *,
    issue_id: int | None = None,
    project_id: int | None = None,
    item_id: int | None = None,
) -> Any:
    """Set the board placement of an issue.

    Placing an issue (``issue_id``) in a column adds it to that board.
    Placing an existing item (``item_id`` on board ``project_id``) at
    :data:`UNASSIGNED` removes it from that board.
    """
    if placement == UNASSIGNED:
        if not project_id or not item_id:
            raise ToolInputError("project_id and item_id are required")
        await client.delete(f"{base}/projects/{project_id}/items/{item_id}")
        return {"status": "removed"}

    if not placement.on_board or issue_id is None:
        raise ToolInputError("project_id, column_id and issue_id are required")
    return await client.post(
        f"{base}/projects/{placement.project_id}/columns/{placement.column_id}/items",
        {"issue_id": issue_id},
    )


# ---------------------------------------------------------------------------
# Parameters
# ---------------------------------------------------------------------------


class ListProjectsParams(PageParams):
    state: OptionalStr = None


class ProjectParams(ToolParams):
    id: OptionalInt = None


class CreateProjectParams(ToolParams):
    title: OptionalStr = None
    description: OptionalStr = None
    template_type: OptionalInt = None
    card_type: OptionalInt = None


class EditProjectParams(ProjectParams):
    title: OptionalStr = None
    description: OptionalStr = None
    card_type: OptionalInt = None
    state: OptionalStr = None


class BoardParams(ToolParams):
    project_id: OptionalInt = None


class CreateColumnParams(BoardParams):
    title: OptionalStr = None
    color: OptionalStr = None


class ColumnParams(BoardParams):
    column_id: OptionalInt = None

    def column_path(self) -> str:
        base = self.repo_path()
        require_all(project_id=self.project_id, column_id=self.column_id)
        return f"{base}/projects/{self.project_id}/columns/{self.column_id}"


class EditColumnParams(ColumnParams):
    title: OptionalStr = None
    color: OptionalStr = None


class MoveColumnParams(ColumnParams):
    sorting: OptionalInt = None


class AssignItemParams(ColumnParams):
    issue_id: OptionalInt = None


class ItemParams(BoardParams):
    item_id: OptionalInt = None

    def item_path(self) -> str:
        base = self.repo_path()
        require_all(project_id=self.project_id, item_id=self.item_id)
        return f"{base}/projects/{self.project_id}/items/{self.item_id}"


class MoveItemParams(ItemParams):
    column_id: OptionalInt = None
    sorting: OptionalInt = None


# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------


@tool_handler(ListProjectsParams)
async def list_projects(client: GiteaClient, params: ListProjectsParams) -> Any:
    return await client.get(
        f"{params.repo_path()}/projects",
        query(state=params.state, page=positive(params.page), limit=positive(params.limit)),
    )


@tool_handler(ProjectParams)
async def get_project(client: GiteaClient, params: ProjectParams) -> Any:
    base = params.repo_path()
    project_id = require(params.id, "id")
    return await client.get(f"{base}/projects/{project_id}")


@tool_handler(CreateProjectParams)
async def create_project(client: GiteaClient, params: CreateProjectParams) -> Any:
    base = params.repo_path()
    title = require(params.title, "title")
    # template_type and card_type are sent even when 0.
    body = compact(
        title=title,
        description=params.description,
        template_type=params.template_type,
        card_type=params.card_type,
    )
    return await client.post(f"{base}/projects", body)


@tool_handler(EditProjectParams)
async def edit_project(client: GiteaClient, params: EditProjectParams) -> Any:
    base = params.repo_path()
    project_id = require(params.id, "id")
    body = compact(
        title=params.title,
        description=params.description,
        card_type=params.card_type,
        state=params.state,
    )
    return await client.patch(f"{base}/projects/{project_id}", body)


@tool_handler(ProjectParams)
async def delete_project(client: GiteaClient, params: ProjectParams) -> dict[str, str]:
    base = params.repo_path()
    project_id = require(params.id, "id")
    await client.delete(f"{base}/projects/{project_id}")
    return {"status": "deleted"}


# ---------------------------------------------------------------------------
# Columns
# ---------------------------------------------------------------------------


@tool_handler(BoardParams)
async def list_project_columns(client: GiteaClient, params: BoardParams) -> Any:
    base = params.repo_path()
    project_id = require(params.project_id, "project_id")
    return await client.get(f"{base}/projects/{project_id}/columns")


@tool_handler(CreateColumnParams)
async def create_project_column(client: GiteaClient, params: CreateColumnParams) -> Any:
    base = params.repo_path()
    project_id = require(params.project_id, "project_id")
    title = require(params.title, "title")
    return await client.post(
        f"{base}/projects/{project_id}/columns",
        compact(title=title, color=params.color),
    )


@tool_handler(EditColumnParams)
async def edit_project_column(client: GiteaClient, params: EditColumnParams) -> Any:
    path = params.column_path()
    return await client.patch(path, compact(title=params.title, color=params.color))


@tool_handler(ColumnParams)
async def delete_project_column(client: GiteaClient, params: ColumnParams) -> dict[str, str]:
    await client.delete(params.column_path())
    return {"status": "deleted"}


@tool_handler(MoveColumnParams)
async def move_project_column(client: GiteaClient, params: MoveColumnParams) -> Any:
    path = params.column_path()
    return await client.post(f"{path}/move", {"sorting": params.sorting or 0})


@tool_handler(ColumnParams)
async def set_default_project_column(client: GiteaClient, params: ColumnParams) -> Any:
    return await client.post(f"{params.column_path()}/default")


# ---------------------------------------------------------------------------
# Items
# ---------------------------------------------------------------------------


@tool_handler(ColumnParams)
async def list_project_column_items(client: GiteaClient, params: ColumnParams) -> Any:
    return await client.get(f"{params.column_path()}/items")


@tool_handler(AssignItemParams)
async def assign_project_item(client: GiteaClient, params: AssignItemParams) -> Any:
    base = params.repo_path()
    require_all(project_id=params.project_id, column_id=params.column_id, issue_id=params.issue_id)
    placement = BoardPlacement(project_id=params.project_id or 0, column_id=params.column_id or 0)
    return await place_item(client, base, placement, issue_id=params.issue_id)


@tool_handler(MoveItemParams)
async def move_project_item(client: GiteaClient, params: MoveItemParams) -> Any:
    path = params.item_path()
    column_id = require(params.column_id, "column_id")
    return await client.post(f"{path}/move", {"column_id": column_id, "sorting": params.sorting or 0})


@tool_handler(ItemParams)
async def remove_project_item(client: GiteaClient, params: ItemParams) -> Any:
    base = params.repo_path()
    require_all(project_id=params.project_id, item_id=params.item_id)
    return await place_item(client, base, UNASSIGNED, project_id=params.project_id, item_id=params.item_id)


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------


def register(registry: ToolRegistry) -> None:
    """Register project, column and item tools, in catalogue order."""
    registry.register(
        ToolDef(
            name="list_projects",
            description="List projects in a repository",
            input_schema=repo_schema(
                state=string("Filter by state", STATE_FILTER),
                page=PAGE,
                limit=LIMIT,
            ),
        ),
        list_projects,
    )
    registry.register(
        ToolDef(
            name="get_project",
            description="Get a single project by ID",
            input_schema=repo_schema(required=("id",), id=PROJECT_ID),
        ),
        get_project,
    )
    registry.register(
        ToolDef(
            name="create_project",
            description="Create a new project in a repository",
            input_schema=repo_schema(
                required=("title",),
                title=string("Project title"),
                description=string("Project description"),
                template_type=integer("Project template type (0=none, 1=basic kanban, 2=bug triage)"),
                card_type=CARD_TYPE,
            ),
        ),
        create_project,
    )
    registry.register(
        ToolDef(
            name="edit_project",
            description="Edit an existing project",
            input_schema=repo_schema(
                required=("id",),
                id=PROJECT_ID,
                title=string("New title"),
                description=string("New description"),
                card_type=CARD_TYPE,
                state=string("New state", STATE_VALUES),
            ),
        ),
        edit_project,
    )
    registry.register(
        ToolDef(
            name="delete_project",
            description="Delete a project from a repository",
            input_schema=repo_schema(required=("id",), id=PROJECT_ID),
        ),
        delete_project,
    )
    registry.register(
        ToolDef(
            name="list_project_columns",
            description="List columns in a project board",
            input_schema=repo_schema(required=("project_id",), project_id=PROJECT_ID),
        ),
        list_project_columns,
    )
    registry.register(
        ToolDef(
            name="create_project_column",
            description="Create a new column in a project board",
            input_schema=repo_schema(
                required=("project_id", "title"),
                project_id=PROJECT_ID,
                title=string("Column title"),
                color=string("Column color (hex code)"),
            ),
        ),
        create_project_column,
    )
    registry.register(
        ToolDef(
            name="edit_project_column",
            description="Edit an existing project board column",
            input_schema=repo_schema(
                required=("project_id", "column_id"),
                project_id=PROJECT_ID,
                column_id=COLUMN_ID,
                title=string("New column title"),
                color=string("New column color (hex code)"),
            ),
        ),
        edit_project_column,
    )
    registry.register(
        ToolDef(
            name="delete_project_column",
            description="Delete a column from a project board",
            input_schema=repo_schema(
                required=("project_id", "column_id"),
                project_id=PROJECT_ID,
                column_id=COLUMN_ID,
            ),
        ),
        delete_project_column,
    )
    registry.register(
        ToolDef(
            name="move_project_column",
            description="Reorder a column in a project board",
            input_schema=repo_schema(
                required=("project_id", "column_id", "sorting"),
                project_id=PROJECT_ID,
                column_id=COLUMN_ID,
                sorting=integer("New sort position"),
            ),
        ),
        move_project_column,
    )
    registry.register(
        ToolDef(
            name="set_default_project_column",
            description="Make a column the default column of its project board",
            input_schema=repo_schema(
                required=("project_id", "column_id"),
                project_id=PROJECT_ID,
                column_id=COLUMN_ID,
            ),
        ),
        set_default_project_column,
    )
    registry.register(
        ToolDef(
            name="list_project_column_items",
            description="List the issues in a project board column",
            input_schema=repo_schema(
                required=("project_id", "column_id"),
                project_id=PROJECT_ID,
                column_id=COLUMN_ID,
            ),
        ),
        list_project_column_items,
    )
    registry.register(
        ToolDef(
            name="assign_project_item",
            description="Add an issue to a project board column",
            input_schema=repo_schema(
                required=("project_id", "column_id", "issue_id"),
                project_id=PROJECT_ID,
                column_id=COLUMN_ID,
                issue_id=integer("Issue ID (not the index number)"),
            ),
        ),
        assign_project_item,
    )
    registry.register(
        ToolDef(
            name="move_project_item",
            description="Move an item to another column of its project board",
            input_schema=repo_schema(
                required=("project_id", "item_id", "column_id"),
                project_id=PROJECT_ID,
                item_id=ITEM_ID,
                column_id=integer("Target column ID"),
                sorting=integer("Sort position in the target column"),
            ),
        ),
        move_project_item,
    )
    registry.register(
        ToolDef(
            name="remove_project_item",
            description="Remove an item from a project board",
            input_schema=repo_schema(
                required=("project_id", "item_id"),
                project_id=PROJECT_ID,
                item_id=ITEM_ID,
            ),
        ),
        remove_project_item,
    )
