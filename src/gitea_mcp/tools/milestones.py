"""Milestone tools.

Milestones are addressed by ID or by name; a numeric ``id`` argument is
sent as its decimal form.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from gitea_mcp.protocol.models import ToolDef
from gitea_mcp.tools.params import (
    IdOrName,
    OptionalStr,
    PageParams,
    ToolParams,
    compact,
    positive,
    query,
    require,
    segment,
    tool_handler,
)
from gitea_mcp.tools.schema import LIMIT, PAGE, STATE_FILTER, STATE_VALUES, repo_schema, string

if TYPE_CHECKING:
    from gitea_mcp.gitea.client import GiteaClient
    from gitea_mcp.tools.registry import ToolRegistry

MILESTONE_ID = string("Milestone ID or name")


class ListMilestonesParams(PageParams):
    state: OptionalStr = None


class MilestoneParams(ToolParams):
    id: IdOrName = None

    def milestone_path(self) -> str:
        base = self.repo_path()
        return f"{base}/milestones/{segment(require(self.id, 'id'))}"


class CreateMilestoneParams(ToolParams):
    title: OptionalStr = None
    description: OptionalStr = None
    due_on: OptionalStr = None
    state: OptionalStr = None


class EditMilestoneParams(MilestoneParams):
    title: OptionalStr = None
    description: OptionalStr = None
    due_on: OptionalStr = None
    state: OptionalStr = None


@tool_handler(ListMilestonesParams)
async def list_milestones(client: GiteaClient, params: ListMilestonesParams) -> Any:
    return await client.get(
        f"{params.repo_path()}/milestones",
        query(state=params.state, page=positive(params.page), limit=positive(params.limit)),
    )


@tool_handler(MilestoneParams)
async def get_milestone(client: GiteaClient, params: MilestoneParams) -> Any:
    return await client.get(params.milestone_path())


@tool_handler(CreateMilestoneParams)
async def create_milestone(client: GiteaClient, params: CreateMilestoneParams) -> Any:
    base = params.repo_path()
    title = require(params.title, "title")
    body = compact(
        title=title,
        description=params.description,
        due_on=params.due_on,
        state=params.state,
    )
    return await client.post(f"{base}/milestones", body)


@tool_handler(EditMilestoneParams)
async def edit_milestone(client: GiteaClient, params: EditMilestoneParams) -> Any:
    path = params.milestone_path()
    body = compact(
        title=params.title,
        description=params.description,
        due_on=params.due_on,
        state=params.state,
    )
    return await client.patch(path, body)


@tool_handler(MilestoneParams)
async def delete_milestone(client: GiteaClient, params: MilestoneParams) -> dict[str, str]:
    await client.delete(params.milestone_path())
    return {"status": "deleted"}


def register(registry: ToolRegistry) -> None:
    registry.register(
        ToolDef(
            name="list_milestones",
            description="List milestones in a repository",
            input_schema=repo_schema(
                state=string("Filter by state", STATE_FILTER),
                page=PAGE,
                limit=LIMIT,
            ),
        ),
        list_milestones,
    )
    registry.register(
        ToolDef(
            name="get_milestone",
            description="Get a single milestone by ID or name",
            input_schema=repo_schema(required=("id",), id=MILESTONE_ID),
        ),
        get_milestone,
    )
    registry.register(
        ToolDef(
            name="create_milestone",
            description="Create a new milestone in a repository",
            input_schema=repo_schema(
                required=("title",),
                title=string("Milestone title"),
                description=string("Milestone description"),
                due_on=string("Due date (ISO 8601 format)"),
                state=string("Milestone state", STATE_VALUES),
            ),
        ),
        create_milestone,
    )
    registry.register(
        ToolDef(
            name="edit_milestone",
            description="Edit an existing milestone",
            input_schema=repo_schema(
                required=("id",),
                id=MILESTONE_ID,
                title=string("New title"),
                description=string("New description"),
                due_on=string("New due date (ISO 8601 format)"),
                state=string("New state", STATE_VALUES),
            ),
        ),
        edit_milestone,
    )
    registry.register(
        ToolDef(
            name="delete_milestone",
            description="Delete a milestone from a repository",
            input_schema=repo_schema(required=("id",), id=MILESTONE_ID),
        ),
        delete_milestone,
    )
