"""Issue and issue comment tools."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from gitea_mcp.protocol.models import ToolDef
from gitea_mcp.tools.params import (
    OptionalInt,
    OptionalIntList,
    OptionalStr,
    OptionalStrList,
    PageParams,
    ToolParams,
    compact,
    positive,
    query,
    require,
    tool_handler,
)
from gitea_mcp.tools.schema import LIMIT, PAGE, STATE_FILTER, STATE_VALUES, array, integer, repo_schema, string

if TYPE_CHECKING:
    from gitea_mcp.gitea.client import GiteaClient
    from gitea_mcp.tools.registry import ToolRegistry

INDEX = integer("Issue index number")
COMMENT_ID = integer("Comment ID")


# ---------------------------------------------------------------------------
# Parameters
# ---------------------------------------------------------------------------


class ListIssuesParams(PageParams):
    state: OptionalStr = None
    labels: OptionalStr = None
    q: OptionalStr = None
    milestone: OptionalStr = None


class IssueParams(ToolParams):
    index: OptionalInt = None


class CreateIssueParams(ToolParams):
    title: OptionalStr = None
    body: OptionalStr = None
    assignees: OptionalStrList = None
    labels: OptionalIntList = None
    milestone: OptionalInt = None
    due_date: OptionalStr = None


class EditIssueParams(IssueParams):
    title: OptionalStr = None
    body: OptionalStr = None
    state: OptionalStr = None
    assignees: OptionalStrList = None
    milestone: OptionalInt = None
    due_date: OptionalStr = None


class ListCommentsParams(IssueParams):
    since: OptionalStr = None
    before: OptionalStr = None


class CreateCommentParams(IssueParams):
    body: OptionalStr = None


class CommentParams(ToolParams):
    id: OptionalInt = None


class EditCommentParams(CommentParams):
    body: OptionalStr = None


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


@tool_handler(ListIssuesParams)
async def list_issues(client: GiteaClient, params: ListIssuesParams) -> Any:
    # Pull requests share the issues endpoint; only plain issues are listed.
    return await client.get(
        f"{params.repo_path()}/issues",
        query(
            state=params.state,
            labels=params.labels,
            q=params.q,
            milestones=params.milestone,
            page=positive(params.page),
            limit=positive(params.limit),
            type="issues",
        ),
    )


@tool_handler(IssueParams)
async def get_issue(client: GiteaClient, params: IssueParams) -> Any:
    base = params.repo_path()
    index = require(params.index, "index")
    return await client.get(f"{base}/issues/{index}")


@tool_handler(CreateIssueParams)
async def create_issue(client: GiteaClient, params: CreateIssueParams) -> Any:
    base = params.repo_path()
    title = require(params.title, "title")
    body = compact(
        title=title,
        body=params.body,
        assignees=params.assignees or None,
        labels=params.labels or None,
        milestone=positive(params.milestone),
        due_date=params.due_date,
    )
    return await client.post(f"{base}/issues", body)


@tool_handler(EditIssueParams)
async def edit_issue(client: GiteaClient, params: EditIssueParams) -> Any:
    """Patch only the given fields.

    An explicit empty ``assignees`` list clears the assignees and
    ``milestone: 0`` clears the milestone.
    """
    base = params.repo_path()
    index = require(params.index, "index")
    body = compact(
        title=params.title,
        body=params.body,
        state=params.state,
        assignees=params.assignees,
        milestone=params.milestone,
        due_date=params.due_date,
    )
    return await client.patch(f"{base}/issues/{index}", body)


@tool_handler(IssueParams)
async def delete_issue(client: GiteaClient, params: IssueParams) -> None:
    base = params.repo_path()
    index = require(params.index, "index")
    await client.delete(f"{base}/issues/{index}")


@tool_handler(ListCommentsParams)
async def list_issue_comments(client: GiteaClient, params: ListCommentsParams) -> Any:
    base = params.repo_path()
    index = require(params.index, "index")
    return await client.get(
        f"{base}/issues/{index}/comments",
        query(since=params.since, before=params.before),
    )


@tool_handler(CommentParams)
async def get_issue_comment(client: GiteaClient, params: CommentParams) -> Any:
    base = params.repo_path()
    comment_id = require(params.id, "id")
    return await client.get(f"{base}/issues/comments/{comment_id}")


@tool_handler(CreateCommentParams)
async def create_issue_comment(client: GiteaClient, params: CreateCommentParams) -> Any:
    base = params.repo_path()
    index = require(params.index, "index")
    body = require(params.body, "body")
    return await client.post(f"{base}/issues/{index}/comments", {"body": body})


@tool_handler(EditCommentParams)
async def edit_issue_comment(client: GiteaClient, params: EditCommentParams) -> Any:
    base = params.repo_path()
    comment_id = require(params.id, "id")
    body = require(params.body, "body")
    return await client.patch(f"{base}/issues/comments/{comment_id}", {"body": body})


@tool_handler(CommentParams)
async def delete_issue_comment(client: GiteaClient, params: CommentParams) -> None:
    base = params.repo_path()
    comment_id = require(params.id, "id")
    await client.delete(f"{base}/issues/comments/{comment_id}")


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------


def register(registry: ToolRegistry) -> None:
    """Register the issue tools, in catalogue order."""
    registry.register(
        ToolDef(
            name="list_issues",
            description="List and search issues in a repository",
            input_schema=repo_schema(
                state=string("Filter by state", STATE_FILTER),
                labels=string("Comma-separated list of label names"),
                q=string("Search query"),
                milestone=string("Milestone name or ID"),
                page=PAGE,
                limit=LIMIT,
            ),
        ),
        list_issues,
    )
    registry.register(
        ToolDef(
            name="get_issue",
            description="Get a single issue by its index number",
            input_schema=repo_schema(required=("index",), index=INDEX),
        ),
        get_issue,
    )
    registry.register(
        ToolDef(
            name="create_issue",
            description="Create a new issue in a repository",
            input_schema=repo_schema(
                required=("title",),
                title=string("Issue title"),
                body=string("Issue body/description"),
                assignees=array("List of assignee usernames"),
                labels=array("List of label IDs"),
                milestone=integer("Milestone ID"),
                due_date=string("Due date (ISO 8601 format)"),
            ),
        ),
        create_issue,
    )
    registry.register(
        ToolDef(
            name="edit_issue",
            description="Edit an existing issue",
            input_schema=repo_schema(
                required=("index",),
                index=INDEX,
                title=string("New title"),
                body=string("New body/description"),
                state=string("New state", STATE_VALUES),
                assignees=array("List of assignee usernames"),
                milestone=integer("Milestone ID (0 to clear)"),
                due_date=string("Due date (ISO 8601 format)"),
            ),
        ),
        edit_issue,
    )
    registry.register(
        ToolDef(
            name="delete_issue",
            description="Delete an issue from a repository",
            input_schema=repo_schema(required=("index",), index=INDEX),
        ),
        delete_issue,
    )
    registry.register(
        ToolDef(
            name="list_issue_comments",
            description="List comments on an issue",
            input_schema=repo_schema(
                required=("index",),
                index=INDEX,
                since=string("Only show comments updated after this date (ISO 8601 format)"),
                before=string("Only show comments updated before this date (ISO 8601 format)"),
            ),
        ),
        list_issue_comments,
    )
    registry.register(
        ToolDef(
            name="get_issue_comment",
            description="Get a single comment on an issue by its ID",
            input_schema=repo_schema(required=("id",), id=COMMENT_ID),
        ),
        get_issue_comment,
    )
    registry.register(
        ToolDef(
            name="create_issue_comment",
            description="Add a comment to an issue",
            input_schema=repo_schema(
                required=("index", "body"),
                index=INDEX,
                body=string("Comment body"),
            ),
        ),
        create_issue_comment,
    )
    registry.register(
        ToolDef(
            name="edit_issue_comment",
            description="Edit an existing comment on an issue",
            input_schema=repo_schema(
                required=("id", "body"),
                id=COMMENT_ID,
                body=string("New comment body"),
            ),
        ),
        edit_issue_comment,
    )
    registry.register(
        ToolDef(
            name="delete_issue_comment",
            description="Delete a comment on an issue",
            input_schema=repo_schema(required=("id",), id=COMMENT_ID),
        ),
        delete_issue_comment,
    )
