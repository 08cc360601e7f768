"""Tests for project, column and board item tool handlers."""

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from gitea_mcp.gitea.errors import APIError
from gitea_mcp.tools import projects
from gitea_mcp.tools.errors import ToolInputError
from gitea_mcp.tools.projects import UNASSIGNED, BoardPlacement, place_item

REPO = {"owner": "acme", "repo": "widgets"}
BASE = "/repos/acme/widgets"


def _client(value: Any = None) -> MagicMock:
    client = MagicMock()
    client.get = AsyncMock(return_value=value)
    client.post = AsyncMock(return_value=value)
    client.patch = AsyncMock(return_value=value)
    client.delete = AsyncMock(return_value=None)
    return client


class TestProjects:
    async def test_list(self) -> None:
        client = _client([])
        await projects.list_projects(client, {**REPO, "state": "open", "page": 1})
        client.get.assert_awaited_once_with(f"{BASE}/projects", {"state": "open", "page": "1"})

    async def test_get(self) -> None:
        client = _client({"id": 1})
        await projects.get_project(client, {**REPO, "id": 1})
        client.get.assert_awaited_once_with(f"{BASE}/projects/1")

    async def test_get_requires_id(self) -> None:
        with pytest.raises(ToolInputError, match="^id is required$"):
            await projects.get_project(_client(), dict(REPO))

    async def test_create_sends_zero_types(self) -> None:
        client = _client({"id": 1})
        await projects.create_project(client, {**REPO, "title": "Roadmap", "template_type": 0, "card_type": 0})
        client.post.assert_awaited_once_with(
            f"{BASE}/projects",
            {"title": "Roadmap", "template_type": 0, "card_type": 0},
        )

    async def test_create_omits_absent_types(self) -> None:
        client = _client({"id": 1})
        await projects.create_project(client, {**REPO, "title": "Roadmap", "description": "Plan"})
        assert client.post.await_args.args[1] == {"title": "Roadmap", "description": "Plan"}

    async def test_create_requires_title(self) -> None:
        with pytest.raises(ToolInputError, match="^title is required$"):
            await projects.create_project(_client(), dict(REPO))

    async def test_edit(self) -> None:
        client = _client({"id": 1})
        await projects.edit_project(client, {**REPO, "id": 1, "state": "closed", "card_type": 0})
        client.patch.assert_awaited_once_with(f"{BASE}/projects/1", {"card_type": 0, "state": "closed"})

    async def test_delete(self) -> None:
        client = _client()
        assert await projects.delete_project(client, {**REPO, "id": 1}) == {"status": "deleted"}
        client.delete.assert_awaited_once_with(f"{BASE}/projects/1")


class TestColumns:
    async def test_list(self) -> None:
        client = _client([])
        await projects.list_project_columns(client, {**REPO, "project_id": 2})
        client.get.assert_awaited_once_with(f"{BASE}/projects/2/columns")

    async def test_list_requires_project(self) -> None:
        with pytest.raises(ToolInputError, match="^project_id is required$"):
            await projects.list_project_columns(_client(), dict(REPO))

    async def test_create(self) -> None:
        client = _client({"id": 5})
        await projects.create_project_column(client, {**REPO, "project_id": 2, "title": "Done", "color": "#00ff00"})
        client.post.assert_awaited_once_with(f"{BASE}/projects/2/columns", {"title": "Done", "color": "#00ff00"})

    async def test_create_requires_title(self) -> None:
        with pytest.raises(ToolInputError, match="^title is required$"):
            await projects.create_project_column(_client(), {**REPO, "project_id": 2})

    async def test_edit(self) -> None:
        client = _client({"id": 5})
        await projects.edit_project_column(client, {**REPO, "project_id": 2, "column_id": 5, "title": "Doing"})
        client.patch.assert_awaited_once_with(f"{BASE}/projects/2/columns/5", {"title": "Doing"})

    @pytest.mark.parametrize("args", [{"project_id": 2}, {"column_id": 5}, {}])
    async def test_column_tools_require_both_ids(self, args: dict[str, Any]) -> None:
        client = _client()
        with pytest.raises(ToolInputError, match="^project_id and column_id are required$"):
            await projects.delete_project_column(client, {**REPO, **args})
        client.delete.assert_not_awaited()

    async def test_delete(self) -> None:
        client = _client()
        result = await projects.delete_project_column(client, {**REPO, "project_id": 2, "column_id": 5})
        assert result == {"status": "deleted"}
        client.delete.assert_awaited_once_with(f"{BASE}/projects/2/columns/5")

    async def test_delete_default_column_error_propagates(self) -> None:
        client = _client()
        client.delete.side_effect = APIError(403, '{"message":"cannot delete the default column"}')
        with pytest.raises(APIError, match="cannot delete"):
            await projects.delete_project_column(client, {**REPO, "project_id": 2, "column_id": 1})

    async def test_move(self) -> None:
        client = _client({"id": 5})
        await projects.move_project_column(client, {**REPO, "project_id": 2, "column_id": 5, "sorting": 3})
        client.post.assert_awaited_once_with(f"{BASE}/projects/2/columns/5/move", {"sorting": 3})

    async def test_move_defaults_sorting_to_zero(self) -> None:
        client = _client({"id": 5})
        await projects.move_project_column(client, {**REPO, "project_id": 2, "column_id": 5})
        assert client.post.await_args.args[1] == {"sorting": 0}

    async def test_set_default(self) -> None:
        client = _client({"id": 5, "default": True})
        await projects.set_default_project_column(client, {**REPO, "project_id": 2, "column_id": 5})
        client.post.assert_awaited_once_with(f"{BASE}/projects/2/columns/5/default")


class TestItems:
    async def test_list_column_items(self) -> None:
        client = _client([])
        await projects.list_project_column_items(client, {**REPO, "project_id": 2, "column_id": 5})
        client.get.assert_awaited_once_with(f"{BASE}/projects/2/columns/5/items")

    async def test_assign(self) -> None:
        client = _client({"id": 9, "issue_id": 40})
        args = {**REPO, "project_id": 2, "column_id": 5, "issue_id": 40}
        assert await projects.assign_project_item(client, args) == {"id": 9, "issue_id": 40}
        client.post.assert_awaited_once_with(f"{BASE}/projects/2/columns/5/items", {"issue_id": 40})

    async def test_assign_requires_all_ids(self) -> None:
        client = _client()
        with pytest.raises(ToolInputError, match="^project_id, column_id and issue_id are required$"):
            await projects.assign_project_item(client, {**REPO, "project_id": 2, "column_id": 5})
        client.post.assert_not_awaited()

    async def test_move_item(self) -> None:
        client = _client({"id": 9})
        args = {**REPO, "project_id": 2, "item_id": 9, "column_id": 6, "sorting": 1}
        await projects.move_project_item(client, args)
        client.post.assert_awaited_once_with(f"{BASE}/projects/2/items/9/move", {"column_id": 6, "sorting": 1})

    async def test_move_item_requires_target_column(self) -> None:
        with pytest.raises(ToolInputError, match="^column_id is required$"):
            await projects.move_project_item(_client(), {**REPO, "project_id": 2, "item_id": 9})

    async def test_move_item_requires_board(self) -> None:
        with pytest.raises(ToolInputError, match="^project_id and item_id are required$"):
            await projects.move_project_item(_client(), {**REPO, "item_id": 9, "column_id": 6})

    async def test_remove(self) -> None:
        client = _client()
        result = await projects.remove_project_item(client, {**REPO, "project_id": 2, "item_id": 9})
        assert result == {"status": "removed"}
        client.delete.assert_awaited_once_with(f"{BASE}/projects/2/items/9")


class TestBoardPlacement:
    def test_unassigned_is_off_board(self) -> None:
        assert UNASSIGNED == BoardPlacement(project_id=0, column_id=0)
        assert not UNASSIGNED.on_board
        assert BoardPlacement(project_id=1, column_id=2).on_board

    async def test_unassign_needs_board_and_item(self) -> None:
        client = _client()
        with pytest.raises(ToolInputError, match="project_id and item_id are required"):
            await place_item(client, BASE, UNASSIGNED, item_id=9)
        client.delete.assert_not_awaited()

    async def test_unassign_deletes_from_board(self) -> None:
        client = _client()
        result = await place_item(client, BASE, UNASSIGNED, project_id=2, item_id=9)
        assert result == {"status": "removed"}
        client.delete.assert_awaited_once_with(f"{BASE}/projects/2/items/9")

    async def test_partial_placement_rejected(self) -> None:
        client = _client()
        with pytest.raises(ToolInputError):
            await place_item(client, BASE, BoardPlacement(project_id=1, column_id=0), issue_id=4)
        client.post.assert_not_awaited()
