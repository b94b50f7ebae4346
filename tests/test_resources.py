"""Tests for n8n:// resources."""

from __future__ import annotations

import json
from unittest.mock import MagicMock

import pytest

from n8nlink.resources import ResourceNotFoundError, find_resource, read_resource


class TestFindResource:
    """Tests for URI matching."""

    @pytest.mark.parametrize(
        ("uri", "name", "params"),
        [
            ("n8n://workflows", "workflows-list", {}),
            ("n8n://workflow/42", "workflow", {"workflowId": "42"}),
            ("n8n://workflow/42/executions", "workflow-executions", {"workflowId": "42"}),
            ("n8n://execution/7", "execution", {"executionId": "7"}),
            ("n8n://tags", "tags", {}),
            ("n8n://credentials", "credentials", {}),
        ],
    )
    def test_matches(self, uri: str, name: str, params: dict[str, str]) -> None:
        resource, found = find_resource(uri)
        assert resource.name == name
        assert found == params

    @pytest.mark.parametrize("uri", ["n8n://variables", "n8n://workflow/", "http://workflows"])
    def test_unknown(self, uri: str) -> None:
        with pytest.raises(ResourceNotFoundError):
            find_resource(uri)


class TestReadResource:
    """Tests for read_resource."""

    @pytest.mark.asyncio
    async def test_workflows_list(self, mock_client: MagicMock) -> None:
        mock_client.list_workflows.return_value = {"data": [{"id": "1"}], "nextCursor": "x"}

        content = await read_resource(mock_client, "n8n://workflows")

        assert content.mime_type == "application/json"
        assert json.loads(content.text) == [{"id": "1"}]
        mock_client.list_workflows.assert_awaited_once_with(limit=100)

    @pytest.mark.asyncio
    async def test_workflow_executions(self, mock_client: MagicMock) -> None:
        mock_client.list_executions.return_value = {"data": []}

        await read_resource(mock_client, "n8n://workflow/42/executions")

        mock_client.list_executions.assert_awaited_once_with(workflow_id="42", limit=50)

    @pytest.mark.asyncio
    async def test_execution(self, mock_client: MagicMock) -> None:
        mock_client.get_execution.return_value = {"id": "7", "status": "success"}

        content = await read_resource(mock_client, "n8n://execution/7")

        assert content.uri == "n8n://execution/7"
        assert json.loads(content.text)["status"] == "success"
