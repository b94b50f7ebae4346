"""Domain methods for the n8n public REST API."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote, urlencode

from n8nlink.models import ExecutionStatus

from .base import BaseClient


def _path_id(value: str) -> str:
    return quote(value, safe="")


def _with_query(path: str, params: dict[str, Any]) -> str:
    """Append only the parameters that are set."""
    query = {k: v for k, v in params.items() if v is not None and v != ""}
    if not query:
        return path
    return f"{path}?{urlencode(query)}"


class N8nClient(BaseClient):
    """Client for workflows, executions, credentials, tags, variables and audits."""

    # Workflows

    async def list_workflows(
        self,
        active: bool | None = None,
        tags: str | None = None,
        cursor: str | None = None,
        limit: int | None = None,
    ) -> dict[str, Any]:
        """List workflows, optionally filtered by active flag or comma-separated tags."""
        params = {
            "active": None if active is None else str(active).lower(),
            "tags": tags,
            "cursor": cursor,
            "limit": limit or None,
        }
        result: dict[str, Any] = await self.request(_with_query("/workflows", params))
        return result

    async def get_workflow(self, workflow_id: str) -> dict[str, Any]:
        result: dict[str, Any] = await self.request(f"/workflows/{_path_id(workflow_id)}")
        return result

    async def create_workflow(self, workflow: dict[str, Any]) -> dict[str, Any]:
        """Create a workflow. n8n always creates it inactive."""
        result: dict[str, Any] = await self.request("/workflows", method="POST", body=workflow)
        return result

    async def update_workflow(self, workflow_id: str, workflow: dict[str, Any]) -> dict[str, Any]:
        result: dict[str, Any] = await self.request(
            f"/workflows/{_path_id(workflow_id)}", method="PUT", body=workflow
        )
        return result

    async def delete_workflow(self, workflow_id: str) -> None:
        await self.request(f"/workflows/{_path_id(workflow_id)}", method="DELETE")

    async def activate_workflow(self, workflow_id: str) -> dict[str, Any]:
        result: dict[str, Any] = await self.request(
            f"/workflows/{_path_id(workflow_id)}/activate", method="POST"
        )
        return result

    async def deactivate_workflow(self, workflow_id: str) -> dict[str, Any]:
        result: dict[str, Any] = await self.request(
            f"/workflows/{_path_id(workflow_id)}/deactivate", method="POST"
        )
        return result

    # Executions

    async def list_executions(
        self,
        workflow_id: str | None = None,
        status: ExecutionStatus | None = None,
        cursor: str | None = None,
        limit: int | None = None,
    ) -> dict[str, Any]:
        params = {
            "workflowId": workflow_id,
            "status": status,
            "cursor": cursor,
            "limit": limit or None,
        }
        result: dict[str, Any] = await self.request(_with_query("/executions", params))
        return result

    async def get_execution(self, execution_id: str) -> dict[str, Any]:
        result: dict[str, Any] = await self.request(f"/executions/{_path_id(execution_id)}")
        return result

    async def delete_execution(self, execution_id: str) -> None:
        await self.request(f"/executions/{_path_id(execution_id)}", method="DELETE")

    async def retry_execution(self, execution_id: str, load_workflow: bool = False) -> dict[str, Any]:
        """Retry a failed execution.

        Args:
            execution_id: The execution to retry.
            load_workflow: Use the current workflow definition instead of the
                one the execution originally ran with.
        """
        result: dict[str, Any] = await self.request(
            f"/executions/{_path_id(execution_id)}/retry",
            method="POST",
            body={"loadWorkflow": load_workflow},
        )
        return result

    # Credentials

    async def list_credentials(self) -> dict[str, Any]:
        result: dict[str, Any] = await self.request("/credentials")
        return result

    async def get_credential_schema(self, credential_type: str) -> dict[str, Any]:
        result: dict[str, Any] = await self.request(
            f"/credentials/schema/{_path_id(credential_type)}"
        )
        return result

    # Tags

    async def list_tags(self) -> dict[str, Any]:
        result: dict[str, Any] = await self.request("/tags")
        return result

    async def create_tag(self, name: str) -> dict[str, Any]:
        result: dict[str, Any] = await self.request("/tags", method="POST", body={"name": name})
        return result

    # Variables

    async def list_variables(self) -> dict[str, Any]:
        result: dict[str, Any] = await self.request("/variables")
        return result

    # Audit

    async def run_audit(self, categories: list[str] | None = None) -> dict[str, Any]:
        """Generate a security audit, optionally limited to some categories."""
        body: dict[str, Any] = {}
        if categories:
            body["categories"] = categories
        result: dict[str, Any] = await self.request("/audit", method="POST", body=body)
        return result
