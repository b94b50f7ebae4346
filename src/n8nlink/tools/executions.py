"""Execution tools."""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

from pydantic import Field

from .registry import ToolArgs, ToolRegistry, to_json

if TYPE_CHECKING:
    from n8nlink.client import N8nClient


class ListExecutionsArgs(ToolArgs):
    workflow_id: str | None = Field(
        default=None, alias="workflowId", description="Filter by workflow ID"
    )
    status: Literal["success", "error", "running", "waiting"] | None = Field(
        default=None, description="Filter by execution status"
    )
    limit: int = Field(default=25, ge=1, le=100, description="Maximum results")


class ExecutionIdArgs(ToolArgs):
    execution_id: str = Field(..., alias="executionId", description="The execution ID")


class RetryExecutionArgs(ExecutionIdArgs):
    load_workflow: bool = Field(
        default=False,
        alias="loadWorkflow",
        description="If true, use the latest workflow version; if false, use the original",
    )


@ToolRegistry.register(
    "list_executions",
    "List workflow executions. Filter by workflow ID or status.",
    ListExecutionsArgs,
)
async def list_executions(client: N8nClient, args: ListExecutionsArgs) -> str:
    result = await client.list_executions(
        workflow_id=args.workflow_id, status=args.status, limit=args.limit
    )
    return to_json(result.get("data", []))


@ToolRegistry.register(
    "get_execution",
    "Retrieve an execution including input/output data for each node.",
    ExecutionIdArgs,
)
async def get_execution(client: N8nClient, args: ExecutionIdArgs) -> str:
    return to_json(await client.get_execution(args.execution_id))


@ToolRegistry.register(
    "delete_execution",
    "Delete an execution record.",
    ExecutionIdArgs,
)
async def delete_execution(client: N8nClient, args: ExecutionIdArgs) -> str:
    await client.delete_execution(args.execution_id)
    return f"Execution {args.execution_id} deleted successfully."


@ToolRegistry.register(
    "retry_execution",
    "Retry a failed execution, optionally with the latest workflow version.",
    RetryExecutionArgs,
)
async def retry_execution(client: N8nClient, args: RetryExecutionArgs) -> str:
    execution = await client.retry_execution(args.execution_id, args.load_workflow)
    return (
        "Execution retried successfully!\n"
        f"New execution ID: {execution.get('id')}\n"
        f"Status: {execution.get('status')}"
    )
