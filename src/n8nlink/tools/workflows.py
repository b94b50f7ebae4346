"""Workflow tools."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import Field

from n8nlink.models import (
    NodeConnections,
    NodeInput,
    WorkflowSettingsInput,
    connections_payload,
    nodes_payload,
)

from .registry import ToolArgs, ToolRegistry, to_json

if TYPE_CHECKING:
    from n8nlink.client import N8nClient

CREATE_WORKFLOW_DESCRIPTION = """Create a new workflow in n8n. The workflow is created in INACTIVE state.

REQUIRED FIELDS:
- name: Workflow name
- nodes: Array of node objects
- connections: How nodes connect to each other
- settings: Must include { "executionOrder": "v1" } at minimum

NODE STRUCTURE:
{
  "id": "unique-id",           // Optional, auto-generated
  "name": "Node Name",         // Required, display name
  "type": "n8n-nodes-base.X",  // Required, node type
  "position": [250, 300],      // Required, [x, y] coordinates
  "parameters": {},            // Node-specific config
  "typeVersion": 1             // Usually 1, check docs
}

CONNECTIONS FORMAT:
{
  "Source Node Name": {
    "main": [[{ "node": "Target Node Name", "type": "main", "index": 0 }]]
  }
}"""


class ListWorkflowsArgs(ToolArgs):
    active: bool | None = Field(default=None, description="Filter by active status")
    tags: str | None = Field(default=None, description="Comma-separated tag names to filter by")
    limit: int = Field(default=50, ge=1, le=100, description="Maximum results to return")


class WorkflowIdArgs(ToolArgs):
    workflow_id: str = Field(..., alias="workflowId", description="The workflow ID")


class CreateWorkflowArgs(ToolArgs):
    name: str = Field(..., description="Name for the new workflow")
    nodes: list[NodeInput] = Field(..., min_length=1, description="Node definitions")
    connections: dict[str, NodeConnections] = Field(
        default_factory=dict, description="Connection mappings keyed by source node name"
    )
    settings: WorkflowSettingsInput = Field(default_factory=WorkflowSettingsInput)


class UpdateWorkflowArgs(ToolArgs):
    workflow_id: str = Field(..., alias="workflowId", description="ID of workflow to update")
    name: str | None = Field(default=None, description="New name for the workflow")
    nodes: list[NodeInput] | None = Field(default=None, description="Complete replacement nodes")
    connections: dict[str, NodeConnections] | None = None
    settings: WorkflowSettingsInput | None = None


def _summary(headline: str, workflow: dict[str, Any]) -> str:
    return (
        f"{headline}\n\n"
        f"ID: {workflow.get('id')}\n"
        f"Name: {workflow.get('name')}\n"
        f"Active: {workflow.get('active')}\n\n"
        f"Full response:\n{to_json(workflow)}"
    )


@ToolRegistry.register(
    "list_workflows",
    "Retrieve all workflows from n8n. Optionally filter by active status or tags.",
    ListWorkflowsArgs,
)
async def list_workflows(client: N8nClient, args: ListWorkflowsArgs) -> str:
    result = await client.list_workflows(active=args.active, tags=args.tags, limit=args.limit)
    return to_json(result.get("data", []))


@ToolRegistry.register(
    "get_workflow",
    "Retrieve a workflow including its nodes, connections and settings.",
    WorkflowIdArgs,
)
async def get_workflow(client: N8nClient, args: WorkflowIdArgs) -> str:
    return to_json(await client.get_workflow(args.workflow_id))


@ToolRegistry.register(
    "create_workflow",
    CREATE_WORKFLOW_DESCRIPTION,
    CreateWorkflowArgs,
    error_prefix="Error creating workflow",
)
async def create_workflow(client: N8nClient, args: CreateWorkflowArgs) -> str:
    workflow = await client.create_workflow(
        {
            "name": args.name,
            "nodes": nodes_payload(args.nodes),
            "connections": connections_payload(args.connections),
            "settings": args.settings.to_payload(),
        }
    )
    return _summary("Workflow created successfully!", workflow)


@ToolRegistry.register(
    "update_workflow",
    "Update an existing workflow's name, nodes, connections and/or settings. "
    "Use activate_workflow or deactivate_workflow to change its active state.",
    UpdateWorkflowArgs,
    error_prefix="Error updating workflow",
)
async def update_workflow(client: N8nClient, args: UpdateWorkflowArgs) -> str:
    updates: dict[str, Any] = {}
    if args.name is not None:
        updates["name"] = args.name
    if args.nodes is not None:
        updates["nodes"] = nodes_payload(args.nodes)
    if args.connections is not None:
        updates["connections"] = connections_payload(args.connections)
    if args.settings is not None:
        updates["settings"] = args.settings.to_payload()

    workflow = await client.update_workflow(args.workflow_id, updates)
    return _summary("Workflow updated successfully!", workflow)


@ToolRegistry.register(
    "delete_workflow",
    "Permanently delete a workflow. This action cannot be undone.",
    WorkflowIdArgs,
)
async def delete_workflow(client: N8nClient, args: WorkflowIdArgs) -> str:
    await client.delete_workflow(args.workflow_id)
    return f"Workflow {args.workflow_id} deleted successfully."


@ToolRegistry.register(
    "activate_workflow",
    "Activate a workflow so it can be triggered. It must have a valid trigger node.",
    WorkflowIdArgs,
    error_prefix="Error activating workflow",
)
async def activate_workflow(client: N8nClient, args: WorkflowIdArgs) -> str:
    workflow = await client.activate_workflow(args.workflow_id)
    return f"Workflow {args.workflow_id} activated successfully!\nActive: {workflow.get('active')}"


@ToolRegistry.register(
    "deactivate_workflow",
    "Deactivate a workflow. It will no longer respond to triggers.",
    WorkflowIdArgs,
    error_prefix="Error deactivating workflow",
)
async def deactivate_workflow(client: N8nClient, args: WorkflowIdArgs) -> str:
    workflow = await client.deactivate_workflow(args.workflow_id)
    return (
        f"Workflow {args.workflow_id} deactivated successfully!\nActive: {workflow.get('active')}"
    )
