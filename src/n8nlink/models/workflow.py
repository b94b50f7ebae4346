"""Argument models for workflow-shaped tool input."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

ExecutionStatus = Literal["success", "error", "running", "waiting", "crashed"]


class NodeInput(BaseModel):
    """A node as supplied by the agent."""

    model_config = ConfigDict(populate_by_name=True)

    id: str | None = Field(default=None, description="Unique node ID (auto-generated if omitted)")
    name: str = Field(..., description="Display name for the node")
    type: str = Field(
        ...,
        description="Node type, e.g. 'n8n-nodes-base.manualTrigger' or 'n8n-nodes-base.set'",
    )
    position: tuple[float, float] = Field(..., description="Node position [x, y] on canvas")
    parameters: dict[str, Any] = Field(default_factory=dict, description="Node parameters")
    type_version: int | float = Field(
        default=1, alias="typeVersion", description="Node type version"
    )
    credentials: dict[str, Any] | None = Field(
        default=None, description="Credential references for this node"
    )

    def to_payload(self, index: int) -> dict[str, Any]:
        """Render the node the way the n8n API expects it."""
        payload: dict[str, Any] = {
            "id": self.id or f"node-{index}",
            "name": self.name,
            "type": self.type,
            "position": list(self.position),
            "parameters": self.parameters,
            "typeVersion": self.type_version or 1,
        }
        if self.credentials:
            payload["credentials"] = self.credentials
        return payload


class ConnectionTarget(BaseModel):
    """One edge from a node output to another node's input."""

    node: str = Field(..., description="Target node name")
    type: Literal["main"] = "main"
    index: int = Field(default=0, ge=0, description="Output/input index")


class NodeConnections(BaseModel):
    """Outgoing connections of a single source node."""

    main: list[list[ConnectionTarget]] = Field(..., description="Connections per output")


class WorkflowSettingsInput(BaseModel):
    """Workflow-level settings."""

    model_config = ConfigDict(populate_by_name=True)

    execution_order: Literal["v0", "v1"] = Field(default="v1", alias="executionOrder")
    save_manual_executions: bool | None = Field(default=None, alias="saveManualExecutions")
    caller_policy: (
        Literal["any", "none", "workflowsFromAList", "workflowsFromSameOwner"] | None
    ) = Field(default=None, alias="callerPolicy")
    error_workflow: str | None = Field(
        default=None, alias="errorWorkflow", description="Workflow ID to run on error"
    )
    timezone: str | None = Field(default=None, description="Timezone for scheduled workflows")

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


def nodes_payload(nodes: list[NodeInput]) -> list[dict[str, Any]]:
    """Render a node list, filling in missing IDs by position."""
    return [node.to_payload(idx) for idx, node in enumerate(nodes)]


def connections_payload(connections: dict[str, NodeConnections]) -> dict[str, Any]:
    return {name: conn.model_dump() for name, conn in connections.items()}
