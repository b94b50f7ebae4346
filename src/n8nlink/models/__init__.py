"""n8nlink data models."""

from .options import ClientOptions
from .workflow import (
    ConnectionTarget,
    ExecutionStatus,
    NodeConnections,
    NodeInput,
    WorkflowSettingsInput,
    connections_payload,
    nodes_payload,
)

__all__ = [
    "ClientOptions",
    "ConnectionTarget",
    "ExecutionStatus",
    "NodeConnections",
    "NodeInput",
    "WorkflowSettingsInput",
    "connections_payload",
    "nodes_payload",
]
