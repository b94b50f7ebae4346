"""Agent-facing tools backed by the n8n client."""

from . import executions, metadata, workflows  # noqa: F401 - registers tools
from .registry import (
    NoArguments,
    ToolArgs,
    ToolNotFoundError,
    ToolRegistry,
    ToolResult,
    ToolSpec,
    call_tool,
)

__all__ = [
    "NoArguments",
    "ToolArgs",
    "ToolNotFoundError",
    "ToolRegistry",
    "ToolResult",
    "ToolSpec",
    "call_tool",
]
