"""Tool registry and invocation boundary."""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar

from pydantic import BaseModel, ConfigDict, ValidationError

from n8nlink.client import N8nError

if TYPE_CHECKING:
    from n8nlink.client import N8nClient

logger = logging.getLogger(__name__)

ToolHandler = Callable[["N8nClient", Any], Awaitable[str]]


class ToolNotFoundError(Exception):
    """Raised when no tool is registered under a name."""


class ToolArgs(BaseModel):
    """Base for tool argument models. Accepts camelCase or snake_case keys."""

    model_config = ConfigDict(populate_by_name=True)


class NoArguments(ToolArgs):
    """Argument model for tools that take none."""


@dataclass
class ToolResult:
    """Outcome of a tool call, always well-formed."""

    text: str
    is_error: bool = False

    @classmethod
    def success(cls, text: str) -> ToolResult:
        return cls(text=text)

    @classmethod
    def error(cls, text: str) -> ToolResult:
        return cls(text=text, is_error=True)


@dataclass
class ToolSpec:
    """A registered tool."""

    name: str
    description: str
    params_model: type[BaseModel]
    handler: ToolHandler
    error_prefix: str = "Error"

    def input_schema(self) -> dict[str, Any]:
        """JSON schema of the tool's arguments."""
        return self.params_model.model_json_schema(by_alias=True)

    def describe(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "input_schema": self.input_schema(),
        }


class ToolRegistry:
    """Registry mapping tool names to handlers."""

    _tools: ClassVar[dict[str, ToolSpec]] = {}

    @classmethod
    def register(
        cls,
        name: str,
        description: str,
        params: type[BaseModel] = NoArguments,
        error_prefix: str = "Error",
    ) -> Callable[[ToolHandler], ToolHandler]:
        """Register a tool handler.

        Args:
            name: Tool name exposed to callers.
            description: Text shown to the agent.
            params: Pydantic model validating the arguments.
            error_prefix: Prefix for error result messages.

        Returns:
            Decorator function.
        """

        def decorator(handler: ToolHandler) -> ToolHandler:
            cls._tools[name] = ToolSpec(
                name=name,
                description=description,
                params_model=params,
                handler=handler,
                error_prefix=error_prefix,
            )
            return handler

        return decorator

    @classmethod
    def get(cls, name: str) -> ToolSpec:
        if name not in cls._tools:
            raise ToolNotFoundError(f"Unknown tool: {name}")
        return cls._tools[name]

    @classmethod
    def has_tool(cls, name: str) -> bool:
        return name in cls._tools

    @classmethod
    def all(cls) -> list[ToolSpec]:
        return sorted(cls._tools.values(), key=lambda spec: spec.name)


async def call_tool(
    client: N8nClient,
    name: str,
    arguments: dict[str, Any] | None = None,
) -> ToolResult:
    """Validate arguments and run a tool.

    Client failures and unexpected errors are reported as error results
    rather than raised.

    Raises:
        ToolNotFoundError: If the tool does not exist.
    """
    spec = ToolRegistry.get(name)

    try:
        params = spec.params_model.model_validate(arguments or {})
    except ValidationError as e:
        return ToolResult.error(f"Invalid arguments for {name}: {e}")

    try:
        text = await spec.handler(client, params)
    except N8nError as e:
        logger.warning(f"Tool {name} failed: {e.message}")
        return ToolResult.error(f"{spec.error_prefix}: {e.message}")
    except Exception as e:
        logger.exception(f"Tool {name} raised an unexpected error")
        return ToolResult.error(f"{spec.error_prefix}: {e}")

    return ToolResult.success(text)


def to_json(data: Any) -> str:
    """Render a payload the way tool results present it."""
    return json.dumps(data, indent=2)
