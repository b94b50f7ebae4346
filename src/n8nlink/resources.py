"""Read-only n8n:// resources backed by the n8n client."""

from __future__ import annotations

import json
import re
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from n8nlink.client import N8nClient

MIME_TYPE = "application/json"

ResourceReader = Callable[["N8nClient", dict[str, str]], Awaitable[Any]]


class ResourceNotFoundError(Exception):
    """Raised when a URI matches no registered resource."""


@dataclass
class ResourceContent:
    uri: str
    text: str
    mime_type: str = MIME_TYPE


@dataclass
class Resource:
    """A static URI or a ``{placeholder}`` URI template."""

    name: str
    uri_template: str
    description: str
    reader: ResourceReader

    @property
    def pattern(self) -> re.Pattern[str]:
        regex = re.sub(r"\\\{(\w+)\\\}", r"(?P<\1>[^/]+)", re.escape(self.uri_template))
        return re.compile(f"^{regex}$")

    def match(self, uri: str) -> dict[str, str] | None:
        found = self.pattern.match(uri)
        return found.groupdict() if found else None

    def describe(self) -> dict[str, str]:
        return {
            "name": self.name,
            "uri": self.uri_template,
            "description": self.description,
            "mime_type": MIME_TYPE,
        }


async def _workflows(client: N8nClient, params: dict[str, str]) -> Any:
    return (await client.list_workflows(limit=100)).get("data", [])


async def _workflow(client: N8nClient, params: dict[str, str]) -> Any:
    return await client.get_workflow(params["workflowId"])


async def _workflow_executions(client: N8nClient, params: dict[str, str]) -> Any:
    result = await client.list_executions(workflow_id=params["workflowId"], limit=50)
    return result.get("data", [])


async def _execution(client: N8nClient, params: dict[str, str]) -> Any:
    return await client.get_execution(params["executionId"])


async def _tags(client: N8nClient, params: dict[str, str]) -> Any:
    return (await client.list_tags()).get("data", [])


async def _credentials(client: N8nClient, params: dict[str, str]) -> Any:
    return (await client.list_credentials()).get("data", [])


RESOURCES: list[Resource] = [
    Resource("workflows-list", "n8n://workflows", "List of all n8n workflows", _workflows),
    Resource(
        "workflow",
        "n8n://workflow/{workflowId}",
        "Details of a specific workflow including nodes and connections",
        _workflow,
    ),
    Resource(
        "workflow-executions",
        "n8n://workflow/{workflowId}/executions",
        "Execution history for a specific workflow",
        _workflow_executions,
    ),
    Resource(
        "execution",
        "n8n://execution/{executionId}",
        "Detailed execution information including output data",
        _execution,
    ),
    Resource("tags", "n8n://tags", "List of all workflow tags", _tags),
    Resource(
        "credentials",
        "n8n://credentials",
        "List of configured credentials (names only, no secrets)",
        _credentials,
    ),
]


def find_resource(uri: str) -> tuple[Resource, dict[str, str]]:
    """Find the resource serving a URI.

    Raises:
        ResourceNotFoundError: If nothing matches.
    """
    for resource in RESOURCES:
        params = resource.match(uri)
        if params is not None:
            return resource, params
    raise ResourceNotFoundError(f"Unknown resource: {uri}")


async def read_resource(client: N8nClient, uri: str) -> ResourceContent:
    """Read a resource. Client errors propagate to the caller."""
    resource, params = find_resource(uri)
    data = await resource.reader(client, params)
    return ResourceContent(uri=uri, text=json.dumps(data, indent=2))
