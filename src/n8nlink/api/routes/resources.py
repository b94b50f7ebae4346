"""Resource listing and reading endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query

from n8nlink.api.dependencies import Client
from n8nlink.api.schemas import ResourceContentResponse, ResourceDescriptor
from n8nlink.client import N8nError
from n8nlink.resources import RESOURCES, ResourceNotFoundError, read_resource

router = APIRouter(prefix="/resources")


@router.get("", response_model=list[ResourceDescriptor])
async def list_resources() -> list[ResourceDescriptor]:
    return [ResourceDescriptor(**resource.describe()) for resource in RESOURCES]


@router.get("/read", response_model=ResourceContentResponse)
async def read(
    client: Client,
    uri: str = Query(..., description="Resource URI, e.g. n8n://workflow/42"),
) -> ResourceContentResponse:
    """Read a resource.

    Raises:
        HTTPException: 404 for an unknown URI, 502 when n8n fails.
    """
    try:
        content = await read_resource(client, uri)
    except ResourceNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except N8nError as e:
        raise HTTPException(status_code=502, detail=e.message) from e

    return ResourceContentResponse(uri=content.uri, mime_type=content.mime_type, text=content.text)
