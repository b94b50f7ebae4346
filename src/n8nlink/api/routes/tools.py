"""Tool listing and invocation endpoints."""

# Annotations stay evaluated: FastAPI reads them through the rate limiter wrapper.

import logging
from typing import Any

from fastapi import APIRouter, Body, HTTPException, Request

from n8nlink.api.dependencies import Client
from n8nlink.api.limiter import TOOL_RATE_LIMIT, limiter
from n8nlink.api.schemas import ToolCallResponse, ToolDescriptor
from n8nlink.tools import ToolNotFoundError, ToolRegistry, call_tool

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/tools")


@router.get("", response_model=list[ToolDescriptor])
async def list_tools() -> list[ToolDescriptor]:
    """List every registered tool with its argument schema."""
    return [ToolDescriptor(**spec.describe()) for spec in ToolRegistry.all()]


@router.post("/{name}", response_model=ToolCallResponse)
@limiter.limit(TOOL_RATE_LIMIT)
async def invoke_tool(
    request: Request,
    name: str,
    client: Client,
    arguments: dict[str, Any] | None = Body(default=None),
) -> ToolCallResponse:
    """Invoke a tool.

    Raises:
        HTTPException: 404 if the tool does not exist.
    """
    try:
        result = await call_tool(client, name, arguments)
    except ToolNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e

    logger.info(f"Tool {name} completed (error={result.is_error})")
    return ToolCallResponse(text=result.text, is_error=result.is_error)
