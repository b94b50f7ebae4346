"""API schemas for n8nlink."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ToolDescriptor(BaseModel):
    name: str = Field(..., description="Tool name")
    description: str = Field(..., description="What the tool does")
    input_schema: dict[str, Any] = Field(..., description="JSON schema of the arguments")


class ToolCallResponse(BaseModel):
    """Result of a tool call. Failures are reported, not raised."""

    text: str = Field(..., description="Result text")
    is_error: bool = Field(default=False, description="Whether the call failed")


class ResourceDescriptor(BaseModel):
    name: str
    uri: str = Field(..., description="URI or URI template")
    description: str
    mime_type: str


class ResourceContentResponse(BaseModel):
    uri: str
    mime_type: str
    text: str
