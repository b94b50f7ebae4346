"""Shared dependencies for the n8nlink API."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from n8nlink.client import N8nClient
from n8nlink.config import Settings


def get_client(request: Request) -> N8nClient:
    """Get the n8n client from app state."""
    client: N8nClient = request.app.state.client
    return client


def get_settings(request: Request) -> Settings:
    settings: Settings = request.app.state.settings
    return settings


Client = Annotated[N8nClient, Depends(get_client)]
AppSettings = Annotated[Settings, Depends(get_settings)]
