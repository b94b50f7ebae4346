"""Health endpoints: which n8n instance is served, and whether calls can succeed."""

from __future__ import annotations

import time
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from n8nlink import __version__
from n8nlink.api.dependencies import AppSettings
from n8nlink.config import ConfigError, get_api_key

router = APIRouter(prefix="/health")


@router.get("")
async def health_check(request: Request, settings: AppSettings) -> dict[str, Any]:
    """Report the upstream n8n URL, mode and uptime."""
    return {
        "status": "ok",
        "service": "n8nlink",
        "version": __version__,
        "n8n_url": settings.api_url,
        "mode": "http",
        "production": settings.production,
        "uptime": round(time.monotonic() - request.app.state.started_at, 3),
    }


@router.get("/ready", response_model=None)
async def readiness_check(settings: AppSettings) -> dict[str, Any] | JSONResponse:
    """Ready once an API key is configured; n8n rejects every call without one."""
    try:
        get_api_key(settings)
    except ConfigError as e:
        return JSONResponse(status_code=503, content={"status": "not ready", "reason": str(e)})
    return {"status": "ready", "n8n_url": settings.api_url}


@router.get("/live")
async def liveness_check() -> dict[str, str]:
    return {"status": "alive"}
