"""Serve command for the n8nlink CLI."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
import uvicorn

from n8nlink.cli import app, console
from n8nlink.cli.utils import get_client, get_settings, setup_logging

logger = logging.getLogger(__name__)


@app.command()
def serve(
    host: str = typer.Option(
        "127.0.0.1",
        "--host",
        "-h",
        help="Host to bind to",
    ),
    port: int = typer.Option(
        3000,
        "--port",
        "-p",
        help="Port to listen on",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug logging",
    ),
    log_file: Path | None = typer.Option(
        None,
        "--log-file",
        help="Also write logs to this file",
    ),
) -> None:
    """Serve tools and resources over HTTP."""
    from n8nlink.api import create_app

    settings = get_settings()
    setup_logging("DEBUG" if debug else settings.log_level, log_file)

    api = create_app(client=get_client(settings), settings=settings)

    console.print(f"[green]Serving n8nlink on http://{host}:{port}[/]")
    console.print(f"[dim]n8n API: {settings.api_url}[/]")
    logger.info(f"Starting server on {host}:{port} (production={settings.production})")

    uvicorn.run(
        api,
        host=host,
        port=port,
        log_level="debug" if debug else "info",
    )
