"""Utility functions for the n8nlink CLI."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import typer

from n8nlink.cli import console
from n8nlink.client import N8nClient
from n8nlink.config import ConfigError, Settings, get_api_key, load_settings


def setup_logging(level: str = "INFO", log_file: Path | None = None) -> None:
    """Configure logging to stderr, and optionally a file.

    Args:
        level: Logging level name.
        log_file: Optional file to also write logs to.
    """
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
        force=True,
    )


def get_settings() -> Settings:
    """Load settings, exiting with a readable error if they are invalid.

    Raises:
        typer.Exit: If the configuration is invalid.
    """
    try:
        return load_settings()
    except ConfigError as e:
        console.print(f"[red]Error:[/] {e}")
        raise typer.Exit(1) from e


def get_client(settings: Settings) -> N8nClient:
    """Create an n8n client, warning when no API key is configured."""
    try:
        get_api_key(settings)
    except ConfigError as e:
        console.print(f"[yellow]Warning:[/] {e}")
    return N8nClient(settings.api_url, settings.api_key, settings.client_options())
