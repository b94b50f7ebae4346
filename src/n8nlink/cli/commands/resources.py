"""Resource commands for the n8nlink CLI."""

from __future__ import annotations

import asyncio

import typer
from rich.table import Table

from n8nlink.cli import app, console
from n8nlink.cli.utils import get_client, get_settings, setup_logging
from n8nlink.client import N8nError
from n8nlink.resources import RESOURCES, ResourceNotFoundError, read_resource


@app.command("resources")
def list_resources() -> None:
    """List available resources and URI templates."""
    table = Table(title="Resources")
    table.add_column("URI", style="cyan")
    table.add_column("Description")

    for resource in RESOURCES:
        table.add_row(resource.uri_template, resource.description)

    console.print(table)


@app.command("read")
def read(
    uri: str = typer.Argument(..., help="Resource URI, e.g. n8n://workflow/42"),
) -> None:
    """Read a resource as JSON."""
    settings = get_settings()
    setup_logging(settings.log_level)
    client = get_client(settings)

    try:
        content = asyncio.run(read_resource(client, uri))
    except ResourceNotFoundError as e:
        console.print(f"[red]Error:[/] {e}")
        raise typer.Exit(1) from e
    except N8nError as e:
        console.print(f"[red]Error:[/] {e.message}")
        raise typer.Exit(1) from e

    console.print(content.text, markup=False, highlight=False)
