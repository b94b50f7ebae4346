"""Tool commands for the n8nlink CLI."""

from __future__ import annotations

import asyncio
import json
from typing import Any

import typer
from rich.table import Table

from n8nlink.cli import app, console
from n8nlink.cli.utils import get_client, get_settings, setup_logging
from n8nlink.tools import ToolNotFoundError, ToolRegistry, call_tool


@app.command("tools")
def list_tools(
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output as JSON",
    ),
) -> None:
    """List available tools."""
    specs = ToolRegistry.all()

    if json_output:
        console.print_json(data={"tools": [spec.describe() for spec in specs]})
        return

    table = Table(title="Tools")
    table.add_column("Name", style="cyan")
    table.add_column("Description")

    for spec in specs:
        summary = spec.description.splitlines()[0]
        table.add_row(spec.name, summary[:70] + "..." if len(summary) > 70 else summary)

    console.print(table)


@app.command("call")
def call(
    name: str = typer.Argument(..., help="Tool name"),
    args: str = typer.Option(
        "{}",
        "--args",
        "-a",
        help="Tool arguments as a JSON object",
    ),
) -> None:
    """Invoke a tool against the configured n8n instance."""
    try:
        arguments: Any = json.loads(args)
    except json.JSONDecodeError as e:
        console.print(f"[red]Error:[/] Invalid JSON arguments: {e}")
        raise typer.Exit(1) from e

    if not isinstance(arguments, dict):
        console.print("[red]Error:[/] Arguments must be a JSON object")
        raise typer.Exit(1)

    settings = get_settings()
    setup_logging(settings.log_level)
    client = get_client(settings)

    try:
        result = asyncio.run(call_tool(client, name, arguments))
    except ToolNotFoundError as e:
        console.print(f"[red]Error:[/] {e}")
        console.print("Run [cyan]n8nlink tools[/] to see available tools.")
        raise typer.Exit(1) from e

    if result.is_error:
        console.print(result.text, style="red", markup=False, highlight=False)
        raise typer.Exit(1)

    console.print(result.text, markup=False, highlight=False)
