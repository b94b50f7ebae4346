"""n8nlink CLI interface."""

import typer
from rich.console import Console

# CLI App
app = typer.Typer(
    name="n8nlink",
    help="Drive an n8n instance through agent tools and resources.",
    no_args_is_help=True,
)

# Console for rich output
console = Console()

# Import commands to register them
from n8nlink.cli.commands import resources, serve, tools  # noqa: E402, F401


@app.command()
def version() -> None:
    """Show n8nlink version."""
    from n8nlink import __version__

    console.print(f"n8nlink v{__version__}")


if __name__ == "__main__":
    app()
