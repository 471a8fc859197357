"""
System Commands.

Commands for system information and configuration.
"""

import typer
from rich.console import Console
from rich.panel import Panel

app = typer.Typer(help="System information commands")
console = Console()


@app.command()
def info() -> None:
    """
    Display application information.

    Shows app name, version, and the configured storage backends.
    """
    try:
        from modules.backend.core.config import get_app_config

        app_config = get_app_config()
        application = app_config.application
        storage = app_config.storage

        console.print(Panel(
            f"[bold]{application.name}[/bold]\n"
            f"Version: {application.version}\n"
            f"Description: {application.description}\n"
            f"Note store: {storage.note_store.backend}\n"
            f"Blob store: {storage.blob_store.backend}",
            title="Application Info",
        ))

    except Exception as e:
        console.print(f"[red]Error loading configuration: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def version() -> None:
    """Display application version."""
    try:
        from modules.backend.core.config import get_app_config

        console.print(get_app_config().application.version)
    except Exception:
        console.print("unknown")
