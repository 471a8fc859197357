#!/usr/bin/env python3
"""
Notes CLI.

Command-line client for notes with image attachments.
Built with Typer for type-safe commands and Rich for formatted output.

Usage:
    python cli.py --help                                  # Show help

    # Notes
    python cli.py notes list                              # List notes, newest first
    python cli.py notes create -n "Groceries" -b "Milk"   # Create a note
    python cli.py notes create --image cat.png            # Create a note with an image
    python cli.py notes edit NOTE_ID -n "New title"       # Edit title/description
    python cli.py notes delete NOTE_ID                    # Delete a note and its image

    # Note store
    python cli.py db init                                 # Create tables

    # System info
    python cli.py system info                             # Show app info

Options:
    --verbose, -v     Enable verbose output
    --debug           Enable debug mode (detailed logging)
    --help            Show help message
"""

import sys
from pathlib import Path

import structlog
import typer
from rich.console import Console

# Add project root to path for absolute imports
project_root = Path(__file__).resolve().parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from modules.cli.commands import db_app, notes_app, system_app

console = Console()


def _validate_project_root() -> None:
    """Validate that we're running from the project root."""
    if not (project_root / ".project_root").exists():
        console.print("[red]Error: .project_root not found. Run from project root.[/red]")
        raise typer.Exit(1)


# Create main app
app = typer.Typer(
    name="cli",
    help="Notes CLI - create, list, edit and delete notes with image attachments.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Register command groups
app.add_typer(notes_app, name="notes")
app.add_typer(db_app, name="db")
app.add_typer(system_app, name="system")


@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose output (INFO level logging)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable debug mode (DEBUG level logging)",
    ),
) -> None:
    """
    Notes CLI.

    Notes live in the configured note store, images in the configured
    blob store (see config/settings/storage.yaml).
    """
    _validate_project_root()

    from modules.backend.core.logging import setup_logging

    if debug:
        setup_logging(level="DEBUG", format_type="console")
        console.print("[dim]Debug mode enabled[/dim]")
    elif verbose:
        setup_logging(level="INFO", format_type="console")
    else:
        setup_logging(level="WARNING", format_type="console")

    structlog.contextvars.bind_contextvars(source="cli")


if __name__ == "__main__":
    app()
