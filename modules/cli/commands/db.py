"""
Database Commands.

Commands for preparing the SQL note store.
"""

import asyncio

import typer
from rich.console import Console

from modules.backend.core.database import create_tables, dispose_engine

app = typer.Typer(help="Note store database commands")
console = Console()


@app.command()
def init() -> None:
    """
    Create the note store tables.

    Safe to run repeatedly; existing tables are left alone.

    Examples:
        cli.py db init
    """
    asyncio.run(_init())


async def _init() -> None:
    try:
        await create_tables()
    except Exception as e:
        console.print(f"[red]Error creating tables: {e}[/red]")
        raise typer.Exit(1)
    finally:
        await dispose_engine()

    console.print("[green]Note store tables ready[/green]")
