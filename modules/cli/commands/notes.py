"""
Note Commands.

List, create, edit and delete notes. Every command synchronizes with
the note store first, then applies its change through the NoteService.
"""

import asyncio
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from modules.backend.core.exceptions import ApplicationError
from modules.backend.schemas.base import OperationOutcome
from modules.backend.schemas.note import ImageUpload, NotePatch, NoteView
from modules.cli.client import open_note_service

app = typer.Typer(help="Note management commands")
console = Console()


def format_date(value: datetime) -> str:
    """Format a timestamp like ``Mar 04, 2025, 09:15 AM``."""
    return value.strftime("%b %d, %Y, %I:%M %p")


def _print_warnings(outcome: OperationOutcome) -> None:
    for warning in outcome.warnings:
        console.print(f"[yellow]Warning: {warning.message}[/yellow]")


def _fail(error: ApplicationError) -> None:
    console.print(f"[red]Error: {error.message}[/red] [dim]({error.code})[/dim]")
    raise typer.Exit(1)


def _display_notes(notes: tuple[NoteView, ...]) -> None:
    if not notes:
        console.print("[dim]No notes yet. Create your first note![/dim]")
        return

    table = Table(title="Notes", show_header=True)
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Title", style="cyan")
    table.add_column("Description")
    table.add_column("Image")
    table.add_column("Dates", no_wrap=True)

    for note in notes:
        dates = f"Created: {format_date(note.created_at)}"
        if note.was_edited:
            dates += f"\nUpdated: {format_date(note.updated_at)}"
        if note.image_url:
            image = note.image_url
        elif note.image:
            image = "[yellow]unavailable[/yellow]"
        else:
            image = ""
        table.add_row(
            note.id,
            note.display_name,
            note.description or "[dim]No description[/dim]",
            image,
            dates,
        )

    console.print(table)


@app.command("list")
def list_notes() -> None:
    """
    List all notes, most recent first.

    Examples:
        cli.py notes list
    """
    asyncio.run(_list())


async def _list() -> None:
    async with open_note_service() as service:
        try:
            outcome = await service.synchronize_all()
        except ApplicationError as e:
            _fail(e)
        _display_notes(service.notes)
        _print_warnings(outcome)


@app.command()
def create(
    name: str = typer.Option("", "--name", "-n", help="Note title (Untitled if empty)"),
    description: str = typer.Option("", "--description", "-b", help="Note body"),
    image: Optional[Path] = typer.Option(
        None,
        "--image",
        "-i",
        exists=True,
        dir_okay=False,
        readable=True,
        help="Image file to attach",
    ),
) -> None:
    """
    Create a note, optionally with an image.

    Examples:
        cli.py notes create --name "Groceries" --description "Milk, eggs"
        cli.py notes create --image cat.png
    """
    upload = ImageUpload.from_path(image) if image is not None else None
    asyncio.run(_create(name, description, upload))


async def _create(name: str, description: str, upload: ImageUpload | None) -> None:
    async with open_note_service() as service:
        try:
            synced = await service.synchronize_all()
            _print_warnings(synced)
            outcome = await service.create(name, description, upload)
        except ApplicationError as e:
            _fail(e)

        if not outcome.ok:
            console.print("[yellow]Nothing to save: give the note a title, a description or an image.[/yellow]")
            raise typer.Exit(1)

        console.print(f"[green]Created note {outcome.value.id}[/green]")
        _display_notes(service.notes[:1])


@app.command()
def edit(
    note_id: str = typer.Argument(..., help="Note ID"),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="New title (empty means Untitled)"),
    description: Optional[str] = typer.Option(None, "--description", "-b", help="New body"),
) -> None:
    """
    Edit a note's title and description.

    Examples:
        cli.py notes edit 1b2c... --name "Groceries (Saturday)"
    """
    asyncio.run(_edit(note_id, name, description))


async def _edit(note_id: str, name: str | None, description: str | None) -> None:
    async with open_note_service() as service:
        try:
            synced = await service.synchronize_all()
            _print_warnings(synced)
            if service.find(note_id) is None:
                console.print(f"[red]Error: note {note_id} not found[/red]")
                raise typer.Exit(1)
            outcome = await service.update(note_id, NotePatch(name=name, description=description))
        except ApplicationError as e:
            _fail(e)

        if not outcome.ok:
            console.print("[dim]Nothing to change.[/dim]")
            return

        console.print(f"[green]Updated note {note_id}[/green]")
        _display_notes((outcome.value,))


@app.command()
def delete(
    note_id: str = typer.Argument(..., help="Note ID"),
) -> None:
    """
    Delete a note and its image.

    Examples:
        cli.py notes delete 1b2c...
    """
    asyncio.run(_delete(note_id))


async def _delete(note_id: str) -> None:
    async with open_note_service() as service:
        try:
            synced = await service.synchronize_all()
            _print_warnings(synced)
            note = service.find(note_id)
            if note is None:
                console.print(f"[red]Error: note {note_id} not found[/red]")
                raise typer.Exit(1)
            outcome = await service.delete(note.id, note.image)
        except ApplicationError as e:
            _fail(e)

        console.print(f"[green]Deleted note {note_id}[/green]")
        _print_warnings(outcome)
