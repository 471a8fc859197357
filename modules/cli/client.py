"""
Note Service Client for CLI.

Builds the configured stores and a NoteService for the lifetime of one
command, and releases store connections afterwards.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from modules.backend.core.concurrency import shutdown_pools
from modules.backend.core.database import dispose_engine
from modules.backend.core.logging import get_logger, log_with_source
from modules.backend.services.note import NoteService
from modules.backend.stores import build_blob_store, build_note_store

logger = get_logger(__name__)


@asynccontextmanager
async def open_note_service() -> AsyncIterator[NoteService]:
    """
    Yield a NoteService wired to the stores from storage.yaml.

    Usage:
        async with open_note_service() as service:
            await service.synchronize_all()
    """
    note_store = build_note_store()
    blob_store = build_blob_store()
    service = NoteService.from_config(note_store, blob_store)

    log_with_source(
        logger,
        "cli",
        "debug",
        "Note service opened",
        note_store=note_store.backend_name,
        blob_store=blob_store.backend_name,
    )

    try:
        yield service
    finally:
        await note_store.close()
        await blob_store.close()
        await dispose_engine()
        await shutdown_pools()
