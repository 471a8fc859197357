"""
Remote Stores.

Note store and blob store implementations, plus factories that build
the configured backends from config/settings/storage.yaml.
"""

from modules.backend.core.config import get_app_config, get_settings, resolve_project_path
from modules.backend.core.logging import get_logger
from modules.backend.stores.base import BlobStore, NoteStore

logger = get_logger(__name__)


def build_note_store() -> NoteStore:
    """Build the note store selected in storage.yaml."""
    backend = get_app_config().storage.note_store.backend

    if backend == "memory":
        from modules.backend.stores.memory import InMemoryNoteStore
        store: NoteStore = InMemoryNoteStore()
    else:
        from modules.backend.core.database import get_session_factory
        from modules.backend.stores.sql import SqlNoteStore
        store = SqlNoteStore(get_session_factory())

    logger.debug("Note store built", extra={"backend": store.backend_name})
    return store


def build_blob_store() -> BlobStore:
    """Build the blob store selected in storage.yaml."""
    config = get_app_config()
    blob_config = config.storage.blob_store

    if blob_config.backend == "memory":
        from modules.backend.stores.memory import InMemoryBlobStore
        store: BlobStore = InMemoryBlobStore()
    elif blob_config.backend == "http":
        from modules.backend.stores.http import HttpBlobStore
        store = HttpBlobStore(
            blob_config.http.base_url,
            token=get_settings().blob_store_token,
            timeout=config.application.timeouts.blob_store,
        )
    else:
        from modules.backend.stores.local import LocalBlobStore
        store = LocalBlobStore(
            resolve_project_path(blob_config.local.root),
            public_base_url=blob_config.local.public_base_url,
        )

    logger.debug("Blob store built", extra={"backend": store.backend_name})
    return store


__all__ = [
    "BlobStore",
    "NoteStore",
    "build_blob_store",
    "build_note_store",
]
