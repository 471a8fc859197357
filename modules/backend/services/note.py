"""
Note Service.

Lifecycle controller for notes and their image attachments. Owns the
local, ordered note collection and keeps it consistent with the note
store and the blob store:

    synchronize_all  - replace the collection with the store's records
    create           - upload image, create record, prepend
    update           - patch record, merge in place
    delete           - delete record, then its image; remove locally

The collection is only ever replaced as a whole after the remote work
of an operation succeeded, so a failed operation leaves it untouched.
"""

import asyncio
from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager

from modules.backend.core.exceptions import (
    ApplicationError,
    OperationInProgressError,
    RemoteError,
    ResolutionError,
    StorageError,
)
from modules.backend.core.utils import derive_storage_path
from modules.backend.schemas.base import OperationOutcome, OperationStatus
from modules.backend.schemas.note import ImageUpload, NoteInput, NotePatch, NoteRecord, NoteView
from modules.backend.services.base import BaseService
from modules.backend.stores.base import BlobStore, NoteStore

NotesListener = Callable[[tuple[NoteView, ...]], None]

MAX_NAME_LENGTH = 255


class NoteService(BaseService):
    """
    Service for the note lifecycle.

    Observable state for the presentation layer:
        notes         - current collection, most recently created first
        is_loading    - a synchronize_all is in flight
        is_uploading  - a create is in flight
        pending_ids   - notes with an update or delete in flight

    Listeners registered with ``subscribe`` are called with the new
    collection after every change.
    """

    def __init__(
        self,
        note_store: NoteStore,
        blob_store: BlobStore,
        *,
        note_store_timeout: float = 10.0,
        blob_store_timeout: float = 30.0,
        key_prefix: str = "images",
        remove_orphaned_uploads: bool = False,
    ) -> None:
        super().__init__()
        self.note_store = note_store
        self.blob_store = blob_store
        self.note_store_timeout = note_store_timeout
        self.blob_store_timeout = blob_store_timeout
        self.key_prefix = key_prefix
        self.remove_orphaned_uploads = remove_orphaned_uploads

        self._notes: tuple[NoteView, ...] = ()
        self._listeners: list[NotesListener] = []
        self._pending: set[str] = set()
        self._loading = False
        self._uploading = False

    @classmethod
    def from_config(cls, note_store: NoteStore, blob_store: BlobStore) -> "NoteService":
        """Create a service using timeouts and storage options from YAML config."""
        from modules.backend.core.config import get_app_config

        config = get_app_config()
        return cls(
            note_store,
            blob_store,
            note_store_timeout=config.application.timeouts.note_store,
            blob_store_timeout=config.application.timeouts.blob_store,
            key_prefix=config.storage.blob_store.key_prefix,
            remove_orphaned_uploads=config.storage.remove_orphaned_uploads,
        )

    # -------------------------------------------------------------------------
    # Observable state
    # -------------------------------------------------------------------------

    @property
    def notes(self) -> tuple[NoteView, ...]:
        return self._notes

    @property
    def is_loading(self) -> bool:
        return self._loading

    @property
    def is_uploading(self) -> bool:
        return self._uploading

    @property
    def pending_ids(self) -> frozenset[str]:
        return frozenset(self._pending)

    def find(self, note_id: str) -> NoteView | None:
        """Return the local note with ``note_id``, if any."""
        return next((note for note in self._notes if note.id == note_id), None)

    def subscribe(self, listener: NotesListener) -> Callable[[], None]:
        """
        Register a listener for collection changes.

        Returns:
            Callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _replace(self, notes: Iterable[NoteView]) -> None:
        self._notes = tuple(notes)
        for listener in list(self._listeners):
            listener(self._notes)

    @contextmanager
    def _note_lock(self, note_id: str) -> Iterator[None]:
        if note_id in self._pending:
            raise OperationInProgressError(
                f"Note {note_id} already has an operation in flight",
                note_id=note_id,
            )
        self._pending.add(note_id)
        try:
            yield
        finally:
            self._pending.discard(note_id)

    # -------------------------------------------------------------------------
    # Remote call helpers
    # -------------------------------------------------------------------------

    async def _call_note_store(self, operation: str, coro):
        return await self._execute_remote_operation(
            operation,
            coro,
            dependency="note_store",
            timeout=self.note_store_timeout,
            error_cls=RemoteError,
        )

    async def _call_blob_store(self, operation: str, coro, error_cls: type[StorageError] = StorageError):
        return await self._execute_remote_operation(
            operation,
            coro,
            dependency="blob_store",
            timeout=self.blob_store_timeout,
            error_cls=error_cls,
        )

    async def _resolve_url(self, image_path: str) -> str:
        return await self._call_blob_store(
            "resolve_image_url",
            self.blob_store.resolve_url(image_path),
            error_cls=ResolutionError,
        )

    async def _view_for(self, record: NoteRecord) -> tuple[NoteView, ResolutionError | None]:
        """Project a record, resolving its image URL. Never raises for store failures."""
        if not record.image:
            return NoteView.from_record(record), None

        try:
            image_url = await self._resolve_url(record.image)
        except ApplicationError as e:
            self._logger.warning(
                "Image URL resolution failed",
                extra={"note_id": record.id, "image_path": record.image, "error": e.message},
            )
            if isinstance(e, ResolutionError):
                return NoteView.from_record(record), e
            warning = ResolutionError(e.message, path=record.image)
            warning.__cause__ = e
            return NoteView.from_record(record), warning

        return NoteView.from_record(record, image_url=image_url), None

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    async def synchronize_all(self) -> OperationOutcome[list[NoteView]]:
        """
        Replace the local collection with every record in the note store.

        Image URLs are resolved concurrently. A note whose URL cannot be
        resolved is kept without ``image_url`` and its ResolutionError is
        returned in ``warnings``.

        Returns:
            Outcome carrying the new collection

        Raises:
            RemoteError: If listing fails; the collection is unchanged
            OperationTimeoutError: If listing times out
        """
        self._log_operation("Synchronizing notes")
        self._loading = True
        try:
            records = await self._call_note_store("list_notes", self.note_store.list_all())
            results = await asyncio.gather(*(self._view_for(record) for record in records))
        finally:
            self._loading = False

        views = [view for view, _ in results]
        warnings = [warning for _, warning in results if warning is not None]
        self._replace(views)

        self._log_debug("Notes synchronized", count=len(views), unresolved=len(warnings))
        return OperationOutcome.of(views, warnings)

    async def create(
        self,
        name: str = "",
        description: str = "",
        image: ImageUpload | None = None,
    ) -> OperationOutcome[NoteView]:
        """
        Create a note, uploading its image first.

        A note with a blank name, blank description and no image is
        skipped without any remote call.

        Args:
            name: Title, blank means Untitled
            description: Body text
            image: Optional image to attach

        Returns:
            Outcome carrying the new note, or a skipped outcome

        Raises:
            OperationInProgressError: If another create is in flight
            ValidationError: If the name is too long
            StorageError: If the upload or URL resolution fails
            RemoteError: If the record cannot be created
        """
        name = name or ""
        description = description or ""
        if not name.strip() and not description.strip() and image is None:
            self._log_debug("Empty note skipped")
            return OperationOutcome.skipped()

        self._validate_string_length(name, "name", max_length=MAX_NAME_LENGTH)

        if self._uploading:
            raise OperationInProgressError("A note is already being created")

        self._uploading = True
        try:
            view = await self._create_note(NoteInput(name=name, description=description), image)
        finally:
            self._uploading = False

        self._replace((view, *self._notes))
        self._log_debug("Note created", note_id=view.id)
        return OperationOutcome.of(view)

    async def _create_note(self, data: NoteInput, image: ImageUpload | None) -> NoteView:
        if image is None:
            self._log_operation("Creating note", name=data.name)
            record = await self._call_note_store("create_note", self.note_store.create(data))
            return NoteView.from_record(record)

        image_path = derive_storage_path(image.filename, self.key_prefix)
        self._log_operation(
            "Creating note with image",
            name=data.name,
            image_path=image_path,
            size=len(image.payload),
        )
        await self._call_blob_store(
            "upload_image",
            self.blob_store.upload(image_path, image.payload, image.content_type),
        )

        try:
            record = await self._call_note_store(
                "create_note",
                self.note_store.create(data.model_copy(update={"image": image_path})),
            )
        except ApplicationError:
            await self._discard_orphan(image_path)
            raise

        image_url = await self._resolve_url(image_path)
        return NoteView.from_record(record, image_url=image_url)

    async def _discard_orphan(self, image_path: str) -> None:
        """Handle an uploaded image whose note record was never created."""
        if not self.remove_orphaned_uploads:
            self._logger.warning(
                "Uploaded image left without a note",
                extra={"image_path": image_path},
            )
            return

        try:
            await self._call_blob_store("remove_orphaned_image", self.blob_store.remove(image_path))
        except ApplicationError as e:
            self._logger.warning(
                "Orphaned image removal failed",
                extra={"image_path": image_path, "error": e.message},
            )
        else:
            self._log_debug("Orphaned image removed", image_path=image_path)

    async def update(self, note_id: str, patch: NotePatch) -> OperationOutcome[NoteView]:
        """
        Edit a note's name and description.

        The returned record is merged into the local entry in place; its
        position and ``image_url`` are kept. An empty patch is skipped.

        Args:
            note_id: Note to edit
            patch: Fields to change

        Returns:
            Outcome carrying the merged note

        Raises:
            OperationInProgressError: If the note has an operation in flight
            ValidationError: If the new name is too long
            RemoteError: If the store rejects the update; local state is unchanged
        """
        changes = patch.changes()
        if not changes:
            return OperationOutcome(status=OperationStatus.SKIPPED, value=self.find(note_id))

        if patch.name is not None:
            self._validate_string_length(patch.name, "name", max_length=MAX_NAME_LENGTH)

        with self._note_lock(note_id):
            self._log_operation("Updating note", note_id=note_id, fields=sorted(changes))
            record = await self._call_note_store(
                "update_note",
                self.note_store.update(note_id, patch),
            )

        notes = list(self._notes)
        for index, current in enumerate(notes):
            if current.id == note_id:
                merged = current.merged(record)
                notes[index] = merged
                self._replace(notes)
                return OperationOutcome.of(merged)

        self._logger.warning("Updated note is not in the local collection", extra={"note_id": note_id})
        return OperationOutcome.of(NoteView.from_record(record))

    async def delete(self, note_id: str, image_path: str | None = None) -> OperationOutcome[None]:
        """
        Delete a note record, then its image.

        The note leaves the local collection as soon as the record is
        gone. A failed image removal makes the outcome degraded.

        Args:
            note_id: Note to delete
            image_path: Blob store path of the note's image, if any

        Returns:
            Success, or degraded with the StorageError in ``warnings``

        Raises:
            OperationInProgressError: If the note has an operation in flight
            RemoteError: If the record cannot be deleted; nothing changes
        """
        with self._note_lock(note_id):
            self._log_operation("Deleting note", note_id=note_id, image_path=image_path)
            await self._call_note_store("delete_note", self.note_store.delete(note_id))
            self._replace(note for note in self._notes if note.id != note_id)

            warnings: list[ApplicationError] = []
            if image_path:
                try:
                    await self._call_blob_store("remove_image", self.blob_store.remove(image_path))
                except ApplicationError as e:
                    self._logger.warning(
                        "Image removal failed after note deletion",
                        extra={"note_id": note_id, "image_path": image_path, "error": e.message},
                    )
                    warnings.append(e)

        return OperationOutcome.of(None, warnings)
