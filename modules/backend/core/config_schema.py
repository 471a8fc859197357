"""
Configuration Schemas.

Pydantic models defining the expected structure of each YAML config file.
Used by AppConfig to validate configuration at load time. If a YAML file
has missing keys, wrong types, or unknown fields, a clear ValidationError
is raised at startup instead of a cryptic KeyError deep in application code.

Each top-level class corresponds to one file in config/settings/:
    ApplicationSchema  → application.yaml
    DatabaseSchema     → database.yaml
    LoggingSchema      → logging.yaml
    ConcurrencySchema  → concurrency.yaml
    StorageSchema      → storage.yaml
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class _StrictBase(BaseModel):
    """Base with extra='forbid' so unknown YAML keys are caught immediately."""

    model_config = ConfigDict(extra="forbid")


# =============================================================================
# application.yaml
# =============================================================================


class TimeoutsSchema(_StrictBase):
    note_store: float = Field(gt=0)
    blob_store: float = Field(gt=0)


class ApplicationSchema(_StrictBase):
    name: str
    version: str
    description: str
    environment: str
    debug: bool
    timeouts: TimeoutsSchema


# =============================================================================
# database.yaml
# =============================================================================


class DatabaseSchema(_StrictBase):
    url: str
    echo: bool


# =============================================================================
# logging.yaml
# =============================================================================


class ConsoleHandlerSchema(_StrictBase):
    enabled: bool


class FileHandlerSchema(_StrictBase):
    enabled: bool
    path: str
    max_bytes: int
    backup_count: int


class HandlersSchema(_StrictBase):
    console: ConsoleHandlerSchema
    file: FileHandlerSchema


class LoggingSchema(_StrictBase):
    level: str
    format: str
    handlers: HandlersSchema


# =============================================================================
# concurrency.yaml
# =============================================================================


class ThreadPoolSchema(_StrictBase):
    max_workers: int


class SemaphoresSchema(_StrictBase):
    note_store: int
    blob_store: int


class ConcurrencySchema(_StrictBase):
    thread_pool: ThreadPoolSchema
    semaphores: SemaphoresSchema


# =============================================================================
# storage.yaml
# =============================================================================


class NoteStoreSchema(_StrictBase):
    backend: Literal["sql", "memory"]


class LocalBlobStoreSchema(_StrictBase):
    root: str
    public_base_url: str | None = None


class HttpBlobStoreSchema(_StrictBase):
    base_url: str


class BlobStoreSchema(_StrictBase):
    backend: Literal["local", "http", "memory"]
    key_prefix: str
    local: LocalBlobStoreSchema
    http: HttpBlobStoreSchema


class StorageSchema(_StrictBase):
    note_store: NoteStoreSchema
    blob_store: BlobStoreSchema
    remove_orphaned_uploads: bool
