"""
Custom Exceptions.

Application-specific exception classes for consistent error handling.
Stores raise the domain kinds below; the note service never lets a raw
driver or transport exception escape to the presentation layer.
"""


class ApplicationError(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, code: str = "SYS_INTERNAL_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class NotFoundError(ApplicationError):
    """Raised when a resource cannot be found."""

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, code="RES_NOT_FOUND")


class ValidationError(ApplicationError):
    """Raised when validation fails."""

    def __init__(self, message: str = "Validation failed", details: dict | None = None) -> None:
        self.details = details or {}
        super().__init__(message, code="VAL_VALIDATION_ERROR")


class ExternalServiceError(ApplicationError):
    """Raised when an external service call fails."""

    def __init__(self, message: str = "External service error", code: str = "SYS_EXTERNAL_SERVICE_ERROR") -> None:
        super().__init__(message, code=code)


class RemoteError(ExternalServiceError):
    """Raised when a note store call fails (network, validation or backend)."""

    def __init__(self, message: str = "Note store error") -> None:
        super().__init__(message, code="NOTE_STORE_ERROR")


class StorageError(ExternalServiceError):
    """Raised when a blob store operation fails."""

    def __init__(self, message: str = "Blob store error", code: str = "BLOB_STORE_ERROR") -> None:
        super().__init__(message, code=code)


class ResolutionError(StorageError):
    """Raised when a display URL cannot be resolved for a stored blob."""

    def __init__(self, message: str = "Image URL could not be resolved", path: str | None = None) -> None:
        self.path = path
        super().__init__(message, code="BLOB_URL_UNRESOLVED")


class OperationTimeoutError(ApplicationError):
    """Raised when a remote call does not complete within its time budget."""

    def __init__(self, message: str = "Operation timed out", operation: str | None = None) -> None:
        self.operation = operation
        super().__init__(message, code="SYS_TIMEOUT")


class OperationInProgressError(ApplicationError):
    """Raised when an operation targets a note that already has one in flight."""

    def __init__(self, message: str = "Operation already in progress", note_id: str | None = None) -> None:
        self.note_id = note_id
        super().__init__(message, code="RES_BUSY")
