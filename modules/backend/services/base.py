"""
Base Service.

Base class for all services providing common patterns for business logic.
Services orchestrate the remote stores, bound every remote call in time,
and translate failures into application exceptions.

Usage:
    from modules.backend.services.base import BaseService

    class AttachmentService(BaseService):
        def __init__(self, blob_store: BlobStore) -> None:
            super().__init__()
            self.blob_store = blob_store

        async def purge(self, path: str) -> None:
            await self._execute_remote_operation(
                "purge_attachment",
                self.blob_store.remove(path),
                dependency="blob_store",
                timeout=30,
                error_cls=StorageError,
            )
"""

import asyncio
from collections.abc import Awaitable
from typing import Any, TypeVar

from modules.backend.core.concurrency import get_semaphore
from modules.backend.core.exceptions import (
    ApplicationError,
    ExternalServiceError,
    OperationTimeoutError,
    ValidationError,
)
from modules.backend.core.logging import get_logger

T = TypeVar("T")


class BaseService:
    """
    Base class for all services.

    Provides:
    - Logging context
    - Timeout and concurrency bounds for remote calls
    - Error wrapping for remote operations
    - Common validation patterns

    Subclasses should:
    - Call super().__init__() in their __init__
    - Keep references to the stores they orchestrate
    - Implement business logic methods
    """

    def __init__(self) -> None:
        self._logger = get_logger(self.__class__.__module__)

    async def _execute_remote_operation(
        self,
        operation: str,
        coro: Awaitable[T],
        *,
        dependency: str,
        timeout: float,
        error_cls: type[ExternalServiceError] = ExternalServiceError,
    ) -> T:
        """
        Execute a remote store call with a concurrency and time bound.

        Application exceptions raised by the store pass through untouched.
        Anything else is wrapped in ``error_cls`` so callers only ever see
        the application hierarchy.

        Args:
            operation: Description of the operation for logging
            coro: Coroutine to execute
            dependency: Semaphore name (note_store, blob_store)
            timeout: Seconds before the call is abandoned
            error_cls: Exception class for unclassified failures

        Returns:
            Result of the coroutine

        Raises:
            OperationTimeoutError: If the call exceeds ``timeout``
            ApplicationError: For store failures
        """
        try:
            async with get_semaphore(dependency):
                async with asyncio.timeout(timeout):
                    return await coro
        except TimeoutError as e:
            self._logger.warning(
                "Remote call timed out",
                extra={"operation": operation, "dependency": dependency, "timeout": timeout},
            )
            raise OperationTimeoutError(
                f"{operation} timed out after {timeout}s",
                operation=operation,
            ) from e
        except ApplicationError:
            raise
        except Exception as e:
            self._logger.error(
                "Remote call failed",
                extra={"operation": operation, "dependency": dependency, "error": str(e)},
            )
            raise error_cls(f"Remote operation failed: {operation}") from e

    def _validate_string_length(
        self,
        value: str,
        field_name: str,
        max_length: int,
    ) -> None:
        """
        Reject a string longer than ``max_length`` before any remote call.

        Raises:
            ValidationError: If the string is too long
        """
        if len(value) > max_length:
            raise ValidationError(
                f"{field_name} too long",
                details={field_name: f"Maximum length is {max_length}"},
            )

    def _log_operation(
        self,
        operation: str,
        **context: Any,
    ) -> None:
        """
        Log a service operation with context.

        Args:
            operation: Description of the operation
            **context: Additional context to include in log
        """
        self._logger.info(
            operation,
            extra={"service": self.__class__.__name__, **context},
        )

    def _log_debug(
        self,
        message: str,
        **context: Any,
    ) -> None:
        """
        Log debug information.

        Args:
            message: Debug message
            **context: Additional context to include in log
        """
        self._logger.debug(
            message,
            extra={"service": self.__class__.__name__, **context},
        )
