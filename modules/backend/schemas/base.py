"""
Base Schemas.

Standard operation result envelope returned by the note service.
"""

from enum import Enum
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from modules.backend.core.exceptions import ApplicationError

DataT = TypeVar("DataT")


class OperationStatus(str, Enum):
    """How a completed operation ended."""

    SUCCESS = "success"
    DEGRADED = "degraded"
    SKIPPED = "skipped"


class OperationOutcome(BaseModel, Generic[DataT]):
    """
    Result of a note service operation that did not fail.

    Failures are raised as ApplicationError subclasses. A degraded
    outcome means the primary effect happened and a secondary step
    failed; the failures are listed in ``warnings``.
    """

    status: OperationStatus = OperationStatus.SUCCESS
    value: DataT | None = None
    warnings: list[ApplicationError] = Field(default_factory=list)

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @property
    def ok(self) -> bool:
        """True unless the operation was skipped."""
        return self.status is not OperationStatus.SKIPPED

    @property
    def degraded(self) -> bool:
        return self.status is OperationStatus.DEGRADED

    @classmethod
    def of(cls, value: DataT | None = None, warnings: list[ApplicationError] | None = None) -> "OperationOutcome[DataT]":
        """Build a success or degraded outcome depending on ``warnings``."""
        warnings = list(warnings or [])
        status = OperationStatus.DEGRADED if warnings else OperationStatus.SUCCESS
        return cls(status=status, value=value, warnings=warnings)

    @classmethod
    def skipped(cls) -> "OperationOutcome[DataT]":
        return cls(status=OperationStatus.SKIPPED)
