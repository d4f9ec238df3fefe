"""Typed outcomes for write operations."""

from dataclasses import dataclass
from enum import StrEnum


class FailureKind(StrEnum):
    """Why a write did not happen."""

    VALIDATION = "validation"
    STORAGE = "storage"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class WriteFailure:
    """Failed write that the caller can show, and retry when storage failed."""

    kind: FailureKind
    reason: str
    field: str | None = None

    @property
    def retryable(self) -> bool:
        """Storage failures can be retried unchanged."""
        return self.kind == FailureKind.STORAGE

    @classmethod
    def invalid(cls, field: str, reason: str) -> "WriteFailure":
        """Build a field-level validation failure."""
        return cls(kind=FailureKind.VALIDATION, reason=reason, field=field)

    @classmethod
    def storage(cls, reason: str) -> "WriteFailure":
        """Build a storage failure."""
        return cls(kind=FailureKind.STORAGE, reason=reason)

    @classmethod
    def not_found(cls, reason: str) -> "WriteFailure":
        """Build a missing-row failure."""
        return cls(kind=FailureKind.NOT_FOUND, reason=reason)
