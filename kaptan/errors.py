"""Error taxonomy and typed write outcomes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class KaptanError(Exception):
    """Base class for errors rendered to API callers."""

    status_code = 500
    default_message = "Internal error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    @property
    def code(self) -> str:
        return type(self).__name__


class ValidationError(KaptanError):
    """Bad caller input."""

    status_code = 400
    default_message = "Invalid input"


class DuplicateKeyError(ValidationError):
    """A unique natural key (slug, settings key, open id) is already taken."""

    status_code = 409
    default_message = "Duplicate key"


class Unauthenticated(KaptanError):
    status_code = 401
    default_message = "Please login"


class Forbidden(KaptanError):
    status_code = 403
    default_message = "Admin access required"


class NotFound(KaptanError):
    status_code = 404
    default_message = "Not found"


class StoreUnavailableError(KaptanError):
    """The relational store could not be reached.

    Never retried automatically; the caller decides.
    """

    status_code = 503
    default_message = "Database not available"


class UpstreamStorageError(KaptanError):
    """The object store rejected or failed an upload."""

    status_code = 502
    default_message = "Media storage failed"


class OutcomeStatus(str, Enum):
    OK = "ok"
    SOFT_FAILURE = "soft_failure"
    HARD_FAILURE = "hard_failure"


@dataclass(frozen=True, slots=True)
class WriteOutcome:
    """Result of a write whose failure the caller may choose to tolerate.

    ``SOFT_FAILURE`` means the store was unreachable; ``HARD_FAILURE`` means
    the write itself was rejected.
    """

    status: OutcomeStatus
    value: Any = None
    error: Exception | None = None

    @classmethod
    def success(cls, value: Any = None) -> WriteOutcome:
        return cls(OutcomeStatus.OK, value=value)

    @classmethod
    def soft_failure(cls, error: Exception) -> WriteOutcome:
        return cls(OutcomeStatus.SOFT_FAILURE, error=error)

    @classmethod
    def hard_failure(cls, error: Exception) -> WriteOutcome:
        return cls(OutcomeStatus.HARD_FAILURE, error=error)

    @property
    def ok(self) -> bool:
        return self.status is OutcomeStatus.OK

    def unwrap(self) -> Any:
        """Return the value, raising the recorded error on any failure."""
        if self.error is not None:
            raise self.error
        return self.value
