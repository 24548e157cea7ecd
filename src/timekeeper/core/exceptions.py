from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidDurationError(ValidationError):
    """Raised when a clock-out would not come strictly after the clock-in."""


class DuplicateSessionError(DomainError):
    """Raised when the employee already has an open session for the day."""

    def __init__(self, message: str = "Employee already clocked in today", *, record_id: Optional[str] = None):
        super().__init__(message)
        self.record_id = record_id


class NotFoundError(DomainError):
    """Raised when a referenced attendance record does not exist."""


class AlreadyClosedError(DomainError):
    """Raised when clocking out a session that already has a clock-out time."""


class AuthenticationError(DomainError):
    """Raised when the HR credential is invalid."""


class StorageError(DomainError):
    """Raised when the storage backend fails."""
