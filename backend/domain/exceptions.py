"""
Custom exception classes for the devlog application.

Every failure raised by the validator or the entry store carries an ErrorKind
so callers can branch on the kind instead of matching message strings.
The HTTP status for each kind is decided by the app factory, not here.
"""

from domain.value_objects.enums import ErrorKind


class JournalError(Exception):
    """Base class for validation and storage failures."""

    kind: ErrorKind = ErrorKind.INVALID_INPUT

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInputError(JournalError):
    """Raised when a value has the wrong type or shape."""

    kind = ErrorKind.INVALID_INPUT


class TooLongError(JournalError):
    """Raised when a value exceeds its maximum length."""

    kind = ErrorKind.TOO_LONG


class TooManyError(JournalError):
    """Raised when a collection exceeds its maximum size."""

    kind = ErrorKind.TOO_MANY


class EmptyError(JournalError):
    """Raised when a required value is blank after trimming."""

    kind = ErrorKind.EMPTY


class InvalidFormatError(JournalError):
    """Raised when a value does not match its allowed character pattern."""

    kind = ErrorKind.INVALID_FORMAT


class FutureTimestampError(JournalError):
    """Raised when a timestamp lies beyond the allowed clock skew."""

    kind = ErrorKind.FUTURE_TIMESTAMP


class EntryNotFoundError(JournalError):
    """Raised when a requested entry does not exist."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, entry_id: str):
        super().__init__(f"Entry with id {entry_id} not found")
        self.entry_id = entry_id


class CapacityExceededError(JournalError):
    """Raised when the store already holds the maximum number of entries."""

    kind = ErrorKind.CAPACITY_EXCEEDED

    def __init__(self, max_entries: int):
        super().__init__(f"Maximum number of entries reached ({max_entries})")
        self.max_entries = max_entries


class ConfigurationError(ValueError):
    """Raised when there's an error in configuration parsing or validation."""

    def __init__(self, message: str):
        super().__init__(f"Configuration error: {message}")
