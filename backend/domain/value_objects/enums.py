"""
Domain enums for type-safe constants.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Failure categories surfaced by the validator and the entry store."""

    INVALID_INPUT = "invalid_input"  # Wrong shape or type
    TOO_LONG = "too_long"
    TOO_MANY = "too_many"
    EMPTY = "empty"  # Required field blank after trimming
    INVALID_FORMAT = "invalid_format"  # Pattern mismatch
    NOT_FOUND = "not_found"
    CAPACITY_EXCEEDED = "capacity_exceeded"
    FUTURE_TIMESTAMP = "future_timestamp"

    def __str__(self) -> str:
        return self.value

    @property
    def title(self) -> str:
        """Short human-readable label used in error responses."""
        if self is ErrorKind.NOT_FOUND:
            return "Not Found"
        if self is ErrorKind.CAPACITY_EXCEEDED:
            return "Capacity Exceeded"
        return "Validation Error"


class Environment(str, Enum):
    """Deployment environments recognised by the settings layer."""

    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TEST = "test"

    def __str__(self) -> str:
        return self.value
