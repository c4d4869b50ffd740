"""
Domain layer for internal business logic data structures.

Structure:
- entities/: Core data models (Entry, EntryStatistics)
- value_objects/: Immutable types and enums (ErrorKind, Environment)
- services/: Pure domain logic (entry validation)
- exceptions.py: Typed failures raised by the validator and the store
"""

from .entities import Entry, EntryStatistics, ValidatedEntry
from .services import EntryLimits, EntryValidator
from .value_objects import Environment, ErrorKind

__all__ = [
    "Entry",
    "EntryStatistics",
    "ValidatedEntry",
    "EntryLimits",
    "EntryValidator",
    "Environment",
    "ErrorKind",
]
