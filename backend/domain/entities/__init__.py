"""
Domain entities - core data models for business logic.
"""

from .entry import Entry, EntryStatistics, ValidatedEntry

__all__ = [
    "Entry",
    "EntryStatistics",
    "ValidatedEntry",
]
