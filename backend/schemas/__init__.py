"""
Pydantic schemas for API request/response models.

This package organizes schemas by resource type:
- entries.py: Entry, statistics and health schemas
- common.py: Shared base classes and mixins
"""

from schemas.common import CAMEL_CASE_CONFIG, TimestampSerializerMixin
from schemas.entries import Entry, EntryBase, EntryCreate, EntryStatistics, EntryUpdate, HealthStatus

__all__ = [
    # Common
    "CAMEL_CASE_CONFIG",
    "TimestampSerializerMixin",
    # Entries
    "EntryBase",
    "EntryCreate",
    "EntryUpdate",
    "Entry",
    "EntryStatistics",
    "HealthStatus",
]
