"""Entry-related schemas."""

from datetime import datetime
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from schemas.common import CAMEL_CASE_CONFIG, TimestampSerializerMixin


class EntryBase(BaseModel):
    message: str
    tags: List[str] = []
    category: Optional[str] = None


class EntryCreate(BaseModel):
    """Shape check for new entries; field policy is enforced by EntryValidator."""

    message: str
    tags: Optional[List[str]] = None
    category: Optional[str] = None


class EntryUpdate(BaseModel):
    """Partial update; only fields present in the request body are applied."""

    message: Optional[str] = None
    tags: Optional[List[str]] = None
    category: Optional[str] = None


class Entry(TimestampSerializerMixin, EntryBase):
    id: str
    timestamp: datetime

    model_config = ConfigDict(from_attributes=True)


class EntryStatistics(BaseModel):
    total_entries: int
    total_tags: int
    total_categories: int
    most_used_tags: List[Tuple[str, int]]
    most_used_categories: List[Tuple[str, int]]

    model_config = ConfigDict(from_attributes=True, **CAMEL_CASE_CONFIG)


class HealthStatus(BaseModel):
    status: str
    timestamp: datetime


__all__ = [
    "EntryBase",
    "EntryCreate",
    "EntryUpdate",
    "Entry",
    "EntryStatistics",
    "HealthStatus",
]
