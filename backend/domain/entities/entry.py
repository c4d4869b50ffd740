"""
Entry domain model.

This module defines the journal entry used throughout the application.
It's separate from the Pydantic response schemas (schemas.Entry) so the store
never depends on the HTTP layer.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import List, Optional, Tuple


@dataclass
class ValidatedEntry:
    """
    Entry fields that have passed the validator but have no identity yet.

    Attributes:
        message: Sanitized, HTML-escaped message text
        tags: Lower-cased tags in submission order
        category: Trimmed category, or None when absent
    """

    message: str
    tags: List[str] = field(default_factory=list)
    category: Optional[str] = None


@dataclass
class Entry:
    """
    A stored journal entry.

    Attributes:
        id: Server-generated identifier, immutable once created
        message: Sanitized message text
        tags: Lower-cased tags in submission order (not deduplicated)
        category: Optional category, None when absent
        timestamp: Timezone-aware UTC creation time
    """

    id: str
    message: str
    tags: List[str]
    category: Optional[str]
    timestamp: datetime

    def copy(self) -> "Entry":
        """Return a copy whose tag list can be mutated independently."""
        return replace(self, tags=list(self.tags))

    def search_text(self) -> Tuple[str, str, List[str]]:
        """Lower-cased (message, category, tags) used by keyword search."""
        return (
            self.message.lower(),
            (self.category or "").lower(),
            [tag.lower() for tag in self.tags],
        )


@dataclass
class EntryStatistics:
    """Aggregate view over the store, computed on demand."""

    total_entries: int
    total_tags: int
    total_categories: int
    most_used_tags: List[Tuple[str, int]]
    most_used_categories: List[Tuple[str, int]]
