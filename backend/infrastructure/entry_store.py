"""
In-memory entry storage.

The EntryStore is the single authority over the entry collection. Every write
goes through the EntryValidator before it touches the collection, so a
rejected write never leaves a partial entry behind.

Nothing is written to disk; a process restart empties the store.

Threading model:
- Mutations hold a threading.Lock scoped to the whole collection
- Reads (list, statistics, search) copy under the lock and work on the copy
"""

import logging
import uuid
from collections import Counter
from datetime import datetime, timezone
from threading import Lock
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from domain.entities.entry import Entry, EntryStatistics
from domain.exceptions import CapacityExceededError, EntryNotFoundError, InvalidInputError
from domain.services.entry_validation import EntryValidator

logger = logging.getLogger("EntryStore")

# Number of (name, count) pairs returned per ranking
TOP_N = 10


def _rank(counts: Counter) -> List[Tuple[str, int]]:
    """Sort by count descending, then by name so equal counts have a stable order."""
    return sorted(counts.items(), key=lambda item: (-item[1], item[0]))[:TOP_N]


class EntryStore:
    """
    Thread-safe in-memory collection of journal entries.

    Entries are kept in a dict keyed by id, which preserves insertion order.
    """

    def __init__(self, validator: Optional[EntryValidator] = None):
        """Initialize an empty store."""
        self.validator = validator or EntryValidator()
        self._entries: Dict[str, Entry] = {}
        self._lock = Lock()

    @property
    def max_entries(self) -> int:
        return self.validator.limits.max_entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _snapshot(self) -> List[Entry]:
        with self._lock:
            return [entry.copy() for entry in self._entries.values()]

    def _new_id(self) -> str:
        # uuid4, regenerated on the unlikely collision
        entry_id = str(uuid.uuid4())
        while entry_id in self._entries:
            entry_id = str(uuid.uuid4())
        return entry_id

    def list(self) -> List[Entry]:
        """
        Get all entries in insertion order.

        Callers that need chronological order sort by timestamp themselves.
        """
        return self._snapshot()

    def get_by_id(self, entry_id: str) -> Entry:
        """
        Get a single entry.

        Raises:
            InvalidFormatError: entry_id is not a well-formed id
            EntryNotFoundError: no entry has this id
        """
        entry_id = self.validator.validate_id(entry_id)
        with self._lock:
            entry = self._entries.get(entry_id)
            if entry is None:
                raise EntryNotFoundError(entry_id)
            return entry.copy()

    def add(self, payload: Any) -> Entry:
        """
        Validate a payload and store it as a new entry.

        The id and timestamp are assigned here; any id or timestamp in the
        payload is ignored.

        Returns:
            The stored entry

        Raises:
            JournalError: payload failed validation
            CapacityExceededError: the store already holds max_entries entries
        """
        validated = self.validator.validate_entry(payload)

        with self._lock:
            if len(self._entries) >= self.max_entries:
                logger.warning(f"Rejected new entry: store is at capacity ({self.max_entries})")
                raise CapacityExceededError(self.max_entries)

            entry = Entry(
                id=self._new_id(),
                message=validated.message,
                tags=validated.tags,
                category=validated.category,
                timestamp=datetime.now(timezone.utc),
            )
            self._entries[entry.id] = entry
            logger.debug(f"Entry added: {entry.id} ({len(entry.tags)} tags)")
            return entry.copy()

    def update(self, entry_id: str, payload: Any) -> Entry:
        """
        Replace the fields present in a partial payload.

        Omitted fields are left untouched; id and timestamp never change.

        Returns:
            The updated entry

        Raises:
            EntryNotFoundError: no entry has this id
            JournalError: id or a present field failed validation
        """
        entry_id = self.validator.validate_id(entry_id)
        changes = self.validator.validate_update(payload)

        with self._lock:
            entry = self._entries.get(entry_id)
            if entry is None:
                raise EntryNotFoundError(entry_id)

            for field_name, value in changes.items():
                setattr(entry, field_name, value)
            logger.debug(f"Entry updated: {entry_id} (fields: {sorted(changes)})")
            return entry.copy()

    def delete(self, entry_id: str) -> None:
        """
        Remove an entry permanently.

        Raises:
            EntryNotFoundError: no entry has this id
        """
        entry_id = self.validator.validate_id(entry_id)
        with self._lock:
            if self._entries.pop(entry_id, None) is None:
                raise EntryNotFoundError(entry_id)
            logger.debug(f"Entry deleted: {entry_id}")

    def clear(self) -> None:
        """Remove every entry."""
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
            logger.info(f"Entry store cleared: {count} entries removed")

    def replace_all(self, payloads: Iterable[Mapping[str, Any]]) -> List[Entry]:
        """
        Replace the whole collection with previously exported entries.

        Unlike add(), each payload must carry its own id and timestamp, and
        both are validated. The swap happens only if every payload is valid.

        Returns:
            The stored entries in the given order
        """
        replacement: Dict[str, Entry] = {}
        for index, payload in enumerate(payloads):
            validated = self.validator.validate_entry(payload)
            entry_id = self.validator.validate_id(payload.get("id"))
            if entry_id in replacement:
                raise InvalidInputError(f"Duplicate entry id at index {index}")
            replacement[entry_id] = Entry(
                id=entry_id,
                message=validated.message,
                tags=validated.tags,
                category=validated.category,
                timestamp=self.validator.validate_timestamp(payload.get("timestamp")),
            )

        if len(replacement) > self.max_entries:
            raise CapacityExceededError(self.max_entries)

        with self._lock:
            self._entries = replacement
            logger.info(f"Entry store replaced: {len(replacement)} entries")
            return [entry.copy() for entry in replacement.values()]

    def statistics(self) -> EntryStatistics:
        """
        Compute tag and category usage over a consistent snapshot.

        Returns:
            Totals plus the ten most used tags and categories as (name, count)
            pairs, most used first, equal counts ordered by name
        """
        entries = self._snapshot()
        tag_counts: Counter = Counter()
        category_counts: Counter = Counter()

        for entry in entries:
            tag_counts.update(entry.tags)
            if entry.category:
                category_counts[entry.category] += 1

        return EntryStatistics(
            total_entries=len(entries),
            total_tags=len(tag_counts),
            total_categories=len(category_counts),
            most_used_tags=_rank(tag_counts),
            most_used_categories=_rank(category_counts),
        )

    def search(
        self,
        query: Optional[str] = None,
        tag: Optional[str] = None,
        category: Optional[str] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[Entry]:
        """
        Filter entries, newest first.

        Args:
            query: Whitespace-separated keywords; every keyword must appear
                (case-insensitive substring) in the message, category or a tag
            tag: Exact tag match, case-insensitive
            category: Exact category match, case-insensitive
            start: Earliest timestamp, inclusive
            end: Latest timestamp, inclusive

        Returns:
            Matching entries sorted by timestamp descending
        """
        tokens = (query or "").lower().split()
        wanted_tag = tag.strip().lower() if tag else None
        wanted_category = category.strip().lower() if category else None

        results = []
        for entry in self._snapshot():
            if start is not None and entry.timestamp < start:
                continue
            if end is not None and entry.timestamp > end:
                continue

            message, entry_category, entry_tags = entry.search_text()
            if wanted_tag and wanted_tag not in entry_tags:
                continue
            if wanted_category and entry_category != wanted_category:
                continue
            if not all(
                token in message or token in entry_category or any(token in t for t in entry_tags)
                for token in tokens
            ):
                continue
            results.append(entry)

        results.sort(key=lambda e: e.timestamp, reverse=True)
        return results
