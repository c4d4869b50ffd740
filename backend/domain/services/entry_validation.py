"""
Entry field validation and sanitization.

Every value that reaches the entry store passes through EntryValidator first.
Each check either returns the normalized value or raises a JournalError
subclass naming the failure kind. Nothing here has side effects.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Mapping, Optional

from domain.entities.entry import ValidatedEntry
from domain.exceptions import (
    EmptyError,
    FutureTimestampError,
    InvalidFormatError,
    InvalidInputError,
    JournalError,
    TooLongError,
    TooManyError,
)


TAG_PATTERN = re.compile(r"[a-zA-Z0-9_-]+")
CATEGORY_PATTERN = re.compile(r"[a-zA-Z0-9\s_-]+")
ID_PATTERN = re.compile(r"[a-zA-Z0-9_-]+")

MAX_ID_LENGTH = 100
MAX_CLOCK_SKEW = timedelta(seconds=60)

# Stripped from free text before escaping, in this order
_SCRIPT_BLOCK = re.compile(r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", re.IGNORECASE)
_EVENT_HANDLER = re.compile(r"on\w+\s*=\s*[\"'][^\"']*[\"']", re.IGNORECASE)
_DANGEROUS_URI = re.compile(r"javascript:|data:text/html", re.IGNORECASE)
_EMBED_OPENER = re.compile(r"<(?:iframe|object|embed|link|meta)", re.IGNORECASE)

_HTML_ESCAPES = str.maketrans(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&quot;",
        "'": "&#x27;",
        "/": "&#x2F;",
    }
)


def escape_html(value: str) -> str:
    """HTML-escape the five markup characters plus the forward slash."""
    return value.translate(_HTML_ESCAPES)


def strip_dangerous_markup(value: str) -> str:
    """Remove script blocks, inline handlers, script URIs and embedding tag openers."""
    value = _SCRIPT_BLOCK.sub("", value)
    value = _EVENT_HANDLER.sub("", value)
    value = _DANGEROUS_URI.sub("", value)
    return _EMBED_OPENER.sub("", value)


@dataclass(frozen=True)
class EntryLimits:
    """Policy limits injected at startup."""

    max_entries: int = 10000
    max_message_length: int = 10000
    max_tag_length: int = 50
    max_category_length: int = 100
    max_tags_per_entry: int = 20

    @classmethod
    def from_settings(cls, settings) -> "EntryLimits":
        """Build limits from the application Settings object."""
        return cls(
            max_entries=settings.max_entries,
            max_message_length=settings.max_message_length,
            max_tag_length=settings.max_tag_length,
            max_category_length=settings.max_category_length,
            max_tags_per_entry=settings.max_tags_per_entry,
        )


class EntryValidator:
    """Validates and normalizes untrusted entry fields against EntryLimits."""

    def __init__(self, limits: Optional[EntryLimits] = None):
        self.limits = limits or EntryLimits()

    def validate_text(self, value: Any, max_length: Optional[int] = None) -> str:
        """
        Trim, length-check, strip dangerous markup and HTML-escape free text.

        Length limits apply to the trimmed input, not to the escaped output.

        Args:
            value: Untrusted input
            max_length: Maximum trimmed length (defaults to the message limit)

        Returns:
            Sanitized text safe to render as HTML

        Raises:
            InvalidInputError: value is not a string
            TooLongError: trimmed value exceeds max_length
            EmptyError: trimmed value is empty
        """
        if max_length is None:
            max_length = self.limits.max_message_length
        if not isinstance(value, str):
            raise InvalidInputError("Input must be a string")

        trimmed = value.strip()
        if len(trimmed) > max_length:
            raise TooLongError(f"Input exceeds maximum length of {max_length} characters")
        if not trimmed:
            raise EmptyError("Input cannot be empty")

        return escape_html(strip_dangerous_markup(trimmed))

    def validate_tag(self, value: Any) -> str:
        """Return the trimmed, lower-cased tag."""
        if not isinstance(value, str):
            raise InvalidInputError("Tag must be a string")

        trimmed = value.strip()
        if not trimmed:
            raise EmptyError("Tag cannot be empty")
        if len(trimmed) > self.limits.max_tag_length:
            raise TooLongError(f"Tag exceeds maximum length of {self.limits.max_tag_length} characters")
        if not TAG_PATTERN.fullmatch(trimmed):
            raise InvalidFormatError(
                "Tag contains invalid characters. Only letters, numbers, hyphens, and underscores are allowed"
            )

        return trimmed.lower()

    def validate_tags(self, values: Any) -> List[str]:
        """
        Validate every tag in a list, keeping order and duplicates.

        A failing element is re-raised with the same kind and a message naming its index.
        """
        if not isinstance(values, (list, tuple)):
            raise InvalidInputError("Tags must be an array")
        if len(values) > self.limits.max_tags_per_entry:
            raise TooManyError(f"Maximum {self.limits.max_tags_per_entry} tags allowed")

        validated = []
        for index, tag in enumerate(values):
            try:
                validated.append(self.validate_tag(tag))
            except JournalError as e:
                raise type(e)(f"Tag at index {index} is invalid: {e.message}") from e
        return validated

    def validate_category(self, value: Any) -> str:
        """Return the trimmed category; internal whitespace and case are kept."""
        if not isinstance(value, str):
            raise InvalidInputError("Category must be a string")

        trimmed = value.strip()
        if not trimmed:
            raise EmptyError("Category cannot be empty")
        if len(trimmed) > self.limits.max_category_length:
            raise TooLongError(f"Category exceeds maximum length of {self.limits.max_category_length} characters")
        if not CATEGORY_PATTERN.fullmatch(trimmed):
            raise InvalidFormatError("Category contains invalid characters")

        return trimmed

    @staticmethod
    def validate_id(value: Any) -> str:
        """Check entry id format only; existence is the store's concern."""
        if not isinstance(value, str):
            raise InvalidInputError("Entry ID must be a string")
        if not ID_PATTERN.fullmatch(value):
            raise InvalidFormatError("Invalid entry ID format")
        if len(value) > MAX_ID_LENGTH:
            raise TooLongError("Entry ID is too long")
        return value

    @staticmethod
    def validate_timestamp(value: Any, now: Optional[datetime] = None) -> datetime:
        """
        Parse a timestamp and reject values beyond the allowed clock skew.

        Accepts a datetime, an ISO-8601 string, or a numeric epoch in milliseconds.
        Naive datetimes are taken as UTC.

        Returns:
            Timezone-aware UTC datetime
        """
        if isinstance(value, datetime):
            parsed = value
        elif isinstance(value, bool):
            raise InvalidInputError("Timestamp must be a Date, string, or number")
        elif isinstance(value, (int, float)):
            try:
                parsed = datetime.fromtimestamp(value / 1000, tz=timezone.utc)
            except (OverflowError, OSError, ValueError):
                raise InvalidInputError("Invalid timestamp")
        elif isinstance(value, str):
            try:
                parsed = datetime.fromisoformat(value.strip())
            except ValueError:
                raise InvalidInputError("Invalid timestamp")
        else:
            raise InvalidInputError("Timestamp must be a Date, string, or number")

        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        parsed = parsed.astimezone(timezone.utc)

        now = now or datetime.now(timezone.utc)
        if parsed > now + MAX_CLOCK_SKEW:
            raise FutureTimestampError("Timestamp cannot be in the future")
        return parsed

    def validate_entry(self, payload: Any) -> ValidatedEntry:
        """
        Validate a complete entry payload.

        `message` is required; `tags` defaults to an empty list; a missing or
        empty `category` means no category.
        """
        if not isinstance(payload, Mapping):
            raise InvalidInputError("Entry must be an object")

        tags = payload.get("tags")
        category = payload.get("category")
        return ValidatedEntry(
            message=self.validate_text(payload.get("message")),
            tags=self.validate_tags(tags) if tags else [],
            category=self.validate_category(category) if category else None,
        )

    def validate_update(self, payload: Any) -> Dict[str, Any]:
        """
        Validate only the fields present in a partial update.

        A `category` key holding None or "" clears the category.

        Returns:
            Mapping of field name to validated value, for present fields only
        """
        if not isinstance(payload, Mapping):
            raise InvalidInputError("Update must be an object")

        validated: Dict[str, Any] = {}
        if "message" in payload:
            validated["message"] = self.validate_text(payload["message"])
        if "tags" in payload:
            validated["tags"] = self.validate_tags(payload["tags"])
        if "category" in payload:
            category = payload["category"]
            validated["category"] = self.validate_category(category) if category else None
        return validated
