"""
Serialization helper functions for Pydantic models.
"""

from datetime import datetime, timezone


def serialize_utc_datetime(dt: datetime) -> datetime:
    """
    Normalize a datetime to timezone-aware UTC before serialization.

    Args:
        dt: Datetime object (naive values are taken as UTC)

    Returns:
        Timezone-aware UTC datetime
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)
