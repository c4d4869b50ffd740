"""Common schema utilities and base classes."""

from datetime import datetime

from pydantic import ConfigDict, field_serializer
from pydantic.alias_generators import to_camel
from utils.serializers import serialize_utc_datetime


class TimestampSerializerMixin:
    """Mixin emitting the entry timestamp as timezone-aware UTC."""

    @field_serializer("timestamp")
    def serialize_timestamp(self, dt: datetime, _info):
        return serialize_utc_datetime(dt)


# Response models consumed by the web client use camelCase keys
CAMEL_CASE_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


__all__ = [
    "CAMEL_CASE_CONFIG",
    "TimestampSerializerMixin",
]
