from datetime import datetime, timezone

from sqlalchemy import DateTime
from sqlalchemy.types import TypeDecorator


class TZAwareDateTime(TypeDecorator):
    """
    DateTime column that always hands back timezone-aware UTC values.

    SQLite drops tzinfo on storage, so values are normalised to UTC on the
    way in and re-tagged as UTC on the way out.
    """

    impl = DateTime
    cache_ok = True

    def __init__(self, timezone: bool = True, **kwargs):
        super().__init__(timezone=timezone, **kwargs)

    def process_bind_param(self, value: datetime | None, dialect):
        if value is None:
            return value
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def process_result_value(self, value: datetime | None, dialect):
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value
