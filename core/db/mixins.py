from sqlalchemy import Column

from core.db.fields import TZAwareDateTime
from core.utils.clock import utcnow


class TimestampsMixin:
    created_at = Column(TZAwareDateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(
        TZAwareDateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )
