from datetime import datetime, timezone
from typing import Annotated, Callable

from fastapi import Depends

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def get_clock() -> Clock:
    """Dependency returning the time source; overridden in tests."""
    return utcnow


ClockDep = Annotated[Clock, Depends(get_clock)]
