import asyncio
from typing import Annotated

from fastapi import Depends, Request

from apps.api.parking.models import ParkingSession
from apps.api.user.models import User
from core.exceptions import ForbiddenException


def get_parking_lock(request: Request) -> asyncio.Lock:
    """The lock serialising every session transition of this app instance."""
    return request.app.state.parking_lock


ParkingLockDep = Annotated[asyncio.Lock, Depends(get_parking_lock)]


def ensure_session_access(parking_session: ParkingSession, user: User):
    if parking_session.user_id != user.id and not user.is_admin:
        raise ForbiddenException(
            "You can only manage your own parking sessions",
            error_code="SESSION_NOT_OWNED",
        )
