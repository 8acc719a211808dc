# apps/api/parking/__init__.py

# ONLY import models here (needed for registry)
from .models import (
    ParkingLot,
    ParkingSession,
    SessionStatus,
    SessionPhase,
)

__all__ = [
    "ParkingLot",
    "ParkingSession",
    "SessionStatus",
    "SessionPhase",
]

# DO NOT import router here - it will be imported directly by your app loader
