# apps/api/parking/schema.py

from datetime import datetime
from typing import Optional

from pydantic import Field

from apps.api.parking.models import SessionPhase, SessionStatus
from core.response.models import CustomBaseModel


# ===== Lot Schemas =====

class ParkingLotResponse(CustomBaseModel):
    """Snapshot of a parking lot and its current availability"""
    id: int
    code: str
    name: str
    location: str
    available_spaces: int
    total_spaces: int
    charging_fee_per_hour: float


class LotSummary(CustomBaseModel):
    id: int
    code: str
    name: str
    charging_fee_per_hour: float


# ===== Session Schemas =====

class EntryRequest(CustomBaseModel):
    """Schema for requesting entry to a lot"""
    lot_code: str = Field(..., min_length=1, max_length=20, description="Code of the lot to enter")
    plate_number: str = Field(..., min_length=1, max_length=20, description="Vehicle plate number")


class SessionUserSummary(CustomBaseModel):
    id: int
    first_name: str
    last_name: str
    email: str


class SessionResponse(CustomBaseModel):
    """Schema for parking session response"""
    id: int
    lot_id: int
    user_id: int
    plate_number: str
    entry_time: datetime
    exit_time: Optional[datetime] = None
    status: SessionStatus
    phase: SessionPhase
    charged_amount: Optional[float] = None
    lot: LotSummary
    user: Optional[SessionUserSummary] = None
