# apps/api/parking/router.py

from typing import List

from fastapi import APIRouter, status

from apps.api.auth.dependency import AdminUserDependency, UserDependency
from apps.api.parking.dependency import ensure_session_access
from apps.api.parking.schema import EntryRequest, ParkingLotResponse, SessionResponse
from apps.api.parking.service import ParkingServiceDependency

router = APIRouter(
    prefix="/parking",
    tags=["Parking"],
)


# ===== Lot Endpoints =====

@router.get("/lots", description="List all parking lots")
async def list_lots(
    user: UserDependency,
    parking_service: ParkingServiceDependency,
) -> List[ParkingLotResponse]:
    return await parking_service.list_lots()


@router.get("/lots/code/{code}", description="Get a parking lot by its code")
async def get_lot_by_code(
    code: str,
    user: UserDependency,
    parking_service: ParkingServiceDependency,
) -> ParkingLotResponse:
    return await parking_service.get_lot_by_code(code)


@router.get("/lots/{lot_id}", description="Get a parking lot by id")
async def get_lot(
    lot_id: int,
    user: UserDependency,
    parking_service: ParkingServiceDependency,
) -> ParkingLotResponse:
    return await parking_service.get_lot(lot_id)


# ===== Session Endpoints =====

@router.post(
    "/sessions/entry",
    description="Request entry to a parking lot",
    status_code=status.HTTP_201_CREATED,
)
async def request_entry(
    payload: EntryRequest,
    user: UserDependency,
    parking_service: ParkingServiceDependency,
) -> SessionResponse:
    """
    Open a PENDING session. Fails with 409 LOT_FULL when the lot has no
    available spaces. The space is reserved only once an admin approves.
    """
    return await parking_service.request_entry(
        lot_code=payload.lot_code,
        plate_number=payload.plate_number,
        user_id=user.id,
    )


@router.get("/sessions/mine", description="List my parking sessions")
async def my_sessions(
    user: UserDependency,
    parking_service: ParkingServiceDependency,
) -> List[SessionResponse]:
    return await parking_service.my_sessions(user.id)


@router.get("/sessions/active", description="List my currently parked sessions")
async def active_sessions(
    user: UserDependency,
    parking_service: ParkingServiceDependency,
) -> List[SessionResponse]:
    return await parking_service.active_sessions(user.id)


@router.get("/sessions/{session_id}", description="Get one parking session")
async def get_session(
    session_id: int,
    user: UserDependency,
    parking_service: ParkingServiceDependency,
) -> SessionResponse:
    parking_session = await parking_service.get_session(session_id)
    ensure_session_access(parking_session, user)
    return parking_session


@router.post("/sessions/{session_id}/exit", description="Request exit and settle the fee")
async def request_exit(
    session_id: int,
    user: UserDependency,
    parking_service: ParkingServiceDependency,
) -> SessionResponse:
    """
    Stamp the exit time and charge for the hours parked. The session waits
    for an admin to approve the exit before the space is released.
    """
    parking_session = await parking_service.get_session(session_id)
    ensure_session_access(parking_session, user)
    return await parking_service.request_exit(session_id)


# ===== Admin Endpoints =====

@router.get("/admin/entry-requests", description="List pending entry requests (Admin)")
async def list_entry_requests(
    admin: AdminUserDependency,
    parking_service: ParkingServiceDependency,
) -> List[SessionResponse]:
    return await parking_service.entry_requests()


@router.get("/admin/exit-requests", description="List exits awaiting approval (Admin)")
async def list_exit_requests(
    admin: AdminUserDependency,
    parking_service: ParkingServiceDependency,
) -> List[SessionResponse]:
    return await parking_service.exit_requests()


@router.post("/admin/sessions/{session_id}/approve-entry", description="Approve an entry request (Admin)")
async def approve_entry(
    session_id: int,
    admin: AdminUserDependency,
    parking_service: ParkingServiceDependency,
) -> SessionResponse:
    return await parking_service.approve_entry(session_id)


@router.post("/admin/sessions/{session_id}/reject-entry", description="Reject an entry request (Admin)")
async def reject_entry(
    session_id: int,
    admin: AdminUserDependency,
    parking_service: ParkingServiceDependency,
) -> SessionResponse:
    return await parking_service.reject_entry(session_id)


@router.post("/admin/sessions/{session_id}/approve-exit", description="Approve an exit request (Admin)")
async def approve_exit(
    session_id: int,
    admin: AdminUserDependency,
    parking_service: ParkingServiceDependency,
) -> SessionResponse:
    return await parking_service.approve_exit(session_id)


@router.post("/admin/sessions/{session_id}/reject-exit", description="Reject an exit request (Admin)")
async def reject_exit(
    session_id: int,
    admin: AdminUserDependency,
    parking_service: ParkingServiceDependency,
) -> SessionResponse:
    return await parking_service.reject_exit(session_id)
