# apps/api/parking/service.py

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Annotated, List

from sqlalchemy import select

from apps.api.parking.dependency import ParkingLockDep
from apps.api.parking.exceptions import (
    InvalidTransitionException,
    LotExhaustedException,
    SessionNotFoundException,
)
from apps.api.parking.fees import calculate_parking_fee
from apps.api.parking.models import (
    ParkingLot,
    ParkingSession,
    SessionPhase,
    SessionStatus,
)
from apps.api.parking.registry import LotRegistry
from apps.context import get_current_user_id
from core.architecture.service import AbstractService
from core.db.core import SessionDep
from core.utils.clock import Clock, ClockDep, utcnow
from core.utils.validations import normalize_plate_number

logger = logging.getLogger(__name__)


class ParkingService(AbstractService):
    """
    Session ledger: drives parking sessions through their lifecycle and
    moves lot capacity along with them.

    PENDING -> ACTIVE -> EXIT_PENDING -> COMPLETED, with PENDING -> REJECTED
    and EXIT_PENDING -> ACTIVE (exit rejected). Every transition runs under
    the shared parking lock as a single transaction.
    """

    DEPENDENCIES = {"session": SessionDep, "lock": ParkingLockDep, "clock": ClockDep}

    def __init__(
        self,
        session: SessionDep,
        lock: asyncio.Lock,
        clock: Clock = utcnow,
        **kwargs,
    ):
        super().__init__(session=session, **kwargs)
        self.session = session
        self.lock = lock
        self.clock = clock
        self.lots = LotRegistry(session)

    # ===== Helper Methods =====

    @asynccontextmanager
    async def _transition(self):
        """Hold the parking lock and commit on success, roll back on any error."""
        async with self.lock:
            try:
                yield
                await self.session.commit()
            except Exception:
                await self.session.rollback()
                raise

    async def _load_session(self, session_id: int) -> ParkingSession:
        parking_session = await self.session.get(
            ParkingSession, session_id, populate_existing=True
        )
        if not parking_session:
            raise SessionNotFoundException(session_id)
        return parking_session

    def _require_phase(
        self, parking_session: ParkingSession, expected: SessionPhase, action: str
    ):
        phase = parking_session.phase
        if phase != expected:
            logger.warning(
                "Refused to %s for session %s in phase %s (caller %s)",
                action,
                parking_session.id,
                phase.value,
                get_current_user_id(),
            )
            raise InvalidTransitionException(parking_session.id, action, phase.value)

    async def _list_sessions(self, *conditions) -> List[ParkingSession]:
        result = await self.session.scalars(
            select(ParkingSession).where(*conditions).order_by(ParkingSession.id)
        )
        return list(result)

    # ===== Lots =====

    async def list_lots(self) -> List[ParkingLot]:
        return await self.lots.list_lots()

    async def get_lot(self, lot_id: int) -> ParkingLot:
        return await self.lots.get_lot(lot_id)

    async def get_lot_by_code(self, code: str) -> ParkingLot:
        return await self.lots.get_lot_by_code(code)

    # ===== Transitions =====

    async def request_entry(
        self, lot_code: str, plate_number: str, user_id: int
    ) -> ParkingSession:
        """
        Open a PENDING session against a lot. Capacity is only checked here;
        the space is reserved when the entry is approved.
        """
        plate_number = normalize_plate_number(plate_number)
        async with self._transition():
            lot = await self.lots.get_lot_by_code(lot_code)
            if lot.available_spaces <= 0:
                logger.warning("Entry refused at %s for %s: lot full", lot.code, plate_number)
                raise LotExhaustedException(lot.code)

            parking_session = ParkingSession(
                lot_id=lot.id,
                user_id=user_id,
                plate_number=plate_number,
                entry_time=self.clock(),
                status=SessionStatus.PENDING.value,
            )
            self.session.add(parking_session)
            await self.session.flush()
            session_id = parking_session.id

        logger.info(
            "Session %s requested entry at %s for %s", session_id, lot_code, plate_number
        )
        return await self._load_session(session_id)

    async def approve_entry(self, session_id: int) -> ParkingSession:
        async with self._transition():
            parking_session = await self._load_session(session_id)
            self._require_phase(parking_session, SessionPhase.PENDING, "approve entry")
            await self.lots.reserve_one(parking_session.lot_id)
            parking_session.status = SessionStatus.APPROVED.value

        logger.info("Session %s entry approved", session_id)
        return parking_session

    async def reject_entry(self, session_id: int) -> ParkingSession:
        async with self._transition():
            parking_session = await self._load_session(session_id)
            self._require_phase(parking_session, SessionPhase.PENDING, "reject entry")
            parking_session.status = SessionStatus.REJECTED.value

        logger.info("Session %s entry rejected", session_id)
        return parking_session

    async def request_exit(self, session_id: int) -> ParkingSession:
        """
        Settle the session: stamp the exit time and charge for the time
        parked. The space stays taken until the exit is approved.
        """
        async with self._transition():
            parking_session = await self._load_session(session_id)
            self._require_phase(parking_session, SessionPhase.ACTIVE, "request exit")
            exit_time = self.clock()
            parking_session.exit_time = exit_time
            parking_session.charged_amount = calculate_parking_fee(
                parking_session.entry_time,
                exit_time,
                parking_session.lot.charging_fee_per_hour,
            )

        logger.info(
            "Session %s requested exit, charged %s",
            session_id,
            parking_session.charged_amount,
        )
        return parking_session

    async def approve_exit(self, session_id: int) -> ParkingSession:
        async with self._transition():
            parking_session = await self._load_session(session_id)
            self._require_phase(parking_session, SessionPhase.EXIT_PENDING, "approve exit")
            await self.lots.release_one(parking_session.lot_id)
            parking_session.status = SessionStatus.COMPLETED.value

        logger.info("Session %s completed", session_id)
        return parking_session

    async def reject_exit(self, session_id: int) -> ParkingSession:
        async with self._transition():
            parking_session = await self._load_session(session_id)
            self._require_phase(parking_session, SessionPhase.EXIT_PENDING, "reject exit")
            parking_session.exit_time = None
            parking_session.charged_amount = None

        logger.info("Session %s exit rejected, back to active", session_id)
        return parking_session

    # ===== Queries =====

    async def get_session(self, session_id: int) -> ParkingSession:
        return await self._load_session(session_id)

    async def my_sessions(self, user_id: int) -> List[ParkingSession]:
        return await self._list_sessions(ParkingSession.user_id == user_id)

    async def active_sessions(self, user_id: int) -> List[ParkingSession]:
        return await self._list_sessions(
            ParkingSession.user_id == user_id,
            ParkingSession.in_phase(SessionPhase.ACTIVE),
        )

    async def entry_requests(self) -> List[ParkingSession]:
        return await self._list_sessions(ParkingSession.in_phase(SessionPhase.PENDING))

    async def exit_requests(self) -> List[ParkingSession]:
        return await self._list_sessions(
            ParkingSession.in_phase(SessionPhase.EXIT_PENDING)
        )


ParkingServiceDependency = Annotated[ParkingService, ParkingService.get_dependency()]
