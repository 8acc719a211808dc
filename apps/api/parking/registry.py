# apps/api/parking/registry.py

import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from apps.api.parking.exceptions import (
    LotCapacityExceededException,
    LotExhaustedException,
    LotNotFoundException,
)
from apps.api.parking.models import ParkingLot

logger = logging.getLogger(__name__)


class LotRegistry:
    """
    Parking lots and their available-space counters.

    Counter changes are flushed but never committed here; the caller owns
    the transaction so a reservation and the session transition that needs
    it land together or not at all.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_lots(self) -> List[ParkingLot]:
        result = await self.session.scalars(select(ParkingLot).order_by(ParkingLot.id))
        return list(result)

    async def get_lot(self, lot_id: int) -> ParkingLot:
        lot = await self.session.get(ParkingLot, lot_id, populate_existing=True)
        if not lot:
            raise LotNotFoundException(f"#{lot_id}")
        return lot

    async def get_lot_by_code(self, code: str) -> ParkingLot:
        lot = await self.session.scalar(
            select(ParkingLot)
            .where(ParkingLot.code == code.strip().upper())
            .execution_options(populate_existing=True)
        )
        if not lot:
            raise LotNotFoundException(code)
        return lot

    async def reserve_one(self, lot_id: int) -> ParkingLot:
        lot = await self.get_lot(lot_id)
        if lot.available_spaces <= 0:
            raise LotExhaustedException(lot.code)
        lot.available_spaces -= 1
        await self.session.flush()
        logger.info("Reserved a space at %s, %d left", lot.code, lot.available_spaces)
        return lot

    async def release_one(self, lot_id: int) -> ParkingLot:
        lot = await self.get_lot(lot_id)
        if lot.available_spaces >= lot.total_spaces:
            raise LotCapacityExceededException(lot.code)
        lot.available_spaces += 1
        await self.session.flush()
        logger.info("Released a space at %s, %d left", lot.code, lot.available_spaces)
        return lot
