# apps/api/parking/seed.py

import logging
from datetime import timedelta
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from apps.api.auth.service import AuthService
from apps.api.parking.models import ParkingLot, ParkingSession, SessionStatus
from apps.api.user.models import User, UserRoles
from core.utils.clock import Clock, utcnow

logger = logging.getLogger(__name__)

DEMO_USER_TOKEN = "demo-user-token"
DEMO_ADMIN_TOKEN = "demo-admin-token"

DEMO_LOTS = [
    # code, name, location, available, total, fee per hour
    ("PKG001", "Central City Parking", "123 Main Street, Downtown", 15, 15, "2.50"),
    ("PKG002", "Metro Mall Parking", "456 Commerce Ave, Eastside", 0, 12, "3.00"),
    ("PKG003", "Riverside Parking", "789 Waterfront Dr, Westside", 8, 8, "2.00"),
    ("PKG004", "North Station Parking", "101 Transit Way, Northside", 5, 5, "1.50"),
    ("PKG005", "Grand Plaza Parking", "202 Plaza Blvd, Southside", 10, 10, "4.00"),
]


async def seed_demo_data(session: AsyncSession, clock: Clock = utcnow):
    """
    Load the demo lots, a regular user, an admin and one car already
    parked at PKG001 in a single transaction. Does nothing if any lots or
    users already exist.
    """
    lot_count = await session.scalar(select(func.count(ParkingLot.id)))
    user_count = await session.scalar(select(func.count(User.id)))
    if lot_count or user_count:
        logger.info("Demo data already present, skipping seed")
        return

    auth_service = AuthService(session=session)
    try:
        john = await auth_service.add_user(
            first_name="John",
            last_name="Doe",
            email="john@example.com",
            password="password123",
            token=DEMO_USER_TOKEN,
        )
        await auth_service.add_user(
            first_name="Admin",
            last_name="User",
            email="admin@example.com",
            password="admin123",
            role=UserRoles.ADMIN,
            token=DEMO_ADMIN_TOKEN,
        )

        lots = []
        for code, name, location, available, total, fee in DEMO_LOTS:
            lot = ParkingLot(
                code=code,
                name=name,
                location=location,
                available_spaces=available,
                total_spaces=total,
                charging_fee_per_hour=Decimal(fee),
            )
            session.add(lot)
            lots.append(lot)
        await session.flush()

        # the parked car holds one of PKG001's spaces
        central = lots[0]
        central.available_spaces -= 1
        session.add(
            ParkingSession(
                lot_id=central.id,
                user_id=john.id,
                plate_number="ABC-123",
                entry_time=clock() - timedelta(hours=1),
                status=SessionStatus.APPROVED.value,
            )
        )
        await session.commit()
    except Exception:
        await session.rollback()
        logger.exception("Seeding demo data failed, nothing was kept")
        raise

    logger.info("Seeded %d demo lots", len(lots))
