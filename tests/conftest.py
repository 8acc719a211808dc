"""Pytest configuration and shared fixtures."""

import asyncio
from datetime import datetime, timedelta, timezone

import pytest
from httpx import ASGITransport, AsyncClient

import apps.api.parking.models  # noqa: F401  registers tables
import apps.api.user.models  # noqa: F401
from app import create_app
from apps.api.parking.registry import LotRegistry
from apps.api.parking.seed import DEMO_ADMIN_TOKEN, DEMO_USER_TOKEN, seed_demo_data
from apps.api.parking.service import ParkingService
from apps.settings import AppConfig
from core.db.core import Database
from core.utils.clock import get_clock

T0 = datetime(2026, 1, 5, 9, 0, tzinfo=timezone.utc)


class FrozenClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> FrozenClock:
    return FrozenClock(T0)


# ----- service level -----

@pytest.fixture
async def database():
    db = Database("sqlite+aiosqlite://")
    await db.create_all()
    yield db
    await db.dispose()


@pytest.fixture
async def db_session(database, clock):
    async with database.session_factory() as session:
        await seed_demo_data(session, clock=clock)
        yield session


@pytest.fixture
def registry(db_session) -> LotRegistry:
    return LotRegistry(db_session)


@pytest.fixture
def parking_service(db_session, clock) -> ParkingService:
    return ParkingService(session=db_session, lock=asyncio.Lock(), clock=clock)


# ----- http level -----

@pytest.fixture
def settings() -> AppConfig:
    return AppConfig(
        DATABASE_URL="sqlite+aiosqlite://",
        SEED_DEMO_DATA=True,
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
async def app(settings, clock):
    application = create_app(settings)
    application.dependency_overrides[get_clock] = lambda: clock
    async with application.router.lifespan_context(application):
        yield application


@pytest.fixture
async def client(app) -> AsyncClient:
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test"
    ) as api_client:
        yield api_client


def _bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_headers() -> dict:
    return _bearer(DEMO_USER_TOKEN)


@pytest.fixture
def admin_headers() -> dict:
    return _bearer(DEMO_ADMIN_TOKEN)
