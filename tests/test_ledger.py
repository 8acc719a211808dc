"""
Unit tests for ParkingService, the session ledger.

Sessions are driven directly through the service against the seeded demo
data: john@example.com is user 1 and already has one car parked at PKG001.
"""

from decimal import Decimal

import pytest

from apps.api.parking.exceptions import (
    InvalidTransitionException,
    LotExhaustedException,
    LotNotFoundException,
    SessionNotFoundException,
)
from apps.api.parking.models import SessionPhase, SessionStatus
from core.exceptions import InvalidRequestException

JOHN = 1
ADMIN = 2


async def available(parking_service, code: str) -> int:
    return (await parking_service.get_lot_by_code(code)).available_spaces


async def open_active_session(parking_service, code: str = "PKG003") -> int:
    pending = await parking_service.request_entry(code, "XYZ-1", JOHN)
    session_id = pending.id
    await parking_service.approve_entry(session_id)
    return session_id


class TestRequestEntry:
    async def test_creates_pending_session(self, parking_service, clock):
        parking_session = await parking_service.request_entry("PKG003", " xyz-1 ", JOHN)

        assert parking_session.status == SessionStatus.PENDING.value
        assert parking_session.phase == SessionPhase.PENDING
        assert parking_session.plate_number == "XYZ-1"
        assert parking_session.entry_time == clock.now
        assert parking_session.exit_time is None
        assert parking_session.charged_amount is None
        assert parking_session.lot.code == "PKG003"

    async def test_does_not_reserve_capacity(self, parking_service):
        await parking_service.request_entry("PKG003", "XYZ-1", JOHN)
        assert await available(parking_service, "PKG003") == 8

    async def test_ids_are_assigned_in_order(self, parking_service):
        first = await parking_service.request_entry("PKG003", "AAA-1", JOHN)
        first_id = first.id
        second = await parking_service.request_entry("PKG004", "BBB-2", JOHN)
        assert second.id > first_id

    async def test_full_lot_is_exhausted_and_creates_nothing(self, parking_service):
        before = len(await parking_service.my_sessions(JOHN))

        with pytest.raises(LotExhaustedException):
            await parking_service.request_entry("PKG002", "XYZ-1", JOHN)

        assert len(await parking_service.my_sessions(JOHN)) == before
        assert await parking_service.entry_requests() == []

    async def test_unknown_lot_code(self, parking_service):
        with pytest.raises(LotNotFoundException):
            await parking_service.request_entry("PKG999", "XYZ-1", JOHN)

    async def test_malformed_plate_is_rejected(self, parking_service):
        with pytest.raises(InvalidRequestException):
            await parking_service.request_entry("PKG003", "??", JOHN)


class TestEntryDecision:
    async def test_approve_reserves_a_space(self, parking_service):
        pending = await parking_service.request_entry("PKG003", "XYZ-1", JOHN)

        approved = await parking_service.approve_entry(pending.id)

        assert approved.status == SessionStatus.APPROVED.value
        assert approved.phase == SessionPhase.ACTIVE
        assert await available(parking_service, "PKG003") == 7

    async def test_approve_twice_is_invalid_and_changes_nothing(self, parking_service):
        session_id = await open_active_session(parking_service)

        with pytest.raises(InvalidTransitionException):
            await parking_service.approve_entry(session_id)

        parking_session = await parking_service.get_session(session_id)
        assert parking_session.phase == SessionPhase.ACTIVE
        assert await available(parking_service, "PKG003") == 7

    async def test_approve_fails_when_capacity_vanished(self, parking_service, registry, db_session):
        lot = await registry.get_lot_by_code("PKG004")
        lot.available_spaces = 1
        await db_session.commit()

        first = await parking_service.request_entry("PKG004", "AAA-1", JOHN)
        first_id = first.id
        second = await parking_service.request_entry("PKG004", "BBB-2", JOHN)
        second_id = second.id

        await parking_service.approve_entry(first_id)
        with pytest.raises(LotExhaustedException):
            await parking_service.approve_entry(second_id)

        still_pending = await parking_service.get_session(second_id)
        assert still_pending.status == SessionStatus.PENDING.value
        assert await available(parking_service, "PKG004") == 0

    async def test_reject_has_no_capacity_effect(self, parking_service):
        pending = await parking_service.request_entry("PKG003", "XYZ-1", JOHN)
        session_id = pending.id

        rejected = await parking_service.reject_entry(session_id)

        assert rejected.status == SessionStatus.REJECTED.value
        assert await available(parking_service, "PKG003") == 8

    async def test_rejected_is_terminal(self, parking_service):
        pending = await parking_service.request_entry("PKG003", "XYZ-1", JOHN)
        session_id = pending.id
        await parking_service.reject_entry(session_id)

        with pytest.raises(InvalidTransitionException):
            await parking_service.approve_entry(session_id)
        with pytest.raises(InvalidTransitionException):
            await parking_service.request_exit(session_id)

        assert (await parking_service.get_session(session_id)).status == "REJECTED"


class TestExit:
    async def test_request_exit_charges_for_time_parked(self, parking_service, clock):
        session_id = await open_active_session(parking_service, "PKG001")
        entry_time = clock.now
        clock.advance(minutes=90)

        parking_session = await parking_service.request_exit(session_id)

        assert parking_session.status == SessionStatus.APPROVED.value
        assert parking_session.phase == SessionPhase.EXIT_PENDING
        assert parking_session.exit_time == clock.now
        assert parking_session.entry_time == entry_time
        assert parking_session.charged_amount == Decimal("3.75")

    async def test_request_exit_keeps_the_space(self, parking_service, clock):
        session_id = await open_active_session(parking_service)
        clock.advance(hours=1)

        await parking_service.request_exit(session_id)

        assert await available(parking_service, "PKG003") == 7

    async def test_request_exit_twice_is_invalid(self, parking_service, clock):
        session_id = await open_active_session(parking_service)
        clock.advance(hours=1)
        await parking_service.request_exit(session_id)
        clock.advance(hours=1)

        with pytest.raises(InvalidTransitionException):
            await parking_service.request_exit(session_id)

        parking_session = await parking_service.get_session(session_id)
        assert parking_session.charged_amount == Decimal("2.00")

    async def test_request_exit_on_pending_is_invalid(self, parking_service):
        pending = await parking_service.request_entry("PKG003", "XYZ-1", JOHN)
        with pytest.raises(InvalidTransitionException):
            await parking_service.request_exit(pending.id)

    async def test_round_trip_restores_capacity(self, parking_service, clock):
        before = await available(parking_service, "PKG003")
        pending = await parking_service.request_entry("PKG003", "XYZ-1", JOHN)
        session_id = pending.id

        await parking_service.approve_entry(session_id)
        assert await available(parking_service, "PKG003") == before - 1

        clock.advance(minutes=30)
        await parking_service.request_exit(session_id)
        completed = await parking_service.approve_exit(session_id)

        assert completed.status == SessionStatus.COMPLETED.value
        assert completed.phase == SessionPhase.COMPLETED
        assert completed.charged_amount == Decimal("1.00")
        assert await available(parking_service, "PKG003") == before

    async def test_approve_exit_without_request_is_invalid(self, parking_service):
        session_id = await open_active_session(parking_service)

        with pytest.raises(InvalidTransitionException):
            await parking_service.approve_exit(session_id)
        assert await available(parking_service, "PKG003") == 7

    async def test_completed_is_terminal(self, parking_service, clock):
        session_id = await open_active_session(parking_service)
        clock.advance(hours=1)
        await parking_service.request_exit(session_id)
        await parking_service.approve_exit(session_id)

        with pytest.raises(InvalidTransitionException):
            await parking_service.approve_exit(session_id)
        with pytest.raises(InvalidTransitionException):
            await parking_service.reject_exit(session_id)
        assert await available(parking_service, "PKG003") == 8

    async def test_reject_exit_returns_to_active(self, parking_service, clock):
        session_id = await open_active_session(parking_service)
        clock.advance(hours=1)
        await parking_service.request_exit(session_id)

        reverted = await parking_service.reject_exit(session_id)

        assert reverted.phase == SessionPhase.ACTIVE
        assert reverted.exit_time is None
        assert reverted.charged_amount is None
        assert await available(parking_service, "PKG003") == 7

        clock.advance(hours=1)
        again = await parking_service.request_exit(session_id)
        assert again.charged_amount == Decimal("4.00")

    async def test_reject_exit_without_request_is_invalid(self, parking_service):
        session_id = await open_active_session(parking_service)
        with pytest.raises(InvalidTransitionException):
            await parking_service.reject_exit(session_id)


@pytest.mark.parametrize(
    "operation",
    [
        "approve_entry",
        "reject_entry",
        "request_exit",
        "approve_exit",
        "reject_exit",
        "get_session",
    ],
)
async def test_unknown_session_is_not_found(parking_service, operation):
    with pytest.raises(SessionNotFoundException):
        await getattr(parking_service, operation)(4242)


class TestQueries:
    async def test_my_sessions_in_insertion_order(self, parking_service):
        await parking_service.request_entry("PKG003", "AAA-1", JOHN)
        await parking_service.request_entry("PKG004", "BBB-2", JOHN)
        await parking_service.request_entry("PKG005", "CCC-3", ADMIN)

        plates = [s.plate_number for s in await parking_service.my_sessions(JOHN)]

        # ABC-123 is the seeded car at PKG001
        assert plates == ["ABC-123", "AAA-1", "BBB-2"]

    async def test_active_sessions_exclude_pending_and_exit_pending(self, parking_service, clock):
        await parking_service.request_entry("PKG004", "PEND-1", JOHN)
        leaving_id = await open_active_session(parking_service)
        clock.advance(hours=1)
        await parking_service.request_exit(leaving_id)

        plates = [s.plate_number for s in await parking_service.active_sessions(JOHN)]

        assert plates == ["ABC-123"]
        assert await parking_service.active_sessions(ADMIN) == []

    async def test_entry_requests_span_all_users(self, parking_service):
        await parking_service.request_entry("PKG003", "AAA-1", JOHN)
        await parking_service.request_entry("PKG005", "CCC-3", ADMIN)

        requests = await parking_service.entry_requests()

        assert [s.user_id for s in requests] == [JOHN, ADMIN]
        assert all(s.phase == SessionPhase.PENDING for s in requests)

    async def test_exit_requests_only_list_charged_exits(self, parking_service, clock):
        leaving_id = await open_active_session(parking_service)
        await open_active_session(parking_service, "PKG004")
        clock.advance(minutes=90)
        await parking_service.request_exit(leaving_id)

        requests = await parking_service.exit_requests()

        assert [s.id for s in requests] == [leaving_id]
        assert requests[0].charged_amount == Decimal("3.00")
