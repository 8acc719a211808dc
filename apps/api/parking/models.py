# apps/api/parking/models.py

import enum

from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, Numeric, String, and_
from sqlalchemy.orm import relationship

from core.db.base import AbstractSQLModel
from core.db.fields import TZAwareDateTime
from core.db.mixins import TimestampsMixin


# ===== Enums =====

class SessionStatus(str, enum.Enum):
    """Stored status of a parking session"""
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    COMPLETED = "COMPLETED"


class SessionPhase(str, enum.Enum):
    """
    Exhaustive lifecycle position of a session.

    APPROVED is split in two: ACTIVE while the vehicle is parked and
    EXIT_PENDING once an exit has been requested and charged.
    """
    PENDING = "PENDING"
    ACTIVE = "ACTIVE"
    EXIT_PENDING = "EXIT_PENDING"
    REJECTED = "REJECTED"
    COMPLETED = "COMPLETED"


# ===== Models =====

class ParkingLot(AbstractSQLModel, TimestampsMixin):
    """
    A parking facility with a bounded pool of spaces and an hourly rate.
    available_spaces is only moved by session approvals and exits.
    """
    __tablename__ = "parking_lots"
    __table_args__ = (
        CheckConstraint("available_spaces >= 0", name="ck_lot_available_non_negative"),
        CheckConstraint("available_spaces <= total_spaces", name="ck_lot_available_within_total"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    code = Column(String(20), nullable=False, unique=True, index=True)
    name = Column(String(200), nullable=False)
    location = Column(String(500), nullable=False)
    available_spaces = Column(Integer, nullable=False, default=0)
    total_spaces = Column(Integer, nullable=False, default=0)
    charging_fee_per_hour = Column(
        Numeric(10, 2),
        nullable=False,
        default=0,
        comment="Fee charged per hour parked"
    )

    sessions = relationship("ParkingSession", back_populates="lot")


class ParkingSession(AbstractSQLModel, TimestampsMixin):
    """
    One reservation, from entry request to exit approval.
    Rows are never deleted, only moved through the state machine.
    """
    __tablename__ = "parking_sessions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    lot_id = Column(
        Integer,
        ForeignKey("parking_lots.id"),
        nullable=False,
        index=True
    )
    user_id = Column(
        Integer,
        ForeignKey("users.id"),
        nullable=False,
        index=True
    )
    plate_number = Column(String(20), nullable=False, index=True)

    entry_time = Column(TZAwareDateTime(timezone=True), nullable=False)
    exit_time = Column(TZAwareDateTime(timezone=True), nullable=True)

    status = Column(
        String(20),
        nullable=False,
        default=SessionStatus.PENDING.value,
        index=True
    )
    charged_amount = Column(
        Numeric(10, 2),
        nullable=True,
        comment="Fee computed when the exit was requested"
    )

    # Relationships
    lot = relationship("ParkingLot", back_populates="sessions", lazy="joined")
    user = relationship("User", lazy="joined")

    @property
    def phase(self) -> SessionPhase:
        status = SessionStatus(self.status)
        if status == SessionStatus.APPROVED:
            if self.exit_time is None:
                return SessionPhase.ACTIVE
            return SessionPhase.EXIT_PENDING
        return SessionPhase(status.value)

    @classmethod
    def in_phase(cls, phase: SessionPhase):
        """SQL condition matching sessions in the given phase."""
        if phase == SessionPhase.ACTIVE:
            return and_(
                cls.status == SessionStatus.APPROVED.value,
                cls.exit_time.is_(None),
            )
        if phase == SessionPhase.EXIT_PENDING:
            return and_(
                cls.status == SessionStatus.APPROVED.value,
                cls.exit_time.is_not(None),
                cls.charged_amount.is_not(None),
            )
        return cls.status == phase.value
