# apps/api/parking/fees.py

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

CENTS = Decimal("0.01")
SECONDS_PER_HOUR = Decimal(3600)


def hours_parked(entry_time: datetime, exit_time: datetime) -> Decimal:
    """Wall-clock duration in fractional hours, never negative."""
    seconds = Decimal(str((exit_time - entry_time).total_seconds()))
    return max(seconds, Decimal(0)) / SECONDS_PER_HOUR


def calculate_parking_fee(
    entry_time: datetime,
    exit_time: datetime,
    fee_per_hour: Decimal,
) -> Decimal:
    """
    Fee for the stay, prorated to the second and rounded half-up to cents.

    e.g. 90 minutes at 2.50/hour is 3.75.
    """
    rate = Decimal(str(fee_per_hour))
    fee = hours_parked(entry_time, exit_time) * rate
    return fee.quantize(CENTS, rounding=ROUND_HALF_UP)
