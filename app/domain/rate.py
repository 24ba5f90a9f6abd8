"""Room rate domain logic.

Billing types:
- NIGHT_STAY: base rate charged once per night
- DAY_USE: base rate charged once, whatever the night count
"""

import math
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum

from app.domain.money import Amount, to_amount

SECONDS_PER_DAY = 24 * 60 * 60


class BillingType(str, Enum):
    """Billing type of a reservation."""

    NIGHT_STAY = "NIGHT_STAY"
    DAY_USE = "DAY_USE"


def coerce_billing_type(billing_type: str | BillingType | None) -> BillingType:
    """Resolve a billing type, defaulting to night stays like the booking form."""
    if billing_type is None:
        return BillingType.NIGHT_STAY
    if isinstance(billing_type, str):
        try:
            return BillingType(billing_type)
        except ValueError:
            return BillingType.NIGHT_STAY
    return billing_type


def common_tzinfo(*values: date | datetime | None):
    """First timezone found among the values, or None when all are naive."""
    for value in values:
        tzinfo = getattr(value, "tzinfo", None)
        if tzinfo is not None:
            return tzinfo
    return None


def as_datetime(value: date | datetime, tzinfo=None) -> datetime:
    """Promote a date to midnight and attach ``tzinfo`` to naive values."""
    if not isinstance(value, datetime):
        value = datetime.combine(value, time.min)
    if value.tzinfo is None and tzinfo is not None:
        value = value.replace(tzinfo=tzinfo)
    return value


def elapsed_days(start: date | datetime, end: date | datetime) -> int:
    """Days from ``start`` to ``end``, partial days rounded up; may be negative."""
    tzinfo = common_tzinfo(start, end)
    delta = as_datetime(end, tzinfo) - as_datetime(start, tzinfo)
    return math.ceil(delta.total_seconds() / SECONDS_PER_DAY)


def calculate_nights(
    check_in: date | datetime | None,
    check_out: date | datetime | None,
) -> int:
    """Calculate the number of billable nights between two dates.

    Partial days round up. A check-out on or before check-in gives 0.
    A naive value is read in the timezone of the aware one.

    Args:
        check_in: Scheduled check-in date
        check_out: Scheduled check-out date

    Returns:
        int: Number of nights, never negative
    """
    if check_in is None or check_out is None:
        return 0

    return max(0, elapsed_days(check_in, check_out))


def compute_room_charge(
    base_room_rate: Amount,
    billing_type: str | BillingType,
    number_of_nights: int,
) -> Decimal:
    """Calculate the base room charge.

    Args:
        base_room_rate: Nightly or day-use rate
        billing_type: NIGHT_STAY or DAY_USE
        number_of_nights: Length of stay in nights

    Returns:
        Decimal: Room charge before extras and discount
    """
    billing_type = coerce_billing_type(billing_type)
    rate = to_amount(base_room_rate)
    if billing_type is BillingType.DAY_USE:
        return rate
    return rate * number_of_nights
