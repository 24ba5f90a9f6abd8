"""Reservation status derivation and state machine.

Booking-list badges are derived from dates and amounts on every render;
nothing here reads the clock, ``now`` is always passed in.
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum

from app.core.exceptions import ValidationError
from app.domain.money import Amount, to_amount
from app.domain.rate import as_datetime, calculate_nights, common_tzinfo


class ReservationStatus(str, Enum):
    """Reservation lifecycle statuses."""

    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CHECKED_IN = "CHECKED_IN"
    CHECKED_OUT = "CHECKED_OUT"
    CANCELLED = "CANCELLED"


class PaymentStatus(str, Enum):
    """Payment statuses."""

    PENDING = "PENDING"
    PARTIAL = "PARTIAL"
    SUCCESS = "SUCCESS"
    PAID = "PAID"  # written by the checkout settlement


# Standard checkout time
DEFAULT_CHECKOUT_HOUR = 12


RESERVATION_TRANSITIONS = {
    ReservationStatus.PENDING: {ReservationStatus.CONFIRMED, ReservationStatus.CANCELLED},
    ReservationStatus.CONFIRMED: {ReservationStatus.CHECKED_IN, ReservationStatus.CANCELLED},
    ReservationStatus.CHECKED_IN: {ReservationStatus.CHECKED_OUT},
    ReservationStatus.CHECKED_OUT: set(),
    ReservationStatus.CANCELLED: set(),
}


def coerce_reservation_status(
    status: str | ReservationStatus | None,
) -> ReservationStatus | None:
    """Resolve a stored status string; unknown values give None."""
    if status is None or isinstance(status, ReservationStatus):
        return status
    try:
        return ReservationStatus(status)
    except ValueError:
        return None


def assert_reservation_transition(
    current: str | ReservationStatus,
    target: str | ReservationStatus,
) -> None:
    current_status = coerce_reservation_status(current)
    target_status = coerce_reservation_status(target)
    allowed = RESERVATION_TRANSITIONS.get(current_status, set())
    if target_status not in allowed:
        raise ValidationError(
            f"Invalid reservation transition: {getattr(current, 'value', current)} → "
            f"{getattr(target, 'value', target)}"
        )


def classify_reservation_status(
    check_in_date: date | datetime,
    check_out_date: date | datetime,
    actual_check_in: datetime | None = None,
    actual_check_out: datetime | None = None,
    *,
    now: datetime,
) -> ReservationStatus:
    """Derive the booking-list status of a reservation from its stay dates.

    The actual check-in/out timestamps are accepted so callers can pass a
    full record, but only the scheduled dates decide the label.

    Args:
        check_in_date: Scheduled check-in
        check_out_date: Scheduled check-out
        actual_check_in: Recorded check-in time, if any
        actual_check_out: Recorded check-out time, if any
        now: Current time

    Returns:
        ReservationStatus: CONFIRMED, CHECKED_IN, CHECKED_OUT or PENDING
    """
    tzinfo = common_tzinfo(now, check_in_date, check_out_date)
    now = as_datetime(now, tzinfo)
    check_in = as_datetime(check_in_date, tzinfo)
    check_out = as_datetime(check_out_date, tzinfo)

    if check_out < now:
        return ReservationStatus.CHECKED_OUT
    if check_in <= now <= check_out:
        return ReservationStatus.CHECKED_IN
    if check_in > now:
        return ReservationStatus.CONFIRMED
    return ReservationStatus.PENDING


def classify_payment_status(
    total_amount: Amount,
    advance_amount: Amount,
    balance_amount: Amount,
) -> PaymentStatus:
    """Derive the payment badge of a reservation.

    Args:
        total_amount: Reservation total
        advance_amount: Amount already collected
        balance_amount: Outstanding balance

    Returns:
        PaymentStatus: SUCCESS, PARTIAL or PENDING
    """
    total = to_amount(total_amount)
    advance = to_amount(advance_amount)
    balance = to_amount(balance_amount)

    if advance >= total:
        return PaymentStatus.SUCCESS
    if advance > 0 and balance > 0:
        return PaymentStatus.PARTIAL
    if balance > 0:
        return PaymentStatus.PENDING
    return PaymentStatus.SUCCESS


def checkout_cutoff(
    check_out_date: date | datetime,
    checkout_hour: int = DEFAULT_CHECKOUT_HOUR,
    tzinfo=None,
) -> datetime:
    """Checkout date with the time forced to ``checkout_hour:00:00``."""
    return as_datetime(check_out_date, tzinfo).replace(
        hour=checkout_hour, minute=0, second=0, microsecond=0
    )


def is_overdue(
    check_out_date: date | datetime,
    reservation_status: str | ReservationStatus | None,
    now: datetime,
    checkout_hour: int = DEFAULT_CHECKOUT_HOUR,
) -> bool:
    """Check whether a checked-in guest has stayed past the checkout cutoff."""
    if coerce_reservation_status(reservation_status) is not ReservationStatus.CHECKED_IN:
        return False
    tzinfo = common_tzinfo(now, check_out_date)
    return as_datetime(now, tzinfo) > checkout_cutoff(check_out_date, checkout_hour, tzinfo)


@dataclass(frozen=True)
class StayFlags:
    """Stay-timing flags shown on the reservation detail page."""

    is_currently_active: bool
    is_past_stay: bool
    is_future_stay: bool
    can_check_in: bool
    can_check_out: bool
    is_overdue: bool = False


def stay_flags(
    check_in_date: date | datetime,
    check_out_date: date | datetime,
    reservation_status: str | ReservationStatus | None,
    *,
    now: datetime,
    checkout_hour: int = DEFAULT_CHECKOUT_HOUR,
) -> StayFlags:
    status = coerce_reservation_status(reservation_status)
    tzinfo = common_tzinfo(now, check_in_date, check_out_date)
    now = as_datetime(now, tzinfo)
    check_in = as_datetime(check_in_date, tzinfo)
    check_out = as_datetime(check_out_date, tzinfo)

    return StayFlags(
        is_currently_active=(
            status is ReservationStatus.CHECKED_IN and check_in <= now <= check_out
        ),
        is_past_stay=now > check_out,
        is_future_stay=now < check_in,
        can_check_in=status is ReservationStatus.CONFIRMED and now >= check_in,
        can_check_out=status is ReservationStatus.CHECKED_IN,
        is_overdue=is_overdue(check_out_date, status, now, checkout_hour),
    )


def payment_completion(total_amount: Amount, advance_amount: Amount) -> int:
    """Percentage of the total already paid, rounded half up."""
    total = to_amount(total_amount)
    if total <= 0:
        return 0
    percent = to_amount(advance_amount) / total * Decimal("100")
    return int(percent.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def nights_stayed(
    actual_check_in: datetime | None,
    actual_check_out: datetime | None,
    number_of_nights: int,
) -> int:
    """Nights actually stayed once both timestamps exist, else the booked nights."""
    if actual_check_in and actual_check_out:
        return calculate_nights(actual_check_in, actual_check_out)
    return number_of_nights
