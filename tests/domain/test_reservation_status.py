from datetime import UTC, date, datetime, timedelta
from decimal import Decimal

import pytest

from app.core.exceptions import ValidationError
from app.domain.reservation_status import (
    PaymentStatus,
    ReservationStatus,
    assert_reservation_transition,
    classify_payment_status,
    classify_reservation_status,
    is_overdue,
    nights_stayed,
    payment_completion,
    stay_flags,
)


class TestClassifyReservationStatus:
    def test_mid_stay_is_checked_in(self, now, yesterday, tomorrow):
        assert classify_reservation_status(yesterday, tomorrow, now=now) is ReservationStatus.CHECKED_IN

    def test_after_checkout_is_checked_out(self, now, yesterday, tomorrow):
        later = datetime.combine(tomorrow + timedelta(days=2), now.timetz())
        assert classify_reservation_status(yesterday, tomorrow, now=later) is ReservationStatus.CHECKED_OUT

    def test_future_stay_is_confirmed(self, now, tomorrow):
        assert (
            classify_reservation_status(tomorrow, tomorrow + timedelta(days=3), now=now)
            is ReservationStatus.CONFIRMED
        )

    def test_same_record_changes_with_time(self, now, yesterday, tomorrow):
        earlier = now - timedelta(days=5)
        statuses = {
            classify_reservation_status(yesterday, tomorrow, now=moment)
            for moment in (earlier, now, now + timedelta(days=5))
        }
        assert statuses == {
            ReservationStatus.CONFIRMED,
            ReservationStatus.CHECKED_IN,
            ReservationStatus.CHECKED_OUT,
        }

    def test_actual_timestamps_do_not_change_label(self, now, yesterday, tomorrow):
        status = classify_reservation_status(
            yesterday,
            tomorrow,
            actual_check_in=now - timedelta(hours=20),
            actual_check_out=now - timedelta(hours=1),
            now=now,
        )
        assert status is ReservationStatus.CHECKED_IN

    def test_naive_datetimes(self):
        status = classify_reservation_status(
            datetime(2025, 3, 1, 14), datetime(2025, 3, 3, 12), now=datetime(2025, 3, 2, 9)
        )
        assert status is ReservationStatus.CHECKED_IN

    def test_naive_datetimes_against_aware_now(self):
        status = classify_reservation_status(
            datetime(2025, 3, 14, 14),
            datetime(2025, 3, 16, 12),
            now=datetime(2025, 3, 15, 10, tzinfo=UTC),
        )
        assert status is ReservationStatus.CHECKED_IN

    def test_aware_dates_against_naive_now(self):
        status = classify_reservation_status(
            datetime(2025, 3, 10, 14, tzinfo=UTC),
            datetime(2025, 3, 12, 12, tzinfo=UTC),
            now=datetime(2025, 3, 15, 10),
        )
        assert status is ReservationStatus.CHECKED_OUT


class TestClassifyPaymentStatus:
    def test_fully_paid(self):
        assert classify_payment_status(15000, 15000, 0) is PaymentStatus.SUCCESS

    def test_partial(self):
        assert classify_payment_status(15000, 10000, 5000) is PaymentStatus.PARTIAL

    def test_nothing_paid(self):
        assert classify_payment_status(15000, 0, 15000) is PaymentStatus.PENDING

    def test_zero_total(self):
        assert classify_payment_status(0, 0, 0) is PaymentStatus.SUCCESS

    @pytest.mark.parametrize(
        "total, advance",
        [(0, 0), (100, 0), (100, 50), (100, 100), (100, 150), (-50, 0), (Decimal("0.01"), 0)],
    )
    def test_exactly_one_status(self, total, advance):
        balance = max(Decimal("0"), Decimal(total) - Decimal(advance))
        status = classify_payment_status(total, advance, balance)

        expected = {
            PaymentStatus.SUCCESS: advance >= total,
            PaymentStatus.PARTIAL: advance < total and advance > 0,
            PaymentStatus.PENDING: advance < total and advance == 0,
        }
        assert sum(expected.values()) == 1
        assert expected[status]


class TestIsOverdue:
    def test_checked_in_past_cutoff(self):
        now = datetime(2025, 3, 15, 12, 1, tzinfo=UTC)
        assert is_overdue(date(2025, 3, 15), ReservationStatus.CHECKED_IN, now) is True

    def test_checked_in_before_cutoff(self):
        now = datetime(2025, 3, 15, 11, 0, tzinfo=UTC)
        assert is_overdue(date(2025, 3, 15), ReservationStatus.CHECKED_IN, now) is False

    @pytest.mark.parametrize("status", ["CONFIRMED", "CHECKED_OUT", "CANCELLED", None, "UNKNOWN"])
    def test_only_checked_in_can_be_overdue(self, status):
        now = datetime(2025, 3, 20, 9, 0, tzinfo=UTC)
        assert is_overdue(date(2025, 3, 15), status, now) is False

    def test_custom_checkout_hour(self):
        now = datetime(2025, 3, 15, 11, 0, tzinfo=UTC)
        assert is_overdue(date(2025, 3, 15), "CHECKED_IN", now, checkout_hour=10) is True

    def test_datetime_checkout_is_reset_to_cutoff(self):
        check_out = datetime(2025, 3, 15, 18, 0, tzinfo=UTC)
        now = datetime(2025, 3, 15, 13, 0, tzinfo=UTC)
        assert is_overdue(check_out, ReservationStatus.CHECKED_IN, now) is True

    def test_naive_checkout_against_aware_now(self):
        check_out = datetime(2025, 3, 15, 18, 0)
        assert is_overdue(check_out, "CHECKED_IN", datetime(2025, 3, 15, 13, 0, tzinfo=UTC)) is True
        assert is_overdue(check_out, "CHECKED_IN", datetime(2025, 3, 15, 11, 0, tzinfo=UTC)) is False


class TestStayFlags:
    def test_active_stay(self, now, yesterday, tomorrow):
        flags = stay_flags(yesterday, tomorrow, ReservationStatus.CHECKED_IN, now=now)
        assert flags.is_currently_active
        assert not flags.is_past_stay
        assert not flags.is_future_stay
        assert flags.can_check_out
        assert not flags.can_check_in

    def test_confirmed_arrival_day(self, now, today, tomorrow):
        flags = stay_flags(today, tomorrow, "CONFIRMED", now=now)
        assert flags.can_check_in
        assert not flags.can_check_out
        assert not flags.is_currently_active

    def test_future_stay(self, now, tomorrow):
        flags = stay_flags(tomorrow, tomorrow + timedelta(days=2), "CONFIRMED", now=now)
        assert flags.is_future_stay
        assert not flags.can_check_in

    def test_past_stay(self, now, yesterday):
        flags = stay_flags(yesterday - timedelta(days=2), yesterday, "CHECKED_OUT", now=now)
        assert flags.is_past_stay
        assert not flags.can_check_out

    def test_overdue_guest(self, yesterday):
        now = datetime.combine(yesterday, datetime.min.time(), tzinfo=UTC) + timedelta(hours=15)
        flags = stay_flags(yesterday - timedelta(days=2), yesterday, "CHECKED_IN", now=now)
        assert flags.is_overdue
        assert flags.can_check_out

    def test_overdue_follows_checkout_hour(self, today):
        now = datetime(2025, 3, 15, 11, 0, tzinfo=UTC)
        on_time = stay_flags(today - timedelta(days=1), today, "CHECKED_IN", now=now)
        late = stay_flags(
            today - timedelta(days=1), today, "CHECKED_IN", now=now, checkout_hour=10
        )
        assert not on_time.is_overdue
        assert late.is_overdue

    def test_confirmed_guest_is_never_overdue(self, now, yesterday):
        flags = stay_flags(yesterday - timedelta(days=2), yesterday, "CONFIRMED", now=now)
        assert not flags.is_overdue

    def test_naive_stay_dates_against_aware_now(self, now):
        flags = stay_flags(
            datetime(2025, 3, 14, 14), datetime(2025, 3, 16, 12), "CHECKED_IN", now=now
        )
        assert flags.is_currently_active
        assert not flags.is_overdue


class TestTransitions:
    @pytest.mark.parametrize(
        "current, target",
        [
            ("PENDING", "CONFIRMED"),
            ("CONFIRMED", "CHECKED_IN"),
            ("CHECKED_IN", "CHECKED_OUT"),
            (ReservationStatus.CONFIRMED, ReservationStatus.CANCELLED),
        ],
    )
    def test_allowed(self, current, target):
        assert_reservation_transition(current, target)

    @pytest.mark.parametrize(
        "current, target",
        [
            ("CONFIRMED", "CHECKED_OUT"),
            ("CHECKED_OUT", "CHECKED_IN"),
            ("CANCELLED", "CONFIRMED"),
            ("CHECKED_IN", "CANCELLED"),
            ("UNKNOWN", "CONFIRMED"),
        ],
    )
    def test_rejected(self, current, target):
        with pytest.raises(ValidationError):
            assert_reservation_transition(current, target)


def test_payment_completion():
    assert payment_completion(15000, 10000) == 67
    assert payment_completion(200, 1) == 1
    assert payment_completion(0, 500) == 0
    assert payment_completion(1000, 1005) == 101


def test_nights_stayed():
    actual_in = datetime(2025, 3, 1, 15, 0)
    actual_out = datetime(2025, 3, 4, 10, 0)
    assert nights_stayed(actual_in, actual_out, 5) == 3
    assert nights_stayed(actual_in, None, 5) == 5


def test_nights_stayed_with_mixed_timezones():
    actual_in = datetime(2025, 3, 1, 15, 0)
    actual_out = datetime(2025, 3, 4, 10, 0, tzinfo=UTC)
    assert nights_stayed(actual_in, actual_out, 5) == 3
