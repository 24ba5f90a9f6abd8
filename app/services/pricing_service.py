"""Reservation pricing service.

Maps request schemas onto the pricing domain and applies the configured
validation policy. The domain functions stay pure; this layer owns the
clock and the settings.
"""

import logging
from datetime import UTC, datetime

from app.config import Settings, settings as default_settings
from app.core.exceptions import InvalidReservationStatus, ValidationError
from app.domain.discount import validate_discount
from app.domain.money import ZERO
from app.domain.rate import calculate_nights, compute_room_charge, elapsed_days
from app.domain.reservation_status import (
    ReservationStatus,
    assert_reservation_transition,
    classify_payment_status,
    classify_reservation_status,
    is_overdue,
    nights_stayed,
    payment_completion,
    stay_flags,
)
from app.domain.settlement import (
    ReservationFinancials,
    compute_checkout_preview,
    compute_checkout_settlement,
    compute_late_checkout_fee,
    compute_settlement,
    finalize_checkout,
)
from app.schemas.reservation import (
    BookingStatusRequest,
    BookingStatusResponse,
    BookingStatusResult,
    CheckoutCalculateRequest,
    CheckoutCalculateResponse,
    CheckoutFinalizeRequest,
    CheckoutFinalizeResponse,
    CheckoutPreviewRequest,
    CheckoutPreviewResponse,
    CheckoutSummary,
    ReservationCalculateRequest,
    ReservationCalculateResponse,
    ReservationSummaryRequest,
    ReservationSummaryResponse,
)

logger = logging.getLogger(__name__)


class PricingService:
    """Service for reservation totals, checkout settlement and status badges."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or default_settings

    def now(self) -> datetime:
        """Current time used when a request does not pin one."""
        return datetime.now(UTC)

    def build_financials(self, request: ReservationCalculateRequest) -> ReservationFinancials:
        """Build the domain value from the edit form.

        An explicit night count wins over the stay dates.
        """
        if request.number_of_nights is not None:
            nights = request.number_of_nights
        else:
            nights = calculate_nights(request.check_in_date, request.check_out_date)

        return ReservationFinancials(
            base_room_rate=request.base_room_rate,
            billing_type=request.billing_type,
            number_of_nights=nights,
            extra_charges=request.extra_charges,
            discount_type=request.discount_type,
            discount_value=request.discount_value,
            service_charge=request.service_charge,
            tax=request.tax,
            advance_amount=request.advance_amount,
        )

    def check_discount(self, financials: ReservationFinancials) -> None:
        """Reject unbounded discounts when the deployment enforces bounds.

        Raises:
            ValidationError: If bounds are enforced and the discount breaks them
        """
        if not self.settings.enforce_discount_bounds:
            return

        room_charge = compute_room_charge(
            financials.base_room_rate, financials.billing_type, financials.number_of_nights
        )
        problems = validate_discount(
            financials.discount_type,
            financials.discount_value,
            room_charge + financials.extra_charges,
        )
        if problems:
            raise ValidationError(
                "; ".join(problems),
                errors=[{"field": "discount_value", "message": p} for p in problems],
            )

    def calculate_reservation(
        self, request: ReservationCalculateRequest
    ) -> ReservationCalculateResponse:
        """Calculate the running summary of the reservation edit form."""
        financials = self.build_financials(request)
        self.check_discount(financials)
        result = compute_settlement(financials)

        logger.debug(
            f"Reservation settlement: nights={financials.number_of_nights} "
            f"total={result.total_amount} balance={result.balance_amount}"
        )

        return ReservationCalculateResponse(
            number_of_nights=financials.number_of_nights,
            room_charge=result.room_charge,
            subtotal=result.subtotal,
            discount_amount=result.discount_amount,
            total_amount=result.total_amount,
            balance_amount=result.balance_amount,
            payment_status=classify_payment_status(
                result.total_amount, financials.advance_amount, result.balance_amount
            ),
            currency=self.settings.currency,
        )

    def classify_bookings(self, request: BookingStatusRequest) -> BookingStatusResponse:
        """Derive booking-list badges for a page of reservations."""
        now = request.now or self.now()
        statuses = []

        for row in request.rows:
            balance = row.balance_amount
            if balance is None:
                balance = max(ZERO, row.total_amount - row.advance_amount)

            statuses.append(
                BookingStatusResult(
                    reservation_id=row.reservation_id,
                    booking_status=classify_reservation_status(
                        row.check_in_date,
                        row.check_out_date,
                        row.actual_check_in,
                        row.actual_check_out,
                        now=now,
                    ),
                    payment_status=classify_payment_status(
                        row.total_amount, row.advance_amount, balance
                    ),
                    is_overdue=is_overdue(
                        row.check_out_date,
                        row.reservation_status,
                        now,
                        self.settings.checkout_hour,
                    ),
                    payment_completion=payment_completion(row.total_amount, row.advance_amount),
                )
            )

        return BookingStatusResponse(statuses=statuses, evaluated_at=now)

    def reservation_summary(
        self, request: ReservationSummaryRequest
    ) -> ReservationSummaryResponse:
        """Derive the stay flags and progress of a single reservation."""
        now = request.now or self.now()
        flags = stay_flags(
            request.check_in_date,
            request.check_out_date,
            request.reservation_status,
            now=now,
            checkout_hour=self.settings.checkout_hour,
        )

        return ReservationSummaryResponse(
            is_currently_active=flags.is_currently_active,
            is_past_stay=flags.is_past_stay,
            is_future_stay=flags.is_future_stay,
            can_check_in=flags.can_check_in,
            can_check_out=flags.can_check_out,
            is_overdue=flags.is_overdue,
            nights_stayed=nights_stayed(
                request.actual_check_in, request.actual_check_out, request.number_of_nights
            ),
            payment_completion=payment_completion(request.total_amount, request.advance_amount),
            evaluated_at=now,
        )

    def calculate_checkout(self, request: CheckoutCalculateRequest) -> CheckoutCalculateResponse:
        """Add the operator-entered checkout charges to the balance."""
        settlement = compute_checkout_settlement(
            request.prior_balance,
            extra_charges_at_checkout=request.extra_charges_at_checkout,
            minibar_charges=request.minibar_charges,
            damage_charges=request.damage_charges,
            late_checkout_fee=request.late_checkout_fee,
        )
        return CheckoutCalculateResponse(
            additional_charges=settlement.additional_charges,
            final_amount_due=settlement.final_amount_due,
            currency=self.settings.currency,
        )

    def preview_checkout(self, request: CheckoutPreviewRequest) -> CheckoutPreviewResponse:
        """Project the bill of a checked-in reservation as of now.

        Raises:
            InvalidReservationStatus: If the reservation is not checked in
        """
        if request.reservation_status is not ReservationStatus.CHECKED_IN:
            logger.warning(
                f"Checkout preview rejected: status is {request.reservation_status.value}"
            )
            raise InvalidReservationStatus("Reservation is not checked in")

        now = request.now or self.now()
        late_fee = compute_late_checkout_fee(
            request.check_out_date,
            now,
            checkout_hour=self.settings.checkout_hour,
            fee_per_hour=self.settings.late_checkout_fee_per_hour,
        )
        preview = compute_checkout_preview(
            request.total_amount,
            request.advance_amount,
            quick_order_amounts=request.quick_order_amounts,
            complementary_rates=request.complementary_rates,
            late_checkout_fee=late_fee,
        )

        actual_stay_days = None
        if request.check_in_date is not None:
            actual_stay_days = elapsed_days(request.check_in_date, now)

        return CheckoutPreviewResponse(
            quick_orders_total=preview.quick_orders_total,
            complementary_total=preview.complementary_total,
            late_checkout_fee=preview.late_checkout_fee,
            actual_stay_days=actual_stay_days,
            is_overdue=is_overdue(
                request.check_out_date,
                request.reservation_status,
                now,
                self.settings.checkout_hour,
            ),
            updated_total_amount=preview.updated_total_amount,
            final_balance_amount=preview.final_balance_amount,
            currency=self.settings.currency,
        )

    def finalize_checkout(self, request: CheckoutFinalizeRequest) -> CheckoutFinalizeResponse:
        """Settle a checked-in reservation.

        Raises:
            InvalidReservationStatus: If the reservation is not checked in
        """
        try:
            assert_reservation_transition(request.reservation_status, ReservationStatus.CHECKED_OUT)
        except ValidationError as exc:
            logger.warning(f"Checkout rejected: {exc.detail}")
            raise InvalidReservationStatus("Reservation is not checked in") from exc

        final = finalize_checkout(
            request.total_amount,
            request.advance_amount,
            extra_charges=request.extra_charges,
            quick_order_amounts=request.quick_order_amounts,
            complementary_rates=request.complementary_rates,
            additional_charges=request.additional_charges,
            late_checkout_fee=request.late_checkout_fee,
            damage_fee=request.damage_fee,
            payment_amount=request.payment_amount,
        )

        checkout_notes = f"Checkout Notes: {request.staff_notes}"
        remarks = f"{request.remarks}\n\n{checkout_notes}" if request.remarks else checkout_notes

        logger.info(
            f"Checkout settled: total={final.final_total_amount} "
            f"payment={final.checkout_payment} balance={final.final_balance}"
        )

        return CheckoutFinalizeResponse(
            reservation_status=ReservationStatus.CHECKED_OUT,
            extra_charges=final.extra_charges,
            total_amount=final.final_total_amount,
            balance_amount=final.final_balance,
            advance_amount=final.advance_amount,
            payment_status=final.payment_status,
            payment_method=request.payment_method if final.checkout_payment > 0 else None,
            remarks=remarks,
            checkout_summary=CheckoutSummary(
                original_amount=final.original_amount,
                quick_orders_total=final.quick_orders_total,
                complementary_total=final.complementary_total,
                additional_charges=final.additional_charges,
                late_checkout_fee=final.late_checkout_fee,
                damage_fee=final.damage_fee,
                final_total_amount=final.final_total_amount,
                advance_paid=final.advance_paid,
                checkout_payment=final.checkout_payment,
                final_balance=final.final_balance,
            ),
            currency=self.settings.currency,
        )


pricing_service = PricingService()
