"""Reservation settlement domain logic.

CORE RULES:
- subtotal = room charge + extra charges
- total = subtotal - discount + service charge + tax (not floored)
- balance = max(0, total - advance)
- checkout adds extra services, minibar, damage and late fee to the balance
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from app.domain.discount import DiscountType, coerce_discount_type, compute_discount
from app.domain.money import ZERO, Amount, to_amount
from app.domain.rate import (
    BillingType,
    as_datetime,
    calculate_nights,
    coerce_billing_type,
    common_tzinfo,
    compute_room_charge,
)
from app.domain.reservation_status import DEFAULT_CHECKOUT_HOUR, PaymentStatus, checkout_cutoff

SECONDS_PER_HOUR = 60 * 60

# Late checkout fee (LKR per started hour)
DEFAULT_LATE_FEE_PER_HOUR = Decimal("50")


@dataclass(frozen=True)
class ReservationFinancials:
    """Financial inputs of a reservation, rebuilt on every request."""

    base_room_rate: Decimal
    billing_type: BillingType = BillingType.NIGHT_STAY
    number_of_nights: int = 0
    extra_charges: Decimal = ZERO
    discount_type: DiscountType = DiscountType.NONE
    discount_value: Decimal = ZERO
    service_charge: Decimal = ZERO
    tax: Decimal = ZERO
    advance_amount: Decimal = ZERO

    def __post_init__(self) -> None:
        for name in (
            "base_room_rate",
            "extra_charges",
            "discount_value",
            "service_charge",
            "tax",
            "advance_amount",
        ):
            object.__setattr__(self, name, to_amount(getattr(self, name)))
        object.__setattr__(self, "billing_type", coerce_billing_type(self.billing_type))
        object.__setattr__(self, "discount_type", coerce_discount_type(self.discount_type))
        object.__setattr__(self, "number_of_nights", max(0, int(self.number_of_nights)))

    @classmethod
    def from_dates(
        cls,
        check_in_date: date | datetime,
        check_out_date: date | datetime,
        **fields,
    ) -> ReservationFinancials:
        """Build financials with the night count derived from stay dates."""
        return cls(number_of_nights=calculate_nights(check_in_date, check_out_date), **fields)


@dataclass(frozen=True)
class SettlementResult:
    """Derived amounts of a reservation."""

    room_charge: Decimal
    subtotal: Decimal
    discount_amount: Decimal
    total_amount: Decimal
    balance_amount: Decimal


def compute_settlement(financials: ReservationFinancials) -> SettlementResult:
    """Calculate total amount and balance due for a reservation.

    Args:
        financials: Reservation financial inputs

    Returns:
        SettlementResult: Room charge, discount, total and balance
    """
    room_charge = compute_room_charge(
        financials.base_room_rate,
        financials.billing_type,
        financials.number_of_nights,
    )
    subtotal = room_charge + financials.extra_charges
    discount_amount = compute_discount(
        financials.discount_type, financials.discount_value, subtotal
    )
    after_discount = subtotal - discount_amount
    total_amount = after_discount + financials.service_charge + financials.tax
    balance_amount = max(ZERO, total_amount - financials.advance_amount)

    return SettlementResult(
        room_charge=room_charge,
        subtotal=subtotal,
        discount_amount=discount_amount,
        total_amount=total_amount,
        balance_amount=balance_amount,
    )


@dataclass(frozen=True)
class CheckOutSettlement:
    """Ad-hoc charges collected at checkout."""

    prior_balance: Decimal
    extra_charges_at_checkout: Decimal = ZERO
    minibar_charges: Decimal = ZERO
    damage_charges: Decimal = ZERO
    late_checkout_fee: Decimal = ZERO

    @property
    def additional_charges(self) -> Decimal:
        return (
            self.extra_charges_at_checkout
            + self.minibar_charges
            + self.damage_charges
            + self.late_checkout_fee
        )

    @property
    def final_amount_due(self) -> Decimal:
        return self.prior_balance + self.additional_charges


def compute_checkout_settlement(
    prior_balance: Amount,
    extra_charges_at_checkout: Amount = None,
    minibar_charges: Amount = None,
    damage_charges: Amount = None,
    late_checkout_fee: Amount = None,
) -> CheckOutSettlement:
    """Aggregate checkout charges on top of the reservation balance.

    Missing or NaN charges count as zero. Nothing is clamped.
    """
    return CheckOutSettlement(
        prior_balance=to_amount(prior_balance),
        extra_charges_at_checkout=to_amount(extra_charges_at_checkout),
        minibar_charges=to_amount(minibar_charges),
        damage_charges=to_amount(damage_charges),
        late_checkout_fee=to_amount(late_checkout_fee),
    )


def compute_late_checkout_fee(
    check_out_date: date | datetime,
    now: datetime,
    checkout_hour: int = DEFAULT_CHECKOUT_HOUR,
    fee_per_hour: Amount = DEFAULT_LATE_FEE_PER_HOUR,
) -> Decimal:
    """Calculate the late checkout fee.

    Every started hour past the checkout cutoff is billed ``fee_per_hour``.

    Args:
        check_out_date: Scheduled checkout date
        now: Current time
        checkout_hour: Hour of the standard checkout time
        fee_per_hour: Fee per started hour

    Returns:
        Decimal: Late fee, 0 when checking out on time
    """
    tzinfo = common_tzinfo(now, check_out_date)
    now = as_datetime(now, tzinfo)
    cutoff = checkout_cutoff(check_out_date, checkout_hour, tzinfo)
    if now <= cutoff:
        return ZERO

    hours_late = math.ceil((now - cutoff).total_seconds() / SECONDS_PER_HOUR)
    return to_amount(fee_per_hour) * hours_late


@dataclass(frozen=True)
class CheckoutPreview:
    """Amounts shown before the operator confirms a checkout."""

    quick_orders_total: Decimal
    complementary_total: Decimal
    late_checkout_fee: Decimal
    updated_total_amount: Decimal
    final_balance_amount: Decimal


def compute_checkout_preview(
    total_amount: Amount,
    advance_amount: Amount,
    quick_order_amounts: Iterable[Amount] = (),
    complementary_rates: Iterable[Amount] = (),
    late_checkout_fee: Amount = None,
) -> CheckoutPreview:
    """Project the reservation total and balance as of checkout."""
    quick_orders_total = sum((to_amount(a) for a in quick_order_amounts), ZERO)
    complementary_total = sum((to_amount(r) for r in complementary_rates), ZERO)
    late_fee = to_amount(late_checkout_fee)

    updated_total = to_amount(total_amount) + quick_orders_total + complementary_total + late_fee

    return CheckoutPreview(
        quick_orders_total=quick_orders_total,
        complementary_total=complementary_total,
        late_checkout_fee=late_fee,
        updated_total_amount=updated_total,
        final_balance_amount=max(ZERO, updated_total - to_amount(advance_amount)),
    )


@dataclass(frozen=True)
class FinalCheckout:
    """Settlement written back to the reservation when checkout is confirmed."""

    original_amount: Decimal
    quick_orders_total: Decimal
    complementary_total: Decimal
    additional_charges: Decimal
    late_checkout_fee: Decimal
    damage_fee: Decimal
    final_total_amount: Decimal
    advance_paid: Decimal
    checkout_payment: Decimal
    final_balance: Decimal
    extra_charges: Decimal
    advance_amount: Decimal
    payment_status: PaymentStatus | None = None


def finalize_checkout(
    total_amount: Amount,
    advance_amount: Amount,
    extra_charges: Amount = None,
    quick_order_amounts: Iterable[Amount] = (),
    complementary_rates: Iterable[Amount] = (),
    additional_charges: Amount = None,
    late_checkout_fee: Amount = None,
    damage_fee: Amount = None,
    payment_amount: Amount = None,
) -> FinalCheckout:
    """Settle a reservation at checkout.

    Checkout charges are folded into ``extra_charges`` and any payment taken
    at the desk is added to ``advance_amount``.

    Args:
        total_amount: Reservation total before checkout
        advance_amount: Amount collected before checkout
        extra_charges: Extra charges already on the reservation
        quick_order_amounts: Totals of non-cancelled quick orders
        complementary_rates: Rates of complementary items
        additional_charges: Extra services added at checkout
        late_checkout_fee: Late checkout fee
        damage_fee: Damage charge
        payment_amount: Payment collected at checkout

    Returns:
        FinalCheckout: Final totals and the fields to persist
    """
    original = to_amount(total_amount)
    advance = to_amount(advance_amount)
    quick_orders_total = sum((to_amount(a) for a in quick_order_amounts), ZERO)
    complementary_total = sum((to_amount(r) for r in complementary_rates), ZERO)
    additional = to_amount(additional_charges)
    late_fee = to_amount(late_checkout_fee)
    damage = to_amount(damage_fee)
    payment = to_amount(payment_amount)

    final_total = original + quick_orders_total + complementary_total + additional + late_fee + damage
    final_balance = max(ZERO, final_total - advance - payment)

    payment_status = None
    if payment > 0:
        payment_status = PaymentStatus.PAID if final_balance == 0 else PaymentStatus.PARTIAL

    return FinalCheckout(
        original_amount=original,
        quick_orders_total=quick_orders_total,
        complementary_total=complementary_total,
        additional_charges=additional,
        late_checkout_fee=late_fee,
        damage_fee=damage,
        final_total_amount=final_total,
        advance_paid=advance,
        checkout_payment=payment,
        final_balance=final_balance,
        extra_charges=to_amount(extra_charges) + additional + late_fee + damage,
        advance_amount=advance + payment if payment > 0 else advance,
        payment_status=payment_status,
    )
