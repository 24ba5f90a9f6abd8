"""Reservation pricing Pydantic schemas."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from app.domain.discount import DiscountType
from app.domain.rate import BillingType
from app.domain.reservation_status import PaymentStatus, ReservationStatus


class ReservationFinancialsBase(BaseModel):
    """Financial fields of the reservation edit form."""

    base_room_rate: Decimal = Field(..., ge=0)
    billing_type: BillingType = BillingType.NIGHT_STAY

    # Either the stay dates or an explicit night count
    check_in_date: date | None = None
    check_out_date: date | None = None
    number_of_nights: int | None = Field(None, ge=0)

    extra_charges: Decimal = Field(default=Decimal("0"), ge=0)
    discount_type: DiscountType = DiscountType.NONE
    # Not bounded here; see Settings.enforce_discount_bounds
    discount_value: Decimal = Decimal("0")
    service_charge: Decimal = Field(default=Decimal("0"), ge=0)
    tax: Decimal = Field(default=Decimal("0"), ge=0)
    advance_amount: Decimal = Field(default=Decimal("0"), ge=0)


class ReservationCalculateRequest(ReservationFinancialsBase):
    """Schema for calculating reservation totals without saving."""


class ReservationCalculateResponse(BaseModel):
    """Running summary shown while editing a reservation."""

    number_of_nights: int
    room_charge: Decimal
    subtotal: Decimal
    discount_amount: Decimal
    total_amount: Decimal
    balance_amount: Decimal
    payment_status: PaymentStatus
    currency: str


class BookingStatusRow(BaseModel):
    """One row of the booking list."""

    reservation_id: int | None = None
    check_in_date: date
    check_out_date: date
    actual_check_in: datetime | None = None
    actual_check_out: datetime | None = None
    reservation_status: ReservationStatus | None = None
    total_amount: Decimal = Field(default=Decimal("0"))
    advance_amount: Decimal = Field(default=Decimal("0"), ge=0)
    # Derived from total and advance when omitted
    balance_amount: Decimal | None = Field(None, ge=0)


class BookingStatusRequest(BaseModel):
    """Schema for deriving badges for a page of the booking list."""

    rows: list[BookingStatusRow] = Field(..., max_length=200)
    now: datetime | None = None


class BookingStatusResult(BaseModel):
    """Derived badges for a booking-list row."""

    reservation_id: int | None
    booking_status: ReservationStatus
    payment_status: PaymentStatus
    is_overdue: bool
    payment_completion: int


class BookingStatusResponse(BaseModel):
    """Schema for booking-list badges."""

    statuses: list[BookingStatusResult]
    evaluated_at: datetime


class CheckoutCalculateRequest(BaseModel):
    """Charges entered by the operator in the check-out dialog."""

    prior_balance: Decimal = Field(..., ge=0)
    extra_charges_at_checkout: Decimal | None = Field(None, ge=0)
    minibar_charges: Decimal | None = Field(None, ge=0)
    damage_charges: Decimal | None = Field(None, ge=0)
    late_checkout_fee: Decimal | None = Field(None, ge=0)


class CheckoutCalculateResponse(BaseModel):
    """Schema for the check-out confirmation summary."""

    additional_charges: Decimal
    final_amount_due: Decimal
    currency: str


class CheckoutPreviewRequest(BaseModel):
    """Schema for projecting a reservation's bill as of checkout."""

    reservation_status: ReservationStatus
    total_amount: Decimal
    advance_amount: Decimal = Field(default=Decimal("0"), ge=0)
    check_in_date: date | None = None
    check_out_date: date
    quick_order_amounts: list[Decimal] = Field(default_factory=list)
    complementary_rates: list[Decimal] = Field(default_factory=list)
    now: datetime | None = None


class CheckoutPreviewResponse(BaseModel):
    """Schema for the checkout projection."""

    quick_orders_total: Decimal
    complementary_total: Decimal
    late_checkout_fee: Decimal
    actual_stay_days: int | None
    is_overdue: bool
    updated_total_amount: Decimal
    final_balance_amount: Decimal
    currency: str


class ReservationSummaryRequest(BaseModel):
    """Reservation fields needed by the detail page header."""

    check_in_date: date
    check_out_date: date
    reservation_status: ReservationStatus | None = None
    actual_check_in: datetime | None = None
    actual_check_out: datetime | None = None
    number_of_nights: int = Field(default=0, ge=0)
    total_amount: Decimal = Field(default=Decimal("0"))
    advance_amount: Decimal = Field(default=Decimal("0"), ge=0)
    now: datetime | None = None


class ReservationSummaryResponse(BaseModel):
    """Stay flags and progress shown on the reservation detail page."""

    is_currently_active: bool
    is_past_stay: bool
    is_future_stay: bool
    can_check_in: bool
    can_check_out: bool
    is_overdue: bool
    nights_stayed: int
    payment_completion: int
    evaluated_at: datetime


class CheckoutFinalizeRequest(BaseModel):
    """Schema for confirming a checkout."""

    reservation_status: ReservationStatus
    total_amount: Decimal
    advance_amount: Decimal = Field(default=Decimal("0"), ge=0)
    extra_charges: Decimal = Field(default=Decimal("0"), ge=0)
    quick_order_amounts: list[Decimal] = Field(default_factory=list)
    complementary_rates: list[Decimal] = Field(default_factory=list)
    additional_charges: Decimal = Field(default=Decimal("0"), ge=0)
    late_checkout_fee: Decimal = Field(default=Decimal("0"), ge=0)
    damage_fee: Decimal = Field(default=Decimal("0"), ge=0)
    payment_amount: Decimal = Field(default=Decimal("0"), ge=0)
    payment_method: str = Field(default="CASH", max_length=30)
    remarks: str | None = None
    staff_notes: str = Field(default="", max_length=1000)


class CheckoutSummary(BaseModel):
    """Breakdown of the final checkout bill."""

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


class CheckoutFinalizeResponse(BaseModel):
    """Fields to persist on the reservation plus the bill breakdown."""

    reservation_status: ReservationStatus
    extra_charges: Decimal
    total_amount: Decimal
    balance_amount: Decimal
    advance_amount: Decimal
    payment_status: PaymentStatus | None
    payment_method: str | None
    remarks: str
    checkout_summary: CheckoutSummary
    currency: str
