"""Pydantic schemas for API validation."""

from app.schemas.reservation import (
    BookingStatusRequest,
    BookingStatusResponse,
    BookingStatusResult,
    BookingStatusRow,
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

__all__ = [
    "BookingStatusRequest",
    "BookingStatusResponse",
    "BookingStatusResult",
    "BookingStatusRow",
    "CheckoutCalculateRequest",
    "CheckoutCalculateResponse",
    "CheckoutFinalizeRequest",
    "CheckoutFinalizeResponse",
    "CheckoutPreviewRequest",
    "CheckoutPreviewResponse",
    "CheckoutSummary",
    "ReservationCalculateRequest",
    "ReservationCalculateResponse",
    "ReservationSummaryRequest",
    "ReservationSummaryResponse",
]
