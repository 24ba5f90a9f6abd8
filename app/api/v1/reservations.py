"""Reservation pricing endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.deps import get_pricing_service
from app.schemas.reservation import (
    BookingStatusRequest,
    BookingStatusResponse,
    CheckoutCalculateRequest,
    CheckoutCalculateResponse,
    CheckoutFinalizeRequest,
    CheckoutFinalizeResponse,
    CheckoutPreviewRequest,
    CheckoutPreviewResponse,
    ReservationCalculateRequest,
    ReservationCalculateResponse,
    ReservationSummaryRequest,
    ReservationSummaryResponse,
)
from app.services.pricing_service import PricingService

router = APIRouter()


@router.post("/calculate", response_model=ReservationCalculateResponse)
async def calculate_reservation(
    request: ReservationCalculateRequest,
    service: Annotated[PricingService, Depends(get_pricing_service)],
) -> ReservationCalculateResponse:
    """Calculate reservation totals without saving them."""
    return service.calculate_reservation(request)


@router.post("/booking-statuses", response_model=BookingStatusResponse)
async def booking_statuses(
    request: BookingStatusRequest,
    service: Annotated[PricingService, Depends(get_pricing_service)],
) -> BookingStatusResponse:
    """Derive booking and payment badges for a page of the booking list."""
    return service.classify_bookings(request)


@router.post("/summary", response_model=ReservationSummaryResponse)
async def reservation_summary(
    request: ReservationSummaryRequest,
    service: Annotated[PricingService, Depends(get_pricing_service)],
) -> ReservationSummaryResponse:
    """Derive the stay flags of a reservation for its detail page."""
    return service.reservation_summary(request)


@router.post("/checkout/calculate", response_model=CheckoutCalculateResponse)
async def calculate_checkout(
    request: CheckoutCalculateRequest,
    service: Annotated[PricingService, Depends(get_pricing_service)],
) -> CheckoutCalculateResponse:
    """Calculate the amount due at checkout."""
    return service.calculate_checkout(request)


@router.post("/checkout/preview", response_model=CheckoutPreviewResponse)
async def preview_checkout(
    request: CheckoutPreviewRequest,
    service: Annotated[PricingService, Depends(get_pricing_service)],
) -> CheckoutPreviewResponse:
    """Project the bill as of checkout, including any late fee."""
    return service.preview_checkout(request)


@router.post("/checkout/finalize", response_model=CheckoutFinalizeResponse)
async def finalize_checkout(
    request: CheckoutFinalizeRequest,
    service: Annotated[PricingService, Depends(get_pricing_service)],
) -> CheckoutFinalizeResponse:
    """Settle a checked-in reservation."""
    return service.finalize_checkout(request)
