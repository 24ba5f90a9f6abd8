"""Core utilities: exceptions and middleware."""

from app.core.exceptions import (
    AppException,
    InvalidReservationStatus,
    ValidationError,
)

__all__ = [
    "AppException",
    "InvalidReservationStatus",
    "ValidationError",
]
