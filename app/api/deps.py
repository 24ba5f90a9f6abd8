"""API dependencies for common operations."""

from app.services.pricing_service import PricingService, pricing_service


def get_pricing_service() -> PricingService:
    """Get the shared pricing service."""
    return pricing_service
