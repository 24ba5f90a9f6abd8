"""Discount policy domain logic.

Policies:
- NONE: no discount
- PERCENTAGE: discount_value percent of the subtotal
- FIXED_AMOUNT: discount_value as-is, even when it exceeds the subtotal
"""

from decimal import Decimal
from enum import Enum

from app.domain.money import ZERO, Amount, to_amount

HUNDRED = Decimal("100")


class DiscountType(str, Enum):
    """Discount policy types."""

    NONE = "NONE"
    PERCENTAGE = "PERCENTAGE"
    FIXED_AMOUNT = "FIXED_AMOUNT"


def coerce_discount_type(discount_type: str | DiscountType | None) -> DiscountType:
    """Resolve a discount type; missing or unknown values mean no discount."""
    if discount_type is None:
        return DiscountType.NONE
    if isinstance(discount_type, str):
        try:
            return DiscountType(discount_type)
        except ValueError:
            return DiscountType.NONE
    return discount_type


def compute_discount(
    discount_type: str | DiscountType | None,
    discount_value: Amount,
    subtotal: Amount,
) -> Decimal:
    """Calculate the discount taken off a subtotal.

    Values are not clamped: a negative value yields a surcharge and a fixed
    amount may exceed the subtotal. Use ``validate_discount`` at the boundary
    to reject those.

    Args:
        discount_type: The discount policy
        discount_value: Percentage (0-100) or fixed amount
        subtotal: Room charge plus extra charges

    Returns:
        Decimal: Discount amount
    """
    policy = coerce_discount_type(discount_type)
    value = to_amount(discount_value)

    if policy is DiscountType.PERCENTAGE:
        return to_amount(subtotal) * value / HUNDRED
    if policy is DiscountType.FIXED_AMOUNT:
        return value
    return ZERO


def validate_discount(
    discount_type: str | DiscountType | None,
    discount_value: Amount,
    subtotal: Amount,
) -> list[str]:
    """List the problems with a discount that ``compute_discount`` lets through.

    Returns:
        list[str]: Human-readable problems; empty when the discount is bounded
    """
    policy = coerce_discount_type(discount_type)
    value = to_amount(discount_value)
    problems: list[str] = []

    if policy is DiscountType.NONE:
        return problems

    if value < 0:
        problems.append("Discount value cannot be negative")
    if policy is DiscountType.PERCENTAGE and value > HUNDRED:
        problems.append("Discount percentage cannot exceed 100")
    if policy is DiscountType.FIXED_AMOUNT and value > to_amount(subtotal):
        problems.append("Fixed discount cannot exceed the subtotal")

    return problems
