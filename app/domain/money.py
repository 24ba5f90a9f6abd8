"""Money helpers shared by the pricing domain."""

from decimal import Decimal, InvalidOperation
from typing import Union

Amount = Union[Decimal, int, float, str, None]

ZERO = Decimal("0")


def to_amount(value: Amount) -> Decimal:
    """Coerce a raw amount to Decimal.

    Missing values and NaN count as zero. Floats go through ``str`` so
    ``0.1`` stays ``Decimal("0.1")``.

    Args:
        value: Amount as Decimal, int, float, numeric string or None

    Returns:
        Decimal: The amount, or 0 when missing
    """
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return ZERO if value.is_nan() else value
    if isinstance(value, float):
        value = str(value)
    try:
        amount = Decimal(value)
    except (InvalidOperation, ValueError):
        return ZERO
    if amount.is_nan():
        return ZERO
    return amount
