"""Integer-cents conversion for monetary amounts.

Amounts are stored and computed as int cents. The wire format is a JSON
number with at most two fractional digits; conversion happens only at the
schema boundary.
"""

import math
from decimal import Decimal, InvalidOperation

# Cents are stored in a signed 64-bit column
MAX_ABS_CENTS = 2**63 - 1


def amount_to_cents(amount: float | int | Decimal) -> int:
    """Convert a wire amount to cents: 123.45 -> 12345.

    Raises ValueError for non-finite values, more than two decimals, or a
    cent value that does not fit in 64 bits; sub-cent amounts are rejected,
    never rounded.
    """
    if isinstance(amount, float) and not math.isfinite(amount):
        raise ValueError(f"Amount must be a finite number, got {amount}")
    try:
        # str() gives the shortest repr, so 19.99 stays 19.99 rather than
        # the binary expansion of the float
        exact = Decimal(str(amount))
    except InvalidOperation:
        raise ValueError(f"Amount is not a number: {amount!r}") from None
    cents = exact * 100
    if cents != cents.to_integral_value():
        raise ValueError(f"Amount must have at most two decimal places, got {amount}")
    if abs(cents) > MAX_ABS_CENTS:
        raise ValueError(f"Amount is out of range, got {amount}")
    return int(cents)


def cents_to_amount(cents: int) -> float:
    """Convert cents back to the wire amount: 12345 -> 123.45."""
    return cents / 100
