"""
Monetary precision helpers for bill calculations.

Key Principles:
1. NEVER use float for money
2. Quantize every stored amount to the currency's minor unit
3. Use ROUND_HALF_UP (standard commercial rounding) for bill amounts
4. Compute totals from already-quantized components so the parts always add up
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Tuple, Union

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def quantize(amount: Union[Decimal, str, int, float]) -> Decimal:
    """
    Round to two decimals using ROUND_HALF_UP.

    Examples:
        >>> quantize("10.125")
        Decimal('10.13')
        >>> quantize("0.704")
        Decimal('0.70')
    """
    if isinstance(amount, float):
        # Convert float to string first to avoid precision issues
        amount = str(amount)
    return Decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)


def line_total(unit_price: Union[Decimal, str, int], quantity: int) -> Decimal:
    """Price of one order line: unit price captured at order time x quantity."""
    return quantize(Decimal(unit_price) * quantity)


def bill_amounts(
    lines: Iterable[Tuple[Decimal, int]],
    tax_rate: Union[Decimal, str],
    discount: Union[Decimal, str, int] = ZERO,
) -> dict:
    """
    Compute subtotal, tax, discount and total for a bill.

    Args:
        lines: (unit_price, quantity) pairs of the billable items
        tax_rate: fraction, e.g. Decimal("0.10") for 10%
        discount: absolute amount taken off after tax

    Returns:
        dict with subtotal, tax_amount, discount_amount, total_amount

    Examples:
        >>> bill_amounts([(Decimal("7.00"), 1)], Decimal("0.10"))["total_amount"]
        Decimal('7.70')
    """
    subtotal = quantize(sum((line_total(price, qty) for price, qty in lines), ZERO))
    tax_amount = quantize(subtotal * Decimal(tax_rate))
    discount_amount = quantize(discount)
    total_amount = quantize(subtotal + tax_amount - discount_amount)
    return {
        "subtotal": subtotal,
        "tax_amount": tax_amount,
        "discount_amount": discount_amount,
        "total_amount": total_amount,
    }
