"""
Money helpers.

Prices are stored as SQLite REAL and travel as JSON numbers, but all
arithmetic is done on ``Decimal`` built from the value's ``str`` form so
``99.99 * 3`` is ``299.97`` and not ``299.96999999999997``.  Amounts are
rounded half‑up to whole cents.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Union

CENT = Decimal("0.01")

Number = Union[int, float, str, Decimal]


def to_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_money(value: Number) -> Decimal:
    """Round to two decimal places, half‑up."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def line_amount(price: Number, quantity: int) -> Decimal:
    """Exact ``price × quantity``, not rounded."""
    return to_decimal(price) * quantity


def line_subtotal(price: Number, quantity: int) -> Decimal:
    """``price × quantity`` rounded to cents, for display."""
    return round_money(line_amount(price, quantity))


def sum_money(amounts: Iterable[Number]) -> Decimal:
    """Sum amounts and round the result once; an empty sum is ``0.00``.

    Pass unrounded line amounts so sub‑cent prices are not rounded
    twice.
    """
    total = sum((to_decimal(amount) for amount in amounts), Decimal("0"))
    return round_money(total)
