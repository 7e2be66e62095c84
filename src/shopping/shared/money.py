"""Monetary arithmetic.

Amounts are stored as floats on the aggregates but every sum, product and
comparison goes through ``Decimal`` built from the float's shortest repr, so
``0.1 + 0.2`` style drift never reaches a balance. A cart total is rounded
to cents once, and that one figure is both checked against and taken from
the wallet.
"""

from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")


def to_decimal(amount) -> Decimal:
    if isinstance(amount, Decimal):
        return amount
    return Decimal(str(amount or 0))


def to_cents(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def to_amount(value: Decimal) -> float:
    """Round to cents and convert back to the stored float representation."""
    return float(to_cents(value))


def line_total(cost, quantity: int) -> Decimal:
    return to_decimal(cost) * quantity
