"""
Conversions between decimal values and 18 decimal fixed point integers, used to build inputs and
exact reference values.
"""

from decimal import Decimal

from weightedpool.libraries.constants import ONE

SCALING_FACTOR = Decimal(ONE)


def bn(x: int | Decimal) -> int:
    # int() truncates toward zero
    return int(x)


def fp(x: int | str | Decimal) -> int:
    """
    Convert a decimal value to an 18 decimal fixed point integer, truncating extra digits.
    """

    return bn(to_fp(x))


def to_fp(x: int | str | Decimal) -> Decimal:
    return Decimal(x) * SCALING_FACTOR


def from_fp(x: int | Decimal) -> Decimal:
    """
    Convert an 18 decimal fixed point integer back to its decimal value.
    """

    return Decimal(x) / SCALING_FACTOR
