from enum import Enum

from weightedpool.constants import MAX_UINT256
from weightedpool.exceptions import DivisionByZero, InternalError, Overflow, Underflow
from weightedpool.libraries import log_exp_math
from weightedpool.libraries.constants import FOUR, MAX_POW_RELATIVE_ERROR, ONE, TWO
from weightedpool.logging import logger

_ZERO = 0


class Rounding(Enum):
    DOWN = 0
    UP = 1


def add(a: int, b: int) -> int:
    if a + b > MAX_UINT256:
        raise Overflow
    return a + b


def sub(a: int, b: int) -> int:
    if b > a:
        raise Underflow
    return a - b


def mul_down(a: int, b: int) -> int:
    product = a * b
    if product > MAX_UINT256:
        raise Overflow
    return product // ONE


def mul_up(a: int, b: int) -> int:
    product = a * b
    if product > MAX_UINT256:
        raise Overflow

    if product == 0:
        return _ZERO

    return (product - 1) // ONE + 1


def _inflate(a: int, b: int) -> int:
    if b == 0:
        raise DivisionByZero

    a_inflated = a * ONE
    if a_inflated > MAX_UINT256:
        raise InternalError
    return a_inflated


def div_down(a: int, b: int) -> int:
    a_inflated = _inflate(a, b)
    if a_inflated == 0:
        return _ZERO
    return a_inflated // b


def div_up(a: int, b: int) -> int:
    a_inflated = _inflate(a, b)
    if a_inflated == 0:
        return _ZERO
    return (a_inflated - 1) // b + 1


def pow_down(x: int, y: int) -> int:
    """
    Returns x^y, assuming both are fixed point numbers, rounding down. The result is guaranteed to
    not be above the true value (that is, the error function expected - actual is always positive).
    """

    # 1.0, 2.0 and 4.0 are exact and common (50/50 and 80/20 pools), so skip the approximation
    if y == ONE:
        return x
    if y == TWO:
        return mul_down(x, x)
    if y == FOUR:
        square = mul_down(x, x)
        return mul_down(square, square)

    raw = log_exp_math.pow(x, y)
    max_error = add(mul_up(raw, MAX_POW_RELATIVE_ERROR), 1)
    if raw < max_error:
        logger.debug(f"pow_down({x}, {y}) is within the error margin of zero")
        return _ZERO

    return sub(raw, max_error)


def pow_up(x: int, y: int) -> int:
    """
    Returns x^y, assuming both are fixed point numbers, rounding up. The result is guaranteed to not
    be below the true value (that is, the error function expected - actual is always negative).
    """

    if y == ONE:
        return x
    if y == TWO:
        return mul_up(x, x)
    if y == FOUR:
        square = mul_up(x, x)
        return mul_up(square, square)

    raw = log_exp_math.pow(x, y)
    max_error = add(mul_up(raw, MAX_POW_RELATIVE_ERROR), 1)
    return add(raw, max_error)


def complement(x: int) -> int:
    """
    Returns ONE - x, or zero when x is at least ONE. Useful when x is known to be close to ONE but
    may exceed it through rounding.
    """

    return ONE - x if x < ONE else _ZERO


def mul(a: int, b: int, rounding: Rounding) -> int:
    match rounding:
        case Rounding.DOWN:
            return mul_down(a, b)
        case Rounding.UP:
            return mul_up(a, b)


def div(a: int, b: int, rounding: Rounding) -> int:
    match rounding:
        case Rounding.DOWN:
            return div_down(a, b)
        case Rounding.UP:
            return div_up(a, b)
