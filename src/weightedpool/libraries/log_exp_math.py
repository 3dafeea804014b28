"""
Exponentiation and logarithm with 18 decimal fixed point base and exponent.

Exponentiation and logarithm are computed with series expansions after range reduction against a
ladder of precomputed powers of e. Intermediate values carry 20 decimals (36 for arguments close to
one), and the results are accurate to within MAX_POW_RELATIVE_ERROR when used through the pow_down
and pow_up wrappers in `fixed_point`.

Signed quantities are divided with truncation toward zero, which matches the 256-bit reference.

ref: https://github.com/balancer/balancer-v2-monorepo/blob/master/pkg/solidity-utils/contracts/math/LogExpMath.sol
"""

from weightedpool.exceptions import (
    BaseOutOfBounds,
    DivisionByZero,
    ExponentOutOfBounds,
    ProductOutOfBounds,
)

ONE_18 = 1 * 10**18

# Higher internal precision: 20 decimals for the general path, 36 for ln near one.
ONE_20 = 1 * 10**20
ONE_36 = 1 * 10**36

# The largest result that fits the signed word with 20 decimals is (2^255 - 1) / 10^20, so the
# largest exponent is ln((2^255 - 1) / 10^20) = 130.700829182905140221. The smallest result is
# 10^(-18), so the most negative exponent is ln(10^(-18)) = -41.446531673892822312. Both are
# rounded inward.
MAX_NATURAL_EXPONENT = 130 * 10**18
MIN_NATURAL_EXPONENT = -41 * 10**18

# ln(0.9) and ln(1.1) both fit a signed word with 36 decimals.
LN_36_LOWER_BOUND = ONE_18 - 1 * 10**17
LN_36_UPPER_BOUND = ONE_18 + 1 * 10**17

# Keeps y * ln(x) inside the signed word.
MILD_EXPONENT_BOUND = 2**254 // ONE_20

# x_n = 2^(7 - n), a_n = e^(x_n)

# 18 decimal exponents, with a_n stored as plain integers (no decimals)
x0 = 128000000000000000000  # 2^7
a0 = 38877084059945950922200000000000000000000000000000000000  # e^(x0)
x1 = 64000000000000000000  # 2^6
a1 = 6235149080811616882910000000  # e^(x1)

# 20 decimal exponents and powers
x2 = 3200000000000000000000  # 2^5
a2 = 7896296018268069516100000000000000  # e^(x2)
x3 = 1600000000000000000000  # 2^4
a3 = 888611052050787263676000000  # e^(x3)
x4 = 800000000000000000000  # 2^3
a4 = 298095798704172827474000  # e^(x4)
x5 = 400000000000000000000  # 2^2
a5 = 5459815003314423907810  # e^(x5)
x6 = 200000000000000000000  # 2^1
a6 = 738905609893065022723  # e^(x6)
x7 = 100000000000000000000  # 2^0
a7 = 271828182845904523536  # e^(x7)
x8 = 50000000000000000000  # 2^-1
a8 = 164872127070012814685  # e^(x8)
x9 = 25000000000000000000  # 2^-2
a9 = 128402541668774148407  # e^(x9)
x10 = 12500000000000000000  # 2^-3
a10 = 113314845306682631683  # e^(x10)
x11 = 6250000000000000000  # 2^-4
a11 = 106449445891785942956  # e^(x11)

# exp only needs the ladder down to x9, the Taylor series covers the remainder
_EXP_LADDER: tuple[tuple[int, int], ...] = (
    (x2, a2),
    (x3, a3),
    (x4, a4),
    (x5, a5),
    (x6, a6),
    (x7, a7),
    (x8, a8),
    (x9, a9),
)
_LN_LADDER: tuple[tuple[int, int], ...] = (
    *_EXP_LADDER,
    (x10, a10),
    (x11, a11),
)

_EXP_TAYLOR_TERMS = 12
_LN_SERIES_TERMS = 6
_LN_36_SERIES_TERMS = 8


def _sdiv(a: int, b: int) -> int:
    """
    Signed integer division, truncating toward zero.
    """

    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


def _smod(a: int, b: int) -> int:
    """
    Signed remainder with the sign of the dividend, the counterpart of `_sdiv`.
    """

    return a - b * _sdiv(a, b)


def pow(x: int, y: int) -> int:  # noqa: A001
    """
    Exponentiation (x^y) with unsigned 18 decimal fixed point base and exponent.

    Computed as exp(y * ln(x)). Reverts if ln(x) * y is outside the domain of `exp`.
    """

    if y == 0:
        # 0^0 is defined as one
        return ONE_18

    if x == 0:
        return 0

    # ln takes a signed argument
    if x >> 255 != 0:
        raise BaseOutOfBounds

    if y >= MILD_EXPONENT_BOUND:
        raise ExponentOutOfBounds

    if LN_36_LOWER_BOUND < x < LN_36_UPPER_BOUND:
        ln_36_x = _ln_36(x)

        # ln_36_x has 36 decimals and y cannot be upscaled to match without overflow, so multiply
        # the integer and fractional 18 decimal halves separately.
        logx_times_y = _sdiv(ln_36_x, ONE_18) * y + _sdiv(_smod(ln_36_x, ONE_18) * y, ONE_18)
    else:
        logx_times_y = _ln(x) * y

    logx_times_y = _sdiv(logx_times_y, ONE_18)

    if not (MIN_NATURAL_EXPONENT <= logx_times_y <= MAX_NATURAL_EXPONENT):
        raise ProductOutOfBounds

    return exp(logx_times_y)


def exp(x: int) -> int:
    """
    Natural exponentiation (e^x) with signed 18 decimal fixed point exponent.

    Reverts if `x` is smaller than MIN_NATURAL_EXPONENT, or larger than `MAX_NATURAL_EXPONENT`.
    """

    if not (MIN_NATURAL_EXPONENT <= x <= MAX_NATURAL_EXPONENT):
        raise ExponentOutOfBounds

    if x < 0:
        # e^(-x) = 1 / e^x
        return (ONE_18 * ONE_18) // exp(-x)

    # e^(x+y) = e^x * e^y, so x is decomposed over the ladder x_n and the matching a_n multiplied
    # together. What remains of x after the ladder is small enough for a Taylor series.

    # a0 and a1 are plain integers, and x0 + x1 > MAX_NATURAL_EXPONENT so at most one applies.
    if x >= x0:
        x -= x0
        first_an = a0
    elif x >= x1:
        x -= x1
        first_an = a1
    else:
        first_an = 1

    # Switch to 20 decimals for the smaller terms
    x *= 100

    product = ONE_20
    for x_n, a_n in _EXP_LADDER:
        if x >= x_n:
            x -= x_n
            product = (product * a_n) // ONE_20

    # e^x = 1 + x + x^2/2! + x^3/3! + ... + x^n/n!, each term being the previous one times x / n
    series_sum = ONE_20
    term = x
    series_sum += term
    for n in range(2, _EXP_TAYLOR_TERMS + 1):
        term = ((term * x) // ONE_20) // n
        series_sum += term

    # product and series_sum have 20 decimals, first_an has none. Drop two digits for 18 decimals.
    return (((product * series_sum) // ONE_20) * first_an) // 100


def log(arg: int, base: int) -> int:
    """
    Logarithm (log(arg, base)), with signed 18 decimal fixed point base and argument.
    """

    if arg <= 0 or base <= 0:
        raise BaseOutOfBounds

    # log(arg, base) = ln(arg) / ln(base), both with 36 decimals
    log_base = _ln_36(base) if LN_36_LOWER_BOUND < base < LN_36_UPPER_BOUND else _ln(base) * ONE_18
    log_arg = _ln_36(arg) if LN_36_LOWER_BOUND < arg < LN_36_UPPER_BOUND else _ln(arg) * ONE_18

    if log_base == 0:
        raise DivisionByZero

    return _sdiv(log_arg * ONE_18, log_base)


def ln(a: int) -> int:
    """
    Natural logarithm (ln(a)) with signed 18 decimal fixed point argument.
    """

    if a <= 0:
        raise BaseOutOfBounds

    if LN_36_LOWER_BOUND < a < LN_36_UPPER_BOUND:
        return _sdiv(_ln_36(a), ONE_18)

    return _ln(a)


def _ln(a: int) -> int:
    """
    Internal natural logarithm (ln(a)) with signed 18 decimal fixed point argument.
    """

    if a < ONE_18:
        # ln(a) = -ln(1/a), and 1/a > 1
        return -_ln((ONE_18 * ONE_18) // a)

    # ln(a * b) = ln(a) + ln(b), so a is divided down the ladder a_n while the matching x_n are
    # summed. a0 and a1 are plain integers and must be compared against a as 18 decimal values.
    _sum = 0
    if a >= a0 * ONE_18:
        a //= a0
        _sum += x0

    if a >= a1 * ONE_18:
        a //= a1
        _sum += x1

    # 20 decimals for the rest of the ladder
    _sum *= 100
    a *= 100

    for x_n, a_n in _LN_LADDER:
        if a >= a_n:
            a = (a * ONE_20) // a_n
            _sum += x_n

    # a is now below a11 (about 1.06), where the series below converges quickly:
    # z = (a - 1) / (a + 1)
    # ln(a) = 2 * (z + z^3 / 3 + z^5 / 5 + z^7 / 7 + ... + z^(2 * n + 1) / (2 * n + 1))
    series_sum = _odd_power_series(
        z=((a - ONE_20) * ONE_20) // (a + ONE_20),
        one=ONE_20,
        terms=_LN_SERIES_TERMS,
    )

    # Drop two digits for 18 decimals
    return (_sum + series_sum) // 100


def _ln_36(x: int) -> int:
    """
    Natural logarithm (ln(x)) with 36 decimal precision, for arguments close to one.
    """

    x *= ONE_18

    z = _sdiv((x - ONE_36) * ONE_36, x + ONE_36)
    return _odd_power_series(z=z, one=ONE_36, terms=_LN_36_SERIES_TERMS)


def _odd_power_series(z: int, one: int, terms: int) -> int:
    """
    Returns 2 * (z + z^3 / 3 + ... + z^(2 * terms - 1) / (2 * terms - 1)), with `one` setting the
    fixed point precision of `z`.
    """

    z_squared = _sdiv(z * z, one)

    num = z
    series_sum = num
    for denominator in range(3, 2 * terms, 2):
        num = _sdiv(num * z_squared, one)
        series_sum += _sdiv(num, denominator)

    return series_sum * 2
