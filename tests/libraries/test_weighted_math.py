from decimal import Decimal

import hypothesis
import hypothesis.strategies
import pydantic
import pytest

from weightedpool.exceptions import InputLengthMismatch, MaxInRatio, MaxOutRatio, ZeroInvariant
from weightedpool.libraries import weighted_math
from weightedpool.libraries.constants import MAX_IN_RATIO, MAX_OUT_RATIO, ONE
from weightedpool.libraries.fixed_point import Rounding, mul_down
from weightedpool.libraries.helpers import bn, from_fp, to_fp

MAX_RELATIVE_ERROR = Decimal("0.0001")

balances = hypothesis.strategies.integers(min_value=1 * 10**18, max_value=10**30)
weights = hypothesis.strategies.integers(min_value=1 * 10**17, max_value=9 * 10**17)
# Swap sizes as a fraction of the balance in, between 1% and MAX_IN_RATIO
swap_fractions = hypothesis.strategies.integers(min_value=1 * 10**16, max_value=MAX_IN_RATIO)


def _calculate_invariant(fp_raw_balances: list[int], fp_raw_weights: list[int]) -> int:
    normalized_weights = [from_fp(weight) for weight in fp_raw_weights]
    balances = [Decimal(balance) for balance in fp_raw_balances]

    invariant = 1
    for i, balance in enumerate(balances):
        invariant *= balance ** normalized_weights[i]
    return bn(invariant)


def _calc_out_given_in(
    fp_balance_in: int,
    fp_weight_in: int,
    fp_balance_out: int,
    fp_weight_out: int,
    fp_amount_in: int,
) -> int:
    new_balance = from_fp(fp_balance_in) + from_fp(fp_amount_in)
    base = from_fp(fp_balance_in) / (new_balance)
    exponent = from_fp(fp_weight_in) / from_fp(fp_weight_out)
    ratio = Decimal(1) - base**exponent
    return bn(to_fp(from_fp(fp_balance_out) * ratio))


def _calc_in_given_out(
    fp_balance_in: int,
    fp_weight_in: int,
    fp_balance_out: int,
    fp_weight_out: int,
    fp_amount_out: int,
) -> int:
    new_balance = from_fp(fp_balance_out) - from_fp(fp_amount_out)
    base = from_fp(fp_balance_out) / (new_balance)
    exponent = from_fp(fp_weight_out) / from_fp(fp_weight_in)
    ratio = base ** (exponent) - (1)
    return bn(to_fp(from_fp(fp_balance_in) * (ratio)))


def test_invariant():
    # zero invariant
    with pytest.raises(ZeroInvariant):
        weighted_math.calc_invariant(normalized_weights=[1], balances=[0])

    # two tokens
    normalized_weights = [3 * 10**17, 7 * 10**17]
    balances = [10**18, 12**18]

    result = weighted_math.calc_invariant(normalized_weights=normalized_weights, balances=balances)
    expected_invariant = _calculate_invariant(
        fp_raw_balances=balances, fp_raw_weights=normalized_weights
    )

    assert result == pytest.approx(expected_invariant, rel=MAX_RELATIVE_ERROR)

    # three tokens
    normalized_weights = [3 * 10**17, 2 * 10**17, 5 * 10**17]
    balances = [10 * 10**18, 12 * 10**18, 14 * 10**18]
    result = weighted_math.calc_invariant(normalized_weights=normalized_weights, balances=balances)
    expected_invariant = _calculate_invariant(
        fp_raw_balances=balances, fp_raw_weights=normalized_weights
    )
    assert result == pytest.approx(expected_invariant, rel=MAX_RELATIVE_ERROR)


def test_invariant_of_balanced_pool():
    balance_in = balance_out = 100 * 10**18
    weight_in = 6 * 10**17
    weight_out = 4 * 10**17

    two_token_invariant = weighted_math.calc_two_token_invariant(
        balance_in=balance_in,
        balance_out=balance_out,
        weight_in=weight_in,
        weight_out=weight_out,
    )
    invariant = weighted_math.calc_invariant(
        normalized_weights=[weight_in, weight_out],
        balances=[balance_in, balance_out],
    )

    assert two_token_invariant == invariant
    # Both powers are rounded down by the approximation error margin
    assert invariant <= 100 * 10**18
    assert invariant == pytest.approx(100 * 10**18, rel=1e-13)


def test_invariant_input_validation():
    with pytest.raises(InputLengthMismatch):
        weighted_math.calc_invariant(normalized_weights=[ONE], balances=[ONE, ONE])

    with pytest.raises(pydantic.ValidationError):
        weighted_math.calc_invariant(normalized_weights=[ONE], balances=[-1])


@hypothesis.given(
    balance_in=balances,
    balance_out=balances,
    weight_in=weights,
)
def test_two_token_invariant_matches_vector_form(
    balance_in: int, balance_out: int, weight_in: int
) -> None:
    weight_out = ONE - weight_in
    invariant = weighted_math.calc_two_token_invariant(
        balance_in, balance_out, weight_in, weight_out
    )
    assert invariant > 0
    assert invariant == weighted_math.calc_invariant(
        [weight_in, weight_out],
        [balance_in, balance_out],
    )


def test_swap():
    # simple swap
    token_balance_in = 100 * 10**18
    token_weight_in = 50 * 10**18
    token_balance_out = 100 * 10**18
    token_weight_out = 40 * 10**18
    token_amount_in = 15 * 10**18

    out_amount_math = _calc_out_given_in(
        token_balance_in, token_weight_in, token_balance_out, token_weight_out, token_amount_in
    )

    out_amount_pool = weighted_math.calc_out_given_in(
        balance_in=token_balance_in,
        weight_in=token_weight_in,
        balance_out=token_balance_out,
        weight_out=token_weight_out,
        amount_in=token_amount_in,
    )

    assert out_amount_pool == pytest.approx(expected=out_amount_math, rel=MAX_RELATIVE_ERROR)

    # in, given out
    token_balance_in = 100 * 10**18
    token_weight_in = 50 * 10**18
    token_balance_out = 100 * 10**18
    token_weight_out = 40 * 10**18
    token_amount_out = 15 * 10**18
    in_amount_math = _calc_in_given_out(
        token_balance_in, token_weight_in, token_balance_out, token_weight_out, token_amount_out
    )
    in_amount_pool = weighted_math.calc_in_given_out(
        token_balance_in, token_weight_in, token_balance_out, token_weight_out, token_amount_out
    )

    assert in_amount_pool == pytest.approx(expected=in_amount_math, rel=MAX_RELATIVE_ERROR)


def test_extreme_amount_swaps():
    # outGivenIn - min amount in
    token_balance_in = 100 * 10**18
    token_weight_in = 50 * 10**18
    token_balance_out = 100 * 10**18
    token_weight_out = 40 * 10**18
    token_amount_in = 10 * 10**6  # (MIN AMOUNT = 0.00000000001)

    out_amount_math = _calc_out_given_in(
        token_balance_in, token_weight_in, token_balance_out, token_weight_out, token_amount_in
    )
    out_amount_pool = weighted_math.calc_out_given_in(
        token_balance_in, token_weight_in, token_balance_out, token_weight_out, token_amount_in
    )

    assert out_amount_pool == pytest.approx(expected=out_amount_math, rel=0.1)

    # inGivenOut - min amount out
    token_balance_in = 100 * 10**18
    token_weight_in = 50 * 10**18
    token_balance_out = 100 * 10**18
    token_weight_out = 40 * 10**18
    token_amount_out = 10 * 10**6  # (MIN AMOUNT = 0.00000000001)

    in_amount_math = _calc_in_given_out(
        token_balance_in, token_weight_in, token_balance_out, token_weight_out, token_amount_out
    )
    in_amount_pool = weighted_math.calc_in_given_out(
        token_balance_in, token_weight_in, token_balance_out, token_weight_out, token_amount_out
    )

    assert in_amount_pool == pytest.approx(expected=in_amount_math, rel=0.5)


def test_extreme_weights():
    # outGivenIn - max weights relation
    token_balance_in = 100 * 10**18
    token_weight_in = 1307 * 10**17
    token_balance_out = 100 * 10**18
    token_weight_out = 1 * 10**18
    token_amount_in = 15 * 10**18
    out_amount_math = _calc_out_given_in(
        token_balance_in, token_weight_in, token_balance_out, token_weight_out, token_amount_in
    )
    out_amount_pool = weighted_math.calc_out_given_in(
        token_balance_in, token_weight_in, token_balance_out, token_weight_out, token_amount_in
    )

    assert out_amount_pool == pytest.approx(expected=out_amount_math, rel=MAX_RELATIVE_ERROR)

    # outGivenIn - min weights relation
    # Weight relation = 0.00769

    token_balance_in = 100 * 10**18
    token_weight_in = 769 * 10**13
    token_balance_out = 100 * 10**18
    token_weight_out = 1 * 10**18
    token_amount_in = 15 * 10**18
    out_amount_math = _calc_out_given_in(
        token_balance_in, token_weight_in, token_balance_out, token_weight_out, token_amount_in
    )
    out_amount_pool = weighted_math.calc_out_given_in(
        token_balance_in, token_weight_in, token_balance_out, token_weight_out, token_amount_in
    )

    assert out_amount_pool == pytest.approx(expected=out_amount_math, rel=MAX_RELATIVE_ERROR)


def test_swap_ratio_limits():
    balance = 100 * 10**18
    weight = 5 * 10**17

    max_amount_in = mul_down(balance, MAX_IN_RATIO)
    weighted_math.calc_out_given_in(balance, weight, balance, weight, max_amount_in)
    with pytest.raises(MaxInRatio):
        weighted_math.calc_out_given_in(balance, weight, balance, weight, max_amount_in + 1)

    max_amount_out = mul_down(balance, MAX_OUT_RATIO)
    weighted_math.calc_in_given_out(balance, weight, balance, weight, max_amount_out)
    with pytest.raises(MaxOutRatio):
        weighted_math.calc_in_given_out(balance, weight, balance, weight, max_amount_out + 1)


@hypothesis.given(
    balance_in=balances,
    balance_out=balances,
    weight_in=weights,
    swap_fraction=swap_fractions,
)
def test_swap_does_not_decrease_invariant(
    balance_in: int,
    balance_out: int,
    weight_in: int,
    swap_fraction: int,
) -> None:
    weight_out = ONE - weight_in
    amount_in = mul_down(balance_in, swap_fraction)

    invariant_before = weighted_math.calc_two_token_invariant(
        balance_in, balance_out, weight_in, weight_out
    )
    amount_out = weighted_math.calc_out_given_in(
        balance_in, weight_in, balance_out, weight_out, amount_in
    )
    invariant_after = weighted_math.calc_two_token_invariant(
        balance_in + amount_in, balance_out - amount_out, weight_in, weight_out
    )

    assert invariant_after >= invariant_before


@hypothesis.given(
    balance_in=balances,
    balance_out=balances,
    weight_in=weights,
    swap_fraction=swap_fractions,
)
def test_swap_round_trip(
    balance_in: int,
    balance_out: int,
    weight_in: int,
    swap_fraction: int,
) -> None:
    weight_out = ONE - weight_in
    amount_in = mul_down(balance_in, swap_fraction)

    amount_out = weighted_math.calc_out_given_in(
        balance_in, weight_in, balance_out, weight_out, amount_in
    )
    hypothesis.assume(amount_out <= mul_down(balance_out, MAX_OUT_RATIO))
    recovered_amount_in = weighted_math.calc_in_given_out(
        balance_in, weight_in, balance_out, weight_out, amount_out
    )

    assert recovered_amount_in == pytest.approx(amount_in, rel=1e-9)


def test_spot_price():
    balance = 100 * 10**18
    weight_in = 6 * 10**17
    weight_out = 4 * 10**17

    # (100 / 0.6) / (100 / 0.4) = 0.666...
    assert (
        weighted_math.calc_spot_price(balance, weight_in, balance, weight_out, Rounding.DOWN)
        == 666666666666666666
    )
    assert (
        weighted_math.calc_spot_price(balance, weight_in, balance, weight_out, Rounding.UP)
        == 666666666666666667
    )

    swap_fee = 1 * 10**16
    price_down = weighted_math.calc_spot_price(
        balance, weight_in, balance, weight_out, Rounding.DOWN, swap_fee
    )
    price_up = weighted_math.calc_spot_price(
        balance, weight_in, balance, weight_out, Rounding.UP, swap_fee
    )
    expected = bn(to_fp(Decimal(2) / Decimal(3) / Decimal("0.99")))
    assert price_down <= expected <= price_up
    assert price_up - price_down <= 3


def test_swap_fee_amounts():
    swap_fee = 3 * 10**15

    assert weighted_math.subtract_swap_fee_amount(1000 * 10**18, swap_fee) == 997 * 10**18
    assert weighted_math.add_swap_fee_amount(997 * 10**18, swap_fee) == 1000 * 10**18
    assert weighted_math.subtract_swap_fee_amount(1000 * 10**18, 0) == 1000 * 10**18
