from collections.abc import Sequence

from pydantic import validate_call

from weightedpool.exceptions import MaxInRatio, MaxOutRatio, ZeroInvariant
from weightedpool.libraries.constants import MAX_IN_RATIO, MAX_OUT_RATIO, ONE
from weightedpool.libraries.fixed_point import (
    Rounding,
    add,
    complement,
    div,
    div_down,
    div_up,
    mul_down,
    mul_up,
    pow_down,
    pow_up,
    sub,
)
from weightedpool.libraries.input_helpers import ensure_input_length_match
from weightedpool.validation.evm_values import ValidatedUint256

# The weight vector passed to these functions is expected to sum to ONE. This is not enforced:
# weights with a different sum give a slightly different result from the exact formula, with the
# error depending on the formula.


@validate_call
def calc_invariant(
    normalized_weights: Sequence[ValidatedUint256],
    balances: Sequence[ValidatedUint256],
) -> int:
    """
    Calculate the invariant of a weighted pool.

    invariant = Π balance_i ^ weight_i, folded from ONE and rounded down at every step.
    """

    ensure_input_length_match(normalized_weights, balances)

    invariant = ONE
    for weight, balance in zip(normalized_weights, balances, strict=True):
        invariant = mul_down(invariant, pow_down(balance, weight))

    if invariant == 0:
        raise ZeroInvariant

    return invariant


@validate_call
def calc_two_token_invariant(
    balance_in: ValidatedUint256,
    balance_out: ValidatedUint256,
    weight_in: ValidatedUint256,
    weight_out: ValidatedUint256,
) -> int:
    """
    Calculate the invariant of a two token pool. Identical to `calc_invariant` with the inputs
    ordered [in, out].
    """

    return calc_invariant(
        normalized_weights=(weight_in, weight_out),
        balances=(balance_in, balance_out),
    )


@validate_call
def calc_out_given_in(
    balance_in: ValidatedUint256,
    weight_in: ValidatedUint256,
    balance_out: ValidatedUint256,
    weight_out: ValidatedUint256,
    amount_in: ValidatedUint256,
) -> int:
    """
    Computes how many tokens can be taken out of a pool if `amount_in` are sent, given the
    current balances and weights.
    """

    # ********************************************************************************************
    # outGivenIn                                                                                //
    # aO = amountOut                                                                            //
    # bO = balanceOut                                                                           //
    # bI = balanceIn              /      /            bI             \    (wI / wO) \           //
    # aI = amountIn    aO = bO * |  1 - | --------------------------  | ^            |          //
    # wI = weightIn               \      \       ( bI + aI )         /              /           //
    # wO = weightOut                                                                            //
    # *******************************************************************************************/

    # Amount out, so we round down overall.

    # The multiplication rounds down, and the subtrahend (power) rounds up (so the base rounds up
    # too). Because bI / (bI + aI) <= 1, the exponent rounds down.

    if amount_in > mul_down(balance_in, MAX_IN_RATIO):
        raise MaxInRatio

    denominator = add(balance_in, amount_in)
    base = div_up(balance_in, denominator)
    exponent = div_down(weight_in, weight_out)
    power = pow_up(base, exponent)

    return mul_down(balance_out, complement(power))


@validate_call
def calc_in_given_out(
    balance_in: ValidatedUint256,
    weight_in: ValidatedUint256,
    balance_out: ValidatedUint256,
    weight_out: ValidatedUint256,
    amount_out: ValidatedUint256,
) -> int:
    """
    Computes how many tokens must be sent to a pool in order to take `amount_out`, given the
    current balances and weights.
    """

    # ********************************************************************************************
    # inGivenOut                                                                                //
    # aO = amountOut                                                                            //
    # bO = balanceOut                                                                           //
    # bI = balanceIn              /  /            bO             \    (wO / wI)      \          //
    # aI = amountIn    aI = bI * |  | --------------------------  | ^            - 1  |         //
    # wI = weightIn               \  \       ( bO - aO )         /                   /          //
    # wO = weightOut                                                                            //
    # *******************************************************************************************/

    # Amount in, so we round up overall.

    # The multiplication rounds up, and the power rounds up (so the base rounds up too).
    # Because bO / (bO - aO) >= 1, the exponent rounds up.

    if amount_out > mul_down(balance_out, MAX_OUT_RATIO):
        raise MaxOutRatio

    base = div_up(balance_out, sub(balance_out, amount_out))
    exponent = div_up(weight_out, weight_in)
    power = pow_up(base, exponent)

    # The base is at least one and the power rounds up, so the power is always above one
    ratio = sub(power, ONE)
    return mul_up(balance_in, ratio)


@validate_call
def calc_spot_price(
    balance_in: ValidatedUint256,
    weight_in: ValidatedUint256,
    balance_out: ValidatedUint256,
    weight_out: ValidatedUint256,
    rounding: Rounding = Rounding.DOWN,
    swap_fee_percentage: ValidatedUint256 = 0,
) -> int:
    """
    Calculate the spot price of the out token, quoted in units of the in token.

    The result is rounded in the direction given by `rounding`: the numerator and the final
    divisions follow it, and the denominator is rounded the opposite way.
    """

    # **********************************************************************************************
    # calcSpotPrice                                                                               //
    # sP = spotPrice                                                                              //
    # bI = balanceIn                  ( bI / wI )         1                                       //
    # bO = balanceOut           sP =  -----------  *  ----------                                  //
    # wI = weightIn                   ( bO / wO )     ( 1 - sF )                                  //
    # wO = weightOut                                                                              //
    # sF = swapFee                                                                                //
    # *********************************************************************************************/

    opposite = Rounding.UP if rounding is Rounding.DOWN else Rounding.DOWN

    numerator = div(balance_in, weight_in, rounding)
    denominator = div(balance_out, weight_out, opposite)
    spot_price = div(numerator, denominator, rounding)

    if swap_fee_percentage == 0:
        return spot_price
    return div(spot_price, complement(swap_fee_percentage), rounding)


def subtract_swap_fee_amount(amount: int, fee_percentage: int) -> int:
    """
    Subtracts swap fee amount from `amount`, returning a lower value.
    """

    # This returns amount - fee amount, so we round up (favoring a higher fee amount).
    fee_amount = mul_up(amount, fee_percentage)
    return sub(amount, fee_amount)


def add_swap_fee_amount(amount: int, fee_percentage: int) -> int:
    """
    Adds the swap fee to `amount`, returning the gross amount whose net after fees is `amount`.
    """

    # This returns amount + fee amount, so we round up (favoring a higher fee amount).
    return div_up(amount, complement(fee_percentage))
