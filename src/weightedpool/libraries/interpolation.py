"""
Linear interpolation between fixed point values, used for the gradual weight changes of a
liquidity bootstrapping pool (LBP).
"""

from collections.abc import Sequence

from pydantic import validate_call

from weightedpool.libraries.fixed_point import Rounding
from weightedpool.libraries.input_helpers import ensure_input_length_match
from weightedpool.libraries.weighted_math import calc_spot_price
from weightedpool.logging import logger
from weightedpool.validation.evm_values import ValidatedUint256


@validate_call
def linear_interpolation(
    x: ValidatedUint256,
    y: ValidatedUint256,
    i: ValidatedUint256,
    n: ValidatedUint256,
) -> int:
    """
    Interpolate from `x` (step 0) to `y` (step `n`), returning the value at step `i`.

    The result moves toward `y` by the fraction i/n of the distance, rounding toward `x`. Steps
    at or past the end of the schedule return `y` exactly.
    """

    if i >= n:
        if i > n:
            logger.debug(f"Step {i} is past the end of the schedule ({n} steps), clamping")
        return y

    # The intermediate product uses full precision and the quotient is below |y - x|, so the result
    # always lies between x and y.
    if y >= x:
        return x + ((y - x) * i) // n
    return x - ((x - y) * i) // n


@validate_call
def interpolate_weights(
    start_weights: Sequence[ValidatedUint256],
    end_weights: Sequence[ValidatedUint256],
    i: ValidatedUint256,
    n: ValidatedUint256,
) -> list[int]:
    """
    Calculate the weights at step `i` of a gradual weight change lasting `n` steps.

    Each weight is interpolated independently. If the start and end weights each sum to ONE, the
    interpolated weights sum to ONE within a few units of rounding.
    """

    ensure_input_length_match(start_weights, end_weights)

    return [
        linear_interpolation(start_weight, end_weight, i, n)
        for start_weight, end_weight in zip(start_weights, end_weights, strict=True)
    ]


@validate_call
def interpolate_spot_prices(
    balance_in: ValidatedUint256,
    balance_out: ValidatedUint256,
    start_weights: tuple[ValidatedUint256, ValidatedUint256],
    end_weights: tuple[ValidatedUint256, ValidatedUint256],
    n: ValidatedUint256,
    rounding: Rounding = Rounding.DOWN,
) -> list[int]:
    """
    Sample the spot price of a two token pool at every step from 0 to `n` of a gradual weight
    change, with fixed balances.

    Weights are given as (weight in, weight out).
    """

    spot_prices = []
    for i in range(n + 1):
        weight_in, weight_out = interpolate_weights(start_weights, end_weights, i, n)
        spot_prices.append(
            calc_spot_price(
                balance_in=balance_in,
                weight_in=weight_in,
                balance_out=balance_out,
                weight_out=weight_out,
                rounding=rounding,
            )
        )
    return spot_prices
