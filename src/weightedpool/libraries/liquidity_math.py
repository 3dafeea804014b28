"""
BPT (pool token) amounts for joins and exits of a weighted pool.

Every function rounds in favor of the pool: BPT minted and tokens paid out round down, BPT burned
and tokens taken in round up. Non-proportional joins and exits are treated as a proportional part
plus an implicit swap, and only the swap part (the taxable amount) is charged the swap fee.
"""

from collections.abc import Sequence

from pydantic import validate_call

from weightedpool.exceptions import MaxInvariantRatio, MinInvariantRatio
from weightedpool.libraries.constants import MAX_INVARIANT_RATIO, MIN_INVARIANT_RATIO, ONE
from weightedpool.libraries.fixed_point import (
    add,
    complement,
    div_down,
    div_up,
    mul_down,
    mul_up,
    pow_down,
    pow_up,
    sub,
)
from weightedpool.libraries.input_helpers import ensure_input_length_match
from weightedpool.logging import logger
from weightedpool.validation.evm_values import ValidatedUint256, ValidatedUint256NonZero


@validate_call
def calc_bpt_out_given_exact_tokens_in(
    balances: Sequence[ValidatedUint256NonZero],
    normalized_weights: Sequence[ValidatedUint256],
    amounts_in: Sequence[ValidatedUint256],
    bpt_total_supply: ValidatedUint256,
    swap_fee_percentage: ValidatedUint256,
) -> int:
    # BPT out, so we round down overall.

    ensure_input_length_match(balances, normalized_weights, amounts_in)

    balance_ratios_with_fee = [
        div_down(add(balance, amount_in), balance)
        for balance, amount_in in zip(balances, amounts_in, strict=True)
    ]

    invariant_ratio_with_fees = 0
    for ratio, weight in zip(balance_ratios_with_fee, normalized_weights, strict=True):
        invariant_ratio_with_fees = add(invariant_ratio_with_fees, mul_down(ratio, weight))

    invariant_ratio = ONE
    for balance, weight, amount_in, balance_ratio_with_fee in zip(
        balances, normalized_weights, amounts_in, balance_ratios_with_fee, strict=True
    ):
        if balance_ratio_with_fee > invariant_ratio_with_fees:
            # This token grows faster than the pool as a whole. The excess over proportional growth
            # is swapped for the other tokens, and pays the swap fee.
            amount_in_without_fee = _remove_fee_from_taxable_excess(
                amount=amount_in,
                non_taxable_amount=_non_taxable_join_amount(balance, invariant_ratio_with_fees),
                swap_fee_percentage=swap_fee_percentage,
            )
        else:
            amount_in_without_fee = amount_in

        if amount_in_without_fee == 0:
            # The balance ratio would be exactly one, leaving the invariant ratio unchanged
            continue

        balance_ratio = div_down(add(balance, amount_in_without_fee), balance)
        invariant_ratio = mul_down(invariant_ratio, pow_down(balance_ratio, weight))

    return _bpt_out_for_invariant_ratio(bpt_total_supply, invariant_ratio)


@validate_call
def calc_bpt_out_given_exact_token_in(
    balance: ValidatedUint256NonZero,
    normalized_weight: ValidatedUint256,
    amount_in: ValidatedUint256,
    bpt_total_supply: ValidatedUint256,
    swap_fee_percentage: ValidatedUint256,
) -> int:
    # BPT out, so we round down overall.

    balance_ratio_with_fee = div_down(add(balance, amount_in), balance)

    # The other tokens do not change, so they contribute their combined weight (the complement of
    # this token's weight) with a ratio of one.
    invariant_ratio_with_fees = add(
        mul_down(balance_ratio_with_fee, normalized_weight), complement(normalized_weight)
    )

    if balance_ratio_with_fee > invariant_ratio_with_fees:
        amount_in_without_fee = _remove_fee_from_taxable_excess(
            amount=amount_in,
            non_taxable_amount=_non_taxable_join_amount(balance, invariant_ratio_with_fees),
            swap_fee_percentage=swap_fee_percentage,
        )
    else:
        amount_in_without_fee = amount_in

    if amount_in_without_fee == 0:
        logger.debug("Single token join with no fee-free amount, no BPT minted")
        return 0

    balance_ratio = div_down(add(balance, amount_in_without_fee), balance)
    invariant_ratio = pow_down(balance_ratio, normalized_weight)

    return _bpt_out_for_invariant_ratio(bpt_total_supply, invariant_ratio)


@validate_call
def calc_bpt_in_given_exact_tokens_out(
    balances: Sequence[ValidatedUint256NonZero],
    normalized_weights: Sequence[ValidatedUint256],
    amounts_out: Sequence[ValidatedUint256],
    bpt_total_supply: ValidatedUint256,
    swap_fee_percentage: ValidatedUint256,
) -> int:
    # BPT in, so we round up overall.

    ensure_input_length_match(balances, normalized_weights, amounts_out)

    balance_ratios_without_fee = [
        div_up(sub(balance, amount_out), balance)
        for balance, amount_out in zip(balances, amounts_out, strict=True)
    ]

    invariant_ratio_without_fees = 0
    for ratio, weight in zip(balance_ratios_without_fee, normalized_weights, strict=True):
        invariant_ratio_without_fees = add(invariant_ratio_without_fees, mul_up(ratio, weight))

    invariant_ratio = ONE
    for balance, weight, amount_out, balance_ratio_without_fee in zip(
        balances, normalized_weights, amounts_out, balance_ratios_without_fee, strict=True
    ):
        # Swap fees are typically charged on 'token in', but there is no 'token in' here, so the
        # fee is applied to 'token out'. This results in slightly larger price impact.
        if invariant_ratio_without_fees > balance_ratio_without_fee:
            amount_out_with_fee = _add_fee_to_taxable_excess(
                amount=amount_out,
                non_taxable_amount=mul_down(balance, complement(invariant_ratio_without_fees)),
                swap_fee_percentage=swap_fee_percentage,
            )
        else:
            amount_out_with_fee = amount_out

        if amount_out_with_fee == 0:
            continue

        balance_ratio = div_down(sub(balance, amount_out_with_fee), balance)
        invariant_ratio = mul_down(invariant_ratio, pow_down(balance_ratio, weight))

    return mul_up(bpt_total_supply, complement(invariant_ratio))


@validate_call
def calc_bpt_in_given_exact_token_out(
    balance: ValidatedUint256NonZero,
    normalized_weight: ValidatedUint256,
    amount_out: ValidatedUint256,
    bpt_total_supply: ValidatedUint256,
    swap_fee_percentage: ValidatedUint256,
) -> int:
    # BPT in, so we round up overall.

    balance_ratio_without_fee = div_up(sub(balance, amount_out), balance)
    invariant_ratio_without_fees = add(
        mul_up(balance_ratio_without_fee, normalized_weight), complement(normalized_weight)
    )

    if invariant_ratio_without_fees > balance_ratio_without_fee:
        amount_out_with_fee = _add_fee_to_taxable_excess(
            amount=amount_out,
            non_taxable_amount=mul_down(balance, complement(invariant_ratio_without_fees)),
            swap_fee_percentage=swap_fee_percentage,
        )
    else:
        amount_out_with_fee = amount_out

    if amount_out_with_fee == 0:
        return 0

    balance_ratio = div_down(sub(balance, amount_out_with_fee), balance)
    invariant_ratio = pow_down(balance_ratio, normalized_weight)

    return mul_up(bpt_total_supply, complement(invariant_ratio))


@validate_call
def calc_token_in_given_exact_bpt_out(
    balance: ValidatedUint256,
    normalized_weight: ValidatedUint256NonZero,
    bpt_amount_out: ValidatedUint256,
    bpt_total_supply: ValidatedUint256,
    swap_fee_percentage: ValidatedUint256,
) -> int:
    """
    Calculate the amount of a single token required to mint exactly `bpt_amount_out`.
    """

    # *****************************************************************************************
    # tokenInForExactBPTOut                                                                  //
    # a = amountIn                                                                           //
    # b = balance                      /  /    totalBPT + bptOut      \    (1 / w)       \   //
    # bptOut = bptAmountOut   a = b * |  | --------------------------  | ^          - 1  |   //
    # bpt = totalBPT                   \  \       totalBPT            /                  /   //
    # w = weight                                                                             //
    # *****************************************************************************************/

    # Token in, so we round up overall.

    # The factor by which the invariant grows after minting `bpt_amount_out`
    invariant_ratio = div_up(add(bpt_total_supply, bpt_amount_out), bpt_total_supply)
    if invariant_ratio > MAX_INVARIANT_RATIO:
        raise MaxInvariantRatio

    # The token balance must grow by this factor to reach the new invariant
    balance_ratio = pow_up(invariant_ratio, div_up(ONE, normalized_weight))

    amount_in_without_fee = mul_up(balance, sub(balance_ratio, ONE))

    # The part of the deposit beyond this token's share of proportional growth is swapped for the
    # other tokens, and pays the swap fee.
    taxable_amount = mul_up(amount_in_without_fee, complement(normalized_weight))
    non_taxable_amount = sub(amount_in_without_fee, taxable_amount)

    taxable_amount_plus_fees = div_up(taxable_amount, complement(swap_fee_percentage))

    return add(non_taxable_amount, taxable_amount_plus_fees)


@validate_call
def calc_token_out_given_exact_bpt_in(
    balance: ValidatedUint256,
    normalized_weight: ValidatedUint256NonZero,
    bpt_amount_in: ValidatedUint256,
    bpt_total_supply: ValidatedUint256,
    swap_fee_percentage: ValidatedUint256,
) -> int:
    """
    Calculate the amount of a single token paid out for burning exactly `bpt_amount_in`.
    """

    # *****************************************************************************************
    # exactBPTInForTokenOut                                                                  //
    # a = amountOut                                                                          //
    # b = balance                     /      /    totalBPT - bptIn       \    (1 / w)  \     //
    # bptIn = bptAmountIn    a = b * |  1 - | --------------------------  | ^           |    //
    # bpt = totalBPT                  \      \       totalBPT            /             /     //
    # w = weight                                                                             //
    # *****************************************************************************************/

    # Token out, so we round down overall. The multiplication rounds down, but the power rounds up
    # (so the base rounds up). Because (totalBPT - bptIn) / totalBPT <= 1, the exponent rounds down.

    # The factor by which the invariant shrinks after burning `bpt_amount_in`
    invariant_ratio = div_up(sub(bpt_total_supply, bpt_amount_in), bpt_total_supply)
    if invariant_ratio < MIN_INVARIANT_RATIO:
        raise MinInvariantRatio

    # The token balance must shrink by this factor to reach the new invariant
    balance_ratio = pow_up(invariant_ratio, div_down(ONE, normalized_weight))

    # Rounding up can push balance_ratio above one, which the complement absorbs
    amount_out_without_fee = mul_down(balance, complement(balance_ratio))

    # Swap fees are typically charged on 'token in', but there is no 'token in' here, so the fee is
    # applied to 'token out'. Fees are rounded up.
    taxable_amount = mul_up(amount_out_without_fee, complement(normalized_weight))
    non_taxable_amount = sub(amount_out_without_fee, taxable_amount)

    taxable_amount_minus_fees = mul_down(taxable_amount, complement(swap_fee_percentage))

    return add(non_taxable_amount, taxable_amount_minus_fees)


@validate_call
def calc_all_tokens_in_given_exact_bpt_out(
    balances: Sequence[ValidatedUint256],
    bpt_amount_out: ValidatedUint256,
    total_bpt: ValidatedUint256,
) -> list[int]:
    """
    Calculate the token amounts required for a proportional join minting `bpt_amount_out`.
    """

    # *************************************************************************************
    # tokensInForExactBptOut                                                             //
    # (per token)                                                                        //
    # aI = amountIn                   /   bptOut   \                                     //
    # b = balance           aI = b * | ------------ |                                    //
    # bptOut = bptAmountOut           \  totalBPT  /                                     //
    # bpt = totalBPT                                                                     //
    # *************************************************************************************/

    # Tokens in, so we round up overall.
    bpt_ratio = div_up(bpt_amount_out, total_bpt)
    return [mul_up(balance, bpt_ratio) for balance in balances]


@validate_call
def calc_tokens_out_given_exact_bpt_in(
    balances: Sequence[ValidatedUint256],
    bpt_amount_in: ValidatedUint256,
    total_bpt: ValidatedUint256,
) -> list[int]:
    """
    Calculate the token amounts paid out by a proportional exit burning `bpt_amount_in`.
    """

    # *************************************************************************************
    # exactBPTInForTokensOut                                                             //
    # (per token)                                                                        //
    # aO = amountOut                  /        bptIn         \                           //
    # b = balance           a0 = b * | ---------------------  |                          //
    # bptIn = bptAmountIn             \       totalBPT       /                           //
    # bpt = totalBPT                                                                     //
    # *************************************************************************************/

    # Since we're computing an amount out, we round down overall. This means rounding down on both
    # the multiplication and division.
    bpt_ratio = div_down(bpt_amount_in, total_bpt)
    return [mul_down(balance, bpt_ratio) for balance in balances]


@validate_call
def calc_bpt_out_add_token(
    total_supply: ValidatedUint256,
    normalized_weight: ValidatedUint256,
) -> int:
    """
    Calculate the BPT minted when a token with `normalized_weight` is added to the pool.

    `normalized_weight` is the new token's weight in the pool after the addition.
    """

    # The BPT equivalent of the new token follows the growth in the sum of the weights: a token that
    # makes up 50% of the pool after the addition should receive 50% of the new BPT supply.
    #
    # weightSumRatio = totalWeight / (totalWeight - newTokenWeight), with totalWeight = ONE
    weight_sum_ratio = div_down(ONE, sub(ONE, normalized_weight))

    # toMint = totalSupply * (weightSumRatio - 1)
    return mul_down(total_supply, sub(weight_sum_ratio, ONE))


def _non_taxable_join_amount(balance: int, invariant_ratio_with_fees: int) -> int:
    # The aggregate ratio can fall below ONE through rounding, particularly when the weights do not
    # sum to exactly ONE
    if invariant_ratio_with_fees > ONE:
        return mul_down(balance, invariant_ratio_with_fees - ONE)
    return 0


def _remove_fee_from_taxable_excess(
    amount: int,
    non_taxable_amount: int,
    swap_fee_percentage: int,
) -> int:
    swap_fee = mul_up(sub(amount, non_taxable_amount), swap_fee_percentage)
    return sub(amount, swap_fee)


def _add_fee_to_taxable_excess(
    amount: int,
    non_taxable_amount: int,
    swap_fee_percentage: int,
) -> int:
    taxable_amount = sub(amount, non_taxable_amount)
    return add(non_taxable_amount, div_up(taxable_amount, complement(swap_fee_percentage)))


def _bpt_out_for_invariant_ratio(bpt_total_supply: int, invariant_ratio: int) -> int:
    if invariant_ratio > ONE:
        return mul_down(bpt_total_supply, invariant_ratio - ONE)

    logger.debug("Invariant ratio did not grow, no BPT minted")
    return 0
