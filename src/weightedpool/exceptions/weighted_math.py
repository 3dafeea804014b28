from weightedpool.exceptions.evm import ErrorKind, EVMRevertError


class WeightedMathError(EVMRevertError):
    """
    Exception raised inside the weighted pool invariant, swap and liquidity formulas.
    """


class ZeroInvariant(WeightedMathError):
    kind = ErrorKind.ZERO_INVARIANT


class MaxInRatio(WeightedMathError):
    """
    The amount in exceeds the permitted fraction of the balance in.
    """

    kind = ErrorKind.MAX_IN_RATIO


class MaxOutRatio(WeightedMathError):
    """
    The amount out exceeds the permitted fraction of the balance out.
    """

    kind = ErrorKind.MAX_OUT_RATIO


class MaxInvariantRatio(WeightedMathError):
    kind = ErrorKind.MAX_INVARIANT_RATIO


class MinInvariantRatio(WeightedMathError):
    kind = ErrorKind.MIN_INVARIANT_RATIO
