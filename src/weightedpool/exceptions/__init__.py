from weightedpool.exceptions.base import (
    InputLengthMismatch,
    WeightedPoolError,
    WeightedPoolValueError,
)
from weightedpool.exceptions.evm import ErrorKind, EVMRevertError
from weightedpool.exceptions.fixed_point import (
    DivisionByZero,
    FixedPointError,
    InternalError,
    Overflow,
    Underflow,
)
from weightedpool.exceptions.log_exp_math import (
    BaseOutOfBounds,
    ExponentOutOfBounds,
    LogExpMathError,
    ProductOutOfBounds,
)
from weightedpool.exceptions.weighted_math import (
    MaxInRatio,
    MaxInvariantRatio,
    MaxOutRatio,
    MinInvariantRatio,
    WeightedMathError,
    ZeroInvariant,
)

from . import base, evm, fixed_point, log_exp_math, weighted_math

__all__ = (
    "BaseOutOfBounds",
    "DivisionByZero",
    "EVMRevertError",
    "ErrorKind",
    "ExponentOutOfBounds",
    "FixedPointError",
    "InputLengthMismatch",
    "InternalError",
    "LogExpMathError",
    "MaxInRatio",
    "MaxInvariantRatio",
    "MaxOutRatio",
    "MinInvariantRatio",
    "Overflow",
    "ProductOutOfBounds",
    "Underflow",
    "WeightedMathError",
    "WeightedPoolError",
    "WeightedPoolValueError",
    "ZeroInvariant",
    "base",
    "evm",
    "fixed_point",
    "log_exp_math",
    "weighted_math",
)
