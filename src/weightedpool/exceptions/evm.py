from enum import Enum, unique

from weightedpool.exceptions.base import WeightedPoolError


@unique
class ErrorKind(Enum):
    """
    The closed set of failures a fixed point or weighted math computation can produce.
    """

    OVERFLOW = "Overflow"
    UNDERFLOW = "Underflow"
    DIVISION_BY_ZERO = "DivisionByZero"
    INTERNAL = "Internal"
    EXPONENT_OUT_OF_BOUNDS = "ExponentOutOfBounds"
    BASE_OUT_OF_BOUNDS = "BaseOutOfBounds"
    PRODUCT_OUT_OF_BOUNDS = "ProductOutOfBounds"
    ZERO_INVARIANT = "ZeroInvariant"
    MAX_IN_RATIO = "MaxInRatio"
    MAX_OUT_RATIO = "MaxOutRatio"
    MAX_INVARIANT_RATIO = "MaxInvariantRatio"
    MIN_INVARIANT_RATIO = "MinInvariantRatio"


class EVMRevertError(WeightedPoolError):
    """
    Raised when the equivalent on-chain computation would revert.

    Subclasses set `kind`, which identifies the failure independently of the message text.
    """

    kind: ErrorKind

    def __init__(self, error: str | None = None) -> None:
        self.error = error if error is not None else self.kind.value
        super().__init__(message=f"EVM Revert: {self.error}")
