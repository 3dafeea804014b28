from weightedpool.exceptions.evm import ErrorKind, EVMRevertError


class FixedPointError(EVMRevertError):
    """
    Exception raised inside the fixed point arithmetic kernel.
    """


class Overflow(FixedPointError):
    kind = ErrorKind.OVERFLOW


class Underflow(FixedPointError):
    kind = ErrorKind.UNDERFLOW


class DivisionByZero(FixedPointError):
    kind = ErrorKind.DIVISION_BY_ZERO


class InternalError(FixedPointError):
    """
    Raised when inflating a dividend by ONE would exceed the word size.
    """

    kind = ErrorKind.INTERNAL
