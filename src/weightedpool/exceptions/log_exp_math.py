from weightedpool.exceptions.evm import ErrorKind, EVMRevertError


class LogExpMathError(EVMRevertError):
    """
    Exception raised inside the exponential and logarithm approximations.
    """


class ExponentOutOfBounds(LogExpMathError):
    kind = ErrorKind.EXPONENT_OUT_OF_BOUNDS


class BaseOutOfBounds(LogExpMathError):
    kind = ErrorKind.BASE_OUT_OF_BOUNDS


class ProductOutOfBounds(LogExpMathError):
    """
    Raised when y * ln(x) falls outside the domain of the natural exponential.
    """

    kind = ErrorKind.PRODUCT_OUT_OF_BOUNDS
