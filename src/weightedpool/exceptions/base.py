class WeightedPoolError(Exception):
    """
    Base exception used as the parent class for all exceptions raised by this package.

    Calling code should catch `WeightedPoolError` and derived classes separately before general
    exceptions, e.g.:

    ```
    try:
        weightedpool.some_function()
    except SpecificWeightedPoolError:
        ... # handle a specific exception
    except WeightedPoolError:
        ... # handle non-specific weightedpool exception
    except Exception:
        ... # handle exceptions raised by 3rd party dependencies or Python built-ins
    ```

    An optional string-formatted message may be attached to the exception and retrieved by accessing
    the `.message` attribute.
    """

    message: str | None = None

    def __init__(self, message: str | None = None) -> None:
        if message:
            self.message = message
            super().__init__(message)


class WeightedPoolValueError(WeightedPoolError): ...


class InputLengthMismatch(WeightedPoolValueError):
    """
    Raised when the token vectors passed to a multi-token calculation have different lengths.
    """

    def __init__(self, lengths: tuple[int, ...]) -> None:
        self.lengths = lengths
        super().__init__(message=f"Input lengths do not match: {lengths}")
