from collections.abc import Sequence

from weightedpool.exceptions import InputLengthMismatch


def ensure_input_length_match(*arrays: Sequence[int]) -> None:
    lengths = tuple(len(array) for array in arrays)
    if len(set(lengths)) != 1:
        raise InputLengthMismatch(lengths)
