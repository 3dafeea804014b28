from typing import Annotated

from pydantic import Field

from weightedpool.constants import MAX_UINT256, MIN_UINT256

# Unsigned 256 bit words. Strict mode rejects floats, bools and numeric strings.
type ValidatedUint256 = Annotated[int, Field(strict=True, ge=MIN_UINT256, le=MAX_UINT256)]
type ValidatedUint256NonZero = Annotated[int, Field(strict=True, gt=MIN_UINT256, le=MAX_UINT256)]
