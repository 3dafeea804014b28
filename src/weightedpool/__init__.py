from .config import settings
from .logging import logger
from .version import __version__

# isort: split

from .libraries import (
    fixed_point,
    interpolation,
    liquidity_math,
    log_exp_math,
    weighted_math,
)
from .libraries.constants import (
    MAX_IN_RATIO,
    MAX_INVARIANT_RATIO,
    MAX_OUT_RATIO,
    MAX_POW_RELATIVE_ERROR,
    MIN_INVARIANT_RATIO,
    ONE,
)
from .libraries.fixed_point import Rounding
from .libraries.interpolation import (
    interpolate_spot_prices,
    interpolate_weights,
    linear_interpolation,
)
from .libraries.liquidity_math import (
    calc_all_tokens_in_given_exact_bpt_out,
    calc_bpt_in_given_exact_token_out,
    calc_bpt_in_given_exact_tokens_out,
    calc_bpt_out_add_token,
    calc_bpt_out_given_exact_token_in,
    calc_bpt_out_given_exact_tokens_in,
    calc_token_in_given_exact_bpt_out,
    calc_token_out_given_exact_bpt_in,
    calc_tokens_out_given_exact_bpt_in,
)
from .libraries.weighted_math import (
    calc_in_given_out,
    calc_invariant,
    calc_out_given_in,
    calc_spot_price,
    calc_two_token_invariant,
)

__all__ = (
    "MAX_INVARIANT_RATIO",
    "MAX_IN_RATIO",
    "MAX_OUT_RATIO",
    "MAX_POW_RELATIVE_ERROR",
    "MIN_INVARIANT_RATIO",
    "ONE",
    "Rounding",
    "__version__",
    "calc_all_tokens_in_given_exact_bpt_out",
    "calc_bpt_in_given_exact_token_out",
    "calc_bpt_in_given_exact_tokens_out",
    "calc_bpt_out_add_token",
    "calc_bpt_out_given_exact_token_in",
    "calc_bpt_out_given_exact_tokens_in",
    "calc_in_given_out",
    "calc_invariant",
    "calc_out_given_in",
    "calc_spot_price",
    "calc_token_in_given_exact_bpt_out",
    "calc_token_out_given_exact_bpt_in",
    "calc_tokens_out_given_exact_bpt_in",
    "calc_two_token_invariant",
    "fixed_point",
    "interpolate_spot_prices",
    "interpolate_weights",
    "interpolation",
    "linear_interpolation",
    "liquidity_math",
    "log_exp_math",
    "logger",
    "settings",
    "weighted_math",
)
