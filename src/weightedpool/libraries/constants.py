ONE = 1 * 10**18
TWO = 2 * ONE
FOUR = 4 * ONE

# Bound on the relative error of the fixed point power approximation, in parts per ONE. Both
# rounding wrappers widen the raw result by this margin.
MAX_POW_RELATIVE_ERROR = 10000

# Pool limits that arise from limitations in the fixed point power function (and the imposed 1:100
# maximum weight ratio).

# Swap limits: amounts swapped may not be larger than this percentage of total balance.
MAX_IN_RATIO = 3 * 10**17
MAX_OUT_RATIO = 3 * 10**17

# Invariant growth limit: non-proportional joins cannot cause the invariant to increase by more than
# this ratio.
MAX_INVARIANT_RATIO = 3 * ONE
# Invariant shrink limit: non-proportional exits cannot cause the invariant to decrease by less than
# this ratio.
MIN_INVARIANT_RATIO = 7 * 10**17
