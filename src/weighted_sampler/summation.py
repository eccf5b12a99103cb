"""Error-compensated summation in single precision."""

from collections.abc import Iterable

import numpy as np
import numpy.typing as npt


def compensated_sum(values: Iterable[float]) -> np.float32:
    """Sum ``values`` with Kahan compensation, rounding every step to float32.

    The running ``error`` holds the low-order bits lost by the previous
    addition and is subtracted from the next value before it is added.

    Overflow is not reported here: it leaves ``inf`` or ``nan`` in the result,
    which callers must reject.
    """
    total = np.float32(0.0)
    error = np.float32(0.0)
    with np.errstate(over="ignore", invalid="ignore"):
        for value in values:
            corrected = np.float32(value) - error
            new_total = total + corrected
            error = (new_total - total) - corrected
            total = new_total
    return total


def prefix_sums(values: npt.NDArray[np.float32]) -> npt.NDArray[np.float32]:
    """Return the compensated sum of ``values[: i + 1]`` for every ``i``.

    Each prefix is summed from index 0 so that rounding error is bounded per
    entry instead of accumulating along the array.
    """
    return np.array(
        [compensated_sum(values[: i + 1]) for i in range(len(values))],
        dtype=np.float32,
    )
