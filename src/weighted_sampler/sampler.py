"""Weighted sampler over a fixed table of outcomes and probabilities."""

import bisect
import logging
import random as _random
from collections import Counter
from collections.abc import Callable, Hashable, Sequence

import numpy as np
import numpy.typing as npt

from weighted_sampler.errors import (
    EmptyTableError,
    InvalidWeightError,
    LengthMismatchError,
    MissingTableError,
    ProbabilitySumError,
)
from weighted_sampler.stats import DistributionTest, chi_squared_test
from weighted_sampler.summation import compensated_sum, prefix_sums

logger = logging.getLogger(__name__)

REQUIRED_TOTAL = np.float32(1.0)
MARGIN = np.float32(0.0001)

RandomSource = Callable[[], float]


class WeightedSampler:
    """Draws outcomes with the probabilities they were configured with.

    The outcome and weight tables are copied on construction and never
    change afterwards. Sampling maps one uniform value in ``[0.0, 1.0)`` onto
    the cumulative distribution of the weights, so ``draw(u)`` is a pure
    function of ``u`` and safe to call from any number of threads.

    Weights use single-precision arithmetic throughout. Their compensated sum
    must be within ``MARGIN`` of 1.0.

    Example:
        >>> sampler = WeightedSampler([1, 2, 3], [0.2, 0.3, 0.5])
        >>> sampler.draw(0.1)
        1
        >>> sampler.draw(0.6)
        3
    """

    def __init__(
        self,
        outcomes: Sequence[Hashable] | None,
        weights: Sequence[float] | npt.ArrayLike | None,
        random: RandomSource | None = None,
    ) -> None:
        """Validate the table and precompute the cumulative distribution.

        Args:
            outcomes: Values returned by ``draw``, paired with ``weights`` by
                position. Labels may repeat.
            weights: Probability of each outcome. Must be finite, non-negative
                and add up to 1.0 within ``MARGIN``.
            random: Zero-argument callable returning a uniform float in
                ``[0.0, 1.0)``. Used when ``draw`` is called without a value.

        Raises:
            ConfigurationError: One of its subclasses, naming the violated
                constraint.
        """
        if outcomes is None:
            raise MissingTableError("outcomes")
        if weights is None:
            raise MissingTableError("weights")
        if len(outcomes) == 0:
            raise EmptyTableError("outcomes")
        if len(weights) == 0:
            raise EmptyTableError("weights")
        if len(outcomes) != len(weights):
            raise LengthMismatchError(len(outcomes), len(weights))

        table = np.array(weights, dtype=np.float32)
        for index, value in enumerate(table):
            if not np.isfinite(value) or value < 0:
                logger.debug("Rejecting weight %s at index %d", value, index)
                raise InvalidWeightError(index, float(value))

        total = compensated_sum(table)
        # Written so that a NaN total from an overflowing sum fails as well.
        if not abs(REQUIRED_TOTAL - total) <= MARGIN:
            logger.debug("Rejecting weights summing to %s", total)
            raise ProbabilitySumError(float(total), float(MARGIN))

        table.flags.writeable = False
        cdf = prefix_sums(table)
        cdf.flags.writeable = False

        self._outcomes = tuple(outcomes)
        self._weights = table
        self._cdf = cdf
        # Python floats hold float32 values exactly, so bisect compares
        # against the same boundaries the array does.
        self._bounds = tuple(cdf.tolist())
        self._random = random if random is not None else _random.Random().random

        logger.debug(
            "Built sampler over %d outcomes, weights sum to %s, final cdf %s",
            len(self._outcomes),
            total,
            cdf[-1],
        )

    def draw(self, uniform_sample: float | None = None) -> Hashable:
        """Return the outcome whose cdf range contains ``uniform_sample``.

        Picks the first index ``i`` with ``uniform_sample <= cdf[i]``. When
        the value lies above the final cdf entry, which rounding can leave
        slightly under 1.0, the last outcome is returned.

        If ``uniform_sample`` is omitted one value is taken from the random
        source.
        """
        if uniform_sample is None:
            uniform_sample = self._random()
        index = bisect.bisect_left(self._bounds, uniform_sample)
        if index == len(self._bounds):
            index -= 1
        return self._outcomes[index]

    def draw_many(self, count: int) -> list[Hashable]:
        """Draw ``count`` outcomes from the random source."""
        return [self.draw() for _ in range(count)]

    def test_distribution(self, num_samples: int) -> DistributionTest:
        """Sample ``num_samples`` times and run a chi-squared test on the counts."""
        counts = Counter(self.draw_many(num_samples))
        return chi_squared_test(counts, self._outcomes, self._weights)

    @property
    def outcomes(self) -> list[Hashable]:
        return list(self._outcomes)

    @property
    def weights(self) -> npt.NDArray[np.float32]:
        return self._weights.copy()

    @property
    def cumulative_distribution(self) -> tuple[float, ...]:
        return self._bounds

    def __len__(self) -> int:
        return len(self._outcomes)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, WeightedSampler):
            return NotImplemented
        # The cdf follows from the weights and the random source is incidental.
        return self._outcomes == other._outcomes and bool(
            np.array_equal(self._weights, other._weights)
        )

    def __hash__(self) -> int:
        return hash((self._outcomes, tuple(self._weights.tolist())))

    def __repr__(self) -> str:
        weights = ", ".join(str(w) for w in self._weights)
        return f"WeightedSampler(outcomes={list(self._outcomes)!r}, weights=[{weights}])"
