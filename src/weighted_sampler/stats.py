"""Goodness-of-fit checks for observed draw counts."""

import logging
import math
from collections.abc import Hashable, Mapping, Sequence
from dataclasses import dataclass

from scipy import stats

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DistributionTest:
    """Result of a Pearson chi-squared test of draws against the weights."""

    chi_squared: float
    p_value: float
    degrees_of_freedom: int
    num_samples: int

    def passes(self, alpha: float = 0.05) -> bool:
        """True if the counts are consistent with the weights at level ``alpha``."""
        return self.p_value > alpha


def expected_frequencies(
    outcomes: Sequence[Hashable], weights: Sequence[float]
) -> dict[Hashable, float]:
    """Probability of each distinct label, pooling weights of repeated labels."""
    expected: dict[Hashable, float] = {}
    for outcome, weight in zip(outcomes, weights, strict=True):
        expected[outcome] = expected.get(outcome, 0.0) + float(weight)
    return expected


def chi_squared_test(
    counts: Mapping[Hashable, int],
    outcomes: Sequence[Hashable],
    weights: Sequence[float],
) -> DistributionTest:
    expected = expected_frequencies(outcomes, weights)
    num_samples = sum(counts.values())
    total_weight = sum(expected.values())
    if num_samples == 0:
        return DistributionTest(0.0, 1.0, 0, 0)

    chi_squared = 0.0
    categories = 0
    for outcome, probability in expected.items():
        observed = counts.get(outcome, 0)
        if probability == 0.0:
            if observed:
                chi_squared = math.inf
            continue
        categories += 1
        wanted = num_samples * probability / total_weight
        chi_squared += (observed - wanted) ** 2 / wanted

    unknown = set(counts) - set(expected)
    if unknown:
        logger.warning("Counts contain labels outside the table: %r", sorted(unknown, key=repr))
        chi_squared = math.inf

    degrees_of_freedom = max(categories - 1, 0)
    if math.isinf(chi_squared):
        p_value = 0.0
    elif degrees_of_freedom == 0:
        p_value = 1.0
    else:
        p_value = float(stats.chi2.sf(chi_squared, degrees_of_freedom))

    logger.debug(
        "chi2=%.4f dof=%d p=%.6f over %d samples",
        chi_squared,
        degrees_of_freedom,
        p_value,
        num_samples,
    )
    return DistributionTest(chi_squared, p_value, degrees_of_freedom, num_samples)
