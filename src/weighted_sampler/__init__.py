"""Package initialization for weighted-sampler.

A sampler that draws labeled outcomes with fixed probabilities by looking up
a uniform random value in a precomputed cumulative distribution.
"""

from weighted_sampler.errors import (
    ConfigurationError,
    EmptyTableError,
    InvalidWeightError,
    LengthMismatchError,
    MissingTableError,
    ProbabilitySumError,
)
from weighted_sampler.sampler import MARGIN, RandomSource, WeightedSampler
from weighted_sampler.stats import DistributionTest, chi_squared_test

__version__ = "0.1.0"
__all__ = [
    "MARGIN",
    "ConfigurationError",
    "DistributionTest",
    "EmptyTableError",
    "InvalidWeightError",
    "LengthMismatchError",
    "MissingTableError",
    "ProbabilitySumError",
    "RandomSource",
    "WeightedSampler",
    "chi_squared_test",
]
