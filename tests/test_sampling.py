"""Tests for drawing outcomes, accessors and equality of WeightedSampler."""

import math
import random
from collections import Counter

import pytest

from weighted_sampler import WeightedSampler

OUTCOMES = [1, 2, 3, 4, 5]
WEIGHTS = [0.1, 0.2, 0.4, 0.2, 0.1]

# =============================================================================
# Draw Tests
# =============================================================================


def test_draw_at_cdf_boundaries() -> None:
    """A value equal to a cdf entry belongs to that entry's outcome."""
    sampler = WeightedSampler([1, 2, 3], [0.2, 0.3, 0.5])
    cdf = sampler.cumulative_distribution
    assert sampler.draw(0.0) == 1
    assert sampler.draw(cdf[0]) == 1
    assert sampler.draw(math.nextafter(cdf[0], 1.0)) == 2
    assert sampler.draw(cdf[1]) == 2
    assert sampler.draw(math.nextafter(cdf[1], 1.0)) == 3
    assert sampler.draw(0.999999) == 3


def test_draw_beyond_final_cdf_returns_last() -> None:
    """A value above the final cdf entry falls back to the last outcome."""
    sampler = WeightedSampler([1, 2, 3], [0.5, 0.25, 0.24995])
    last = sampler.cumulative_distribution[-1]
    assert last < 1.0
    assert sampler.draw(math.nextafter(last, 1.0)) == 3
    assert sampler.draw(0.99999) == 3


def test_draw_out_of_range_values() -> None:
    """Values outside [0, 1) clamp to the first and last outcomes."""
    sampler = WeightedSampler([1, 2, 3], [0.2, 0.3, 0.5])
    assert sampler.draw(-0.5) == 1
    assert sampler.draw(1.0) == 3
    assert sampler.draw(7.0) == 3


def test_zero_weight_never_drawn() -> None:
    """An outcome with zero weight owns an empty range."""
    sampler = WeightedSampler(["a", "b", "c"], [0.5, 0.0, 0.5])
    assert sampler.draw(0.5) == "a"
    assert sampler.draw(math.nextafter(0.5, 1.0)) == "c"
    drawn = {sampler.draw(i / 1000) for i in range(1000)}
    assert drawn == {"a", "c"}


def test_duplicate_labels() -> None:
    """Labels may repeat; each position keeps its own range."""
    sampler = WeightedSampler([7, 7, 8], [0.25, 0.25, 0.5])
    assert sampler.draw(0.1) == 7
    assert sampler.draw(0.4) == 7
    assert sampler.draw(0.6) == 8


def test_single_outcome() -> None:
    """A one-entry table always returns its only outcome."""
    sampler = WeightedSampler([42], [1.0])
    for u in (0.0, 0.3, 0.999999):
        assert sampler.draw(u) == 42


def test_draw_uses_random_source() -> None:
    """Without an explicit value, draw asks the random source."""
    values = iter([0.1, 0.6, 0.3])
    sampler = WeightedSampler([1, 2, 3], [0.2, 0.3, 0.5], random=lambda: next(values))
    assert sampler.draw_many(3) == [1, 3, 2]


def test_draw_with_explicit_value_ignores_random_source() -> None:
    """An explicit value bypasses the random source entirely."""

    def fail() -> float:
        raise AssertionError("random source should not be called")

    sampler = WeightedSampler([1, 2], [0.5, 0.5], random=fail)
    assert sampler.draw(0.75) == 2


def test_frequencies_on_even_grid() -> None:
    """10,000 evenly spaced values land within 0.01 of every weight."""
    sampler = WeightedSampler(OUTCOMES, WEIGHTS)
    iterations = 10_000
    counts = Counter(sampler.draw((k + 0.5) / iterations) for k in range(iterations))
    for outcome, weight in zip(OUTCOMES, WEIGHTS):
        assert abs(counts[outcome] / iterations - weight) <= 0.01


def test_frequencies_with_seeded_random() -> None:
    """Random draws converge to the configured weights."""
    sampler = WeightedSampler(OUTCOMES, WEIGHTS, random=random.Random(20240601).random)
    iterations = 100_000
    counts = Counter(sampler.draw_many(iterations))
    for outcome, weight in zip(OUTCOMES, WEIGHTS):
        rate = counts[outcome] / iterations
        assert abs(rate - weight) <= 0.01, (
            f"Expected rate of {outcome} to be {weight} within 0.01, but was {rate}"
        )


def test_distribution_check_passes() -> None:
    """The sampler's own draws pass a chi-squared test."""
    sampler = WeightedSampler(OUTCOMES, WEIGHTS, random=random.Random(7).random)
    result = sampler.test_distribution(50_000)
    assert result.num_samples == 50_000
    assert result.degrees_of_freedom == 4
    assert result.passes(0.001), f"chi2={result.chi_squared}, p={result.p_value}"


# =============================================================================
# Accessor Tests
# =============================================================================


def test_caller_mutation_does_not_leak_in() -> None:
    """Changing the input lists after construction has no effect."""
    outcomes = [1, 2, 3]
    weights = [0.2, 0.3, 0.5]
    sampler = WeightedSampler(outcomes, weights)
    outcomes[0] = 99
    weights[0] = 0.9
    assert sampler.outcomes == [1, 2, 3]
    assert sampler.draw(0.1) == 1


def test_accessor_mutation_does_not_leak_back() -> None:
    """Changing accessor results leaves the sampler untouched."""
    sampler = WeightedSampler([1, 2, 3], [0.2, 0.3, 0.5])
    twin = WeightedSampler([1, 2, 3], [0.2, 0.3, 0.5])

    outcomes = sampler.outcomes
    outcomes.append(4)
    weights = sampler.weights
    weights[0] = 0.9

    assert sampler.outcomes == [1, 2, 3]
    assert sampler.weights[0] == twin.weights[0]
    assert sampler == twin


def test_cdf_is_read_only() -> None:
    """The cumulative distribution is exposed as an immutable tuple."""
    sampler = WeightedSampler(OUTCOMES, WEIGHTS)
    cdf = sampler.cumulative_distribution
    assert isinstance(cdf, tuple)
    assert list(cdf) == sorted(cdf)
    assert cdf[-1] == pytest.approx(1.0, abs=1e-4)


# =============================================================================
# Equality Tests
# =============================================================================


def test_equal_tables_are_equal() -> None:
    """Samplers built from the same tables are equal and hash alike."""
    first = WeightedSampler([1, 2, 3], [0.2, 0.3, 0.5])
    second = WeightedSampler([1, 2, 3], [0.2, 0.3, 0.5], random=random.Random(1).random)
    assert first == second
    assert hash(first) == hash(second)
    assert len({first, second}) == 1


def test_different_weights_are_not_equal() -> None:
    """Any difference in the weights makes samplers unequal."""
    base = WeightedSampler([1, 2, 3], [0.2, 0.3, 0.5])
    assert base != WeightedSampler([1, 2, 3], [0.2, 0.3, 0.50001])
    assert base != WeightedSampler([1, 2, 3], [0.3, 0.2, 0.5])


def test_different_outcomes_are_not_equal() -> None:
    """Any difference in the outcomes makes samplers unequal."""
    base = WeightedSampler([1, 2, 3], [0.2, 0.3, 0.5])
    assert base != WeightedSampler([1, 2, 4], [0.2, 0.3, 0.5])
    assert base != WeightedSampler([3, 2, 1], [0.2, 0.3, 0.5])


def test_not_equal_to_other_types() -> None:
    """A sampler never equals a plain value."""
    sampler = WeightedSampler([1], [1.0])
    assert sampler != ([1], [1.0])
    assert sampler is not None


def test_repr_shows_tables() -> None:
    """repr lists outcomes and weights."""
    sampler = WeightedSampler([1, 2], [0.25, 0.75])
    assert repr(sampler) == "WeightedSampler(outcomes=[1, 2], weights=[0.25, 0.75])"
