"""Run many draws in parallel and compare observed frequencies to the weights."""

import logging
import random
from collections import Counter
from collections.abc import Hashable, Iterator
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

from weighted_sampler.sampler import WeightedSampler
from weighted_sampler.stats import DistributionTest, chi_squared_test, expected_frequencies

logger = logging.getLogger(__name__)

DEMO_OUTCOMES = [1, 2, 3, 4, 5, 6, 7, 8, 9, 10]
DEMO_WEIGHTS = [0.03, 0.08, 0.04, 0.05, 0.5, 0.15, 0.02, 0.05, 0.03, 0.05]


@dataclass
class FrequencyReport:
    """Observed counts of a tally next to the configured weights."""

    outcomes: list[Hashable]
    weights: list[float]
    counts: Counter[Hashable] = field(default_factory=Counter)
    iterations: int = 0

    def rate(self, outcome: Hashable) -> float:
        if self.iterations == 0:
            return 0.0
        return self.counts[outcome] / self.iterations

    def rows(self) -> Iterator[tuple[Hashable, float, float]]:
        """Yield ``(outcome, probability, observed rate)`` once per distinct label.

        Repeated labels are merged into one row carrying their combined
        weight, in order of first appearance.
        """
        for outcome, probability in expected_frequencies(self.outcomes, self.weights).items():
            yield outcome, probability, self.rate(outcome)

    def max_deviation(self) -> float:
        """Largest absolute gap between a label's observed rate and its probability."""
        return max(abs(rate - probability) for _, probability, rate in self.rows())

    def chi_squared(self) -> DistributionTest:
        return chi_squared_test(self.counts, self.outcomes, self.weights)

    def log(self, target: logging.Logger = logger) -> None:
        target.info("Results with %d iterations:", self.iterations)
        for outcome, weight, rate in self.rows():
            target.info("Value %s with probability %f: %f", outcome, weight, rate)


def demo_sampler() -> WeightedSampler:
    return WeightedSampler(DEMO_OUTCOMES, DEMO_WEIGHTS)


def _count_draws(sampler: WeightedSampler, iterations: int, seed: int) -> Counter[Hashable]:
    # One generator per task, so workers never share a random source.
    rng = random.Random(seed)
    counts: Counter[Hashable] = Counter()
    for _ in range(iterations):
        counts[sampler.draw(rng.random())] += 1
    return counts


def tally(
    sampler: WeightedSampler,
    iterations: int,
    workers: int = 4,
    seed: int | None = None,
) -> FrequencyReport:
    """Draw ``iterations`` outcomes across ``workers`` threads and count them.

    Every worker gets its own ``random.Random`` seeded from a master generator,
    so a fixed ``seed`` and worker count always give the same counts. Worker
    counters are merged after all workers have finished.
    """
    if iterations < 0:
        raise ValueError(f"iterations must be non-negative, got {iterations}")
    if workers < 1:
        raise ValueError(f"workers must be at least 1, got {workers}")

    master = random.Random(seed)
    base, extra = divmod(iterations, workers)
    shares = [base + (1 if i < extra else 0) for i in range(workers)]
    seeds = [master.getrandbits(64) for _ in range(workers)]
    logger.debug("Splitting %d draws across %d workers: %s", iterations, workers, shares)

    report = FrequencyReport(
        outcomes=sampler.outcomes,
        weights=[float(w) for w in sampler.weights],
        iterations=iterations,
    )
    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = [
            pool.submit(_count_draws, sampler, share, worker_seed)
            for share, worker_seed in zip(shares, seeds, strict=True)
        ]
        for future in futures:
            report.counts.update(future.result())
    return report
