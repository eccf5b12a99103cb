"""Demonstration: tally a million weighted draws and report the frequencies.

Usage: python -m weighted_sampler [--iterations N] [--workers W] [--seed S]
"""

import argparse
import logging
import sys

from weighted_sampler.driver import demo_sampler, tally

logger = logging.getLogger("weighted_sampler")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="python -m weighted_sampler")
    parser.add_argument("--iterations", type=int, default=1_000_000)
    parser.add_argument("--workers", type=int, default=4)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )

    sampler = demo_sampler()
    logger.info("Values: %s", sampler.outcomes)
    logger.info("Probabilities: %s", [float(w) for w in sampler.weights])

    report = tally(sampler, args.iterations, workers=args.workers, seed=args.seed)
    report.log(logger)

    result = report.chi_squared()
    logger.info(
        "Chi-squared: chi2=%.2f, dof=%d, p=%.4f",
        result.chi_squared,
        result.degrees_of_freedom,
        result.p_value,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
