"""Bootstrap resampling of scalar estimators over a sample set."""

from __future__ import annotations

import random
import statistics
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from .constants import CONFIDENCE_SIGMAS, DEFAULT_RESAMPLES, DEFAULT_SEED
from .exceptions import EmptySampleError
from .sample import Sample

# Maps one (resampled) set of samples to a single number.
Estimator = Callable[[Sequence[Sample]], float]


@dataclass(frozen=True)
class Estimate:
    """Distribution of one statistic over the bootstrap resamples.

    Attributes:
        mean: Mean of the resampled statistic.
        stdev: Standard deviation (n-1 denominator) of the statistic.
        lbound: ``mean - CONFIDENCE_SIGMAS * stdev``.
        ubound: ``mean + CONFIDENCE_SIGMAS * stdev``.
    """

    mean: float
    stdev: float
    lbound: float
    ubound: float

    @classmethod
    def from_values(cls, values: Sequence[float]) -> Estimate:
        """Summarize ``values`` assuming they are roughly normal.

        Three standard deviations either side of the mean cover about
        99.7% of a normal distribution.
        """
        n = len(values)
        if n == 0:
            raise EmptySampleError("Estimate.from_values")
        # statistics works in exact fractions: identical values give the
        # value itself and a stdev of exactly 0
        mean = statistics.mean(values)
        stdev = statistics.stdev(values, mean) if n > 1 else 0.0
        half = CONFIDENCE_SIGMAS * stdev
        return cls(mean=mean, stdev=stdev, lbound=mean - half, ubound=mean + half)

    def contains(self, value: float) -> bool:
        return self.lbound <= value <= self.ubound


def bootstrap(
    samples: Sequence[Sample],
    estimators: Sequence[Estimator],
    *,
    resamples: int = DEFAULT_RESAMPLES,
    rng: random.Random | None = None,
) -> list[Estimate]:
    """Estimate each statistic in ``estimators`` by bootstrap resampling.

    Every round draws ``len(samples)`` samples uniformly with replacement
    and applies all estimators to that same draw.

    Args:
        samples: Observed samples, at least one.
        estimators: Scalar reductions to estimate.
        resamples: Number of bootstrap rounds.
        rng: Random source. A generator seeded with ``DEFAULT_SEED`` is
            used when omitted, so repeated calls agree.

    Returns:
        One :class:`Estimate` per estimator, in order.
    """
    if not samples:
        raise EmptySampleError("bootstrap")
    if resamples < 1:
        raise ValueError("resamples must be >= 1")
    if rng is None:
        rng = random.Random(DEFAULT_SEED)

    population = list(samples)
    n = len(population)
    recorded: list[list[float]] = [[] for _ in estimators]

    for _ in range(resamples):
        draw = rng.choices(population, k=n)
        for values, estimator in zip(recorded, estimators):
            values.append(estimator(draw))

    return [Estimate.from_values(values) for values in recorded]
