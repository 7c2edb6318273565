"""Bootstrap report of per-iteration CPU cost."""

from __future__ import annotations

import random
from collections.abc import Sequence
from dataclasses import dataclass

from .bootstrap import Estimate, bootstrap
from .constants import DEFAULT_RESAMPLES, DEFAULT_SEED
from .estimators import (
    mean_cpu_per_iteration,
    median_cpu_per_iteration,
    min_cpu_per_iteration,
    stddev_cpu_per_iteration,
)
from .exceptions import EmptySampleError
from .sample import Sample


@dataclass(frozen=True)
class AnalysisReport:
    """Estimates of CPU nanoseconds per iteration.

    Attributes:
        median: From the median-by-ratio sample.
        mean: Total CPU time over total iterations.
        minimum: From the fastest sample.
        stddev: Spread of per-iteration times between samples.
        samples: Number of samples analyzed.
        resamples: Bootstrap rounds used.
    """

    median: Estimate
    mean: Estimate
    minimum: Estimate
    stddev: Estimate
    samples: int
    resamples: int

    def as_dict(self) -> dict[str, Estimate]:
        return {
            "median": self.median,
            "mean": self.mean,
            "minimum": self.minimum,
            "stddev": self.stddev,
        }


def analyze(
    samples: Sequence[Sample],
    *,
    resamples: int = DEFAULT_RESAMPLES,
    seed: int = DEFAULT_SEED,
) -> AnalysisReport:
    """Bootstrap the median, mean, minimum and spread of CPU time per iteration."""
    if not samples:
        raise EmptySampleError("analyze")
    median, mean, minimum, stddev = bootstrap(
        samples,
        [
            median_cpu_per_iteration,
            mean_cpu_per_iteration,
            min_cpu_per_iteration,
            stddev_cpu_per_iteration,
        ],
        resamples=resamples,
        rng=random.Random(seed),
    )
    return AnalysisReport(
        median=median,
        mean=mean,
        minimum=minimum,
        stddev=stddev,
        samples=len(samples),
        resamples=resamples,
    )
