"""Reductions of a sample set to one sample or one scalar.

Samples are ranked by duration per iteration. Ratios are never computed
for ranking: ``a`` is faster than ``b`` when
``a.duration * b.iterations < b.duration * a.iterations``. Durations and
iteration counts are Python integers, so the products are exact.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from functools import reduce
from typing import Literal

from .exceptions import EmptySampleError
from .sample import ZERO, Sample

Axis = Literal["cpu", "wall"]


def _duration(sample: Sample, by: Axis) -> int:
    return sample.cpu_ns if by == "cpu" else sample.wall_ns


def compare_per_iteration(a: Sample, b: Sample, by: Axis = "cpu") -> int:
    """Three-way comparison of per-iteration duration: -1, 0 or 1."""
    lhs = _duration(a, by) * b.iterations
    rhs = _duration(b, by) * a.iterations
    return (lhs > rhs) - (lhs < rhs)


def _select(samples: list[Sample], k: int, by: Axis) -> Sample:
    """Return the element of rank ``k`` (0-based) by quickselect."""
    while True:
        if len(samples) == 1:
            return samples[0]
        pivot = samples[len(samples) // 2]
        lows: list[Sample] = []
        pivots: list[Sample] = []
        highs: list[Sample] = []
        for s in samples:
            c = compare_per_iteration(s, pivot, by)
            if c < 0:
                lows.append(s)
            elif c > 0:
                highs.append(s)
            else:
                pivots.append(s)
        if k < len(lows):
            samples = lows
        elif k < len(lows) + len(pivots):
            return pivots[0]
        else:
            k -= len(lows) + len(pivots)
            samples = highs


def median(samples: Sequence[Sample], by: Axis = "cpu") -> Sample:
    """Sample whose duration per iteration is the (lower) median of the set."""
    if not samples:
        raise EmptySampleError("median")
    if by not in ("cpu", "wall"):
        raise ValueError(f"Unknown axis: {by}")
    return _select(list(samples), (len(samples) - 1) // 2, by)


def min_cpu(samples: Sequence[Sample]) -> Sample:
    """Sample with the smallest CPU time per iteration; first one on ties."""
    if not samples:
        raise EmptySampleError("min_cpu")
    best = samples[0]
    for s in samples[1:]:
        if compare_per_iteration(s, best) < 0:
            best = s
    return best


def sum_samples(samples: Sequence[Sample]) -> Sample:
    """Element-wise total of durations and iteration counts."""
    if not samples:
        raise EmptySampleError("sum_samples")
    return reduce(lambda acc, s: acc + s, samples, ZERO)


# Scalar estimators for the bootstrap resampler. Each returns CPU
# nanoseconds per iteration.


def median_cpu_per_iteration(samples: Sequence[Sample]) -> float:
    return median(samples).cpu_per_iteration_ns


def mean_cpu_per_iteration(samples: Sequence[Sample]) -> float:
    return sum_samples(samples).cpu_per_iteration_ns


def min_cpu_per_iteration(samples: Sequence[Sample]) -> float:
    return min_cpu(samples).cpu_per_iteration_ns


def stddev_cpu_per_iteration(samples: Sequence[Sample]) -> float:
    """Spread of per-iteration CPU time across the set (0.0 below two)."""
    if not samples:
        raise EmptySampleError("stddev_cpu_per_iteration")
    values = [s.cpu_per_iteration_ns for s in samples if s.iterations > 0]
    n = len(values)
    if n < 2:
        return 0.0
    m = sum(values) / n
    var = sum((x - m) ** 2 for x in values) / (n - 1)
    return math.sqrt(var)
