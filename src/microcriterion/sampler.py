"""Adaptive sampling loop.

The loop runs the workload with a geometrically growing iteration count
until enough trustworthy signal has been collected:

(a) the wall time since the first trial reached ``min_time_sec``,
(b) the time trials spent above the per-trial noise floor adds up to more
    than ``aggregate_threshold_sec``, and
(c) at least ``min_samples`` trials ran.

Growth stops early, without error, when the next iteration count would no
longer fit the iteration counter.
"""

from __future__ import annotations

import dataclasses
import math
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .clock import Clock, Workload
from .constants import (
    AGGREGATE_THRESHOLD_SEC,
    DEFAULT_MIN_TIME_SEC,
    GROWTH_FACTOR,
    MAX_ITERATIONS,
    MIN_SAMPLES,
    NS_PER_SEC,
    OVERRUN_WARNING_FACTOR,
    PER_TRIAL_THRESHOLD_SEC,
)
from .exceptions import ClockError, WorkloadError
from .logging_config import get_logger
from .progress import format_duration, render_sample_line
from .sample import Sample

if TYPE_CHECKING:
    from .calibration import Baseline

logger = get_logger(__name__)

# Called between rounds with the 1-based round number and its sample.
ProgressSink = Callable[[int, Sample], None]


@dataclass
class SamplerConfig:
    min_time_sec: float = DEFAULT_MIN_TIME_SEC
    per_trial_threshold_sec: float = PER_TRIAL_THRESHOLD_SEC
    aggregate_threshold_sec: float = AGGREGATE_THRESHOLD_SEC
    min_samples: int = MIN_SAMPLES
    growth_factor: float = GROWTH_FACTOR
    max_iterations: int = MAX_ITERATIONS

    def validate(self) -> None:
        """Validate configuration consistency."""
        if self.min_time_sec < 0:
            raise ValueError("min_time_sec must be >= 0")
        if self.per_trial_threshold_sec < 0:
            raise ValueError("per_trial_threshold_sec must be >= 0")
        if self.aggregate_threshold_sec < 0:
            raise ValueError("aggregate_threshold_sec must be >= 0")
        if self.min_samples < 1:
            raise ValueError("min_samples must be >= 1")
        if not self.growth_factor > 1.0:
            raise ValueError("growth_factor must be > 1")
        if self.max_iterations < 1:
            raise ValueError("max_iterations must be >= 1")


def next_iterations(state: float, n: int, factor: float) -> tuple[float, int] | None:
    """Grow ``state`` by ``factor`` until its integer part exceeds ``n``.

    Returns the new ``(state, n)`` pair, or None once the state is no
    longer a finite number.
    """
    while True:
        state *= factor
        if math.isinf(state):
            return None
        grown = int(state)
        if grown > n:
            return state, grown


def _log_progress(round_no: int, sample: Sample) -> None:
    logger.debug("Round %d: %s", round_no, render_sample_line(sample))


class AdaptiveSampler:
    """Runs trials of a workload until the stopping rule holds.

    Args:
        config: Loop tuning; defaults to :class:`SamplerConfig`.
        clock: Timestamp source; defaults to the process clocks.
        baseline: Zero-line overhead subtracted from every trial. Without
            it samples are returned as measured.
        on_sample: Progress sink called once per round, outside the timed
            region. Defaults to DEBUG logging.
    """

    def __init__(
        self,
        config: SamplerConfig | None = None,
        *,
        clock: Clock | None = None,
        baseline: Baseline | None = None,
        on_sample: ProgressSink | None = None,
    ) -> None:
        self.config = config if config is not None else SamplerConfig()
        self.config.validate()
        self.clock = clock if clock is not None else Clock()
        self.baseline = baseline
        self.on_sample = on_sample if on_sample is not None else _log_progress

    def _trial(self, workload: Workload, n: int, samples: list[Sample]) -> tuple[Sample, int]:
        try:
            raw, end = self.clock.measure(workload, n)
        except ClockError:
            raise
        except Exception as e:
            raise WorkloadError(
                f"Workload failed at {n} iterations",
                iterations=n,
                samples=samples,
                error=str(e),
            ) from e
        if self.baseline is not None:
            raw = raw.minus(self.baseline.overhead_ns(n))
        return raw, end.wall_ns

    def run(self, workload: Workload) -> list[Sample]:
        cfg = self.config
        min_time_ns = round(cfg.min_time_sec * NS_PER_SEC)
        threshold_ns = round(cfg.per_trial_threshold_sec * NS_PER_SEC)
        aggregate_ns = round(cfg.aggregate_threshold_sec * NS_PER_SEC)

        samples: list[Sample] = []
        over_threshold_ns = 0
        state = 1.0
        n = 1
        started_ns = self.clock.now().wall_ns

        while True:
            sample, end_ns = self._trial(workload, n, samples)
            samples.append(sample)
            self.on_sample(len(samples), sample)

            over_threshold_ns += max(0, sample.wall_ns - threshold_ns)
            elapsed_ns = end_ns - started_ns
            if (
                elapsed_ns >= min_time_ns
                and over_threshold_ns > aggregate_ns
                and len(samples) >= cfg.min_samples
            ):
                if elapsed_ns > min_time_ns * OVERRUN_WARNING_FACTOR and min_time_ns > 0:
                    logger.warning("Measurement took %s", format_duration(elapsed_ns / NS_PER_SEC))
                logger.debug(
                    "Stopping after %d samples, %s above noise floor",
                    len(samples),
                    format_duration(over_threshold_ns / NS_PER_SEC),
                )
                return samples

            grown = next_iterations(state, n, cfg.growth_factor)
            if grown is None or grown[1] > cfg.max_iterations:
                logger.warning(
                    "Iteration count would exceed %d; stopping after %d samples",
                    cfg.max_iterations,
                    len(samples),
                )
                return samples
            state, n = grown


def run_benchmark(
    workload: Workload,
    min_time_sec: float | None = None,
    *,
    config: SamplerConfig | None = None,
    clock: Clock | None = None,
    baseline: Baseline | None = None,
    on_sample: ProgressSink | None = None,
) -> list[Sample]:
    """Measure ``workload`` and return its samples.

    Iteration counts of the returned samples strictly increase and the
    list is never empty. ``min_time_sec`` overrides the value in
    ``config`` when given.
    """
    cfg = config if config is not None else SamplerConfig()
    if min_time_sec is not None:
        cfg = dataclasses.replace(cfg, min_time_sec=min_time_sec)
    sampler = AdaptiveSampler(cfg, clock=clock, baseline=baseline, on_sample=on_sample)
    return sampler.run(workload)
