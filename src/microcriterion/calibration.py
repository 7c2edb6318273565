"""Zero-line calibration of measurement overhead.

The zero line is the cost of a trial whose workload does nothing but feed
values to :func:`~microcriterion.sink.black_box`. It covers the loop, the
sink call and the clock reads. Subtracting it from every trial leaves an
estimate of the workload alone.
"""

from __future__ import annotations

import random
import threading
from dataclasses import dataclass

from .bootstrap import bootstrap
from .clock import Clock, Workload
from .constants import DEFAULT_RESAMPLES, DEFAULT_SEED, DEFAULT_ZERO_LINE_TIME_SEC, NS_PER_SEC
from .estimators import min_cpu, min_cpu_per_iteration
from .logging_config import get_logger
from .progress import format_duration
from .sample import Sample
from .sampler import ProgressSink, SamplerConfig, run_benchmark
from .sink import black_box

logger = get_logger(__name__)


def zero_workload(n: int) -> None:
    """Run ``n`` trivial repetitions through the sink."""
    for i in range(n):
        black_box(i)


@dataclass(frozen=True)
class Baseline:
    """Overhead measurement subtracted from every trial.

    Attributes:
        sample: The calibration trial with the lowest CPU time per iteration.
        cpu_per_iteration_ns: Overhead charged per iteration. Equal to the
            sample's own ratio, or a lower confidence bound of it when the
            calibration was refined.
    """

    sample: Sample
    cpu_per_iteration_ns: float

    def overhead_ns(self, iterations: int) -> int:
        return round(self.cpu_per_iteration_ns * iterations)


class ZeroLine:
    """Lazily computed, shared baseline.

    :meth:`baseline` measures on first use and returns the same
    :class:`Baseline` instance on every later call, from any thread.
    Pass that instance to each :func:`~microcriterion.sampler.run_benchmark`
    call.
    """

    def __init__(
        self,
        min_time_sec: float = DEFAULT_ZERO_LINE_TIME_SEC,
        *,
        refine: bool = True,
        resamples: int = DEFAULT_RESAMPLES,
        seed: int = DEFAULT_SEED,
        config: SamplerConfig | None = None,
        clock: Clock | None = None,
        workload: Workload = zero_workload,
        on_sample: ProgressSink | None = None,
    ) -> None:
        self.min_time_sec = min_time_sec
        self.refine = refine
        self.resamples = resamples
        self.seed = seed
        self.config = config
        self.clock = clock
        self.workload = workload
        self.on_sample = on_sample
        self._baseline: Baseline | None = None
        self._lock = threading.Lock()

    @property
    def is_calibrated(self) -> bool:
        return self._baseline is not None

    def baseline(self) -> Baseline:
        if self._baseline is None:
            with self._lock:
                if self._baseline is None:
                    self._baseline = self._calibrate()
        return self._baseline

    def _calibrate(self) -> Baseline:
        logger.info("Calibrating zero line for %s", format_duration(self.min_time_sec))
        samples = run_benchmark(
            self.workload,
            self.min_time_sec,
            config=self.config,
            clock=self.clock,
            on_sample=self.on_sample,
        )
        fastest = min_cpu(samples)
        per_iteration = fastest.cpu_per_iteration_ns

        if self.refine:
            (estimate,) = bootstrap(
                samples,
                [min_cpu_per_iteration],
                resamples=self.resamples,
                rng=random.Random(self.seed),
            )
            # A negative bound would add time back to every trial
            per_iteration = max(0.0, estimate.lbound)

        logger.info(
            "Zero line: %s per iteration over %d samples",
            format_duration(per_iteration / NS_PER_SEC),
            len(samples),
        )
        return Baseline(sample=fastest, cpu_per_iteration_ns=per_iteration)
