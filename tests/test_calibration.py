"""Unit tests for microcriterion.calibration."""

from __future__ import annotations

import threading

import pytest

from conftest import FakeClock, costed
from microcriterion.analysis import analyze
from microcriterion.calibration import Baseline, ZeroLine, zero_workload
from microcriterion.sample import Sample
from microcriterion.sampler import SamplerConfig, run_benchmark
from microcriterion.sink import last_value

MS = 1_000_000


class TestBaseline:
    """Tests for the Baseline record."""

    def test_overhead_rounds(self) -> None:
        baseline = Baseline(sample=Sample(0, 0, 1), cpu_per_iteration_ns=2.5)
        assert baseline.overhead_ns(0) == 0
        assert baseline.overhead_ns(4) == 10
        assert baseline.overhead_ns(3) == 8


class TestZeroWorkload:
    def test_feeds_sink(self) -> None:
        zero_workload(5)
        assert last_value() == 4


class TestZeroLine:
    """Tests for one-time calibration."""

    def _zero_line(self, clock: FakeClock, **kwargs) -> ZeroLine:
        return ZeroLine(
            0.0,
            clock=clock,
            workload=costed(clock, per_call_ns=100 * MS, per_iteration_ns=1_000),
            resamples=100,
            **kwargs,
        )

    def test_picks_min_cpu_sample(self, clock: FakeClock) -> None:
        """Without refinement the fastest trial's own ratio is used."""
        baseline = self._zero_line(clock, refine=False).baseline()
        # Per-call cost is amortized best by the largest trial
        assert baseline.sample.iterations == 5
        assert baseline.cpu_per_iteration_ns == baseline.sample.cpu_per_iteration_ns

    def test_refined_is_lower_bound(self, clock: FakeClock) -> None:
        raw = self._zero_line(FakeClock(), refine=False).baseline()
        refined = self._zero_line(clock).baseline()
        assert 0.0 <= refined.cpu_per_iteration_ns <= raw.cpu_per_iteration_ns

    def test_computed_once(self, clock: FakeClock) -> None:
        zero_line = self._zero_line(clock)
        assert not zero_line.is_calibrated

        first = zero_line.baseline()
        elapsed = clock.wall_ns
        second = zero_line.baseline()

        assert zero_line.is_calibrated
        assert first is second
        assert clock.wall_ns == elapsed

    def test_concurrent_first_use(self) -> None:
        """Threads racing on first use all observe one instance."""
        calls = 0
        clock = FakeClock()
        inner = costed(clock, per_call_ns=100 * MS)

        def workload(n: int) -> None:
            nonlocal calls
            calls += 1
            inner(n)

        zero_line = ZeroLine(0.0, clock=clock, workload=workload, refine=False)
        barrier = threading.Barrier(8)
        results: list[Baseline] = []

        def worker() -> None:
            barrier.wait()
            results.append(zero_line.baseline())

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(results) == 8
        assert all(r is results[0] for r in results)
        assert calls == 5

    def test_identical_workload_cancels_out(self, clock: FakeClock) -> None:
        """Benchmarking the calibration workload itself costs about nothing."""
        cfg = SamplerConfig(max_iterations=10**7)
        workload = costed(clock, per_iteration_ns=50)
        baseline = ZeroLine(0.0, clock=clock, workload=workload, config=cfg, resamples=100).baseline()

        samples = run_benchmark(workload, 0.0, config=cfg, clock=clock, baseline=baseline)
        report = analyze(samples, resamples=100)

        assert baseline.cpu_per_iteration_ns == pytest.approx(50.0)
        assert report.median.contains(0.0)
        assert abs(report.mean.mean) < 1.0
