"""Unit tests for microcriterion.clock."""

from __future__ import annotations

import itertools

import pytest

from microcriterion.clock import Clock, Timestamp
from microcriterion.exceptions import ClockError
from microcriterion.sample import Sample


class TestAlign:
    """Tests for clock tick alignment."""

    def test_waits_for_next_tick(self) -> None:
        """Alignment returns the first reading past the current tick."""
        ticks = iter([100, 100, 100, 200, 300])
        clock = Clock(wall=lambda: 7, cpu=lambda: next(ticks), max_spins=10)

        assert clock.align() == Timestamp(wall_ns=7, cpu_ns=200)

    def test_bounded_when_clock_stalls(self) -> None:
        """A clock that never ticks does not hang alignment."""
        reads = itertools.count()

        def stuck() -> int:
            next(reads)
            return 5

        clock = Clock(wall=lambda: 0, cpu=stuck, max_spins=50)
        assert clock.align().cpu_ns == 5
        assert next(reads) == 51

    def test_negative_spins_rejected(self) -> None:
        with pytest.raises(ValueError):
            Clock(max_spins=-1)


class TestMeasure:
    """Tests for timing one trial."""

    def test_measures_workload(self, clock) -> None:
        """The sample spans exactly the workload's run."""
        seen: list[int] = []

        def workload(n: int) -> None:
            seen.append(n)
            clock.advance(1_000 * n)

        sample, end = clock.measure(workload, 3)

        assert seen == [3]
        assert sample == Sample(wall_ns=3_000, cpu_ns=3_000, iterations=3)
        assert end.wall_ns == 3_000

    def test_backward_clock_is_error(self, clock) -> None:
        """A reading earlier than the start is a clock malfunction."""
        clock.wall_ns = 10_000

        def workload(n: int) -> None:
            clock.wall_ns -= 1

        with pytest.raises(ClockError):
            clock.measure(workload, 1)

    def test_workload_exception_propagates(self, clock) -> None:
        def workload(n: int) -> None:
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            clock.measure(workload, 1)

    def test_real_clock_non_negative(self) -> None:
        """The process clocks never report a negative interval."""
        sample, _ = Clock().measure(lambda n: sum(range(n)), 1000)
        assert sample.wall_ns >= 0
        assert sample.cpu_ns >= 0
