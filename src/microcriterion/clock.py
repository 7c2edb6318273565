"""Wall-clock and CPU-time readings for a single trial."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass

from .constants import DEFAULT_MAX_SPINS
from .exceptions import ClockError
from .sample import Sample

# A workload performs ``n`` repetitions of the measured operation.
Workload = Callable[[int], object]


@dataclass(frozen=True)
class Timestamp:
    wall_ns: int
    cpu_ns: int


class Clock:
    """Paired monotonic wall clock and process CPU clock.

    The CPU clock of most platforms advances in coarse ticks. Before a
    trial starts, :meth:`align` spins until the CPU clock moves to a new
    tick so that the measured interval begins on a tick boundary instead
    of somewhere inside one.

    Both sources are plain callables returning nanoseconds and can be
    swapped out in tests.
    """

    def __init__(
        self,
        wall: Callable[[], int] = time.perf_counter_ns,
        cpu: Callable[[], int] = time.process_time_ns,
        max_spins: int = DEFAULT_MAX_SPINS,
    ) -> None:
        if max_spins < 0:
            raise ValueError("max_spins must be >= 0")
        self._wall = wall
        self._cpu = cpu
        self.max_spins = max_spins

    def now(self) -> Timestamp:
        return Timestamp(wall_ns=self._wall(), cpu_ns=self._cpu())

    def align(self) -> Timestamp:
        """Wait for the next CPU clock tick and return the start timestamp.

        Gives up after ``max_spins`` reads so a stalled clock cannot hang
        the caller.
        """
        last = self._cpu()
        cpu = last
        for _ in range(self.max_spins):
            cpu = self._cpu()
            if cpu != last:
                break
        return Timestamp(wall_ns=self._wall(), cpu_ns=cpu)

    def measure(self, workload: Workload, n: int) -> tuple[Sample, Timestamp]:
        """Run ``workload(n)`` once and time it.

        Returns the raw sample together with the end timestamp. Exceptions
        raised by the workload propagate unchanged.
        """
        start = self.align()
        workload(n)
        end = self.now()

        if end.wall_ns < start.wall_ns or end.cpu_ns < start.cpu_ns:
            raise ClockError(
                "Clock moved backward during a trial",
                iterations=n,
                error=f"start={start}, end={end}",
            )
        sample = Sample(
            wall_ns=end.wall_ns - start.wall_ns,
            cpu_ns=end.cpu_ns - start.cpu_ns,
            iterations=n,
        )
        return sample, end
