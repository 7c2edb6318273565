"""Measurement record for one trial."""

from __future__ import annotations

from dataclasses import dataclass

from .constants import NS_PER_SEC


@dataclass(frozen=True)
class Sample:
    """Wall and CPU duration of one trial of ``iterations`` repetitions.

    Durations are integer nanoseconds. They may be negative once the
    zero-line overhead has been subtracted from a trial that ran faster
    than the baseline.
    """

    wall_ns: int
    cpu_ns: int
    iterations: int

    def __post_init__(self) -> None:
        if self.iterations < 0:
            raise ValueError(f"iterations must be >= 0, got {self.iterations}")

    @property
    def wall_per_iteration_ns(self) -> float:
        if self.iterations == 0:
            return float("nan")
        return self.wall_ns / self.iterations

    @property
    def cpu_per_iteration_ns(self) -> float:
        if self.iterations == 0:
            return float("nan")
        return self.cpu_ns / self.iterations

    @property
    def wall_sec(self) -> float:
        return self.wall_ns / NS_PER_SEC

    @property
    def cpu_sec(self) -> float:
        return self.cpu_ns / NS_PER_SEC

    def minus(self, overhead_ns: int) -> Sample:
        """Return a copy with ``overhead_ns`` taken off both durations."""
        if overhead_ns == 0:
            return self
        return Sample(
            wall_ns=self.wall_ns - overhead_ns,
            cpu_ns=self.cpu_ns - overhead_ns,
            iterations=self.iterations,
        )

    def __add__(self, other: Sample) -> Sample:
        if not isinstance(other, Sample):
            return NotImplemented
        return Sample(
            wall_ns=self.wall_ns + other.wall_ns,
            cpu_ns=self.cpu_ns + other.cpu_ns,
            iterations=self.iterations + other.iterations,
        )


ZERO = Sample(wall_ns=0, cpu_ns=0, iterations=0)
