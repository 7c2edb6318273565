"""Shared fixtures: a deterministic clock and workloads that advance it."""

from __future__ import annotations

from collections.abc import Callable, Iterator

import pytest

from microcriterion.clock import Clock
from microcriterion.logging_config import logger


class FakeClock(Clock):
    """Clock whose readings only move when a workload advances them."""

    def __init__(self) -> None:
        self.wall_ns = 0
        self.cpu_ns = 0
        self.reads = 0
        super().__init__(wall=self._read_wall, cpu=self._read_cpu, max_spins=3)

    def _read_wall(self) -> int:
        return self.wall_ns

    def _read_cpu(self) -> int:
        self.reads += 1
        return self.cpu_ns

    def advance(self, ns: int) -> None:
        self.wall_ns += ns
        self.cpu_ns += ns


def costed(
    clock: FakeClock, *, per_call_ns: int = 0, per_iteration_ns: int = 0
) -> Callable[[int], None]:
    """Workload that costs ``per_call_ns + per_iteration_ns * n``."""

    def workload(n: int) -> None:
        clock.advance(per_call_ns + per_iteration_ns * n)

    return workload


def failing_workload(n: int) -> None:
    """Workload target that always raises."""
    raise ZeroDivisionError(f"division by zero at n={n}")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture(autouse=True)
def _reset_package_logger() -> Iterator[None]:
    """Undo setup_logging so caplog sees package records in every test."""
    yield
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel("NOTSET")
