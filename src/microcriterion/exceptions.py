"""Custom exceptions for microcriterion."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .sample import Sample


class BenchmarkError(Exception):
    """Exception raised when a benchmark operation fails."""

    def __init__(
        self,
        message: str,
        *,
        iterations: int | None = None,
        error: str | None = None,
    ) -> None:
        super().__init__(message)
        self.iterations = iterations
        self.error = error

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.iterations is not None:
            parts.append(f"Iterations: {self.iterations}")
        if self.error:
            parts.append(f"Error: {self.error}")
        return "\n".join(parts)


class EmptySampleError(BenchmarkError, ValueError):
    """Raised when an estimator or the resampler is given no samples."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"{operation} requires at least one sample")
        self.operation = operation


class ClockError(BenchmarkError):
    """Raised when a clock reading moves backward within one trial."""


class WorkloadError(BenchmarkError):
    """Raised when the measured workload itself fails.

    The samples collected before the failing round are kept on the
    exception so callers can still inspect them.
    """

    def __init__(
        self,
        message: str,
        *,
        iterations: int,
        samples: Sequence[Sample] = (),
        error: str | None = None,
    ) -> None:
        super().__init__(message, iterations=iterations, error=error)
        self.samples: tuple[Sample, ...] = tuple(samples)
