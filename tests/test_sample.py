"""Unit tests for microcriterion.sample, sink and exceptions."""

from __future__ import annotations

import math

import pytest

from microcriterion.exceptions import BenchmarkError, EmptySampleError, WorkloadError
from microcriterion.sample import ZERO, Sample
from microcriterion.sink import black_box, last_value


class TestSample:
    """Tests for the Sample record."""

    def test_per_iteration(self) -> None:
        """Per-iteration times divide by the iteration count."""
        s = Sample(wall_ns=1000, cpu_ns=800, iterations=4)
        assert s.wall_per_iteration_ns == 250.0
        assert s.cpu_per_iteration_ns == 200.0

    def test_zero_iterations_is_nan(self) -> None:
        """A sample without iterations has no per-iteration time."""
        assert math.isnan(ZERO.cpu_per_iteration_ns)
        assert math.isnan(ZERO.wall_per_iteration_ns)

    def test_negative_iterations_rejected(self) -> None:
        with pytest.raises(ValueError):
            Sample(wall_ns=1, cpu_ns=1, iterations=-1)

    def test_minus_allows_negative_durations(self) -> None:
        """Subtracting more overhead than measured keeps the negative value."""
        s = Sample(wall_ns=100, cpu_ns=50, iterations=2).minus(80)
        assert s == Sample(wall_ns=20, cpu_ns=-30, iterations=2)

    def test_minus_zero_returns_same_object(self) -> None:
        s = Sample(wall_ns=100, cpu_ns=50, iterations=2)
        assert s.minus(0) is s

    def test_add(self) -> None:
        total = Sample(1, 2, 3) + Sample(10, 20, 30)
        assert total == Sample(11, 22, 33)

    def test_is_frozen(self) -> None:
        """Test that Sample is immutable."""
        s = Sample(1, 1, 1)
        with pytest.raises(Exception):  # FrozenInstanceError
            s.iterations = 5  # type: ignore[misc]

    def test_seconds(self) -> None:
        s = Sample(wall_ns=1_500_000_000, cpu_ns=250_000_000, iterations=1)
        assert s.wall_sec == 1.5
        assert s.cpu_sec == 0.25


class TestBlackBox:
    """Tests for the opaque sink."""

    def test_returns_value(self) -> None:
        marker = object()
        assert black_box(marker) is marker

    def test_last_value_observable(self) -> None:
        black_box(41)
        black_box(42)
        assert last_value() == 42


class TestExceptions:
    """Tests for the error hierarchy."""

    def test_empty_sample_error_is_value_error(self) -> None:
        err = EmptySampleError("median")
        assert isinstance(err, BenchmarkError)
        assert isinstance(err, ValueError)
        assert "median" in str(err)

    def test_benchmark_error_str(self) -> None:
        err = BenchmarkError("Trial failed", iterations=7, error="boom")
        text = str(err)
        assert "Trial failed" in text
        assert "Iterations: 7" in text
        assert "Error: boom" in text

    def test_workload_error_keeps_samples(self) -> None:
        samples = [Sample(1, 1, 1), Sample(2, 2, 2)]
        err = WorkloadError("failed", iterations=3, samples=samples)
        assert err.samples == tuple(samples)
        assert err.iterations == 3
