"""microcriterion package.

Measure the per-iteration cost of small pieces of code: an adaptive sampling
loop, zero-line overhead calibration and bootstrap confidence bounds.
"""

__version__ = "0.1.0"

from .analysis import AnalysisReport, analyze
from .bootstrap import Estimate, Estimator, bootstrap
from .calibration import Baseline, ZeroLine, zero_workload
from .clock import Clock, Timestamp, Workload
from .constants import (
    AGGREGATE_THRESHOLD_SEC,
    CONFIDENCE_SIGMAS,
    DEFAULT_MIN_TIME_SEC,
    DEFAULT_RESAMPLES,
    DEFAULT_SEED,
    DEFAULT_ZERO_LINE_TIME_SEC,
    EXIT_ERROR,
    EXIT_INTERRUPTED,
    EXIT_SUCCESS,
    PER_TRIAL_THRESHOLD_SEC,
)
from .cpu_affinity import (
    get_cpu_count,
    is_affinity_supported,
    set_affinity,
    validate_core_id,
)
from .estimators import (
    compare_per_iteration,
    mean_cpu_per_iteration,
    median,
    median_cpu_per_iteration,
    min_cpu,
    min_cpu_per_iteration,
    stddev_cpu_per_iteration,
    sum_samples,
)
from .exceptions import BenchmarkError, ClockError, EmptySampleError, WorkloadError
from .logging_config import get_logger, logger, setup_logging
from .progress import format_duration, format_report, render_sample_line
from .sample import Sample
from .sampler import AdaptiveSampler, SamplerConfig, run_benchmark
from .sink import black_box

__all__ = [
    "__version__",
    # Constants
    "AGGREGATE_THRESHOLD_SEC",
    "CONFIDENCE_SIGMAS",
    "DEFAULT_MIN_TIME_SEC",
    "DEFAULT_RESAMPLES",
    "DEFAULT_SEED",
    "DEFAULT_ZERO_LINE_TIME_SEC",
    "EXIT_ERROR",
    "EXIT_INTERRUPTED",
    "EXIT_SUCCESS",
    "PER_TRIAL_THRESHOLD_SEC",
    # CPU affinity
    "get_cpu_count",
    "is_affinity_supported",
    "set_affinity",
    "validate_core_id",
    # Measurement
    "AdaptiveSampler",
    "Baseline",
    "Clock",
    "Sample",
    "SamplerConfig",
    "Timestamp",
    "Workload",
    "ZeroLine",
    "black_box",
    "run_benchmark",
    "zero_workload",
    # Statistics
    "AnalysisReport",
    "Estimate",
    "Estimator",
    "analyze",
    "bootstrap",
    "compare_per_iteration",
    "mean_cpu_per_iteration",
    "median",
    "median_cpu_per_iteration",
    "min_cpu",
    "min_cpu_per_iteration",
    "stddev_cpu_per_iteration",
    "sum_samples",
    # Errors and logging
    "BenchmarkError",
    "ClockError",
    "EmptySampleError",
    "WorkloadError",
    "get_logger",
    "logger",
    "setup_logging",
    # Display
    "format_duration",
    "format_report",
    "render_sample_line",
]
