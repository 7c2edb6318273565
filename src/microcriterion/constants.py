"""Default constants for microcriterion configuration."""

from __future__ import annotations

# Sampling loop
DEFAULT_MIN_TIME_SEC = 1.0  # Soft target for one benchmark run
GROWTH_FACTOR = 1.05  # Geometric growth of the iteration count per round
MIN_SAMPLES = 5  # Rounds that must run before the loop may stop
MAX_ITERATIONS = 2**64 - 1  # Range of the iteration counter

# Noise floor
PER_TRIAL_THRESHOLD_SEC = 0.030  # A trial shorter than this is noise-dominated
AGGREGATE_THRESHOLD_SEC = 10 * PER_TRIAL_THRESHOLD_SEC  # Over-threshold time required

# Warn when a run overshoots its time target by this factor
OVERRUN_WARNING_FACTOR = 1.25

# Clock tick alignment
DEFAULT_MAX_SPINS = 1_000_000

# Zero-line calibration
DEFAULT_ZERO_LINE_TIME_SEC = 1.0

# Bootstrap
DEFAULT_RESAMPLES = 1000
DEFAULT_SEED = 5489  # Default seed of the Mersenne twister reference implementation
CONFIDENCE_SIGMAS = 3.0  # ~99.7% under a normal approximation

NS_PER_SEC = 1_000_000_000

# Exit codes
EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_INTERRUPTED = 130
