from __future__ import annotations

import argparse
import importlib
import os
import sys
from dataclasses import dataclass
from typing import cast

from .analysis import AnalysisReport, analyze
from .calibration import ZeroLine
from .clock import Workload
from .constants import (
    DEFAULT_MIN_TIME_SEC,
    DEFAULT_RESAMPLES,
    DEFAULT_SEED,
    DEFAULT_ZERO_LINE_TIME_SEC,
    EXIT_ERROR,
    EXIT_INTERRUPTED,
    EXIT_SUCCESS,
)
from .cpu_affinity import set_affinity
from .exceptions import BenchmarkError
from .logging_config import logger, setup_logging
from .progress import format_report, print_live_progress, render_progress_line, render_sample_line
from .sample import Sample
from .sampler import run_benchmark


@dataclass
class RunConfig:
    target: str
    min_time_sec: float
    zero_line: bool
    zero_line_sec: float
    resamples: int
    seed: int
    pin_core: int | None
    live_progress: bool
    log_file: str | None = None
    verbose: bool = False


def parse_args(argv: list[str] | None = None) -> tuple[RunConfig, bool, bool]:
    p = argparse.ArgumentParser(
        description="Measure the per-iteration cost of a Python callable with bootstrap confidence bounds"
    )
    p.add_argument(
        "target",
        help="Workload as module:callable; called as workload(n) for each trial",
    )
    p.add_argument(
        "--min-time-sec",
        type=float,
        default=DEFAULT_MIN_TIME_SEC,
        dest="min_time_sec",
        help=f"Soft target for total measurement time (default: {DEFAULT_MIN_TIME_SEC})",
    )
    p.add_argument(
        "--zero-line-sec",
        type=float,
        default=DEFAULT_ZERO_LINE_TIME_SEC,
        dest="zero_line_sec",
        help=f"Time spent calibrating measurement overhead (default: {DEFAULT_ZERO_LINE_TIME_SEC})",
    )
    p.add_argument(
        "--no-zero-line",
        action="store_true",
        default=False,
        dest="no_zero_line",
        help="Skip calibration and report raw timings",
    )
    p.add_argument(
        "--resamples",
        type=int,
        default=DEFAULT_RESAMPLES,
        help=f"Bootstrap resamples (default: {DEFAULT_RESAMPLES})",
    )
    p.add_argument("--seed", type=int, default=DEFAULT_SEED, help=f"Bootstrap seed (default: {DEFAULT_SEED})")
    p.add_argument(
        "--pin-core", type=int, default=None, dest="pin_core", help="Pin this process to a given CPU core index"
    )
    p.add_argument(
        "--no-live", action="store_true", default=False, dest="no_live", help="Disable live single-line progress output"
    )
    p.add_argument("--log-file", default=None, dest="log_file", help="Also write DEBUG logs to this file")
    p.add_argument("-v", "--verbose", action="store_true", default=False, help="Enable verbose/debug logging")
    p.add_argument(
        "-q", "--quiet", action="store_true", default=False, help="Suppress info messages, only show warnings and errors"
    )
    args = p.parse_args(argv)

    return RunConfig(
        target=args.target,
        min_time_sec=args.min_time_sec,
        zero_line=not args.no_zero_line,
        zero_line_sec=args.zero_line_sec,
        resamples=args.resamples,
        seed=args.seed,
        pin_core=args.pin_core,
        live_progress=(not args.no_live),
        log_file=args.log_file,
        verbose=args.verbose,
    ), args.verbose, args.quiet


def validate_config(cfg: RunConfig) -> None:
    """Validate configuration argument consistency."""
    if cfg.min_time_sec < 0:
        raise ValueError("--min-time-sec must be >= 0")
    if cfg.zero_line_sec < 0:
        raise ValueError("--zero-line-sec must be >= 0")
    if cfg.resamples <= 0:
        raise ValueError("--resamples must be > 0")
    if cfg.pin_core is not None and cfg.pin_core < 0:
        raise ValueError("--pin-core must be >= 0")


def _ensure_on_path(path: str) -> None:
    if path not in sys.path:
        sys.path.insert(0, path)


def load_workload(target: str) -> Workload:
    """Resolve a ``package.module:function`` target to a workload.

    The callable is invoked as ``workload(n)`` and is expected to route
    each result through :func:`~microcriterion.sink.black_box`. Dotted
    names after the colon reach attributes of module-level objects.
    """
    module_name, sep, attr_path = target.partition(":")
    if not sep or not module_name or not attr_path:
        raise ValueError(f"Workload must look like 'module:callable', got {target!r}")
    try:
        obj: object = importlib.import_module(module_name)
    except ImportError as e:
        raise ValueError(f"Cannot import workload module {module_name!r}: {e}") from e
    for name in attr_path.split("."):
        try:
            obj = getattr(obj, name)
        except AttributeError as e:
            raise ValueError(f"Module {module_name!r} has no attribute {attr_path!r}") from e
    if not callable(obj):
        raise ValueError(f"Workload {target!r} is not callable")
    return cast(Workload, obj)


class LiveProgress:
    """Progress sink drawing one status line per sampling round."""

    def __init__(self, min_time_sec: float, enabled: bool) -> None:
        self.min_time_sec = min_time_sec
        self.enabled = enabled
        self.elapsed_sec = 0.0

    def __call__(self, round_no: int, sample: Sample) -> None:
        self.elapsed_sec += max(0.0, sample.wall_sec)
        logger.debug("Round %d: %s", round_no, render_sample_line(sample))
        print_live_progress(
            render_progress_line(round_no, sample, self.min_time_sec, self.elapsed_sec),
            enabled=self.enabled,
        )

    def finish(self) -> None:
        if self.enabled and sys.stdout.isatty():
            sys.stdout.write("\n")
            sys.stdout.flush()


def finalize_and_report(report: AnalysisReport, progress: LiveProgress) -> None:
    """Finish the live line and print the report."""
    progress.finish()
    print(format_report(report))


def main(argv: list[str] | None = None) -> int:
    cfg, verbose, quiet = parse_args(argv)

    # Set up logging before anything else
    setup_logging(verbose=verbose, quiet=quiet, log_file=cfg.log_file)

    logger.debug(
        "Config: min_time_sec=%.3f, zero_line=%s, resamples=%d, seed=%d",
        cfg.min_time_sec,
        cfg.zero_line,
        cfg.resamples,
        cfg.seed,
    )

    try:
        validate_config(cfg)
        _ensure_on_path(os.getcwd())
        workload = load_workload(cfg.target)
    except ValueError as e:
        logger.error("Configuration error: %s", e)
        return EXIT_ERROR

    if cfg.pin_core is not None:
        set_affinity(cfg.pin_core)

    progress = LiveProgress(cfg.min_time_sec, enabled=cfg.live_progress)

    try:
        baseline = None
        if cfg.zero_line:
            baseline = ZeroLine(cfg.zero_line_sec, resamples=cfg.resamples, seed=cfg.seed).baseline()
        logger.info("Benchmarking %s", cfg.target)
        samples = run_benchmark(workload, cfg.min_time_sec, baseline=baseline, on_sample=progress)
    except KeyboardInterrupt:
        progress.finish()
        logger.warning("Interrupted by user")
        return EXIT_INTERRUPTED
    except BenchmarkError as e:
        progress.finish()
        logger.error("Benchmark error: %s", e)
        return EXIT_ERROR

    report = analyze(samples, resamples=cfg.resamples, seed=cfg.seed)
    finalize_and_report(report, progress)
    logger.info("Completed successfully")
    return EXIT_SUCCESS
