from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from .sample import Sample

if TYPE_CHECKING:
    from .analysis import AnalysisReport
    from .bootstrap import Estimate

_UNITS = (
    (1.0, 1.0, " s"),
    (1e-3, 1e3, " ms"),
    (1e-6, 1e6, " us"),
    (1e-9, 1e9, " ns"),
)


def format_duration(seconds: float) -> str:
    """Render a duration in the largest unit it reaches, with 3-4 significant digits."""
    sign = "-" if seconds < 0 else ""
    t = abs(seconds)
    for floor, scale, suffix in _UNITS:
        if t >= floor:
            k = t * scale
            break
    else:
        k, suffix = t * 1e12, " ps"

    if k >= 1e9:
        text = f"{k:.4g}"
    elif k >= 1e3:
        text = f"{k:.0f}"
    elif k >= 1e2:
        text = f"{k:.1f}"
    elif k >= 1e1:
        text = f"{k:.2f}"
    else:
        text = f"{k:.3f}"
    return sign + text + suffix


def render_sample_line(sample: Sample) -> str:
    line = f"{sample.iterations} for {format_duration(sample.wall_sec)} (cpu {format_duration(sample.cpu_sec)})"
    if sample.iterations > 0:
        wall = format_duration(sample.wall_per_iteration_ns / 1e9)
        cpu = format_duration(sample.cpu_per_iteration_ns / 1e9)
        line += f" ~ {wall}/cycle, cpu {cpu}/cycle"
    return line


def render_progress_line(round_no: int, sample: Sample, min_time_sec: float, elapsed_sec: float) -> str:
    width = 30
    ratio = min(1.0, elapsed_sec / min_time_sec if min_time_sec > 0 else 1.0)
    filled = int(width * ratio)
    bar = "█" * filled + "░" * (width - filled)
    return f"[{bar}] round {round_no} | {render_sample_line(sample)}"


def print_live_progress(line: str, enabled: bool) -> None:
    if enabled and sys.stdout.isatty():
        sys.stdout.write("\r\x1b[2K" + line)
        sys.stdout.flush()


def _format_estimate(estimate: Estimate) -> str:
    return (
        f"{format_duration(estimate.mean / 1e9)} "
        f"(lb {format_duration(estimate.lbound / 1e9)}, ub {format_duration(estimate.ubound / 1e9)})"
    )


def format_report(report: AnalysisReport) -> str:
    lines = [f"cpu time per iteration ({report.samples} samples, {report.resamples} resamples)"]
    for name, estimate in report.as_dict().items():
        lines.append(f"  {name:<8} {_format_estimate(estimate)}")
    return "\n".join(lines)
