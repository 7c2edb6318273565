"""CPU pinning for the measuring process.

Trials measure process CPU time, so migrating between cores mid-run adds
cache and frequency noise. Pinning the benchmark process to one core
removes that source. Supported where psutil exposes ``cpu_affinity``
(Linux, Windows, FreeBSD); on macOS pinning is reported as unsupported.
"""

from __future__ import annotations

import os
import platform

import psutil

from .logging_config import get_logger

logger = get_logger(__name__)


def is_affinity_supported() -> bool:
    """Check if CPU affinity is supported on this platform."""
    return hasattr(psutil.Process, "cpu_affinity")


def get_cpu_count() -> int:
    """Get the number of available CPUs."""
    return psutil.cpu_count(logical=True) or os.cpu_count() or 1


def validate_core_id(core_id: int) -> bool:
    """Validate that a core ID is valid for this system."""
    if core_id < 0:
        return False
    return core_id < get_cpu_count()


def set_affinity(core_id: int) -> bool:
    """Pin the current process to ``core_id``.

    Args:
        core_id: The CPU core index to pin to.

    Returns:
        True if affinity was set successfully, False otherwise.
    """
    if not validate_core_id(core_id):
        logger.warning(
            "Invalid core_id %d: system has %d cores (0-%d)",
            core_id,
            get_cpu_count(),
            get_cpu_count() - 1,
        )
        return False

    if not is_affinity_supported():
        logger.warning("CPU affinity not supported on %s", platform.system())
        return False

    try:
        psutil.Process().cpu_affinity([core_id])
    except (psutil.AccessDenied, psutil.NoSuchProcess, OSError) as e:
        logger.warning("Failed to set CPU affinity: %s", e)
        return False
    logger.debug("Pinned process to core %d", core_id)
    return True
