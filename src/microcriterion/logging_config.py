"""Logging configuration for microcriterion."""

from __future__ import annotations

import logging
import sys

# Package logger; submodules log through children of it
logger = logging.getLogger("microcriterion")


def get_logger(name: str) -> logging.Logger:
    """Return a child of the package logger for a submodule.

    ``get_logger(__name__)`` inside ``microcriterion.sampler`` yields the
    ``microcriterion.sampler`` logger, so the handlers installed by
    :func:`setup_logging` see its records.
    """
    prefix = logger.name + "."
    if name.startswith(prefix):
        name = name[len(prefix):]
    return logger.getChild(name)


def setup_logging(
    verbose: bool = False,
    quiet: bool = False,
    log_file: str | None = None,
) -> None:
    """Configure logging for microcriterion.

    Args:
        verbose: Enable DEBUG level logging (one line per sampling round).
        quiet: Suppress INFO messages, only show WARNING and above.
        log_file: Optional file path to write logs to.
    """
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logger.setLevel(level)

    # Remove existing handlers to avoid duplicates on reconfiguration
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    console_handler.setFormatter(console_formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)  # Always log everything to file
        file_formatter = logging.Formatter(
            fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        file_handler.setFormatter(file_formatter)
        logger.addHandler(file_handler)

    logger.propagate = False
