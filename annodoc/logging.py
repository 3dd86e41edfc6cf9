"""Logging helpers shared by the annodoc compiler stages."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

_ROOT = "annodoc"


def get_logger(stage: str | None = None) -> logging.Logger:
    """Return the logger for a compiler stage (``annodoc.<stage>``)."""
    return logging.getLogger(f"{_ROOT}.{stage}" if stage else _ROOT)


def configure_logging(
    *, verbose: bool = False, quiet: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Route annodoc log records to stderr and, optionally, a log file."""
    if quiet:
        level = logging.WARNING
    else:
        level = logging.DEBUG if verbose else logging.INFO

    logger = logging.getLogger(_ROOT)
    # The file sink records debug output regardless of console verbosity.
    logger.setLevel(logging.DEBUG if log_file is not None else level)
    logger.propagate = False

    # Drop handlers left over from an earlier main() call in the same process.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(logging.Formatter("[annodoc] %(levelname)s %(message)s"))
    logger.addHandler(console)

    if log_file is not None:
        sink = logging.FileHandler(log_file, encoding="utf-8")
        sink.setLevel(logging.DEBUG)
        sink.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        logger.addHandler(sink)

    return logger


__all__ = ["configure_logging", "get_logger"]
