"""Logging setup for the relauncher.

Logs to a file when configured, otherwise falls back to a simple stderr handler.
"""

from __future__ import annotations

import logging
import sys

_configured = False


def setup_logging(level: int | str = logging.INFO, log_file: str | None = None) -> None:
    """Configure the ``relauncher`` logger once.

    Args:
        level: Logging level, as an int or a name like ``"DEBUG"``.
        log_file: Path to a log file. If None, logs go to stderr.
    """
    global _configured
    if _configured:
        return

    if log_file:
        handler: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)

    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))

    root_logger = logging.getLogger("relauncher")
    root_logger.setLevel(level)
    root_logger.addHandler(handler)
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the relauncher namespace (e.g. ``"process.spawn"``)."""
    return logging.getLogger(f"relauncher.{name}")
