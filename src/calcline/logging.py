"""
calcline logging setup.

Diagnostics go to stderr so they never interleave with replies on stdout.
Optionally mirrors records to a rotating log file.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(
    verbose: bool = False,
    log_file: Path | None = None,
    max_bytes: int = 1024 * 1024,
    backup_count: int = 3,
) -> logging.Logger:
    """
    Configure the ``calcline`` logger.

    Args:
        verbose: Log at DEBUG instead of WARNING
        log_file: Also write records to this file
        max_bytes: Max size per log file before rotation
        backup_count: Number of backup files to keep

    Returns:
        The configured package logger
    """
    level = logging.DEBUG if verbose else logging.WARNING
    formatter = logging.Formatter(LOG_FORMAT)

    root_logger = logging.getLogger("calcline")
    root_logger.setLevel(level)

    # Replace handlers from an earlier call
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(level)
    root_logger.addHandler(console_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        root_logger.addHandler(file_handler)

    return root_logger
