# logger_utils.py - logging setup and timing helpers

from __future__ import annotations

import logging
import time
from typing import Optional, Union

from rich.logging import RichHandler

PACKAGE_LOGGER = "prefix_completer"

# file lines look like: [2024-01-31 12:45:02] INFO    | message
FILE_FORMAT = "[%(asctime)s] %(levelname)-7s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: Union[int, str] = "WARNING",
                      log_path: Optional[str] = None,
                      console: bool = True) -> logging.Logger:
    """
    Attach handlers to the package logger.
    Console output goes through Rich, an optional file gets plain lines.
    Calling it again replaces the handlers instead of stacking them.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()

    if isinstance(level, str):
        level = level.upper()
    logger.setLevel(level)

    if console:
        logger.addHandler(RichHandler(show_path=False, rich_tracebacks=True))
    if log_path:
        fh = logging.FileHandler(log_path, encoding="utf-8")
        fh.setFormatter(logging.Formatter(FILE_FORMAT, DATE_FORMAT))
        logger.addHandler(fh)
    logger.propagate = False
    return logger


class Log:
    """Small helpers for metric lines and timing blocks."""

    _metrics = logging.getLogger(f"{PACKAGE_LOGGER}.metrics")

    @staticmethod
    def metric(tag: str, value, unit: str = "") -> None:
        """
        Record a metric (timing, counts, sizes).
        Example: insert corpus done: 0.123s
        """
        Log._metrics.info("%s: %s%s", tag, value, unit)

    @staticmethod
    def time_block(label: str, quiet: bool = False) -> "_Timer":
        """
        Measure how long a block takes:
            with Log.time_block("build") as t:
                do_some_work()
            t.elapsed  # seconds
        """
        return _Timer(label, quiet)


class _Timer:
    """Context manager used internally to measure time for a code block."""

    def __init__(self, label: str, quiet: bool = False):
        self.label = label
        self.quiet = quiet
        self.start = 0.0
        self.elapsed = 0.0

    def __enter__(self):
        self.start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.elapsed = time.perf_counter() - self.start
        if not self.quiet:
            Log.metric(f"{self.label} done", round(self.elapsed, 6), "s")
        return False
