"""Logging setup and run timing helpers."""

from __future__ import annotations

import logging
import time
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
NOISY_LOGGERS = ("httpx", "httpcore")


def configure_logging(*, verbose: bool = False, force: bool = False) -> None:
    """Install a single stderr handler on the root logger.

    Does nothing when handlers are already installed unless ``force`` is True.
    """
    root_logger = logging.getLogger()
    if root_logger.handlers and not force:
        return

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, handlers=[console_handler])

    # httpx logs full request lines at INFO; keep them out of debug output.
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


@dataclass(slots=True)
class Stopwatch:
    """Elapsed wall time of a timed block."""

    elapsed_seconds: float = 0.0


@contextmanager
def timed() -> Iterator[Stopwatch]:
    """Measure the wall time spent inside the ``with`` block."""
    stopwatch = Stopwatch()
    started = time.perf_counter()
    try:
        yield stopwatch
    finally:
        stopwatch.elapsed_seconds = time.perf_counter() - started
