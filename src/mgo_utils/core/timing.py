"""
Elapsed-time helpers.

Typical use::

    label, started = running_time("copy_dir")
    ...
    track(label, started)

or, equivalently, ``with timed("copy_dir"): ...``.
"""

import time
from contextlib import contextmanager
from typing import Iterator, Optional, Tuple
from mgo_utils.core.logger import Logger, get_logger


def running_time(label: str, logger: Optional[Logger] = None) -> Tuple[str, float]:
    """Log the start of `label` and return it with the start time."""
    (logger or get_logger()).info(f"Start: {label}")
    return label, time.perf_counter()


def track(label: str, started: float, logger: Optional[Logger] = None) -> float:
    """Log the total time elapsed since `started` and return it in seconds."""
    elapsed = time.perf_counter() - started
    (logger or get_logger()).info(f"End: {label}. Total: {elapsed:.3f}s")
    return elapsed


@contextmanager
def timed(label: str, logger: Optional[Logger] = None) -> Iterator[None]:
    label, started = running_time(label, logger)
    try:
        yield
    finally:
        track(label, started, logger)
