"""Timing helpers for profiling decompositions."""

from contextlib import contextmanager
import logging
import time
from typing import Callable, Iterator, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def format_elapsed(seconds: float) -> str:
    if seconds < 1:
        return f"{round(seconds * 1000, 3)} msec."
    return f"{round(seconds, 3)} sec."


@contextmanager
def measure_block(label: str = "") -> Iterator[None]:
    start = time.perf_counter()
    try:
        yield
    finally:
        logger.info("%s:\t%s", label, format_elapsed(time.perf_counter() - start))


def measure(label: str, f: Callable[[], T]) -> T:
    """Call ``f`` and log how long it took."""
    with measure_block(label):
        return f()
