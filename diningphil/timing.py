"""Wall-clock helpers and an interruptible precise sleep."""

from __future__ import annotations

import time
from collections.abc import Callable


def now_ms() -> int:
    """Current wall-clock time in milliseconds."""
    return time.time_ns() // 1_000_000


def now_us() -> int:
    """Current wall-clock time in microseconds."""
    return time.time_ns() // 1_000


def precise_sleep(usec: float, should_stop: Callable[[], bool]) -> None:
    """Sleep for ``usec`` microseconds, returning early once ``should_stop()``.

    Long waits sleep in halves of the remaining time; the last millisecond
    is spent spinning for accuracy.
    """
    start = now_us()
    while now_us() - start < usec:
        if should_stop():
            break
        remaining = usec - (now_us() - start)
        if remaining > 1000:
            time.sleep(remaining / 2 / 1_000_000)
        else:
            while now_us() - start < usec:
                pass