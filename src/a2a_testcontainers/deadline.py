"""Wall-clock deadline with a cancellable sleep, used by the readiness polls."""

import threading
import time
from datetime import timedelta

from .exceptions import InterruptedWaitError


def to_seconds(timeout: float | timedelta) -> float:
    """Normalize a timeout given as seconds or timedelta."""
    if isinstance(timeout, timedelta):
        return timeout.total_seconds()
    return float(timeout)


class Deadline:
    """
    Monotonic deadline for poll loops.

    sleep() never oversleeps the deadline and wakes immediately when
    cancel() is called from another thread.
    """

    def __init__(self, timeout: float | timedelta, clock=time.monotonic):
        self.timeout = to_seconds(timeout)
        if self.timeout < 0:
            raise ValueError(f"Deadline timeout must be non-negative, got {self.timeout}")

        self._clock = clock
        self._start = clock()
        self._cancelled = threading.Event()

    @property
    def elapsed(self) -> float:
        return self._clock() - self._start

    @property
    def remaining(self) -> float:
        return max(0.0, self.timeout - self.elapsed)

    @property
    def expired(self) -> bool:
        return self.elapsed >= self.timeout

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def cancel(self) -> None:
        """Wake any sleeper; subsequent sleeps raise InterruptedWaitError."""
        self._cancelled.set()

    def sleep(self, interval: float) -> None:
        """
        Sleep for interval seconds or until the deadline, whichever is first.

        Raises:
            InterruptedWaitError: If the deadline was cancelled
        """
        if self._cancelled.wait(min(interval, self.remaining)):
            raise InterruptedWaitError(
                f"Wait cancelled after {self.elapsed:.1f}s", operation="wait"
            )

    def __repr__(self) -> str:
        return f"Deadline(timeout={self.timeout:.1f}s, remaining={self.remaining:.1f}s)"
