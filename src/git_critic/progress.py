"""Elapsed-time tracking and time-remaining estimates for long save runs."""

from __future__ import annotations

import time
from typing import Callable, Optional


class ProgressEstimator:
    """Average seconds per file and projected time remaining.

    Purely presentational; nothing in the save pipeline depends on it.
    """

    def __init__(self, total: int, clock: Callable[[], float] = time.monotonic) -> None:
        self.total = total
        self._clock = clock
        self._start: Optional[float] = None
        self._last: Optional[float] = None

    def start(self) -> None:
        self._start = self._last = self._clock()

    def elapsed(self) -> float:
        if self._start is None:
            return 0.0
        return self._clock() - self._start

    def lap(self) -> float:
        """Seconds since the previous lap (or start)."""
        now = self._clock()
        if self._last is None:
            self._start = self._last = now
            return 0.0
        taken, self._last = now - self._last, now
        return taken

    def update(self, completed: int) -> tuple[float, float]:
        """Return ``(avg_seconds_per_item, estimated_seconds_remaining)``."""
        if self._start is None:
            self.start()
        if completed <= 0:
            return 0.0, 0.0
        avg = self.elapsed() / completed
        remaining = avg * max(self.total - completed, 0)
        return avg, remaining

    def message(self, completed: int, filename: str, took: float) -> str:
        """Progress line: ``[  n/  r] file - took: Ns, avg time: A, est time remaining: Ns``."""
        avg, remaining = self.update(completed)
        return "[%3d/%3d] %s - took: %ds, avg time: %5.2f, est time remaining: %ds" % (
            completed,
            self.total - completed,
            filename,
            took,
            avg,
            int(remaining),
        )
