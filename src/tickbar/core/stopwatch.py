"""Monotonic stopwatch."""

import time
from typing import Callable

Clock = Callable[[], float]


def elapsed_seconds(start: float, end: float) -> float:
    """Return the number of seconds between two clock readings.

    Args:
        start: Earlier reading
        end: Later reading

    Returns:
        Elapsed seconds
    """
    return end - start


class Stopwatch:
    """Measures elapsed time from a start instant.

    Readings come from a monotonic clock, so adjustments to the system
    calendar time never make the stopwatch run backwards.
    """

    def __init__(self, clock: Clock = time.monotonic):
        """Start the stopwatch.

        Args:
            clock: Zero-argument callable returning monotonic seconds
        """
        self._clock = clock
        self._start = clock()

    @property
    def start_instant(self) -> float:
        """Clock reading captured at construction or the last reset."""
        return self._start

    def reset(self) -> float:
        """Restart the stopwatch.

        Returns:
            Seconds elapsed since the previous start instant
        """
        previous = self._start
        self._start = self._clock()
        return elapsed_seconds(previous, self._start)

    def peek(self) -> float:
        """Seconds elapsed since the start instant, without restarting."""
        return elapsed_seconds(self._start, self._clock())
