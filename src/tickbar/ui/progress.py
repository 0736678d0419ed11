"""Progress bar rendering."""

import io
import logging
import math
import sys
import time
from typing import Optional, TextIO

from ..core.stopwatch import Clock, Stopwatch

# Configure logging
logger = logging.getLogger(__name__)

DEFAULT_BAR_WIDTH = 40
DEFAULT_MIN_REFRESH_INTERVAL = 0.1

FULL_BLOCK = "█"

# Partial cell glyphs, emptiest first
GRADATION_GLYPHS = (
    "▏",
    "▎",
    "▍",
    "▌",
    "▋",
    "▊",
    "▉",
    FULL_BLOCK,
)

MAX_GRADATION_INDEX = 6


def gradation_index(progress: float) -> int:
    """Select the partial glyph for a progress fraction.

    Uses the position of the percentage within its 10% bucket, capped at 6.

    Args:
        progress: Fraction complete in [0, 1]

    Returns:
        Index into GRADATION_GLYPHS
    """
    index = int(progress * 100) - int(math.floor(progress * 10) * 10)
    return min(index, MAX_GRADATION_INDEX)


def gradation_glyph(index: int) -> str:
    """Return the glyph for a gradation index; out of range means full block."""
    if 0 <= index <= MAX_GRADATION_INDEX:
        return GRADATION_GLYPHS[index]
    return FULL_BLOCK


def filled_cells(progress: float, bar_width: int) -> int:
    """Number of whole blocks drawn before the gradation glyph.

    Rounds half away from zero and leaves the last cell for the gradation
    glyph.
    """
    filled = int(math.floor(progress * bar_width + 0.5))
    return max(0, min(filled, bar_width - 1))


def render_bar(progress: float, bar_width: int) -> str:
    """Render the delimited bar for a progress fraction.

    Args:
        progress: Fraction complete in [0, 1]
        bar_width: Number of interior cells

    Returns:
        Bar string such as ``|████▌     |``
    """
    filled = filled_cells(progress, bar_width)
    if progress >= 1:
        glyph = FULL_BLOCK
    else:
        glyph = gradation_glyph(gradation_index(progress))
    padding = max(0, bar_width - filled - 1)
    return "|" + FULL_BLOCK * filled + glyph + " " * padding + "|"


def estimate_remaining(elapsed: float, progress: float) -> float:
    """Estimate seconds remaining from elapsed time and progress.

    Returns ``inf`` before any progress has been made.
    """
    if progress <= 0:
        return math.inf
    return elapsed / progress - elapsed


def format_percentage(progress: float) -> str:
    """Format a progress fraction as a right-aligned percentage."""
    return f"{progress * 100:5.1f}%"


def format_timing(elapsed: float, eta: float) -> str:
    """Format elapsed time and ETA as `` [1.2s<3.4s]``."""
    return f" [{elapsed:.1f}s<{eta:.1f}s]"


def format_line(prefix: str, progress: float, bar_width: int,
                elapsed: float, eta: float) -> str:
    """Build one full progress line, leading carriage return included."""
    buffer = io.StringIO()
    buffer.write("\r")
    buffer.write(prefix)
    buffer.write(" ")
    buffer.write(format_percentage(progress))
    buffer.write(render_bar(progress, bar_width))
    buffer.write(format_timing(elapsed, eta))
    return buffer.getvalue()


class ProgressRenderer:
    """Tracks step progress and repaints a single terminal line.

    Repaints are throttled: ``advance`` only writes when more than
    ``min_refresh_interval`` seconds have passed since the previous repaint,
    unless forced. ``total_steps`` must be greater than zero.

    The output stream is borrowed; the renderer never closes it.

    Example:
        bar = ProgressRenderer(len(items))
        for item in items:
            process(item)
            bar.advance()
        bar.complete()
    """

    def __init__(
        self,
        total_steps: int,
        *,
        stream: Optional[TextIO] = None,
        prefix: str = "",
        bar_width: int = DEFAULT_BAR_WIDTH,
        min_refresh_interval: float = DEFAULT_MIN_REFRESH_INTERVAL,
        clock: Clock = time.monotonic
    ):
        """Initialize the renderer and start its timers.

        Args:
            total_steps: Number of steps that make up 100%
            stream: Output stream (defaults to standard error)
            prefix: Label printed before the percentage
            bar_width: Number of interior cells in the bar
            min_refresh_interval: Minimum seconds between unforced repaints
            clock: Monotonic clock used by both stopwatches
        """
        self.total_steps = total_steps
        self.current_step = 0
        self.stream = stream if stream is not None else sys.stderr
        self.prefix = prefix
        self.bar_width = bar_width
        self.min_refresh_interval = min_refresh_interval

        self._total_timer = Stopwatch(clock)
        self._refresh_timer = Stopwatch(clock)

        logger.debug(f"Progress renderer created for {total_steps} steps")

    @property
    def progress(self) -> float:
        """Fraction of steps completed."""
        return self.current_step / self.total_steps

    def advance(self, steps: int = 1, force: bool = False) -> None:
        """Record completed steps and repaint if due.

        Args:
            steps: Number of steps completed since the last call
            force: Repaint regardless of the refresh interval
        """
        if self.current_step + steps > self.total_steps:
            self.current_step = self.total_steps
        else:
            self.current_step += steps

        if self._time_since_refresh() > self.min_refresh_interval or force:
            self._refresh_timer.reset()
            self._repaint()

    def complete(self) -> None:
        """Jump to the last step and repaint unconditionally."""
        self.advance(self.total_steps - self.current_step, force=True)
        logger.debug(f"Progress complete after {self.elapsed_time():.3f}s")

    def restart(self) -> None:
        """Restart both timers; the step count is kept."""
        self._total_timer.reset()
        self._refresh_timer.reset()
        logger.debug("Progress timers restarted")

    def set_stream(self, stream: TextIO) -> None:
        self.stream = stream

    def set_prefix(self, prefix: str) -> None:
        self.prefix = prefix

    def set_bar_width(self, bar_width: int) -> None:
        self.bar_width = bar_width

    def set_min_refresh_interval(self, seconds: float) -> None:
        self.min_refresh_interval = seconds

    def elapsed_time(self) -> float:
        """Seconds since construction or the last restart."""
        return self._total_timer.peek()

    def _time_since_refresh(self) -> float:
        return self._refresh_timer.peek()

    def _repaint(self) -> None:
        progress = self.progress
        elapsed = self._total_timer.peek()
        eta = estimate_remaining(elapsed, progress)

        line = format_line(self.prefix, progress, self.bar_width, elapsed, eta)
        self.stream.write(line)
        self.stream.flush()

    # context manager sugar
    def __enter__(self) -> "ProgressRenderer":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.complete()
