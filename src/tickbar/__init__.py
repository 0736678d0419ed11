"""tickbar - lightweight terminal progress bar with elapsed time and ETA."""

__version__ = "0.1.0"

from .core.stopwatch import Stopwatch
from .ui.progress import ProgressRenderer

__all__ = ["__version__", "Stopwatch", "ProgressRenderer"]
