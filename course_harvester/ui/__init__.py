"""User interaction helpers."""

from .progress import ProgressReporter, StageCounters, render_progress_line

__all__ = ["ProgressReporter", "StageCounters", "render_progress_line"]
