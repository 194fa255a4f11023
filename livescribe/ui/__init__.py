"""Console output for Livescribe."""

from .console_monitor import TranscriptConsoleMonitor

__all__ = ["TranscriptConsoleMonitor"]
