"""Services layer for Livescribe session management."""

from .session_registry import SessionRegistry
from .orchestrator import TranscriptionOrchestrator

__all__ = [
    "SessionRegistry",
    "TranscriptionOrchestrator",
]
