"""Control/publish surface for Livescribe."""

from .app import create_app, build_orchestrator
from .hub import TranscriptionHub

__all__ = [
    "create_app",
    "build_orchestrator",
    "TranscriptionHub",
]
