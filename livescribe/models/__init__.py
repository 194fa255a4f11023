"""Data models for the Livescribe application."""

from .session import Session, SessionState
from .transcript import Sentiment, Translation, ContentAnalysis, TranscriptEvent

__all__ = [
    "Session",
    "SessionState",
    "Sentiment",
    "Translation",
    "ContentAnalysis",
    "TranscriptEvent",
]
