"""Livescribe - live stream transcription, translation and classification."""

__version__ = "0.1.0"
