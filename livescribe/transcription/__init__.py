"""Transcription module for Livescribe."""

from .base import AbstractTranscriptionBackend
from .credentials import CredentialStore
from .openai_client import OpenAIClient
from .whisper_backend import WhisperTranscriptionBackend
from .translator import Translator
from .classifier import ContentClassifier
from .publisher import TranscriptPublisher

__all__ = [
    "AbstractTranscriptionBackend",
    "CredentialStore",
    "OpenAIClient",
    "WhisperTranscriptionBackend",
    "Translator",
    "ContentClassifier",
    "TranscriptPublisher",
]
