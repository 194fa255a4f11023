"""Abstract base classes for transcription backends."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Union
import logging

logger = logging.getLogger(__name__)


class AbstractTranscriptionBackend(ABC):
    """Abstract base class for speech-to-text backends."""

    @abstractmethod
    async def transcribe(self, audio_path: Union[str, Path]) -> str:
        """Transcribe an audio segment file and return the recognized text.

        Args:
            audio_path: Path to the captured audio segment

        Returns:
            Recognized text; may be empty when no speech was detected
        """
        pass
