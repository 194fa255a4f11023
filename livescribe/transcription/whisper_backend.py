"""OpenAI Whisper speech-to-text backend."""

import logging
import time
from pathlib import Path
from typing import Union

from .base import AbstractTranscriptionBackend
from .openai_client import OpenAIClient
from ..exceptions import TranscriptionUnavailable
from .credentials import CredentialStore

logger = logging.getLogger(__name__)


class WhisperTranscriptionBackend(AbstractTranscriptionBackend):
    """Transcribes audio segments through the OpenAI audio API.

    The spoken language is auto-detected rather than pinned: Bengali is not
    accepted as a language hint by the API.
    """

    def __init__(self, client: OpenAIClient, credentials: CredentialStore, model: str = "whisper-1"):
        self.client = client
        self.credentials = credentials
        self.model = model

    async def transcribe(self, audio_path: Union[str, Path]) -> str:
        """Transcribe an audio segment.

        Raises:
            TranscriptionUnavailable: If no credential is configured
        """
        if not self.credentials.is_configured:
            raise TranscriptionUnavailable()

        start_time = time.time()
        text = await self.client.create_transcription(audio_path, model=self.model, response_format="text")
        logger.debug(f"Transcribed {Path(audio_path).name} in {time.time() - start_time:.2f}s "
                     f"({len(text)} chars)")
        return text
