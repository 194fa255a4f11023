"""Minimal OpenAI HTTP client for chat completions and audio transcriptions."""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import aiohttp

from ..exceptions import OpenAIAPIError, TranscriptionUnavailable
from .credentials import CredentialStore

logger = logging.getLogger(__name__)


class OpenAIClient:
    """Sends requests to the OpenAI API using the key held by a CredentialStore."""

    def __init__(self,
                 credentials: CredentialStore,
                 base_url: str = "https://api.openai.com/v1",
                 timeout_seconds: float = 60.0):
        """Initialize OpenAI client.

        Args:
            credentials: Holder of the active API key, read on every request
            base_url: API base URL
            timeout_seconds: Total timeout for a single request
        """
        self.credentials = credentials
        self.base_url = base_url.rstrip("/")
        self.timeout = aiohttp.ClientTimeout(total=timeout_seconds)

        logger.info(f"OpenAIClient initialized with base URL: {self.base_url}")

    def _headers(self) -> Dict[str, str]:
        api_key = self.credentials.api_key
        if not api_key:
            raise TranscriptionUnavailable("OpenAI API key not configured")
        return {"Authorization": f"Bearer {api_key}"}

    async def create_chat_completion(self,
                                     messages: List[Dict[str, str]],
                                     model: str = "gpt-4o-mini",
                                     max_tokens: int = 500,
                                     response_format: Optional[Dict[str, Any]] = None) -> str:
        """Send a chat completion request and return the first message content.

        Raises:
            OpenAIAPIError: If the API answers with a non-200 status
        """
        data: Dict[str, Any] = {
            "model": model,
            "messages": messages,
            "max_tokens": max_tokens,
        }
        if response_format:
            data["response_format"] = response_format

        async with aiohttp.ClientSession(timeout=self.timeout) as session:
            async with session.post(f"{self.base_url}/chat/completions",
                                    headers=self._headers(), json=data) as response:
                if response.status != 200:
                    error_text = await response.text()
                    raise OpenAIAPIError(response.status, error_text)

                result = await response.json()
                return result["choices"][0]["message"]["content"]

    async def create_transcription(self,
                                   audio_path: Union[str, Path],
                                   model: str = "whisper-1",
                                   response_format: str = "text") -> str:
        """Upload an audio file for transcription and return the text.

        Raises:
            OpenAIAPIError: If the API answers with a non-200 status
        """
        audio_path = Path(audio_path)
        headers = self._headers()

        with open(audio_path, "rb") as audio_file:
            form = aiohttp.FormData()
            # Channel handles may contain characters the multipart encoder escapes
            form.add_field("file", audio_file, filename=f"segment{audio_path.suffix}")
            form.add_field("model", model)
            form.add_field("response_format", response_format)

            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                async with session.post(f"{self.base_url}/audio/transcriptions",
                                        headers=headers, data=form) as response:
                    if response.status != 200:
                        error_text = await response.text()
                        raise OpenAIAPIError(response.status, error_text)

                    return await response.text()
