"""Hindi/English translation of recognized text using ChatGPT."""

import json
import logging

from .openai_client import OpenAIClient
from ..exceptions import TranslationError
from ..models.transcript import Translation
from .credentials import CredentialStore

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    'You are a translator. Translate the given text to both Hindi and English. '
    'Return JSON format only: {"hindi": "translated hindi text", "english": "translated english text"}'
)


class Translator:
    """Produces parallel renditions of text, degrading to pass-through on any failure."""

    def __init__(self,
                 client: OpenAIClient,
                 credentials: CredentialStore,
                 model: str = "gpt-4o-mini",
                 max_tokens: int = 500):
        self.client = client
        self.credentials = credentials
        self.model = model
        self.max_tokens = max_tokens

    async def translate(self, text: str) -> Translation:
        """Translate text to Hindi and English.

        Without a configured credential every rendition equals the input.
        Errors are logged and never raised.
        """
        if not self.credentials.is_configured:
            return Translation.passthrough(text)

        try:
            content = await self.client.create_chat_completion(
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": text},
                ],
                model=self.model,
                max_tokens=self.max_tokens,
                response_format={"type": "json_object"},
            )
            result = self._parse(content)
        except Exception as e:
            logger.error(f"Translation error: {e}")
            return Translation.passthrough(text)

        return Translation(
            original=text,
            hindi=self._field(result, "hindi") or text,
            english=self._field(result, "english") or text,
        )

    @staticmethod
    def _parse(content: str) -> dict:
        try:
            result = json.loads(content)
        except (TypeError, ValueError) as e:
            raise TranslationError(f"Malformed translation response: {e}") from e
        if not isinstance(result, dict):
            raise TranslationError(f"Expected a JSON object, got {type(result).__name__}")
        return result

    @staticmethod
    def _field(result: dict, name: str) -> str:
        value = result.get(name)
        return value.strip() if isinstance(value, str) else ""
