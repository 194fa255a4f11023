"""Process-wide holder for the OpenAI credential."""

import logging
from typing import Optional

logger = logging.getLogger(__name__)


class CredentialStore:
    """Holds at most one active API key for the transcription/translation capability."""

    def __init__(self, api_key: Optional[str] = None):
        self._api_key: Optional[str] = None
        if api_key:
            self.set(api_key)

    @property
    def api_key(self) -> Optional[str]:
        return self._api_key

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key)

    def set(self, api_key: str) -> None:
        """Set the active key, replacing any previous one."""
        if not api_key:
            raise ValueError("API key must be a non-empty string")
        replaced = self._api_key is not None
        self._api_key = api_key
        logger.info("OpenAI credential %s", "replaced" if replaced else "initialized")

    def initialize_if_missing(self, api_key: Optional[str]) -> bool:
        """Set the key only when none is active.

        Returns:
            True if the supplied key became the active one
        """
        if not api_key or self.is_configured:
            return False
        self.set(api_key)
        return True

    def clear(self) -> None:
        self._api_key = None
        logger.info("OpenAI credential cleared")
