"""Custom exceptions for the live transcription pipeline."""

from typing import Optional, Sequence


class LivescribeError(Exception):
    """Base class for pipeline errors."""


class ResolutionError(LivescribeError):
    """Raised when a channel's live stream URL cannot be obtained."""

    def __init__(self, channel_id: str, detail: str = ""):
        self.channel_id = channel_id
        self.detail = detail
        message = f"Failed to get stream URL for '{channel_id}'"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class CaptureError(LivescribeError):
    """Raised when an audio segment could not be captured."""

    def __init__(self, detail: str, stream_url: Optional[str] = None):
        self.detail = detail
        self.stream_url = stream_url
        super().__init__(detail)


class TranscriptionUnavailable(LivescribeError):
    """Raised when speech-to-text is requested without a configured credential."""

    def __init__(self, message: str = "OpenAI not initialized"):
        super().__init__(message)


class TranslationError(LivescribeError):
    """Raised inside the translator; never escapes it."""


class OpenAIAPIError(LivescribeError):
    """Raised when the OpenAI HTTP API answers with a non-2xx status."""

    def __init__(self, status: int, body: str):
        self.status = status
        self.body = body
        super().__init__(f"OpenAI API error: {status} - {body}")


class ProcessTimeoutError(LivescribeError):
    """Raised when an external process exceeds its deadline."""

    def __init__(self, cmd: Sequence[str], timeout: float):
        self.cmd = list(cmd)
        self.timeout = timeout
        super().__init__(f"Process '{self.cmd[0]}' timed out after {timeout:g}s")
