"""Stream resolution and audio capture module."""

from .stream_resolver import StreamResolver, build_channel_url
from .capture import AudioCapturer
from .process import run_process, ProcessResult

__all__ = [
    'StreamResolver',
    'build_channel_url',
    'AudioCapturer',
    'run_process',
    'ProcessResult',
]
