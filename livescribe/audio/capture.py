"""Fixed-duration audio capture from a live stream using FFmpeg."""

import asyncio
import logging
from pathlib import Path
from typing import Union

from ..exceptions import CaptureError, ProcessTimeoutError
from .process import run_process

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_DURATION = 30


class AudioCapturer:
    """Captures mono 16kHz audio segments suitable for speech-to-text."""

    def __init__(self,
                 executable: str = "ffmpeg",
                 sample_rate: int = 16000,
                 channels: int = 1,
                 codec: str = "libmp3lame",
                 timeout_grace_seconds: float = 10):
        self.executable = executable
        self.sample_rate = sample_rate
        self.channels = channels
        self.codec = codec
        self.timeout_grace_seconds = timeout_grace_seconds

    def build_command(self, stream_url: str, destination: Path, duration_seconds: float) -> list:
        """Build the FFmpeg command line for one segment."""
        return [
            self.executable,
            "-i", stream_url,
            "-t", str(duration_seconds),
            "-vn",                          # Strip video
            "-acodec", self.codec,
            "-ar", str(self.sample_rate),
            "-ac", str(self.channels),
            "-y", str(destination),         # Overwrite output
        ]

    async def capture(self,
                      stream_url: str,
                      destination: Union[str, Path],
                      duration_seconds: float = DEFAULT_CHUNK_DURATION) -> Path:
        """Capture duration_seconds of audio into destination.

        The transcoder is killed if it runs past duration_seconds plus the
        grace period. Partial output is discarded on every failure.

        Returns:
            Path of the written segment

        Raises:
            CaptureError: If FFmpeg fails, times out, or writes no file
        """
        destination = Path(destination)
        cmd = self.build_command(stream_url, destination, duration_seconds)
        deadline = duration_seconds + self.timeout_grace_seconds

        try:
            result = await run_process(*cmd, timeout=deadline)
        except FileNotFoundError:
            raise CaptureError(f"{self.executable} not found", stream_url)
        except ProcessTimeoutError:
            self._discard(destination)
            raise CaptureError("Audio capture timeout", stream_url)
        except asyncio.CancelledError:
            self._discard(destination)
            raise

        if result.returncode != 0 or not destination.exists():
            self._discard(destination)
            stderr_tail = result.stderr.strip()[-500:]
            raise CaptureError(
                f"FFmpeg failed (exit code {result.returncode}): {stderr_tail}", stream_url
            )

        logger.debug(f"Captured {duration_seconds}s segment: {destination}")
        return destination

    def _discard(self, path: Path) -> None:
        """Remove partial output, ignoring a missing file."""
        try:
            path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Failed to remove partial capture {path}: {e}")
