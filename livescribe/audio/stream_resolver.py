"""Live stream URL resolution using yt-dlp."""

import logging
from typing import Optional

from ..exceptions import ResolutionError, ProcessTimeoutError
from .process import run_process

logger = logging.getLogger(__name__)

HANDLE_MARKER = "@"
CHANNEL_ID_PREFIX = "UC"


def build_channel_url(channel_id: str, base_url: str = "https://www.youtube.com") -> str:
    """Build the live page URL for a channel.

    Supports both channel IDs (UC...) and handles (@channelname). Anything
    else is treated as a handle without the leading marker.
    """
    if channel_id.startswith(HANDLE_MARKER):
        return f"{base_url}/{channel_id}/live"
    if channel_id.startswith(CHANNEL_ID_PREFIX):
        return f"{base_url}/channel/{channel_id}/live"
    return f"{base_url}/{HANDLE_MARKER}{channel_id}/live"


class StreamResolver:
    """Resolves a channel identifier to a direct media URL for its live broadcast."""

    def __init__(self,
                 executable: str = "yt-dlp",
                 format_selector: str = "worst[ext=mp4]",
                 base_url: str = "https://www.youtube.com",
                 timeout: Optional[float] = 60.0):
        """Initialize stream resolver.

        Args:
            executable: yt-dlp executable name or path
            format_selector: Format to request; the lowest quality that still carries audio
            base_url: Platform base URL used to build channel page URLs
            timeout: Seconds before the extraction process is killed, or None
        """
        self.executable = executable
        self.format_selector = format_selector
        self.base_url = base_url
        self.timeout = timeout

    async def resolve(self, channel_id: str) -> str:
        """Resolve a channel's currently valid stream URL.

        Spawns one extraction process per call and never retries.

        Raises:
            ResolutionError: If the tool fails, times out, or prints nothing
        """
        page_url = build_channel_url(channel_id, self.base_url)
        cmd = [self.executable, "-f", self.format_selector, "-g", page_url]

        try:
            result = await run_process(*cmd, timeout=self.timeout)
        except FileNotFoundError:
            raise ResolutionError(channel_id, f"{self.executable} not found")
        except ProcessTimeoutError as e:
            raise ResolutionError(channel_id, str(e))

        lines = [line.strip() for line in result.stdout.splitlines() if line.strip()]
        if result.returncode != 0 or not lines:
            raise ResolutionError(channel_id, result.stderr.strip())

        logger.info(f"Got stream URL for {channel_id}")
        return lines[0]
