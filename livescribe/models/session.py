"""Session-related data models."""

import asyncio
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class SessionState(Enum):
    """Lifecycle state of a transcription session."""
    IDLE = "idle"
    RESOLVING = "resolving"
    CAPTURING = "capturing"
    TRANSCRIBING = "transcribing"
    PUBLISHING = "publishing"
    STOPPED = "stopped"
    FAILED = "failed"


@dataclass(eq=False)
class Session:
    """One channel's active transcription run."""
    channel_id: str
    filter_political: bool = False
    stream_url: Optional[str] = None
    chunk_index: int = 0
    state: SessionState = SessionState.IDLE
    started_at: datetime = field(default_factory=datetime.now)
    task: Optional["asyncio.Task"] = field(default=None, repr=False)
    _stop_event: asyncio.Event = field(default_factory=asyncio.Event, repr=False)

    @property
    def running(self) -> bool:
        return not self._stop_event.is_set()

    def request_stop(self) -> None:
        """Clear the running flag; the loop notices it between chunks."""
        self._stop_event.set()

    async def wait_stopped(self) -> None:
        await self._stop_event.wait()
