"""In-memory registry of running transcription sessions."""

import logging
from typing import Dict, List, Optional

from ..models.session import Session

logger = logging.getLogger(__name__)


class SessionRegistry:
    """Maps channel identifiers to their running Session.

    Owned by a single event loop, so each operation is atomic per key.
    Nothing is persisted; a restart drops every entry.
    """

    def __init__(self):
        self._sessions: Dict[str, Session] = {}

    def try_register(self, session: Session) -> bool:
        """Register a session unless its channel already has one.

        Returns:
            False if the channel is already present (existing entry untouched)
        """
        if session.channel_id in self._sessions:
            return False
        self._sessions[session.channel_id] = session
        logger.debug(f"Registered session for {session.channel_id}")
        return True

    def unregister(self, channel_id: str, session: Optional[Session] = None) -> bool:
        """Remove a channel's entry.

        Args:
            channel_id: Channel to remove
            session: If given, remove only when it is the registered session

        Returns:
            True if an entry was removed
        """
        current = self._sessions.get(channel_id)
        if current is None or (session is not None and current is not session):
            return False
        del self._sessions[channel_id]
        logger.debug(f"Unregistered session for {channel_id}")
        return True

    def is_running(self, channel_id: str) -> bool:
        return channel_id in self._sessions

    def get(self, channel_id: str) -> Optional[Session]:
        return self._sessions.get(channel_id)

    def channels(self) -> List[str]:
        return list(self._sessions)

    def sessions(self) -> List[Session]:
        return list(self._sessions.values())

    def __len__(self) -> int:
        return len(self._sessions)
