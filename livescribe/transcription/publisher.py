"""Transcript publisher module for pub/sub event publishing."""

import logging
from pubsub import pub

from ..models.transcript import TranscriptEvent

logger = logging.getLogger(__name__)

DEFAULT_TRANSCRIPT_TOPIC = "transcription_events"
DEFAULT_ERROR_TOPIC = "transcription_errors"


class TranscriptPublisher:
    """Publishes transcript and error events using pubsub.pub.

    Listeners on the transcript topic receive ``event``; listeners on the
    error topic receive ``channel_id`` and ``error``.
    """

    def __init__(self,
                 transcript_topic: str = DEFAULT_TRANSCRIPT_TOPIC,
                 error_topic: str = DEFAULT_ERROR_TOPIC):
        """Initialize transcript publisher.

        Args:
            transcript_topic: Pub/sub topic name for transcript events
            error_topic: Pub/sub topic name for transcription errors
        """
        self.transcript_topic = transcript_topic
        self.error_topic = error_topic
        logger.info(f"TranscriptPublisher initialized with topics: {transcript_topic}, {error_topic}")

    def publish_transcript(self, event: TranscriptEvent) -> None:
        """Publish a transcript event to all current subscribers."""
        pub.sendMessage(self.transcript_topic, event=event)
        logger.debug(f"Published transcript: {event.id}")

    def publish_error(self, channel_id: str, error: str) -> None:
        """Publish a terminal transcription error for a channel."""
        pub.sendMessage(self.error_topic, channel_id=channel_id, error=error)
        logger.debug(f"Published transcription error for {channel_id}: {error}")
