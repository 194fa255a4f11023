from unittest.mock import patch

import pytest

from livescribe.models.transcript import ContentAnalysis, Sentiment, TranscriptEvent, Translation
from livescribe.transcription.publisher import TranscriptPublisher


@pytest.mark.unit
def test_publish_transcript_sends_event(publisher, collector):
    event = TranscriptEvent(
        id="@news-1", timestamp="10:00:00", channel_id="@news", chunk_index=0,
        translation=Translation.passthrough("hello"),
        analysis=ContentAnalysis(False, False, Sentiment.NEUTRAL),
    )

    publisher.publish_transcript(event)

    assert collector.transcripts == [event]


@pytest.mark.unit
def test_publish_error(publisher, collector):
    publisher.publish_error("@news", "Failed to get stream URL for '@news'")
    assert collector.errors == [("@news", "Failed to get stream URL for '@news'")]


@pytest.mark.unit
def test_default_topics():
    publisher = TranscriptPublisher()
    with patch("livescribe.transcription.publisher.pub") as mock_pub:
        publisher.publish_error("@news", "boom")

    mock_pub.sendMessage.assert_called_once_with("transcription_errors", channel_id="@news", error="boom")
