"""Transcript-related data models."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Any


class Sentiment(str, Enum):
    """Coarse sentiment label."""
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


@dataclass(frozen=True)
class Translation:
    """Recognized text and its Hindi and English renditions."""
    original: str
    hindi: str
    english: str

    @classmethod
    def passthrough(cls, text: str) -> "Translation":
        """Degraded translation: every rendition equals the input."""
        return cls(original=text, hindi=text, english=text)


@dataclass(frozen=True)
class ContentAnalysis:
    """Topical-mention flags and sentiment for one chunk of text."""
    bjp_mention: bool
    tmc_mention: bool
    sentiment: Sentiment

    @property
    def is_political(self) -> bool:
        return self.bjp_mention or self.tmc_mention


@dataclass(frozen=True)
class TranscriptEvent:
    """One published unit of output. Never mutated, never persisted."""
    id: str
    timestamp: str
    channel_id: str
    chunk_index: int
    translation: Translation
    analysis: ContentAnalysis

    def to_dict(self) -> Dict[str, Any]:
        """Wire payload sent to subscribed clients."""
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "channelId": self.channel_id,
            "chunkIndex": self.chunk_index,
            "bengali": self.translation.original,
            "hindi": self.translation.hindi,
            "english": self.translation.english,
            "bjpMention": self.analysis.bjp_mention,
            "tmcMention": self.analysis.tmc_mention,
            "sentiment": self.analysis.sentiment.value,
        }
