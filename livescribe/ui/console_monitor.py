"""Console monitor that prints published transcripts as they arrive."""

import logging
from typing import Optional

from pubsub import pub
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from ..models.transcript import Sentiment, TranscriptEvent

logger = logging.getLogger(__name__)

SENTIMENT_STYLES = {
    Sentiment.POSITIVE: "green",
    Sentiment.NEGATIVE: "red",
    Sentiment.NEUTRAL: "white",
}


class TranscriptConsoleMonitor:
    """Subscribes to the transcript and error topics and renders them with rich."""

    def __init__(self, transcript_topic: str, error_topic: str, console: Optional[Console] = None):
        self.transcript_topic = transcript_topic
        self.error_topic = error_topic
        self.console = console or Console()
        self.transcripts_shown = 0

        pub.subscribe(self._on_transcript, transcript_topic)
        pub.subscribe(self._on_error, error_topic)
        logger.info(f"TranscriptConsoleMonitor subscribed to {transcript_topic}, {error_topic}")

    def render(self, event: TranscriptEvent) -> Panel:
        """Build the panel shown for one transcript."""
        analysis = event.analysis
        tags = [name for name, hit in (("BJP", analysis.bjp_mention), ("TMC", analysis.tmc_mention)) if hit]
        tag = "[POLITICAL]" if tags else "[ALL]"

        body = Text()
        body.append(event.translation.original + "\n")
        body.append(event.translation.hindi + "\n", style="cyan")
        body.append(event.translation.english, style="bold")

        title = f"{tag} {event.channel_id} #{event.chunk_index} {event.timestamp}"
        if tags:
            title += f" ({' '.join(tags)})"
        subtitle = Text(analysis.sentiment.value, style=SENTIMENT_STYLES[analysis.sentiment])
        return Panel(body, title=Text(title), subtitle=subtitle, border_style="yellow" if tags else "blue")

    def _on_transcript(self, event: TranscriptEvent) -> None:
        self.transcripts_shown += 1
        self.console.print(self.render(event))

    def _on_error(self, channel_id: str, error: str) -> None:
        self.console.print(f"❌ {channel_id}: {error}", style="red", markup=False)

    def shutdown(self) -> None:
        for listener, topic in ((self._on_transcript, self.transcript_topic),
                                (self._on_error, self.error_topic)):
            try:
                pub.unsubscribe(listener, topic)
            except Exception as e:
                logger.warning(f"Error during unsubscribe: {e}")
        logger.info(f"TranscriptConsoleMonitor shut down after {self.transcripts_shown} transcripts")
