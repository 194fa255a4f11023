import io

import pytest
from rich.console import Console

from livescribe.models.transcript import ContentAnalysis, Sentiment, TranscriptEvent, Translation
from livescribe.transcription.publisher import TranscriptPublisher
from livescribe.ui.console_monitor import TranscriptConsoleMonitor


def make_event(bjp=False, tmc=False, english="Rain expected"):
    return TranscriptEvent(
        id="@news-1",
        timestamp="09:15:00",
        channel_id="@news",
        chunk_index=7,
        translation=Translation(original="বৃষ্টি", hindi="बारिश", english=english),
        analysis=ContentAnalysis(bjp_mention=bjp, tmc_mention=tmc, sentiment=Sentiment.NEGATIVE),
    )


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def monitor(output):
    console = Console(file=output, width=120, color_system=None)
    monitor = TranscriptConsoleMonitor("monitor_events", "monitor_errors", console=console)
    yield monitor
    monitor.shutdown()


@pytest.mark.unit
def test_prints_published_transcripts(monitor, output):
    TranscriptPublisher("monitor_events", "monitor_errors").publish_transcript(make_event())

    text = output.getvalue()
    assert monitor.transcripts_shown == 1
    assert "[ALL] @news #7 09:15:00" in text
    assert "Rain expected" in text
    assert "negative" in text


@pytest.mark.unit
def test_political_title_lists_parties(monitor, output):
    TranscriptPublisher("monitor_events", "monitor_errors").publish_transcript(
        make_event(bjp=True, tmc=True, english="BJP and TMC")
    )

    assert "[POLITICAL] @news #7 09:15:00 (BJP TMC)" in output.getvalue()


@pytest.mark.unit
def test_prints_errors_without_markup(monitor, output):
    TranscriptPublisher("monitor_events", "monitor_errors").publish_error("@news", "[bold]bad[/bold] url")

    assert "@news: [bold]bad[/bold] url" in output.getvalue()


@pytest.mark.unit
def test_shutdown_unsubscribes(output):
    console = Console(file=output, width=120, color_system=None)
    monitor = TranscriptConsoleMonitor("monitor_events", "monitor_errors", console=console)
    monitor.shutdown()

    TranscriptPublisher("monitor_events", "monitor_errors").publish_transcript(make_event())

    assert monitor.transcripts_shown == 0
    assert output.getvalue() == ""
