"""Pytest configuration and fixtures for Livescribe tests."""

import asyncio
import logging
import tempfile
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Union

import pytest
from pubsub import pub

from livescribe.exceptions import CaptureError, ResolutionError
from livescribe.models.transcript import Translation
from livescribe.services.orchestrator import TranscriptionOrchestrator
from livescribe.services.session_registry import SessionRegistry
from livescribe.transcription.base import AbstractTranscriptionBackend
from livescribe.transcription.classifier import ContentClassifier
from livescribe.transcription.credentials import CredentialStore
from livescribe.transcription.publisher import TranscriptPublisher


# Configure logging for tests
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

TEST_TRANSCRIPT_TOPIC = "test_transcripts"
TEST_ERROR_TOPIC = "test_errors"


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests with no external processes or network")
    config.addinivalue_line("markers", "integration: tests that run a local aiohttp server or subprocess")


@pytest.fixture(autouse=True)
def reset_pubsub():
    """Drop every pubsub listener after each test."""
    yield
    pub.unsubAll()


@pytest.fixture
def temp_data_dir():
    """Create temporary directory for test data."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield temp_dir


class EventCollector:
    """Records everything published on the test topics."""

    def __init__(self):
        self.transcripts = []
        self.errors = []

    def on_transcript(self, event):
        self.transcripts.append(event)

    def on_error(self, channel_id, error):
        self.errors.append((channel_id, error))


@pytest.fixture
def collector():
    events = EventCollector()
    pub.subscribe(events.on_transcript, TEST_TRANSCRIPT_TOPIC)
    pub.subscribe(events.on_error, TEST_ERROR_TOPIC)
    return events


@pytest.fixture
def publisher():
    return TranscriptPublisher(transcript_topic=TEST_TRANSCRIPT_TOPIC, error_topic=TEST_ERROR_TOPIC)


class FakeResolver:
    """Stands in for StreamResolver; each call returns a fresh URL."""

    def __init__(self, fail_on_calls: Sequence[int] = (), always_fail: bool = False):
        self.fail_on_calls = set(fail_on_calls)
        self.always_fail = always_fail
        self.calls: List[str] = []

    async def resolve(self, channel_id: str) -> str:
        self.calls.append(channel_id)
        call_number = len(self.calls)
        if self.always_fail or call_number in self.fail_on_calls:
            raise ResolutionError(channel_id, "channel is not live")
        return f"https://media.example/{channel_id}/{call_number}.m3u8"


class FakeCapturer:
    """Stands in for AudioCapturer; writes a tiny file unless told to fail."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.calls = []

    async def capture(self, stream_url, destination, duration_seconds=30):
        self.calls.append((stream_url, Path(destination), duration_seconds))
        if self.fail:
            raise CaptureError("FFmpeg failed (exit code 1): stream ended", stream_url)
        Path(destination).write_bytes(b"ID3\x00fake-mp3")
        return Path(destination)


class FakeBackend(AbstractTranscriptionBackend):
    """Returns scripted texts in order, repeating the last one forever.

    An Exception instance in the script is raised instead of returned.
    """

    def __init__(self, texts: Sequence[Union[str, Exception]] = ("",), gate: Optional[asyncio.Event] = None):
        self.texts = list(texts)
        self.gate = gate
        self.calls: List[Path] = []
        self.file_existed: List[bool] = []

    async def transcribe(self, audio_path) -> str:
        self.calls.append(Path(audio_path))
        self.file_existed.append(Path(audio_path).exists())
        if self.gate is not None:
            await self.gate.wait()
        text = self.texts[min(len(self.calls), len(self.texts)) - 1]
        if isinstance(text, Exception):
            raise text
        return text


class FakeTranslator:
    """Deterministic translator that tags each rendition."""

    def __init__(self):
        self.calls: List[str] = []

    async def translate(self, text: str) -> Translation:
        self.calls.append(text)
        return Translation(original=text, hindi=f"hi: {text}", english=f"en: {text}")


@pytest.fixture
def make_orchestrator(tmp_path, publisher):
    """Factory building an orchestrator wired to fakes with a fast cadence."""

    def factory(resolver=None, capturer=None, backend=None, translator=None,
                credentials: Optional[CredentialStore] = None,
                registry: Optional[SessionRegistry] = None,
                pause: float = 0.01) -> TranscriptionOrchestrator:
        return TranscriptionOrchestrator(
            registry=registry if registry is not None else SessionRegistry(),
            credentials=credentials if credentials is not None else CredentialStore("sk-test"),
            resolver=resolver if resolver is not None else FakeResolver(),
            capturer=capturer if capturer is not None else FakeCapturer(),
            backend=backend if backend is not None else FakeBackend(),
            translator=translator if translator is not None else FakeTranslator(),
            classifier=ContentClassifier(),
            publisher=publisher,
            temp_dir=tmp_path / "segments",
            chunk_duration_seconds=1,
            chunk_pause_seconds=pause,
        )

    return factory


async def _wait_until(predicate: Callable[[], bool], timeout: float = 3.0, interval: float = 0.005) -> None:
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        if loop.time() > deadline:
            raise AssertionError(f"Condition not met within {timeout}s")
        await asyncio.sleep(interval)


@pytest.fixture
def wait_until():
    """Async helper that polls a predicate until it holds or times out."""
    return _wait_until
