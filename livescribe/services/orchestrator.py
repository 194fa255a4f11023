"""Transcription session orchestrator.

Owns one capture -> transcribe -> translate -> classify -> publish loop per
channel:

    IDLE -> RESOLVING -> CAPTURING -> TRANSCRIBING -> PUBLISHING -> CAPTURING ...
    RESOLVING -> FAILED         (first resolution fails)
    any state -> STOPPED        (stop request, observed between chunks)

Only two things end a session: an explicit stop, and failure of the first
stream resolution. Every per-chunk failure is logged, the stream URL is
re-resolved and the loop carries on after the usual pause.
"""

import asyncio
import logging
import re
import time
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Union

from ..audio.capture import AudioCapturer, DEFAULT_CHUNK_DURATION
from ..audio.stream_resolver import StreamResolver
from ..exceptions import ResolutionError
from ..models.session import Session, SessionState
from ..models.transcript import TranscriptEvent
from ..transcription.base import AbstractTranscriptionBackend
from ..transcription.classifier import ContentClassifier
from ..transcription.credentials import CredentialStore
from ..transcription.publisher import TranscriptPublisher
from ..transcription.translator import Translator
from .session_registry import SessionRegistry

logger = logging.getLogger(__name__)

CREDENTIALS_REQUIRED_MESSAGE = "OpenAI API key required"


def segment_filename(channel_id: str, chunk_index: int, extension: str = "mp3") -> str:
    """Audio segment filename namespaced by channel and chunk index."""
    safe_channel = re.sub(r'[^\w\-@.]', '_', channel_id)
    return f"{safe_channel}_{chunk_index}.{extension}"


class TranscriptionOrchestrator:
    """Starts, runs and stops per-channel transcription sessions."""

    def __init__(self,
                 registry: SessionRegistry,
                 credentials: CredentialStore,
                 resolver: StreamResolver,
                 capturer: AudioCapturer,
                 backend: AbstractTranscriptionBackend,
                 translator: Translator,
                 classifier: ContentClassifier,
                 publisher: TranscriptPublisher,
                 temp_dir: Union[str, Path],
                 chunk_duration_seconds: float = DEFAULT_CHUNK_DURATION,
                 chunk_pause_seconds: float = 2.0):
        """Initialize orchestrator.

        Args:
            registry: Registry enforcing one session per channel
            credentials: Holder of the OpenAI credential; sessions refuse to start without one
            resolver: Resolves channel identifiers to stream URLs
            capturer: Captures fixed-duration audio segments
            backend: Speech-to-text backend
            translator: Produces Hindi/English renditions
            classifier: Flags topical mentions and sentiment
            publisher: Broadcasts transcript and error events
            temp_dir: Directory for transient audio segments
            chunk_duration_seconds: Length of each captured segment
            chunk_pause_seconds: Pause between chunks and after a failed chunk
        """
        self.registry = registry
        self.credentials = credentials
        self.resolver = resolver
        self.capturer = capturer
        self.backend = backend
        self.translator = translator
        self.classifier = classifier
        self.publisher = publisher
        self.temp_dir = Path(temp_dir)
        self.chunk_duration_seconds = chunk_duration_seconds
        self.chunk_pause_seconds = chunk_pause_seconds

        self.temp_dir.mkdir(parents=True, exist_ok=True)
        logger.info(f"TranscriptionOrchestrator initialized: chunk={chunk_duration_seconds}s, "
                    f"pause={chunk_pause_seconds}s, temp_dir={self.temp_dir}")

    def start(self, channel_id: str, filter_political: bool = False) -> bool:
        """Start transcription for a channel.

        Must be called from within the running event loop.

        Returns:
            True if a new session was started; False if credentials are
            missing or the channel already has a session
        """
        if not self.credentials.is_configured:
            logger.warning(f"Refusing to start {channel_id}: no OpenAI credential")
            self.publisher.publish_error(channel_id, CREDENTIALS_REQUIRED_MESSAGE)
            return False

        # Raises RuntimeError outside a running loop, before anything is registered
        loop = asyncio.get_running_loop()

        session = Session(channel_id=channel_id, filter_political=filter_political)
        if not self.registry.try_register(session):
            logger.info(f"Transcription already running for {channel_id}")
            return False

        mode = "political only" if filter_political else "all content"
        logger.info(f"Starting transcription for channel: {channel_id} (filter: {mode})")
        session.task = loop.create_task(
            self._run_session(session), name=f"transcription:{channel_id}"
        )
        return True

    def stop(self, channel_id: str) -> bool:
        """Request a cooperative stop; in-flight work for the current chunk finishes first.

        Returns:
            False if no session exists for the channel
        """
        session = self.registry.get(channel_id)
        if session is None:
            return False
        session.request_stop()
        logger.info(f"Stop requested for {channel_id}")
        return True

    def is_running(self, channel_id: str) -> bool:
        return self.registry.is_running(channel_id)

    def active_channels(self) -> List[str]:
        return self.registry.channels()

    async def shutdown(self, timeout: float = 10.0) -> None:
        """Stop every session and wait for the loops to exit; cancel stragglers."""
        sessions = self.registry.sessions()
        if not sessions:
            return

        logger.info(f"Shutting down {len(sessions)} transcription session(s)...")
        for session in sessions:
            session.request_stop()

        tasks = [s.task for s in sessions if s.task is not None]
        if not tasks:
            return
        done, pending = await asyncio.wait(tasks, timeout=timeout)
        for task in pending:
            logger.warning(f"Cancelling {task.get_name()} after {timeout}s")
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        logger.info("Transcription sessions shut down")

    async def _run_session(self, session: Session) -> None:
        """Session state machine; always removes the session from the registry on exit."""
        channel_id = session.channel_id
        try:
            session.state = SessionState.RESOLVING
            try:
                session.stream_url = await self.resolver.resolve(channel_id)
            except ResolutionError as e:
                session.state = SessionState.FAILED
                logger.error(f"Transcription error for {channel_id}: {e}")
                self.publisher.publish_error(channel_id, str(e))
                return

            while session.running:
                await self._process_chunk(session)
                await self._pause(session)

            session.state = SessionState.STOPPED
            elapsed = (datetime.now() - session.started_at).total_seconds()
            logger.info(f"Stopped transcription for {channel_id} after {session.chunk_index} chunks in {elapsed:.0f}s")

        except asyncio.CancelledError:
            session.state = SessionState.STOPPED
            raise
        except Exception as e:
            session.state = SessionState.FAILED
            logger.error(f"Transcription error for {channel_id}: {e}", exc_info=True)
            self.publisher.publish_error(channel_id, str(e))
        finally:
            self.registry.unregister(channel_id, session)

    async def _process_chunk(self, session: Session) -> None:
        """Run one capture/transcribe/publish cycle, absorbing any failure."""
        audio_path = self.temp_dir / segment_filename(session.channel_id, session.chunk_index)
        try:
            session.state = SessionState.CAPTURING
            await self.capturer.capture(session.stream_url, audio_path, self.chunk_duration_seconds)

            session.state = SessionState.TRANSCRIBING
            text = (await self.backend.transcribe(audio_path) or "").strip()

            session.state = SessionState.PUBLISHING
            if text and session.running:
                await self._publish(session, text)

            session.chunk_index += 1

        except Exception as e:
            logger.error(f"Chunk {session.chunk_index} error for {session.channel_id}: {e}")
            await self._refresh_stream_url(session)

        finally:
            self._remove_segment(audio_path)

    async def _publish(self, session: Session, text: str) -> None:
        """Translate, classify, and publish unless filtered out."""
        translation = await self.translator.translate(text)
        analysis = self.classifier.classify(text)

        event = TranscriptEvent(
            id=f"{session.channel_id}-{int(time.time() * 1000)}",
            timestamp=datetime.now().strftime("%H:%M:%S"),
            channel_id=session.channel_id,
            chunk_index=session.chunk_index,
            translation=translation,
            analysis=analysis,
        )

        if session.filter_political and not analysis.is_political:
            logger.info(f"[SKIPPED] Non-political: {translation.english[:30]}...")
            return

        if not session.running:
            return

        self.publisher.publish_transcript(event)
        if analysis.is_political:
            parties = " ".join(p for p, hit in (("BJP", analysis.bjp_mention),
                                                ("TMC", analysis.tmc_mention)) if hit)
            logger.info(f"[POLITICAL] {parties}: {translation.english[:50]}...")
        else:
            logger.info(f"[ALL] {translation.english[:50]}...")

    async def _refresh_stream_url(self, session: Session) -> None:
        """Re-resolve the stream URL; the stream may have rotated."""
        try:
            session.stream_url = await self.resolver.resolve(session.channel_id)
        except ResolutionError as e:
            logger.error(f"Failed to refresh stream URL for {session.channel_id}: {e}")

    async def _pause(self, session: Session) -> None:
        """Wait between chunks; returns early when a stop is requested."""
        try:
            await asyncio.wait_for(session.wait_stopped(), timeout=self.chunk_pause_seconds)
        except asyncio.TimeoutError:
            pass

    @staticmethod
    def _remove_segment(audio_path: Path) -> None:
        try:
            audio_path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Failed to remove audio segment {audio_path}: {e}")
