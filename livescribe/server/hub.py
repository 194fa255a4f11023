"""WebSocket hub: dispatches control messages and fans published events out to clients."""

import asyncio
import json
import logging
from typing import Any, Dict, Set

from aiohttp import web
from pubsub import pub
from pydantic import ValidationError

from ..models.transcript import TranscriptEvent
from ..services.orchestrator import TranscriptionOrchestrator
from ..transcription.credentials import CredentialStore
from .requests import StartTranscriptionRequest, StopTranscriptionRequest

logger = logging.getLogger(__name__)


def make_frame(event: str, data: Dict[str, Any]) -> str:
    return json.dumps({"event": event, "data": data}, ensure_ascii=False)


class TranscriptionHub:
    """Tracks connected clients and bridges them to the orchestrator and pub/sub topics."""

    def __init__(self,
                 orchestrator: TranscriptionOrchestrator,
                 credentials: CredentialStore,
                 transcript_topic: str,
                 error_topic: str):
        self.orchestrator = orchestrator
        self.credentials = credentials
        self.transcript_topic = transcript_topic
        self.error_topic = error_topic

        self.clients: Set[web.WebSocketResponse] = set()
        self._pending: Set[asyncio.Task] = set()

        pub.subscribe(self._on_transcript, transcript_topic)
        pub.subscribe(self._on_error, error_topic)
        logger.info(f"TranscriptionHub subscribed to {transcript_topic}, {error_topic}")

    def add_client(self, ws: web.WebSocketResponse) -> None:
        self.clients.add(ws)
        logger.info(f"Client connected ({len(self.clients)} total)")

    def remove_client(self, ws: web.WebSocketResponse) -> None:
        self.clients.discard(ws)
        logger.info(f"Client disconnected ({len(self.clients)} total)")

    async def handle_message(self, ws: web.WebSocketResponse, raw: str) -> None:
        """Dispatch one inbound text frame."""
        try:
            message = json.loads(raw)
            if not isinstance(message, dict):
                raise ValueError("frame must be a JSON object")
            event = message.get("event")
            data = message.get("data") or {}

            if event == "start_transcription":
                request = StartTranscriptionRequest.model_validate(data)
                if self.credentials.initialize_if_missing(request.openai_key):
                    logger.info("OpenAI initialized from start request")
                self.orchestrator.start(request.channel_id, request.filter_political)
            elif event == "stop_transcription":
                request = StopTranscriptionRequest.model_validate(data)
                self.orchestrator.stop(request.channel_id)
            else:
                raise ValueError(f"unknown event {event!r}")

        except (ValueError, ValidationError) as e:
            logger.warning(f"Rejected control message: {e}")
            await ws.send_str(make_frame("error", {"message": str(e)}))

    def _on_transcript(self, event: TranscriptEvent) -> None:
        self._schedule_broadcast(make_frame("transcript", event.to_dict()))

    def _on_error(self, channel_id: str, error: str) -> None:
        self._schedule_broadcast(make_frame("transcription_error", {"channelId": channel_id, "error": error}))

    def _schedule_broadcast(self, frame: str) -> None:
        # Listeners run inside the publishing session's task
        task = asyncio.get_running_loop().create_task(self.broadcast(frame))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def broadcast(self, frame: str) -> None:
        """Send a frame to every connected client, dropping clients that fail."""
        for ws in list(self.clients):
            if ws.closed:
                self.clients.discard(ws)
                continue
            try:
                await ws.send_str(frame)
            except (ConnectionError, RuntimeError) as e:
                logger.warning(f"Dropping client after send failure: {e}")
                self.clients.discard(ws)

    async def close(self) -> None:
        """Unsubscribe, flush pending broadcasts and close client sockets."""
        for listener, topic in ((self._on_transcript, self.transcript_topic),
                                (self._on_error, self.error_topic)):
            try:
                pub.unsubscribe(listener, topic)
            except Exception as e:
                logger.warning(f"Error during unsubscribe: {e}")

        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)

        for ws in list(self.clients):
            await ws.close(code=1001, message=b"Server shutdown")
        self.clients.clear()
