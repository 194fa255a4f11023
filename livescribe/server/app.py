"""aiohttp application exposing the transcription control/publish surface.

Routes:
    GET  /transcription             WebSocket: start/stop requests in, transcript events out
    POST /api/transcription/init    Initialize the OpenAI credential
    GET  /health                    Liveness and active sessions
"""

import logging
from typing import Optional, Sequence

from aiohttp import web, WSMsgType
from pydantic import ValidationError

from ..audio.capture import AudioCapturer
from ..audio.stream_resolver import StreamResolver
from ..config import LivescribeConfig
from ..services.orchestrator import TranscriptionOrchestrator
from ..services.session_registry import SessionRegistry
from ..transcription.classifier import ContentClassifier
from ..transcription.credentials import CredentialStore
from ..transcription.openai_client import OpenAIClient
from ..transcription.publisher import TranscriptPublisher
from ..transcription.translator import Translator
from ..transcription.whisper_backend import WhisperTranscriptionBackend
from .hub import TranscriptionHub
from .requests import InitCredentialsRequest

logger = logging.getLogger(__name__)

CONFIG_KEY = web.AppKey("config", LivescribeConfig)
CREDENTIALS_KEY = web.AppKey("credentials", CredentialStore)
ORCHESTRATOR_KEY = web.AppKey("orchestrator", TranscriptionOrchestrator)
HUB_KEY = web.AppKey("hub", TranscriptionHub)


def build_orchestrator(config: LivescribeConfig, credentials: CredentialStore) -> TranscriptionOrchestrator:
    """Wire the production pipeline components from configuration."""
    client = OpenAIClient(
        credentials,
        base_url=config.get('openai.base_url'),
        timeout_seconds=float(config.get('openai.request_timeout_seconds', 60.0)),
    )
    resolver = StreamResolver(
        executable=config.get('resolver.executable', 'yt-dlp'),
        format_selector=config.get('resolver.format', 'worst[ext=mp4]'),
        base_url=config.get('resolver.base_url', 'https://www.youtube.com'),
        timeout=config.get('resolver.timeout_seconds'),
    )
    capturer = AudioCapturer(
        executable=config.get('capture.executable', 'ffmpeg'),
        sample_rate=int(config.get('capture.sample_rate', 16000)),
        channels=int(config.get('capture.channels', 1)),
        codec=config.get('capture.codec', 'libmp3lame'),
        timeout_grace_seconds=float(config.get('capture.timeout_grace_seconds', 10)),
    )
    backend = WhisperTranscriptionBackend(
        client, credentials, model=config.get('openai.transcription_model', 'whisper-1')
    )
    translator = Translator(
        client,
        credentials,
        model=config.get('openai.translation_model', 'gpt-4o-mini'),
        max_tokens=int(config.get('openai.translation_max_tokens', 500)),
    )
    publisher = TranscriptPublisher(
        transcript_topic=config.get('pubsub.transcript_topic'),
        error_topic=config.get('pubsub.error_topic'),
    )

    return TranscriptionOrchestrator(
        registry=SessionRegistry(),
        credentials=credentials,
        resolver=resolver,
        capturer=capturer,
        backend=backend,
        translator=translator,
        classifier=ContentClassifier(),
        publisher=publisher,
        temp_dir=config.get_temp_dir(),
        chunk_duration_seconds=float(config.get('capture.chunk_duration_seconds', 30)),
        chunk_pause_seconds=float(config.get('session.chunk_pause_seconds', 2.0)),
    )


async def websocket_handler(request: web.Request) -> web.WebSocketResponse:
    hub = request.app[HUB_KEY]
    ws = web.WebSocketResponse(heartbeat=30.0)
    await ws.prepare(request)

    hub.add_client(ws)
    try:
        async for msg in ws:
            if msg.type == WSMsgType.TEXT:
                await hub.handle_message(ws, msg.data)
            elif msg.type == WSMsgType.ERROR:
                logger.warning(f"WebSocket closed with exception: {ws.exception()}")
    finally:
        hub.remove_client(ws)

    return ws


async def init_handler(request: web.Request) -> web.Response:
    """Set the OpenAI credential from the request body, or from configuration."""
    config = request.app[CONFIG_KEY]
    credentials = request.app[CREDENTIALS_KEY]

    body = {}
    if request.can_read_body:
        try:
            body = await request.json()
        except ValueError:
            return web.json_response({"success": False, "message": "Invalid JSON body"}, status=400)
    try:
        init_request = InitCredentialsRequest.model_validate(body or {})
    except ValidationError as e:
        return web.json_response({"success": False, "message": str(e)}, status=400)

    if init_request.api_key:
        credentials.set(init_request.api_key)
        return web.json_response({"success": True, "message": "OpenAI initialized"})

    env_key = config.get_openai_api_key()
    if env_key:
        credentials.set(env_key)
        return web.json_response({"success": True, "message": "OpenAI initialized from env"})

    return web.json_response({"success": False, "message": "API key required"}, status=400)


async def health_handler(request: web.Request) -> web.Response:
    orchestrator = request.app[ORCHESTRATOR_KEY]
    return web.json_response({
        "status": "ok",
        "service": "transcription",
        "activeSessions": orchestrator.active_channels(),
    })


def create_app(config: LivescribeConfig,
               credentials: Optional[CredentialStore] = None,
               orchestrator: Optional[TranscriptionOrchestrator] = None,
               startup_channels: Sequence[str] = (),
               political_only: bool = False) -> web.Application:
    """Build the web application and its service objects.

    Args:
        config: Application configuration
        credentials: Credential holder; created from configuration when omitted
        orchestrator: Pre-built orchestrator; built from configuration when omitted
        startup_channels: Channels to start transcribing once the server is up
        political_only: Political filter flag for startup channels
    """
    if credentials is None:
        credentials = CredentialStore(config.get_openai_api_key())
        if credentials.is_configured:
            logger.info("OpenAI: Initialized from environment")
        else:
            logger.warning("OpenAI: NOT CONFIGURED - Set OPENAI_API_KEY")
    if orchestrator is None:
        orchestrator = build_orchestrator(config, credentials)

    hub = TranscriptionHub(
        orchestrator,
        credentials,
        transcript_topic=orchestrator.publisher.transcript_topic,
        error_topic=orchestrator.publisher.error_topic,
    )

    app = web.Application()
    app[CONFIG_KEY] = config
    app[CREDENTIALS_KEY] = credentials
    app[ORCHESTRATOR_KEY] = orchestrator
    app[HUB_KEY] = hub

    app.router.add_get(config.get('server.websocket_path', '/transcription'), websocket_handler)
    app.router.add_post('/api/transcription/init', init_handler)
    app.router.add_get('/health', health_handler)

    async def start_channels(app: web.Application) -> None:
        for channel_id in startup_channels:
            app[ORCHESTRATOR_KEY].start(channel_id, political_only)

    async def shutdown_services(app: web.Application) -> None:
        timeout = float(config.get('session.shutdown_timeout_seconds', 10.0))
        await app[ORCHESTRATOR_KEY].shutdown(timeout)
        await app[HUB_KEY].close()

    app.on_startup.append(start_channels)
    app.on_shutdown.append(shutdown_services)
    return app
