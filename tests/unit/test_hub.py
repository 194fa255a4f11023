import asyncio
import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from livescribe.server.hub import TranscriptionHub, make_frame
from livescribe.transcription.credentials import CredentialStore
from livescribe.transcription.publisher import TranscriptPublisher


def make_ws(closed=False, fail=False):
    ws = MagicMock()
    ws.closed = closed
    ws.send_str = AsyncMock(side_effect=ConnectionResetError("gone") if fail else None)
    ws.close = AsyncMock()
    return ws


@pytest.fixture
def orchestrator():
    orchestrator = MagicMock()
    orchestrator.start.return_value = True
    return orchestrator


@pytest.fixture
def hub(orchestrator):
    return TranscriptionHub(orchestrator, CredentialStore(), "hub_events", "hub_errors")


@pytest.mark.unit
def test_make_frame_keeps_non_ascii():
    frame = make_frame("transcript", {"bengali": "খবর"})
    assert "খবর" in frame
    assert json.loads(frame) == {"event": "transcript", "data": {"bengali": "খবর"}}


@pytest.mark.unit
def test_broadcast_drops_closed_and_failing_clients(hub):
    healthy, closed, broken = make_ws(), make_ws(closed=True), make_ws(fail=True)
    for ws in (healthy, closed, broken):
        hub.add_client(ws)

    asyncio.run(hub.broadcast("frame"))

    healthy.send_str.assert_awaited_once_with("frame")
    closed.send_str.assert_not_called()
    assert hub.clients == {healthy}


@pytest.mark.unit
def test_start_message_initializes_credentials(hub, orchestrator):
    ws = make_ws()
    raw = json.dumps({"event": "start_transcription",
                      "data": {"channelId": " @news ", "openaiKey": "sk-ws", "filterPolitical": True}})

    asyncio.run(hub.handle_message(ws, raw))

    assert hub.credentials.api_key == "sk-ws"
    orchestrator.start.assert_called_once_with("@news", True)
    ws.send_str.assert_not_called()


@pytest.mark.unit
def test_stop_message(hub, orchestrator):
    asyncio.run(hub.handle_message(make_ws(), '{"event": "stop_transcription", "data": {"channelId": "UCabc"}}'))
    orchestrator.stop.assert_called_once_with("UCabc")


@pytest.mark.unit
def test_published_errors_reach_clients(hub):
    ws = make_ws()
    hub.add_client(ws)

    async def scenario():
        TranscriptPublisher("hub_events", "hub_errors").publish_error("@news", "boom")
        await hub.close()

    asyncio.run(scenario())

    sent = json.loads(ws.send_str.call_args.args[0])
    assert sent == {"event": "transcription_error", "data": {"channelId": "@news", "error": "boom"}}
    ws.close.assert_awaited_once()
    assert hub.clients == set()
