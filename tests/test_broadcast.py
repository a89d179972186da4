"""Tests for WebSocket fan-out"""
from unittest.mock import AsyncMock

import pytest
import ujson

from app.utils.broadcast import Broadcaster


def make_websocket(fail: bool = False):
    websocket = AsyncMock()
    if fail:
        websocket.send_text = AsyncMock(side_effect=RuntimeError("connection closed"))
    return websocket


@pytest.mark.asyncio
async def test_connect_accepts_and_registers():
    broadcaster = Broadcaster()
    websocket = make_websocket()

    await broadcaster.connect(websocket)

    websocket.accept.assert_awaited_once()
    assert len(broadcaster) == 1


@pytest.mark.asyncio
async def test_connect_does_not_register_when_accept_fails():
    broadcaster = Broadcaster()
    websocket = make_websocket()
    websocket.accept = AsyncMock(side_effect=RuntimeError("handshake failed"))

    with pytest.raises(RuntimeError):
        await broadcaster.connect(websocket)

    assert len(broadcaster) == 0


@pytest.mark.asyncio
async def test_publish_sends_json_to_all_listeners():
    broadcaster = Broadcaster()
    listeners = [make_websocket(), make_websocket()]
    for websocket in listeners:
        await broadcaster.connect(websocket)

    event = {"type": "weight_updated", "data": {"weight": {"weight_kg": 70.5}}}
    delivered = await broadcaster.publish(event)

    assert delivered == 2
    for websocket in listeners:
        websocket.send_text.assert_awaited_once()
        assert ujson.loads(websocket.send_text.call_args[0][0]) == event


@pytest.mark.asyncio
async def test_publish_drops_failed_listener():
    broadcaster = Broadcaster()
    healthy = make_websocket()
    broken = make_websocket(fail=True)
    await broadcaster.connect(healthy)
    await broadcaster.connect(broken)

    delivered = await broadcaster.publish({"type": "weight_deleted"})

    assert delivered == 1
    assert len(broadcaster) == 1

    await broadcaster.publish({"type": "weight_deleted"})
    assert broken.send_text.await_count == 1
    assert healthy.send_text.await_count == 2


@pytest.mark.asyncio
async def test_publish_without_listeners():
    assert await Broadcaster().publish({"type": "weight_updated"}) == 0


def test_disconnect_unknown_listener_is_noop():
    broadcaster = Broadcaster()

    broadcaster.disconnect(make_websocket())

    assert len(broadcaster) == 0
