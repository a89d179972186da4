"""API тесты для WebSocket уведомлений"""
import pytest
from starlette.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from app.utils.broadcast import Broadcaster
from settings.config import AppConfig
from web.main import app


@pytest.fixture
def broadcaster():
    """Отдельный Broadcaster приложения на время теста"""
    fresh = Broadcaster()
    previous = app.state.broadcaster
    app.state.broadcaster = fresh
    yield fresh
    app.state.broadcaster = previous


@pytest.mark.asyncio
async def test_ws_rejects_connection_without_session(session_manager, broadcaster):
    client = TestClient(app)

    with pytest.raises(WebSocketDisconnect) as exc_info:
        with client.websocket_connect("/ws"):
            pass

    assert exc_info.value.code == 1008
    assert len(broadcaster) == 0


@pytest.mark.asyncio
async def test_ws_rejects_unknown_token(session_manager, broadcaster):
    client = TestClient(app)

    with pytest.raises(WebSocketDisconnect):
        with client.websocket_connect("/ws", headers={"Cookie": f"{AppConfig.SESSION_COOKIE_NAME}={'0' * 64}"}):
            pass

    assert len(broadcaster) == 0


@pytest.mark.asyncio
async def test_ws_registers_listener_with_session(session_manager, broadcaster):
    token = await session_manager.create_session(1)
    client = TestClient(app)

    with client.websocket_connect("/ws", headers={"Cookie": f"{AppConfig.SESSION_COOKIE_NAME}={token}"}):
        assert len(broadcaster) == 1

    assert len(broadcaster) == 0
