"""WebSocket с уведомлениями об изменениях данных"""
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect, status

from settings.config import AppConfig

logger = logging.getLogger(__name__)
router = APIRouter()


@router.websocket("/ws")
async def updates_websocket(websocket: WebSocket):
    """Рассылка событий weight_updated / weight_deleted. Требует cookie сессии"""
    session_manager = websocket.app.state.session_manager
    broadcaster = websocket.app.state.broadcaster

    token = websocket.cookies.get(AppConfig.SESSION_COOKIE_NAME)
    if await session_manager.get_session(token) is None:
        logger.warning("Rejected WebSocket connection without a valid session")
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await broadcaster.connect(websocket)
    try:
        while True:
            # Клиенты ничего не отправляют, ждем закрытия соединения
            await websocket.receive_text()
    except WebSocketDisconnect:
        pass
    finally:
        broadcaster.disconnect(websocket)
