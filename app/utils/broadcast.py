"""Рассылка событий об изменении данных по WebSocket"""
import logging
from typing import Any, List

import ujson
from starlette.websockets import WebSocket

logger = logging.getLogger(__name__)


class Broadcaster:
    """Список подключенных WebSocket клиентов и отправка им JSON событий.

    Событие - только подсказка клиенту перезапросить данные: при ошибке отправки
    клиент отключается, а запрос, вызвавший событие, не падает.
    """

    def __init__(self):
        self._connections: List[WebSocket] = []

    def __len__(self) -> int:
        return len(self._connections)

    async def connect(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self._connections.append(websocket)
        logger.info("WebSocket client connected, %d listeners", len(self._connections))

    def disconnect(self, websocket: WebSocket) -> None:
        try:
            self._connections.remove(websocket)
        except ValueError:
            return
        logger.info("WebSocket client disconnected, %d listeners", len(self._connections))

    async def publish(self, event: Any) -> int:
        """Отправляет событие всем клиентам, возвращает число успешных отправок"""
        message = ujson.dumps(event, ensure_ascii=False)
        delivered = 0
        for websocket in list(self._connections):
            try:
                await websocket.send_text(message)
                delivered += 1
            except Exception as e:  # noqa: BLE001
                logger.warning("Dropping WebSocket listener after failed send: %s", e)
                self.disconnect(websocket)

        logger.debug("Published %s to %d listeners", event.get('type') if isinstance(event, dict) else type(event), delivered)
        return delivered
