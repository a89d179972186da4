"""FastAPI dependencies для компонентов приложения"""
from datetime import date

from fastapi import Request

from app.sessions import SessionManager
from app.utils.broadcast import Broadcaster


def get_session_manager(request: Request) -> SessionManager:
    return request.app.state.session_manager


def get_broadcaster(request: Request) -> Broadcaster:
    return request.app.state.broadcaster


def get_current_user_id(request: Request) -> int:
    """user_id, выставленный SessionAuthMiddleware"""
    return request.state.user_id


def get_today() -> date:
    """Текущая дата для колонок таблицы, переопределяется в тестах"""
    return date.today()
