"""Middleware для аутентификации API по cookie сессии"""
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from app.auth import get_token_from_request
from app.utils.error_handler import SessionNotFound, get_error_response, log_error

PUBLIC_PATHS = ("/", "/health", "/docs", "/redoc", "/openapi.json", "/api/login", "/api/logout")


class SessionAuthMiddleware(BaseHTTPMiddleware):
    """Проверяет cookie сессии для /api/* и кладет user_id в request.state"""

    async def dispatch(self, request: Request, call_next):
        # Пропускаем публичные endpoints
        if request.url.path in PUBLIC_PATHS or not request.url.path.startswith("/api/"):
            return await call_next(request)

        session_manager = request.app.state.session_manager
        user_session = await session_manager.get_session(get_token_from_request(request))

        if user_session is None:
            error = SessionNotFound()
            log_error(error, request)
            return get_error_response(error)

        request.state.user_id = user_session.user_id
        request.state.session_token = user_session.token
        return await call_next(request)
