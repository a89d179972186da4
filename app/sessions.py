"""Сессии пользователей в памяти процесса со скользящим сроком жизни"""
import asyncio
import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_SESSION_TIMEOUT = timedelta(days=365)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def generate_token() -> str:
    """Случайный токен 256 бит в hex"""
    return secrets.token_hex(32)


@dataclass
class UserSession:
    """Один успешный вход пользователя"""
    token: str
    user_id: int
    created_at: datetime
    last_accessed: datetime


class SessionManager:
    """Реестр token -> UserSession.

    Сессия истекает, если к ней не обращались дольше `timeout`. Истекшие записи
    удаляются лениво в `get_session` или разом в `sweep_expired`. Ничего не
    сохраняется на диск: рестарт разлогинивает всех.
    """

    def __init__(
        self,
        timeout: timedelta = DEFAULT_SESSION_TIMEOUT,
        clock: Callable[[], datetime] = utcnow,
        token_factory: Callable[[], str] = generate_token,
    ):
        self.timeout = timeout
        self._clock = clock
        self._token_factory = token_factory
        self._sessions: Dict[str, UserSession] = {}
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, token: str) -> bool:
        return token in self._sessions

    def _is_expired(self, session: UserSession, now: datetime) -> bool:
        return now - session.last_accessed > self.timeout

    async def create_session(self, user_id: int) -> str:
        """Создает сессию для user_id и возвращает токен"""
        async with self._lock:
            now = self._clock()
            token = self._token_factory()
            self._sessions[token] = UserSession(
                token=token,
                user_id=user_id,
                created_at=now,
                last_accessed=now,
            )
        logger.info("Created session for user %s", user_id)
        return token

    async def get_session(self, token: Optional[str]) -> Optional[UserSession]:
        """Живая сессия с продлением срока, None если токен неизвестен или истек"""
        if not token:
            return None

        async with self._lock:
            session = self._sessions.get(token)
            if session is None:
                return None

            now = self._clock()
            if self._is_expired(session, now):
                del self._sessions[token]
                logger.info("Session of user %s expired", session.user_id)
                return None

            session.last_accessed = now
            return session

    async def delete_session(self, token: Optional[str]) -> None:
        """Удаляет сессию, если она есть"""
        async with self._lock:
            session = self._sessions.pop(token, None)
        if session is not None:
            logger.info("Deleted session of user %s", session.user_id)

    async def sweep_expired(self) -> int:
        """Удаляет все истекшие сессии, возвращает их количество"""
        async with self._lock:
            now = self._clock()
            expired = [token for token, session in self._sessions.items() if self._is_expired(session, now)]
            for token in expired:
                del self._sessions[token]

        if expired:
            logger.info("Swept %d expired sessions, %d active", len(expired), len(self._sessions))
        else:
            logger.debug("No expired sessions found")
        return len(expired)
