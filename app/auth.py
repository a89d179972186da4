"""Проверка паролей, вход и cookie сессии"""
import logging
from datetime import datetime, timedelta, timezone
from email.utils import format_datetime
from typing import Optional

from fastapi import Request
from passlib.context import CryptContext
from sqlalchemy.ext.asyncio import AsyncSession

from app.services import get_user_by_name, update_user_password
from app.sessions import SessionManager
from app.utils.error_handler import CredentialMismatch
from settings.config import AppConfig

logger = logging.getLogger(__name__)

# Новые хеши - PBKDF2 с солью. hex_sha256 только проверяет старые хеши без соли,
# они заменяются при следующем успешном входе
pwd_context = CryptContext(schemes=["pbkdf2_sha256", "hex_sha256"], deprecated="auto")

AUTH_COOKIE_LIFETIME = timedelta(days=365)
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: Optional[str]) -> bool:
    if not password_hash:
        return False
    try:
        return pwd_context.verify(password, password_hash)
    except ValueError:
        logger.warning("Unrecognized password hash format")
        return False


async def authenticate(
    session: AsyncSession,
    session_manager: SessionManager,
    username: str,
    password: str
) -> str:
    """Проверяет логин и пароль, открывает сессию. Иначе CredentialMismatch"""
    user = await get_user_by_name(session, username)

    if user is None or not user.password:
        # время ответа как при настоящей проверке
        pwd_context.dummy_verify()
        logger.warning("Login failed for %r", username)
        raise CredentialMismatch()

    try:
        valid, new_hash = pwd_context.verify_and_update(password, user.password)
    except ValueError:
        logger.warning("Unrecognized password hash format for user %s", user.id)
        valid, new_hash = False, None

    if not valid:
        logger.warning("Login failed for %r", username)
        raise CredentialMismatch()

    if new_hash is not None:
        await update_user_password(session, user.id, new_hash)
        logger.info("Upgraded password hash of user %s", user.id)

    return await session_manager.create_session(user.id)


async def change_password(session: AsyncSession, user_id: int, new_password: str) -> None:
    await update_user_password(session, user_id, hash_password(new_password))


def get_token_from_request(request: Request) -> Optional[str]:
    """Токен сессии из cookie, None если его нет"""
    return request.cookies.get(AppConfig.SESSION_COOKIE_NAME) or None


def _cookie(value: str, expires: datetime) -> str:
    secure_flag = "Secure; " if AppConfig.COOKIE_SECURE else ""
    return (
        f"{AppConfig.SESSION_COOKIE_NAME}={value}; HttpOnly; {secure_flag}SameSite=Strict; Path=/; "
        f"Expires={format_datetime(expires, usegmt=True)}"
    )


def build_auth_cookie(token: str, now: Optional[datetime] = None) -> str:
    """Значение Set-Cookie с токеном на год"""
    now = now or datetime.now(timezone.utc)
    return _cookie(token, now + AUTH_COOKIE_LIFETIME)


def build_logout_cookie() -> str:
    """Значение Set-Cookie, сбрасывающее токен"""
    return _cookie("", EPOCH)
