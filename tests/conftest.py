import os
from datetime import date, datetime, timedelta, timezone
from pathlib import Path

# Settings are read at import time: point the app at the test database first
os.environ.setdefault("STAND", "test")
os.environ.setdefault("TEST_DB_URL", "sqlite+aiosqlite:///./data/test_tracker.db")
os.environ["DB_URL"] = os.environ["TEST_DB_URL"]

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession

from alembic import command
from alembic.config import Config

from settings.config import AppConfig
from web.main import app
from web.dependencies import get_today
from app.auth import hash_password
from app.database import get_session
from app.models import User, Weight
from app.sessions import SessionManager


class FakeClock:
    """Injectable clock for SessionManager"""

    def __init__(self, now: datetime = datetime(2025, 7, 4, 12, 0, tzinfo=timezone.utc)):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


@pytest.fixture(scope='session')
def db_url():
    if 'test' not in AppConfig.TEST_DB_URL or AppConfig.DB_URL != AppConfig.TEST_DB_URL:
        raise ValueError('You are trying to run tests on a prod/dev database')
    return AppConfig.DB_URL


# flake8: noqa WPS325
@pytest.fixture(scope='session')
def apply_migrations(db_url):
    """Применяет миграции для тестовой БД"""
    root_dir = Path(__file__).resolve().parent.parent
    config = Config(str(root_dir.joinpath('alembic.ini')))
    config.set_main_option('script_location', str(root_dir.joinpath('alembic')))
    command.upgrade(config, 'head')
    yield None
    command.downgrade(config, 'base')


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def session_manager(clock):
    """Менеджер сессий приложения с управляемыми часами"""
    manager = SessionManager(timeout=timedelta(days=365), clock=clock)
    previous = app.state.session_manager
    app.state.session_manager = manager
    yield manager
    app.state.session_manager = previous


@pytest.fixture
def today():
    """Текущая дата для колонок таблицы: пятница 2025-07-04"""
    fixed = date(2025, 7, 4)
    app.dependency_overrides[get_today] = lambda: fixed
    yield fixed
    app.dependency_overrides.pop(get_today, None)


@pytest_asyncio.fixture
async def async_client(apply_migrations) -> AsyncClient:
    """Async HTTP client для тестов API"""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def session(apply_migrations) -> AsyncSession:
    """Async database session для тестов"""
    async for session in get_session():
        yield session
        break  # get_session - это генератор, нам нужна только одна сессия


@pytest_asyncio.fixture
async def alice(session: AsyncSession) -> User:
    """Пользователь с паролем 'secret'"""
    user = User(name="Alice", color="#FF6B6B", password=hash_password("secret"))
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


@pytest_asyncio.fixture
async def bob(session: AsyncSession) -> User:
    """Пользователь без пароля"""
    user = User(name="Bob", color="#4ECDC4")
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


@pytest_asyncio.fixture
async def auth_headers(session_manager: SessionManager, alice: User) -> dict:
    """Cookie действующей сессии Alice"""
    token = await session_manager.create_session(alice.id)
    return {"Cookie": f"{AppConfig.SESSION_COOKIE_NAME}={token}"}


@pytest_asyncio.fixture(autouse=True)
async def cleanup_db(apply_migrations):
    """Автоматическая очистка БД после каждого теста"""
    yield
    async for session in get_session():
        await session.execute(Weight.__table__.delete())
        await session.execute(User.__table__.delete())
        await session.commit()
        break  # get_session - это генератор, нам нужна только одна сессия
