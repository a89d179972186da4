"""Async database connection и session management"""
from pathlib import Path
from typing import AsyncGenerator, Optional

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import NullPool

from settings.config import AppConfig


def get_async_url(url: str) -> str:
    """Подставляет async драйвер для plain postgresql:// и sqlite:/// URL"""
    if url.startswith('postgresql://'):
        return url.replace('postgresql://', 'postgresql+asyncpg://', 1)
    if url.startswith('sqlite://'):
        return url.replace('sqlite://', 'sqlite+aiosqlite://', 1)
    return url


def get_sync_url(url: str) -> str:
    """URL без async драйвера для alembic: sqlite+aiosqlite -> sqlite, postgresql+asyncpg -> postgresql"""
    return url.replace('+aiosqlite', '', 1).replace('+asyncpg', '', 1)


def get_sqlite_path(url: str) -> Optional[Path]:
    """Путь к файлу SQLite базы, None для других СУБД и in-memory"""
    parsed = make_url(url)
    if parsed.get_backend_name() != 'sqlite' or not parsed.database or parsed.database == ':memory:':
        return None
    return Path(parsed.database)


def ensure_sqlite_dir(url: str) -> None:
    """Создает директорию для файла SQLite, если ее нет"""
    db_path = get_sqlite_path(url)
    if db_path is not None:
        db_path.parent.mkdir(parents=True, exist_ok=True)


DB_URL = get_async_url(AppConfig.DB_URL)
ensure_sqlite_dir(DB_URL)

# Create async engine
engine = create_async_engine(
    DB_URL,
    echo=AppConfig.DEBUG,
    future=True,
    poolclass=NullPool,
)

# Create async session factory
async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency для получения DB сессии"""
    async with async_session_maker() as session:
        try:
            yield session
        finally:
            await session.close()
