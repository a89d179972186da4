"""Конфигурация приложения из env переменных"""
from pathlib import Path

from environs import Env


# Load environment variables
env = Env()

STAND = env.str('STAND', default='local')
BASE_PATH = Path.cwd().absolute()

if STAND == 'local':
    env.read_env(path=str(BASE_PATH / '.env'))

class Settings:
    def __init__(self):
        self.PORT: int = env.int('PORT', default=3000)
        # Database
        self.DB_URL: str = env.str("DB_URL", "sqlite+aiosqlite:///./data/tracker.db")
        self.TEST_DB_URL: str = env.str("TEST_DB_URL", "")

        # App
        self.DEBUG: bool = env.bool("DEBUG", False)
        self.CORS_ORIGINS: list = env.list("CORS_ORIGINS", ["http://localhost:5173", "http://127.0.0.1:5173"])

        # SENTRY
        self.SENTRY_DSN: str = env.str("SENTRY_DSN", "")

        # Sessions: sliding expiry measured from last access
        self.SESSION_TIMEOUT_DAYS: int = env.int("SESSION_TIMEOUT_DAYS", default=365)
        self.SESSION_SWEEP_INTERVAL_SECONDS: int = env.int("SESSION_SWEEP_INTERVAL_SECONDS", default=3600)
        self.SESSION_COOKIE_NAME: str = env.str("SESSION_COOKIE_NAME", "session")
        self.COOKIE_SECURE: bool = env.bool("COOKIE_SECURE", STAND == 'prod')

AppConfig = Settings()
