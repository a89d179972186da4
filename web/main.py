"""FastAPI приложение для Weight Tracker"""
import asyncio
import logging.config
from contextlib import asynccontextmanager
from datetime import timedelta

import sentry_sdk
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from settings.logs import LogsConfig
from settings.config import AppConfig, STAND
from web.routes.auth import router as auth_router
from web.routes.weights import router as weights_router
from web.routes.ws import router as ws_router
from web.middleware import SessionAuthMiddleware
from app.utils.broadcast import Broadcaster
from app.utils.error_handler import global_exception_handler, create_error_responses
from app.sessions import SessionManager

# Настраиваем логирование
logging.config.dictConfig(LogsConfig.LOGGING)
logger = logging.getLogger(__name__)


async def session_sweep_background_job(session_manager: SessionManager):
    """Background job: удаляет истекшие сессии раз в SESSION_SWEEP_INTERVAL_SECONDS"""
    logger.info("Starting session sweep background job")
    while True:
        await asyncio.sleep(AppConfig.SESSION_SWEEP_INTERVAL_SECONDS)
        try:
            await session_manager.sweep_expired()
        except Exception as e:
            logger.error("Error in session sweep background job: %s", e, exc_info=True)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Управление жизненным циклом приложения"""
    # Startup: запускаем background задачи
    background_task = asyncio.create_task(session_sweep_background_job(app.state.session_manager))
    logger.info("Background tasks started")

    yield

    # Shutdown: останавливаем background задачи
    background_task.cancel()
    try:
        await background_task
    except asyncio.CancelledError:
        logger.info("Background task cancelled")
    logger.info("Background tasks stopped")


sentry_sdk.init(
    dsn=AppConfig.SENTRY_DSN,
    send_default_pii=False,
    environment=STAND
)

app = FastAPI(
    title="Weight Tracker API",
    description="Weekly weight tracking for a small group of users",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# Сессии живут в памяти процесса: рестарт разлогинивает всех
app.state.session_manager = SessionManager(timeout=timedelta(days=AppConfig.SESSION_TIMEOUT_DAYS))
app.state.broadcaster = Broadcaster()

# Добавляем глобальный обработчик исключений
app.add_exception_handler(Exception, global_exception_handler)

app.add_middleware(SessionAuthMiddleware)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=AppConfig.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Подключение роутов
app.include_router(
    auth_router,
    prefix="/api",
    tags=["auth"],
    responses=create_error_responses()
)

app.include_router(
    weights_router,
    prefix="/api",
    tags=["weights"],
    responses=create_error_responses()
)

app.include_router(ws_router, tags=["updates"])


@app.get("/", tags=["health"])
async def root():
    return {
        "status": "ok",
        "message": "Weight Tracker API is running",
        "version": "1.0.0"
    }


@app.get("/health", tags=["health"])
async def health_check():
    return {
        "status": "healthy",
        "service": "weight_tracker",
        "active_sessions": len(app.state.session_manager)
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "web.main:app",
        host="0.0.0.0",
        port=AppConfig.PORT,
        reload=STAND == 'local'
    )
