"""API роуты для таблицы весов и экспорта"""
import logging
from datetime import date

from fastapi import APIRouter, status, Depends, Body
from fastapi.responses import FileResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import DB_URL, get_session, get_sqlite_path
from app.schemas import (
    SuccessResponse,
    TrackerDataResponse,
    WeightChangeResponse,
    WeightDeleteRequest,
    WeightUpsertRequest,
)
from app.services import get_tracker_data, upsert_weight, delete_weight
from app.utils.broadcast import Broadcaster
from app.utils.error_handler import handle_api_errors, NotFoundError, ValidationError
from web.dependencies import get_broadcaster, get_today

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get(
    "/data",
    response_model=TrackerDataResponse,
    status_code=status.HTTP_200_OK,
    summary="Пользователи, записи веса и колонки дат"
)
@handle_api_errors
async def get_data_endpoint(
    today: date = Depends(get_today),
    session: AsyncSession = Depends(get_session)
):
    """Все данные для таблицы: колонки от первой записи до текущей пятницы"""
    return await get_tracker_data(session=session, today=today)


@router.post(
    "/weight",
    response_model=WeightChangeResponse,
    status_code=status.HTTP_200_OK,
    summary="Записать вес пользователя на дату"
)
@handle_api_errors
async def upsert_weight_endpoint(
    request: WeightUpsertRequest = Body(...),
    session: AsyncSession = Depends(get_session),
    broadcaster: Broadcaster = Depends(get_broadcaster)
):
    """Создает или заменяет запись, возвращает ее и предыдущую запись пользователя"""
    result = await upsert_weight(
        session=session,
        user_id=request.user_id,
        entry_date=request.date,
        weight_kg=request.weight
    )
    await broadcaster.publish({
        "type": "weight_updated",
        "data": result.model_dump(mode="json", by_alias=True),
    })
    return result


@router.delete(
    "/weight",
    response_model=SuccessResponse,
    status_code=status.HTTP_200_OK,
    summary="Удалить запись веса"
)
@handle_api_errors
async def delete_weight_endpoint(
    request: WeightDeleteRequest = Body(...),
    session: AsyncSession = Depends(get_session),
    broadcaster: Broadcaster = Depends(get_broadcaster)
):
    """Удаляет запись (user_id, date), 404 если ее нет"""
    deleted = await delete_weight(
        session=session,
        user_id=request.user_id,
        entry_date=request.date
    )
    if not deleted:
        raise NotFoundError("Weight not found")

    await broadcaster.publish({
        "type": "weight_deleted",
        "data": {"userId": request.user_id, "date": request.date.isoformat()},
    })
    return SuccessResponse()


@router.get(
    "/export/sqlite",
    status_code=status.HTTP_200_OK,
    summary="Скачать файл базы SQLite",
    response_class=FileResponse
)
@handle_api_errors
async def export_sqlite_endpoint():
    """Отдает файл базы как weight-tracker-YYYY-MM-DD.db"""
    db_path = get_sqlite_path(DB_URL)
    if db_path is None:
        raise ValidationError("Export is only available for SQLite databases")
    if not db_path.exists():
        raise NotFoundError("Database file not found")

    file_name = f"weight-tracker-{date.today().isoformat()}.db"
    logger.info("Exporting database file %s", db_path)
    return FileResponse(
        path=db_path,
        media_type="application/octet-stream",
        filename=file_name
    )
