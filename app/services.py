"""Бизнес-логика: пользователи, записи веса и данные для таблицы"""
import logging
from datetime import date
from typing import Dict, List, Optional

from sqlalchemy import select, delete, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import User, Weight
from app.schemas import (
    TrackerDataResponse,
    UserResponse,
    WeightChangeResponse,
    WeightEntryResponse,
    WeightResponse,
)
from app.utils.dates import generate_columns
from app.utils.error_handler import NotFoundError
from app.utils.weights import round_weight

logger = logging.getLogger(__name__)


def weight_key(user_id: int, entry_date: date) -> str:
    """Ключ записи в ответе /api/data: '<user_id>-<YYYY-MM-DD>'"""
    return f"{user_id}-{entry_date.isoformat()}"


# User services
async def get_all_users(session: AsyncSession) -> List[User]:
    """Все пользователи по имени"""
    result = await session.execute(select(User).order_by(User.name))
    return list(result.scalars().all())


async def get_user_by_id(session: AsyncSession, user_id: int) -> Optional[User]:
    return await session.get(User, user_id)


async def get_user_by_name(session: AsyncSession, name: str) -> Optional[User]:
    """Пользователь по имени без учета регистра"""
    stmt = select(User).where(func.lower(User.name) == name.strip().lower())
    result = await session.execute(stmt)
    return result.scalars().first()


async def get_users_without_password(session: AsyncSession) -> List[User]:
    stmt = select(User).where((User.password.is_(None)) | (User.password == "")).order_by(User.name)
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def update_user_password(session: AsyncSession, user_id: int, password_hash: str) -> None:
    """Сохраняет новый хеш пароля"""
    user = await session.get(User, user_id)
    if user is None:
        raise NotFoundError(f"User {user_id} not found")

    user.password = password_hash
    await session.commit()
    logger.info("Updated password for user %s", user_id)


# Weight services
async def get_all_weights(session: AsyncSession) -> List[WeightEntryResponse]:
    """Все записи веса с именем и цветом пользователя, по дате и имени"""
    stmt = (
        select(Weight, User.name, User.color)
        .join(User, Weight.user_id == User.id)
        .order_by(Weight.date, User.name)
    )
    result = await session.execute(stmt)

    return [
        WeightEntryResponse(
            id=weight.id,
            user_id=weight.user_id,
            date=weight.date,
            weight_kg=weight.weight_kg,
            user_name=user_name,
            user_color=user_color
        )
        for weight, user_name, user_color in result.all()
    ]


async def get_all_dates(session: AsyncSession) -> List[date]:
    """Уникальные даты записей по возрастанию"""
    result = await session.execute(select(Weight.date).distinct().order_by(Weight.date))
    return list(result.scalars().all())


async def get_previous_weight(session: AsyncSession, user_id: int, before_date: date) -> Optional[Weight]:
    """Последняя запись пользователя строго до before_date"""
    stmt = (
        select(Weight)
        .where(Weight.user_id == user_id, Weight.date < before_date)
        .order_by(Weight.date.desc())
        .limit(1)
    )
    result = await session.execute(stmt)
    return result.scalars().first()


async def upsert_weight(
    session: AsyncSession,
    user_id: int,
    entry_date: date,
    weight_kg: float
) -> WeightChangeResponse:
    """Создает или заменяет запись (user_id, date), возвращает ее вместе с предыдущей"""
    if await session.get(User, user_id) is None:
        raise NotFoundError(f"User {user_id} not found")

    stmt = select(Weight).where(Weight.user_id == user_id, Weight.date == entry_date)
    result = await session.execute(stmt)
    weight = result.scalars().first()

    if weight is None:
        weight = Weight(user_id=user_id, date=entry_date, weight_kg=round_weight(weight_kg))
        session.add(weight)
    else:
        weight.weight_kg = round_weight(weight_kg)

    await session.commit()
    await session.refresh(weight)
    logger.info("Saved weight %.1f for user %s on %s", weight.weight_kg, user_id, entry_date)

    previous = await get_previous_weight(session, user_id, entry_date)

    return WeightChangeResponse(
        weight=WeightResponse.model_validate(weight),
        previous_weight=WeightResponse.model_validate(previous) if previous else None
    )


async def delete_weight(session: AsyncSession, user_id: int, entry_date: date) -> bool:
    """Удаляет запись, False если ее не было"""
    stmt = delete(Weight).where(Weight.user_id == user_id, Weight.date == entry_date)
    result = await session.execute(stmt)
    await session.commit()

    deleted = result.rowcount > 0
    if deleted:
        logger.info("Deleted weight of user %s on %s", user_id, entry_date)
    return deleted


async def get_tracker_data(session: AsyncSession, today: Optional[date] = None) -> TrackerDataResponse:
    """Пользователи, записи по ключу '<user_id>-<date>' и колонки дат до текущей пятницы"""
    users = await get_all_users(session)
    weights = await get_all_weights(session)
    existing_dates = await get_all_dates(session)

    weights_by_user_and_date: Dict[str, WeightEntryResponse] = {
        weight_key(entry.user_id, entry.date): entry for entry in weights
    }

    date_columns = generate_columns(existing_dates, today=today)
    logger.debug("Tracker data: %d users, %d weights, %d columns", len(users), len(weights), len(date_columns))

    return TrackerDataResponse(
        users=[UserResponse.model_validate(user) for user in users],
        weights=weights_by_user_and_date,
        date_columns=date_columns
    )
