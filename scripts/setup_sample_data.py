"""Добавляет в пустую базу четырех демо-пользователей и веса за пять недель.

Сначала выполнить `alembic upgrade head`.
"""
import asyncio
import sys
from datetime import date
from pathlib import Path
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from sqlalchemy import select, func

from app.database import async_session_maker
from app.models import User, Weight

SAMPLE_USERS = [
    ("Alice", "#FF6B6B", [70.5, 70.2, 69.8, 69.5, 69.1]),
    ("Bob", "#4ECDC4", [82.3, 82.1, 81.9, 81.7, 81.4]),
    ("Charlie", "#45B7D1", [75.0, 74.8, 74.6, 74.3, 74.0]),
    ("Diana", "#96CEB4", [68.2, 68.0, 67.8, 67.5, 67.2]),
]

# Fridays
SAMPLE_DATES = [
    date(2024, 6, 28),
    date(2024, 7, 5),
    date(2024, 7, 12),
    date(2024, 7, 19),
    date(2024, 7, 26),
]


async def setup_sample_data() -> None:
    async with async_session_maker() as session:
        existing = await session.scalar(select(func.count()).select_from(User))
        if existing:
            print(f"Database already has {existing} users, skipping")
            return

        for name, color, weights in SAMPLE_USERS:
            user = User(name=name, color=color)
            session.add(user)
            await session.flush()
            for entry_date, weight_kg in zip(SAMPLE_DATES, weights):
                session.add(Weight(user_id=user.id, date=entry_date, weight_kg=weight_kg))

        await session.commit()
        print(f"Inserted {len(SAMPLE_USERS)} users and {len(SAMPLE_USERS) * len(SAMPLE_DATES)} weights")


def main() -> None:
    asyncio.run(setup_sample_data())


if __name__ == "__main__":
    main()
