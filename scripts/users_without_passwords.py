"""
Печатает через запятую пользователей, у которых еще нет пароля.

Удобно передать в generate_first_passwords.py:
    python scripts/generate_first_passwords.py "$(python scripts/users_without_passwords.py)"
"""
import asyncio
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from app.database import async_session_maker
from app.services import get_users_without_password


async def list_users_without_passwords() -> list:
    async with async_session_maker() as session:
        users = await get_users_without_password(session)
        return [user.name for user in users]


def main() -> None:
    print(",".join(asyncio.run(list_users_without_passwords())))


if __name__ == "__main__":
    main()
