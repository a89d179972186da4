"""
Генерирует случайные первые пароли для указанных пользователей.

Usage:
    python scripts/generate_first_passwords.py "alice,bob,charlie" > passwords.csv

Печатает CSV `username,password` в stdout. Если хотя бы один пользователь не
найден, завершается с кодом 1 и ничего не записывает.
"""
import argparse
import asyncio
import secrets
import string
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from app.auth import hash_password
from app.database import async_session_maker
from app.services import get_user_by_name, update_user_password

PASSWORD_ALPHABET = string.ascii_letters + string.digits


def generate_random_password(length: int = 12) -> str:
    return "".join(secrets.choice(PASSWORD_ALPHABET) for _ in range(length))


async def generate_first_passwords(usernames: list) -> list:
    """Возвращает [(name, password)], LookupError для неизвестного пользователя"""
    async with async_session_maker() as session:
        users = []
        for username in usernames:
            user = await get_user_by_name(session, username)
            if user is None:
                raise LookupError(f"User '{username}' not found")
            users.append(user)

        rows = []
        for user in users:
            password = generate_random_password()
            await update_user_password(session, user.id, hash_password(password))
            rows.append((user.name, password))
        return rows


def main() -> None:
    ap = argparse.ArgumentParser(description="Set random first passwords and print them as CSV")
    ap.add_argument("users", help='Comma separated user names, e.g. "alice,bob"')
    args = ap.parse_args()

    usernames = [name.strip() for name in args.users.split(",") if name.strip()]
    try:
        rows = asyncio.run(generate_first_passwords(usernames))
    except LookupError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print("username,password")
    for name, password in rows:
        print(f'"{name}","{password}"')


if __name__ == "__main__":
    main()
