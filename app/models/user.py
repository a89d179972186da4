"""SQLModel для пользователей"""
from typing import Optional

from sqlmodel import Field, SQLModel, Index


class User(SQLModel, table=True):
    """Участник трекера. PK: id (int)"""
    __tablename__ = "users"
    __table_args__ = (
        Index("idx_users_name", "name"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)

    name: str = Field(
        nullable=False,
        description="Display name, also used as login (case-insensitive)"
    )
    color: Optional[str] = Field(
        default=None,
        nullable=True,
        description="Chart/grid color, e.g. '#FF6B6B'"
    )

    # passlib hash; NULL until a first password is generated
    password: Optional[str] = Field(
        default=None,
        nullable=True,
        description="Password hash"
    )
