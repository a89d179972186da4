"""Модель записи веса пользователя"""
import datetime
from typing import Optional

from sqlalchemy import Index, UniqueConstraint
from sqlmodel import SQLModel, Field


class Weight(SQLModel, table=True):
    """Вес пользователя на дату отчетной колонки"""
    __tablename__ = "weights"

    __table_args__ = (
        UniqueConstraint("user_id", "date", name="uq_weights_user_id_date"),
        Index("idx_weights_date", "date"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", nullable=False, description="User id")
    date: datetime.date = Field(nullable=False, description="Column date (YYYY-MM-DD)")
    weight_kg: float = Field(nullable=False, description="Weight in kg (1 decimal place)")
