"""Pydantic схемы для API"""
import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, ConfigDict, field_validator

from app.utils.dates import parse_date
from app.utils.weights import parse_weight_input


class LoginRequest(BaseModel):
    """Запрос на вход"""
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class ChangePasswordRequest(BaseModel):
    """Запрос на смену пароля текущего пользователя"""
    model_config = ConfigDict(populate_by_name=True)

    new_password: str = Field(..., min_length=1, alias="newPassword")


class SuccessResponse(BaseModel):
    success: bool = True


class _WeightKeyRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: int = Field(..., gt=0, alias="userId")
    date: datetime.date = Field(..., description="Column date (YYYY-MM-DD)")

    @field_validator('date', mode='before')
    @classmethod
    def validate_date(cls, v):
        """Strict ISO date, InvalidDate otherwise"""
        return parse_date(v)


class WeightUpsertRequest(_WeightKeyRequest):
    """Запрос на запись веса. weight принимает число или строку с ',' или '.'"""
    weight: float = Field(..., description="Weight in kg, > 0; '72,5' and '72.5' accepted")

    @field_validator('weight', mode='before')
    @classmethod
    def validate_weight(cls, v) -> float:
        """Parse and round weight to 1 decimal place"""
        parsed = parse_weight_input(v)
        if parsed is None:
            raise ValueError(f'Invalid weight: {v!r}')
        if parsed <= 0:
            raise ValueError('Weight must be greater than 0')
        return parsed


class WeightDeleteRequest(_WeightKeyRequest):
    """Запрос на удаление записи веса"""


class UserResponse(BaseModel):
    """Пользователь без хеша пароля"""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    color: Optional[str]


class WeightResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    date: datetime.date
    weight_kg: float


class WeightEntryResponse(WeightResponse):
    """Запись веса с данными пользователя для таблицы"""
    user_name: str
    user_color: Optional[str]


class WeightChangeResponse(BaseModel):
    """Ответ на запись веса: новая запись и предыдущая для расчета разницы"""
    model_config = ConfigDict(populate_by_name=True)

    weight: WeightResponse
    previous_weight: Optional[WeightResponse] = Field(default=None, alias="previousWeight")


class TrackerDataResponse(BaseModel):
    """Все данные для таблицы и графика"""
    model_config = ConfigDict(populate_by_name=True)

    users: List[UserResponse]
    weights: Dict[str, WeightEntryResponse] = Field(..., description="Keyed by '<user_id>-<date>'")
    date_columns: List[datetime.date] = Field(..., alias="dateColumns")
