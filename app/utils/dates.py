"""Колонки таблицы по пятницам.

Каждая колонка таблицы весов - пятница. В набор входят все даты, по которым уже
есть записи, и каждая пятница после последней записи до текущей пятницы
включительно: новая неделя появляется сама, создавать ее вручную не нужно.
"""
import re
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional, Union

FRIDAY = 4  # date.weekday(): Monday=0 ... Sunday=6

DateLike = Union[date, str]

_ISO_DATE_RE = re.compile(r'^\d{4}-\d{2}-\d{2}$')


class InvalidDate(ValueError):
    """Некорректная дата на входе генератора колонок"""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Invalid date: {value!r}. Expected YYYY-MM-DD")


def parse_date(value: DateLike) -> date:
    """Принимает date или строку ISO 'YYYY-MM-DD'"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not _ISO_DATE_RE.match(value.strip()):
        raise InvalidDate(value)
    try:
        return date.fromisoformat(value.strip())
    except ValueError as e:
        raise InvalidDate(value) from e


def last_friday(reference_date: Optional[DateLike] = None) -> date:
    """Сама дата, если это пятница, иначе предыдущая пятница.

    Сдвиг назад по дням недели: Пт 0, Сб 1, Вс 2, Пн 3, Вт 4, Ср 5, Чт 6.
    """
    day = date.today() if reference_date is None else parse_date(reference_date)
    return day - timedelta(days=(day.weekday() - FRIDAY) % 7)


def fridays_between(start_date: DateLike, end_date: DateLike) -> List[date]:
    """Все пятницы в [start_date, end_date] по возрастанию, пусто если start > end"""
    start = parse_date(start_date)
    end = parse_date(end_date)

    fridays = []
    current = start + timedelta(days=(FRIDAY - start.weekday()) % 7)
    while current <= end:
        fridays.append(current)
        current += timedelta(weeks=1)
    return fridays


def generate_columns(existing_dates: Iterable[DateLike], today: Optional[date] = None) -> List[date]:
    """Колонки таблицы: даты записей, дополненные пятницами до текущей.

    `existing_dates` должны идти по возрастанию. Порядок сохраняется, ни одна
    входная дата не теряется.
    """
    columns = [parse_date(d) for d in existing_dates]
    current_friday = last_friday(today or date.today())

    if not columns:
        return [current_friday]

    last_date = columns[-1]
    if last_date < current_friday:
        columns.extend(fridays_between(last_date + timedelta(days=1), current_friday))
    return columns
