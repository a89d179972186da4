"""Нормализация введенного веса"""
import math
import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional, Union

# 72, 72.5, .5 (после замены ',' -> '.')
_WEIGHT_RE = re.compile(r'^-?\d*\.?\d+$')


def round_weight(value: Union[str, float]) -> float:
    """Один знак после запятой, половины вверх: 70.25 -> 70.3"""
    try:
        return float(Decimal(str(value)).quantize(Decimal('0.1'), rounding=ROUND_HALF_UP))
    except InvalidOperation as e:
        raise ValueError(f'Weight out of range: {value!r}') from e


def parse_weight_input(value: Union[str, int, float, None]) -> Optional[float]:
    """'72,5' / '72.5' / 72.5 -> округленный float, None если не разобрать"""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return None
        number: Union[str, float] = value
    elif isinstance(value, str):
        number = value.strip().replace(',', '.', 1)
        if not _WEIGHT_RE.match(number):
            return None
    else:
        return None

    try:
        return round_weight(number)
    except ValueError:
        return None
