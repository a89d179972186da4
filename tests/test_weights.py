"""Tests for weight input parsing and request validation"""
import pytest
from pydantic import ValidationError

from app.schemas import WeightUpsertRequest
from app.utils.weights import parse_weight_input, round_weight


@pytest.mark.parametrize(
    "value, expected",
    [
        ("72.5", 72.5),
        ("72,5", 72.5),
        (" 80 ", 80.0),
        (".5", 0.5),
        ("72.46", 72.5),
        ("72,44", 72.4),
        (72.46, 72.5),
        (81, 81.0),
        ("-3", -3.0),
    ],
)
def test_parse_weight_input(value, expected):
    assert parse_weight_input(value) == expected


@pytest.mark.parametrize(
    "value",
    ["", "   ", "abc", "72.5.1", "72,5,1", "1e3", None, True, [72.5],
     float("inf"), float("-inf"), float("nan"), 1e30, "1" * 31, 10 ** 40],
)
def test_parse_weight_input_invalid(value):
    assert parse_weight_input(value) is None


def test_upsert_request_accepts_camel_case_and_comma():
    request = WeightUpsertRequest.model_validate({"userId": 3, "date": "2025-07-04", "weight": "70,25"})

    assert request.user_id == 3
    assert request.date.isoformat() == "2025-07-04"
    assert request.weight == 70.3


@pytest.mark.parametrize("weight", [0, "0", "0,0", -1, "heavy", float("nan"), float("inf"), 1e30, "1" * 31])
def test_upsert_request_rejects_non_positive_or_garbage_weight(weight):
    with pytest.raises(ValidationError):
        WeightUpsertRequest.model_validate({"userId": 1, "date": "2025-07-04", "weight": weight})


def test_upsert_request_rejects_invalid_date():
    with pytest.raises(ValidationError) as exc_info:
        WeightUpsertRequest.model_validate({"userId": 1, "date": "2025-02-30", "weight": 70})

    assert "Invalid date" in str(exc_info.value)


def test_round_weight_out_of_range():
    with pytest.raises(ValueError):
        round_weight(1e30)
