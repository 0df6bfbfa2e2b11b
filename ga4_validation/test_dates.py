from __future__ import annotations

import pytest

from ga4_adapter.contracts.query import QueryArguments
from ga4_adapter.engine.dates import normalize_date, resolve_date_range
from ga4_adapter.errors import TranslationError, UnsupportedDateFormatError


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("2024-03-05", "2024-03-05"),
        ("2024-03-05T13:45:00", "2024-03-05"),
        ("03/05/2024", "2024-03-05"),
        ("3/5/2024", "2024-03-05"),
        ("12/31/1999", "1999-12-31"),
    ],
)
def test_supported_formats(raw: str, expected: str) -> None:
    assert normalize_date(raw) == expected


@pytest.mark.parametrize("raw", ["2024-03-05", "2024-03-05T13:45:00", "3/5/2024"])
def test_normalization_is_idempotent(raw: str) -> None:
    once = normalize_date(raw)
    assert normalize_date(once) == once


def test_all_formats_agree_on_the_same_day() -> None:
    assert {normalize_date(d) for d in ["2024-07-04", "2024-07-04T00:00:00", "7/4/2024"]} == {"2024-07-04"}


@pytest.mark.parametrize(
    "raw",
    [
        "2024/03/05",
        "05-03-2024",
        "2024-03-05T13:45",
        "2024-03-05T13:45:00Z",
        "March 5, 2024",
        "2024-03-05\n",
        "٢٠٢٤-٠١-٠٥",
        "２０２４-０１-０５",
        "1/5/٢٠٢٤",
        "2024-01-05T１０:00:00",
        "",
        None,
        20240305,
    ],
)
def test_unsupported_formats_raise(raw) -> None:
    with pytest.raises(UnsupportedDateFormatError) as exc:
        normalize_date(raw)
    assert isinstance(exc.value, TranslationError)
    assert "Unsupported date format" in exc.value.message


def test_default_range_is_rolling_week() -> None:
    dr = resolve_date_range(QueryArguments())
    assert (dr.start_date, dr.end_date) == ("7daysAgo", "today")


def test_non_literal_range_uses_default() -> None:
    args = QueryArguments.model_validate({"dateRange": {"type": "variable", "value": {}}})
    dr = resolve_date_range(args)
    assert (dr.start_date, dr.end_date) == ("7daysAgo", "today")


@pytest.mark.parametrize(
    "value",
    [
        {"start_date": "01/02/2024", "end_date": "2024-01-31T23:59:59"},
        {"startDate": "01/02/2024", "endDate": "2024-01-31"},
        {"start_date": "2024-01-02", "endDate": "1/31/2024"},
    ],
)
def test_literal_range_accepts_both_key_styles(value: dict) -> None:
    args = QueryArguments.model_validate({"dateRange": {"type": "literal", "value": value}})
    dr = resolve_date_range(args)
    assert (dr.start_date, dr.end_date) == ("2024-01-02", "2024-01-31")


def test_literal_range_missing_bound_fails() -> None:
    args = QueryArguments.model_validate({"dateRange": {"type": "literal", "value": {"start_date": "2024-01-02"}}})
    with pytest.raises(UnsupportedDateFormatError):
        resolve_date_range(args)
