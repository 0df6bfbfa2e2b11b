from __future__ import annotations

import pytest

from ga4_adapter.contracts.query import ColumnSelection, DateRange, ReportRequest
from ga4_adapter.engine.rows import NO_DATA_SUGGESTION, map_rows, validate_rows
from ga4_adapter.errors import UnprocessableResponseError
from ga4_validation.stubs import PROPERTY_ID, build_stub_rows


@pytest.fixture()
def selection() -> ColumnSelection:
    return ColumnSelection(
        dimensions={"country": "country", "page": "pagePath"},
        metrics={"visits": "sessions"},
    )


def test_rows_map_positionally(selection: ColumnSelection) -> None:
    rows = build_stub_rows(
        (["US", "/home", "shop.example.com"], ["120"]),
        (["DE", "/blog", "shop.example.com"], ["7"]),
    )
    result = map_rows(rows, selection)
    assert result.rows == [
        {"country": "US", "page": "/home", "visits": "120"},
        {"country": "DE", "page": "/blog", "visits": "7"},
    ]


def test_empty_values_become_none(selection: ColumnSelection) -> None:
    rows = build_stub_rows((["", "/home"], [None]))
    assert map_rows(rows, selection).rows == [{"country": None, "page": "/home", "visits": None}]


def test_short_row_reports_exactly_that_row(selection: ColumnSelection) -> None:
    rows = build_stub_rows(
        (["US", "/home"], ["120"]),
        (["DE"], ["7"]),
    )
    errors = validate_rows(rows, selection)
    assert errors == ["Row 1 missing dimensions: expected 2, got 1"]

    with pytest.raises(UnprocessableResponseError) as exc:
        map_rows(rows, selection)
    assert exc.value.status_code == 422
    assert exc.value.details["errors"] == errors
    assert "suggestion" not in exc.value.details


def test_every_shortfall_is_reported(selection: ColumnSelection) -> None:
    rows = build_stub_rows(
        ([], []),
        (["US", "/home"], ["1"]),
        (["US", "/home"], []),
    )
    assert validate_rows(rows, selection) == [
        "Row 0 missing dimensions: expected 2, got 0",
        "Row 0 missing metrics: expected 1, got 0",
        "Row 2 missing metrics: expected 1, got 0",
    ]


def test_empty_response_is_unprocessable(selection: ColumnSelection) -> None:
    request = ReportRequest(
        property_id=PROPERTY_ID,
        date_range=DateRange(start_date="2024-01-01", end_date="2024-01-31"),
        dimension_names=["country", "pagePath", "hostName"],
        metric_names=["sessions"],
    )
    with pytest.raises(UnprocessableResponseError) as exc:
        map_rows([], selection, request)

    details = exc.value.details
    assert details["requested_dimensions"] == ["country", "pagePath"]
    assert details["requested_metrics"] == ["sessions"]
    assert details["date_range"] == {"start_date": "2024-01-01", "end_date": "2024-01-31"}
    assert details["suggestion"] == NO_DATA_SUGGESTION
    assert "country" in details["errors"][0]
    assert "sessions" in details["errors"][0]


def test_extra_values_are_ignored() -> None:
    selection = ColumnSelection(dimensions={"c": "country"}, metrics={})
    rows = build_stub_rows((["US", "shop.example.com"], ["3"]))
    assert map_rows(rows, selection).rows == [{"c": "US"}]


def test_row_set_dataframe(selection: ColumnSelection) -> None:
    rows = build_stub_rows((["US", "/home"], ["120"]))
    df = map_rows(rows, selection).to_dataframe()
    assert list(df.columns) == ["country", "page", "visits"]
    assert df.iloc[0]["visits"] == "120"


def test_aliased_fields_share_one_column() -> None:
    selection = ColumnSelection(
        dimensions={"a": "country", "page": "pagePath", "b": "country"},
        metrics={"visits": "sessions", "again": "sessions"},
    )
    assert selection.dimension_names == ["country", "pagePath"]

    rows = build_stub_rows((["US", "/home", "shop.example.com"], ["120"]))
    assert validate_rows(rows, selection) == []
    assert map_rows(rows, selection).rows == [
        {"a": "US", "page": "/home", "b": "US", "visits": "120", "again": "120"}
    ]
