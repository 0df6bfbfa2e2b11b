from __future__ import annotations

from typing import Any, Optional

from ga4_adapter.contracts.expressions import (
    BinaryComparison,
    ColumnTarget,
    Expression,
    ScalarValue,
)
from ga4_adapter.contracts.query import ColumnField, QueryRequest, ReportRequest, ReportRow


def compare(column: str, operator: str, value: Any) -> BinaryComparison:
    return BinaryComparison(
        column=ColumnTarget(name=column),
        operator=operator,
        value=ScalarValue(value=value),
    )


def build_stub_query(
    fields: dict[str, str],
    predicate: Optional[Expression] = None,
    limit: Optional[int] = None,
    date_range: Optional[dict[str, Any]] = None,
) -> QueryRequest:
    arguments: dict[str, Any] = {}
    if date_range is not None:
        arguments["dateRange"] = {"type": "literal", "value": date_range}
    return QueryRequest.model_validate(
        {
            "fields": {name: ColumnField(column=col) for name, col in fields.items()},
            "predicate": predicate,
            "limit": limit,
            "arguments": arguments,
        }
    )


def build_stub_rows(*rows: tuple[list[Optional[str]], list[Optional[str]]]) -> list[ReportRow]:
    return [ReportRow(dimension_values=dims, metric_values=metrics) for dims, metrics in rows]


PROPERTY_ID = "123456789"
DOMAIN = "shop.example.com"


class FakeReportClient:
    """In-memory stand-in for the GA4 report client."""

    def __init__(self, rows: Optional[list[ReportRow]] = None, error: Optional[Exception] = None):
        self.rows = rows or []
        self.error = error
        self.requests: list[ReportRequest] = []
        self.closed = False

    async def run_report(self, request: ReportRequest) -> list[ReportRow]:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return list(self.rows)

    async def close(self) -> None:
        self.closed = True
