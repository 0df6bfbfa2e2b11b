"""GA4 Data API binding.

Converts assembled report requests to GA4 protos and GA4 rows back to plain
string lists. No retries here; failures propagate to the connector.
"""

from __future__ import annotations

from typing import Optional, Protocol

from google.analytics.data_v1beta import BetaAnalyticsDataAsyncClient
from google.analytics.data_v1beta.types import (
    DateRange,
    Dimension,
    Filter,
    FilterExpression,
    FilterExpressionList,
    Metric,
    NumericValue,
    RunReportRequest,
    RunReportResponse,
)
from google.oauth2 import service_account

from ga4_adapter.contracts.filters import (
    AndGroup,
    FilterLeaf,
    FilterTree,
    NumericComparison,
    NumericOperation,
    StringMatch,
    StringMatchType,
)
from ga4_adapter.contracts.query import ReportRequest, ReportRow
from ga4_adapter.util.logging import get_logger

logger = get_logger("client")

READONLY_SCOPE = "https://www.googleapis.com/auth/analytics.readonly"

_MATCH_TYPES = {
    StringMatchType.exact: Filter.StringFilter.MatchType.EXACT,
    StringMatchType.partial_regexp: Filter.StringFilter.MatchType.PARTIAL_REGEXP,
}

_OPERATIONS = {
    NumericOperation.equal: Filter.NumericFilter.Operation.EQUAL,
    NumericOperation.greater_than: Filter.NumericFilter.Operation.GREATER_THAN,
    NumericOperation.less_than: Filter.NumericFilter.Operation.LESS_THAN,
}


class ReportClient(Protocol):
    async def run_report(self, request: ReportRequest) -> list[ReportRow]: ...


class GA4ReportClient:
    """Runs report requests against the GA4 Data API."""

    def __init__(self, client: BetaAnalyticsDataAsyncClient):
        self.client = client

    @classmethod
    def from_service_account_file(cls, credentials_path: str) -> "GA4ReportClient":
        """Build a client from a service account JSON key file."""
        credentials = service_account.Credentials.from_service_account_file(
            credentials_path,
            scopes=[READONLY_SCOPE],
        )
        return cls(BetaAnalyticsDataAsyncClient(credentials=credentials))

    async def run_report(self, request: ReportRequest) -> list[ReportRow]:
        ga4_request = to_run_report_request(request)
        logger.info(
            f"Running GA4 report on {ga4_request.property} "
            f"({len(request.dimension_names)} dimensions, {len(request.metric_names)} metrics)"
        )
        response = await self.client.run_report(request=ga4_request)
        return from_run_report_response(response)

    async def close(self) -> None:
        await self.client.transport.close()


def to_run_report_request(request: ReportRequest) -> RunReportRequest:
    ga4_request = RunReportRequest(
        property=request.property_path,
        date_ranges=[
            DateRange(
                start_date=request.date_range.start_date,
                end_date=request.date_range.end_date,
            )
        ],
        dimensions=[Dimension(name=name) for name in request.dimension_names],
        metrics=[Metric(name=name) for name in request.metric_names],
        limit=request.limit,
    )
    if request.dimension_filter is not None:
        ga4_request.dimension_filter = to_filter_expression(request.dimension_filter)
    if request.metric_filter is not None:
        ga4_request.metric_filter = to_filter_expression(request.metric_filter)
    return ga4_request


def to_filter_expression(tree: FilterTree) -> FilterExpression:
    if isinstance(tree, AndGroup):
        return FilterExpression(
            and_group=FilterExpressionList(
                expressions=[to_filter_expression(e) for e in tree.expressions]
            )
        )
    return FilterExpression(filter=_to_filter(tree))


def _to_filter(leaf: FilterLeaf) -> Filter:
    predicate = leaf.predicate
    if isinstance(predicate, StringMatch):
        return Filter(
            field_name=leaf.field_name,
            string_filter=Filter.StringFilter(
                value=predicate.value,
                match_type=_MATCH_TYPES[predicate.match_type],
            ),
        )
    if isinstance(predicate, NumericComparison):
        return Filter(
            field_name=leaf.field_name,
            numeric_filter=Filter.NumericFilter(
                operation=_OPERATIONS[predicate.operation],
                value=NumericValue(double_value=predicate.value),
            ),
        )
    raise TypeError(f"Unsupported filter predicate: {type(predicate).__name__}")


def from_run_report_response(response: RunReportResponse) -> list[ReportRow]:
    return [
        ReportRow(
            dimension_values=[_text(v.value) for v in row.dimension_values],
            metric_values=[_text(v.value) for v in row.metric_values],
        )
        for row in response.rows
    ]


def _text(value: Optional[str]) -> Optional[str]:
    return value if value else None
