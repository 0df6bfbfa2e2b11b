"""GA4 query connector orchestrator."""

from __future__ import annotations

from typing import Any, Optional

from google.api_core.exceptions import GoogleAPICallError, RetryError
from google.auth.exceptions import GoogleAuthError

from ga4_adapter.client import ReportClient
from ga4_adapter.contracts.expressions import (
    And,
    BinaryComparison,
    ColumnValue,
    Exists,
    Expression,
    Not,
    Or,
    ScalarValue,
    UnaryComparison,
    UnknownExpression,
    UnknownValue,
    VariableValue,
)
from ga4_adapter.contracts.filters import ScopingFilter
from ga4_adapter.contracts.query import ColumnSelection, QueryRequest, ReportRequest, RowSet
from ga4_adapter.contracts.trace import QueryTrace
from ga4_adapter.engine.assembler import assemble_report_request, select_columns
from ga4_adapter.engine.builder import build_report_filters
from ga4_adapter.engine.parser import parse_predicate
from ga4_adapter.engine.rows import map_rows
from ga4_adapter.errors import ConnectorError, TranslationError, UpstreamError
from ga4_adapter.util.logging import get_logger

logger = get_logger("connector")

UPSTREAM_ERRORS = (GoogleAPICallError, RetryError, GoogleAuthError)

_OPERATOR_SYMBOLS = {"_eq": "==", "_gt": ">", "_lt": "<", "_like": "LIKE"}


def _format_value(value: Any) -> str:
    if isinstance(value, ScalarValue):
        return repr(value.value)
    if isinstance(value, VariableValue):
        return f"${value.name}"
    if isinstance(value, ColumnValue):
        return value.column.name
    if isinstance(value, UnknownValue):
        return f"<unknown:{value.type}>"
    return str(value)


def describe_predicate(expr: Optional[Expression]) -> str:
    """Render a predicate as a readable one-line string."""
    if expr is None:
        return "(none)"
    if isinstance(expr, BinaryComparison):
        op = _OPERATOR_SYMBOLS.get(expr.operator, expr.operator)
        return f"{expr.column.name} {op} {_format_value(expr.value)}"
    if isinstance(expr, UnaryComparison):
        return f"{expr.column.name} {expr.operator}"
    if isinstance(expr, And):
        parts = [describe_predicate(c) for c in expr.expressions]
        return "(" + " AND ".join(parts) + ")"
    if isinstance(expr, Or):
        parts = [describe_predicate(c) for c in expr.expressions]
        return "(" + " OR ".join(parts) + ")"
    if isinstance(expr, Not):
        return "(NOT " + describe_predicate(expr.expression) + ")"
    if isinstance(expr, Exists):
        return "(EXISTS " + describe_predicate(expr.predicate) + ")"
    if isinstance(expr, UnknownExpression):
        return f"<unknown:{expr.type}>"
    return str(expr)


class QueryConnector:
    """Translates queries into GA4 reports and reports back into rows.

    Stateless across queries: every call builds its own structures, and the
    only shared object is the report client.
    """

    def __init__(
        self,
        client: Optional[ReportClient] = None,
        *,
        property_id: str,
        scope: ScopingFilter,
    ) -> None:
        self.client = client
        self.property_id = property_id
        self.scope = scope

    def _translate(
        self, query: QueryRequest, trace: QueryTrace
    ) -> tuple[ReportRequest, ColumnSelection]:
        trace.property_path = f"properties/{self.property_id}"
        trace.predicate = describe_predicate(query.predicate)
        parsed = parse_predicate(query.predicate)
        trace.add_event(
            "predicate_parsed",
            dimension_filters=len(parsed.dimension_filters),
            metric_filters=len(parsed.metric_filters),
            errors=len(parsed.errors),
        )

        built = build_report_filters(parsed, self.scope)
        selected = select_columns(query.fields)

        # Nothing goes upstream while any translation error exists.
        errors = [*built.errors, *selected.errors]
        if errors:
            trace.add_event("translation_failed", errors=[str(e) for e in errors])
            logger.warning(f"Query translation failed with {len(errors)} error(s): {[str(e) for e in errors]}")
            raise TranslationError.from_messages(errors)

        filters = built.unwrap()
        selection = selected.unwrap()
        request = assemble_report_request(
            query,
            filters,
            selection,
            property_id=self.property_id,
            scope=self.scope,
        )
        trace.add_event(
            "report_assembled",
            dimensions=request.dimension_names,
            metrics=request.metric_names,
            date_range=f"{request.date_range.start_date}..{request.date_range.end_date}",
            limit=request.limit,
        )
        return request, selection

    def translate(self, query: QueryRequest) -> ReportRequest:
        """Translate a query into a report request without calling GA4."""
        request, _ = self._translate(query, QueryTrace())
        return request

    def explain(self, query: QueryRequest) -> dict[str, Any]:
        """Describe the report a query would run, without running it."""
        request = self.translate(query)
        return {
            "predicate": describe_predicate(query.predicate),
            "report_request": request.model_dump(mode="json"),
        }

    async def query(self, query: QueryRequest, trace: Optional[QueryTrace] = None) -> RowSet:
        """Translate, run and map a query.

        Raises TranslationError before any outbound call, UpstreamError when the
        GA4 call fails, and UnprocessableResponseError for empty or short rows.
        """
        trace = trace if trace is not None else QueryTrace()
        request, selection = self._translate(query, trace)
        if self.client is None:
            raise ConnectorError("No report client configured")

        logger.info(
            f"Query {trace.query_id}: requesting {request.dimension_names} / {request.metric_names}"
        )
        try:
            rows = await self.client.run_report(request)
        except UPSTREAM_ERRORS as e:
            trace.add_event("report_failed", error=str(e))
            logger.error(f"Query {trace.query_id}: GA4 report call failed: {e}")
            raise UpstreamError(
                f"GA4 report call failed: {e}",
                details={"property": request.property_path},
            ) from e
        trace.add_event("report_received", rows=len(rows))

        row_set = map_rows(rows, selection, request)
        trace.add_event("rows_mapped", rows=len(row_set.rows))
        logger.debug(f"Query trace: {trace.to_dict()}")
        return row_set
