"""Report request assembly from a translated query."""

from __future__ import annotations

from ga4_adapter.contracts.filters import ColumnKind, ReportFilters, ScopingFilter
from ga4_adapter.contracts.outcome import Message, Outcome
from ga4_adapter.contracts.query import (
    DEFAULT_LIMIT,
    ColumnField,
    ColumnSelection,
    QueryRequest,
    ReportRequest,
)
from ga4_adapter.engine.classifier import classify_column
from ga4_adapter.engine.dates import resolve_date_range
from ga4_adapter.util.logging import get_logger

logger = get_logger("assembler")


def select_columns(fields: dict[str, ColumnField]) -> Outcome[ColumnSelection]:
    """Split the requested fields into dimension and metric mappings.

    Mappings are output field name -> GA4 base name, in request order. A field
    whose column is neither a dimension nor a metric is an error, as it is in a
    filter.
    """
    selection = ColumnSelection()
    errors: list[Message] = []

    for field_name, field_def in fields.items():
        classified = classify_column(field_def.column)
        if not classified.ok or classified.data is None:
            for e in classified.errors:
                errors.append(e.model_copy(update={"context": {**e.context, "field": field_name}}))
            continue

        ref = classified.data
        if ref.kind is ColumnKind.dimension:
            selection.dimensions[field_name] = ref.base_name
        else:
            selection.metrics[field_name] = ref.base_name

    return Outcome.collect(selection, errors)


def assemble_report_request(
    query: QueryRequest,
    filters: ReportFilters,
    selection: ColumnSelection,
    *,
    property_id: str,
    scope: ScopingFilter,
) -> ReportRequest:
    """Assemble the outbound report request.

    The scoping dimension is always requested so the mandatory scoping filter
    has a column to apply to. A column aliased by several fields is requested
    once, since GA4 rejects duplicate dimensions and metrics. Raises UnsupportedDateFormatError for a bad date
    literal.
    """
    date_range = resolve_date_range(query.arguments)

    dimension_names = selection.dimension_names
    if scope.dimension not in dimension_names:
        dimension_names.append(scope.dimension)

    request = ReportRequest(
        property_id=property_id,
        date_range=date_range,
        dimension_names=dimension_names,
        metric_names=selection.metric_names,
        limit=query.limit or DEFAULT_LIMIT,
        dimension_filter=filters.dimension_filter,
        metric_filter=filters.metric_filter,
    )
    logger.debug(
        f"Assembled report request for {request.property_path}: "
        f"dimensions={request.dimension_names} metrics={request.metric_names} "
        f"range={date_range.start_date}..{date_range.end_date} limit={request.limit}"
    )
    return request
