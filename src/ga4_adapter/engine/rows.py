"""Response validation and positional row mapping."""

from __future__ import annotations

from typing import Any, Optional, Sequence

from ga4_adapter.contracts.query import ColumnSelection, ReportRequest, ReportRow, RowSet
from ga4_adapter.errors import UnprocessableResponseError
from ga4_adapter.util.logging import get_logger

logger = get_logger("rows")

NO_DATA_SUGGESTION = (
    "Try widening the date range, removing filters, or checking that the "
    "requested dimensions and metrics are compatible and have data for this property."
)


def validate_rows(rows: Sequence[ReportRow], selection: ColumnSelection) -> list[str]:
    """Return one error per shortfall, across every row."""
    if not rows:
        return [
            f"No rows in GA4 response for dimensions {selection.dimension_names} "
            f"and metrics {selection.metric_names}"
        ]

    expected_dimensions = len(selection.dimension_names)
    expected_metrics = len(selection.metric_names)
    errors: list[str] = []

    for index, row in enumerate(rows):
        actual_dimensions = len(row.dimension_values)
        actual_metrics = len(row.metric_values)
        if actual_dimensions < expected_dimensions:
            errors.append(
                f"Row {index} missing dimensions: expected {expected_dimensions}, got {actual_dimensions}"
            )
        if actual_metrics < expected_metrics:
            errors.append(
                f"Row {index} missing metrics: expected {expected_metrics}, got {actual_metrics}"
            )
    return errors


def map_rows(
    rows: Sequence[ReportRow],
    selection: ColumnSelection,
    request: Optional[ReportRequest] = None,
) -> RowSet:
    """Project raw GA4 rows onto the caller's output field names.

    Mapping is by position: a field takes the value at its column's index in
    the de-duplicated requested names, so aliases of one column share a value.
    Missing or empty values
    become None. Raises UnprocessableResponseError for an empty response or any
    row shorter than requested, before any row is returned.
    """
    errors = validate_rows(rows, selection)
    if errors:
        raise UnprocessableResponseError(
            f"GA4 response validation failed: {'; '.join(errors)}",
            details=_diagnostics(errors, selection, request, empty=not rows),
        )

    dimension_positions = _positions(selection.dimensions, selection.dimension_names)
    metric_positions = _positions(selection.metrics, selection.metric_names)

    mapped: list[dict[str, Optional[str]]] = []
    for row in rows:
        out: dict[str, Optional[str]] = {}
        for field_name, index in dimension_positions.items():
            out[field_name] = _value_at(row.dimension_values, index)
        for field_name, index in metric_positions.items():
            out[field_name] = _value_at(row.metric_values, index)
        mapped.append(out)

    logger.debug(f"Mapped {len(mapped)} row(s)")
    return RowSet(rows=mapped)


def _positions(fields: dict[str, str], names: list[str]) -> dict[str, int]:
    """Output field name -> index of its column among the requested names."""
    return {field_name: names.index(base_name) for field_name, base_name in fields.items()}


def _value_at(values: Sequence[Optional[str]], index: int) -> Optional[str]:
    if index >= len(values):
        return None
    return values[index] or None


def _diagnostics(
    errors: list[str],
    selection: ColumnSelection,
    request: Optional[ReportRequest],
    *,
    empty: bool,
) -> dict[str, Any]:
    details: dict[str, Any] = {
        "errors": errors,
        "requested_dimensions": selection.dimension_names,
        "requested_metrics": selection.metric_names,
    }
    if request is not None:
        details["dimension_filter"] = (
            request.dimension_filter.model_dump(mode="json") if request.dimension_filter else None
        )
        details["metric_filter"] = (
            request.metric_filter.model_dump(mode="json") if request.metric_filter else None
        )
        details["date_range"] = request.date_range.model_dump()
    if empty:
        details["suggestion"] = NO_DATA_SUGGESTION
    return details
