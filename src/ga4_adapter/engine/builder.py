"""Filter tree construction from parsed filters."""

from __future__ import annotations

import math
from typing import Any, Optional

from ga4_adapter.contracts.filters import (
    AndGroup,
    ColumnKind,
    ComparisonOperator,
    FilterLeaf,
    FilterParseResult,
    FilterTree,
    NumericComparison,
    NumericOperation,
    ParsedFilter,
    ReportFilters,
    ScopingFilter,
    StringMatch,
    StringMatchType,
)
from ga4_adapter.contracts.outcome import Message, Outcome, err
from ga4_adapter.contracts.validate import check_operator_compatibility
from ga4_adapter.util.logging import get_logger

logger = get_logger("builder")

_STRING_MATCH: dict[ComparisonOperator, StringMatchType] = {
    ComparisonOperator.equal: StringMatchType.exact,
    ComparisonOperator.like: StringMatchType.partial_regexp,
}

_NUMERIC_OPERATION: dict[ComparisonOperator, NumericOperation] = {
    ComparisonOperator.equal: NumericOperation.equal,
    ComparisonOperator.greater_than: NumericOperation.greater_than,
    ComparisonOperator.less_than: NumericOperation.less_than,
}


def build_report_filters(
    parse_result: FilterParseResult,
    scope: ScopingFilter,
) -> Outcome[ReportFilters]:
    """Build the dimension and metric filter trees for a report request.

    The scoping leaf always heads the dimension tree. Parse errors are carried
    over, and any error (parsed or raised here) makes the outcome not-ok: a
    dropped filter would silently widen the result set.
    """
    errors: list[Message] = list(parse_result.errors)

    dimension_leaves = [
        leaf
        for leaf in (_dimension_leaf(f, errors) for f in parse_result.dimension_filters)
        if leaf is not None
    ]
    metric_leaves = [
        leaf
        for leaf in (_metric_leaf(f, errors) for f in parse_result.metric_filters)
        if leaf is not None
    ]

    filters = ReportFilters(
        dimension_filter=_combine([scope.leaf(), *dimension_leaves]),
        metric_filter=_combine(metric_leaves),
    )
    if errors:
        logger.debug(f"Filter build collected {len(errors)} error(s)")
    return Outcome.collect(filters, errors)


def _combine(leaves: list[FilterLeaf]) -> Optional[FilterTree]:
    if not leaves:
        return None
    if len(leaves) == 1:
        return leaves[0]
    return AndGroup(expressions=list(leaves))


def _dimension_leaf(f: ParsedFilter, errors: list[Message]) -> Optional[FilterLeaf]:
    if f.kind is not ColumnKind.dimension:
        errors.append(_kind_error(f, ColumnKind.dimension))
        return None

    mismatch = check_operator_compatibility(f.operator, f.kind, f.column_name)
    if mismatch is not None:
        errors.append(mismatch)
        return None

    if not isinstance(f.value, str):
        errors.append(
            err(
                "type_mismatch",
                f"Dimension filter value must be a string, got: {type(f.value).__name__}",
                column=f.column_name,
                value=repr(f.value),
            )
        )
        return None

    return FilterLeaf(
        field_name=f.base_name,
        predicate=StringMatch(value=f.value, match_type=_STRING_MATCH[f.operator]),
    )


def _metric_leaf(f: ParsedFilter, errors: list[Message]) -> Optional[FilterLeaf]:
    if f.kind is not ColumnKind.metric:
        errors.append(_kind_error(f, ColumnKind.metric))
        return None

    mismatch = check_operator_compatibility(f.operator, f.kind, f.column_name)
    if mismatch is not None:
        errors.append(mismatch)
        return None

    number = to_number(f.value)
    if number is None:
        errors.append(
            err(
                "type_mismatch",
                f"Metric filter value must be numeric, got: {f.value!r}",
                column=f.column_name,
                value=repr(f.value),
            )
        )
        return None

    return FilterLeaf(
        field_name=f.base_name,
        predicate=NumericComparison(operation=_NUMERIC_OPERATION[f.operator], value=number),
    )


def to_number(value: Any) -> Optional[float]:
    """Convert a metric filter value to a finite float, or None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    return number


def _kind_error(f: ParsedFilter, expected: ColumnKind) -> Message:
    return err(
        "kind_mismatch",
        f"Column {f.column_name} is a {f.kind.value}, not a {expected.value}",
        column=f.column_name,
    )
