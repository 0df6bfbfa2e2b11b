"""Predicate parsing: expression tree -> flat dimension/metric filter lists.

Errors are collected per node so one bad clause does not hide the others.
The caller decides what to do with them; nothing here raises for bad input.
"""

from __future__ import annotations

from typing import Any, Optional

from ga4_adapter.contracts.expressions import (
    And,
    BinaryComparison,
    ComparisonValue,
    Exists,
    Expression,
    Not,
    Or,
    ScalarValue,
    UnaryComparison,
    UnknownExpression,
)
from ga4_adapter.contracts.filters import (
    ColumnKind,
    ComparisonOperator,
    FilterParseResult,
    ParsedFilter,
)
from ga4_adapter.contracts.outcome import err
from ga4_adapter.contracts.validate import (
    check_operator_compatibility,
    check_operator_support,
)
from ga4_adapter.engine.classifier import classify_column
from ga4_adapter.util.logging import get_logger

logger = get_logger("parser")


def parse_predicate(predicate: Optional[Expression]) -> FilterParseResult:
    """Parse a predicate into dimension and metric filters.

    Supports:
    - _eq (equal): dimensions and metrics
    - _gt (greater than): metrics only
    - _lt (less than): metrics only
    - _like (pattern): dimensions only

    A missing predicate yields empty filter lists and no errors.
    """
    result = FilterParseResult()
    if predicate is None:
        return result

    _parse_expression(predicate, result)
    logger.debug(
        f"Parsed predicate: {len(result.dimension_filters)} dimension filter(s), "
        f"{len(result.metric_filters)} metric filter(s), {len(result.errors)} error(s)"
    )
    return result


def _parse_expression(expression: Expression, result: FilterParseResult) -> None:
    if isinstance(expression, And):
        for child in expression.expressions:
            _parse_expression(child, result)
    elif isinstance(expression, Or):
        # Children are flattened as if conjoined, so OR is never honoured.
        result.errors.append(
            err(
                "or_not_preserved",
                "OR expressions are not supported; their conditions would be applied as AND",
                conditions=len(expression.expressions),
            )
        )
        for child in expression.expressions:
            _parse_expression(child, result)
    elif isinstance(expression, Not):
        result.errors.append(
            err("unsupported_expression", "NOT expressions are not supported in GA4 filters", type="not")
        )
    elif isinstance(expression, Exists):
        result.errors.append(
            err("unsupported_expression", "EXISTS expressions are not supported in GA4 filters", type="exists")
        )
    elif isinstance(expression, UnaryComparison):
        result.errors.append(
            err(
                "unsupported_expression",
                "Unary comparison operators are not supported in GA4 filters",
                type="unary_comparison_operator",
                operator=expression.operator,
            )
        )
    elif isinstance(expression, BinaryComparison):
        _parse_binary_comparison(expression, result)
    elif isinstance(expression, UnknownExpression):
        result.errors.append(
            err("unknown_expression", f"Unknown expression type: {expression.type}", type=expression.type)
        )
    else:
        result.errors.append(
            err("unknown_expression", f"Unknown expression type: {type(expression).__name__}")
        )


def _parse_binary_comparison(expression: BinaryComparison, result: FilterParseResult) -> None:
    unsupported = check_operator_support(expression.operator)
    if unsupported is not None:
        result.errors.append(unsupported)
        return
    operator = ComparisonOperator(expression.operator)

    column = classify_column(expression.column.name)
    if not column.ok or column.data is None:
        result.errors.extend(column.errors)
        return
    ref = column.data

    found, value = _extract_scalar(expression.value)
    if not found:
        result.errors.append(
            err(
                "unsupported_value",
                f"Failed to extract value from comparison on {ref.column_name}: "
                f"only non-null literal values are supported",
                column=ref.column_name,
                value_type=expression.value.type,
            )
        )
        return

    mismatch = check_operator_compatibility(operator, ref.kind, ref.column_name)
    if mismatch is not None:
        result.errors.append(mismatch)
        return

    parsed = ParsedFilter(
        column_name=ref.column_name,
        base_name=ref.base_name,
        operator=operator,
        value=value,
        kind=ref.kind,
    )
    if ref.kind is ColumnKind.dimension:
        result.dimension_filters.append(parsed)
    else:
        result.metric_filters.append(parsed)


def _extract_scalar(value: ComparisonValue) -> tuple[bool, Any]:
    """Return (found, value); variables and column references are unsupported."""
    if isinstance(value, ScalarValue) and value.value is not None:
        return True, value.value
    return False, None
