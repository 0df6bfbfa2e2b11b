from __future__ import annotations
"""Operator support and operator/column-kind compatibility checks."""

from typing import Optional

from ga4_adapter.contracts.filters import SUPPORTED_OPERATORS, ColumnKind, ComparisonOperator
from ga4_adapter.contracts.outcome import Message, err


# ============================================================================
# Operator/Column Kind Compatibility
# ============================================================================

# Which column kinds each operator may be applied to
OPERATOR_KIND_COMPATIBILITY: dict[ComparisonOperator, set[ColumnKind]] = {
    ComparisonOperator.equal: {ColumnKind.dimension, ColumnKind.metric},
    ComparisonOperator.greater_than: {ColumnKind.metric},
    ComparisonOperator.less_than: {ColumnKind.metric},
    ComparisonOperator.like: {ColumnKind.dimension},
}


def allowed_operators(kind: ColumnKind) -> list[str]:
    return [op.value for op, kinds in OPERATOR_KIND_COMPATIBILITY.items() if kind in kinds]


def check_operator_support(operator: str) -> Optional[Message]:
    """Check that an operator belongs to the supported set."""
    if operator not in SUPPORTED_OPERATORS:
        return err(
            "unsupported_operator",
            f"Operator '{operator}' is not supported. "
            f"Supported operators: {', '.join(SUPPORTED_OPERATORS)}",
            operator=operator,
        )
    return None


def check_operator_compatibility(
    operator: ComparisonOperator, kind: ColumnKind, column_name: str = ""
) -> Optional[Message]:
    """Check if an operator can be applied to a column of the given kind."""
    if kind not in OPERATOR_KIND_COMPATIBILITY[operator]:
        allowed = allowed_operators(kind)
        return err(
            "operator_kind_mismatch",
            f"Operator '{operator.value}' is not supported for {kind.value}s. "
            f"Only {', '.join(repr(o) for o in allowed)} are supported for {kind.value}s.",
            operator=operator.value,
            kind=kind.value,
            column=column_name,
            allowed_operators=allowed,
        )
    return None
