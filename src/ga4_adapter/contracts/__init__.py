"""Contracts package - Pydantic models for the GA4 query adapter."""

from ga4_adapter.contracts.expressions import (
    And,
    BinaryComparison,
    ColumnTarget,
    ColumnValue,
    ComparisonTarget,
    ComparisonValue,
    Exists,
    Expression,
    Not,
    Or,
    RootCollectionColumnTarget,
    ScalarValue,
    UnaryComparison,
    UnknownExpression,
    UnknownValue,
    VariableValue,
)
from ga4_adapter.contracts.filters import (
    AndGroup,
    ColumnKind,
    ColumnRef,
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
from ga4_adapter.contracts.outcome import Message, Outcome
from ga4_adapter.contracts.query import (
    ColumnField,
    ColumnSelection,
    DateRange,
    DateRangeArgument,
    QueryArguments,
    QueryRequest,
    ReportRequest,
    ReportRow,
    RowSet,
)

__all__ = [
    # Expressions
    "And",
    "BinaryComparison",
    "ColumnTarget",
    "ColumnValue",
    "ComparisonTarget",
    "ComparisonValue",
    "Exists",
    "Expression",
    "Not",
    "Or",
    "RootCollectionColumnTarget",
    "ScalarValue",
    "UnaryComparison",
    "UnknownExpression",
    "UnknownValue",
    "VariableValue",
    # Filters
    "AndGroup",
    "ColumnKind",
    "ColumnRef",
    "ComparisonOperator",
    "FilterLeaf",
    "FilterParseResult",
    "FilterTree",
    "NumericComparison",
    "NumericOperation",
    "ParsedFilter",
    "ReportFilters",
    "ScopingFilter",
    "StringMatch",
    "StringMatchType",
    # Outcome
    "Message",
    "Outcome",
    # Query
    "ColumnField",
    "ColumnSelection",
    "DateRange",
    "DateRangeArgument",
    "QueryArguments",
    "QueryRequest",
    "ReportRequest",
    "ReportRow",
    "RowSet",
]
