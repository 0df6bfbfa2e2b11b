"""Parsed filters and the GA4-shaped filter tree built from them."""
from __future__ import annotations
from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, Field

from ga4_adapter.contracts.outcome import Message


class ColumnKind(str, Enum):
    dimension = "dimension"
    metric = "metric"


class ComparisonOperator(str, Enum):
    equal = "_eq"
    greater_than = "_gt"
    less_than = "_lt"
    like = "_like"


SUPPORTED_OPERATORS: tuple[str, ...] = tuple(op.value for op in ComparisonOperator)


class ColumnRef(BaseModel):
    column_name: str
    base_name: str
    kind: ColumnKind


# Parser output


class ParsedFilter(BaseModel):
    column_name: str
    base_name: str
    operator: ComparisonOperator
    value: Any
    kind: ColumnKind


class FilterParseResult(BaseModel):
    dimension_filters: list[ParsedFilter] = Field(default_factory=list)
    metric_filters: list[ParsedFilter] = Field(default_factory=list)
    errors: list[Message] = Field(default_factory=list)

    def merge(self, other: FilterParseResult) -> None:
        self.dimension_filters.extend(other.dimension_filters)
        self.metric_filters.extend(other.metric_filters)
        self.errors.extend(other.errors)


# Leaf predicates


class StringMatchType(str, Enum):
    exact = "EXACT"
    partial_regexp = "PARTIAL_REGEXP"


class NumericOperation(str, Enum):
    equal = "EQUAL"
    greater_than = "GREATER_THAN"
    less_than = "LESS_THAN"


class StringMatch(BaseModel):
    kind: Literal["string"] = "string"
    value: str
    match_type: StringMatchType = StringMatchType.exact


class NumericComparison(BaseModel):
    kind: Literal["numeric"] = "numeric"
    operation: NumericOperation
    value: float


LeafPredicate = Annotated[
    Union[StringMatch, NumericComparison],
    Field(discriminator="kind"),
]


# Filter tree


class FilterLeaf(BaseModel):
    kind: Literal["leaf"] = "leaf"
    field_name: str
    predicate: LeafPredicate


class AndGroup(BaseModel):
    kind: Literal["and_group"] = "and_group"
    expressions: list[FilterTree]


FilterTree = Annotated[
    Union[FilterLeaf, AndGroup],
    Field(discriminator="kind"),
]


AndGroup.model_rebuild()


class ScopingFilter(BaseModel):
    """Mandatory tenant scope: rows must match `value` exactly on `dimension`."""

    dimension: str = "hostName"
    value: str

    def leaf(self) -> FilterLeaf:
        return FilterLeaf(
            field_name=self.dimension,
            predicate=StringMatch(value=self.value, match_type=StringMatchType.exact),
        )


class ReportFilters(BaseModel):
    dimension_filter: Optional[FilterTree] = None
    metric_filter: Optional[FilterTree] = None
