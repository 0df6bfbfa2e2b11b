"""Inbound query, outbound report request and result row contracts."""

from typing import Any, Literal, Optional

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field

from ga4_adapter.contracts.expressions import Expression
from ga4_adapter.contracts.filters import FilterTree

DEFAULT_LIMIT = 10000


class ColumnField(BaseModel):
    type: Literal["column"] = "column"
    column: str


class DateRangeArgument(BaseModel):
    type: str = "literal"
    value: dict[str, Any] = Field(default_factory=dict)


class QueryArguments(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    date_range: Optional[DateRangeArgument] = Field(default=None, alias="dateRange")


class QueryRequest(BaseModel):
    fields: dict[str, ColumnField] = Field(default_factory=dict)
    predicate: Optional[Expression] = None
    limit: Optional[int] = Field(default=None, gt=0)
    arguments: QueryArguments = Field(default_factory=QueryArguments)


class ColumnSelection(BaseModel):
    """Output field name -> GA4 base name, in request order.

    Several fields may alias one column; the `*_names` properties list each
    column once, in first-seen order, and are what GA4 is asked for.
    """

    dimensions: dict[str, str] = Field(default_factory=dict)
    metrics: dict[str, str] = Field(default_factory=dict)

    @property
    def dimension_names(self) -> list[str]:
        return list(dict.fromkeys(self.dimensions.values()))

    @property
    def metric_names(self) -> list[str]:
        return list(dict.fromkeys(self.metrics.values()))


class DateRange(BaseModel):
    start_date: str = "7daysAgo"
    end_date: str = "today"


class ReportRequest(BaseModel):
    property_id: str
    date_range: DateRange = Field(default_factory=DateRange)
    dimension_names: list[str] = Field(default_factory=list)
    metric_names: list[str] = Field(default_factory=list)
    limit: int = DEFAULT_LIMIT
    dimension_filter: Optional[FilterTree] = None
    metric_filter: Optional[FilterTree] = None

    @property
    def property_path(self) -> str:
        return f"properties/{self.property_id}"


class ReportRow(BaseModel):
    dimension_values: list[Optional[str]] = Field(default_factory=list)
    metric_values: list[Optional[str]] = Field(default_factory=list)


class RowSet(BaseModel):
    rows: list[dict[str, Optional[str]]] = Field(default_factory=list)

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame(self.rows)
