from __future__ import annotations

from typing import Any

import pytest

from ga4_adapter.contracts.filters import (
    AndGroup,
    ColumnKind,
    ComparisonOperator,
    FilterLeaf,
    FilterParseResult,
    NumericComparison,
    NumericOperation,
    ParsedFilter,
    ScopingFilter,
    StringMatch,
    StringMatchType,
)
from ga4_adapter.engine.builder import build_report_filters, to_number
from ga4_adapter.engine.parser import parse_predicate
from ga4_adapter.errors import TranslationError
from ga4_validation.stubs import compare


def parsed(column: str, operator: str, value: Any, kind: ColumnKind) -> ParsedFilter:
    return ParsedFilter(
        column_name=column,
        base_name=column.split("_", 1)[1],
        operator=ComparisonOperator(operator),
        value=value,
        kind=kind,
    )


def dim(operator: str, value: Any, name: str = "dimension_country") -> ParsedFilter:
    return parsed(name, operator, value, ColumnKind.dimension)


def met(operator: str, value: Any, name: str = "metric_sessions") -> ParsedFilter:
    return parsed(name, operator, value, ColumnKind.metric)


def test_no_filters_yields_scoping_leaf_alone(scope: ScopingFilter) -> None:
    out = build_report_filters(FilterParseResult(), scope)
    assert out.ok is True
    assert out.data.dimension_filter == scope.leaf()
    assert out.data.metric_filter is None


def test_scoping_leaf_is_exact_host_match(scope: ScopingFilter) -> None:
    leaf = scope.leaf()
    assert leaf.field_name == "hostName"
    assert leaf.predicate == StringMatch(value="shop.example.com", match_type=StringMatchType.exact)


def test_one_dimension_filter_is_grouped_with_scope(scope: ScopingFilter) -> None:
    out = build_report_filters(FilterParseResult(dimension_filters=[dim("_eq", "US")]), scope)
    assert out.ok is True
    tree = out.data.dimension_filter
    assert isinstance(tree, AndGroup)
    assert tree.expressions == [
        scope.leaf(),
        FilterLeaf(field_name="country", predicate=StringMatch(value="US", match_type=StringMatchType.exact)),
    ]


def test_many_dimension_filters_keep_scope_first(scope: ScopingFilter) -> None:
    result = FilterParseResult(
        dimension_filters=[dim("_eq", "US"), dim("_like", "^/blog", name="dimension_pagePath")]
    )
    out = build_report_filters(result, scope)
    tree = out.data.dimension_filter
    assert isinstance(tree, AndGroup)
    assert [leaf.field_name for leaf in tree.expressions] == ["hostName", "country", "pagePath"]
    assert tree.expressions[2].predicate.match_type is StringMatchType.partial_regexp


def test_single_metric_filter_is_a_bare_leaf(scope: ScopingFilter) -> None:
    out = build_report_filters(parse_predicate(compare("metric_sessions", "_gt", 100)), scope)
    assert out.ok is True
    assert out.data.metric_filter == FilterLeaf(
        field_name="sessions",
        predicate=NumericComparison(operation=NumericOperation.greater_than, value=100.0),
    )
    assert out.data.dimension_filter == scope.leaf()


def test_many_metric_filters_are_grouped(scope: ScopingFilter) -> None:
    result = FilterParseResult(metric_filters=[met("_gt", 10), met("_lt", "20.5"), met("_eq", 7, name="metric_users")])
    out = build_report_filters(result, scope)
    tree = out.data.metric_filter
    assert isinstance(tree, AndGroup)
    assert [leaf.predicate.operation for leaf in tree.expressions] == [
        NumericOperation.greater_than,
        NumericOperation.less_than,
        NumericOperation.equal,
    ]
    assert tree.expressions[1].predicate.value == 20.5


@pytest.mark.parametrize(
    "f",
    [
        dim("_gt", "US"),
        dim("_lt", "US"),
        met("_like", "1"),
    ],
)
def test_rejected_matrix_cells_fail_and_are_dropped(scope: ScopingFilter, f: ParsedFilter) -> None:
    if f.kind is ColumnKind.dimension:
        result = FilterParseResult(dimension_filters=[f])
    else:
        result = FilterParseResult(metric_filters=[f])
    out = build_report_filters(result, scope)
    assert out.ok is False
    assert [e.code for e in out.errors] == ["operator_kind_mismatch"]
    assert out.data.dimension_filter == scope.leaf()
    assert out.data.metric_filter is None


@pytest.mark.parametrize("value", [42, 4.2, True, None])
def test_dimension_values_must_be_strings(scope: ScopingFilter, value: Any) -> None:
    out = build_report_filters(FilterParseResult(dimension_filters=[dim("_eq", value)]), scope)
    assert out.ok is False
    assert [e.code for e in out.errors] == ["type_mismatch"]
    assert out.data.dimension_filter == scope.leaf()


def test_numeric_looking_dimension_string_is_not_converted(scope: ScopingFilter) -> None:
    out = build_report_filters(FilterParseResult(dimension_filters=[dim("_eq", "42")]), scope)
    assert out.ok is True
    assert out.data.dimension_filter.expressions[1].predicate == StringMatch(value="42")


@pytest.mark.parametrize("value", ["lots", "", True, "nan", "inf", [1]])
def test_metric_values_must_be_numeric(scope: ScopingFilter, value: Any) -> None:
    out = build_report_filters(FilterParseResult(metric_filters=[met("_eq", value)]), scope)
    assert out.ok is False
    assert [e.code for e in out.errors] == ["type_mismatch"]
    assert out.data.metric_filter is None


@pytest.mark.parametrize(("value", "expected"), [(100, 100.0), ("100", 100.0), (" 2.5 ", 2.5), (-3, -3.0)])
def test_to_number(value: Any, expected: float) -> None:
    assert to_number(value) == expected


def test_parse_errors_are_carried_and_unwrap_raises(scope: ScopingFilter) -> None:
    result = parse_predicate(compare("dimension_country", "_gt", "US"))
    out = build_report_filters(result, scope)
    assert out.ok is False
    assert [e.code for e in out.errors] == ["operator_kind_mismatch"]
    with pytest.raises(TranslationError) as exc:
        out.unwrap()
    assert exc.value.status_code == 400
    assert [e.code for e in exc.value.errors] == ["operator_kind_mismatch"]


def test_filter_of_wrong_kind_is_rejected(scope: ScopingFilter) -> None:
    out = build_report_filters(FilterParseResult(dimension_filters=[met("_eq", 1)]), scope)
    assert out.ok is False
    assert [e.code for e in out.errors] == ["kind_mismatch"]


def test_valid_filters_survive_when_a_sibling_is_dropped(scope: ScopingFilter) -> None:
    result = FilterParseResult(metric_filters=[met("_gt", 1), met("_eq", "many")])
    out = build_report_filters(result, scope)
    assert out.ok is False
    assert isinstance(out.data.metric_filter, FilterLeaf)
