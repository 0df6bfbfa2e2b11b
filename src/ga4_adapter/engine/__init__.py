"""Translation engine: parse, build, assemble, map."""

from ga4_adapter.engine.assembler import assemble_report_request, select_columns
from ga4_adapter.engine.builder import build_report_filters
from ga4_adapter.engine.classifier import classify_column
from ga4_adapter.engine.dates import normalize_date, resolve_date_range
from ga4_adapter.engine.parser import parse_predicate
from ga4_adapter.engine.rows import map_rows, validate_rows

__all__ = [
    "assemble_report_request",
    "build_report_filters",
    "classify_column",
    "map_rows",
    "normalize_date",
    "parse_predicate",
    "resolve_date_range",
    "select_columns",
    "validate_rows",
]
