"""Column classification by naming convention."""

from ga4_adapter.contracts.filters import ColumnKind, ColumnRef
from ga4_adapter.contracts.outcome import Outcome, err

DIMENSION_PREFIX = "dimension_"
METRIC_PREFIX = "metric_"

_PREFIXES: tuple[tuple[str, ColumnKind], ...] = (
    (DIMENSION_PREFIX, ColumnKind.dimension),
    (METRIC_PREFIX, ColumnKind.metric),
)


def classify_column(column_name: str) -> Outcome[ColumnRef]:
    """Classify a column as a dimension or a metric from its prefix.

    The base name (prefix stripped) is the name GA4 knows the field by.
    """
    for prefix, kind in _PREFIXES:
        if column_name.startswith(prefix):
            return Outcome.success(
                ColumnRef(
                    column_name=column_name,
                    base_name=column_name[len(prefix):],
                    kind=kind,
                )
            )
    return Outcome.failure(
        errors=[
            err(
                "unclassifiable_column",
                f"Column {column_name} is neither a dimension nor a metric",
                column=column_name,
            )
        ]
    )
