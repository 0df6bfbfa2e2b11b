"""Boolean predicate AST accepted from the caller."""
from __future__ import annotations
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag


# Comparison targets


class ColumnTarget(BaseModel):
    type: Literal["column"] = "column"
    name: str


class RootCollectionColumnTarget(BaseModel):
    type: Literal["root_collection_column"] = "root_collection_column"
    name: str


ComparisonTarget = Annotated[
    Union[ColumnTarget, RootCollectionColumnTarget],
    Field(discriminator="type"),
]


# Comparison values


class ScalarValue(BaseModel):
    type: Literal["scalar"] = "scalar"
    value: Any = None


class VariableValue(BaseModel):
    type: Literal["variable"] = "variable"
    name: str


class ColumnValue(BaseModel):
    type: Literal["column"] = "column"
    column: ComparisonTarget


class UnknownValue(BaseModel):
    """A comparison value whose tag is not part of the supported vocabulary."""

    model_config = ConfigDict(extra="allow")

    type: str = "unknown"


def _tag_of(value: Any, known: frozenset[str]) -> str:
    """Discriminator tag of a raw dict or model; anything unrecognised is 'unknown'."""
    if isinstance(value, dict):
        tag = value.get("type")
    else:
        tag = getattr(value, "type", None)
    if isinstance(tag, str) and tag in known:
        return tag
    return "unknown"


_VALUE_TAGS = frozenset({"scalar", "variable", "column"})


def _value_tag(value: Any) -> str:
    return _tag_of(value, _VALUE_TAGS)


ComparisonValue = Annotated[
    Union[
        Annotated[ScalarValue, Tag("scalar")],
        Annotated[VariableValue, Tag("variable")],
        Annotated[ColumnValue, Tag("column")],
        Annotated[UnknownValue, Tag("unknown")],
    ],
    Discriminator(_value_tag),
]


# Comparisons (leaf nodes)


class BinaryComparison(BaseModel):
    type: Literal["binary_comparison_operator"] = "binary_comparison_operator"
    column: ComparisonTarget
    operator: str
    value: ComparisonValue


class UnaryComparison(BaseModel):
    type: Literal["unary_comparison_operator"] = "unary_comparison_operator"
    column: ComparisonTarget
    operator: str = "is_null"


class Exists(BaseModel):
    type: Literal["exists"] = "exists"
    in_collection: dict[str, Any] = Field(default_factory=dict)
    predicate: Optional[Expression] = None


class UnknownExpression(BaseModel):
    """Any node whose tag is not part of the supported vocabulary."""

    model_config = ConfigDict(extra="allow")

    type: str = "unknown"


# Logical operators (composite nodes)


class And(BaseModel):
    type: Literal["and"] = "and"
    expressions: list[Expression] = Field(default_factory=list)


class Or(BaseModel):
    type: Literal["or"] = "or"
    expressions: list[Expression] = Field(default_factory=list)


class Not(BaseModel):
    type: Literal["not"] = "not"
    expression: Expression


_EXPRESSION_TAGS = frozenset(
    {
        "and",
        "or",
        "not",
        "binary_comparison_operator",
        "unary_comparison_operator",
        "exists",
    }
)


def _expression_tag(value: Any) -> str:
    return _tag_of(value, _EXPRESSION_TAGS)


Expression = Annotated[
    Union[
        Annotated[And, Tag("and")],
        Annotated[Or, Tag("or")],
        Annotated[Not, Tag("not")],
        Annotated[BinaryComparison, Tag("binary_comparison_operator")],
        Annotated[UnaryComparison, Tag("unary_comparison_operator")],
        Annotated[Exists, Tag("exists")],
        Annotated[UnknownExpression, Tag("unknown")],
    ],
    Discriminator(_expression_tag),
]


And.model_rebuild()
Or.model_rebuild()
Not.model_rebuild()
Exists.model_rebuild()
