"""Structured filter expressions over document metadata.

An expression is a small tree: comparison nodes hold a metadata ``Key`` on
the left and a literal ``Value`` on the right; boolean nodes (``AND``, ``OR``,
``NOT``) hold other expressions or parenthesised ``Group`` nodes.

Example:
    >>> b = FilterExpressionBuilder()
    >>> expr = b.and_(b.eq("country", "NL"), b.gte("year", 2020))
"""

from collections.abc import Iterable
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict


class ExpressionType(str, Enum):
    """Operators supported in filter expressions."""

    AND = "AND"
    OR = "OR"
    EQ = "EQ"
    NE = "NE"
    GT = "GT"
    GTE = "GTE"
    LT = "LT"
    LTE = "LTE"
    IN = "IN"
    NIN = "NIN"
    NOT = "NOT"


class Key(BaseModel):
    """Metadata key referenced by a comparison."""

    model_config = ConfigDict(frozen=True)

    key: str


class Value(BaseModel):
    """Literal compared against a metadata key."""

    model_config = ConfigDict(frozen=True)

    value: Any


class Expression(BaseModel):
    """A filter expression node.

    Attributes:
        type: Operator of this node.
        left: Left operand (the key for comparisons, the operand for NOT).
        right: Right operand; unused by NOT.
    """

    model_config = ConfigDict(frozen=True)

    type: ExpressionType
    left: "Key | Value | Expression | Group"
    right: "Key | Value | Expression | Group | None" = None


class Group(BaseModel):
    """Parenthesised sub-expression."""

    model_config = ConfigDict(frozen=True)

    content: Expression


Expression.model_rebuild()
Group.model_rebuild()


class FilterExpressionBuilder:
    """Fluent helper for building filter expressions."""

    def eq(self, key: str, value: Any) -> Expression:
        return self._compare(ExpressionType.EQ, key, value)

    def ne(self, key: str, value: Any) -> Expression:
        return self._compare(ExpressionType.NE, key, value)

    def gt(self, key: str, value: int | float) -> Expression:
        return self._compare(ExpressionType.GT, key, value)

    def gte(self, key: str, value: int | float) -> Expression:
        return self._compare(ExpressionType.GTE, key, value)

    def lt(self, key: str, value: int | float) -> Expression:
        return self._compare(ExpressionType.LT, key, value)

    def lte(self, key: str, value: int | float) -> Expression:
        return self._compare(ExpressionType.LTE, key, value)

    def in_(self, key: str, values: Iterable[Any]) -> Expression:
        return self._compare(ExpressionType.IN, key, list(values))

    def nin(self, key: str, values: Iterable[Any]) -> Expression:
        return self._compare(ExpressionType.NIN, key, list(values))

    def and_(self, left: Expression | Group, right: Expression | Group) -> Expression:
        return Expression(type=ExpressionType.AND, left=left, right=right)

    def or_(self, left: Expression | Group, right: Expression | Group) -> Expression:
        return Expression(type=ExpressionType.OR, left=left, right=right)

    def not_(self, content: Expression | Group) -> Expression:
        return Expression(type=ExpressionType.NOT, left=content)

    def group(self, content: Expression) -> Group:
        return Group(content=content)

    @staticmethod
    def _compare(type_: ExpressionType, key: str, value: Any) -> Expression:
        return Expression(type=type_, left=Key(key=key), right=Value(value=value))
