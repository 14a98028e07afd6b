"""Conversion of filter expressions into Qdrant filters."""

import math
from abc import ABC, abstractmethod
from typing import Any

from qdrant_client.models import (
    FieldCondition,
    Filter,
    MatchAny,
    MatchExcept,
    MatchValue,
    Range,
)

from qdrant_docstore.exceptions import ErrorCode, ValidationError
from qdrant_docstore.filters.expression import (
    Expression,
    ExpressionType,
    Group,
    Key,
    Value,
)

_RANGE_BOUNDS = {
    ExpressionType.GT: "gt",
    ExpressionType.GTE: "gte",
    ExpressionType.LT: "lt",
    ExpressionType.LTE: "lte",
}


class FilterExpressionConverter(ABC):
    """Turns a filter expression into a store-native filter."""

    @abstractmethod
    def convert(self, expression: Expression) -> Filter:
        """Convert an expression.

        Args:
            expression: Root of the expression tree.

        Returns:
            Native filter object.

        Raises:
            ValidationError: If the expression cannot be represented.
        """
        ...


class QdrantFilterExpressionConverter(FilterExpressionConverter):
    """Builds Qdrant ``Filter`` objects from filter expressions.

    Boolean nodes become nested filters (``must`` for AND, ``should`` for OR,
    ``must_not`` for NOT and NE); comparisons become ``FieldCondition``s.
    """

    def convert(self, expression: Expression | Group) -> Filter:
        condition = self._convert_operand(expression)
        if isinstance(condition, Filter):
            return condition
        return Filter(must=[condition])

    def _convert_operand(self, operand: Any) -> Filter | FieldCondition:
        if isinstance(operand, Group):
            return self._convert_operand(operand.content)
        if not isinstance(operand, Expression):
            raise _invalid(f"Expected an expression, got {type(operand).__name__}")

        if operand.type == ExpressionType.AND:
            return Filter(must=self._convert_pair(operand))
        if operand.type == ExpressionType.OR:
            return Filter(should=self._convert_pair(operand))
        if operand.type == ExpressionType.NOT:
            return Filter(must_not=[self._convert_operand(operand.left)])

        key, value = self._field_operands(operand)

        if operand.type == ExpressionType.EQ:
            return self._equals(key, value)
        if operand.type == ExpressionType.NE:
            return Filter(must_not=[self._equals(key, value)])
        if operand.type in _RANGE_BOUNDS:
            bound = _RANGE_BOUNDS[operand.type]
            return FieldCondition(
                key=key,
                range=Range(**{bound: self._number(key, value)}),
            )
        if operand.type == ExpressionType.IN:
            return FieldCondition(
                key=key,
                match=MatchAny(any=self._variants(key, value)),
            )
        if operand.type == ExpressionType.NIN:
            return FieldCondition(
                key=key,
                match=MatchExcept(**{"except": self._variants(key, value)}),
            )

        raise _invalid(f"Unsupported expression type: {operand.type}")

    def _convert_pair(self, operand: Expression) -> list[Filter | FieldCondition]:
        if operand.right is None:
            raise _invalid(f"{operand.type.value} requires two operands")
        return [
            self._convert_operand(operand.left),
            self._convert_operand(operand.right),
        ]

    @staticmethod
    def _field_operands(operand: Expression) -> tuple[str, Any]:
        if not isinstance(operand.left, Key) or not isinstance(operand.right, Value):
            raise _invalid(
                f"{operand.type.value} must compare a key with a value",
            )
        return operand.left.key, operand.right.value

    def _equals(self, key: str, value: Any) -> FieldCondition:
        if isinstance(value, (str, bool, int)):
            return FieldCondition(key=key, match=MatchValue(value=value))
        if isinstance(value, float):
            number = self._number(key, value)
            return FieldCondition(key=key, range=Range(gte=number, lte=number))
        raise _invalid(
            f"Cannot compare '{key}' for equality with {type(value).__name__}",
            key=key,
        )

    @staticmethod
    def _number(key: str, value: Any) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise _invalid(
                f"Range comparison on '{key}' needs a number, "
                f"got {type(value).__name__}",
                key=key,
            )
        if isinstance(value, float) and not math.isfinite(value):
            raise _invalid(f"Range bound for '{key}' must be finite", key=key)
        return float(value)

    @staticmethod
    def _variants(key: str, value: Any) -> list[str] | list[int]:
        if not isinstance(value, (list, tuple)) or not value:
            raise _invalid(f"IN/NIN on '{key}' needs a non-empty list", key=key)
        values = list(value)
        if all(isinstance(v, str) for v in values):
            return values
        if all(isinstance(v, int) and not isinstance(v, bool) for v in values):
            return values
        raise _invalid(
            f"IN/NIN on '{key}' needs only strings or only integers",
            key=key,
        )


def _invalid(message: str, key: str | None = None) -> ValidationError:
    details = {"key": key} if key is not None else None
    return ValidationError(message, code=ErrorCode.INVALID_FILTER, details=details)
