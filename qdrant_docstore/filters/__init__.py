"""Filter expression module."""

from qdrant_docstore.filters.converter import (
    FilterExpressionConverter,
    QdrantFilterExpressionConverter,
)
from qdrant_docstore.filters.expression import (
    Expression,
    ExpressionType,
    FilterExpressionBuilder,
    Group,
    Key,
    Value,
)

__all__ = [
    "Expression",
    "ExpressionType",
    "FilterExpressionBuilder",
    "FilterExpressionConverter",
    "Group",
    "Key",
    "QdrantFilterExpressionConverter",
    "Value",
]
