"""Query builders translating parameter models into ordered parameter maps."""

from .base import AbstractQueryBuilder
from .flat_builder import FlatQueryBuilder
from .json_builder import JsonQueryBuilder
from .protocols import QueryBuilder

__all__ = [
    # Protocols
    "QueryBuilder",
    # Implementations
    "AbstractQueryBuilder",
    "JsonQueryBuilder",
    "FlatQueryBuilder",
]
