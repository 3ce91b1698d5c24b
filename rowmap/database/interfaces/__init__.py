"""Database interfaces module."""

from .connection import DatabaseConnection, ExecutionResult
from .manager import DatabaseManager
from .query_builder import QueryBuilder
from .schema_builder import SchemaBuilder

__all__ = [
    "DatabaseConnection",
    "ExecutionResult",
    "DatabaseManager",
    "QueryBuilder",
    "SchemaBuilder",
]
