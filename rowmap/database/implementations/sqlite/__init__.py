"""SQLite database implementation package."""

from .query_builder import SQLiteQueryBuilder
from .schema_builder import SQLiteSchemaBuilder
from .sqlite_connection import SQLiteConnection
from .sqlite_manager import SQLiteManager

__all__ = [
    "SQLiteManager",
    "SQLiteConnection",
    "SQLiteQueryBuilder",
    "SQLiteSchemaBuilder",
]
