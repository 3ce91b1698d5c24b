"""Database implementations package."""

from .engine import EngineConnection
from .sqlite import (
    SQLiteConnection,
    SQLiteManager,
    SQLiteQueryBuilder,
    SQLiteSchemaBuilder,
)

__all__ = [
    "EngineConnection",
    "SQLiteManager",
    "SQLiteConnection",
    "SQLiteQueryBuilder",
    "SQLiteSchemaBuilder",
]
