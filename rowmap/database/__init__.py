"""Storage collaborators and the CRUD helper."""

from .engine import create_database_engine, engine_from_settings
from .implementations import EngineConnection, SQLiteConnection, SQLiteManager
from .interfaces import DatabaseConnection, DatabaseManager, ExecutionResult
from .repository import CrudHelper

__all__ = [
    "CrudHelper",
    "DatabaseConnection",
    "DatabaseManager",
    "EngineConnection",
    "ExecutionResult",
    "SQLiteConnection",
    "SQLiteManager",
    "create_database_engine",
    "engine_from_settings",
]
