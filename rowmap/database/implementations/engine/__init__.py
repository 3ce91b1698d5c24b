"""SQLAlchemy engine-backed implementation package."""

from .engine_connection import EngineConnection

__all__ = ["EngineConnection"]
