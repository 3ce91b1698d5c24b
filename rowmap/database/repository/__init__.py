"""Repository layer for database operations."""

from .crud import CrudHelper

__all__ = ["CrudHelper"]
