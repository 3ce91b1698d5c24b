"""Exceptions for schema mapping and CRUD operations."""


class RowmapError(Exception):
    """Base exception for rowmap errors."""

    pass


class SchemaError(RowmapError):
    """Base exception for metadata resolution errors."""

    pass


class TypeNotFound(SchemaError):
    """Raised when a type identity cannot be introspected."""

    pass


class NotMapped(SchemaError):
    """Raised when a type has no table descriptor after a full merge."""

    pass


class SchemaDefinitionError(SchemaError, ValueError):
    """Raised when a declaration or descriptor is malformed."""

    pass


class CyclicTypeGraph(SchemaDefinitionError):
    """Raised when a type appears on its own resolution path."""

    pass


class QueryError(RowmapError):
    """Base exception for query building and reading errors."""

    pass


class InvalidCriteria(QueryError, ValueError):
    """Raised when a criteria references an unusable field."""

    pass


class AmbiguousResult(QueryError):
    """Raised when a unique read matches more than one row."""

    pass


class StorageError(RowmapError):
    """Raised when the underlying storage fails.

    The original driver exception is kept in ``cause`` and chained.
    """

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause
