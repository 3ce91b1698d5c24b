"""Database connection interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from types import TracebackType
from typing import Any

from rowmap.types import DatabaseParamType


@dataclass(frozen=True)
class ExecutionResult:
    """Outcome of a data-modifying statement."""

    row_count: int
    last_row_id: int | None = None


class DatabaseConnection(ABC):
    """Abstract database connection interface.

    Implementations serialize statements issued on one connection, so
    several managers and helpers may share it across threads.
    """

    @abstractmethod
    def connect(self) -> None:
        """Establish database connection."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Close database connection."""
        pass

    @abstractmethod
    def execute(self, query: str, params: DatabaseParamType = None) -> ExecutionResult:
        """Execute a data-modifying statement and commit it.

        Args:
            query: SQL statement
            params: Statement parameters

        Returns:
            Affected row count and last inserted row id
        """
        pass

    @abstractmethod
    def fetch_one(
        self, query: str, params: DatabaseParamType = None
    ) -> dict[str, Any] | None:
        """Fetch single row.

        Args:
            query: SQL query
            params: Query parameters

        Returns:
            Single row as dictionary or None if not found
        """
        pass

    @abstractmethod
    def fetch_all(
        self, query: str, params: DatabaseParamType = None
    ) -> list[dict[str, Any]]:
        """Fetch all rows.

        Args:
            query: SQL query
            params: Query parameters

        Returns:
            List of rows as dictionaries
        """
        pass

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        """Check if connection is active."""
        pass

    def __enter__(self) -> "DatabaseConnection":
        self.connect()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.disconnect()
