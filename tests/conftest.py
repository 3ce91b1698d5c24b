"""Global pytest configuration and fixtures."""

from collections.abc import Generator
from logging import Logger

import pytest

from rowmap import get_logger, setup_test_logging
from rowmap.database.implementations.sqlite import SQLiteManager
from rowmap.schema import AttributesReader, SchemaCache


@pytest.fixture(scope="session", autouse=True)
def setup_logging() -> None:
    """Setup test logging for all tests."""
    setup_test_logging()


@pytest.fixture(scope="function")
def logger() -> Logger:
    """Provide a logger instance for tests."""
    return get_logger("test")


@pytest.fixture
def schema_cache() -> SchemaCache:
    """Provide an empty schema cache."""
    return SchemaCache()


@pytest.fixture
def reader(schema_cache: SchemaCache) -> AttributesReader:
    """Provide a reader backed by a fresh cache."""
    return AttributesReader(schema_cache)


@pytest.fixture
def db_manager() -> Generator[SQLiteManager, None, None]:
    """Provide a connected in-memory SQLite manager."""
    manager = SQLiteManager()
    with manager:
        yield manager
