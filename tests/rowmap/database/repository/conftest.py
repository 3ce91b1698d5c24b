"""Shared fixtures for CRUD helper tests."""

import pytest

from rowmap.database.implementations.sqlite import SQLiteManager
from rowmap.database.repository import CrudHelper
from rowmap.schema import AttributesReader
from tests.utils.models import Article, TagLink, User


@pytest.fixture
def tables(db_manager: SQLiteManager, reader: AttributesReader) -> SQLiteManager:
    """Create the tables of the shared mapped types."""
    for cls in (User, Article, TagLink):
        db_manager.create_table(reader.resolve(cls))
    return db_manager


@pytest.fixture
def user_crud(tables: SQLiteManager, reader: AttributesReader) -> CrudHelper[User]:
    """Create a user CRUD helper."""
    return CrudHelper(User, tables, reader)


@pytest.fixture
def article_crud(tables: SQLiteManager, reader: AttributesReader) -> CrudHelper[Article]:
    """Create an article CRUD helper."""
    return CrudHelper(Article, tables, reader)


@pytest.fixture
def sample_users() -> list[User]:
    """Create sample users for testing."""
    return [
        User(username="alice", email="alice@example.com", age=30),
        User(username="bob", email="bob@example.com", age=25),
        User(username="carol", age=30),
    ]
