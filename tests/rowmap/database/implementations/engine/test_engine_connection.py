"""Tests for the SQLAlchemy engine-backed connection."""

from collections.abc import Generator

import pytest

from rowmap.criteria import Criteria
from rowmap.database import CrudHelper, create_database_engine
from rowmap.database.implementations import EngineConnection, SQLiteManager
from rowmap.schema import AttributesReader
from rowmap.types import Environment
from tests.utils.models import User


@pytest.fixture
def engine_manager() -> Generator[SQLiteManager, None, None]:
    """Provide a manager running on an in-memory engine."""
    engine = create_database_engine(Environment.TESTING)
    manager = SQLiteManager(connection=EngineConnection(engine))
    with manager:
        yield manager
    engine.dispose()


def test_connect_and_disconnect() -> None:
    """Test connection lifecycle."""
    connection = EngineConnection(create_database_engine(Environment.TESTING))

    assert not connection.is_connected
    with connection:
        assert connection.is_connected
    assert not connection.is_connected


def test_execute_requires_connection() -> None:
    """Test statements fail before connecting."""
    connection = EngineConnection(create_database_engine(Environment.TESTING))

    with pytest.raises(RuntimeError, match="not connected"):
        connection.execute("SELECT 1")


def test_crud_through_engine(
    engine_manager: SQLiteManager, reader: AttributesReader
) -> None:
    """Test the CRUD helper works on top of an engine connection."""
    engine_manager.create_table(reader.resolve(User))
    users = CrudHelper(User, engine_manager, reader)

    alice = users.create(User(username="alice", age=30))
    users.create(User(username="bob", age=20))

    assert alice.user_id == 1
    assert users.count_by() == 2

    found = users.read_one_by(Criteria(username="bob"))
    assert found is not None
    assert found.age == 20

    alice.email = "alice@example.com"
    users.update(alice)
    reread = users.read_one(alice.user_id)
    assert reread is not None
    assert reread.email == "alice@example.com"

    assert users.delete(Criteria(age=[20, 30])) == 2
    assert users.list_all() == []
