"""Tests for the SQLite query builder."""

import pytest

from rowmap.criteria import PredicateSpec
from rowmap.database.implementations.sqlite import SQLiteQueryBuilder
from rowmap.types import Glue, Operator


@pytest.fixture
def builder() -> SQLiteQueryBuilder:
    """Create a query builder."""
    return SQLiteQueryBuilder()


def test_select_all(builder: SQLiteQueryBuilder) -> None:
    """Test selecting a whole table."""
    assert builder.select("app_user") == ("SELECT * FROM app_user", {})


def test_select_with_everything(builder: SQLiteQueryBuilder) -> None:
    """Test columns, where, order, limit and offset."""
    query, params = builder.select(
        "app_user",
        columns=["user_id", "username"],
        where=[PredicateSpec("age", Operator.GT, 18)],
        order_by=["user_id"],
        limit=10,
        offset=5,
    )

    assert query == (
        "SELECT user_id, username FROM app_user WHERE age > :param_0 "
        "ORDER BY user_id LIMIT 10 OFFSET 5"
    )
    assert params == {"param_0": 18}


def test_select_offset_without_limit(builder: SQLiteQueryBuilder) -> None:
    """Test an offset alone still produces valid SQLite."""
    query, _ = builder.select("app_user", offset=3)

    assert query == "SELECT * FROM app_user LIMIT -1 OFFSET 3"


def test_insert(builder: SQLiteQueryBuilder) -> None:
    """Test insert uses named placeholders."""
    query, params = builder.insert("app_user", {"username": "alice", "age": 30})

    assert query == "INSERT INTO app_user (username, age) VALUES (:username, :age)"
    assert params == {"username": "alice", "age": 30}


def test_insert_default_values(builder: SQLiteQueryBuilder) -> None:
    """Test insert without data."""
    assert builder.insert("counter", {}) == ("INSERT INTO counter DEFAULT VALUES", {})


def test_update(builder: SQLiteQueryBuilder) -> None:
    """Test update merges data and where parameters."""
    query, params = builder.update(
        "app_user",
        {"email": "a@example.com"},
        [PredicateSpec("user_id", Operator.EQ, 1)],
    )

    assert query == "UPDATE app_user SET email = :set_email WHERE user_id = :param_0"
    assert params == {"set_email": "a@example.com", "param_0": 1}


def test_update_columns_named_like_where_parameters(builder: SQLiteQueryBuilder) -> None:
    """Test SET values stay apart from WHERE values."""
    query, params = builder.update(
        "counter",
        {"param_0": "new"},
        [PredicateSpec("param_0", Operator.EQ, "old")],
    )

    assert query == "UPDATE counter SET param_0 = :set_param_0 WHERE param_0 = :param_0"
    assert params == {"set_param_0": "new", "param_0": "old"}


def test_update_requires_data(builder: SQLiteQueryBuilder) -> None:
    """Test update with nothing to set."""
    with pytest.raises(ValueError, match="empty data"):
        builder.update("app_user", {}, [])


def test_delete_with_or(builder: SQLiteQueryBuilder) -> None:
    """Test delete joins predicates with the given glue."""
    query, params = builder.delete(
        "app_user",
        [
            PredicateSpec("username", Operator.EQ, "alice"),
            PredicateSpec("username", Operator.EQ, "bob"),
        ],
        Glue.OR,
    )

    assert query == (
        "DELETE FROM app_user "
        "WHERE username = :param_0 OR username = :param_1"
    )
    assert params == {"param_0": "alice", "param_1": "bob"}


def test_count(builder: SQLiteQueryBuilder) -> None:
    """Test count aliases its result."""
    query, params = builder.count(
        "app_user", [PredicateSpec("email", Operator.IS_NULL, None)]
    )

    assert query == "SELECT COUNT(*) AS count FROM app_user WHERE email IS NULL"
    assert params == {}
