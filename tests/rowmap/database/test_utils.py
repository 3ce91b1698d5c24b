"""Tests for database utility functions."""

import pytest

from rowmap.criteria import PredicateSpec
from rowmap.database.utils import (
    build_limit_clause,
    build_order_by_clause,
    build_where_clause,
    row_to_model,
)
from rowmap.types import Glue, Operator
from tests.utils.models import TagLink, User


def test_row_to_model_from_dict() -> None:
    """Test converting a dict row."""
    user = row_to_model(User, {"user_id": 1, "username": "alice", "age": 30})

    assert user.user_id == 1
    assert user.username == "alice"
    assert user.email is None


def test_row_to_model_from_tuple() -> None:
    """Test converting a tuple row by field order."""
    link = row_to_model(TagLink, (3, "python"))

    assert link.article_id == 3
    assert link.tag == "python"


def test_row_to_model_rejects_bad_rows() -> None:
    """Test unsupported rows and mismatched tuples."""
    with pytest.raises(ValueError, match="Unsupported row type"):
        row_to_model(TagLink, ["x"])  # type: ignore[arg-type]
    with pytest.raises(ValueError, match="Tuple length"):
        row_to_model(TagLink, (1,))


def test_build_where_clause_empty() -> None:
    """Test no predicates give no clause."""
    assert build_where_clause([]) == ("", {})


def test_build_where_clause_comparisons() -> None:
    """Test scalar comparisons joined with AND."""
    clause, params = build_where_clause(
        [
            PredicateSpec("name", Operator.EQ, "John"),
            PredicateSpec("age", Operator.GE, 18),
        ]
    )

    assert clause == "WHERE name = :param_0 AND age >= :param_1"
    assert params == {"param_0": "John", "param_1": 18}


def test_build_where_clause_or_and_nulls() -> None:
    """Test OR glue and parameterless null checks."""
    clause, params = build_where_clause(
        [
            PredicateSpec("email", Operator.IS_NULL, None),
            PredicateSpec("age", Operator.NOT_NULL, None),
        ],
        Glue.OR,
    )

    assert clause == "WHERE email IS NULL OR age IS NOT NULL"
    assert params == {}


def test_build_where_clause_sets_and_ranges() -> None:
    """Test IN expands to one parameter per value and BETWEEN to two."""
    clause, params = build_where_clause(
        [
            PredicateSpec("tag", Operator.IN, ("a", "b")),
            PredicateSpec("age", Operator.BETWEEN, (10, 20)),
        ]
    )

    assert clause == (
        "WHERE tag IN (:param_0_0, :param_0_1) "
        "AND age BETWEEN :param_1_low AND :param_1_high"
    )
    assert params == {
        "param_0_0": "a",
        "param_0_1": "b",
        "param_1_low": 10,
        "param_1_high": 20,
    }


def test_build_where_clause_empty_sets() -> None:
    """Test empty IN never matches and empty NOT IN always does."""
    clause, params = build_where_clause(
        [
            PredicateSpec("tag", Operator.IN, ()),
            PredicateSpec("tag", Operator.NOT_IN, ()),
        ]
    )

    assert clause == "WHERE 1 = 0 AND 1 = 1"
    assert params == {}


def test_build_where_clause_repeated_field() -> None:
    """Test a field compared twice gets distinct parameters."""
    clause, params = build_where_clause(
        [
            PredicateSpec("age", Operator.GT, 10),
            PredicateSpec("age", Operator.LT, 20),
        ]
    )

    assert clause == "WHERE age > :param_0 AND age < :param_1"
    assert params == {"param_0": 10, "param_1": 20}


def test_build_where_clause_lookalike_fields() -> None:
    """Test field names resembling expanded parameters never share one."""
    clause, params = build_where_clause(
        [
            PredicateSpec("a_1_0", Operator.EQ, 5),
            PredicateSpec("a", Operator.IN, (1, 2)),
            PredicateSpec("a_1", Operator.EQ, 7),
        ]
    )

    assert clause == (
        "WHERE a_1_0 = :param_0 AND a IN (:param_1_0, :param_1_1) AND a_1 = :param_2"
    )
    assert params == {"param_0": 5, "param_1_0": 1, "param_1_1": 2, "param_2": 7}


def test_build_order_by_clause() -> None:
    """Test ORDER BY clause building."""
    assert build_order_by_clause(None) == ""
    assert build_order_by_clause(["name", "age DESC"]) == "ORDER BY name, age DESC"


def test_build_limit_clause() -> None:
    """Test LIMIT clause building."""
    assert build_limit_clause(None) == ""
    assert build_limit_clause(10) == "LIMIT 10"
    assert build_limit_clause(10, 20) == "LIMIT 10 OFFSET 20"
