"""Database utilities for common operations."""

from collections.abc import Sequence
from typing import Any, TypeVar

from pydantic import BaseModel

from rowmap.criteria import PredicateSpec
from rowmap.types import Glue, Operator, RepositoryRowType

T = TypeVar("T", bound=BaseModel)


def row_to_model(model_class: type[T], row: RepositoryRowType) -> T:
    """Convert database row to Pydantic model.

    Args:
        model_class: The Pydantic model class to convert to
        row: Database row as dict or tuple

    Returns:
        Instance of the Pydantic model

    Raises:
        ValueError: If row type is not supported
    """
    if isinstance(row, dict):
        return model_class.model_validate(row)

    if not isinstance(row, tuple):
        raise ValueError(f"Unsupported row type: {type(row)}")

    field_names = list(model_class.model_fields.keys())
    if len(field_names) != len(row):
        raise ValueError(
            f"Tuple length ({len(row)}) doesn't match model fields "
            f"({len(field_names)})"
        )
    return model_class.model_validate(dict(zip(field_names, row, strict=False)))


def build_where_clause(
    predicates: Sequence[PredicateSpec], glue: Glue = Glue.AND
) -> tuple[str, dict[str, Any]]:
    """Build WHERE clause from predicate specifications.

    Parameters are named after the predicate position (``param_<n>``, with
    ``_<i>`` or ``_low``/``_high`` suffixes for sets and ranges).

    Args:
        predicates: ``(field, operator, value)`` triples
        glue: Joins the individual conditions

    Returns:
        Tuple of (where_clause, parameters_dict)

    Example:
        >>> build_where_clause([PredicateSpec("name", Operator.EQ, "John")])
        ("WHERE name = :param_0", {"param_0": "John"})
    """
    if not predicates:
        return "", {}

    clauses: list[str] = []
    params: dict[str, Any] = {}

    for position, (field, operator, value) in enumerate(predicates):
        param = f"param_{position}"

        if operator in (Operator.IS_NULL, Operator.NOT_NULL):
            clauses.append(f"{field} {operator.value}")
        elif operator in (Operator.IN, Operator.NOT_IN):
            if not value:
                # Empty set: IN never holds, NOT IN always does.
                clauses.append("1 = 0" if operator is Operator.IN else "1 = 1")
                continue
            names = [f"{param}_{i}" for i in range(len(value))]
            clauses.append(
                f"{field} {operator.value} ({', '.join(':' + name for name in names)})"
            )
            params.update(zip(names, value, strict=True))
        elif operator is Operator.BETWEEN:
            clauses.append(f"{field} BETWEEN :{param}_low AND :{param}_high")
            params[f"{param}_low"], params[f"{param}_high"] = value
        else:
            clauses.append(f"{field} {operator.value} :{param}")
            params[param] = value

    where_clause = f" {glue.value} ".join(clauses)
    return f"WHERE {where_clause}", params


def build_order_by_clause(order_by: Sequence[str] | None) -> str:
    """Build ORDER BY clause from field list.

    Example:
        >>> build_order_by_clause(["name", "age DESC"])
        "ORDER BY name, age DESC"
    """
    if not order_by:
        return ""

    return f"ORDER BY {', '.join(order_by)}"


def build_limit_clause(limit: int | None, offset: int | None = None) -> str:
    """Build LIMIT clause with optional OFFSET.

    Example:
        >>> build_limit_clause(10, 20)
        "LIMIT 10 OFFSET 20"
    """
    if limit is None:
        return ""

    clause = f"LIMIT {int(limit)}"
    if offset is not None:
        clause += f" OFFSET {int(offset)}"

    return clause
