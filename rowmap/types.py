"""Common type definitions for the rowmap system."""

from enum import Enum
from typing import Any, TypeAlias

DatabaseParamType: TypeAlias = dict[str, Any] | list[Any] | tuple[Any, ...] | None
RepositoryRowType: TypeAlias = dict[str, Any] | tuple[Any, ...]


class Environment(str, Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"


class ReferentialAction(str, Enum):
    """Foreign key ON DELETE / ON UPDATE policy."""

    CASCADE = "CASCADE"
    RESTRICT = "RESTRICT"
    SET_NULL = "SET NULL"
    SET_DEFAULT = "SET DEFAULT"
    NO_ACTION = "NO ACTION"


class Glue(str, Enum):
    """How the predicates of one criteria are joined."""

    AND = "AND"
    OR = "OR"


class Operator(str, Enum):
    """Scalar comparison operators understood by criteria."""

    EQ = "="
    NE = "<>"
    LT = "<"
    LE = "<="
    GT = ">"
    GE = ">="
    IN = "IN"
    NOT_IN = "NOT IN"
    IS_NULL = "IS NULL"
    NOT_NULL = "IS NOT NULL"
    BETWEEN = "BETWEEN"
    LIKE = "LIKE"
