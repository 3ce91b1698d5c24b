"""Attribute-driven schema mapping and CRUD helpers."""

from .config import Settings, load_settings, settings
from .criteria import Criteria, Predicate, PredicateSpec
from .exceptions import (
    AmbiguousResult,
    CyclicTypeGraph,
    InvalidCriteria,
    NotMapped,
    RowmapError,
    SchemaDefinitionError,
    StorageError,
    TypeNotFound,
)
from .log import (
    get_logger,
    setup_logging,
    setup_production_logging,
    setup_test_logging,
)
from .types import Environment, Glue, Operator, ReferentialAction

__all__ = [
    "AmbiguousResult",
    "Criteria",
    "CyclicTypeGraph",
    "Environment",
    "Glue",
    "InvalidCriteria",
    "NotMapped",
    "Operator",
    "Predicate",
    "PredicateSpec",
    "ReferentialAction",
    "RowmapError",
    "SchemaDefinitionError",
    "Settings",
    "StorageError",
    "TypeNotFound",
    "get_logger",
    "load_settings",
    "settings",
    "setup_logging",
    "setup_production_logging",
    "setup_test_logging",
]
