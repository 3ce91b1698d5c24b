"""Structured filters for reading and deleting rows."""

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, NamedTuple

from rowmap.exceptions import InvalidCriteria
from rowmap.types import Glue, Operator

_MISSING = object()

_NO_VALUE_OPERATORS = {Operator.IS_NULL, Operator.NOT_NULL}
_SET_OPERATORS = {Operator.IN, Operator.NOT_IN}


class PredicateSpec(NamedTuple):
    """One ``field operator value`` comparison handed to a query builder."""

    field: str
    operator: Operator
    value: Any


@dataclass(frozen=True)
class Predicate:
    """Comparison of a field against a value."""

    operator: Operator
    value: Any = None

    def __post_init__(self) -> None:
        operator = Operator(self.operator)
        value = self.value
        if value is None and operator is Operator.EQ:
            operator = Operator.IS_NULL
        elif value is None and operator is Operator.NE:
            operator = Operator.NOT_NULL
        object.__setattr__(self, "operator", operator)

        if operator in _SET_OPERATORS:
            if _is_scalar(value) or isinstance(value, Mapping):
                raise InvalidCriteria(f"{operator.value} expects a collection of values")
            values = tuple(value)
            _require_scalars(operator, values)
            object.__setattr__(self, "value", values)
        elif operator is Operator.BETWEEN:
            bounds = tuple(value) if isinstance(value, (list, tuple)) else ()
            if len(bounds) != 2:
                raise InvalidCriteria("BETWEEN expects a (low, high) pair")
            _require_scalars(operator, bounds)
            object.__setattr__(self, "value", bounds)
        elif operator in _NO_VALUE_OPERATORS:
            object.__setattr__(self, "value", None)
        elif operator is Operator.LIKE and not isinstance(value, str):
            raise InvalidCriteria("LIKE expects a string pattern")
        else:
            _require_scalars(operator, (value,))

    def matches(self, candidate: Any) -> bool:
        """Evaluate the comparison against a candidate value."""
        operator = self.operator
        if operator is Operator.IS_NULL:
            return candidate is None
        if operator is Operator.NOT_NULL:
            return candidate is not None
        # NULL never compares, as in SQL.
        if candidate is None:
            return False
        if operator is Operator.EQ:
            return candidate == self.value
        if operator is Operator.NE:
            return candidate != self.value
        if operator is Operator.IN:
            return candidate in self.value
        if operator is Operator.NOT_IN:
            return candidate not in self.value

        try:
            if operator is Operator.LT:
                return candidate < self.value
            if operator is Operator.LE:
                return candidate <= self.value
            if operator is Operator.GT:
                return candidate > self.value
            if operator is Operator.GE:
                return candidate >= self.value
            if operator is Operator.BETWEEN:
                low, high = self.value
                return low <= candidate <= high
        except TypeError:
            return False
        return _like(str(candidate), self.value)


def _like(text: str, pattern: str) -> bool:
    regex = "".join(
        ".*" if char == "%" else "." if char == "_" else re.escape(char)
        for char in pattern
    )
    return re.fullmatch(regex, text, flags=re.IGNORECASE | re.DOTALL) is not None


def _is_scalar(value: Any) -> bool:
    return isinstance(value, (str, bytes)) or not isinstance(value, Iterable)


def _require_scalars(operator: Operator, values: Iterable[Any]) -> None:
    for value in values:
        if isinstance(value, (Criteria, Predicate)):
            raise InvalidCriteria("Nested filters are not supported")
        if not _is_scalar(value):
            raise InvalidCriteria(
                f"{operator.value} expects scalar values, got {type(value).__name__}"
            )


def eq(value: Any) -> Predicate:
    return Predicate(Operator.EQ, value)


def ne(value: Any) -> Predicate:
    return Predicate(Operator.NE, value)


def lt(value: Any) -> Predicate:
    return Predicate(Operator.LT, value)


def le(value: Any) -> Predicate:
    return Predicate(Operator.LE, value)


def gt(value: Any) -> Predicate:
    return Predicate(Operator.GT, value)


def ge(value: Any) -> Predicate:
    return Predicate(Operator.GE, value)


def in_(values: Iterable[Any]) -> Predicate:
    return Predicate(Operator.IN, values)


def not_in(values: Iterable[Any]) -> Predicate:
    return Predicate(Operator.NOT_IN, values)


def is_null() -> Predicate:
    return Predicate(Operator.IS_NULL)


def not_null() -> Predicate:
    return Predicate(Operator.NOT_NULL)


def between(low: Any, high: Any) -> Predicate:
    return Predicate(Operator.BETWEEN, (low, high))


def like(pattern: str) -> Predicate:
    return Predicate(Operator.LIKE, pattern)


class Criteria:
    """Mapping of field names to expected values or predicates.

    Plain values mean equality, ``None`` means IS NULL and a list, tuple or
    set means IN::

        Criteria({"username": "alice", "age": ge(18)})
        Criteria(status=in_(["new", "open"]), glue=Glue.OR)

    Building a criteria never touches storage.
    """

    def __init__(
        self,
        fields: Mapping[str, Any] | None = None,
        glue: Glue | str = Glue.AND,
        **kwargs: Any,
    ) -> None:
        """Initialize criteria.

        Args:
            fields: Field name to value or :class:`Predicate` mapping
            glue: Whether all (AND) or any (OR) predicate must hold
            **kwargs: Additional fields

        Raises:
            InvalidCriteria: If a field name is empty or a value is nested
        """
        try:
            self.glue = Glue(glue.upper() if isinstance(glue, str) else glue)
        except ValueError as exc:
            raise InvalidCriteria(f"Unknown glue: {glue!r}") from exc

        self._predicates: dict[str, Predicate] = {}
        for name, value in [*(fields or {}).items(), *kwargs.items()]:
            if not isinstance(name, str) or not name:
                raise InvalidCriteria(f"Field name must be a non-empty string: {name!r}")
            if name in self._predicates:
                raise InvalidCriteria(f"Field given twice: {name}")
            self._predicates[name] = _as_predicate(value)

    @property
    def fields(self) -> tuple[str, ...]:
        return tuple(self._predicates)

    def is_empty(self) -> bool:
        return not self._predicates

    def is_satisfied_by(self, record: Any) -> bool:
        """Check a mapping or an object against every predicate.

        A field missing from the record never matches. An empty criteria
        matches everything.
        """
        if not self._predicates:
            return True

        results = (
            value is not _MISSING and predicate.matches(value)
            for predicate, value in (
                (predicate, _field_value(record, name))
                for name, predicate in self._predicates.items()
            )
        )
        if self.glue is Glue.OR:
            return any(results)
        return all(results)

    def to_predicate_specification(self) -> tuple[PredicateSpec, ...]:
        """Return the comparisons in insertion order."""
        return tuple(
            PredicateSpec(name, predicate.operator, predicate.value)
            for name, predicate in self._predicates.items()
        )

    def validate_against(self, columns: Iterable[str]) -> None:
        """Ensure every field names one of ``columns``.

        Raises:
            InvalidCriteria: For the first unknown field
        """
        known = set(columns)
        for name in self._predicates:
            if name not in known:
                raise InvalidCriteria(f"Unknown column in criteria: {name}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Criteria):
            return NotImplemented
        return self.glue is other.glue and self._predicates == other._predicates

    def __repr__(self) -> str:
        inner = ", ".join(
            f"{name} {predicate.operator.value} {predicate.value!r}"
            for name, predicate in self._predicates.items()
        )
        return f"Criteria({self.glue.value}: {inner})"


def _as_predicate(value: Any) -> Predicate:
    if isinstance(value, Predicate):
        return value
    if isinstance(value, (list, tuple, set, frozenset)):
        return Predicate(Operator.IN, value)
    return Predicate(Operator.EQ, value)


def _field_value(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(name, _MISSING)
    return getattr(record, name, _MISSING)
