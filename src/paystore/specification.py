"""
Specifications: the query objects every repository accepts.

The same specification drives all three backends:

- in-memory stores call ``specified(record, i)`` once per stored record in
  insertion order, where ``i`` counts every record visited, matched or not;
- relational stores append ``to_sql()`` to their select statement;
- vault stores send ``to_query_params()`` as the query string.

Values are never interpolated into SQL text. ``to_sql()`` returns a clause
with ``%s`` placeholders plus the parameters to bind; only column names,
which come from code and are checked against an identifier pattern, end up
in the clause itself.
"""

import re
from typing import Any

from paystore.errors import SpecificationError
from paystore.models import PAN

_IDENTIFIER = re.compile(r"^[a-z_][a-z0-9_]*$")


def _column(name: str) -> str:
    if not _IDENTIFIER.match(name):
        raise SpecificationError(f"invalid column name: {name!r}")
    return name


def _sql_value(value: Any) -> Any:
    if isinstance(value, PAN):
        return value.number
    return value


class Specification:
    """Base class; subclasses override what their backends need."""

    def specified(self, record, i: int) -> bool:
        raise NotImplementedError

    def to_sql(self) -> tuple[str, tuple]:
        raise NotImplementedError

    def to_query_params(self) -> dict[str, Any]:
        raise SpecificationError(
            f"{type(self).__name__} cannot be rendered as a vault query"
        )


class Filter(Specification):
    """A specification that renders as a ``where`` clause."""

    def condition(self) -> tuple[str, tuple]:
        raise NotImplementedError

    def to_sql(self) -> tuple[str, tuple]:
        condition, params = self.condition()
        return f"where {condition}", params


class All(Specification):
    """Matches every record."""

    def specified(self, record, i: int) -> bool:
        return True

    def to_sql(self) -> tuple[str, tuple]:
        return "", ()

    def __repr__(self) -> str:
        return "All()"


class ById(Filter):
    def __init__(self, id: int):
        self.id = id

    def specified(self, record, i: int) -> bool:
        return record.id == self.id

    def condition(self) -> tuple[str, tuple]:
        return "id = %s", (self.id,)

    def __repr__(self) -> str:
        return f"ById({self.id})"


class ByIds(Filter):
    """Batch lookup used by reference hydration."""

    def __init__(self, ids):
        self.ids = tuple(dict.fromkeys(ids))

    def specified(self, record, i: int) -> bool:
        return record.id in self.ids

    def condition(self) -> tuple[str, tuple]:
        return "id = any(%s)", (list(self.ids),)

    def __repr__(self) -> str:
        return f"ByIds({list(self.ids)})"


class ByField(Filter):
    """Exact match on a scalar field (unique keys, codes, statuses)."""

    def __init__(self, field: str, value: Any, column: str = None):
        self.field = field
        self.value = value
        self.column = _column(column or field)

    def specified(self, record, i: int) -> bool:
        return getattr(record, self.field) == self.value

    def condition(self) -> tuple[str, tuple]:
        return f"{self.column} = %s", (_sql_value(self.value),)

    def __repr__(self) -> str:
        return f"ByField({self.field}={self.value!r})"


class ByReference(Filter):
    """Exact match on the id behind a reference field."""

    def __init__(self, field: str, id: int, column: str = None):
        self.field = field
        self.id = id
        self.column = _column(column or f"{field}_id")

    def specified(self, record, i: int) -> bool:
        ref = getattr(record, self.field)
        return ref is not None and ref.id == self.id

    def condition(self) -> tuple[str, tuple]:
        return f"{self.column} = %s", (self.id,)

    def __repr__(self) -> str:
        return f"ByReference({self.field}={self.id})"


class AllOf(Filter):
    """Conjunction of filters, e.g. a foreign-key pair."""

    def __init__(self, *filters: Filter):
        if not filters:
            raise SpecificationError("AllOf needs at least one filter")
        self.filters = filters

    def specified(self, record, i: int) -> bool:
        return all(f.specified(record, i) for f in self.filters)

    def condition(self) -> tuple[str, tuple]:
        conditions, params = [], []
        for f in self.filters:
            condition, values = f.condition()
            conditions.append(condition)
            params.extend(values)
        return " and ".join(conditions), tuple(params)

    def __repr__(self) -> str:
        return f"AllOf{self.filters!r}"


class WithLimitAndOffset(Specification):
    """Page through records; in memory this relies on the position index."""

    def __init__(self, limit: int, offset: int = 0):
        if limit < 0 or offset < 0:
            raise SpecificationError(
                f"limit and offset must be non-negative, got {limit}/{offset}"
            )
        self.limit = limit
        self.offset = offset

    def specified(self, record, i: int) -> bool:
        return self.offset <= i < self.offset + self.limit

    def to_sql(self) -> tuple[str, tuple]:
        return "order by id limit %s offset %s", (self.limit, self.offset)

    def to_query_params(self) -> dict[str, Any]:
        return {"limit": self.limit, "offset": self.offset}

    def __repr__(self) -> str:
        return f"WithLimitAndOffset({self.limit}, {self.offset})"
