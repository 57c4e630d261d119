"""listing/sources.py — Record sources a listing can be built over.

A source only has to order, count and slice itself:

    order_by(field, direction) -> new source   (never mutates the receiver)
    count()                    -> int          (ignores pagination)
    page(number, size)         -> list         (1-indexed page window)

QuerySource wraps a SQLAlchemy Select and runs against a Session;
SequenceSource wraps records already in memory.
"""

from __future__ import annotations

import operator
from typing import Any, Callable, Iterable, Mapping, Protocol, Sequence

from sqlalchemy import func, literal_column, select
from sqlalchemy.orm import Session
from sqlalchemy.sql import Select

from listing.sort import ASC


class ListingSource(Protocol):
    def order_by(self, field: Any, direction: str) -> "ListingSource": ...

    def count(self) -> int: ...

    def page(self, number: int, size: int) -> list: ...


def _offset(number: int, size: int) -> int:
    return (max(number, 1) - 1) * size


# ---------------------------------------------------------------------------
# SQLAlchemy
# ---------------------------------------------------------------------------

class QuerySource:
    """A Select statement plus the session to run it on.

    Any filtering or joining belongs in ``statement``.  ``tiebreaker`` (usually
    the primary key) is appended after the sort field so rows with equal sort
    values keep a stable order across pages.

    Count and page are separate queries; without a snapshot read they can
    disagree under concurrent writes.
    """

    def __init__(
        self,
        session: Session,
        statement: Select,
        tiebreaker: Any = None,
        _ordering: tuple = (),
    ):
        self.session = session
        self.statement = statement
        self.tiebreaker = tiebreaker
        self._ordering = _ordering

    def order_by(self, field: Any, direction: str) -> "QuerySource":
        if isinstance(field, str):
            field = literal_column(field)
        clauses = [field.asc() if direction == ASC else field.desc()]
        if self.tiebreaker is not None:
            clauses.append(self.tiebreaker.asc())
        return QuerySource(self.session, self.statement, self.tiebreaker, tuple(clauses))

    def count(self) -> int:
        counted = self.statement.order_by(None).subquery()
        return self.session.scalar(select(func.count()).select_from(counted)) or 0

    def page(self, number: int, size: int) -> list:
        stmt = (
            self.statement
            .order_by(None)
            .order_by(*self._ordering)
            .limit(size)
            .offset(_offset(number, size))
        )
        result = self.session.execute(stmt)
        # Single-entity selects yield model instances, anything wider yields rows
        if len(self.statement.column_descriptions) == 1:
            return list(result.scalars().all())
        return list(result.all())


# ---------------------------------------------------------------------------
# In-memory
# ---------------------------------------------------------------------------

def _key_getter(field: Any) -> Callable[[Any], Any]:
    if callable(field):
        return field
    attr = operator.attrgetter(field)

    def get(record: Any) -> Any:
        if isinstance(record, Mapping):
            return record.get(field)
        return attr(record)

    return get


class SequenceSource:
    """Records held in memory.

    ``field`` is an attribute name (dotted paths work), a mapping key, or a
    callable.  None sorts last ascending and first descending, the same as
    PostgreSQL's default.  Sorting is stable.
    """

    def __init__(self, records: Iterable[Any]):
        self._records: tuple = tuple(records)

    @property
    def records(self) -> Sequence[Any]:
        return self._records

    def order_by(self, field: Any, direction: str) -> "SequenceSource":
        get = _key_getter(field)

        def key(record: Any) -> tuple:
            value = get(record)
            return (True, 0) if value is None else (False, value)

        ordered = sorted(self._records, key=key, reverse=direction != ASC)
        return SequenceSource(ordered)

    def count(self) -> int:
        return len(self._records)

    def page(self, number: int, size: int) -> list:
        start = _offset(number, size)
        return list(self._records[start:start + size])

