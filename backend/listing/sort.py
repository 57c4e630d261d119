"""listing/sort.py — Sort attributes and sort state for listings.

A listing exposes a fixed set of *sort attributes*: public symbolic names
(``email``, ``author``) mapped to the field a source actually orders by
(``User.email``, ``"users.email"``, a callable, ...).  Requests only ever
name the symbolic side, so callers never sort by arbitrary columns.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Mapping, Union

ASC = "asc"
DESC = "desc"
DIRECTIONS = (ASC, DESC)


class ListingConfigError(ValueError):
    """A listing was defined with invalid sort or page-size configuration."""


def normalise_direction(value: Any) -> str | None:
    """Return "asc"/"desc" for a case-insensitive match, else None."""
    if not isinstance(value, str):
        return None
    value = value.strip().lower()
    return value if value in DIRECTIONS else None


@dataclass(frozen=True)
class SortState:
    key: str
    direction: str = DESC

    def __post_init__(self):
        direction = normalise_direction(self.direction)
        if direction is None:
            raise ListingConfigError(
                f"sort direction must be one of {DIRECTIONS}, got {self.direction!r}"
            )
        object.__setattr__(self, "direction", direction)

    @property
    def ascending(self) -> bool:
        return self.direction == ASC


SortLike = Union[SortState, tuple, Mapping[str, str]]


def coerce_sort(value: SortLike) -> SortState:
    """Accept a SortState, a (key, direction) pair or a one-item {key: direction} dict."""
    if isinstance(value, SortState):
        return value
    if isinstance(value, Mapping):
        if len(value) != 1:
            raise ListingConfigError(f"default sort must name exactly one attribute, got {dict(value)!r}")
        (key, direction), = value.items()
        return SortState(str(key), direction)
    if isinstance(value, tuple) and len(value) == 2:
        return SortState(str(value[0]), value[1])
    raise ListingConfigError(f"cannot interpret {value!r} as a sort")


class SortAttributes(Mapping[str, Any]):
    """Ordered, validated mapping of symbolic sort name → field reference.

    Built from ``(name, field)`` pairs, the same shape the listings declare
    them in.  Raises ListingConfigError when the set is empty, when a name is
    blank, or when a name repeats.
    """

    def __init__(self, pairs: Iterable[tuple[str, Any]]):
        fields: dict[str, Any] = {}
        for name, field in pairs:
            name = str(name).strip()
            if not name:
                raise ListingConfigError("sort attribute names must be non-empty")
            if name in fields:
                raise ListingConfigError(f"duplicate sort attribute {name!r}")
            fields[name] = field
        if not fields:
            raise ListingConfigError("a listing needs at least one sort attribute")
        self._fields = fields

    @classmethod
    def coerce(cls, value: Union["SortAttributes", Mapping[str, Any], Iterable[tuple[str, Any]]]) -> "SortAttributes":
        if isinstance(value, SortAttributes):
            return value
        if isinstance(value, Mapping):
            return cls(value.items())
        return cls(value)

    def __getitem__(self, name: str) -> Any:
        return self._fields[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"SortAttributes({list(self._fields)!r})"

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._fields)
