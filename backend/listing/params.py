"""listing/params.py — Turning raw request parameters into a ListingRequest.

Every listing reads its parameters under its own name so several listings can
share one query string without colliding:

    users[page]=2&users[per_page]=50&users[sort]=email&users[dir]=asc
    &filters[page]=1&filters[sort]=author

A nested mapping (``{"users": {"page": "2"}}``, e.g. from a JSON body) is
accepted as well.  Parsing never fails: anything malformed falls back to the
listing's defaults.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from listing.sort import ListingConfigError, SortAttributes, SortState, normalise_direction

PAGE = "page"
PER_PAGE = "per_page"
SORT = "sort"
DIRECTION = "dir"


@dataclass(frozen=True)
class PageSizeConfig:
    default: int = 20
    max: int = 100

    def __post_init__(self):
        if self.max < 1:
            raise ListingConfigError(f"max page size must be >= 1, got {self.max}")
        if not 1 <= self.default <= self.max:
            raise ListingConfigError(
                f"default page size must be within [1, {self.max}], got {self.default}"
            )

    def clamp(self, requested: Optional[int]) -> int:
        if requested is None:
            return self.default
        return max(1, min(requested, self.max))


@dataclass(frozen=True)
class ListingRequest:
    """Parsed, normalised parameters for one listing.

    ``page`` is only clamped from below here; clamping to the last page needs
    the total count and happens in build_listing().
    """

    name: str
    page: int
    per_page: int
    sort: SortState


def param_key(name: str, param: str) -> str:
    """Flat query-string key for one of a listing's parameters."""
    return f"{name}[{param}]"


def _lookup(params: Mapping[str, Any], name: str, param: str) -> Any:
    flat = params.get(param_key(name, param))
    if flat is not None:
        return flat
    nested = params.get(name)
    if isinstance(nested, Mapping):
        return nested.get(param)
    return None


def _parse_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def parse_listing_request(
    name: str,
    params: Optional[Mapping[str, Any]],
    sort_attributes: SortAttributes,
    default_sort: SortState,
    page_size_config: PageSizeConfig,
) -> ListingRequest:
    params = params or {}

    sort_key = _lookup(params, name, SORT)
    if isinstance(sort_key, str) and sort_key.strip() in sort_attributes:
        direction = normalise_direction(_lookup(params, name, DIRECTION)) or default_sort.direction
        sort = SortState(sort_key.strip(), direction)
    else:
        sort = default_sort

    page = _parse_int(_lookup(params, name, PAGE))
    page = max(page, 1) if page is not None else 1

    per_page = page_size_config.clamp(_parse_int(_lookup(params, name, PER_PAGE)))

    return ListingRequest(name=name, page=page, per_page=per_page, sort=sort)
