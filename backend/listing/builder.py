"""listing/builder.py — Sorted, paginated listings.

build_listing(name, source, sort_attributes, default_sort, request_params, page_size_config)
    Parses the listing's namespaced request parameters, orders the source by
    the resolved sort attribute, counts it, and returns one page together with
    the pagination metadata a table view needs.

ListingDefinition
    Bundles name + sort attributes + default sort once per dashboard so the
    configuration is validated at import time, not on the first request.

Request input never raises: unknown sort keys fall back to the default sort,
bad page numbers and page sizes fall back to defaults or are clamped.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional, Union

from listing.params import PageSizeConfig, parse_listing_request
from listing.sort import ListingConfigError, SortAttributes, SortLike, SortState, coerce_sort
from listing.sources import ListingSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ListingResult:
    name: str
    records: list
    total: int
    page: int
    per_page: int
    total_pages: int
    sort: SortState
    sortable: tuple[str, ...] = field(default_factory=tuple)

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


def _validated_default(sort_attributes: SortAttributes, default_sort: SortLike) -> SortState:
    default_sort = coerce_sort(default_sort)
    if default_sort.key not in sort_attributes:
        raise ListingConfigError(
            f"default sort {default_sort.key!r} is not one of {list(sort_attributes.names)}"
        )
    return default_sort


def build_listing(
    name: str,
    source: ListingSource,
    sort_attributes: Union[SortAttributes, Mapping[str, Any], Iterable[tuple[str, Any]]],
    default_sort: SortLike,
    request_params: Optional[Mapping[str, Any]],
    page_size_config: PageSizeConfig,
) -> ListingResult:
    if not name or not name.strip():
        raise ListingConfigError("a listing needs a non-empty name")
    sort_attributes = SortAttributes.coerce(sort_attributes)
    default_sort = _validated_default(sort_attributes, default_sort)

    request = parse_listing_request(name, request_params, sort_attributes, default_sort, page_size_config)

    ordered = source.order_by(sort_attributes[request.sort.key], request.sort.direction)
    total = ordered.count()
    total_pages = math.ceil(total / request.per_page) if total else 0

    # Past-the-end requests land on the last page instead of an empty one
    page = min(request.page, total_pages) if total_pages else 1
    records = ordered.page(page, request.per_page) if total else []

    logger.debug(
        "listing built",
        extra={
            "listing": name,
            "sort_key": request.sort.key,
            "sort_direction": request.sort.direction,
            "requested_page": request.page,
            "page": page,
            "per_page": request.per_page,
            "total": total,
        },
    )

    return ListingResult(
        name=name,
        records=records,
        total=total,
        page=page,
        per_page=request.per_page,
        total_pages=total_pages,
        sort=request.sort,
        sortable=sort_attributes.names,
    )


class ListingDefinition:
    """Validated listing configuration for one dashboard."""

    def __init__(
        self,
        name: str,
        sort_attributes: Union[SortAttributes, Mapping[str, Any], Iterable[tuple[str, Any]]],
        default_sort: SortLike,
    ):
        if not name or not name.strip():
            raise ListingConfigError("a listing needs a non-empty name")
        self.name = name
        self.sort_attributes = SortAttributes.coerce(sort_attributes)
        self.default_sort = _validated_default(self.sort_attributes, default_sort)

    def __repr__(self) -> str:
        return f"ListingDefinition({self.name!r}, default_sort={self.default_sort})"

    def build(
        self,
        source: ListingSource,
        request_params: Optional[Mapping[str, Any]],
        page_size_config: PageSizeConfig,
    ) -> ListingResult:
        return build_listing(
            self.name,
            source,
            self.sort_attributes,
            self.default_sort,
            request_params,
            page_size_config,
        )
