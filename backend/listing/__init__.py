"""Sortable, paginated listings over ORM queries or in-memory records."""

from .builder import ListingDefinition, ListingResult, build_listing
from .params import PageSizeConfig, ListingRequest, param_key, parse_listing_request
from .sort import ASC, DESC, ListingConfigError, SortAttributes, SortState
from .sources import ListingSource, QuerySource, SequenceSource

__all__ = [
    "ASC",
    "DESC",
    "ListingConfigError",
    "ListingDefinition",
    "ListingRequest",
    "ListingResult",
    "ListingSource",
    "PageSizeConfig",
    "QuerySource",
    "SequenceSource",
    "SortAttributes",
    "SortState",
    "build_listing",
    "param_key",
    "parse_listing_request",
]
