"""schemas/shared.py — Reusable building blocks shared across schema modules."""

from typing import Literal

from pydantic import BaseModel, ConfigDict

from listing import ListingResult


class PaginationMeta(BaseModel):
    model_config = ConfigDict(from_attributes=False)

    page: int
    page_size: int
    total: int
    total_pages: int
    has_previous: bool = False
    has_next: bool = False

    @classmethod
    def from_listing(cls, listing: ListingResult) -> "PaginationMeta":
        return cls(
            page=listing.page,
            page_size=listing.per_page,
            total=listing.total,
            total_pages=listing.total_pages,
            has_previous=listing.has_previous,
            has_next=listing.has_next,
        )


class SortMeta(BaseModel):
    """The sort actually applied, after falling back to the listing default."""
    model_config = ConfigDict(from_attributes=False)

    key: str
    direction: Literal["asc", "desc"]

    @classmethod
    def from_listing(cls, listing: ListingResult) -> "SortMeta":
        return cls(key=listing.sort.key, direction=listing.sort.direction)
