"""
Unit tests for listing/builder.py, listing/params.py and listing/sort.py.

No database required: listings are built over SequenceSource.

Run from the project root:
    cd backend
    pytest tests/test_listing_builder.py -v
"""

import pytest

from listing import (
    ListingConfigError,
    ListingDefinition,
    PageSizeConfig,
    SequenceSource,
    SortAttributes,
    SortState,
    build_listing,
    parse_listing_request,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

SORTS = [
    ("id", "id"),
    ("email", "email"),
    ("logins", "sign_in_count"),
]
DEFAULT = SortState("id", "asc")
PAGES = PageSizeConfig(default=20, max=100)


def _records(n):
    # sign_in_count descends as id ascends so the two orders are distinguishable
    return [
        {"id": i, "email": f"user{i:02d}@example.com", "sign_in_count": 100 - i}
        for i in range(1, n + 1)
    ]


def _build(params=None, n=25, name="users", pages=PAGES):
    return build_listing(name, SequenceSource(_records(n)), SORTS, DEFAULT, params, pages)


def _ids(listing):
    return [r["id"] for r in listing.records]


# ---------------------------------------------------------------------------
# Sort resolution
# ---------------------------------------------------------------------------

class TestSortResolution:

    @pytest.mark.parametrize("requested", ["bogus", "", "   ", "EMAIL", "sign_in_count", None, 7])
    def test_unknown_sort_falls_back_to_default(self, requested):
        listing = _build({"users[sort]": requested, "users[dir]": "desc"})
        assert listing.sort == DEFAULT

    def test_permitted_sort_with_direction(self):
        listing = _build({"users[sort]": "logins", "users[dir]": "asc"})
        assert listing.sort == SortState("logins", "asc")
        # lowest sign_in_count belongs to the highest id
        assert _ids(listing)[0] == 25

    def test_direction_is_case_insensitive(self):
        listing = _build({"users[sort]": "email", "users[dir]": " DESC "})
        assert listing.sort == SortState("email", "desc")

    @pytest.mark.parametrize("direction", [None, "sideways", "", 1])
    def test_missing_or_invalid_direction_uses_default_direction(self, direction):
        params = {"users[sort]": "email"}
        if direction is not None:
            params["users[dir]"] = direction
        listing = _build(params)
        assert listing.sort == SortState("email", DEFAULT.direction)

    def test_direction_alone_does_not_change_default_sort(self):
        listing = _build({"users[dir]": "desc"})
        assert listing.sort == DEFAULT

    def test_ascending_then_descending_reverses_order(self):
        asc = _build({"users[sort]": "email", "users[dir]": "asc", "users[per_page]": "100"})
        desc = _build({"users[sort]": "email", "users[dir]": "desc", "users[per_page]": "100"})
        assert _ids(asc) == list(reversed(_ids(desc)))

    def test_sortable_lists_every_attribute_in_order(self):
        assert _build().sortable == ("id", "email", "logins")


# ---------------------------------------------------------------------------
# Page number
# ---------------------------------------------------------------------------

class TestPageNumber:

    @pytest.mark.parametrize("requested", ["0", "-3", 0, -1])
    def test_non_positive_page_is_first_page(self, requested):
        listing = _build({"users[page]": requested})
        assert listing.page == 1
        assert _ids(listing)[0] == 1

    @pytest.mark.parametrize("requested", ["abc", "1.5", "", None, True])
    def test_malformed_page_is_first_page(self, requested):
        assert _build({"users[page]": requested}).page == 1

    @pytest.mark.parametrize("requested", ["3", "99", 10_000])
    def test_page_past_the_end_is_last_page(self, requested):
        listing = _build({"users[page]": requested})
        assert listing.page == 2
        assert _ids(listing) == [21, 22, 23, 24, 25]

    def test_second_page_of_twenty_five(self):
        listing = _build({"users[page]": "2"})
        assert len(listing.records) == 5
        assert listing.total == 25
        assert listing.page == 2
        assert listing.total_pages == 2
        assert listing.has_previous
        assert not listing.has_next

    def test_first_page_navigation_flags(self):
        listing = _build()
        assert not listing.has_previous
        assert listing.has_next


# ---------------------------------------------------------------------------
# Page size
# ---------------------------------------------------------------------------

class TestPageSize:

    def test_absent_page_size_is_default(self):
        assert _build().per_page == 20

    @pytest.mark.parametrize("requested", ["x", "", "2.5", None])
    def test_malformed_page_size_is_default(self, requested):
        assert _build({"users[per_page]": requested}).per_page == 20

    @pytest.mark.parametrize("requested, expected", [
        ("0", 1),
        ("-5", 1),
        ("101", 100),
        ("5000", 100),
        ("1", 1),
        ("100", 100),
        ("7", 7),
    ])
    def test_page_size_is_clamped(self, requested, expected):
        assert _build({"users[per_page]": requested}).per_page == expected

    def test_total_pages_follows_page_size(self):
        listing = _build({"users[per_page]": "10"})
        assert listing.total_pages == 3
        assert len(listing.records) == 10

    def test_page_size_config_validation(self):
        with pytest.raises(ListingConfigError):
            PageSizeConfig(default=0, max=10)
        with pytest.raises(ListingConfigError):
            PageSizeConfig(default=20, max=10)
        with pytest.raises(ListingConfigError):
            PageSizeConfig(default=1, max=0)


# ---------------------------------------------------------------------------
# Empty source
# ---------------------------------------------------------------------------

class TestEmptySource:

    def test_empty_source_is_a_valid_listing(self):
        listing = _build(n=0)
        assert listing.records == []
        assert listing.total == 0
        assert listing.total_pages == 0
        assert listing.page == 1
        assert not listing.has_next

    def test_empty_source_ignores_requested_page(self):
        listing = _build({"users[page]": "4", "users[per_page]": "junk"}, n=0)
        assert listing.page == 1
        assert listing.records == []


# ---------------------------------------------------------------------------
# Parameter namespacing
# ---------------------------------------------------------------------------

class TestNamespacing:

    def test_two_listings_read_independent_parameters(self):
        params = {
            "users[page]": "2",
            "users[sort]": "email",
            "users[dir]": "desc",
            "filters[page]": "1",
            "filters[per_page]": "5",
            "filters[sort]": "logins",
            "filters[dir]": "asc",
        }
        users = _build(params, name="users")
        filters = _build(params, name="filters")

        assert (users.page, users.per_page, users.sort) == (2, 20, SortState("email", "desc"))
        assert (filters.page, filters.per_page, filters.sort) == (1, 5, SortState("logins", "asc"))

    def test_un_namespaced_parameters_are_ignored(self):
        listing = _build({"page": "2", "per_page": "5", "sort": "email", "dir": "desc"})
        assert (listing.page, listing.per_page, listing.sort) == (1, 20, DEFAULT)

    def test_nested_mapping_parameters(self):
        listing = _build({"users": {"page": 2, "per_page": 10, "sort": "email", "dir": "asc"}})
        assert (listing.page, listing.per_page, listing.sort) == (2, 10, SortState("email", "asc"))

    def test_parse_listing_request_without_params(self):
        request = parse_listing_request("users", None, SortAttributes(SORTS), DEFAULT, PAGES)
        assert (request.page, request.per_page, request.sort) == (1, 20, DEFAULT)


# ---------------------------------------------------------------------------
# Source handling
# ---------------------------------------------------------------------------

class TestSourceHandling:

    def test_source_is_not_mutated(self):
        records = _records(5)
        source = SequenceSource(records)
        build_listing("users", source, SORTS, DEFAULT, {"users[sort]": "logins"}, PAGES)
        assert [r["id"] for r in source.records] == [1, 2, 3, 4, 5]

    def test_default_sort_descending(self):
        listing = build_listing(
            "users", SequenceSource(_records(3)), SORTS, ("id", "desc"), None, PAGES,
        )
        assert _ids(listing) == [3, 2, 1]


# ---------------------------------------------------------------------------
# Configuration errors
# ---------------------------------------------------------------------------

class TestConfiguration:

    def test_duplicate_sort_attribute_rejected(self):
        with pytest.raises(ListingConfigError, match="duplicate"):
            SortAttributes([("email", "a"), ("email", "b")])

    def test_empty_sort_attributes_rejected(self):
        with pytest.raises(ListingConfigError):
            SortAttributes([])

    def test_blank_sort_attribute_name_rejected(self):
        with pytest.raises(ListingConfigError):
            SortAttributes([(" ", "a")])

    def test_default_sort_must_be_a_sort_attribute(self):
        with pytest.raises(ListingConfigError, match="updated"):
            ListingDefinition("users", SORTS, {"updated": "desc"})

    def test_default_sort_direction_validated(self):
        with pytest.raises(ListingConfigError):
            ListingDefinition("users", SORTS, ("id", "upwards"))

    @pytest.mark.parametrize("name", ["", "   ", "\t"])
    def test_listing_needs_a_name(self, name):
        with pytest.raises(ListingConfigError):
            ListingDefinition(name, SORTS, DEFAULT)
        with pytest.raises(ListingConfigError):
            _build(name=name)

    def test_definition_accepts_dict_default_sort(self):
        definition = ListingDefinition("users", dict(SORTS), {"email": "ASC"})
        assert definition.default_sort == SortState("email", "asc")
        listing = definition.build(SequenceSource(_records(3)), None, PAGES)
        assert _ids(listing) == [1, 2, 3]

    def test_sort_attributes_mapping_interface(self):
        attrs = SortAttributes(SORTS)
        assert len(attrs) == 3
        assert attrs["logins"] == "sign_in_count"
        assert "id" in attrs
        assert attrs.names == ("id", "email", "logins")
