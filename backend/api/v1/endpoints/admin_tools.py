"""api/v1/endpoints/admin_tools.py — Administrator dashboards.

Routes:
    GET /admin/users      All system users with sign-in tracking details
    GET /admin/filters    All saved filters with their author
    GET /admin/reports    All saved reports with their author

Each route requires an API key whose user may `administer` the listed record
type.  Sorting and paging are read from namespaced query parameters, e.g.

    GET /admin/filters?filters[sort]=author&filters[dir]=asc&filters[page]=2
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy import select
from sqlalchemy.orm import Session

from api.dependencies import get_db, get_page_size_config, require_ability
from core.authorization import ADMINISTER
from db.models import Filter, Report, User
from listing import ListingDefinition, ListingResult, PageSizeConfig, QuerySource
from schemas.admin import (
    FilterDashboardResponse,
    FilterListItem,
    ReportDashboardResponse,
    ReportListItem,
    UserDashboardResponse,
    UserListItem,
)
from schemas.shared import PaginationMeta, SortMeta

logger = logging.getLogger(__name__)

router = APIRouter()


USERS_LISTING = ListingDefinition(
    "users",
    [
        ("id",                 User.id),
        ("email",              User.email),
        ("role",               User.role),
        ("last_seen",          User.last_seen),
        ("sign_in_count",      User.sign_in_count),
        ("current_sign_in_ip", User.current_sign_in_ip),
        ("updated_at",         User.updated_at),
    ],
    # users have no `updated` attribute; updated_at is the same column
    default_sort=("updated_at", "desc"),
)

FILTERS_LISTING = ListingDefinition(
    "filters",
    [
        ("title",          Filter.title),
        ("description",    Filter.description),
        ("type",           Filter.filter_type),
        ("cdm_user_count", Filter.cdm_user_count),
        ("author",         User.email),
        ("created",        Filter.created_at),
        ("updated",        Filter.updated_at),
    ],
    default_sort=("updated", "desc"),
)

REPORTS_LISTING = ListingDefinition(
    "reports",
    [
        ("title",       Report.title),
        ("description", Report.description),
        ("author",      User.email),
        ("created",     Report.created_at),
        ("updated",     Report.updated_at),
    ],
    default_sort=("updated", "desc"),
)


def _envelope(listing: ListingResult) -> dict:
    return {
        "meta": PaginationMeta.from_listing(listing),
        "sort": SortMeta.from_listing(listing),
        "sortable": list(listing.sortable),
    }


@router.get("/users", response_model=UserDashboardResponse, summary="User dashboard")
def user_dashboard(
    request: Request,
    _admin: User = Depends(require_ability(ADMINISTER, User)),
    db: Session = Depends(get_db),
    page_sizes: PageSizeConfig = Depends(get_page_size_config),
):
    source = QuerySource(db, select(User), tiebreaker=User.id)
    listing = USERS_LISTING.build(source, request.query_params, page_sizes)

    return UserDashboardResponse(
        data=[UserListItem.model_validate(u) for u in listing.records],
        **_envelope(listing),
    )


@router.get("/filters", response_model=FilterDashboardResponse, summary="Filter dashboard")
def filter_dashboard(
    request: Request,
    _admin: User = Depends(require_ability(ADMINISTER, Filter)),
    db: Session = Depends(get_db),
    page_sizes: PageSizeConfig = Depends(get_page_size_config),
):
    stmt = select(Filter, User.email.label("author")).join(Filter.user)
    source = QuerySource(db, stmt, tiebreaker=Filter.id)
    listing = FILTERS_LISTING.build(source, request.query_params, page_sizes)

    return FilterDashboardResponse(
        data=[
            FilterListItem.model_validate(f).model_copy(update={"author": author})
            for f, author in listing.records
        ],
        **_envelope(listing),
    )


@router.get("/reports", response_model=ReportDashboardResponse, summary="Report dashboard")
def report_dashboard(
    request: Request,
    _admin: User = Depends(require_ability(ADMINISTER, Report)),
    db: Session = Depends(get_db),
    page_sizes: PageSizeConfig = Depends(get_page_size_config),
):
    stmt = select(Report, User.email.label("author")).join(Report.user)
    source = QuerySource(db, stmt, tiebreaker=Report.id)
    listing = REPORTS_LISTING.build(source, request.query_params, page_sizes)

    return ReportDashboardResponse(
        data=[
            ReportListItem.model_validate(r).model_copy(update={"author": author})
            for r, author in listing.records
        ],
        **_envelope(listing),
    )
