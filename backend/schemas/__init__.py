from schemas.shared import PaginationMeta, SortMeta
from schemas.admin import (
    UserListItem, FilterListItem, ReportListItem,
    UserDashboardResponse, FilterDashboardResponse, ReportDashboardResponse,
)

__all__ = [
    "PaginationMeta", "SortMeta",
    "UserListItem", "FilterListItem", "ReportListItem",
    "UserDashboardResponse", "FilterDashboardResponse", "ReportDashboardResponse",
]
