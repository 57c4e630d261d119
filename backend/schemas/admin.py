"""schemas/admin.py — Admin dashboard response schemas.

DB sources:
    users    — account + sign-in tracking columns
    filters  — saved filters, author resolved through users.email
    reports  — saved reports, author resolved through users.email
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from schemas.shared import PaginationMeta, SortMeta


class UserListItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    role: str
    last_seen: Optional[datetime] = None
    sign_in_count: int = 0
    current_sign_in_ip: Optional[str] = None
    updated_at: Optional[datetime] = None


class FilterListItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: Optional[str] = None
    filter_type: Optional[str] = None
    cdm_user_count: Optional[int] = None
    author: Optional[str] = None        # author's email
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ReportListItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: Optional[str] = None
    author: Optional[str] = None        # author's email
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class _DashboardResponse(BaseModel):
    model_config = ConfigDict(from_attributes=False)

    meta: PaginationMeta
    sort: SortMeta
    sortable: list[str]


class UserDashboardResponse(_DashboardResponse):
    data: list[UserListItem]


class FilterDashboardResponse(_DashboardResponse):
    data: list[FilterListItem]


class ReportDashboardResponse(_DashboardResponse):
    data: list[ReportListItem]
