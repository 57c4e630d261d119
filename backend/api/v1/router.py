"""api/v1/router.py — Aggregates all v1 endpoint routers.

Included in api/main.py under the prefix /api/v1, so final paths are:
    /api/v1/admin/users
    /api/v1/admin/filters
    /api/v1/admin/reports
"""

from fastapi import APIRouter

from api.v1.endpoints import admin_tools

v1_router = APIRouter()

v1_router.include_router(admin_tools.router, prefix="/admin", tags=["admin"])
