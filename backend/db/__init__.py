"""Database package for the admin tools dashboards."""

from .database import Base, engine, SessionLocal, init_db
from .models import User, Filter, Report

__all__ = [
    "Base",
    "engine",
    "SessionLocal",
    "init_db",
    "User",
    "Filter",
    "Report",
]
