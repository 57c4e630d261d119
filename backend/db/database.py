"""Database connection and session management."""

import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from core.config import settings

logger = logging.getLogger(__name__)


def _normalise_url(url: str) -> str:
    # SQLAlchemy requires "postgresql://" not "postgres://"
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql://", 1)
    return url


def _engine_kwargs(url: str) -> dict:
    if url.startswith("sqlite"):
        # Handlers run on FastAPI's threadpool
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_pre_ping": True,  # Verify connections before using them
        "pool_size": 10,        # Number of connections to maintain
        "max_overflow": 20,     # Maximum overflow connections
        "connect_args": {"connect_timeout": 10},
    }


DATABASE_URL = _normalise_url(settings.database_url)

engine = create_engine(DATABASE_URL, **_engine_kwargs(DATABASE_URL))

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create base class for models
Base = declarative_base()


def init_db(bind=None) -> None:
    """Create all tables that do not exist yet."""
    # Importing models registers them on Base.metadata
    from db import models  # noqa: F401

    target = bind if bind is not None else engine
    Base.metadata.create_all(bind=target)
    logger.info("database schema ensured", extra={"url": target.url.render_as_string(hide_password=True)})
