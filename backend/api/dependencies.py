"""
dependencies.py — FastAPI dependency injection

Provides:
    get_db()                          request-scoped SQLAlchemy session
    get_current_user()                principal resolved from the X-API-Key header (401 otherwise);
                                      stamps last_seen, the client IP and the sign-in count
    require_ability(action, resource) principal that passed an authorization check (403 otherwise)
    get_page_size_config()            listing page-size limits from settings

Usage in a route handler:
    from fastapi import Depends
    from api.dependencies import get_db, require_ability

    @router.get("/example")
    def example(
        user: User = Depends(require_ability(ADMINISTER, Report)),
        db: Session = Depends(get_db),
    ):
        ...
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Generator, Optional

from fastapi import Depends, HTTPException, Request, Security
from fastapi.security.api_key import APIKeyHeader
from sqlalchemy import select
from sqlalchemy.orm import Session

from core.authorization import can, resource_name
from core.config import settings
from core.security import hash_api_key
from db.database import SessionLocal
from db.models import User
from listing import PageSizeConfig

logger = logging.getLogger(__name__)

api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)


def get_db() -> Generator[Session, None, None]:
    """Yield a database session, guaranteed to close after the request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; they were written as UTC
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


def track_sign_in(user: User, client_ip: Optional[str], db: Session) -> None:
    """Stamp last_seen and the client IP; count a sign-in per new session window.

    A request is a new sign-in when the user has never been seen, or was last
    seen more than settings.sign_in_window_minutes ago.
    """
    now = datetime.now(timezone.utc)
    window = timedelta(minutes=settings.sign_in_window_minutes)
    if user.last_seen is None or now - _as_utc(user.last_seen) > window:
        user.sign_in_count = (user.sign_in_count or 0) + 1
        logger.info("sign-in", extra={"user_id": user.id, "client_ip": client_ip})
    user.last_seen = now
    user.current_sign_in_ip = client_ip
    db.commit()


def get_current_user(
    request: Request,
    api_key: Optional[str] = Security(api_key_header),
    db: Session = Depends(get_db),
) -> User:
    if not api_key:
        raise HTTPException(status_code=401, detail="Missing X-API-Key")

    user = db.execute(
        select(User).where(User.api_key_hash == hash_api_key(api_key))
    ).scalar_one_or_none()
    if user is None:
        raise HTTPException(status_code=401, detail="Invalid API key")

    track_sign_in(user, request.client.host if request.client else None, db)
    return user


def require_ability(action: str, resource_type: Any) -> Callable[..., User]:
    """Build a dependency that authenticates, then authorizes ``action`` on ``resource_type``."""
    resource = resource_name(resource_type)

    def _check(user: User = Depends(get_current_user)) -> User:
        if not can(user, action, resource):
            logger.warning(
                "authorization denied",
                extra={"user_id": user.id, "role": user.role, "action": action, "resource": resource},
            )
            raise HTTPException(status_code=403, detail=f"Not authorized to {action} {resource}")
        return user

    return _check


def get_page_size_config() -> PageSizeConfig:
    return PageSizeConfig(
        default=settings.listing_default_page_size,
        max=settings.listing_max_page_size,
    )
