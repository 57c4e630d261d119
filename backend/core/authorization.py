"""core/authorization.py — Role-based ability rules.

Answers "may this principal perform <action> on <resource type>?" from a
static rule table.  The answer is a plain bool; turning a deny into an HTTP
403 is the caller's job (see api/dependencies.py).

Usage:
    from core.authorization import ADMINISTER, can
    from db.models import Report

    if not can(user, ADMINISTER, Report):
        ...
"""

from __future__ import annotations

from typing import Any, Optional

ADMINISTER = "administer"

ROLE_ADMIN = "admin"
ROLE_USER = "user"

# role → action → resource type names
_RULES: dict[str, dict[str, frozenset[str]]] = {
    ROLE_ADMIN: {
        ADMINISTER: frozenset({"User", "Filter", "Report"}),
    },
    ROLE_USER: {},
}


def resource_name(resource_type: Any) -> str:
    """Accept a model class or its name."""
    if isinstance(resource_type, str):
        return resource_type
    return resource_type.__name__


def can(principal: Optional[Any], action: str, resource_type: Any) -> bool:
    if principal is None:
        return False
    role = getattr(principal, "role", None)
    allowed = _RULES.get(role, {}).get(action, frozenset())
    return resource_name(resource_type) in allowed
