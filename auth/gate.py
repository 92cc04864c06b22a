"""
auth/gate.py -- Authorization predicates applied before protected operations.

Both checks are pure functions over an already-resolved user (None means
Anonymous). They are framework-free; auth/dependencies.py wraps them for
FastAPI.

Ordering: require_role() runs require_authenticated() first, so a missing
session is always reported as Unauthenticated (401) before any role check
can produce Forbidden (403).

Roles are compared by exact match. "admin" does not imply "user".
"""

from __future__ import annotations

from auth.errors import Forbidden, Unauthenticated
from auth.models import Role, User


def require_authenticated(user: User | None) -> User:
    if user is None:
        raise Unauthenticated()
    return user


def require_role(user: User | None, role: Role | str) -> User:
    user = require_authenticated(user)
    expected = role.value if isinstance(role, Role) else role
    if user.role != expected:
        raise Forbidden(f"Role {expected!r} required.")
    return user
