"""
auth/dependencies.py -- FastAPI Depends() helpers for authentication.

The session id is read from two places, in priority order:
  1. Session cookie -- set by POST /api/login for the browser dashboard.
  2. Authorization: Bearer <session id> header -- scripts and API clients
     that log in once and pass the id explicitly.

try_get_current_user() is the soft variant (returns None when anonymous).
get_current_user() wraps it with gate.require_authenticated (401).
require_admin() wraps it with gate.require_role(..., "admin") (401, then 403).

The AuthService is taken from request.app.state, where the lifespan put it.
Nothing here reaches for a module-level store.

Layer rule: no imports from portal/.
  auth/dependencies.py may import from fastapi (for Request/Response)
  because this module is part of the FastAPI dependency injection system.
"""

from __future__ import annotations

from fastapi import Request, Response

from auth.gate import require_authenticated, require_role
from auth.models import Role, User
from auth.service import AuthService
from core.config import get_settings

_settings = get_settings()


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth


def get_session_id(request: Request) -> str | None:
    """Extract the presented session id from cookie or Bearer header."""
    session_id: str | None = request.cookies.get(_settings.session_cookie_name)
    if not session_id:
        auth_header = request.headers.get("Authorization", "")
        if auth_header.startswith("Bearer "):
            session_id = auth_header[7:].strip()
    return session_id or None


def try_get_current_user(request: Request) -> User | None:
    """Resolve the request's session to a User. Never raises; None is Anonymous."""
    return get_auth_service(request).resolve(get_session_id(request))


def get_current_user(request: Request) -> User:
    """Require authentication. Raises Unauthenticated (401).

    Use as a FastAPI dependency:
        @router.get("/protected")
        def route(user: User = Depends(get_current_user)): ...
    """
    return require_authenticated(try_get_current_user(request))


def require_admin(request: Request) -> User:
    """Require the admin role. Raises Unauthenticated (401) before Forbidden (403)."""
    return require_role(try_get_current_user(request), Role.admin)


# ---------------------------------------------------------------------------
# Cookie helpers
# ---------------------------------------------------------------------------


def set_session_cookie(response: Response, session_id: str) -> None:
    """Write the session id as an httpOnly cookie on the response.

    httponly=True: JS cannot read the cookie (XSS mitigation).
    samesite="lax": not sent on cross-site POST -- CSRF mitigation for most cases.
    secure: only sent over HTTPS when SECURE_COOKIES=true (set in production).
    max_age: matches the session TTL so both expire together.
    """
    response.set_cookie(
        _settings.session_cookie_name,
        value=session_id,
        httponly=True,
        samesite="lax",
        secure=_settings.secure_cookies,
        max_age=int(_settings.session_ttl_seconds),
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(_settings.session_cookie_name)
