"""
api/routes/auth.py -- Session login, logout, registration, and "who am I".

Routes:
  POST /api/register   -- create a role "user" account; does NOT log in
  POST /api/login      -- password login; sets the session cookie
  POST /api/logout     -- destroys the session; always 200
  GET  /api/user       -- current user (requires auth)

Security:
  POST /login is rate-limited per client IP (LOGIN_RATE_LIMIT, default 10/minute).
  AuthService.login() provides timing equalization -- use it, never inline
      a username lookup plus password check here.
  Cache-Control: no-store on login responses.
  Public registration cannot choose a role; admins create admins via
      POST /api/users.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse

from api.limiter import limiter
from api.models import LoginRequest, MessageResponse, RegisterRequest, UserResponse
from auth.dependencies import (
    clear_session_cookie,
    get_auth_service,
    get_current_user,
    get_session_id,
    set_session_cookie,
)
from auth.errors import InvalidCredentials
from auth.models import User
from auth.service import AuthService
from core.config import get_settings

_settings = get_settings()

# Auth policy:
# - POST /api/register: public (unless SELF_REGISTRATION_ENABLED=false)
# - POST /api/login:    public -- login endpoint must be unauthenticated
# - POST /api/logout:   public -- ending a session needs no prior auth
# - GET  /api/user:     requires auth (get_current_user)
router = APIRouter()


@router.post("/register", response_model=UserResponse, status_code=201)
def register(body: RegisterRequest, auth: AuthService = Depends(get_auth_service)) -> UserResponse:
    """Create an account. The caller must log in separately afterwards.

    ValidationError (400) and DuplicateUsername (409) propagate to the
    AuthError handler in api/main.py.
    """
    if not _settings.self_registration_enabled:
        raise HTTPException(
            status_code=403,
            detail={"code": "registration_disabled", "message": "Self-registration is disabled."},
        )
    user = auth.register(
        username=body.username,
        password=body.password,
        email=body.email,
        first_name=body.first_name,
        last_name=body.last_name,
    )
    return UserResponse.from_user(user)


@limiter.limit(_settings.login_rate_limit)  # brute-force mitigation -- must be ABOVE @router to preserve FastAPI introspection
@router.post("/login", response_model=UserResponse)
def login(request: Request, body: LoginRequest) -> JSONResponse:
    """Authenticate with username and password; set the session cookie.

    Returns the same generic error for wrong username and wrong password
    ("invalid_credentials") to avoid leaking username existence information.
    """
    auth: AuthService = get_auth_service(request)
    try:
        session = auth.login(body.username, body.password)
    except InvalidCredentials as exc:
        resp = JSONResponse(
            status_code=exc.status_code,
            content={"error": {"code": exc.code, "message": exc.message}},
        )
        resp.headers["Cache-Control"] = "no-store"
        return resp

    user = auth.users.get_by_id(session.user_id)
    resp = JSONResponse(status_code=200, content=UserResponse.from_user(user).model_dump())
    set_session_cookie(resp, session.id)
    resp.headers["Cache-Control"] = "no-store"
    return resp


@router.post("/logout", response_model=MessageResponse)
def logout(request: Request) -> JSONResponse:
    """Destroy the presented session (if any) and clear the cookie."""
    get_auth_service(request).logout(get_session_id(request))
    resp = JSONResponse(content=MessageResponse(message="Logged out.").model_dump())
    clear_session_cookie(resp)
    return resp


@router.get("/user", response_model=UserResponse)
def current_user(user: User = Depends(get_current_user)) -> UserResponse:
    """Return the user behind the current session."""
    return UserResponse.from_user(user)
