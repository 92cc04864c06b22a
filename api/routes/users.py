"""
api/routes/users.py -- User management endpoints (admin only).

Routes:
  GET  /api/users   -- list all users, password hashes stripped
  POST /api/users   -- create a user with an explicit role

Router-level dependency enforces the admin gate (401 before 403); the
handlers that need the acting admin ask for it again, which is cheap.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from api.models import UserCreate, UserResponse
from auth.dependencies import get_auth_service, require_admin
from auth.service import AuthService

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("/users", response_model=list[UserResponse])
def list_users(auth: AuthService = Depends(get_auth_service)) -> list[UserResponse]:
    """List all user accounts in creation order."""
    return [UserResponse.from_user(u) for u in auth.users.list_users()]


@router.post("/users", response_model=UserResponse, status_code=201)
def create_user(body: UserCreate, auth: AuthService = Depends(get_auth_service)) -> UserResponse:
    """Create an account on someone's behalf. Same validation as self-registration."""
    user = auth.register(
        username=body.username,
        password=body.password,
        email=body.email,
        first_name=body.first_name,
        last_name=body.last_name,
        role=body.role.value,
    )
    return UserResponse.from_user(user)
