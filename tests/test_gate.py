"""Unit tests for auth/gate.py -- authorization predicates.

Covers:
- require_authenticated() rejects Anonymous (None)
- require_role() is an exact match with no hierarchy
- Unauthenticated wins over Forbidden when both would apply
"""

import pytest

from auth.errors import Forbidden, Unauthenticated
from auth.gate import require_authenticated, require_role
from auth.models import Role, User


def _user(role: str) -> User:
    return User(id=1, username="someone", email="s@x.com", password="hash", role=role)


def test_require_authenticated_passes_user_through():
    user = _user("user")
    assert require_authenticated(user) is user


def test_require_authenticated_rejects_anonymous():
    with pytest.raises(Unauthenticated):
        require_authenticated(None)


def test_user_role_is_forbidden_from_admin():
    with pytest.raises(Forbidden):
        require_role(_user("user"), "admin")


def test_admin_role_passes_admin_check():
    admin = _user("admin")
    assert require_role(admin, "admin") is admin
    assert require_role(admin, Role.admin) is admin


def test_admin_does_not_imply_user():
    with pytest.raises(Forbidden):
        require_role(_user("admin"), Role.user)


def test_anonymous_is_unauthenticated_not_forbidden():
    with pytest.raises(Unauthenticated):
        require_role(None, "admin")


def test_error_status_codes():
    assert Unauthenticated.status_code == 401
    assert Forbidden.status_code == 403
