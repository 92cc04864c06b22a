"""Unit tests for auth/service.py -- register, login, resolve, logout.

Covers:
- registration validation (username/password length, email, role)
- duplicate usernames (case-insensitive)
- unknown user and wrong password raise the same InvalidCredentials
- login -> resolve -> logout lifecycle, lazy expiry through resolve()
- resolve() re-reads the directory on every call
- seed_admin() with a plaintext password, a pre-computed hash, and idempotency
- hasher faults surface as InternalFault
"""

import time

import bcrypt
import pytest

from auth.errors import DuplicateUsername, InternalFault, InvalidCredentials, ValidationError
from auth.passwords import hash_password
from auth.service import AuthService
from auth.sessions import SessionStore
from auth.store import UserStore

# ---------------------------------------------------------------------------
# register()
# ---------------------------------------------------------------------------


def test_register_alice_scenario(auth: AuthService):
    user = auth.register("alice", "secret1", "a@x.com")
    assert user.id is not None
    assert user.role == "user"

    session = auth.login("alice", "secret1")
    with pytest.raises(InvalidCredentials):
        auth.login("alice", "wrong")

    resolved = auth.resolve(session.id)
    assert resolved is not None
    assert resolved.id == user.id
    assert resolved.username == "alice"


def test_register_stores_hash_not_plaintext(auth: AuthService):
    user = auth.register("alice", "secret1", "a@x.com")
    assert user.password != "secret1"
    assert "." in user.password


@pytest.mark.parametrize(
    ("username", "password", "email"),
    [
        ("al", "secret1", "a@x.com"),  # username < 3
        ("  al  ", "secret1", "a@x.com"),  # whitespace does not count
        ("alice", "12345", "a@x.com"),  # password < 6
        ("alice", "secret1", ""),  # email required
    ],
)
def test_register_validation(auth: AuthService, username, password, email):
    with pytest.raises(ValidationError):
        auth.register(username, password, email)


def test_register_rejects_unknown_role(auth: AuthService):
    with pytest.raises(ValidationError):
        auth.register("alice", "secret1", "a@x.com", role="superuser")


def test_register_accepts_boundary_lengths(auth: AuthService):
    user = auth.register("abc", "123456", "a@x.com")
    assert user.username == "abc"


def test_register_duplicate_case_insensitive(auth: AuthService):
    auth.register("Admin", "secret1", "a@x.com")
    with pytest.raises(DuplicateUsername):
        auth.register("admin", "secret2", "b@x.com")


def test_register_does_not_log_in(auth: AuthService, sessions: SessionStore):
    auth.register("alice", "secret1", "a@x.com")
    assert len(sessions) == 0


def test_register_hasher_fault_is_internal(auth: AuthService, monkeypatch):
    def broken(_plain):
        raise ValueError("scrypt parameters rejected")

    monkeypatch.setattr("auth.service.hash_password", broken)
    with pytest.raises(InternalFault) as info:
        auth.register("alice", "secret1", "a@x.com")
    assert isinstance(info.value.__cause__, ValueError)


# ---------------------------------------------------------------------------
# login()
# ---------------------------------------------------------------------------


def test_unknown_user_and_wrong_password_are_indistinguishable(auth: AuthService):
    auth.register("admin", "admin123", "admin@x.com")
    with pytest.raises(InvalidCredentials) as unknown:
        auth.login("nobody", "anything")
    with pytest.raises(InvalidCredentials) as wrong:
        auth.login("admin", "wrongpassword")
    assert type(unknown.value) is type(wrong.value)
    assert str(unknown.value) == str(wrong.value)


def test_unknown_user_still_runs_the_kdf(auth: AuthService, monkeypatch):
    calls = []

    def spy(plain, encoded):
        calls.append(encoded)
        return False

    monkeypatch.setattr("auth.service.verify_password", spy)
    with pytest.raises(InvalidCredentials):
        auth.login("nobody", "anything")
    assert len(calls) == 1


def test_login_is_case_insensitive_on_username(auth: AuthService):
    user = auth.register("Alice", "secret1", "a@x.com")
    session = auth.login("ALICE", "secret1")
    assert session.user_id == user.id


def test_padded_username_logs_in_as_registered(auth: AuthService):
    user = auth.register(" alice ", "secret1", "a@x.com")
    assert user.username == "alice"
    assert auth.login(" alice ", "secret1").user_id == user.id
    assert auth.login("alice", "secret1").user_id == user.id


def test_each_login_creates_a_new_session(auth: AuthService):
    auth.register("alice", "secret1", "a@x.com")
    first = auth.login("alice", "secret1")
    second = auth.login("alice", "secret1")
    assert first.id != second.id


# ---------------------------------------------------------------------------
# resolve() / logout()
# ---------------------------------------------------------------------------


def test_logout_makes_session_anonymous(auth: AuthService):
    auth.register("alice", "secret1", "a@x.com")
    session = auth.login("alice", "secret1")
    auth.logout(session.id)
    assert auth.resolve(session.id) is None


def test_logout_is_idempotent(auth: AuthService):
    auth.logout("unknown-session")
    auth.logout(None)
    auth.logout("")


@pytest.mark.parametrize("session_id", [None, "", "not-a-session"])
def test_resolve_anonymous(auth: AuthService, session_id):
    assert auth.resolve(session_id) is None


def test_resolve_expired_session_is_anonymous():
    service = AuthService(UserStore(), SessionStore(ttl=0.001))
    service.register("alice", "secret1", "a@x.com")
    session = service.login("alice", "secret1")
    time.sleep(0.01)
    assert service.resolve(session.id) is None


def test_resolve_reads_directory_each_time(auth: AuthService, users: UserStore):
    user = auth.register("alice", "secret1", "a@x.com")
    session = auth.login("alice", "secret1")
    # Simulate an administrative role change made directly in the directory.
    users._users[user.id].role = "admin"
    assert auth.resolve(session.id).role == "admin"


# ---------------------------------------------------------------------------
# seed_admin()
# ---------------------------------------------------------------------------


def test_seed_admin_with_password(auth: AuthService):
    admin = auth.seed_admin("admin", "admin@platformnex.com", password="admin123")
    assert admin.role == "admin"
    assert auth.login("admin", "admin123").user_id == admin.id


def test_seed_admin_with_scrypt_hash(auth: AuthService):
    admin = auth.seed_admin("admin", "a@x.com", password_hash=hash_password("s3cret!"))
    assert auth.login("admin", "s3cret!").user_id == admin.id


def test_seed_admin_with_legacy_bcrypt_hash(auth: AuthService):
    legacy = bcrypt.hashpw(b"admin123", bcrypt.gensalt(rounds=4)).decode("utf-8")
    admin = auth.seed_admin("admin", "a@x.com", password_hash=legacy)
    assert auth.login("admin", "admin123").user_id == admin.id


def test_seed_admin_is_idempotent(auth: AuthService, users: UserStore):
    first = auth.seed_admin("admin", "a@x.com", password="admin123")
    second = auth.seed_admin("ADMIN", "a@x.com", password="other-password")
    assert first.id == second.id
    assert len(users.list_users()) == 1
