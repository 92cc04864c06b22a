"""
auth/service.py -- Authentication service: register, login, resolve, logout.

AuthService orchestrates the credential hasher, the user directory, and the
session store. It holds no session state itself; every resolve() goes back
to the stores so role and identity edits are reflected immediately.

Per-request state machine:
    Anonymous --(valid session presented)--> Authenticated
    Authenticated --(logout or expiry)--> Anonymous

resolve() returns None for Anonymous.

Security:
  login() always runs the KDF, even for an unknown username (against
  passwords.DUMMY_HASH), and raises the same InvalidCredentials for unknown
  user and wrong password. Neither the error nor the latency reveals whether
  a username exists. Do NOT inline get_by_username() + verify_password() in
  route code -- that re-introduces the timing leak.
  The equalization assumes scrypt hashes. A seed admin supplied as a legacy
  bcrypt SEED_ADMIN_PASSWORD_HASH verifies with bcrypt, whose cost differs
  from DUMMY_HASH, so use `main.py hash-password` to produce seed hashes.

Layer rule: no imports from api/ or portal/.
"""

from __future__ import annotations

import logging

from auth.errors import InternalFault, InvalidCredentials, ValidationError
from auth.models import Role, Session, User
from auth.passwords import DUMMY_HASH, hash_password, verify_password
from auth.sessions import SessionStore
from auth.store import UserStore

logger = logging.getLogger("devportal.auth")

USERNAME_MIN_LEN = 3
PASSWORD_MIN_LEN = 6


class AuthService:
    def __init__(self, users: UserStore, sessions: SessionStore) -> None:
        self.users = users
        self.sessions = sessions

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(
        self,
        username: str,
        password: str,
        email: str,
        first_name: str | None = None,
        last_name: str | None = None,
        role: str = Role.user.value,
    ) -> User:
        """Create a new account. Does not log the user in.

        Raises ValidationError for a username shorter than 3 characters, a
        password shorter than 6, an empty email, or an unknown role;
        DuplicateUsername if the name is taken (case-insensitive).
        """
        username = username.strip()
        email = email.strip()
        if len(username) < USERNAME_MIN_LEN:
            raise ValidationError(f"Username must be at least {USERNAME_MIN_LEN} characters.")
        if len(password) < PASSWORD_MIN_LEN:
            raise ValidationError(f"Password must be at least {PASSWORD_MIN_LEN} characters.")
        if not email:
            raise ValidationError("Email is required.")
        if role not in {r.value for r in Role}:
            raise ValidationError(f"Unknown role: {role!r}.")

        try:
            hashed = hash_password(password)
        except (ValueError, MemoryError) as exc:
            raise InternalFault() from exc

        user = self.users.create_user(
            User(
                username=username,
                email=email,
                password=hashed,
                role=role,
                first_name=first_name,
                last_name=last_name,
            )
        )
        logger.info("Registered user %s (id=%d, role=%s)", user.username, user.id, user.role)
        return user

    # ------------------------------------------------------------------
    # Login / logout
    # ------------------------------------------------------------------

    def authenticate(self, username: str, password: str) -> User:
        """Verify credentials with timing equalization. Raises InvalidCredentials.

        The username is stripped the same way register() strips it, so an
        account registered as " alice " logs in with " alice " or "alice".
        """
        user = self.users.get_by_username(username.strip())
        if user is None:
            # Equalize timing -- do NOT return early before running the KDF
            verify_password(password, DUMMY_HASH)
            raise InvalidCredentials()
        if not verify_password(password, user.password):
            raise InvalidCredentials()
        return user

    def login(self, username: str, password: str) -> Session:
        """Authenticate and open a session bound to the user's id.

        The caller sets the session id on the transport (cookie).
        """
        try:
            user = self.authenticate(username, password)
        except InvalidCredentials:
            logger.info("Failed login for username %r", username)
            raise
        session = self.sessions.create(user.id)
        logger.info("User %s (id=%d) logged in", user.username, user.id)
        return session

    def logout(self, session_id: str | None) -> None:
        """End the session. Always succeeds, whether or not it existed."""
        if session_id:
            self.sessions.destroy(session_id)

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def resolve(self, session_id: str | None) -> User | None:
        """Return the user behind a live session, or None (Anonymous)."""
        if not session_id:
            return None
        session = self.sessions.get(session_id)
        if session is None:
            return None
        return self.users.get_by_id(session.user_id)

    # ------------------------------------------------------------------
    # Startup seeding
    # ------------------------------------------------------------------

    def seed_admin(
        self,
        username: str,
        email: str,
        password: str = "",
        password_hash: str = "",
    ) -> User:
        """Create the default admin account, or return it if it already exists.

        password_hash (scrypt or legacy bcrypt) wins over password. The admin
        bypasses register()'s length checks so an operator-supplied hash is
        stored as-is.
        """
        existing = self.users.get_by_username(username)
        if existing is not None:
            return existing
        if not password_hash:
            try:
                password_hash = hash_password(password)
            except (ValueError, MemoryError) as exc:
                raise InternalFault() from exc
        user = self.users.create_user(
            User(
                username=username,
                email=email,
                password=password_hash,
                role=Role.admin.value,
                first_name="Admin",
                last_name="User",
            )
        )
        logger.info("Seeded admin account %s (id=%d)", user.username, user.id)
        return user
