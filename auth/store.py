"""
auth/store.py -- In-memory user directory.

Pattern: Repository. UserStore owns the users-by-id map and a lowercase
username index; route and service code never touch the maps directly.

State is volatile by design: the directory lives for the lifetime of the
process and the seeded admin account is re-created on every start. The
repository interface is the seam where a persistent backend would go.

Concurrency: FastAPI runs sync handlers in a thread pool, so every read and
write happens under one threading.Lock. Registration is check-then-insert;
without the lock two concurrent requests could both pass the uniqueness
check.

Layer rule: no imports from api/ or portal/.
"""

from __future__ import annotations

import threading
from dataclasses import replace

from auth.errors import DuplicateUsername
from auth.models import Role, User


class UserStore:
    """Repository for User entities.

    Usage:
        store = UserStore()
        user = store.create_user(User(username="admin", email="a@x.com", password=hash_password("secret")))
        store.get_by_username("ADMIN")   # same record, case-insensitive
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._users: dict[int, User] = {}
        self._ids_by_username: dict[str, int] = {}
        self._next_id = 1

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create_user(self, user: User) -> User:
        """Insert a new user and return the stored record with its id assigned.

        Raises DuplicateUsername if a user with the same username exists,
        compared case-insensitively. Ids come from a monotonic counter and are
        never reused.
        """
        key = user.username.lower()
        with self._lock:
            if key in self._ids_by_username:
                raise DuplicateUsername()
            stored = replace(user, id=self._next_id, role=user.role or Role.user.value)
            self._next_id += 1
            self._users[stored.id] = stored
            self._ids_by_username[key] = stored.id
        return replace(stored)

    # ------------------------------------------------------------------
    # Queries -- all return copies so callers cannot mutate stored records
    # ------------------------------------------------------------------

    def get_by_id(self, user_id: int) -> User | None:
        """Look up a user by id. Returns None if not found."""
        with self._lock:
            user = self._users.get(user_id)
        return replace(user) if user is not None else None

    def get_by_username(self, username: str) -> User | None:
        """Look up a user by username (case-insensitive). Returns None if not found."""
        with self._lock:
            user_id = self._ids_by_username.get(username.lower())
            user = self._users.get(user_id) if user_id is not None else None
        return replace(user) if user is not None else None

    def get_by_email(self, email: str) -> User | None:
        """Look up a user by email (case-insensitive). Returns None if not found."""
        target = email.lower()
        with self._lock:
            user = next((u for u in self._users.values() if u.email.lower() == target), None)
        return replace(user) if user is not None else None

    def list_users(self) -> list[User]:
        """Return all users in insertion order (ascending id)."""
        with self._lock:
            return [replace(u) for u in self._users.values()]

    def has_users(self) -> bool:
        with self._lock:
            return bool(self._users)
