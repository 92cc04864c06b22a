"""
auth/sessions.py -- In-memory server-side session store with TTL expiry.

Sessions are keyed by an opaque id from secrets.token_urlsafe(32): 256 bits
of entropy, so guessing a live id is computationally infeasible.

Expiry is checked lazily on every read: get() treats a session past its
expires_at as absent and drops it. purge_expired() bounds memory for
sessions that are never read again; api/main.py runs it from a background
task on SESSION_SWEEP_INTERVAL_SECONDS.

Usage:
    sessions = SessionStore(ttl=3600)
    session = sessions.create(user_id=1)
    sessions.get(session.id)          # Session, or None once expired
    sessions.destroy(session.id)      # idempotent
    sessions.purge_expired()          # call periodically to trim old entries

Layer rule: no imports from api/ or portal/.
"""

from __future__ import annotations

import secrets
import threading
import time
from collections.abc import Callable
from dataclasses import replace

from auth.models import Session

_DEFAULT_TTL = 60 * 60 * 24  # 24 hours in seconds
_TOKEN_BYTES = 32


class SessionStore:
    def __init__(self, ttl: float = _DEFAULT_TTL, clock: Callable[[], float] = time.time) -> None:
        self.ttl = ttl
        self._clock = clock
        self._lock = threading.Lock()
        self._sessions: dict[str, Session] = {}

    def create(self, user_id: int) -> Session:
        """Start a new session for user_id, expiring ttl seconds from now."""
        now = self._clock()
        session = Session(
            id=secrets.token_urlsafe(_TOKEN_BYTES),
            user_id=user_id,
            created_at=now,
            expires_at=now + self.ttl,
        )
        with self._lock:
            self._sessions[session.id] = session
        return replace(session)

    def get(self, session_id: str) -> Session | None:
        """Return the session if it exists and hasn't expired."""
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                return None
            if self._clock() > session.expires_at:
                del self._sessions[session_id]
                return None
        return replace(session)

    def destroy(self, session_id: str) -> None:
        """Remove the session. Unknown ids are a no-op."""
        with self._lock:
            self._sessions.pop(session_id, None)

    def purge_expired(self) -> int:
        """Delete all sessions past their expiry. Returns number removed."""
        now = self._clock()
        with self._lock:
            expired = [sid for sid, s in self._sessions.items() if now > s.expires_at]
            for sid in expired:
                del self._sessions[sid]
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
