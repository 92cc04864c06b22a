"""
api/limiter.py -- Shared slowapi rate limiter instance.

Imported by api/main.py (to mount as middleware) and api/routes/auth.py
(to apply the login limit with @limiter.limit()).

A single shared instance means all routes share one in-memory counter store.
Tests call limiter.reset() between clients so login-heavy suites don't trip
the limit.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address, storage_uri="memory://")
