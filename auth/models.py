"""
auth/models.py -- Domain dataclasses for authentication entities.

Pattern: Data class (pure data container, zero logic). Mirrors the approach
in portal/models.py -- dataclasses own domain shape; stores and the service
do the work.

Layer rule: no imports from api/ or portal/.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Role(str, Enum):
    """Flat role model. There is no implied hierarchy: admin does not imply user."""

    admin = "admin"
    user = "user"


@dataclass
class User:
    """An identity in the portal.

    username keeps the casing it was registered with; comparisons in the
    directory are case-insensitive.

    password holds the encoded credential hash ("key.salt" hex for scrypt, or
    a legacy bcrypt string). It is never serialized to clients -- the API
    layer maps User onto a response model without it.

    id is None before the record is written to the directory.
    """

    username: str
    email: str
    password: str
    role: str = Role.user.value
    first_name: str | None = None
    last_name: str | None = None
    id: int | None = None


@dataclass
class Session:
    """A server-side proof of a completed login.

    id is the opaque token handed to the client (>= 256 bits from secrets).
    created_at / expires_at are epoch seconds from the store's clock.
    """

    id: str
    user_id: int
    created_at: float
    expires_at: float
