"""
auth/errors.py -- Error taxonomy for the authentication subsystem.

Every error carries the HTTP status and machine-readable code it maps to, so
the API layer renders all of them through one exception handler instead of
translating each kind at every call site.

InternalFault is the only kind whose message must never reach the client;
api/main.py logs it and answers with a generic body.

Layer rule: no imports from api/ or portal/.
"""

from __future__ import annotations


class AuthError(Exception):
    """Base class for all authentication and authorization failures."""

    status_code: int = 500
    code: str = "auth_error"
    message: str = "Authentication error."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)
        if message:
            self.message = message


class ValidationError(AuthError):
    """Malformed registration input (short username or password, empty email)."""

    status_code = 400
    code = "validation_error"
    message = "Invalid registration data."


class DuplicateUsername(AuthError):
    status_code = 409
    code = "duplicate_username"
    message = "Username already exists."


class InvalidCredentials(AuthError):
    """Login failure. Deliberately silent about which factor was wrong."""

    status_code = 401
    code = "invalid_credentials"
    message = "Invalid username or password."


class Unauthenticated(AuthError):
    status_code = 401
    code = "unauthenticated"
    message = "Authentication required."


class Forbidden(AuthError):
    status_code = 403
    code = "forbidden"
    message = "Insufficient role for this operation."


class InternalFault(AuthError):
    status_code = 500
    code = "internal_error"
    message = "An unexpected error occurred."
