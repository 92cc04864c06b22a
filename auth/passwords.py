"""
auth/passwords.py -- Credential hashing and verification.

Security design decisions:
  scrypt (hashlib.scrypt): memory-hard KDF, so GPU/ASIC brute force costs
       memory as well as time. Parameters come from core.config (default
       N=2^14, r=8, p=1, 64-byte key), which lands in the tens of
       milliseconds per hash on current hardware.

  Encoding: hex(derived_key) + "." + hex(salt). The salt is 16 fresh random
       bytes from secrets.token_bytes per hash. The parameters are not encoded
       in the string, so changing SCRYPT_* invalidates existing hashes.

  Comparison: hmac.compare_digest on the derived bytes -- never string
       equality on the encoded value.

  Legacy bcrypt: the dashboard's historic seed account was stored as a
       bcrypt hash. Strings with a $2a$/$2b$/$2y$ prefix are verified with the
       bcrypt library so such a credential can still be supplied through
       SEED_ADMIN_PASSWORD_HASH. New hashes are always scrypt.

Layer rule: no imports from api/ or portal/. Import from core/ is allowed.
"""

from __future__ import annotations

import hashlib
import hmac
import secrets

import bcrypt

from core.config import get_settings

_settings = get_settings()

_SALT_BYTES = 16
_KEY_BYTES = 64
_BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")


def _derive(plain: str, salt: bytes) -> bytes:
    n, r, p = _settings.scrypt_n, _settings.scrypt_r, _settings.scrypt_p
    # OpenSSL's default maxmem (32 MiB) is too small for larger N/r settings.
    maxmem = max(32 * 1024 * 1024, 256 * n * r * p)
    return hashlib.scrypt(plain.encode("utf-8"), salt=salt, n=n, r=r, p=p, maxmem=maxmem, dklen=_KEY_BYTES)


def hash_password(plain: str) -> str:
    """Return the encoded scrypt hash of plain: "<hex key>.<hex salt>".

    Raises ValueError if the configured scrypt parameters are rejected by
    OpenSSL; the service layer turns that into an InternalFault.
    """
    salt = secrets.token_bytes(_SALT_BYTES)
    return f"{_derive(plain, salt).hex()}.{salt.hex()}"


def verify_password(plain: str, encoded: str) -> bool:
    """Return True if plain matches encoded. Never raises on malformed input."""
    if not isinstance(encoded, str) or not encoded:
        return False
    if encoded.startswith(_BCRYPT_PREFIXES):
        return _verify_bcrypt(plain, encoded)
    key_hex, sep, salt_hex = encoded.partition(".")
    if not sep:
        return False
    try:
        stored_key = bytes.fromhex(key_hex)
        salt = bytes.fromhex(salt_hex)
    except ValueError:
        return False
    if len(stored_key) != _KEY_BYTES or not salt:
        return False
    try:
        derived = _derive(plain, salt)
    except (ValueError, MemoryError):
        return False
    return hmac.compare_digest(derived, stored_key)


def _verify_bcrypt(plain: str, encoded: str) -> bool:
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), encoded.encode("utf-8"))
    except ValueError:
        return False


# Timing equalization dummy hash.
# Computed once at module load so the first login attempt is not measurably
# slower than subsequent ones. The service verifies against it when the
# username does not exist, so an unknown user costs the same KDF work as a
# wrong password.
DUMMY_HASH: str = hash_password("devportal_timing_dummy")
