"""
core/config.py -- Centralized application configuration via pydantic-settings.

All environment variable reads for the portal happen here. No module should
call os.getenv() or os.environ.get() directly -- import get_settings() instead.

Design patterns used:
  Singleton via lru_cache: get_settings() instantiates Settings once at first
      call and returns the cached instance on every subsequent call. This is
      the official FastAPI dependency injection pattern for config.

  BaseSettings (pydantic-settings): Reads values from environment variables
      and an optional .env file automatically. Field names map to env var names
      (e.g. session_ttl_seconds -> SESSION_TTL_SECONDS).

  @model_validator(mode="after"): Cross-field validation after all fields are
      resolved. Used for the DEBUG-conditional seed admin credential: dev mode
      falls back to a well-known password with a warning, production mode
      refuses to start without one.

Layer rule: core/ is the kernel. This module may not import from api/,
auth/, or portal/.
"""

import logging
from functools import lru_cache

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger("devportal.config")

# Development-only fallback for the seeded admin account. Matches the
# credential the dashboard has always shipped with for local use.
_DEV_ADMIN_PASSWORD = "admin123"


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file.

    All fields have defaults so Settings() can be instantiated in test
    environments without a real .env file (as long as DEBUG=true, see the
    seed admin validator).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ------------------------------------------------------------------
    # Core
    # ------------------------------------------------------------------

    debug: bool = False
    allowed_hosts: list[str] = ["localhost", "127.0.0.1", "*.localhost"]
    cors_origins: list[str] = ["http://localhost", "http://localhost:5173", "http://127.0.0.1"]

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------

    session_cookie_name: str = "portal_session"
    session_ttl_seconds: float = 24 * 60 * 60
    # The sweep only bounds memory; expiry itself is checked on every read.
    session_sweep_interval_seconds: float = 24 * 60 * 60
    secure_cookies: bool = False

    # ------------------------------------------------------------------
    # Password hashing (scrypt)
    # ------------------------------------------------------------------

    scrypt_n: int = 2**14
    scrypt_r: int = 8
    scrypt_p: int = 1

    # ------------------------------------------------------------------
    # Rate limiting / registration
    # ------------------------------------------------------------------

    login_rate_limit: str = "10/minute"
    self_registration_enabled: bool = True

    # ------------------------------------------------------------------
    # Seeded admin account (re-created on every start; state is in-memory)
    # ------------------------------------------------------------------

    seed_admin_username: str = "admin"
    seed_admin_email: str = "admin@platformnex.com"
    # Empty string is the sentinel for "not configured".
    seed_admin_password: str = ""
    # Pre-computed hash (scrypt "key.salt" or legacy bcrypt). Wins over
    # seed_admin_password when both are set.
    seed_admin_password_hash: str = ""

    # ------------------------------------------------------------------
    # Validators
    # ------------------------------------------------------------------

    @model_validator(mode="after")
    def validate_settings(self) -> "Settings":
        """Enforce scrypt, session, and seed admin policy at startup.

        Dev mode (DEBUG=true): a missing seed admin credential falls back to
            the development password with a warning.

        Production mode (DEBUG=false or not set): refuse to start without
            SEED_ADMIN_PASSWORD or SEED_ADMIN_PASSWORD_HASH. A well-known
            admin password in production is an open door.
        """
        if self.scrypt_n < 2 or self.scrypt_n & (self.scrypt_n - 1):
            raise ValueError("SCRYPT_N must be a power of two greater than 1.")
        if self.scrypt_r < 1 or self.scrypt_p < 1:
            raise ValueError("SCRYPT_R and SCRYPT_P must be positive.")
        if self.session_ttl_seconds <= 0:
            raise ValueError("SESSION_TTL_SECONDS must be positive.")
        if self.session_sweep_interval_seconds <= 0:
            raise ValueError("SESSION_SWEEP_INTERVAL_SECONDS must be positive.")
        if not self.seed_admin_password and not self.seed_admin_password_hash:
            if self.debug:
                self.seed_admin_password = _DEV_ADMIN_PASSWORD
                logger.warning(
                    "WARNING: Using the development admin password. " "Set SEED_ADMIN_PASSWORD before deploying."
                )
            else:
                raise ValueError(
                    "SEED_ADMIN_PASSWORD or SEED_ADMIN_PASSWORD_HASH is required in production mode. "
                    "Set one in your environment or .env file. "
                    "To run in development mode, set DEBUG=true."
                )
        return self


@lru_cache
def get_settings() -> Settings:
    """Return the application Settings singleton.

    In tests: call get_settings.cache_clear() between test cases if you need
    to inject different environment variables.
    """
    return Settings()
