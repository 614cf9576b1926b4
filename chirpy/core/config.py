"""
Configuration - Environment-driven settings

Module: core.config
Date: 2026-10-18
Version: 0.2.0

CHANGELOG:
[2026-10-18 v0.2.0] Token TTL overrides
  - .env looked up from the working directory
  - Debug database is only reset on request
[2026-10-12 v0.1.0] Initial implementation
  - .env loading via python-dotenv
  - Debug mode with a separate database

Environment variables:
  JWT_SECRET                  signing secret (required, 32+ chars)
  CHIRPY_DB_PATH              document path (default chirps.json)
  CHIRPY_DEBUG_DB_PATH        debug document path (default chirps_debug.json)
  CHIRPY_BCRYPT_ROUNDS        bcrypt cost factor (default 10)
  CHIRPY_ACCESS_TTL_SECONDS   access token lifetime (default 3600)
  CHIRPY_REFRESH_TTL_SECONDS  refresh token lifetime (default 5184000)
"""

import logging
import os
from dataclasses import dataclass
from datetime import timedelta
from typing import Mapping, Optional

from dotenv import find_dotenv, load_dotenv

from .constants import (
    ACCESS_TOKEN_TTL,
    DEFAULT_BCRYPT_ROUNDS,
    DEFAULT_DB_PATH,
    DEFAULT_DEBUG_DB_PATH,
    MIN_SECRET_LENGTH,
    REFRESH_TOKEN_TTL,
)
from ..persistence.document_store import DocumentStore
from ..security.authentication.token_authority import TokenAuthority

logger = logging.getLogger("core.config")


class ConfigError(Exception):
    """Missing or invalid setting"""
    pass


def _int_setting(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}")


@dataclass(frozen=True)
class ChirpyConfig:
    """Immutable settings, loaded once at startup"""
    jwt_secret: str
    db_path: str = DEFAULT_DB_PATH
    debug_db_path: str = DEFAULT_DEBUG_DB_PATH
    debug: bool = False
    bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS
    access_ttl: timedelta = ACCESS_TOKEN_TTL
    refresh_ttl: timedelta = REFRESH_TOKEN_TTL

    @classmethod
    def from_env(
        cls,
        env: Optional[Mapping[str, str]] = None,
        debug: bool = False,
    ) -> "ChirpyConfig":
        """
        Build configuration from environment variables

        Args:
            env: Mapping to read from; defaults to os.environ after
                loading a .env file from the working directory
            debug: Use the debug database

        Raises:
            ConfigError: JWT_SECRET missing or a numeric setting invalid
        """
        if env is None:
            load_dotenv(find_dotenv(usecwd=True))
            env = os.environ

        secret = env.get("JWT_SECRET")
        if not secret:
            raise ConfigError("JWT_SECRET is not set")
        if len(secret) < MIN_SECRET_LENGTH:
            raise ConfigError(f"JWT_SECRET must be at least {MIN_SECRET_LENGTH} characters")

        return cls(
            jwt_secret=secret,
            db_path=env.get("CHIRPY_DB_PATH") or DEFAULT_DB_PATH,
            debug_db_path=env.get("CHIRPY_DEBUG_DB_PATH") or DEFAULT_DEBUG_DB_PATH,
            debug=debug,
            bcrypt_rounds=_int_setting(env, "CHIRPY_BCRYPT_ROUNDS", DEFAULT_BCRYPT_ROUNDS),
            access_ttl=timedelta(seconds=_int_setting(
                env, "CHIRPY_ACCESS_TTL_SECONDS", int(ACCESS_TOKEN_TTL.total_seconds())
            )),
            refresh_ttl=timedelta(seconds=_int_setting(
                env, "CHIRPY_REFRESH_TTL_SECONDS", int(REFRESH_TOKEN_TTL.total_seconds())
            )),
        )

    @property
    def effective_db_path(self) -> str:
        return self.debug_db_path if self.debug else self.db_path

    def build_store(self, reset: bool = False) -> DocumentStore:
        """Open the document store; reset=True starts from an empty document"""
        if self.debug:
            logger.info("Debug mode enabled")
        return DocumentStore(
            self.effective_db_path,
            bcrypt_rounds=self.bcrypt_rounds,
            reset=reset,
        )

    def build_token_authority(self, store: DocumentStore) -> TokenAuthority:
        return TokenAuthority(
            self.jwt_secret,
            store,
            access_ttl=self.access_ttl,
            refresh_ttl=self.refresh_ttl,
        )
