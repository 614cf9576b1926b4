"""
Constants for the Chirpy core

Module: core.constants
Date: 2026-10-18
Version: 0.2.0

CHANGELOG:
[2026-10-18 v0.2.0] Token issuers and TTLs
[2026-10-12 v0.1.0] Initial constants definition
  - Document layout
  - Storage defaults

SECURITY NOTES:
- Access tokens are short lived (1 hour)
- Refresh tokens live 60 days and can be revoked early
"""

from datetime import timedelta
from typing import Final

# ============================================================================
# Service identity
# ============================================================================

SERVICE_NAME: Final[str] = "chirpy"
SERVICE_VERSION: Final[str] = "0.2.0"

# ============================================================================
# Document layout
# ============================================================================

COLLECTION_POSTS: Final[str] = "chirps"
COLLECTION_ACCOUNTS: Final[str] = "users"
COLLECTION_REVOKED_TOKENS: Final[str] = "revoked_tokens"

COLLECTIONS: Final[tuple] = (
    COLLECTION_POSTS,
    COLLECTION_ACCOUNTS,
    COLLECTION_REVOKED_TOKENS,
)

# ============================================================================
# Storage defaults
# ============================================================================

DEFAULT_DB_PATH: Final[str] = "chirps.json"
DEFAULT_DEBUG_DB_PATH: Final[str] = "chirps_debug.json"
DEFAULT_BCRYPT_ROUNDS: Final[int] = 10

# ============================================================================
# Tokens
# ============================================================================

JWT_ALGORITHM: Final[str] = "HS256"
MIN_SECRET_LENGTH: Final[int] = 32

ACCESS_TOKEN_ISSUER: Final[str] = "chirpy-access"
REFRESH_TOKEN_ISSUER: Final[str] = "chirpy-refresh"

ACCESS_TOKEN_TTL: Final[timedelta] = timedelta(hours=1)
REFRESH_TOKEN_TTL: Final[timedelta] = timedelta(hours=1440)

REQUIRED_TOKEN_CLAIMS: Final[tuple] = ("iss", "sub", "iat", "exp")
