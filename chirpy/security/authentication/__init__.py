"""
Authentication module - Tokens and credentials

Provides:
- TokenAuthority: access/refresh JWT issuance, verification, revocation
- PasswordHelper: bcrypt password hashing
"""

from .passwords import PasswordHelper
from .token_authority import (
    TokenAuthority,
    TokenKind,
    TokenPair,
    TokenError,
    TokenMalformedError,
    TokenWrongKindError,
    TokenExpiredError,
    TokenRevokedError,
)

__all__ = [
    "PasswordHelper",
    "TokenAuthority",
    "TokenKind",
    "TokenPair",
    "TokenError",
    "TokenMalformedError",
    "TokenWrongKindError",
    "TokenExpiredError",
    "TokenRevokedError",
]
