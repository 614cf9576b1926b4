"""
Chirpy core

Persistence and authorization core of a micro-posting service: a
single-file JSON document store shared across request threads, and a
token authority issuing access and refresh tokens.

CHANGELOG:
[2026-10-18 v0.2.0] Revocation, admin CLI, whole critical section writes
[2026-10-12 v0.1.0] Initial project setup

ARCHITECTURE:
- persistence: JSONStore (file + rw lock), DocumentStore (collections)
- security.authentication: TokenAuthority (JWT), PasswordHelper (bcrypt)
- core: constants, environment configuration

SECURITY NOTES:
- Passwords stored as bcrypt hashes only
- Refresh tokens can be revoked before expiry
- Store file written with 0600 permissions
"""

from .core.constants import SERVICE_VERSION
from .persistence.document_store import DocumentStore, SortOrder
from .security.authentication.token_authority import TokenAuthority, TokenKind

__version__ = SERVICE_VERSION

__all__ = [
    "DocumentStore",
    "SortOrder",
    "TokenAuthority",
    "TokenKind",
]
