"""
Token Authority - Access/refresh JSON Web Tokens

Module: security.authentication.token_authority
Date: 2026-10-18
Version: 0.2.0

CHANGELOG:
[2026-10-18 v0.2.0] Revocation
  - revoke() records refresh tokens in the document store
  - refresh_access_token() rejects revoked refresh tokens

[2026-10-12 v0.1.0] Initial implementation
  - HS256 tokens with issuer as kind discriminator
  - Verification with distinct malformed/wrong-kind/expired errors

ARCHITECTURE:
TokenAuthority provides:
  - Stateless issuance and verification (shared immutable secret)
  - Two token kinds: access (1h) and refresh (1440h)
  - Early invalidation of refresh tokens through the revocation list

SECURITY NOTES:
- HS256, secret must be 32+ characters
- The issuer claim tells the kinds apart; an access token is never
  accepted where a refresh token is expected, and vice versa
- verify() does NOT consult the revocation list
- All times in UTC
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import TYPE_CHECKING, Optional

import jwt

from ...core.constants import (
    ACCESS_TOKEN_ISSUER,
    ACCESS_TOKEN_TTL,
    JWT_ALGORITHM,
    MIN_SECRET_LENGTH,
    REFRESH_TOKEN_ISSUER,
    REFRESH_TOKEN_TTL,
    REQUIRED_TOKEN_CLAIMS,
)

if TYPE_CHECKING:
    from ...persistence.document_store import DocumentStore


class TokenError(Exception):
    """Base token error"""
    pass


class TokenMalformedError(TokenError):
    """Token cannot be parsed or its signature does not validate"""
    pass


class TokenWrongKindError(TokenError):
    """Token was issued for the other kind"""
    pass


class TokenExpiredError(TokenError):
    """Token is past its expiry"""
    pass


class TokenRevokedError(TokenError):
    """Refresh token has been revoked"""
    pass


class TokenKind(Enum):
    """Token kinds, each with its own issuer label"""
    ACCESS = "access"
    REFRESH = "refresh"

    @property
    def issuer(self) -> str:
        if self is TokenKind.ACCESS:
            return ACCESS_TOKEN_ISSUER
        return REFRESH_TOKEN_ISSUER


@dataclass
class TokenPair:
    """Access and refresh token pair"""
    access_token: str
    refresh_token: str
    token_type: str = "Bearer"


class TokenAuthority:
    """
    Mints and verifies bearer tokens.

    Holds no mutable state besides the document store handle used to
    record revocations.
    """

    def __init__(
        self,
        secret_key: str,
        store: "DocumentStore",
        algorithm: str = JWT_ALGORITHM,
        access_ttl: timedelta = ACCESS_TOKEN_TTL,
        refresh_ttl: timedelta = REFRESH_TOKEN_TTL,
    ):
        """
        Initialize token authority

        Args:
            secret_key: Secret key for signing (32+ characters)
            store: Document store holding the revocation list
            algorithm: JWT algorithm (default HS256)
            access_ttl: Access token lifetime
            refresh_ttl: Refresh token lifetime

        Raises:
            ValueError: If secret_key too short
        """
        if not secret_key or len(secret_key) < MIN_SECRET_LENGTH:
            raise ValueError(
                f"Secret key must be at least {MIN_SECRET_LENGTH} characters"
            )

        self.logger = logging.getLogger("security.token_authority")
        self._secret_key = secret_key
        self.store = store
        self.algorithm = algorithm
        self.ttls = {
            TokenKind.ACCESS: access_ttl,
            TokenKind.REFRESH: refresh_ttl,
        }

        self.logger.info(
            f"Token authority initialized (algo={algorithm}, "
            f"access_expires={access_ttl}, refresh_expires={refresh_ttl})"
        )

    def issue(
        self,
        account_id: int,
        kind: TokenKind,
        expires_in: Optional[timedelta] = None,
    ) -> str:
        """
        Mint a token for an account

        Args:
            account_id: Subject of the token
            kind: TokenKind.ACCESS or TokenKind.REFRESH
            expires_in: Override the lifetime configured for the kind

        Returns:
            Encoded JWT string
        """
        kind = TokenKind(kind)
        now = datetime.now(timezone.utc)
        expires_at = now + (expires_in if expires_in is not None else self.ttls[kind])

        claims = {
            "iss": kind.issuer,
            "sub": str(account_id),
            "iat": int(now.timestamp()),
            "exp": int(expires_at.timestamp()),
        }
        token = jwt.encode(claims, self._secret_key, algorithm=self.algorithm)

        self.logger.debug(f"Issued {kind.value} token for account {account_id}")
        return token

    def issue_pair(self, account_id: int) -> TokenPair:
        """Mint the access/refresh pair handed out at login"""
        return TokenPair(
            access_token=self.issue(account_id, TokenKind.ACCESS),
            refresh_token=self.issue(account_id, TokenKind.REFRESH),
        )

    def verify(self, token: str, expected_kind: TokenKind) -> int:
        """
        Verify signature, expiry and kind; return the account id

        Raises:
            TokenMalformedError: Unparseable, bad signature, missing claims
            TokenExpiredError: Token expired
            TokenWrongKindError: Issuer does not match expected_kind
        """
        expected_kind = TokenKind(expected_kind)
        if not token or not isinstance(token, str):
            raise TokenMalformedError("Token must be non-empty string")

        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.algorithm],
                options={"require": list(REQUIRED_TOKEN_CLAIMS)},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError(f"Token expired: {e}")
        except jwt.InvalidSignatureError as e:
            raise TokenMalformedError(f"Invalid signature: {e}")
        except jwt.DecodeError as e:
            raise TokenMalformedError(f"Decode error: {e}")
        except jwt.InvalidTokenError as e:
            raise TokenMalformedError(f"Invalid token: {e}")

        if payload["iss"] != expected_kind.issuer:
            raise TokenWrongKindError(
                f"Expected {expected_kind.value} token, got issuer {payload['iss']!r}"
            )

        try:
            return int(payload["sub"])
        except (TypeError, ValueError) as e:
            raise TokenMalformedError(f"Invalid subject: {e}")

    def revoke(self, token: str) -> None:
        """
        Revoke a refresh token

        Only a valid refresh token can be revoked; anything else is
        rejected before the revocation list is touched.

        Raises:
            TokenMalformedError, TokenExpiredError, TokenWrongKindError
        """
        try:
            account_id = self.verify(token, TokenKind.REFRESH)
        except TokenError as e:
            self.logger.warning(f"Revocation rejected: {e}")
            raise

        self.store.record_revocation(token)
        self.logger.info(f"Refresh token revoked for account {account_id}")

    def refresh_access_token(self, refresh_token: str) -> str:
        """
        Mint a new access token from a valid, unrevoked refresh token

        Raises:
            TokenMalformedError, TokenExpiredError, TokenWrongKindError
            TokenRevokedError: Refresh token is in the revocation list
        """
        account_id = self.verify(refresh_token, TokenKind.REFRESH)
        if self.store.is_revoked(refresh_token):
            self.logger.warning(f"Revoked refresh token used by account {account_id}")
            raise TokenRevokedError("Token revoked")

        access_token = self.issue(account_id, TokenKind.ACCESS)
        self.logger.info(f"Access token refreshed for account {account_id}")
        return access_token
