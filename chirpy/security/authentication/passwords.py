"""
Password Helper - bcrypt hashing for account credentials

Module: security.authentication.passwords
Date: 2026-10-12
Version: 0.1.0

SECURITY NOTES:
- Plaintext is only ever a transient argument, never stored or logged
- Salt is generated per hash by bcrypt.gensalt()
- Default cost factor 10
"""

import bcrypt

from ...core.constants import DEFAULT_BCRYPT_ROUNDS


class PasswordHelper:
    """Salted one-way hashing with a fixed cost factor"""

    def __init__(self, rounds: int = DEFAULT_BCRYPT_ROUNDS):
        if not 4 <= rounds <= 31:
            raise ValueError("bcrypt rounds must be between 4 and 31")
        self.rounds = rounds

    def hash(self, password: str) -> str:
        """
        Hash password using bcrypt

        Args:
            password: Plaintext password

        Returns:
            bcrypt hash (bytes decoded to string)
        """
        salt = bcrypt.gensalt(rounds=self.rounds)
        hashed = bcrypt.hashpw(password.encode(), salt)
        return hashed.decode()

    @staticmethod
    def verify(password: str, password_hash: str) -> bool:
        """
        Verify password against hash

        Returns:
            True if password matches, False otherwise (including a
            hash that is not a valid bcrypt string)
        """
        try:
            return bcrypt.checkpw(password.encode(), password_hash.encode())
        except ValueError:
            return False
