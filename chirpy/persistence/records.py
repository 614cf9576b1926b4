"""
Records - Post and account entities stored in the chirps document

Module: persistence.records
Date: 2026-10-18
Version: 0.2.0

CHANGELOG:
[2026-10-18 v0.2.0] Accept legacy "Deleted" key when reading posts

[2026-10-12 v0.1.0] Initial implementation
  - PostRecord and AccountRecord with JSON (de)serialization

ARCHITECTURE:
Records map one-to-one onto the JSON objects stored under the
"chirps" and "users" collections. Field names on disk are kept
stable (password, is_chirpy_red) even where the Python attribute
names differ.
"""

from typing import Any, Dict


class PostRecord:
    """A single chirp"""

    def __init__(
        self,
        id: int,
        author_id: int,
        body: str,
        deleted: bool = False,
    ):
        self.id = id
        self.author_id = author_id
        self.body = body
        self.deleted = deleted

    @classmethod
    def empty(cls) -> "PostRecord":
        """Zero-value post, stands in for a missing entry"""
        return cls(id=0, author_id=0, body="", deleted=False)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON storage"""
        return {
            "author_id": self.author_id,
            "body": self.body,
            "id": self.id,
            "deleted": self.deleted,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PostRecord":
        """Create from dictionary (from JSON)"""
        return cls(
            id=int(data.get("id", 0)),
            author_id=int(data.get("author_id", 0)),
            body=data.get("body", ""),
            deleted=bool(data.get("deleted", data.get("Deleted", False))),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PostRecord):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return (
            f"PostRecord(id={self.id}, author_id={self.author_id}, "
            f"deleted={self.deleted})"
        )


class AccountRecord:
    """A registered user"""

    def __init__(
        self,
        id: int,
        email: str,
        password_hash: str,
        is_upgraded: bool = False,
    ):
        self.id = id
        self.email = email
        self.password_hash = password_hash
        self.is_upgraded = is_upgraded

    @classmethod
    def empty(cls) -> "AccountRecord":
        """Zero-value account, stands in for a missing entry"""
        return cls(id=0, email="", password_hash="", is_upgraded=False)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON storage"""
        return {
            "email": self.email,
            "id": self.id,
            "password": self.password_hash,
            "is_chirpy_red": self.is_upgraded,
        }

    def to_public_dict(self) -> Dict[str, Any]:
        """Same as to_dict() without the password hash"""
        data = self.to_dict()
        del data["password"]
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AccountRecord":
        """Create from dictionary (from JSON)"""
        return cls(
            id=int(data.get("id", 0)),
            email=data.get("email", ""),
            password_hash=data.get("password", ""),
            is_upgraded=bool(data.get("is_chirpy_red", False)),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AccountRecord):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return (
            f"AccountRecord(id={self.id}, email={self.email!r}, "
            f"is_upgraded={self.is_upgraded})"
        )
