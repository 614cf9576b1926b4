"""
Persistence module - JSON-based data storage

Provides:
- JSONStore: Whole-file JSON document with reader/writer locking
- DocumentStore: Posts, accounts and revoked tokens
- PostRecord, AccountRecord: Stored entities
"""

from .json_store import JSONStore, JSONStoreError, JSONStoreIOError, JSONStoreFormatError
from .records import PostRecord, AccountRecord
from .document_store import (
    DocumentStore,
    DocumentStoreError,
    NotFoundError,
    UnauthorizedError,
    InvalidCredentialsError,
    SortOrder,
    not_deleted,
    authored_by,
)

__all__ = [
    "JSONStore",
    "JSONStoreError",
    "JSONStoreIOError",
    "JSONStoreFormatError",
    "PostRecord",
    "AccountRecord",
    "DocumentStore",
    "DocumentStoreError",
    "NotFoundError",
    "UnauthorizedError",
    "InvalidCredentialsError",
    "SortOrder",
    "not_deleted",
    "authored_by",
]
