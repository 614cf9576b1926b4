"""
Document Store - Posts, accounts and revoked tokens in one JSON file

Module: persistence.document_store
Date: 2026-10-18
Version: 0.2.0

CHANGELOG:
[2026-10-18 v0.2.0] Whole critical section for mutations
  - Every mutation runs load/compute/save under the write lock
  - Ids assigned as max(existing) + 1
  - upgrade_account() on an unknown id raises NotFoundError

[2026-10-12 v0.1.0] Initial implementation
  - Post CRUD with soft delete
  - Account registration/authentication with bcrypt hashes
  - Token revocation list

ARCHITECTURE:
DocumentStore provides:
  - CRUD over three collections: chirps, users, revoked_tokens
  - Filtered, sorted, materialized post listings
  - Ownership check on post deletion
  - Credential check on authentication

The store never consults the token authority; callers resolve the
caller identity before calling in.
"""

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from ..core.constants import (
    COLLECTION_ACCOUNTS,
    COLLECTION_POSTS,
    COLLECTION_REVOKED_TOKENS,
    COLLECTIONS,
    DEFAULT_BCRYPT_ROUNDS,
)
from ..security.authentication.passwords import PasswordHelper
from .json_store import JSONStore
from .records import AccountRecord, PostRecord


class DocumentStoreError(Exception):
    """Base document store error"""
    pass


class NotFoundError(DocumentStoreError):
    """Entity id or email absent"""
    pass


class UnauthorizedError(DocumentStoreError):
    """Ownership check failed"""
    pass


class InvalidCredentialsError(DocumentStoreError):
    """Password does not match"""
    pass


PostFilter = Callable[[PostRecord], bool]


class SortOrder(Enum):
    """Post listing order, by id"""
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def from_param(cls, value: Optional[str]) -> "SortOrder":
        """Anything other than "desc" sorts ascending"""
        if value == cls.DESC.value:
            return cls.DESC
        return cls.ASC


def not_deleted(post: PostRecord) -> bool:
    return not post.deleted


def authored_by(author_id: int) -> PostFilter:
    """Filter matching live posts of a single author"""
    def _filter(post: PostRecord) -> bool:
        return not post.deleted and post.author_id == author_id
    return _filter


def _empty_document() -> Dict[str, Any]:
    return {name: {} for name in COLLECTIONS}


def _next_id(collection: Dict[str, Any]) -> int:
    if not collection:
        return 1
    return max(int(key) for key in collection) + 1


class DocumentStore:
    """
    Durable CRUD over the chirps document.

    All access goes through a JSONStore, which serializes writers
    and lets readers run concurrently. Mutations hold the write lock
    across load, compute and save, so concurrent mutations cannot
    lose each other's updates.
    """

    def __init__(
        self,
        file_path: str,
        bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS,
        reset: bool = False,
    ):
        """
        Initialize document store

        Args:
            file_path: Path to the JSON document
            bcrypt_rounds: Cost factor for password hashes
            reset: Start from an empty document (debug mode)
        """
        self.logger = logging.getLogger("persistence.document_store")
        self.passwords = PasswordHelper(bcrypt_rounds)
        self.store = JSONStore(file_path, _empty_document(), reset=reset)
        self.file_path = self.store.file_path
        self.logger.info(f"DocumentStore initialized (file={self.file_path})")

    # ========================================================================
    # Posts
    # ========================================================================

    def create_post(self, body: str, author_id: int) -> PostRecord:
        """
        Create a post

        Args:
            body: Post text
            author_id: Id of the authoring account

        Returns:
            The stored PostRecord
        """
        with self.store.transaction() as data:
            posts = self._collection(data, COLLECTION_POSTS)
            post = PostRecord(
                id=_next_id(posts),
                author_id=author_id,
                body=body,
                deleted=False,
            )
            posts[str(post.id)] = post.to_dict()

        self.logger.info(f"Post created: {post.id} by account {author_id}")
        return post

    def delete_post(self, post_id: int, requester_id: int) -> None:
        """
        Soft-delete a post owned by the requester

        A missing post is checked as a zero-value post (author 0), so
        the ownership check usually fails first.

        Raises:
            UnauthorizedError: Requester is not the author
            NotFoundError: Post does not exist
        """
        with self.store.transaction() as data:
            posts = self._collection(data, COLLECTION_POSTS)
            raw = posts.get(str(post_id))
            post = PostRecord.from_dict(raw) if raw is not None else PostRecord.empty()

            if post.author_id != requester_id:
                self.logger.warning(
                    f"Account {requester_id} may not delete post {post_id}"
                )
                raise UnauthorizedError(
                    "You do not have permission to perform this action"
                )
            if raw is None:
                raise NotFoundError(f"Post {post_id} not found")

            post.deleted = True
            posts[str(post_id)] = post.to_dict()

        self.logger.info(f"Post deleted: {post_id}")

    def list_posts(
        self,
        filter: PostFilter = not_deleted,
        order: SortOrder = SortOrder.ASC,
    ) -> List[PostRecord]:
        """
        List live posts matching a filter, sorted by id

        Deleted posts are never returned, whatever the filter says.
        """
        data = self.store.load()
        posts = [
            PostRecord.from_dict(raw)
            for raw in self._collection(data, COLLECTION_POSTS).values()
        ]
        selected = [p for p in posts if not p.deleted and filter(p)]
        selected.sort(key=lambda p: p.id, reverse=order is SortOrder.DESC)
        self.logger.debug(f"Listed {len(selected)} of {len(posts)} posts")
        return selected

    def list_posts_by_author(
        self,
        author_id: int,
        order: SortOrder = SortOrder.ASC,
    ) -> List[PostRecord]:
        return self.list_posts(authored_by(author_id), order)

    def get_post(self, post_id: int) -> PostRecord:
        """
        Get a live post by id

        Raises:
            NotFoundError: Post absent or deleted
        """
        data = self.store.load()
        raw = self._collection(data, COLLECTION_POSTS).get(str(post_id))
        if raw is None:
            raise NotFoundError(f"Post {post_id} not found")
        post = PostRecord.from_dict(raw)
        if post.deleted:
            raise NotFoundError(f"Post {post_id} not found")
        return post

    # ========================================================================
    # Accounts
    # ========================================================================

    def create_account(self, email: str, password: str) -> AccountRecord:
        """
        Register an account

        Email uniqueness is not enforced.

        Args:
            email: Account email
            password: Plaintext password (will be hashed)

        Returns:
            The stored AccountRecord
        """
        # bcrypt runs outside the write lock
        password_hash = self.passwords.hash(password)

        with self.store.transaction() as data:
            accounts = self._collection(data, COLLECTION_ACCOUNTS)
            account = AccountRecord(
                id=_next_id(accounts),
                email=email,
                password_hash=password_hash,
                is_upgraded=False,
            )
            accounts[str(account.id)] = account.to_dict()

        self.logger.info(f"Account created: {account.id}")
        return account

    def update_account(self, account_id: int, email: str, password: str) -> AccountRecord:
        """
        Replace email and password of an account

        Raises:
            NotFoundError: Account does not exist
        """
        password_hash = self.passwords.hash(password)

        with self.store.transaction() as data:
            accounts = self._collection(data, COLLECTION_ACCOUNTS)
            raw = accounts.get(str(account_id))
            if raw is None:
                raise NotFoundError(f"Account {account_id} not found")

            account = AccountRecord.from_dict(raw)
            account.email = email
            account.password_hash = password_hash
            accounts[str(account_id)] = account.to_dict()

        self.logger.info(f"Account updated: {account_id}")
        return account

    def authenticate(self, email: str, password: str) -> AccountRecord:
        """
        Check credentials

        Accounts are scanned by ascending id; with duplicate emails the
        oldest account wins.

        Raises:
            NotFoundError: No account has that email
            InvalidCredentialsError: Password does not match
        """
        for account in self._sorted_accounts(self.store.load()):
            if account.email != email:
                continue
            if not self.passwords.verify(password, account.password_hash):
                self.logger.warning(f"Authentication failed for account {account.id}")
                raise InvalidCredentialsError("Invalid password")
            self.logger.info(f"Account authenticated: {account.id}")
            return account

        self.logger.warning("Authentication failed: unknown email")
        raise NotFoundError("User not found")

    def get_account(self, account_id: int) -> AccountRecord:
        """
        Raises:
            NotFoundError: Account does not exist
        """
        data = self.store.load()
        raw = self._collection(data, COLLECTION_ACCOUNTS).get(str(account_id))
        if raw is None:
            raise NotFoundError(f"Account {account_id} not found")
        return AccountRecord.from_dict(raw)

    def list_accounts(self) -> List[AccountRecord]:
        """
        List accounts with ids 1..count in ascending order

        A missing id inside that range yields a zero-value account.
        """
        accounts = self._collection(self.store.load(), COLLECTION_ACCOUNTS)
        result = []
        for account_id in range(1, len(accounts) + 1):
            raw = accounts.get(str(account_id))
            result.append(
                AccountRecord.from_dict(raw) if raw is not None else AccountRecord.empty()
            )
        return result

    def upgrade_account(self, account_id: int) -> None:
        """
        Mark an account as upgraded (idempotent)

        Raises:
            NotFoundError: Account does not exist
        """
        with self.store.transaction() as data:
            accounts = self._collection(data, COLLECTION_ACCOUNTS)
            raw = accounts.get(str(account_id))
            if raw is None:
                raise NotFoundError(f"Account {account_id} not found")

            account = AccountRecord.from_dict(raw)
            account.is_upgraded = True
            accounts[str(account_id)] = account.to_dict()

        self.logger.info(f"Account upgraded: {account_id}")

    # ========================================================================
    # Revoked tokens
    # ========================================================================

    def record_revocation(self, token: str) -> None:
        """Add (or refresh) a token in the revocation list"""
        revoked_at = datetime.now(timezone.utc).isoformat()
        with self.store.transaction() as data:
            revoked = self._collection(data, COLLECTION_REVOKED_TOKENS)
            revoked[token] = revoked_at
        self.logger.info(f"Token revoked ({len(revoked)} in revocation list)")

    def is_revoked(self, token: str) -> bool:
        data = self.store.load()
        return token in self._collection(data, COLLECTION_REVOKED_TOKENS)

    # ========================================================================
    # Helpers
    # ========================================================================

    def reset(self) -> None:
        """Drop every collection"""
        self.store.reset()

    @staticmethod
    def _collection(data: Dict[str, Any], name: str) -> Dict[str, Any]:
        """Return a collection, creating it if the document lacks it"""
        collection = data.get(name)
        if collection is None:
            collection = data[name] = {}
        return collection

    def _sorted_accounts(self, data: Dict[str, Any]) -> List[AccountRecord]:
        accounts = self._collection(data, COLLECTION_ACCOUNTS)
        return [
            AccountRecord.from_dict(accounts[key])
            for key in sorted(accounts, key=int)
        ]
