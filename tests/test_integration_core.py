"""
Integration Tests - Store and token authority together

Module: tests.test_integration_core
Date: 2026-10-18
Version: 0.2.0

Scenarios Tested:
1. Register, post, foreign delete refused, own delete, empty listing
2. Login, refresh, logout (revoke), refresh refused
3. Concurrent post creation from many threads
4. Concurrent account creation and revocation
"""

import os
import shutil
import tempfile
import unittest
from concurrent.futures import ThreadPoolExecutor

from chirpy.persistence.document_store import (
    DocumentStore,
    NotFoundError,
    UnauthorizedError,
)
from chirpy.security.authentication.token_authority import (
    TokenAuthority,
    TokenKind,
    TokenRevokedError,
)

SECRET = "test-secret-key-at-least-32-characters-long!!!!"


class TestCoreScenarios(unittest.TestCase):

    def setUp(self):
        self.test_dir = tempfile.mkdtemp()
        self.store = DocumentStore(
            os.path.join(self.test_dir, "chirps.json"), bcrypt_rounds=4
        )
        self.authority = TokenAuthority(SECRET, self.store)

    def tearDown(self):
        if os.path.exists(self.test_dir):
            shutil.rmtree(self.test_dir)

    # ========================================================================
    # Scenario 1 : post lifecycle
    # ========================================================================

    def test_scenario_1_post_lifecycle(self):
        account = self.store.create_account("a@b.com", "pw")
        self.assertEqual(account.id, 1)

        post = self.store.create_post("hello", account.id)
        self.assertEqual(post.id, 1)
        self.assertFalse(post.deleted)

        with self.assertRaises(UnauthorizedError):
            self.store.delete_post(1, 2)

        self.store.delete_post(1, 1)

        self.assertEqual(self.store.list_posts(), [])
        with self.assertRaises(NotFoundError):
            self.store.get_post(1)

    def test_scenario_1_caller_resolved_from_access_token(self):
        """Test the identity from an access token gates deletion"""
        author = self.store.create_account("a@b.com", "pw")
        other = self.store.create_account("c@d.com", "pw")
        post = self.store.create_post("hello", author.id)

        other_token = self.authority.issue(other.id, TokenKind.ACCESS)
        with self.assertRaises(UnauthorizedError):
            self.store.delete_post(
                post.id, self.authority.verify(other_token, TokenKind.ACCESS)
            )

        author_token = self.authority.issue(author.id, TokenKind.ACCESS)
        self.store.delete_post(
            post.id, self.authority.verify(author_token, TokenKind.ACCESS)
        )
        self.assertEqual(self.store.list_posts(), [])

    # ========================================================================
    # Scenario 2 : session lifecycle
    # ========================================================================

    def test_scenario_2_login_refresh_logout(self):
        self.store.create_account("a@b.com", "pw")

        account = self.store.authenticate("a@b.com", "pw")
        pair = self.authority.issue_pair(account.id)

        access = self.authority.refresh_access_token(pair.refresh_token)
        self.assertEqual(self.authority.verify(access, TokenKind.ACCESS), account.id)

        self.authority.revoke(pair.refresh_token)
        self.assertTrue(self.store.is_revoked(pair.refresh_token))

        with self.assertRaises(TokenRevokedError):
            self.authority.refresh_access_token(pair.refresh_token)

        # Access tokens already handed out stay valid until they expire
        self.assertEqual(self.authority.verify(access, TokenKind.ACCESS), account.id)

    # ========================================================================
    # Scenario 3 : concurrency
    # ========================================================================

    def test_scenario_3_concurrent_create_post(self):
        """Test concurrent creations never reuse an id"""
        with ThreadPoolExecutor(max_workers=8) as pool:
            posts = list(pool.map(
                lambda i: self.store.create_post(f"post {i}", i % 3 + 1),
                range(40),
            ))

        ids = sorted(p.id for p in posts)
        self.assertEqual(ids, list(range(1, 41)))
        self.assertEqual(len(self.store.list_posts()), 40)

    def test_scenario_4_concurrent_mixed_writes(self):
        """Test writes to different collections do not lose each other"""
        def create(i):
            return self.store.create_account(f"user{i}@example.com", "pw")

        def revoke(i):
            self.store.record_revocation(f"token-{i}")

        with ThreadPoolExecutor(max_workers=8) as pool:
            futures = []
            for i in range(20):
                if i < 10:
                    futures.append(pool.submit(create, i))
                futures.append(pool.submit(revoke, i))
            results = [future.result() for future in futures]

        accounts = [r for r in results if r is not None]

        self.assertEqual(sorted(a.id for a in accounts), list(range(1, 11)))
        self.assertEqual(len(self.store.list_accounts()), 10)
        for i in range(20):
            self.assertTrue(self.store.is_revoked(f"token-{i}"))


if __name__ == "__main__":
    unittest.main()
