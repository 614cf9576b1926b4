"""
Configuration Tests

Module: tests.test_config
Date: 2026-10-18
Version: 0.2.0
"""

import os
import shutil
import tempfile
import unittest
from datetime import timedelta
from unittest import mock

from chirpy.core.config import ChirpyConfig, ConfigError
from chirpy.security.authentication.token_authority import TokenKind

SECRET = "test-secret-key-at-least-32-characters-long!!!!"


class TestChirpyConfig(unittest.TestCase):
    """Test suite for ChirpyConfig"""

    def setUp(self):
        self.test_dir = tempfile.mkdtemp()

    def tearDown(self):
        if os.path.exists(self.test_dir):
            shutil.rmtree(self.test_dir)

    def test_defaults(self):
        config = ChirpyConfig.from_env({"JWT_SECRET": SECRET})

        self.assertEqual(config.jwt_secret, SECRET)
        self.assertEqual(config.db_path, "chirps.json")
        self.assertEqual(config.effective_db_path, "chirps.json")
        self.assertEqual(config.bcrypt_rounds, 10)
        self.assertEqual(config.access_ttl, timedelta(hours=1))
        self.assertEqual(config.refresh_ttl, timedelta(hours=1440))

    def test_missing_secret(self):
        with self.assertRaises(ConfigError):
            ChirpyConfig.from_env({})

    def test_short_secret(self):
        with self.assertRaises(ConfigError):
            ChirpyConfig.from_env({"JWT_SECRET": "short"})

    def test_overrides(self):
        config = ChirpyConfig.from_env({
            "JWT_SECRET": SECRET,
            "CHIRPY_DB_PATH": "/tmp/a.json",
            "CHIRPY_BCRYPT_ROUNDS": "4",
            "CHIRPY_ACCESS_TTL_SECONDS": "60",
            "CHIRPY_REFRESH_TTL_SECONDS": "120",
        })

        self.assertEqual(config.db_path, "/tmp/a.json")
        self.assertEqual(config.bcrypt_rounds, 4)
        self.assertEqual(config.access_ttl, timedelta(seconds=60))
        self.assertEqual(config.refresh_ttl, timedelta(seconds=120))

    def test_invalid_integer(self):
        with self.assertRaises(ConfigError):
            ChirpyConfig.from_env({
                "JWT_SECRET": SECRET,
                "CHIRPY_BCRYPT_ROUNDS": "ten",
            })

    def test_debug_uses_debug_path(self):
        config = ChirpyConfig.from_env(
            {"JWT_SECRET": SECRET, "CHIRPY_DEBUG_DB_PATH": "dbg.json"},
            debug=True,
        )
        self.assertEqual(config.effective_db_path, "dbg.json")

    def test_build_store_debug_keeps_data(self):
        """Test opening the debug store does not wipe it"""
        path = os.path.join(self.test_dir, "debug.json")
        env = {
            "JWT_SECRET": SECRET,
            "CHIRPY_DEBUG_DB_PATH": path,
            "CHIRPY_BCRYPT_ROUNDS": "4",
        }
        store = ChirpyConfig.from_env(env, debug=True).build_store()
        store.create_post("hello", 1)

        again = ChirpyConfig.from_env(env, debug=True).build_store()
        self.assertEqual(len(again.list_posts()), 1)

        wiped = ChirpyConfig.from_env(env, debug=True).build_store(reset=True)
        self.assertEqual(wiped.list_posts(), [])

    def test_build_store_keeps_data(self):
        path = os.path.join(self.test_dir, "chirps.json")
        env = {"JWT_SECRET": SECRET, "CHIRPY_DB_PATH": path}
        ChirpyConfig.from_env(env).build_store().create_post("hello", 1)

        again = ChirpyConfig.from_env(env).build_store()

        self.assertEqual(len(again.list_posts()), 1)

    def test_dotenv_read_from_working_directory(self):
        """Test a .env file in the current directory is picked up"""
        with open(os.path.join(self.test_dir, ".env"), "w", encoding="utf-8") as f:
            f.write(f"JWT_SECRET={SECRET}\nCHIRPY_DB_PATH=from-dotenv.json\n")

        cwd = os.getcwd()
        os.chdir(self.test_dir)
        try:
            with mock.patch.dict(os.environ, {}, clear=True):
                config = ChirpyConfig.from_env()
        finally:
            os.chdir(cwd)

        self.assertEqual(config.jwt_secret, SECRET)
        self.assertEqual(config.db_path, "from-dotenv.json")

    def test_build_token_authority(self):
        env = {
            "JWT_SECRET": SECRET,
            "CHIRPY_DB_PATH": os.path.join(self.test_dir, "chirps.json"),
            "CHIRPY_ACCESS_TTL_SECONDS": "30",
        }
        config = ChirpyConfig.from_env(env)
        authority = config.build_token_authority(config.build_store())

        self.assertEqual(authority.ttls[TokenKind.ACCESS], timedelta(seconds=30))
        token = authority.issue(1, TokenKind.ACCESS)
        self.assertEqual(authority.verify(token, TokenKind.ACCESS), 1)


if __name__ == "__main__":
    unittest.main()
