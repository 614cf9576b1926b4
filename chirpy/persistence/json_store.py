"""
JSON Store - Whole-file JSON document persistence

Module: persistence.json_store
Date: 2026-10-18
Version: 0.2.0

CHANGELOG:
[2026-10-18 v0.2.0] Locked access
  - Temp file named <file>.tmp and removed when a write fails
  - Process-wide ReadWriteLock guarding every file access
  - transaction(): load/modify/save as one exclusive critical section
  - reset() to overwrite an existing file with the default document

[2026-10-12 v0.1.0] Initial implementation
  - Atomic writes (temp file + rename)
  - Automatic directory creation

ARCHITECTURE:
JSONStore provides:
  - Shared reads (load) under the read lock
  - Exclusive read-modify-write (transaction) under the write lock
  - Atomic writes: a reader never observes a partially written file
"""

import copy
import json
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

from .rw_lock import ReadWriteLock


class JSONStoreError(Exception):
    """Base JSON store error"""
    pass


class JSONStoreIOError(JSONStoreError):
    """File I/O error"""
    pass


class JSONStoreFormatError(JSONStoreError):
    """JSON format error"""
    pass


class JSONStore:
    """
    Single JSON document on disk, shared by every thread of the process.

    Handles:
    - File creation and permissions
    - Atomic writes (temp file + rename)
    - Reader/writer locking
    - Automatic directory creation
    """

    def __init__(
        self,
        file_path: str,
        default_data: Optional[Dict[str, Any]] = None,
        reset: bool = False,
    ):
        """
        Initialize JSON store

        Args:
            file_path: Path to JSON file
            default_data: Default data structure if file doesn't exist
            reset: Overwrite an existing file with default_data

        Raises:
            JSONStoreIOError: If the file cannot be created
        """
        self.logger = logging.getLogger(f"persistence.{self.__class__.__name__}")
        self.file_path = Path(file_path)
        self.default_data = default_data or {}
        self.lock = ReadWriteLock()

        try:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise JSONStoreIOError(f"Failed to create {self.file_path.parent}: {e}")

        if reset:
            self.reset()
        elif not self.file_path.exists():
            with self.lock.write_locked():
                self._write_atomic(self.default_data)
            self.logger.info(f"Created new store: {self.file_path}")

    def load(self) -> Dict[str, Any]:
        """
        Load data from JSON file (shared lock)

        Returns:
            Parsed JSON data

        Raises:
            JSONStoreIOError: If file cannot be read
            JSONStoreFormatError: If JSON is invalid
        """
        with self.lock.read_locked():
            return self._read()

    def save(self, data: Dict[str, Any]) -> None:
        """
        Replace the whole document (exclusive lock)

        Raises:
            JSONStoreIOError: If write fails
        """
        with self.lock.write_locked():
            self._write_atomic(data)

    @contextmanager
    def transaction(self) -> Iterator[Dict[str, Any]]:
        """
        Exclusive read-modify-write.

        Yields the freshly loaded document; it is written back when the
        block exits normally. If the block raises, nothing is written.

        Raises:
            JSONStoreIOError: If read or write fails
            JSONStoreFormatError: If JSON is invalid
        """
        with self.lock.write_locked():
            data = self._read()
            yield data
            self._write_atomic(data)

    def reset(self) -> None:
        """Overwrite the file with the default document"""
        with self.lock.write_locked():
            self._write_atomic(self.default_data)
        self.logger.info(f"Store reset: {self.file_path}")

    def _read(self) -> Dict[str, Any]:
        try:
            with open(self.file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError:
            self.logger.warning("File not found, returning default data")
            return copy.deepcopy(self.default_data)
        except json.JSONDecodeError as e:
            raise JSONStoreFormatError(f"Invalid JSON in {self.file_path}: {e}")
        except OSError as e:
            raise JSONStoreIOError(f"Failed to read {self.file_path}: {e}")

        if not isinstance(data, dict):
            raise JSONStoreFormatError(
                f"Expected a JSON object in {self.file_path}, got {type(data).__name__}"
            )
        return data

    def _write_atomic(self, data: Dict[str, Any]) -> None:
        """
        Atomic write: write to temp file, then rename

        Raises:
            JSONStoreIOError: If write fails
        """
        temp_path = self.file_path.with_name(self.file_path.name + '.tmp')
        try:
            with open(temp_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, default=str)

            temp_path.replace(self.file_path)

            # rw-------
            self.file_path.chmod(0o600)

        except (OSError, TypeError, ValueError) as e:
            try:
                temp_path.unlink(missing_ok=True)
            except OSError as cleanup_error:
                self.logger.warning(f"Failed to remove {temp_path}: {cleanup_error}")
            raise JSONStoreIOError(f"Failed to write {self.file_path}: {e}")
