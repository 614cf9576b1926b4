"""
Read/Write Lock - Process-wide shared/exclusive lock

Module: persistence.rw_lock
Date: 2026-10-18
Version: 0.2.0

CHANGELOG:
[2026-10-18 v0.2.0] Writer preference
  - Waiting writers block new readers

[2026-10-12 v0.1.0] Initial implementation
  - Shared read / exclusive write lock on top of threading.Condition
  - Context manager helpers

ARCHITECTURE:
ReadWriteLock provides:
  - Any number of concurrent readers
  - A single writer, exclusive of readers and other writers
  - Context managers: read_locked() and write_locked()
"""

import threading
from contextlib import contextmanager


class ReadWriteLock:
    """
    Classic readers/writer lock with writer preference.

    Not reentrant: a thread holding the write lock must not try to
    acquire the read lock (or the write lock) again.
    """

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0

    def acquire_read(self) -> None:
        with self._cond:
            while self._writer or self._waiting_writers:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            if self._readers <= 0:
                raise RuntimeError("release_read() without matching acquire")
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._waiting_writers += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._waiting_writers -= 1
            self._writer = True

    def release_write(self) -> None:
        with self._cond:
            if not self._writer:
                raise RuntimeError("release_write() without matching acquire")
            self._writer = False
            self._cond.notify_all()

    @contextmanager
    def read_locked(self):
        """Hold the lock in shared mode for the duration of the block"""
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self):
        """Hold the lock in exclusive mode for the duration of the block"""
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()
