"""
Reader/writer lock used to guard the in-memory store.

Many redirect handlers may read at once; a shorten handler needs the map to
itself. Writers that are waiting block newly arriving readers, so a steady
stream of redirects cannot starve inserts.
"""

import contextlib
import threading


class ReadWriteLock:
    """Shared/exclusive lock built on a single `threading.Condition`."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0

    # ---- Shared (read) access ---------------------------------------------

    def acquire_read(self) -> None:
        with self._cond:
            while self._writer or self._waiting_writers:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            if self._readers == 0:
                raise RuntimeError("release_read() called without a held read lock")
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    # ---- Exclusive (write) access -----------------------------------------

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
                raise RuntimeError("release_write() called without a held write lock")
            self._writer = False
            self._cond.notify_all()

    # ---- Context managers -------------------------------------------------

    @contextlib.contextmanager
    def read_locked(self):
        """Hold shared access for the duration of the `with` block."""
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextlib.contextmanager
    def write_locked(self):
        """Hold exclusive access for the duration of the `with` block."""
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()

    @property
    def readers(self) -> int:
        """Number of threads currently holding shared access."""
        with self._cond:
            return self._readers

    @property
    def writer_active(self) -> bool:
        with self._cond:
            return self._writer
