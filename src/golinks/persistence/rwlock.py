"""Reader/writer lock built on ``threading.Condition``."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator


class ReadWriteLock:
    """Shared/exclusive lock.

    Any number of readers may hold the lock together; a writer holds it
    alone. Waiting writers block new readers, except a thread that already
    holds a read lock, which may nest another read without deadlocking.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer: int | None = None
        self._writers_waiting = 0
        self._local = threading.local()

    def _read_depth(self) -> int:
        return getattr(self._local, "depth", 0)

    def acquire_read(self) -> None:
        with self._cond:
            if self._read_depth() == 0:
                while self._writer is not None or self._writers_waiting:
                    self._cond.wait()
            self._readers += 1
            self._local.depth = self._read_depth() + 1

    def release_read(self) -> None:
        with self._cond:
            self._readers -= 1
            self._local.depth = self._read_depth() - 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer is not None or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = threading.get_ident()

    def release_write(self) -> None:
        with self._cond:
            self._writer = None
            self._cond.notify_all()

    @property
    def held_for_read(self) -> bool:
        """True when the calling thread holds a read lock."""
        return self._read_depth() > 0

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()
