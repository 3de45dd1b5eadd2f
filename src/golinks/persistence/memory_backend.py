"""In-memory link store with the same semantics as the log file."""

from __future__ import annotations

import logging

from golinks.exceptions import ReentrantCallError, StoreClosedError
from golinks.persistence.index import LinkIndex
from golinks.persistence.protocols import IterateCallback
from golinks.persistence.records import validate_entry
from golinks.persistence.rwlock import ReadWriteLock

log = logging.getLogger(__name__)


class MemoryLinkStore:
    """Stores links in a ``LinkIndex`` only; nothing touches disk."""

    def __init__(self, *, fuzzy: bool = False) -> None:
        self._index = LinkIndex(fuzzy=fuzzy)
        self._lock = ReadWriteLock()
        self._closed = False

    def _require_open(self) -> None:
        if self._closed:
            raise StoreClosedError("Memory link store is closed")

    def get(self, name: str) -> tuple[str, bool]:
        with self._lock.read_locked():
            self._require_open()
            return self._index.get(name)

    def set(self, name: str, link: str) -> None:
        validate_entry(name, link)
        if self._lock.held_for_read:
            raise ReentrantCallError("set() called from inside iterate()")
        with self._lock.write_locked():
            self._require_open()
            self._index.apply(name, link)
        log.debug(f"Set {name} in memory store")

    def iterate(self, callback: IterateCallback) -> None:
        with self._lock.read_locked():
            self._require_open()
            for name, link in self._index.live():
                callback(name, link)

    def close(self) -> None:
        if self._lock.held_for_read:
            raise ReentrantCallError("close() called from inside iterate()")
        with self._lock.write_locked():
            self._closed = True
