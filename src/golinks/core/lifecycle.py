"""Service lifecycle: owns the link store and the readiness flag."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from golinks.persistence.protocols import ILinkStore

log = logging.getLogger(__name__)


class ServiceLifecycle:
    """Readiness transitions for the serving layer.

    ``start`` publishes a fully opened store and marks the service ready;
    ``shutdown`` withdraws readiness first, then closes the store once.
    """

    def __init__(self) -> None:
        self._ready = threading.Event()
        self._lock = threading.Lock()
        self._store: ILinkStore | None = None
        self._stopped = False

    @property
    def ready(self) -> bool:
        return self._ready.is_set()

    @property
    def store(self) -> ILinkStore:
        if self._store is None:
            raise RuntimeError("Service has not been started")
        return self._store

    def start(self, store: ILinkStore) -> None:
        with self._lock:
            if self._store is not None or self._stopped:
                raise RuntimeError("Service lifecycle cannot be restarted")
            self._store = store
            self._ready.set()
        log.info("Service ready")

    def shutdown(self) -> None:
        with self._lock:
            self._ready.clear()
            if self._stopped:
                return
            self._stopped = True
            store = self._store
        if store is not None:
            store.close()
        log.info("Service stopped")
