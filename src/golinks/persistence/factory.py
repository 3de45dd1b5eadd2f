"""Build the configured link store backend."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from golinks.persistence.file_backend import FileLinkStore
from golinks.persistence.memory_backend import MemoryLinkStore

if TYPE_CHECKING:
    from golinks.core.config import StoreConfig
    from golinks.persistence.protocols import ILinkStore

log = logging.getLogger(__name__)


def open_store(config: StoreConfig) -> ILinkStore:
    """Open the backend named by ``config.backend``."""
    if config.backend == "memory":
        log.info("Using in-memory link store; links are lost on shutdown")
        return MemoryLinkStore(fuzzy=config.fuzzy)

    return FileLinkStore.open(
        config.path,
        fuzzy=config.fuzzy,
        compact=config.compact_on_open,
        sync_writes=config.sync_writes,
    )
