"""golinks: name to link redirects backed by an append-only link log.

Usage::

    from golinks import FileLinkStore

    with FileLinkStore.open("links.txt", fuzzy=True) as store:
        store.set("Go-Links", "https://example.com/links")
        store.get("golinks")  # ("https://example.com/links", True)
"""

from __future__ import annotations

from golinks.core.config import AppSettings, StoreConfig
from golinks.exceptions import (
    FormatError,
    GoLinksError,
    InvalidLinkError,
    InvalidRecordError,
    LinkNotFoundError,
    ReentrantCallError,
    StoreClosedError,
    StoreIOError,
)
from golinks.persistence import (
    FileLinkStore,
    ILinkStore,
    MemoryLinkStore,
    normalize_key,
    open_store,
)
from golinks.services import LinkService

__all__ = [
    "AppSettings",
    "StoreConfig",
    "GoLinksError",
    "FormatError",
    "StoreIOError",
    "StoreClosedError",
    "ReentrantCallError",
    "InvalidRecordError",
    "InvalidLinkError",
    "LinkNotFoundError",
    "ILinkStore",
    "FileLinkStore",
    "MemoryLinkStore",
    "LinkService",
    "normalize_key",
    "open_store",
]
