"""Pluggable link store backends."""

from __future__ import annotations

from golinks.persistence.factory import open_store
from golinks.persistence.file_backend import FileLinkStore, StoreState
from golinks.persistence.fuzzy import normalize_key
from golinks.persistence.memory_backend import MemoryLinkStore
from golinks.persistence.protocols import ILinkStore

__all__ = [
    "ILinkStore",
    "FileLinkStore",
    "MemoryLinkStore",
    "StoreState",
    "normalize_key",
    "open_store",
]
