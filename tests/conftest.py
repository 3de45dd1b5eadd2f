"""Shared fixtures for golinks tests."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pytest

from golinks.persistence.file_backend import FileLinkStore


@pytest.fixture
def log_path(tmp_path: Path) -> Path:
    """Path of a link log that does not exist yet."""
    return tmp_path / "links.txt"


@pytest.fixture
def store(log_path: Path) -> Iterator[FileLinkStore]:
    """Exact-match file store, closed after the test."""
    s = FileLinkStore.open(log_path)
    yield s
    s.close()


@pytest.fixture
def fuzzy_store(log_path: Path) -> Iterator[FileLinkStore]:
    """Fuzzy-match file store, closed after the test."""
    s = FileLinkStore.open(log_path, fuzzy=True)
    yield s
    s.close()


@pytest.fixture
def sample_log(log_path: Path) -> Path:
    """Log with overwrites and a tombstone: live set is {c, a}."""
    log_path.write_text(
        "a https://a.example/1\n"
        "b https://b.example/\n"
        "a https://a.example/2\n"
        "c https://c.example/\n"
        "b\n",
        encoding="utf-8",
    )
    return log_path
