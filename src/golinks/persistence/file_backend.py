"""Log-file link store: append-only records replayed into memory on open."""

from __future__ import annotations

import contextlib
import logging
import os
from enum import Enum
from pathlib import Path
from typing import BinaryIO

from golinks.exceptions import (
    FormatError,
    ReentrantCallError,
    StoreClosedError,
    StoreIOError,
)
from golinks.persistence.index import LinkIndex
from golinks.persistence.protocols import IterateCallback
from golinks.persistence.records import Malformed, encode_record, parse_line, validate_entry
from golinks.persistence.rwlock import ReadWriteLock

log = logging.getLogger(__name__)


class StoreState(str, Enum):
    UNOPENED = "unopened"
    OPEN = "open"
    CLOSED = "closed"


class FileLinkStore:
    """Link store backed by a single append-only text file.

    Every ``set`` appends one ``key link`` (or bare ``key`` tombstone) line
    before the in-memory index changes, so a failed write leaves memory
    untouched. ``open`` replays the file in order; later lines win.

    Reads (``get``, ``iterate``, ``dump``) share the lock, ``set`` and
    ``close`` take it exclusively. ``iterate`` holds the shared lock for the
    whole walk, so its callback may call ``get`` but not ``set``.
    """

    def __init__(self, path: Path | str, *, fuzzy: bool = False, sync_writes: bool = False) -> None:
        self._path = Path(path)
        self._fuzzy = fuzzy
        self._sync_writes = sync_writes
        self._index = LinkIndex(fuzzy=fuzzy)
        self._lock = ReadWriteLock()
        self._file: BinaryIO | None = None
        self._state = StoreState.UNOPENED

    @classmethod
    def open(
        cls,
        path: Path | str,
        *,
        fuzzy: bool = False,
        compact: bool = False,
        sync_writes: bool = False,
    ) -> FileLinkStore:
        """Open (creating if needed) and replay the log at ``path``.

        With ``compact`` the replayed state is dumped over the same file and
        the store is reopened from the compacted log.
        """
        store = cls(path, fuzzy=fuzzy, sync_writes=sync_writes)
        store._replay()
        if not compact:
            return store

        try:
            written = store.dump(store.path)
        finally:
            store.close()
        log.info("Compacted %s to %d records", store.path, written)
        return cls.open(path, fuzzy=fuzzy, compact=False, sync_writes=sync_writes)

    def _replay(self) -> None:
        with self._lock.write_locked():
            # Appends go through an unbuffered handle so a failed write never
            # leaves bytes behind for the next one to flush.
            try:
                handle = open(self._path, "ab", buffering=0)
            except OSError as e:
                raise StoreIOError(f"Cannot open link log {self._path}: {e}") from e

            try:
                with open(self._path, encoding="utf-8") as reader:
                    for line_number, line in enumerate(reader, start=1):
                        record = parse_line(line, line_number)
                        if record is None:
                            continue
                        if isinstance(record, Malformed):
                            raise FormatError(str(self._path), record.line_number, record.line)
                        self._index.apply(record.key, record.link)
            except (OSError, UnicodeDecodeError) as e:
                handle.close()
                raise StoreIOError(f"Cannot read link log {self._path}: {e}") from e
            except FormatError:
                handle.close()
                raise

            self._file = handle
            self._state = StoreState.OPEN

        log.info(
            "Opened link log %s (%d records, fuzzy=%s)",
            self._path,
            self._index.writes,
            self._fuzzy,
        )

    def _require_open(self) -> None:
        if self._state is StoreState.CLOSED:
            raise StoreClosedError(f"Link store {self._path} is closed")
        if self._state is not StoreState.OPEN:
            raise StoreClosedError(f"Link store {self._path} was never opened")

    def _refuse_reentry(self, operation: str) -> None:
        if self._lock.held_for_read:
            raise ReentrantCallError(f"{operation}() called from inside iterate() on {self._path}")

    @property
    def path(self) -> Path:
        return self._path

    @property
    def fuzzy(self) -> bool:
        return self._fuzzy

    @property
    def state(self) -> StoreState:
        return self._state

    def get(self, name: str) -> tuple[str, bool]:
        with self._lock.read_locked():
            self._require_open()
            return self._index.get(name)

    def set(self, name: str, link: str) -> None:
        validate_entry(name, link)
        self._refuse_reentry("set")
        data = encode_record(name, link).encode("utf-8")
        with self._lock.write_locked():
            self._require_open()
            self._append(data)
            self._index.apply(name, link)
        log.debug("Set %s -> %s", name, link or "<deleted>")

    def _append(self, data: bytes) -> None:
        """Append ``data`` to the log, or leave the log exactly as it was."""
        handle = self._file
        assert handle is not None
        try:
            start = handle.seek(0, os.SEEK_END)
        except OSError as e:
            raise StoreIOError(f"Cannot append to link log {self._path}: {e}") from e

        try:
            pending = memoryview(data)
            while pending:
                pending = pending[handle.write(pending):]
            if self._sync_writes:
                os.fsync(handle.fileno())
        except OSError as e:
            try:
                handle.truncate(start)
            except OSError as rollback_error:
                log.error("Cannot roll back partial append to %s: %s", self._path, rollback_error)
            raise StoreIOError(f"Cannot append to link log {self._path}: {e}") from e

    def iterate(self, callback: IterateCallback) -> None:
        with self._lock.read_locked():
            self._require_open()
            for name, link in self._index.live():
                callback(name, link)

    def items(self) -> list[tuple[str, str]]:
        """Snapshot of live ``(name, link)`` pairs in iterate order."""
        result: list[tuple[str, str]] = []
        self.iterate(lambda name, link: result.append((name, link)))
        return result

    def dump(self, path: Path | str) -> int:
        """Write a minimal live-only log to ``path``. Returns the record count.

        Records are written oldest first so replaying the dump yields the
        same last-write-wins result. In fuzzy mode a tombstone follows for
        every alias a delete removed while an equivalent name stayed live,
        so the dump replays to the same lookups.

        The dump goes to a sibling ``.tmp`` file that replaces ``path`` only
        once fully written; a failure leaves ``path`` untouched. Dumping over
        the live log moves later appends onto the new file.
        """
        target = Path(path)
        over_live_log = target.resolve() == self._path.resolve()
        if over_live_log:
            self._refuse_reentry("dump")

        lines: list[str] = []
        with self._lock.read_locked():
            self.iterate(lambda name, link: lines.append(encode_record(name, link)))
            stale_aliases = self._index.stale_aliases()
        lines.reverse()
        written = len(lines)
        lines.extend(encode_record(alias, "") for alias in stale_aliases)

        scratch = target.with_name(target.name + ".tmp")
        try:
            with open(scratch, "wb") as out:
                out.write("".join(lines).encode("utf-8"))
                out.flush()
                if self._sync_writes:
                    os.fsync(out.fileno())
            os.replace(scratch, target)
        except OSError as e:
            with contextlib.suppress(OSError):
                scratch.unlink()
            raise StoreIOError(f"Cannot write dump {target}: {e}") from e

        if over_live_log:
            self._reattach()
        log.info("Dumped %d live links from %s to %s", written, self._path, target)
        return written

    def _reattach(self) -> None:
        """Reopen the append handle on the file now at the live path."""
        with self._lock.write_locked():
            if self._state is not StoreState.OPEN:
                return
            try:
                handle = open(self._path, "ab", buffering=0)
            except OSError as e:
                raise StoreIOError(f"Cannot reopen link log {self._path}: {e}") from e
            stale, self._file = self._file, handle
            if stale is not None:
                try:
                    stale.close()
                except OSError as e:
                    log.warning("Cannot close replaced link log handle for %s: %s", self._path, e)

    def close(self) -> None:
        self._refuse_reentry("close")
        with self._lock.write_locked():
            if self._state is StoreState.CLOSED:
                return
            handle, self._file = self._file, None
            self._state = StoreState.CLOSED
            if handle is None:
                return
            try:
                handle.close()
            except OSError as e:
                raise StoreIOError(f"Cannot close link log {self._path}: {e}") from e
        log.info("Closed link log %s", self._path)

    def __enter__(self) -> FileLinkStore:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __len__(self) -> int:
        with self._lock.read_locked():
            self._require_open()
            return len(self._index)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.get(name)[1]

    def __repr__(self) -> str:
        return f"FileLinkStore(path={str(self._path)!r}, fuzzy={self._fuzzy}, state={self._state.value})"
