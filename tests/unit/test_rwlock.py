"""Tests for the shared/exclusive lock."""

from __future__ import annotations

import threading

from golinks.persistence.rwlock import ReadWriteLock


def test_readers_share_the_lock() -> None:
    lock = ReadWriteLock()
    both_inside = threading.Barrier(2, timeout=5)

    def reader() -> None:
        with lock.read_locked():
            both_inside.wait()

    threads = [threading.Thread(target=reader) for _ in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=5)
    assert not any(t.is_alive() for t in threads)


def test_writer_waits_for_reader() -> None:
    lock = ReadWriteLock()
    order: list[str] = []

    lock.acquire_read()
    writer = threading.Thread(target=lambda: (lock.acquire_write(), order.append("write"), lock.release_write()))
    writer.start()
    writer.join(timeout=0.2)
    assert writer.is_alive()

    order.append("read-done")
    lock.release_read()
    writer.join(timeout=5)
    assert order == ["read-done", "write"]


def test_waiting_writer_blocks_new_readers() -> None:
    lock = ReadWriteLock()
    order: list[str] = []

    lock.acquire_read()
    writer = threading.Thread(target=lambda: (lock.acquire_write(), order.append("write"), lock.release_write()))
    writer.start()
    writer.join(timeout=0.2)

    reader = threading.Thread(target=lambda: (lock.acquire_read(), order.append("read"), lock.release_read()))
    reader.start()
    reader.join(timeout=0.2)
    assert reader.is_alive()

    lock.release_read()
    writer.join(timeout=5)
    reader.join(timeout=5)
    assert order == ["write", "read"]


def test_nested_read_does_not_deadlock_behind_waiting_writer() -> None:
    lock = ReadWriteLock()
    lock.acquire_read()
    writer = threading.Thread(target=lambda: (lock.acquire_write(), lock.release_write()))
    writer.start()
    writer.join(timeout=0.2)

    with lock.read_locked():
        assert lock.held_for_read

    lock.release_read()
    writer.join(timeout=5)
    assert not writer.is_alive()
    assert not lock.held_for_read
