"""Tests for iteration order, deduplication and callback errors."""

from __future__ import annotations

from pathlib import Path

import pytest

from golinks.persistence.file_backend import FileLinkStore


def _collect(store: FileLinkStore) -> list[tuple[str, str]]:
    seen: list[tuple[str, str]] = []
    store.iterate(lambda name, link: seen.append((name, link)))
    return seen


class TestIterateOrder:
    def test_most_recent_first_and_deduplicated(self, store: FileLinkStore) -> None:
        store.set("a", "https://x/")
        store.set("b", "https://y/")
        store.set("a", "https://z/")
        assert _collect(store) == [("a", "https://z/"), ("b", "https://y/")]

    def test_tombstoned_keys_are_skipped(self, store: FileLinkStore) -> None:
        store.set("a", "https://x/")
        store.set("b", "https://y/")
        store.set("a", "")
        assert _collect(store) == [("b", "https://y/")]

    def test_recreated_key_moves_to_front(self, store: FileLinkStore) -> None:
        store.set("a", "https://x/")
        store.set("b", "https://y/")
        store.set("a", "")
        store.set("c", "https://w/")
        store.set("a", "https://v/")
        assert _collect(store) == [
            ("a", "https://v/"),
            ("c", "https://w/"),
            ("b", "https://y/"),
        ]

    def test_order_survives_reopen(self, sample_log: Path) -> None:
        with FileLinkStore.open(sample_log) as store:
            assert _collect(store) == [("c", "https://c.example/"), ("a", "https://a.example/2")]

    def test_empty_store(self, store: FileLinkStore) -> None:
        assert _collect(store) == []

    def test_items_matches_iterate(self, sample_log: Path) -> None:
        with FileLinkStore.open(sample_log) as store:
            assert store.items() == _collect(store)


class TestIterateErrors:
    def test_callback_error_stops_walk(self, store: FileLinkStore) -> None:
        for name in ("a", "b", "c"):
            store.set(name, f"https://{name}/")
        visited: list[str] = []

        def callback(name: str, link: str) -> None:
            visited.append(name)
            if name == "b":
                raise LookupError("stop here")

        with pytest.raises(LookupError, match="stop here"):
            store.iterate(callback)
        assert visited == ["c", "b"]

    def test_store_usable_after_callback_error(self, store: FileLinkStore) -> None:
        store.set("a", "https://a/")

        def callback(name: str, link: str) -> None:
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            store.iterate(callback)
        store.set("b", "https://b/")
        assert _collect(store) == [("b", "https://b/"), ("a", "https://a/")]


class TestFuzzyIterate:
    def test_yields_exact_names_once(self, fuzzy_store: FileLinkStore) -> None:
        fuzzy_store.set("Go-Links", "https://go/")
        fuzzy_store.set("docs", "https://docs/")
        fuzzy_store.set("Go-Links", "https://go/2")
        assert _collect(fuzzy_store) == [("Go-Links", "https://go/2"), ("docs", "https://docs/")]

    def test_deleted_name_is_skipped(self, fuzzy_store: FileLinkStore) -> None:
        fuzzy_store.set("Go-Links", "https://go/")
        fuzzy_store.set("go_links", "https://other/")
        fuzzy_store.set("go_links", "")
        assert _collect(fuzzy_store) == [("Go-Links", "https://go/")]
