"""Tests for link validation and LinkService."""

from __future__ import annotations

import pytest

from golinks.exceptions import InvalidLinkError, LinkNotFoundError
from golinks.services.link_service import (
    LinkService,
    canonicalize_alias,
    is_valid_name,
    normalize_link,
)
from tests.fakes.recording_store import RecordingLinkStore


class TestIsValidName:
    @pytest.mark.parametrize("name", ["docs", "team/wiki", "Go-Links", "a_b.c"])
    def test_valid(self, name: str) -> None:
        assert is_valid_name(name)

    @pytest.mark.parametrize("name", ["", "login", "logout", "health", "api", "a b", "a?b", "a#b"])
    def test_invalid(self, name: str) -> None:
        assert not is_valid_name(name)


class TestNormalizeLink:
    def test_lowercases_scheme_and_host(self) -> None:
        assert normalize_link("HTTPS://Example.COM/Path") == "https://example.com/Path"

    def test_drops_default_port(self) -> None:
        assert normalize_link("https://example.com:443/a") == "https://example.com/a"
        assert normalize_link("http://example.com:80/a") == "http://example.com/a"

    def test_keeps_other_port(self) -> None:
        assert normalize_link("http://example.com:8080/a") == "http://example.com:8080/a"

    def test_empty_path_becomes_slash(self) -> None:
        assert normalize_link("https://example.com") == "https://example.com/"

    def test_keeps_query_and_fragment(self) -> None:
        assert normalize_link("https://example.com/s?q=1#top") == "https://example.com/s?q=1#top"

    @pytest.mark.parametrize("link", ["example.com/a", "/relative", "docs", "https://", "https://x/ y"])
    def test_rejects_non_absolute(self, link: str) -> None:
        with pytest.raises(InvalidLinkError):
            normalize_link(link)


class TestCanonicalizeAlias:
    def test_known_name_becomes_url(self) -> None:
        store = RecordingLinkStore()
        store.set("docs", "https://docs.example/")
        assert canonicalize_alias(store, "go.example", "go/docs") == "https://go.example/docs"
        assert canonicalize_alias(store, "go.example", "docs") == "https://go.example/docs"

    def test_unknown_name_unchanged(self) -> None:
        assert canonicalize_alias(RecordingLinkStore(), "go.example", "go/nope") == "go/nope"

    def test_url_unchanged(self) -> None:
        assert canonicalize_alias(RecordingLinkStore(), "go.example", "https://a/") == "https://a/"


class TestLinkService:
    def test_create_and_resolve(self) -> None:
        service = LinkService(RecordingLinkStore())
        assert service.create("docs", "HTTPS://Docs.Example", "go") == "https://docs.example/"
        assert service.resolve("docs") == "https://docs.example/"

    def test_resolve_missing(self) -> None:
        with pytest.raises(LinkNotFoundError):
            LinkService(RecordingLinkStore()).resolve("nope")

    def test_update_requires_existing(self) -> None:
        store = RecordingLinkStore()
        with pytest.raises(LinkNotFoundError):
            LinkService(store).create("docs", "https://d/", "go", update=True)
        assert store.sets == []

    def test_update_existing(self) -> None:
        service = LinkService(RecordingLinkStore())
        service.create("docs", "https://d/1", "go")
        service.create("docs", "https://d/2", "go", update=True)
        assert service.resolve("docs") == "https://d/2"

    def test_empty_link_deletes(self) -> None:
        store = RecordingLinkStore()
        service = LinkService(store)
        service.create("docs", "https://d/", "go")
        assert service.create("docs", "", "go") == ""
        assert store.sets[-1] == ("docs", "")

    def test_delete_missing(self) -> None:
        with pytest.raises(LinkNotFoundError):
            LinkService(RecordingLinkStore()).delete("nope")

    def test_alias_to_existing_link(self) -> None:
        service = LinkService(RecordingLinkStore())
        service.create("docs", "https://d/", "go.example")
        assert service.create("manual", "go/docs", "go.example") == "https://go.example/docs"

    def test_invalid_link_not_stored(self) -> None:
        store = RecordingLinkStore()
        with pytest.raises(InvalidLinkError):
            LinkService(store).create("docs", "not a url", "go")
        assert store.sets == []

    def test_list_links_newest_first(self) -> None:
        service = LinkService(RecordingLinkStore())
        service.create("a", "https://a/", "go")
        service.create("b", "https://b/", "go")
        assert service.list_links() == [("b", "https://b/"), ("a", "https://a/")]
