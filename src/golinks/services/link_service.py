"""Link validation and the name/link operations behind the HTTP routes."""

from __future__ import annotations

import logging
from urllib.parse import urlsplit, urlunsplit

from golinks.exceptions import InvalidLinkError, LinkNotFoundError
from golinks.persistence.protocols import ILinkStore

log = logging.getLogger(__name__)

RESERVED_NAMES = frozenset({"login", "logout", "health", "ready", "api"})

_DEFAULT_PORTS = {"http": 80, "https": 443}


def is_valid_name(name: str) -> bool:
    """A name is a non-reserved, whitespace-free relative URL path."""
    if not name or name in RESERVED_NAMES:
        return False
    if any(ch.isspace() for ch in name):
        return False
    try:
        parts = urlsplit("/" + name)
    except ValueError:
        return False
    return parts.path == "/" + name


def normalize_link(link: str) -> str:
    """Return the canonical form of an absolute URL.

    Scheme and host are lower-cased, default ports dropped and an empty
    path becomes ``/``.
    """
    if any(ch.isspace() for ch in link):
        raise InvalidLinkError(f"Link contains whitespace: {link!r}")
    try:
        parts = urlsplit(link)
        port = parts.port
    except ValueError as e:
        raise InvalidLinkError(f"Invalid link {link!r}: {e}") from e
    if not parts.scheme or not parts.hostname:
        raise InvalidLinkError(f"Link must be an absolute URL: {link!r}")

    scheme = parts.scheme.lower()
    host = parts.hostname.lower()
    if ":" in host:
        host = f"[{host}]"
    if port is not None and port != _DEFAULT_PORTS.get(scheme):
        host = f"{host}:{port}"
    userinfo = parts.netloc.rpartition("@")[0]
    netloc = f"{userinfo}@{host}" if userinfo else host

    return urlunsplit((scheme, netloc, parts.path or "/", parts.query, parts.fragment))


def canonicalize_alias(store: ILinkStore, host: str, link: str) -> str:
    """Turn ``go/name`` or ``name`` into a full URL when ``name`` is a known link."""
    if link.lower().startswith("http"):
        return link
    name = link.removeprefix("go/")
    _, found = store.get(name)
    if found:
        return f"https://{host}/{name}"
    return link


class LinkService:
    """Name/link operations over any ``ILinkStore``."""

    def __init__(self, store: ILinkStore) -> None:
        self._store = store

    def resolve(self, name: str) -> str:
        link, found = self._store.get(name)
        if not found:
            raise LinkNotFoundError(f"No link named {name!r}")
        return link

    def create(self, name: str, link: str, host: str, *, update: bool = False) -> str:
        """Store ``link`` under ``name`` and return the normalized link.

        An empty link deletes ``name``. With ``update`` the name must
        already exist.
        """
        if not link:
            self.delete(name)
            return ""

        normalized = normalize_link(canonicalize_alias(self._store, host, link))
        if update:
            self.resolve(name)

        self._store.set(name, normalized)
        log.info("Stored link %s -> %s", name, normalized)
        return normalized

    def delete(self, name: str) -> None:
        self.resolve(name)
        self._store.set(name, "")
        log.info("Deleted link %s", name)

    def list_links(self) -> list[tuple[str, str]]:
        """All live links, most recently written first."""
        links: list[tuple[str, str]] = []
        self._store.iterate(lambda name, link: links.append((name, link)))
        return links
