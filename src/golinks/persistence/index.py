"""In-memory link index with write-order tracking."""

from __future__ import annotations

from typing import Iterator

from golinks.persistence.fuzzy import normalize_key


class LinkIndex:
    """Key to link mapping plus the sequence of written keys.

    Tombstoned keys are absent from the mapping. In fuzzy mode every write
    also updates the normalized alias of the key, and lookups fall back to
    that alias when the exact key misses.

    Not thread-safe; the owning store guards it.
    """

    def __init__(self, fuzzy: bool = False) -> None:
        self.fuzzy = fuzzy
        self._links: dict[str, str] = {}
        self._order: list[str] = []

    def get(self, name: str) -> tuple[str, bool]:
        link = self._links.get(name, "")
        if not link and self.fuzzy:
            link = self._links.get(normalize_key(name), "")
        return link, bool(link)

    def apply(self, name: str, link: str) -> None:
        """Record a write of ``link`` to ``name``; an empty link deletes."""
        self._order.append(name)
        if link:
            self._links[name] = link
            if self.fuzzy:
                self._links[normalize_key(name)] = link
        else:
            self._links.pop(name, None)
            if self.fuzzy:
                self._links.pop(normalize_key(name), None)

    def live(self) -> Iterator[tuple[str, str]]:
        """Yield each live name once, most recently written first."""
        seen: set[str] = set()
        for name in reversed(self._order):
            if name in seen:
                continue
            seen.add(name)
            link, found = self.get(name)
            if found:
                yield name, link

    def stale_aliases(self) -> list[str]:
        """Aliases of live names that a delete of an equivalent name removed.

        Replaying only the live entries would bring these back, so a dump
        has to tombstone them. Empty in exact mode.
        """
        if not self.fuzzy:
            return []
        stale: list[str] = []
        seen: set[str] = set()
        for name, _ in self.live():
            alias = normalize_key(name)
            if alias in seen:
                continue
            seen.add(alias)
            # An empty alias has no tombstone line; it replays as a blank line.
            if alias and alias not in self._links:
                stale.append(alias)
        return stale

    @property
    def writes(self) -> int:
        return len(self._order)

    def __len__(self) -> int:
        return sum(1 for _ in self.live())
