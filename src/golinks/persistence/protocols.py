"""Link store protocol: the contract every backend implements."""

from __future__ import annotations

from typing import Callable, Protocol, runtime_checkable

IterateCallback = Callable[[str, str], None]


@runtime_checkable
class ILinkStore(Protocol):
    """Protocol for link stores (log file, memory, etc.)."""

    def get(self, name: str) -> tuple[str, bool]:
        """Return ``(link, True)`` for a live name, ``("", False)`` otherwise."""
        ...

    def set(self, name: str, link: str) -> None:
        """Write ``link`` for ``name``. An empty link deletes the name."""
        ...

    def iterate(self, callback: IterateCallback) -> None:
        """Call ``callback(name, link)`` once per live name, newest first.

        An exception raised by the callback stops the walk and propagates.
        The callback must not write to the same store.
        """
        ...

    def close(self) -> None:
        """Release the backend's resources."""
        ...
