"""Exception hierarchy for golinks."""

from __future__ import annotations


class GoLinksError(Exception):
    """Base exception for all golinks errors."""


class FormatError(GoLinksError):
    """A malformed record was found while replaying the link log."""

    def __init__(self, path: str, line_number: int, line: str) -> None:
        super().__init__(f"invalid line {line_number} in {path}: {line!r}")
        self.path = path
        self.line_number = line_number
        self.line = line


class StoreIOError(GoLinksError):
    """Opening, reading, writing or closing the backing file failed."""


class StoreClosedError(GoLinksError):
    """Raised when a closed store is used."""


class ReentrantCallError(GoLinksError):
    """A mutating call was made from inside an ``iterate`` callback."""


class InvalidRecordError(GoLinksError, ValueError):
    """Key or link cannot be represented as a single log record."""


class InvalidLinkError(GoLinksError, ValueError):
    """Raised when a link is not an absolute URL."""


class LinkNotFoundError(GoLinksError, KeyError):
    """Raised when a name has no live link."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else "link not found"
