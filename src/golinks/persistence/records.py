"""Log record format: one ``key[ link]`` line per write.

A line with a single field is a tombstone, two fields a live entry, and
anything else is malformed::

    go-links https://example.com/links
    go-links
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from golinks.exceptions import InvalidRecordError

SEPARATOR = " "


@dataclass(frozen=True)
class LiveEntry:
    key: str
    link: str


@dataclass(frozen=True)
class Tombstone:
    key: str

    @property
    def link(self) -> str:
        return ""


@dataclass(frozen=True)
class Malformed:
    line_number: int
    line: str


LogRecord = Union[LiveEntry, Tombstone, Malformed]


def parse_line(line: str, line_number: int) -> LogRecord | None:
    """Parse one raw log line. Returns None for a blank line."""
    text = line.rstrip("\n").rstrip("\r")
    if not text:
        return None

    fields = text.split(SEPARATOR)
    if len(fields) == 1:
        return Tombstone(fields[0])
    if len(fields) == 2 and fields[0]:
        # "key " with an empty link is also a delete
        if not fields[1]:
            return Tombstone(fields[0])
        return LiveEntry(fields[0], fields[1])
    return Malformed(line_number, text)


def encode_record(key: str, link: str) -> str:
    """Encode a write as a log line; an empty link encodes a tombstone."""
    if link:
        return f"{key}{SEPARATOR}{link}\n"
    return f"{key}\n"


def validate_entry(key: str, link: str) -> None:
    """Reject keys and links that would not round-trip through ``parse_line``."""
    if not key:
        raise InvalidRecordError("key must not be empty")
    if any(ch.isspace() for ch in key):
        raise InvalidRecordError(f"key must not contain whitespace: {key!r}")
    if any(ch.isspace() for ch in link):
        raise InvalidRecordError(f"link must not contain whitespace: {link!r}")
    for field, value in (("key", key), ("link", link)):
        try:
            value.encode("utf-8")
        except UnicodeEncodeError as e:
            raise InvalidRecordError(f"{field} is not valid UTF-8 text: {value!r}") from e
