"""Link operations used by the API and CLI."""

from __future__ import annotations

from golinks.services.link_service import (
    LinkService,
    canonicalize_alias,
    is_valid_name,
    normalize_link,
)

__all__ = ["LinkService", "canonicalize_alias", "is_valid_name", "normalize_link"]
