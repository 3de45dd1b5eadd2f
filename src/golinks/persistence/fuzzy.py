"""Fuzzy key normalization.

Two keys are fuzzy-equivalent when their normalized forms match, e.g.
``Go-Links``, ``go_links`` and ``GOLINKS`` all normalize to ``golinks``.
"""

from __future__ import annotations

_STRIPPED = str.maketrans("", "", "-_")


def normalize_key(name: str) -> str:
    """Lower-case ``name`` and drop every hyphen and underscore."""
    return name.lower().translate(_STRIPPED)
