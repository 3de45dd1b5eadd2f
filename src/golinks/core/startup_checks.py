"""Startup validation: fail-fast on critical misconfigurations."""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from golinks.core.config import AppSettings

log = logging.getLogger(__name__)


def validate_settings(settings: AppSettings) -> None:
    """Validate application settings at startup. Raises ValueError on fatal misconfig."""
    _check_store(settings)
    _check_auth(settings)


def _check_store(settings: AppSettings) -> None:
    """The link log's directory must already exist; the file itself is created on open."""
    store = settings.store
    if store.backend != "file":
        return

    if not str(store.path).strip() or store.path.is_dir():
        raise ValueError(f"GOLINKS_STORE_PATH must name a file, got {str(store.path)!r}.")

    parent = store.path.expanduser().resolve().parent
    if not parent.is_dir():
        raise ValueError(
            f"GOLINKS_STORE_PATH directory {parent} does not exist. "
            "Create it or point GOLINKS_STORE_PATH elsewhere."
        )

    is_container = bool(
        os.environ.get("ECS_CONTAINER_METADATA_URI")
        or os.environ.get("KUBERNETES_SERVICE_HOST")
    )
    if is_container:
        log.warning(
            "GOLINKS_STORE_BACKEND=file in a container environment. "
            "Links are lost on restart unless %s is on a persistent volume.",
            store.path,
        )


def _check_auth(settings: AppSettings) -> None:
    """Reject auth enabled with no keys, since every write would be refused."""
    if settings.auth.enabled and not settings.auth.api_keys:
        raise ValueError(
            "GOLINKS_AUTH_ENABLED=true but GOLINKS_AUTH_API_KEYS is empty. "
            "Set at least one API key or disable auth."
        )
