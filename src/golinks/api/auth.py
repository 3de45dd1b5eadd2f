"""API key authentication for link writes."""

from __future__ import annotations

import hmac
import logging
from typing import TYPE_CHECKING

from fastapi import HTTPException, Request, Security
from fastapi.security import APIKeyHeader

if TYPE_CHECKING:
    from golinks.core.config import AuthConfig

log = logging.getLogger(__name__)

_api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)


async def require_auth(
    request: Request,
    api_key: str | None = Security(_api_key_header),
) -> None:
    """Reject the request unless auth is disabled or a configured key is sent."""
    config: AuthConfig = request.app.state.settings.auth

    if not config.enabled:
        return

    if api_key and any(hmac.compare_digest(api_key, key) for key in config.api_keys):
        return

    log.warning("Rejected unauthenticated %s %s", request.method, request.url.path)
    raise HTTPException(
        status_code=401,
        detail="Authentication required. Provide an X-API-Key header.",
    )
