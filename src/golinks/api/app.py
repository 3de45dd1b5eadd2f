"""FastAPI application with lifespan management."""

from __future__ import annotations

import importlib.metadata
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import Depends, FastAPI

from golinks.api.auth import require_auth
from golinks.api.middleware.error_handler import register_error_handlers
from golinks.api.routes import health, links
from golinks.core.config import AppSettings
from golinks.core.lifecycle import ServiceLifecycle
from golinks.core.logging_config import setup_logging
from golinks.core.startup_checks import validate_settings
from golinks.persistence import ILinkStore, open_store


def _get_version() -> str:
    """Read package version from installed metadata, with dev fallback."""
    try:
        return importlib.metadata.version("golinks")
    except importlib.metadata.PackageNotFoundError:
        return "0.0.0-dev"


def create_app(
    settings: AppSettings | None = None,
    store: ILinkStore | None = None,
    *,
    configure_logging: bool = True,
) -> FastAPI:
    """Build the app. ``store`` bypasses opening the configured backend."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        app_settings = settings or AppSettings()
        validate_settings(app_settings)
        if configure_logging:
            setup_logging(app_settings.observability)

        lifecycle = ServiceLifecycle()
        lifecycle.start(store if store is not None else open_store(app_settings.store))

        app.state.settings = app_settings
        app.state.lifecycle = lifecycle
        try:
            yield
        finally:
            lifecycle.shutdown()

    app = FastAPI(
        title="golinks",
        description="Name to link redirects",
        version=_get_version(),
        lifespan=lifespan,
    )
    register_error_handlers(app)

    # The catch-all name routes must be registered last
    app.include_router(health.router)
    app.include_router(links.api_router, prefix="/api", dependencies=[Depends(require_auth)])
    app.include_router(links.router)
    return app


app = create_app()
