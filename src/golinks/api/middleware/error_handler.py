"""Global exception handlers mapping domain exceptions to HTTP responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from golinks.exceptions import (
    GoLinksError,
    InvalidLinkError,
    InvalidRecordError,
    LinkNotFoundError,
    StoreClosedError,
    StoreIOError,
)

log = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register exception-to-HTTP-status mappings."""

    @app.exception_handler(LinkNotFoundError)
    async def handle_not_found(request: Request, exc: LinkNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"error": str(exc), "type": "not_found"})

    @app.exception_handler(InvalidLinkError)
    async def handle_invalid_link(request: Request, exc: InvalidLinkError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": str(exc), "type": "invalid_link"})

    @app.exception_handler(InvalidRecordError)
    async def handle_invalid_record(request: Request, exc: InvalidRecordError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": str(exc), "type": "invalid_record"})

    @app.exception_handler(StoreClosedError)
    async def handle_closed(request: Request, exc: StoreClosedError) -> JSONResponse:
        return JSONResponse(status_code=503, content={"error": str(exc), "type": "store_closed"})

    @app.exception_handler(StoreIOError)
    async def handle_io_error(request: Request, exc: StoreIOError) -> JSONResponse:
        log.error("Link store I/O failure: %s", exc)
        return JSONResponse(status_code=500, content={"error": str(exc), "type": "store_io_error"})

    @app.exception_handler(GoLinksError)
    async def handle_generic_error(request: Request, exc: GoLinksError) -> JSONResponse:
        return JSONResponse(status_code=500, content={"error": str(exc), "type": "golinks_error"})
