"""Link endpoints: redirect, list, create, update and delete.

Handlers are plain ``def`` so the blocking store calls run in the
threadpool rather than on the event loop.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import RedirectResponse
from pydantic import BaseModel

from golinks.api.auth import require_auth
from golinks.services.link_service import LinkService, is_valid_name

router = APIRouter(tags=["links"])
api_router = APIRouter(tags=["links"])


class LinkResponse(BaseModel):
    """A single name/link pair."""

    name: str
    link: str


class LinkListResponse(BaseModel):
    """All live links, most recently written first."""

    links: list[LinkResponse]
    count: int


def get_link_service(request: Request) -> LinkService:
    return LinkService(request.app.state.lifecycle.store)


def valid_name(name: str) -> str:
    if not is_valid_name(name):
        raise HTTPException(status_code=400, detail=f"Invalid link name: {name!r}")
    return name


def _host(request: Request) -> str:
    return request.headers.get("host") or request.url.netloc


@api_router.get("/links", response_model=LinkListResponse)
def list_links(service: LinkService = Depends(get_link_service)) -> LinkListResponse:
    links = [LinkResponse(name=name, link=link) for name, link in service.list_links()]
    return LinkListResponse(links=links, count=len(links))


@router.get("/{name:path}")
def follow_link(
    name: str = Depends(valid_name),
    service: LinkService = Depends(get_link_service),
) -> RedirectResponse:
    """Redirect to the stored link, 404 when the name is unknown."""
    return RedirectResponse(service.resolve(name), status_code=302)


@router.post(
    "/{name:path}",
    response_model=LinkResponse,
    status_code=201,
    dependencies=[Depends(require_auth)],
)
def create_link(
    request: Request,
    name: str = Depends(valid_name),
    link: str = Query("", description="Absolute URL or the name of another link"),
    service: LinkService = Depends(get_link_service),
) -> LinkResponse:
    """Create or overwrite a link. An empty ``link`` deletes the name."""
    stored = service.create(name, link, _host(request))
    return LinkResponse(name=name, link=stored)


@router.put(
    "/{name:path}",
    response_model=LinkResponse,
    dependencies=[Depends(require_auth)],
)
def update_link(
    request: Request,
    name: str = Depends(valid_name),
    link: str = Query("", description="Absolute URL or the name of another link"),
    service: LinkService = Depends(get_link_service),
) -> LinkResponse:
    """Replace an existing link; 404 if the name has no live link."""
    stored = service.create(name, link, _host(request), update=True)
    return LinkResponse(name=name, link=stored)


@router.delete("/{name:path}", status_code=204, dependencies=[Depends(require_auth)])
def delete_link(
    name: str = Depends(valid_name),
    service: LinkService = Depends(get_link_service),
) -> None:
    service.delete(name)
