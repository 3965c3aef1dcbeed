"""Router for folder content listings."""

from typing import Optional

from fastapi import APIRouter, Query, Request, Response

from folder_contents.deps import (
    CurrentPrincipalDep,
    FolderListingServiceDep,
    ListingParamsDep,
)
from folder_contents.schemas.folder import FolderContentsResponse
from folder_contents.utils.paging import format_link_header

router = APIRouter(prefix="/folders", tags=["folders"])


def _endpoint_url(request: Request) -> str:
    return str(request.url.replace(query=""))


def _set_link_header(response: Response, listing: FolderContentsResponse) -> None:
    if listing.paging:
        response.headers["Link"] = format_link_header(listing.paging)


@router.get("/contents", response_model=FolderContentsResponse)
async def find_folder_contents_by_path(
    request: Request,
    response: Response,
    principal: CurrentPrincipalDep,
    listing_service: FolderListingServiceDep,
    params: ListingParamsDep,
    path: Optional[str] = Query(None, description="Canonical folder path, e.g. /Shared/Projects"),
) -> FolderContentsResponse:
    """List the contents of the folder at a canonical path.

    Returns:
        One page of children, the folder's ancestor chain and paging links.
        The paging links are also sent in the ``Link`` header.
    """
    listing = await listing_service.list_by_path(principal, path, params, _endpoint_url(request))
    _set_link_header(response, listing)
    return listing


@router.get("/{folder_id}/contents", response_model=FolderContentsResponse)
async def find_folder_contents_by_id(
    folder_id: str,
    request: Request,
    response: Response,
    principal: CurrentPrincipalDep,
    listing_service: FolderListingServiceDep,
    params: ListingParamsDep,
) -> FolderContentsResponse:
    """List the contents of the folder with the given id."""
    listing = await listing_service.list_by_id(principal, folder_id, params, _endpoint_url(request))
    _set_link_header(response, listing)
    return listing
