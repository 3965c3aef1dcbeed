"""Folder content listing: ties validation, resolution, access, listing and paging together."""

from typing import Dict, List, Optional, Sequence

from loguru import logger
from starlette.datastructures import URL

from folder_contents.models import Node
from folder_contents.schemas.folder import (
    FolderContentsResponse,
    FolderNode,
    ListingRequestEcho,
    ResourceExtract,
)
from folder_contents.schemas.query import ListingParams, QuerySpec
from folder_contents.services.access import AccessChecker, Principal
from folder_contents.services.content_lister import ContentLister
from folder_contents.services.exceptions import AccessDenied, StoreFailure
from folder_contents.services.folder_resolver import (
    FolderResolver,
    IdFolderResolver,
    PathFolderResolver,
)
from folder_contents.services.query_spec_validator import QuerySpecValidator
from folder_contents.utils.paging import build_paging_links


def assemble_listing_response(
    spec: QuerySpec,
    total: int,
    resources: List[ResourceExtract],
    path_info: Sequence[Node],
    paging: Dict[str, str],
) -> FolderContentsResponse:
    """Compose a listing response. No validation happens here."""
    return FolderContentsResponse(
        request=ListingRequestEcho(
            resource_types=list(spec.resource_types),
            sort=spec.sort_tokens,
            limit=spec.limit,
            offset=spec.offset,
            version=spec.version,
            publication_status=spec.publication_status,
        ),
        total_count=total,
        current_offset=spec.offset,
        resources=resources,
        path_info=[FolderNode.model_validate(node) for node in path_info],
        paging=paging,
    )


class FolderListingService:
    """Lists folder contents for folders addressed by path or by id.

    Both entry points run the same steps in the same order: validate the
    address and query, resolve the folder, check read access, list, then
    build paging links. A folder that does not exist is reported as
    FolderNotFound before access is considered; an existing folder the caller
    cannot read is reported as AccessDenied.
    """

    def __init__(
        self,
        validator: QuerySpecValidator,
        path_resolver: PathFolderResolver,
        id_resolver: IdFolderResolver,
        content_lister: ContentLister,
        access_checker: AccessChecker,
    ):
        self.validator = validator
        self.path_resolver = path_resolver
        self.id_resolver = id_resolver
        self.content_lister = content_lister
        self.access_checker = access_checker

    async def list_by_path(
        self,
        principal: Principal,
        path: Optional[str],
        params: ListingParams,
        endpoint_url: str,
    ) -> FolderContentsResponse:
        """List the folder at canonical ``path``.

        Args:
            principal: The authenticated caller
            path: Canonical folder path
            params: Raw query parameters
            endpoint_url: Absolute URL of the endpoint, used for paging links
        """
        return await self._list(self.path_resolver, principal, path, params, endpoint_url)

    async def list_by_id(
        self,
        principal: Principal,
        folder_id: Optional[str],
        params: ListingParams,
        endpoint_url: str,
    ) -> FolderContentsResponse:
        """List the folder with id ``folder_id``."""
        return await self._list(self.id_resolver, principal, folder_id, params, endpoint_url)

    async def _list(
        self,
        resolver: FolderResolver,
        principal: Principal,
        raw_address: Optional[str],
        params: ListingParams,
        endpoint_url: str,
    ) -> FolderContentsResponse:
        # all input is validated before the store is touched
        address = resolver.canonical_address(raw_address)
        spec = self.validator.parse(
            params.resource_types,
            params.sort,
            params.limit,
            params.offset,
            params.version,
            params.publication_status,
        )

        log = logger.bind(address=address, user=principal.user_id, query=spec.to_query_params())
        log.info(f"Listing folder contents by {resolver.address_kind}={address}")

        try:
            resolved = await resolver.resolve(address)

            if not await self.access_checker.can_read(principal, resolved.folder):
                log.warning(f"Read access denied to folder {resolved.folder.id}")
                raise AccessDenied(resolved.folder.id)

            resources, total = await self.content_lister.list(resolved.folder, spec)
        except StoreFailure:
            log.exception(
                f"Store failure while listing folder {address} with limit={spec.limit} "
                f"offset={spec.offset}"
            )
            raise

        base_url = self.listing_base_url(resolver, address, spec, endpoint_url)
        paging = build_paging_links(base_url, total, spec.limit, spec.offset)

        return assemble_listing_response(spec, total, resources, resolved.path_info, paging)

    @staticmethod
    def listing_base_url(
        resolver: FolderResolver, address: str, spec: QuerySpec, endpoint_url: str
    ) -> str:
        """Endpoint URL carrying the canonical query, without paging parameters."""
        params = {}
        if resolver.address_kind == "path":
            params["path"] = address
        params.update(spec.to_query_params())
        return str(URL(endpoint_url).replace_query_params(**params))
