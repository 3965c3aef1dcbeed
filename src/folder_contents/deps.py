"""Dependency injection functions for folder-contents services."""

from typing import Annotated, Optional

from fastapi import Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from folder_contents import db
from folder_contents.api.security import BearerTokenAuthenticator
from folder_contents.config import FolderContentsConfig, app_config
from folder_contents.repository import NodeRepository, PermissionRepository
from folder_contents.schemas.query import ListingParams
from folder_contents.services.access import Principal, PermissionAccessChecker
from folder_contents.services.content_lister import ContentLister
from folder_contents.services.folder_resolver import IdFolderResolver, PathFolderResolver
from folder_contents.services.listing_service import FolderListingService
from folder_contents.services.query_spec_validator import QuerySpecValidator

## config


def get_app_config() -> FolderContentsConfig:  # pragma: no cover
    return app_config


AppConfigDep = Annotated[FolderContentsConfig, Depends(get_app_config)]


## sqlalchemy


async def get_session_maker(config: AppConfigDep) -> async_sessionmaker[AsyncSession]:
    """Get the session maker for the configured database."""
    _, session_maker = await db.get_or_create_db(config.resolved_database_url)
    return session_maker


SessionMakerDep = Annotated[async_sessionmaker, Depends(get_session_maker)]


## repositories


async def get_node_repository(session_maker: SessionMakerDep) -> NodeRepository:
    return NodeRepository(session_maker)


NodeRepositoryDep = Annotated[NodeRepository, Depends(get_node_repository)]


async def get_permission_repository(session_maker: SessionMakerDep) -> PermissionRepository:
    return PermissionRepository(session_maker)


PermissionRepositoryDep = Annotated[PermissionRepository, Depends(get_permission_repository)]


## services


def get_query_spec_validator(config: AppConfigDep) -> QuerySpecValidator:
    return QuerySpecValidator(config.listing)


QuerySpecValidatorDep = Annotated[QuerySpecValidator, Depends(get_query_spec_validator)]


async def get_folder_listing_service(
    validator: QuerySpecValidatorDep,
    node_repository: NodeRepositoryDep,
    permission_repository: PermissionRepositoryDep,
) -> FolderListingService:
    return FolderListingService(
        validator=validator,
        path_resolver=PathFolderResolver(node_repository),
        id_resolver=IdFolderResolver(node_repository),
        content_lister=ContentLister(node_repository),
        access_checker=PermissionAccessChecker(permission_repository),
    )


FolderListingServiceDep = Annotated[FolderListingService, Depends(get_folder_listing_service)]


## security


def get_authenticator(config: AppConfigDep) -> BearerTokenAuthenticator:
    return BearerTokenAuthenticator(config.jwt_secret, config.jwt_algorithms)


AuthenticatorDep = Annotated[BearerTokenAuthenticator, Depends(get_authenticator)]


def get_current_principal(request: Request, authenticator: AuthenticatorDep) -> Principal:
    return authenticator.authenticate(request)


CurrentPrincipalDep = Annotated[Principal, Depends(get_current_principal)]


## request parameters


def get_listing_params(
    resource_types: Optional[str] = Query(None),
    sort: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    offset: Optional[str] = Query(None),
    version: Optional[str] = Query(None),
    publication_status: Optional[str] = Query(None),
) -> ListingParams:
    """Collect raw listing parameters; validation happens in the service."""
    return ListingParams(
        resource_types=resource_types,
        sort=sort,
        limit=limit,
        offset=offset,
        version=version,
        publication_status=publication_status,
    )


ListingParamsDep = Annotated[ListingParams, Depends(get_listing_params)]
