"""List folder contents from the command line."""

import asyncio
from typing import Optional

import typer
from loguru import logger

from folder_contents import db
from folder_contents.cli.app import app
from folder_contents.config import FolderContentsConfig, app_config
from folder_contents.repository import NodeRepository
from folder_contents.schemas.folder import FolderContentsResponse
from folder_contents.schemas.query import ListingParams
from folder_contents.services.access import AllowAllAccessChecker, Principal
from folder_contents.services.content_lister import ContentLister
from folder_contents.services.exceptions import FolderContentsError
from folder_contents.services.folder_resolver import IdFolderResolver, PathFolderResolver
from folder_contents.services.listing_service import FolderListingService
from folder_contents.services.query_spec_validator import QuerySpecValidator

CLI_PRINCIPAL = Principal(user_id="cli")
CLI_ENDPOINT_URL = "http://localhost/folders/contents"


async def list_folder(
    config: FolderContentsConfig, path: str, params: ListingParams
) -> FolderContentsResponse:
    """List a folder directly against the database, without access checks."""
    _, session_maker = await db.get_or_create_db(config.resolved_database_url)
    node_repository = NodeRepository(session_maker)
    service = FolderListingService(
        validator=QuerySpecValidator(config.listing),
        path_resolver=PathFolderResolver(node_repository),
        id_resolver=IdFolderResolver(node_repository),
        content_lister=ContentLister(node_repository),
        access_checker=AllowAllAccessChecker(),
    )
    try:
        return await service.list_by_path(CLI_PRINCIPAL, path, params, CLI_ENDPOINT_URL)
    finally:
        await db.shutdown_db()


@app.command()
def ls(
    path: str = typer.Argument(..., help="Canonical folder path, e.g. /Shared"),
    types: str = typer.Option(
        ",".join(app_config.listing.known_resource_types),
        "--types",
        "-t",
        help="Comma separated resource types",
    ),
    sort: Optional[str] = typer.Option(None, help="Sort keys, '-' prefix for descending"),
    limit: Optional[int] = typer.Option(None, help="Page size"),
    offset: Optional[int] = typer.Option(None, help="Offset of the first item"),
):
    """Print one page of a folder's contents as JSON."""
    params = ListingParams(
        resource_types=types,
        sort=sort,
        limit=None if limit is None else str(limit),
        offset=None if offset is None else str(offset),
    )
    try:
        listing = asyncio.run(list_folder(app_config, path, params))
    except FolderContentsError as e:
        logger.debug(f"Listing failed: {e.error_key}")
        typer.echo(f"{e.error_key}: {e.message}", err=True)
        raise typer.Exit(1)

    typer.echo(listing.model_dump_json(by_alias=True, indent=2))
