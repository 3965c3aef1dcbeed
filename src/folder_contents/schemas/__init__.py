"""Request and response schemas."""

from folder_contents.schemas.folder import (
    FolderContentsResponse,
    FolderNode,
    ListingRequestEcho,
    ResourceExtract,
)
from folder_contents.schemas.query import ListingParams, QuerySpec, SortCriterion

__all__ = [
    "FolderContentsResponse",
    "FolderNode",
    "ListingParams",
    "ListingRequestEcho",
    "QuerySpec",
    "ResourceExtract",
    "SortCriterion",
]
