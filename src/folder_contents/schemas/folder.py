"""Schemas for folder content listings."""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Serializes with camelCase keys and reads from ORM attributes."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class FolderNode(CamelModel):
    """A folder in the ancestor chain of a listing."""

    id: str
    name: str
    path: str
    parent_id: Optional[str] = None
    description: Optional[str] = None
    created_on: Optional[datetime] = None
    last_updated_on: Optional[datetime] = None
    owned_by: Optional[str] = None


class ResourceExtract(CamelModel):
    """Lightweight projection of a child node. Never carries resource content."""

    id: str
    resource_type: str
    name: str
    path: str
    description: Optional[str] = None
    created_on: Optional[datetime] = None
    last_updated_on: Optional[datetime] = None
    created_by: Optional[str] = None
    last_updated_by: Optional[str] = None
    owned_by: Optional[str] = None
    version: Optional[str] = None
    publication_status: Optional[str] = None
    is_latest_version: Optional[bool] = None


class ListingRequestEcho(CamelModel):
    """The canonical query a listing was produced for."""

    resource_types: List[str]
    sort: List[str]
    limit: int
    offset: int
    version: str
    publication_status: str


class FolderContentsResponse(CamelModel):
    """One page of folder contents with its breadcrumb and paging links."""

    request: ListingRequestEcho
    total_count: int
    current_offset: int
    resources: List[ResourceExtract]
    path_info: List[FolderNode]
    paging: Dict[str, str]
