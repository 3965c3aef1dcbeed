"""Schemas for listing query parameters."""

from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class ListingParams(BaseModel):
    """Raw, unvalidated query parameters of a listing request.

    All fields are optional strings exactly as received. Defaults are applied
    by the validator: sort ``name``, limit 50, offset 0, version ``all``,
    publication_status ``all``. ``resource_types`` has no default and is
    required by the validator.
    """

    resource_types: Optional[str] = Field(
        None, description="Comma separated resource types, e.g. 'folder,template'"
    )
    sort: Optional[str] = Field(
        None, description="Comma separated sort keys, '-' prefix for descending"
    )
    limit: Optional[str] = Field(None, description="Page size, 1 to 100")
    offset: Optional[str] = Field(None, description="Offset of the first item, 0 or more")
    version: Optional[str] = Field(None, description="Version filter: all or latest")
    publication_status: Optional[str] = Field(
        None, description="Publication status filter: all, draft or published"
    )


class SortCriterion(BaseModel):
    """One sort key with its direction."""

    model_config = ConfigDict(frozen=True)

    key: str
    descending: bool = False

    def __str__(self) -> str:
        return f"-{self.key}" if self.descending else self.key


class QuerySpec(BaseModel):
    """Validated, canonical listing query."""

    model_config = ConfigDict(frozen=True)

    resource_types: Tuple[str, ...]
    sort: Tuple[SortCriterion, ...]
    limit: int
    offset: int
    version: str = "all"
    publication_status: str = "all"

    @property
    def sort_tokens(self) -> List[str]:
        return [str(criterion) for criterion in self.sort]

    def to_query_params(self) -> Dict[str, str]:
        """Canonical query parameters identifying this listing, without paging."""
        return {
            "resource_types": ",".join(self.resource_types),
            "version": self.version,
            "publication_status": self.publication_status,
            "sort": ",".join(self.sort_tokens),
        }
