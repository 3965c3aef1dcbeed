"""Paged listing of a folder's children."""

from typing import List, Tuple

from loguru import logger

from folder_contents.models import Node
from folder_contents.repository.node_repository import NodeRepository
from folder_contents.schemas.folder import ResourceExtract
from folder_contents.schemas.query import QuerySpec


class ContentLister:
    """Fetches one page of a folder's children and the size of the full listing."""

    def __init__(self, node_repository: NodeRepository):
        self.node_repository = node_repository

    async def list(self, folder: Node, spec: QuerySpec) -> Tuple[List[ResourceExtract], int]:
        """List the children of ``folder`` matching ``spec``.

        Args:
            folder: The resolved folder
            spec: Validated query; its types, version and publication filters
                select the children, its sort orders them and its limit and
                offset pick the window

        Returns:
            The window ``[offset, offset + limit)`` of the sorted matches, and
            the number of matches before paging. The window is empty when
            the offset is past the end.
        """
        total = await self.node_repository.count_contents(folder.id, spec)
        if spec.offset >= total:
            # any offset is valid, but the store cannot bind one past its integer range
            logger.debug(f"Offset {spec.offset} is past the end of folder={folder.id} total={total}")
            return [], total

        nodes = await self.node_repository.find_contents(folder.id, spec)
        resources = [ResourceExtract.model_validate(node) for node in nodes]
        logger.debug(
            f"Listed folder={folder.id} total={total} returned={len(resources)} "
            f"offset={spec.offset} limit={spec.limit}"
        )
        return resources, total
