"""Repository for folder tree queries."""

from typing import List, Optional, Sequence

from loguru import logger
from sqlalchemy import ColumnElement, and_, func, literal, or_, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from folder_contents.config import SORTABLE_COLUMNS, VERSIONED_RESOURCE_TYPES
from folder_contents.models import Node
from folder_contents.repository.repository import Repository
from folder_contents.schemas.query import QuerySpec
from folder_contents.utils.paths import path_prefixes

FOLDER = "folder"


class NodeRepository(Repository[Node]):
    """Read access to folders, their ancestors and their children."""

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]):
        super().__init__(session_maker, Node)

    async def find_folder_by_path(self, path: str) -> Optional[Node]:
        """Find the folder whose canonical path is ``path``."""
        query = select(Node).where(Node.path == path, Node.resource_type == FOLDER)
        result = await self.execute_query(query)
        return result.scalars().one_or_none()

    async def find_folder_by_id(self, folder_id: str) -> Optional[Node]:
        """Find a folder by id. Non-folder nodes are not returned."""
        query = select(Node).where(Node.id == folder_id, Node.resource_type == FOLDER)
        result = await self.execute_query(query)
        return result.scalars().one_or_none()

    async def find_folder_path_by_path(self, path: str) -> List[Node]:
        """Folders at every prefix of ``path``, ordered from the root down.

        Prefixes with no folder are skipped, so a path that no longer
        resolves yields a shorter chain instead of an error.
        """
        prefixes = path_prefixes(path)
        query = select(Node).where(Node.path.in_(prefixes), Node.resource_type == FOLDER)
        result = await self.execute_query(query)
        by_path = {node.path: node for node in result.scalars().all()}
        return [by_path[prefix] for prefix in prefixes if prefix in by_path]

    async def find_path_between(self, ancestor_id: str, descendant_id: str) -> List[Node]:
        """Nodes on the parent path from ``ancestor_id`` down to ``descendant_id``.

        Both ends are included. Like a shortest-path query, a node has no
        path to itself, so identical ends give an empty list. An empty list
        is also returned when ``ancestor_id`` is not above ``descendant_id``.
        """
        if ancestor_id == descendant_id:
            return []

        # walk parent edges upwards from the descendant, stopping at the ancestor
        seed = select(
            Node.id.label("id"),
            Node.parent_id.label("parent_id"),
            literal(0).label("depth"),
        ).where(Node.id == descendant_id)
        walk = seed.cte(name="ancestors", recursive=True)
        step = select(
            Node.id,
            Node.parent_id,
            (walk.c.depth + 1).label("depth"),
        ).join(walk, and_(Node.id == walk.c.parent_id, walk.c.id != ancestor_id))
        walk = walk.union_all(step)

        query = select(Node, walk.c.depth).join(walk, Node.id == walk.c.id).order_by(
            walk.c.depth.desc()
        )
        result = await self.execute_query(query)
        nodes = [row[0] for row in result.all()]

        if not nodes or nodes[0].id != ancestor_id:
            logger.debug(f"No path from {ancestor_id} to {descendant_id}")
            return []
        return nodes

    async def find_root_folder(self, root_path: str) -> Optional[Node]:
        query = select(Node).where(
            Node.path == root_path,
            Node.parent_id.is_(None),
            Node.resource_type == FOLDER,
        )
        result = await self.execute_query(query)
        return result.scalars().one_or_none()

    async def find_folder_path_by_id(self, folder_id: str, root_path: str) -> List[Node]:
        """Folders from the root down to ``folder_id``, via the root-to-node path query."""
        root = await self.find_root_folder(root_path)
        if root is None:
            logger.warning("Tree has no root folder")
            return []
        return await self.find_path_between(root.id, folder_id)

    def _content_filters(self, folder_id: str, spec: QuerySpec) -> List[ColumnElement[bool]]:
        filters: List[ColumnElement[bool]] = [
            Node.parent_id == folder_id,
            Node.resource_type.in_(spec.resource_types),
        ]
        unversioned = Node.resource_type.notin_(VERSIONED_RESOURCE_TYPES)
        if spec.version == "latest":
            filters.append(or_(unversioned, Node.is_latest_version.is_(True)))
        if spec.publication_status != "all":
            filters.append(or_(unversioned, Node.publication_status == spec.publication_status))
        return filters

    async def find_contents(self, folder_id: str, spec: QuerySpec) -> Sequence[Node]:
        """One page of the children of ``folder_id`` matching ``spec``.

        Rows are ordered by the sort criteria in priority order, then by id,
        so the ordering is total and repeatable.
        """
        order_by = []
        for criterion in spec.sort:
            column = getattr(Node, SORTABLE_COLUMNS[criterion.key])
            order_by.append(column.desc() if criterion.descending else column.asc())
        order_by.append(Node.id.asc())

        query = (
            select(Node)
            .where(*self._content_filters(folder_id, spec))
            .order_by(*order_by)
            .limit(spec.limit)
            .offset(spec.offset)
        )
        logger.debug(f"Find contents of folder={folder_id} spec={spec.to_query_params()}")
        result = await self.execute_query(query)
        return result.scalars().all()

    async def count_contents(self, folder_id: str, spec: QuerySpec) -> int:
        """Number of children of ``folder_id`` matching ``spec``, ignoring paging."""
        query = select(func.count(Node.id)).where(*self._content_filters(folder_id, spec))
        result = await self.execute_query(query)
        return result.scalar() or 0
