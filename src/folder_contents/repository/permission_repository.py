"""Repository for node permission grants."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from folder_contents.models import Node, NodePermission
from folder_contents.repository.repository import Repository

READ_PERMISSIONS = ("read", "write")


class PermissionRepository(Repository[NodePermission]):
    """Repository for NodePermission grants."""

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]):
        super().__init__(session_maker, NodePermission)

    async def user_has_read_access(self, user_id: str, node: Node) -> bool:
        """Whether ``user_id`` owns ``node`` or holds a read or write grant on it."""
        if node.owned_by is not None and node.owned_by == user_id:
            return True

        query = (
            select(NodePermission.id)
            .filter(NodePermission.node_id == node.id)
            .filter(NodePermission.user_id == user_id)
            .filter(NodePermission.permission.in_(READ_PERMISSIONS))
            .limit(1)
        )
        result = await self.execute_query(query)
        return result.scalar() is not None
