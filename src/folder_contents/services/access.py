"""Read-capability checks for folders.

The decision itself belongs to the permission store; this module only adapts
it to a yes/no question about one principal and one folder.
"""

from dataclasses import dataclass
from typing import Optional, Protocol

from folder_contents.models import Node
from folder_contents.repository.permission_repository import PermissionRepository


@dataclass(frozen=True)
class Principal:
    """An authenticated caller."""

    user_id: str
    email: Optional[str] = None


class AccessChecker(Protocol):
    async def can_read(self, principal: Principal, folder: Node) -> bool: ...


class PermissionAccessChecker:
    """Grants read access to owners and to users holding a read or write grant."""

    def __init__(self, permission_repository: PermissionRepository):
        self.permission_repository = permission_repository

    async def can_read(self, principal: Principal, folder: Node) -> bool:
        return await self.permission_repository.user_has_read_access(principal.user_id, folder)


class AllowAllAccessChecker:
    """Grants everything. Used by the local admin CLI."""

    async def can_read(self, principal: Principal, folder: Node) -> bool:
        return True
