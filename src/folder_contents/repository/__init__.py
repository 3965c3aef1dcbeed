from folder_contents.repository.node_repository import NodeRepository
from folder_contents.repository.permission_repository import PermissionRepository

__all__ = [
    "NodeRepository",
    "PermissionRepository",
]
