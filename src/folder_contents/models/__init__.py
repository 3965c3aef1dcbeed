"""Models package for folder-contents."""

from folder_contents.models.base import Base
from folder_contents.models.node import Node, NodePermission

__all__ = [
    "Base",
    "Node",
    "NodePermission",
]
