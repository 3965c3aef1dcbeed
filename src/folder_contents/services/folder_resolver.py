"""Resolution of a folder and its ancestor chain, by path or by id."""

from dataclasses import dataclass, field
from typing import List, Protocol

from loguru import logger

from folder_contents.models import Node
from folder_contents.repository.node_repository import NodeRepository
from folder_contents.services.exceptions import FolderNotFound, MissingFolderId
from folder_contents.utils.paths import ROOT_PATH, validate_path


@dataclass(frozen=True)
class ResolvedFolder:
    """A folder plus its ancestor chain, ordered from the root to the folder itself."""

    folder: Node
    path_info: List[Node] = field(default_factory=list)


class FolderResolver(Protocol):
    address_kind: str

    async def resolve(self, address: str) -> ResolvedFolder: ...

    def canonical_address(self, raw: str) -> str: ...


class PathFolderResolver:
    """Resolves folders addressed by canonical path."""

    address_kind = "path"

    def __init__(self, node_repository: NodeRepository):
        self.node_repository = node_repository

    def canonical_address(self, raw: str) -> str:
        return validate_path(raw)

    async def resolve(self, address: str) -> ResolvedFolder:
        folder = await self.node_repository.find_folder_by_path(address)
        if folder is None:
            raise FolderNotFound(address, by="path")

        # walking the path prefixes reaches the root directly, no special case
        path_info = await self.node_repository.find_folder_path_by_path(address)
        logger.debug(f"Resolved folder path={address} id={folder.id} depth={len(path_info)}")
        return ResolvedFolder(folder=folder, path_info=path_info)


class IdFolderResolver:
    """Resolves folders addressed by id."""

    address_kind = "id"

    def __init__(self, node_repository: NodeRepository, root_path: str = ROOT_PATH):
        self.node_repository = node_repository
        self.root_path = root_path

    def canonical_address(self, raw: str) -> str:
        folder_id = raw.strip() if raw is not None else ""
        if not folder_id:
            raise MissingFolderId()
        return folder_id

    def is_root(self, folder: Node) -> bool:
        # the root is recognised by its name
        return folder.parent_id is None and folder.name == self.root_path

    async def resolve(self, address: str) -> ResolvedFolder:
        folder = await self.node_repository.find_folder_by_id(address)
        if folder is None:
            raise FolderNotFound(address, by="id")

        # The root-to-node path query returns nothing when both ends are the
        # root, so the root's chain is built by hand.
        if self.is_root(folder):
            path_info = [folder]
        else:
            path_info = await self.node_repository.find_folder_path_by_id(
                folder.id, self.root_path
            )
        logger.debug(f"Resolved folder id={address} path={folder.path} depth={len(path_info)}")
        return ResolvedFolder(folder=folder, path_info=path_info)
