"""Common test fixtures."""

from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import AsyncGenerator, Dict, List, Optional

import jwt
import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from folder_contents import db
from folder_contents.config import FolderContentsConfig, ListingConfig
from folder_contents.deps import get_app_config, get_session_maker
from folder_contents.models import Node, NodePermission
from folder_contents.repository import NodeRepository, PermissionRepository
from folder_contents.services.access import PermissionAccessChecker
from folder_contents.services.content_lister import ContentLister
from folder_contents.services.folder_resolver import IdFolderResolver, PathFolderResolver
from folder_contents.services.listing_service import FolderListingService
from folder_contents.services.query_spec_validator import QuerySpecValidator
from folder_contents.utils.paths import ROOT_PATH, join_path

JWT_SECRET = "folder-contents-test-secret-0123456789"

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)

# Number of templates directly under /Shared/Projects, enough for several pages
PROJECT_TEMPLATE_COUNT = 12


@pytest.fixture
def app_config(tmp_path: Path) -> FolderContentsConfig:
    return FolderContentsConfig(
        home=tmp_path,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        jwt_secret=JWT_SECRET,
        listing=ListingConfig(),
    )


@pytest_asyncio.fixture
async def engine_factory(
    app_config: FolderContentsConfig,
) -> AsyncGenerator[tuple[AsyncEngine, async_sessionmaker[AsyncSession]], None]:
    engine, session_maker = db.create_engine_and_session(app_config.resolved_database_url)
    await db.init_schema(engine)
    yield engine, session_maker
    await engine.dispose()


@pytest.fixture
def session_maker(engine_factory) -> async_sessionmaker[AsyncSession]:
    _, session_maker = engine_factory
    return session_maker


@pytest.fixture
def node_repository(session_maker) -> NodeRepository:
    return NodeRepository(session_maker)


@pytest.fixture
def permission_repository(session_maker) -> PermissionRepository:
    return PermissionRepository(session_maker)


class TreeBuilder:
    """Builds nodes with canonical paths and increasing timestamps."""

    def __init__(self):
        self.nodes: Dict[str, Node] = {}
        self.tick = 0

    def add(
        self,
        node_id: str,
        resource_type: str,
        name: str,
        parent: Optional[Node],
        owned_by: str = "alice",
        created_on: Optional[datetime] = None,
        last_updated_on: Optional[datetime] = None,
        **kwargs,
    ) -> Node:
        self.tick += 1
        created_on = created_on or BASE_TIME + timedelta(minutes=self.tick)
        node = Node(
            id=node_id,
            resource_type=resource_type,
            name=name,
            path=ROOT_PATH if parent is None else join_path(parent.path, name),
            parent_id=None if parent is None else parent.id,
            created_on=created_on,
            last_updated_on=last_updated_on or created_on,
            created_by=owned_by,
            last_updated_by=owned_by,
            owned_by=owned_by,
            **kwargs,
        )
        self.nodes[node_id] = node
        return node


@pytest_asyncio.fixture
async def test_tree(node_repository: NodeRepository, permission_repository: PermissionRepository):
    """Sample tree.

    /                                    root
    ├── Private                          owned by bob, no grants
    │   └── secret-template
    └── Shared
        └── Projects
            ├── Alpha                    three levels deep
            │   ├── alpha-instance
            │   └── Beta (empty folder)
            ├── Archive (folder)
            ├── template-00 .. template-11
            ├── element-a (latest, published)
            ├── element-a (old version, draft)
            ├── field-x (latest, draft)
            └── instance-1
    """
    tree = TreeBuilder()
    root = tree.add("root", "folder", ROOT_PATH, None)
    private = tree.add("f-private", "folder", "Private", root, owned_by="bob")
    tree.add("t-secret", "template", "secret-template", private, owned_by="bob")
    shared = tree.add("f-shared", "folder", "Shared", root)
    projects = tree.add("f-projects", "folder", "Projects", shared)
    alpha = tree.add("f-alpha", "folder", "Alpha", projects)
    tree.add("i-alpha", "instance", "alpha-instance", alpha)
    tree.add("f-beta", "folder", "Beta", alpha)
    tree.add("f-archive", "folder", "Archive", projects)

    # created in reverse name order so createdOn and name orders disagree
    for i in reversed(range(PROJECT_TEMPLATE_COUNT)):
        tree.add(
            f"t-{i:02d}",
            "template",
            f"template-{i:02d}",
            projects,
            version="1.0.0",
            publication_status="published",
            is_latest_version=True,
        )

    tree.add(
        "e-a2",
        "element",
        "element-a",
        projects,
        version="2.0.0",
        publication_status="published",
        is_latest_version=True,
    )
    # same name and path segment as e-a2, path must stay unique
    older = tree.add(
        "e-a1",
        "element",
        "element-a",
        projects,
        version="1.0.0",
        publication_status="draft",
        is_latest_version=False,
    )
    older.path = f"{older.path}@1.0.0"
    tree.add(
        "fd-x",
        "field",
        "field-x",
        projects,
        version="0.1.0",
        publication_status="draft",
        is_latest_version=True,
    )
    tree.add("i-1", "instance", "instance-1", projects)

    await node_repository.add_all(list(tree.nodes.values()))
    await permission_repository.add_all(
        [
            NodePermission(node_id="f-projects", user_id="carol", permission="read"),
            NodePermission(node_id="f-alpha", user_id="carol", permission="write"),
        ]
    )
    return tree.nodes


@pytest.fixture
def listing_config(app_config: FolderContentsConfig) -> ListingConfig:
    return app_config.listing


@pytest.fixture
def validator(listing_config: ListingConfig) -> QuerySpecValidator:
    return QuerySpecValidator(listing_config)


@pytest.fixture
def path_resolver(node_repository: NodeRepository) -> PathFolderResolver:
    return PathFolderResolver(node_repository)


@pytest.fixture
def id_resolver(node_repository: NodeRepository) -> IdFolderResolver:
    return IdFolderResolver(node_repository)


@pytest.fixture
def content_lister(node_repository: NodeRepository) -> ContentLister:
    return ContentLister(node_repository)


@pytest.fixture
def listing_service(
    validator, path_resolver, id_resolver, content_lister, permission_repository
) -> FolderListingService:
    return FolderListingService(
        validator=validator,
        path_resolver=path_resolver,
        id_resolver=id_resolver,
        content_lister=content_lister,
        access_checker=PermissionAccessChecker(permission_repository),
    )


def create_test_jwt(user_id: str = "alice", secret: str = JWT_SECRET, **claims) -> str:
    """Create a signed test JWT for ``user_id``."""
    payload = {
        "sub": user_id,
        "email": f"{user_id}@example.com",
        "exp": 9999999999,  # Far future
        **claims,
    }
    return jwt.encode(payload, secret, algorithm="HS256")


def auth_headers(user_id: str = "alice") -> Dict[str, str]:
    return {"Authorization": f"Bearer {create_test_jwt(user_id)}"}


@pytest.fixture
def app(app_config: FolderContentsConfig, session_maker) -> FastAPI:
    """Application wired to the test database and config."""
    from folder_contents.api.app import create_app

    app = create_app()
    app.dependency_overrides[get_app_config] = lambda: app_config
    app.dependency_overrides[get_session_maker] = lambda: session_maker
    return app


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create client using ASGI transport - same as CLI will use."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


def ids(items: List) -> List[str]:
    return [item.id for item in items]
