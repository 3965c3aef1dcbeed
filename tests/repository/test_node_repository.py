"""Tests for the node repository."""

import pytest

from conftest import PROJECT_TEMPLATE_COUNT, ids
from folder_contents.repository.node_repository import NodeRepository
from folder_contents.schemas.query import QuerySpec, SortCriterion
from folder_contents.utils.paths import ROOT_PATH

ALL_TYPES = ("folder", "field", "element", "template", "instance")


def spec(**overrides) -> QuerySpec:
    values = dict(
        resource_types=ALL_TYPES,
        sort=(SortCriterion(key="name"),),
        limit=50,
        offset=0,
    )
    values.update(overrides)
    return QuerySpec(**values)


@pytest.mark.asyncio
async def test_find_folder_empty(node_repository: NodeRepository):
    assert await node_repository.find_folder_by_path(ROOT_PATH) is None
    assert await node_repository.find_folder_by_id("root") is None


@pytest.mark.asyncio
async def test_find_folder(node_repository: NodeRepository, test_tree):
    folder = await node_repository.find_folder_by_path("/Shared/Projects")
    assert folder is not None
    assert folder.id == "f-projects"

    folder = await node_repository.find_folder_by_id("f-alpha")
    assert folder is not None
    assert folder.path == "/Shared/Projects/Alpha"

    root = await node_repository.find_root_folder(ROOT_PATH)
    assert root is not None
    assert root.id == "root"


@pytest.mark.asyncio
async def test_find_folder_ignores_resources(node_repository: NodeRepository, test_tree):
    # t-00 exists but is a template, not a folder
    assert await node_repository.find_folder_by_id("t-00") is None
    assert await node_repository.find_folder_by_path("/Shared/Projects/template-00") is None


@pytest.mark.asyncio
async def test_find_folder_is_case_sensitive(node_repository: NodeRepository, test_tree):
    assert await node_repository.find_folder_by_path("/shared/projects") is None


@pytest.mark.asyncio
async def test_find_folder_path_by_path(node_repository: NodeRepository, test_tree):
    chain = await node_repository.find_folder_path_by_path("/Shared/Projects/Alpha")
    assert ids(chain) == ["root", "f-shared", "f-projects", "f-alpha"]

    chain = await node_repository.find_folder_path_by_path(ROOT_PATH)
    assert ids(chain) == ["root"]


@pytest.mark.asyncio
async def test_find_path_between(node_repository: NodeRepository, test_tree):
    chain = await node_repository.find_path_between("root", "f-alpha")
    assert ids(chain) == ["root", "f-shared", "f-projects", "f-alpha"]

    chain = await node_repository.find_path_between("f-shared", "f-alpha")
    assert ids(chain) == ["f-shared", "f-projects", "f-alpha"]


@pytest.mark.asyncio
async def test_find_path_between_same_node_is_empty(node_repository: NodeRepository, test_tree):
    # a node has no path to itself, which is why the root needs special handling
    assert await node_repository.find_path_between("root", "root") == []
    assert await node_repository.find_folder_path_by_id("root", ROOT_PATH) == []


@pytest.mark.asyncio
async def test_find_path_between_unrelated_nodes(node_repository: NodeRepository, test_tree):
    assert await node_repository.find_path_between("f-private", "f-alpha") == []


@pytest.mark.asyncio
async def test_find_folder_path_by_id(node_repository: NodeRepository, test_tree):
    chain = await node_repository.find_folder_path_by_id("f-projects", ROOT_PATH)
    assert ids(chain) == ["root", "f-shared", "f-projects"]


@pytest.mark.asyncio
async def test_find_contents_by_name(node_repository: NodeRepository, test_tree):
    nodes = await node_repository.find_contents("f-projects", spec())

    names = [n.name for n in nodes]
    assert names[:6] == ["Alpha", "Archive", "element-a", "element-a", "field-x", "instance-1"]
    assert names[6:] == [f"template-{i:02d}" for i in range(PROJECT_TEMPLATE_COUNT)]
    # identical names fall back to id order
    assert ids(nodes)[2:4] == ["e-a1", "e-a2"]


@pytest.mark.asyncio
async def test_find_contents_type_filter(node_repository: NodeRepository, test_tree):
    nodes = await node_repository.find_contents("f-projects", spec(resource_types=("folder",)))
    assert ids(nodes) == ["f-alpha", "f-archive"]


@pytest.mark.asyncio
async def test_find_contents_only_direct_children(node_repository: NodeRepository, test_tree):
    nodes = await node_repository.find_contents("root", spec())
    assert ids(nodes) == ["f-private", "f-shared"]


@pytest.mark.asyncio
async def test_count_contents(node_repository: NodeRepository, test_tree):
    assert await node_repository.count_contents("f-projects", spec()) == 18
    assert await node_repository.count_contents("f-projects", spec(limit=1, offset=5)) == 18
    assert (
        await node_repository.count_contents("f-projects", spec(resource_types=("template",)))
        == PROJECT_TEMPLATE_COUNT
    )
    assert await node_repository.count_contents("f-beta", spec()) == 0


@pytest.mark.asyncio
async def test_version_filter(node_repository: NodeRepository, test_tree):
    latest = spec(resource_types=("element", "folder"), version="latest")
    nodes = await node_repository.find_contents("f-projects", latest)

    # folders are never filtered by version
    assert ids(nodes) == ["f-alpha", "f-archive", "e-a2"]
    assert await node_repository.count_contents("f-projects", latest) == 3


@pytest.mark.asyncio
async def test_publication_status_filter(node_repository: NodeRepository, test_tree):
    drafts = spec(resource_types=("element", "field", "instance"), publication_status="draft")
    nodes = await node_repository.find_contents("f-projects", drafts)

    # instances are not versioned and always pass
    assert ids(nodes) == ["e-a1", "fd-x", "i-1"]
