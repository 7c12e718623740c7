"""WorkspaceService、StructureService 与 DAO 单测。"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from prompt_api.services import (
    AgentUnavailableError,
    StructureService,
    WorkspaceNotFoundError,
    WorkspaceService,
)
from shared.schemas import FileNode

WORKSPACE = {"workspace_id": "ws-1", "name": "demo", "path": "/projects/demo", "ignore_patterns": ["dist"]}


@pytest.fixture
def workspace_dao():
    dao = MagicMock()
    dao.find_by_id = AsyncMock(side_effect=lambda workspace_id: WORKSPACE if workspace_id == "ws-1" else None)
    dao.create = AsyncMock(side_effect=lambda doc: doc)
    dao.update = AsyncMock(return_value=True)
    dao.delete = AsyncMock(return_value=True)
    return dao


@pytest.fixture
def setting_dao():
    dao = MagicMock()
    dao.get_global_ignore_patterns = AsyncMock(return_value=["node_modules", ".git"])
    dao.set_global_ignore_patterns = AsyncMock(side_effect=lambda patterns: patterns)
    return dao


@pytest.mark.asyncio
class TestWorkspaceService:
    """测试 WorkspaceService。"""

    async def test_effective_patterns_are_global_then_workspace(self, workspace_dao, setting_dao):
        service = WorkspaceService(workspace_dao, setting_dao)

        patterns = await service.get_effective_ignore_patterns(WORKSPACE)

        assert patterns == ["node_modules", ".git", "dist"]

    async def test_effective_patterns_without_workspace_patterns(self, workspace_dao, setting_dao):
        service = WorkspaceService(workspace_dao, setting_dao)

        patterns = await service.get_effective_ignore_patterns({"workspace_id": "x", "path": "/p"})

        assert patterns == ["node_modules", ".git"]

    async def test_create_assigns_id_and_timestamps(self, workspace_dao, setting_dao):
        service = WorkspaceService(workspace_dao, setting_dao)

        created = await service.create_workspace("demo", "/projects/demo", ["dist"])

        assert created["workspace_id"]
        assert created["created_at"] == created["updated_at"]
        assert created["ignore_patterns"] == ["dist"]

    async def test_update_drops_unset_fields(self, workspace_dao, setting_dao):
        service = WorkspaceService(workspace_dao, setting_dao)

        await service.update_workspace("ws-1", {"name": "renamed", "path": None})

        workspace_id, data = workspace_dao.update.await_args.args
        assert workspace_id == "ws-1"
        assert data["name"] == "renamed"
        assert "path" not in data
        assert "updated_at" in data

    async def test_update_unknown_raises(self, workspace_dao, setting_dao):
        workspace_dao.update.return_value = False
        service = WorkspaceService(workspace_dao, setting_dao)

        with pytest.raises(WorkspaceNotFoundError):
            await service.update_workspace("nope", {"name": "x"})

    async def test_delete_unknown_raises(self, workspace_dao, setting_dao):
        workspace_dao.delete.return_value = False
        service = WorkspaceService(workspace_dao, setting_dao)

        with pytest.raises(WorkspaceNotFoundError):
            await service.delete_workspace("nope")

    async def test_set_global_patterns_strips_blanks(self, workspace_dao, setting_dao):
        service = WorkspaceService(workspace_dao, setting_dao)

        result = await service.set_global_ignore_patterns([" node_modules ", "", "  ", "*.log"])

        assert result == ["node_modules", "*.log"]


@pytest.mark.asyncio
class TestStructureService:
    """测试 StructureService 的工作区解析与代理检查。"""

    async def test_get_structure_uses_effective_patterns(self, workspace_dao, setting_dao):
        agent = MagicMock()
        agent.check_status = AsyncMock(return_value=True)
        agent.get_structure = AsyncMock(return_value=[FileNode(name="a.txt", path="a.txt", type="file")])
        service = StructureService(WorkspaceService(workspace_dao, setting_dao), agent)

        nodes = await service.get_structure("ws-1")

        assert [n.path for n in nodes] == ["a.txt"]
        agent.get_structure.assert_awaited_once_with("/projects/demo", ["node_modules", ".git", "dist"])

    async def test_unknown_workspace(self, workspace_dao, setting_dao):
        agent = MagicMock()
        agent.check_status = AsyncMock(return_value=True)
        service = StructureService(WorkspaceService(workspace_dao, setting_dao), agent)

        with pytest.raises(WorkspaceNotFoundError):
            await service.get_structure("nope")
        agent.check_status.assert_not_awaited()

    async def test_agent_not_running(self, workspace_dao, setting_dao):
        agent = MagicMock()
        agent.base_url = "http://localhost:4001"
        agent.check_status = AsyncMock(return_value=False)
        agent.read_files = AsyncMock()
        service = StructureService(WorkspaceService(workspace_dao, setting_dao), agent)

        with pytest.raises(AgentUnavailableError, match="http://localhost:4001"):
            await service.read_files("ws-1", ["a.txt"])
        agent.read_files.assert_not_awaited()


@pytest.mark.asyncio
class TestSettingDAO:
    """测试 SettingDAO 的全局忽略模式存取。"""

    async def test_missing_document_returns_empty(self):
        from prompt_api.dao import SettingDAO

        mock_collection = MagicMock()
        mock_collection.find_one = AsyncMock(return_value=None)
        mock_db = MagicMock()
        mock_db.__getitem__ = MagicMock(return_value=mock_collection)

        with patch("prompt_api.dao.setting_dao.get_db", return_value=mock_db):
            assert await SettingDAO().get_global_ignore_patterns() == []

    async def test_set_upserts_single_document(self):
        from prompt_api.dao import SettingDAO

        mock_collection = MagicMock()
        mock_collection.update_one = AsyncMock()
        mock_db = MagicMock()
        mock_db.__getitem__ = MagicMock(return_value=mock_collection)

        with patch("prompt_api.dao.setting_dao.get_db", return_value=mock_db):
            result = await SettingDAO().set_global_ignore_patterns(["dist"])

        assert result == ["dist"]
        mock_collection.update_one.assert_awaited_once_with(
            {"setting_id": "global"},
            {"$set": {"global_ignore_patterns": ["dist"]}},
            upsert=True,
        )


@pytest.mark.asyncio
class TestWorkspaceDAO:
    """测试 WorkspaceDAO 的按 workspace_id 存取。"""

    @staticmethod
    def _mock_db(mock_collection):
        mock_db = MagicMock()
        mock_db.__getitem__ = MagicMock(return_value=mock_collection)
        return mock_db

    async def test_find_by_id_hides_object_id(self):
        from prompt_api.dao import WorkspaceDAO

        mock_collection = MagicMock()
        mock_collection.find_one = AsyncMock(return_value=WORKSPACE)

        with patch("prompt_api.dao.base.get_db", return_value=self._mock_db(mock_collection)):
            result = await WorkspaceDAO().find_by_id("ws-1")

        assert result == WORKSPACE
        mock_collection.find_one.assert_awaited_once_with({"workspace_id": "ws-1"}, {"_id": 0})

    async def test_create_drops_object_id(self):
        from prompt_api.dao import WorkspaceDAO

        async def insert_one(doc):
            doc["_id"] = "object-id"

        mock_collection = MagicMock()
        mock_collection.insert_one = AsyncMock(side_effect=insert_one)

        with patch("prompt_api.dao.base.get_db", return_value=self._mock_db(mock_collection)):
            created = await WorkspaceDAO().create({"workspace_id": "ws-2", "name": "x"})

        assert created == {"workspace_id": "ws-2", "name": "x"}

    async def test_update_and_delete_report_matches(self):
        from prompt_api.dao import WorkspaceDAO

        mock_collection = MagicMock()
        mock_collection.update_one = AsyncMock(return_value=MagicMock(matched_count=0))
        mock_collection.delete_one = AsyncMock(return_value=MagicMock(deleted_count=1))

        with patch("prompt_api.dao.base.get_db", return_value=self._mock_db(mock_collection)):
            dao = WorkspaceDAO()
            assert await dao.update("nope", {"name": "x"}) is False
            assert await dao.delete("ws-1") is True

        mock_collection.update_one.assert_awaited_once_with({"workspace_id": "nope"}, {"$set": {"name": "x"}})
