"""文件系统代理 HTTP 接口单测。"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from fs_agent.dependencies import get_watch_registry
from fs_agent.main import app


@pytest.fixture
def registry():
    mock = MagicMock()
    mock.start_watching = MagicMock(return_value=True)
    mock.stop_watching = AsyncMock(return_value=True)
    mock.get_active_count = MagicMock(return_value=1)
    mock.get_active_paths = MagicMock(return_value=["/projects/demo"])
    return mock


@pytest.fixture
def client(registry):
    app.dependency_overrides[get_watch_registry] = lambda: registry
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestStatus:
    """测试服务描述与存活接口。"""

    def test_status(self, client):
        resp = client.get("/status")
        assert resp.status_code == 200
        assert resp.json() == {"status": "running"}

    def test_describe(self, client):
        body = client.get("/").json()
        assert body["status"] == "running"
        assert "structure" in body["endpoints"]


class TestStructure:
    """测试 GET /structure。"""

    def test_missing_path_is_400(self, client):
        assert client.get("/structure").status_code == 400

    def test_nonexistent_path_is_404(self, client, temp_workspace):
        resp = client.get("/structure", params={"path": str(temp_workspace / "nope")})
        assert resp.status_code == 404

    def test_file_root_is_500(self, client, sample_tree):
        resp = client.get("/structure", params={"path": str(sample_tree / "a.txt")})
        assert resp.status_code == 500

    def test_tree_with_ignore_patterns(self, client, sample_tree):
        resp = client.get(
            "/structure",
            params={"path": str(sample_tree), "ignorePatterns": "node_modules, *.txt"},
        )

        assert resp.status_code == 200
        nodes = resp.json()
        assert [n["name"] for n in nodes] == ["src", "README.md"]
        assert nodes[0]["type"] == "directory"
        assert [c["path"] for c in nodes[0]["children"]] == ["src/components", "src/index.ts"]
        assert "children" not in nodes[1]


class TestFileContent:
    """测试 POST /files/content。"""

    def test_missing_fields_is_400(self, client):
        assert client.post("/files/content", json={"basePath": "/tmp"}).status_code == 400
        assert client.post("/files/content", json={"files": ["a"]}).status_code == 400

    def test_empty_base_path_is_400(self, client):
        assert client.post("/files/content", json={"basePath": "", "files": []}).status_code == 400

    def test_missing_base_is_404(self, client, temp_workspace):
        resp = client.post(
            "/files/content", json={"basePath": str(temp_workspace / "nope"), "files": ["a.txt"]}
        )
        assert resp.status_code == 404

    def test_partial_read(self, client, sample_tree):
        resp = client.post(
            "/files/content",
            json={"basePath": str(sample_tree), "files": ["a.txt", "missing.txt", "src/index.ts"]},
        )

        assert resp.status_code == 200
        assert resp.json() == [
            {"path": "a.txt", "content": "a\n"},
            {"path": "src/index.ts", "content": "export {};\n"},
        ]


class TestWatch:
    """测试 /watch、/unwatch 与 /watches。"""

    def test_watch_accepted(self, client, registry):
        resp = client.post(
            "/watch",
            json={"path": "/projects/demo", "callbackUrl": "http://main/cb", "ignorePatterns": ["dist"]},
        )

        assert resp.status_code == 202
        assert resp.json() == {"message": "Watch request accepted"}
        registry.start_watching.assert_called_once_with("/projects/demo", "http://main/cb", ["dist"])

    def test_watch_default_patterns(self, client, registry):
        resp = client.post("/watch", json={"path": "/projects/demo", "callbackUrl": "http://main/cb"})

        assert resp.status_code == 202
        registry.start_watching.assert_called_once_with("/projects/demo", "http://main/cb", [])

    def test_watch_missing_fields_is_400(self, client, registry):
        assert client.post("/watch", json={"path": "/projects/demo"}).status_code == 400
        assert client.post("/watch", json={"path": "", "callbackUrl": "http://main/cb"}).status_code == 400
        registry.start_watching.assert_not_called()

    def test_watch_start_failure_is_500(self, client, registry):
        registry.start_watching.side_effect = RuntimeError("boom")

        resp = client.post("/watch", json={"path": "/projects/demo", "callbackUrl": "http://main/cb"})

        assert resp.status_code == 500

    def test_unwatch(self, client, registry):
        resp = client.post("/unwatch", json={"path": "/projects/demo"})

        assert resp.status_code == 200
        assert resp.json()["stopped"] is True
        registry.stop_watching.assert_awaited_once_with("/projects/demo")

    def test_unwatch_unknown_path_is_not_an_error(self, client, registry):
        registry.stop_watching.return_value = False

        resp = client.post("/unwatch", json={"path": "/projects/other"})

        assert resp.status_code == 200
        assert resp.json()["stopped"] is False

    def test_unwatch_missing_path_is_400(self, client):
        assert client.post("/unwatch", json={}).status_code == 400

    def test_list_watches(self, client):
        assert client.get("/watches").json() == {"count": 1, "paths": ["/projects/demo"]}
