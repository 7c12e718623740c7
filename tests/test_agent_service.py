"""AgentService 单测：请求格式与错误映射。"""

import json

import httpx
import pytest

from prompt_api.services import AgentResponseError, AgentService, AgentUnavailableError

AGENT = "http://agent.test:4001"


def _service(handler) -> AgentService:
    return AgentService(base_url=AGENT, timeout=1.0, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
class TestAgentService:
    """测试 AgentService 的各个调用。"""

    async def test_check_status_running(self):
        service = _service(lambda request: httpx.Response(200, json={"status": "running"}))
        assert await service.check_status() is True

    async def test_check_status_unreachable(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        assert await _service(handler).check_status() is False

    async def test_check_status_unexpected_body(self):
        service = _service(lambda request: httpx.Response(200, json={"status": "starting"}))
        assert await service.check_status() is False

    async def test_get_structure_sends_joined_patterns(self):
        captured = []

        def handler(request):
            captured.append(request)
            return httpx.Response(200, json=[
                {"name": "src", "path": "src", "type": "directory", "children": []},
                {"name": "a.txt", "path": "a.txt", "type": "file"},
            ])

        nodes = await _service(handler).get_structure("/projects/demo", ["node_modules", "*.log"])

        assert captured[0].url.path == "/structure"
        assert captured[0].url.params["path"] == "/projects/demo"
        assert captured[0].url.params["ignorePatterns"] == "node_modules,*.log"
        assert [n.name for n in nodes] == ["src", "a.txt"]
        assert nodes[1].children is None

    async def test_get_structure_without_patterns(self):
        captured = []

        def handler(request):
            captured.append(request)
            return httpx.Response(200, json=[])

        assert await _service(handler).get_structure("/projects/demo", []) == []
        assert "ignorePatterns" not in captured[0].url.params

    async def test_get_structure_not_found(self):
        service = _service(lambda request: httpx.Response(404, json={"detail": "Path does not exist"}))

        with pytest.raises(AgentResponseError) as exc_info:
            await service.get_structure("/missing")

        assert exc_info.value.status_code == 404
        assert exc_info.value.detail == "Path does not exist"

    async def test_read_files(self):
        captured = []

        def handler(request):
            captured.append(json.loads(request.content))
            return httpx.Response(200, json=[{"path": "a.txt", "content": "a"}])

        contents = await _service(handler).read_files("/projects/demo", ["a.txt", "b.txt"])

        assert captured == [{"basePath": "/projects/demo", "files": ["a.txt", "b.txt"]}]
        assert [c.path for c in contents] == ["a.txt"]

    async def test_start_watching_body(self):
        captured = []

        def handler(request):
            captured.append((request.url.path, json.loads(request.content)))
            return httpx.Response(202, json={"message": "Watch request accepted"})

        await _service(handler).start_watching("/projects/demo", "http://main/cb", ["dist"])

        assert captured == [(
            "/watch",
            {"path": "/projects/demo", "callbackUrl": "http://main/cb", "ignorePatterns": ["dist"]},
        )]

    async def test_start_watching_unreachable(self):
        def handler(request):
            raise httpx.ConnectTimeout("timeout", request=request)

        with pytest.raises(AgentUnavailableError):
            await _service(handler).start_watching("/projects/demo", "http://main/cb", [])

    async def test_stop_watching(self):
        service = _service(lambda request: httpx.Response(200, json={"message": "Watcher stopped", "stopped": True}))
        assert await service.stop_watching("/projects/demo") is True

    async def test_server_error_text_body(self):
        service = _service(lambda request: httpx.Response(500, text="Internal Server Error"))

        with pytest.raises(AgentResponseError) as exc_info:
            await service.read_files("/projects/demo", ["a.txt"])

        assert exc_info.value.status_code == 500
        assert exc_info.value.detail == "Internal Server Error"
