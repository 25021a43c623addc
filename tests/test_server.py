"""unit tests for gitlab MCP server"""

import json

import httpx
import pytest
from fastmcp.client import Client

from gitlab_mcp import _gitlab
from gitlab_mcp.server import gitlab_mcp


class TestServerStructure:
    """test that server exposes correct resources and tools"""

    async def test_server_has_resources(self):
        """test that server exposes the gitlab_version resource"""
        async with Client(gitlab_mcp) as client:
            resources = await client.list_resources()

            assert len(resources) == 1
            assert resources[0].name == "gitlab_version"
            assert str(resources[0].uri) == "gitlab://version"

    async def test_server_has_tools(self):
        """test that server exposes expected tools"""
        async with Client(gitlab_mcp) as client:
            tools = await client.list_tools()

            assert len(tools) == 7

            tool_names = {tool.name for tool in tools}
            assert "get_project" in tool_names
            assert "list_project_branches" in tool_names
            assert "check_branch_exists" in tool_names
            assert "check_file_exists" in tool_names
            assert "get_raw_file" in tool_names
            assert "create_commit" in tool_names
            assert "update_snippet" in tool_names

    async def test_get_raw_file_tool_schema(self):
        """test get_raw_file tool has correct schema"""
        async with Client(gitlab_mcp) as client:
            tools = await client.list_tools()

            tool = next(t for t in tools if t.name == "get_raw_file")

            assert tool.inputSchema is not None
            assert tool.inputSchema["type"] == "object"

            properties = tool.inputSchema["properties"]

            # required fields
            assert "project" in properties
            assert "file_path" in properties
            assert properties["file_path"]["type"] == "string"

            # optional fields
            assert "branch" in properties

            assert tool.inputSchema["required"] == ["project", "file_path"]

    async def test_create_commit_tool_schema(self):
        """test create_commit requires at least one action"""
        async with Client(gitlab_mcp) as client:
            tools = await client.list_tools()

            tool = next(t for t in tools if t.name == "create_commit")
            properties = tool.inputSchema["properties"]

            assert properties["actions"]["type"] == "array"
            assert properties["actions"]["minItems"] == 1
            assert "start_branch" in properties
            assert set(tool.inputSchema["required"]) == {
                "project_id",
                "branch",
                "commit_message",
                "actions",
            }


class FakeGitlab:
    """records requests and answers them from a route table"""

    def __init__(self, routes):
        self.routes = routes
        self.requests = []

    def __call__(self, request):
        self.requests.append(request)
        return self.routes[(request.method, request.url.raw_path)]


@pytest.fixture
def serve(monkeypatch):
    """point the server's driver at a simulated gitlab"""

    def install(routes):
        backend = FakeGitlab(routes)

        def get_driver():
            http_client = httpx.Client(transport=httpx.MockTransport(backend))
            return _gitlab.GitlabApiDriver(
                "https://gitlab.example.com", "token", http_client=http_client
            )

        monkeypatch.setattr(_gitlab, "get_driver", get_driver)
        return backend

    return install


class TestVersionResource:
    """test the gitlab://version resource"""

    async def test_reachable(self, serve):
        """version details are reported when the API answers 200"""
        serve(
            {
                ("GET", b"/api/v4/version"): httpx.Response(
                    200, json={"version": "17.0.0", "revision": "abc"}
                )
            }
        )

        async with Client(gitlab_mcp) as client:
            contents = await client.read_resource("gitlab://version")

        body = json.loads(contents[0].text)
        assert body["reachable"] is True
        assert body["version"] == "17.0.0"
        assert body["revision"] == "abc"

    async def test_unreachable_on_204(self, serve):
        """a success status other than 200 reports the instance unreachable"""
        serve({("GET", b"/api/v4/version"): httpx.Response(204)})

        async with Client(gitlab_mcp) as client:
            contents = await client.read_resource("gitlab://version")

        body = json.loads(contents[0].text)
        assert body["reachable"] is False
        assert "version" not in body


class TestCommitTool:
    """test create_commit end to end"""

    commit_path = b"/api/v4/projects/7/repository/commits"
    arguments = {
        "project_id": 7,
        "branch": "feature",
        "commit_message": "add notes",
        "actions": [{"action": "create", "file_path": "notes.md", "content": "hi"}],
        "start_branch": "main",
    }

    async def test_sends_assembled_payload(self, serve):
        """the JSON body carries branch, message and trimmed actions"""
        backend = serve({("POST", self.commit_path): httpx.Response(201, json={})})

        async with Client(gitlab_mcp) as client:
            result = await client.call_tool("create_commit", self.arguments)

        (request,) = backend.requests
        assert json.loads(request.content) == {
            "branch": "feature",
            "commit_message": "add notes",
            "actions": [{"action": "create", "file_path": "notes.md", "content": "hi"}],
            "start_branch": "main",
        }
        assert result.structured_content["created"] is True

    async def test_not_created_on_200(self, serve):
        """a 200 answer is reported as not created"""
        serve({("POST", self.commit_path): httpx.Response(200, json={})})

        async with Client(gitlab_mcp) as client:
            result = await client.call_tool("create_commit", self.arguments)

        assert result.structured_content["created"] is False


class TestRawFileTool:
    """test get_raw_file end to end"""

    async def test_reports_default_branch(self, serve):
        """the looked-up default branch is reported back"""
        backend = serve(
            {
                ("GET", b"/api/v4/projects/group%2Fproj"): httpx.Response(
                    200, json={"id": 7, "default_branch": "develop"}
                ),
                (
                    "GET",
                    b"/api/v4/projects/group%2Fproj/repository/files/README.md/raw?ref=develop",
                ): httpx.Response(200, text="# readme"),
            }
        )

        async with Client(gitlab_mcp) as client:
            result = await client.call_tool(
                "get_raw_file", {"project": "group/proj", "file_path": "README.md"}
            )

        assert result.structured_content["branch"] == "develop"
        assert result.structured_content["content"] == "# readme"
        assert len(backend.requests) == 2
