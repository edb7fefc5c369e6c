"""Unit tests for MCP server tool handlers and CLI."""

from __future__ import annotations

import asyncio
import base64
import json

import pytest

from runloop_client import NotFoundError, RunloopError
from runloop_client.types import DevboxView
from runloop_client_mcp import server as mcp_server


class FakePage:
    def __init__(self, body: dict[str, object]) -> None:
        self._body = body

    def to_dict(self) -> dict[str, object]:
        return self._body


class FakeDevboxes:
    def __init__(self) -> None:
        self.calls: list[tuple[str, dict[str, object]]] = []

    async def retrieve(self, devbox_id: str):
        self.calls.append(("retrieve", {"devbox_id": devbox_id}))
        return DevboxView(id=devbox_id, status="running", name="dev")

    async def list(self, *, status=None, limit=None, starting_after=None):
        self.calls.append(
            ("list", {"status": status, "limit": limit, "starting_after": starting_after})
        )
        return FakePage(
            {
                "devboxes": [
                    {"id": "dbx_1", "status": "running"},
                    {"id": "dbx_2", "status": "suspended"},
                ],
                "has_more": False,
                "total_count": 2,
            }
        )

    async def create_tunnel(self, devbox_id: str, *, port: int):
        raise NotFoundError(
            "devbox not found",
            {"devbox_id": devbox_id},
            status_code=404,
        )

    async def read_file_contents(self, devbox_id: str, *, file_path: str) -> str:
        return "x" * 13050

    async def download_file(self, devbox_id: str, *, path: str) -> bytes:
        return b"\x00\x01data"

    async def keep_alive(self, devbox_id: str):
        await asyncio.sleep(5)

    async def shutdown(self, devbox_id: str):
        raise RuntimeError("socket closed")

    async def suspend(self, devbox_id: str):
        raise RunloopError("client misconfigured")


class FakeClient:
    def __init__(self) -> None:
        self.devboxes = FakeDevboxes()


@pytest.fixture(autouse=True)
def reset_globals(monkeypatch):
    """Isolate global state between tests."""
    monkeypatch.setattr(mcp_server, "_client", None)
    monkeypatch.setattr(mcp_server, "_endpoints", dict(mcp_server._endpoints))


@pytest.mark.asyncio
async def test_list_tools_contains_core_tools():
    tools = await mcp_server.list_tools()
    names = {tool.name for tool in tools}

    assert "create_devboxes" in names
    assert "execute_sync_devboxes" in names
    assert "start_run_scenarios" in names
    assert "score_scenarios_runs" in names


@pytest.mark.asyncio
async def test_init_server_limits_listed_tools():
    selected = mcp_server.select_endpoints(
        [mcp_server.Filter(type="resource", op="include", value="secrets")]
    )
    mcp_server.init_server(selected)

    tools = await mcp_server.list_tools()
    assert {tool.name for tool in tools} == {
        "create_secrets",
        "update_secrets",
        "list_secrets",
        "delete_secrets",
    }


@pytest.mark.asyncio
async def test_call_tool_requires_initialized_client():
    response = await mcp_server.call_tool("retrieve_devboxes", {"id": "dbx_1"})
    assert len(response) == 1
    assert "RunloopClient not initialized" in response[0].text


@pytest.mark.asyncio
async def test_call_tool_unknown_tool_returns_error_message():
    mcp_server._client = FakeClient()
    response = await mcp_server.call_tool("not_a_tool", {})
    assert len(response) == 1
    assert "Unknown tool: not_a_tool" in response[0].text


@pytest.mark.asyncio
async def test_unselected_tool_is_unknown():
    mcp_server._client = FakeClient()
    mcp_server.init_server([])

    response = await mcp_server.call_tool("retrieve_devboxes", {"id": "dbx_1"})
    assert response[0].text == "Unknown tool: retrieve_devboxes"


@pytest.mark.asyncio
async def test_retrieve_returns_json():
    client = FakeClient()
    mcp_server._client = client

    response = await mcp_server.call_tool("retrieve_devboxes", {"id": "dbx_1"})

    payload = json.loads(response[0].text)
    assert payload == {"id": "dbx_1", "status": "running", "name": "dev", "metadata": {}}
    assert client.devboxes.calls == [("retrieve", {"devbox_id": "dbx_1"})]


@pytest.mark.asyncio
async def test_list_passes_paging_and_applies_jq_filter():
    client = FakeClient()
    mcp_server._client = client

    response = await mcp_server.call_tool(
        "list_devboxes",
        {"limit": 5, "status": "running", "jq_filter": "[.devboxes[].id]"},
    )

    assert json.loads(response[0].text) == ["dbx_1", "dbx_2"]
    assert client.devboxes.calls == [
        ("list", {"status": "running", "limit": 5, "starting_after": None})
    ]


@pytest.mark.asyncio
async def test_invalid_jq_filter_is_validation_error():
    mcp_server._client = FakeClient()

    response = await mcp_server.call_tool("list_devboxes", {"jq_filter": ".devboxes["})

    assert response[0].text.startswith("**Validation Error:** invalid jq filter")


@pytest.mark.asyncio
async def test_non_string_jq_filter_is_validation_error():
    mcp_server._client = FakeClient()

    response = await mcp_server.call_tool("list_devboxes", {"jq_filter": 3})

    assert response[0].text == "**Validation Error:** field 'jq_filter' must be a string"


@pytest.mark.asyncio
async def test_validation_error_for_missing_required_argument():
    mcp_server._client = FakeClient()

    response = await mcp_server.call_tool("retrieve_devboxes", {})

    assert response[0].text == "**Validation Error:** missing required field: id"


@pytest.mark.asyncio
async def test_validation_error_for_invalid_port():
    mcp_server._client = FakeClient()

    response = await mcp_server.call_tool("create_tunnel_devboxes", {"id": "dbx_1", "port": 0})

    assert "field 'port' must be >= 1" in response[0].text


@pytest.mark.asyncio
async def test_call_tool_surfaces_api_errors():
    mcp_server._client = FakeClient()

    response = await mcp_server.call_tool("create_tunnel_devboxes", {"id": "dbx_9", "port": 8080})

    text = response[0].text
    assert text.startswith("**API Error:** [404] devbox not found")
    assert '"devbox_id": "dbx_9"' in text


@pytest.mark.asyncio
async def test_call_tool_surfaces_client_errors():
    mcp_server._client = FakeClient()

    response = await mcp_server.call_tool("suspend_devboxes", {"id": "dbx_1"})

    assert response[0].text == "**API Error:** client misconfigured"


@pytest.mark.asyncio
async def test_unexpected_errors_are_reported():
    mcp_server._client = FakeClient()

    response = await mcp_server.call_tool("shutdown_devboxes", {"id": "dbx_1"})

    assert response[0].text == "**Error:** socket closed"


@pytest.mark.asyncio
async def test_slow_call_times_out(monkeypatch):
    monkeypatch.setattr(mcp_server, "_CALL_TIMEOUT", 0.05)
    mcp_server._client = FakeClient()

    response = await mcp_server.call_tool("keep_alive_devboxes", {"id": "dbx_1"})

    assert response[0].text.startswith("**Timeout Error:**")


@pytest.mark.asyncio
async def test_text_results_are_returned_verbatim_and_truncated():
    mcp_server._client = FakeClient()

    response = await mcp_server.call_tool(
        "read_file_contents_devboxes",
        {"id": "dbx_1", "file_path": "big.log"},
    )

    text = response[0].text
    assert text.startswith("x" * 100)
    assert text.endswith("...[truncated 1050 chars; original=13050]")


@pytest.mark.asyncio
async def test_download_file_returns_base64():
    mcp_server._client = FakeClient()

    response = await mcp_server.call_tool(
        "download_file_devboxes",
        {"id": "dbx_1", "path": "/tmp/blob"},
    )

    payload = json.loads(response[0].text)
    assert payload["size_bytes"] == 6
    assert base64.b64decode(payload["content_base64"]) == b"\x00\x01data"


def test_truncate_text_keeps_short_text():
    assert mcp_server._truncate_text("short", limit=10) == "short"
    assert mcp_server._truncate_text(None) == ""


def test_get_config_requires_api_key(monkeypatch):
    monkeypatch.delenv("RUNLOOP_API_KEY", raising=False)

    with pytest.raises(ValueError, match="RUNLOOP_API_KEY"):
        mcp_server.get_config()


def test_get_config_reads_env(monkeypatch):
    monkeypatch.setenv("RUNLOOP_API_KEY", "key")
    monkeypatch.setenv("RUNLOOP_BASE_URL", "https://api.runloop.test")

    assert mcp_server.get_config() == {
        "api_key": "key",
        "base_url": "https://api.runloop.test",
    }


def test_read_positive_int_env(monkeypatch):
    monkeypatch.setenv("RUNLOOP_MCP_CALL_TIMEOUT", "-5")
    assert mcp_server._read_positive_int_env("RUNLOOP_MCP_CALL_TIMEOUT", 600) == 600
    monkeypatch.setenv("RUNLOOP_MCP_CALL_TIMEOUT", "abc")
    assert mcp_server._read_positive_int_env("RUNLOOP_MCP_CALL_TIMEOUT", 600) == 600
    monkeypatch.setenv("RUNLOOP_MCP_CALL_TIMEOUT", "30")
    assert mcp_server._read_positive_int_env("RUNLOOP_MCP_CALL_TIMEOUT", 600) == 30


class TestCli:
    def test_filters_keep_command_line_order(self):
        args = mcp_server.build_parser().parse_args(
            ["--resource", "devboxes*", "--no-operation", "write", "--tool", "create_devboxes"]
        )

        assert args.filters == [
            mcp_server.Filter(type="resource", op="include", value="devboxes*"),
            mcp_server.Filter(type="operation", op="exclude", value="write"),
            mcp_server.Filter(type="tool", op="include", value="create_devboxes"),
        ]

    def test_no_filters_selects_everything(self):
        args = mcp_server.build_parser().parse_args([])

        assert args.filters is None
        assert len(mcp_server.select_endpoints([])) == len(mcp_server.all_endpoints)

    def test_list_prints_selected_tools(self, capsys):
        mcp_server.main(["--list", "--resource", "secrets", "--no-tool", "delete_secrets"])

        lines = capsys.readouterr().out.splitlines()
        assert lines == [
            "create_secrets (secrets, write)",
            "update_secrets (secrets, write)",
            "list_secrets (secrets, read)",
        ]

    def test_unmatched_filter_exits_with_code_2(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            mcp_server.main(["--list", "--tool", "no_such_tool"])

        assert exc_info.value.code == 2
        err = capsys.readouterr().err
        assert "did not match any endpoints: tool=no_such_tool" in err

    def test_main_reports_server_errors(self, monkeypatch, capsys):
        async def failing_run_server():
            raise RuntimeError("stdio closed")

        monkeypatch.setattr(mcp_server, "run_server", failing_run_server)

        with pytest.raises(SystemExit) as exc_info:
            mcp_server.main([])

        assert exc_info.value.code == 1
        assert "Server error: stdio closed" in capsys.readouterr().err


@pytest.mark.asyncio
async def test_lifespan_manages_client(monkeypatch):
    monkeypatch.setenv("RUNLOOP_API_KEY", "key")
    monkeypatch.delenv("RUNLOOP_BASE_URL", raising=False)

    async with mcp_server.lifespan(mcp_server.server):
        assert mcp_server._client is not None
        assert mcp_server._client.base_url == "https://api.runloop.ai"

    assert mcp_server._client is None
