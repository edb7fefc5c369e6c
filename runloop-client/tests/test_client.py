"""Tests for RunloopClient."""

import json

import pytest

from runloop_client import RunloopClient
from runloop_client.errors import NotFoundError

BASE_URL = "https://api.runloop.test"


class TestRunloopClient:
    """Tests for RunloopClient initialization and context management."""

    def test_requires_api_key(self, monkeypatch):
        monkeypatch.delenv("RUNLOOP_API_KEY", raising=False)

        with pytest.raises(ValueError, match="api_key required"):
            RunloopClient()

    def test_uses_env_vars(self, monkeypatch):
        monkeypatch.setenv("RUNLOOP_API_KEY", "env-key")
        monkeypatch.setenv("RUNLOOP_BASE_URL", "https://env.runloop.test")

        client = RunloopClient()
        assert client._api_key == "env-key"
        assert client.base_url == "https://env.runloop.test"

    def test_default_base_url(self, monkeypatch):
        monkeypatch.delenv("RUNLOOP_BASE_URL", raising=False)

        client = RunloopClient(api_key="key")
        assert client.base_url == "https://api.runloop.ai"

    def test_env_timeout_applies_only_to_defaults(self, monkeypatch):
        monkeypatch.setenv("RUNLOOP_TIMEOUT", "5")
        monkeypatch.setenv("RUNLOOP_MAX_RETRIES", "7")

        defaulted = RunloopClient(api_key="key")
        assert defaulted._timeout == 5.0
        assert defaulted._max_retries == 7

        explicit = RunloopClient(api_key="key", timeout=30.0, max_retries=1)
        assert explicit._timeout == 30.0
        assert explicit._max_retries == 1

    def test_resources_require_context(self):
        client = RunloopClient(api_key="key", base_url=BASE_URL)

        with pytest.raises(RuntimeError, match="not initialized"):
            _ = client.devboxes

    @pytest.mark.asyncio
    async def test_context_manager(self, httpx_mock, devbox_payload):
        httpx_mock.add_response(
            method="POST",
            url=f"{BASE_URL}/v1/devboxes",
            json=devbox_payload("provisioning"),
        )

        async with RunloopClient(api_key="test-key", base_url=BASE_URL) as client:
            devbox = await client.create_devbox(name="dev")
            assert devbox.id == "dbx_123"
            assert devbox.status == "provisioning"

        with pytest.raises(RuntimeError):
            _ = client.devboxes

        request = httpx_mock.get_requests()[0]
        assert request.headers["Authorization"] == "Bearer test-key"
        assert json.loads(request.content) == {"name": "dev"}

    @pytest.mark.asyncio
    async def test_get_devbox_not_found(self, httpx_mock):
        httpx_mock.add_response(
            method="GET",
            url=f"{BASE_URL}/v1/devboxes/missing",
            status_code=404,
            json={"error": {"message": "devbox not found"}},
        )

        async with RunloopClient(api_key="test-key", base_url=BASE_URL) as client:
            with pytest.raises(NotFoundError) as exc_info:
                await client.get_devbox("missing")

        assert exc_info.value.status_code == 404
        assert exc_info.value.message == "devbox not found"


class TestDevboxCreate:
    @pytest.mark.asyncio
    async def test_rejects_multiple_image_sources(self):
        async with RunloopClient(api_key="test-key", base_url=BASE_URL) as client:
            with pytest.raises(ValueError, match="only one of"):
                await client.devboxes.create(blueprint_id="bpt_1", snapshot_id="snp_1")

    @pytest.mark.asyncio
    async def test_idempotency_key_and_extra_fields(self, httpx_mock, devbox_payload):
        httpx_mock.add_response(
            method="POST",
            url=f"{BASE_URL}/v1/devboxes",
            json=devbox_payload("provisioning"),
        )

        async with RunloopClient(api_key="test-key", base_url=BASE_URL) as client:
            await client.devboxes.create(
                blueprint_name="python-base",
                idempotency_key="idem-1",
                repo_connection_id="repo_1",
            )

        request = httpx_mock.get_requests()[0]
        assert request.headers["Idempotency-Key"] == "idem-1"
        assert json.loads(request.content) == {
            "blueprint_name": "python-base",
            "repo_connection_id": "repo_1",
        }

    @pytest.mark.asyncio
    async def test_execute_generates_command_id(self, httpx_mock):
        httpx_mock.add_response(
            method="POST",
            url=f"{BASE_URL}/v1/devboxes/dbx_123/execute",
            json={
                "devbox_id": "dbx_123",
                "execution_id": "exe_1",
                "status": "completed",
                "exit_status": 0,
                "stdout": "hi\n",
            },
        )

        async with RunloopClient(api_key="test-key", base_url=BASE_URL) as client:
            result = await client.devboxes.execute("dbx_123", command="echo hi")

        assert result.stdout == "hi\n"
        body = json.loads(httpx_mock.get_requests()[0].content)
        assert body["command"] == "echo hi"
        assert body["command_id"]

    @pytest.mark.asyncio
    async def test_read_file_contents_returns_text(self, httpx_mock):
        httpx_mock.add_response(
            method="POST",
            url=f"{BASE_URL}/v1/devboxes/dbx_123/read_file_contents",
            text="print('hi')\n",
            headers={"Content-Type": "text/plain"},
        )

        async with RunloopClient(api_key="test-key", base_url=BASE_URL) as client:
            contents = await client.devboxes.read_file_contents("dbx_123", file_path="main.py")

        assert contents == "print('hi')\n"

    @pytest.mark.asyncio
    async def test_download_file_returns_bytes(self, httpx_mock):
        httpx_mock.add_response(
            method="POST",
            url=f"{BASE_URL}/v1/devboxes/dbx_123/download_file",
            content=b"\x00\x01binary",
        )

        async with RunloopClient(api_key="test-key", base_url=BASE_URL) as client:
            data = await client.devboxes.download_file("dbx_123", path="/tmp/blob")

        assert data == b"\x00\x01binary"

    @pytest.mark.asyncio
    async def test_upload_file_sends_multipart(self, httpx_mock):
        httpx_mock.add_response(
            method="POST",
            url=f"{BASE_URL}/v1/devboxes/dbx_123/upload_file",
            json={},
        )

        async with RunloopClient(api_key="test-key", base_url=BASE_URL) as client:
            await client.devboxes.upload_file("dbx_123", path="/tmp/a.txt", file=b"payload")

        request = httpx_mock.get_requests()[0]
        assert request.headers["Content-Type"].startswith("multipart/form-data")
        assert b"payload" in request.content
        assert b"/tmp/a.txt" in request.content
