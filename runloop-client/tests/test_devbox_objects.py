"""Tests for the client's object wrappers."""

from __future__ import annotations

import json

import pytest

from runloop_client import NotFoundError, RunloopClient, ScenarioRun
from runloop_client.polling import PollingOptions

BASE_URL = "https://api.runloop.test"

FAST = PollingOptions(initial_delay=0, interval=0)


class TestDevbox:
    @pytest.mark.asyncio
    async def test_lifecycle_updates_cached_status(self, httpx_mock, devbox_payload):
        httpx_mock.add_response(
            method="GET",
            url=f"{BASE_URL}/v1/devboxes/dbx_123",
            json=devbox_payload("running"),
        )
        httpx_mock.add_response(
            method="POST",
            url=f"{BASE_URL}/v1/devboxes/dbx_123/suspend",
            json=devbox_payload("suspending"),
        )
        httpx_mock.add_response(
            method="POST",
            url=f"{BASE_URL}/v1/devboxes/dbx_123/wait_for_status",
            json=devbox_payload("suspended"),
        )
        httpx_mock.add_response(
            method="POST",
            url=f"{BASE_URL}/v1/devboxes/dbx_123/shutdown",
            json=devbox_payload("shutdown"),
        )

        async with RunloopClient(api_key="k", base_url=BASE_URL) as client:
            devbox = await client.get_devbox("dbx_123")
            assert devbox.status == "running"

            await devbox.suspend()
            assert devbox.status == "suspending"

            await devbox.await_suspended(polling=FAST)
            assert devbox.status == "suspended"

            await devbox.shutdown()
            assert devbox.status == "shutdown"

        assert repr(devbox) == "Devbox(id='dbx_123', status='shutdown')"

    @pytest.mark.asyncio
    async def test_exec_and_files(self, httpx_mock, devbox_payload):
        httpx_mock.add_response(
            method="GET",
            url=f"{BASE_URL}/v1/devboxes/dbx_123",
            json=devbox_payload(),
        )
        httpx_mock.add_response(
            method="POST",
            url=f"{BASE_URL}/v1/devboxes/dbx_123/execute_sync",
            json={"devbox_id": "dbx_123", "exit_status": 0, "stdout": "3.12\n", "stderr": ""},
        )
        httpx_mock.add_response(
            method="POST",
            url=f"{BASE_URL}/v1/devboxes/dbx_123/write_file_contents",
            json={"devbox_id": "dbx_123", "exit_status": 0},
        )

        async with RunloopClient(api_key="k", base_url=BASE_URL) as client:
            devbox = await client.get_devbox("dbx_123")
            result = await devbox.exec("python --version", shell_name="main")
            await devbox.write_file("notes.txt", "hello")

        assert result.stdout == "3.12\n"
        exec_body = json.loads(httpx_mock.get_requests()[1].content)
        assert exec_body == {"command": "python --version", "shell_name": "main"}
        write_body = json.loads(httpx_mock.get_requests()[2].content)
        assert write_body == {"file_path": "notes.txt", "contents": "hello"}


class TestScenarioRun:
    @pytest.mark.asyncio
    async def test_start_and_await_env_ready(self, httpx_mock):
        run_payload = {"id": "scr_1", "devbox_id": "dbx_9", "state": "running"}
        httpx_mock.add_response(
            method="POST",
            url=f"{BASE_URL}/v1/scenarios/start_run",
            json=run_payload,
        )
        httpx_mock.add_response(
            method="POST",
            url=f"{BASE_URL}/v1/devboxes/dbx_9/wait_for_status",
            json={"id": "dbx_9", "status": "running"},
        )
        httpx_mock.add_response(
            method="GET",
            url=f"{BASE_URL}/v1/scenarios/runs/scr_1",
            json=run_payload,
        )

        async with RunloopClient(api_key="k", base_url=BASE_URL) as client:
            run = await client.start_scenario_run(scenario_id="scn_1")
            assert run.devbox.status == "provisioning"

            info = await run.await_env_ready(polling=FAST)

        assert info.state == "running"
        assert run.devbox.id == "dbx_9"
        assert run.devbox.status == "running"

    @pytest.mark.asyncio
    async def test_get_score(self, httpx_mock):
        httpx_mock.add_response(
            method="GET",
            url=f"{BASE_URL}/v1/scenarios/runs/scr_1",
            json={"id": "scr_1", "devbox_id": "dbx_9", "state": "running"},
        )
        httpx_mock.add_response(
            method="GET",
            url=f"{BASE_URL}/v1/scenarios/runs/scr_1",
            json={
                "id": "scr_1",
                "devbox_id": "dbx_9",
                "state": "scored",
                "scoring_contract_result": {"score": 1.0},
            },
        )

        async with RunloopClient(api_key="k", base_url=BASE_URL) as client:
            run = ScenarioRun(client.scenarios.runs, client.devboxes, "scr_1", "dbx_9")
            assert await run.get_score() is None
            score = await run.get_score()

        assert score.score == 1.0


class TestExecution:
    @pytest.mark.asyncio
    async def test_exec_async_result_waits_for_completion(self, httpx_mock, devbox_payload):
        httpx_mock.add_response(
            method="GET",
            url=f"{BASE_URL}/v1/devboxes/dbx_123",
            json=devbox_payload(),
        )
        httpx_mock.add_response(
            method="POST",
            url=f"{BASE_URL}/v1/devboxes/dbx_123/execute_async",
            json={"devbox_id": "dbx_123", "execution_id": "exe_1", "status": "running"},
        )
        httpx_mock.add_response(
            method="POST",
            url=f"{BASE_URL}/v1/devboxes/dbx_123/executions/exe_1/wait_for_status",
            json={
                "devbox_id": "dbx_123",
                "execution_id": "exe_1",
                "status": "completed",
                "exit_status": 1,
                "stdout": "",
                "stderr": "boom\n",
            },
        )

        async with RunloopClient(api_key="k", base_url=BASE_URL) as client:
            devbox = await client.get_devbox("dbx_123")
            execution = await devbox.exec_async("make test")
            assert execution.execution_id == "exe_1"

            result = await execution.result(polling=FAST)

        assert result.exit_code == 1
        assert result.failed is True
        assert result.success is False
        assert result.stdout == ""
        assert result.stderr == "boom\n"

    @pytest.mark.asyncio
    async def test_result_of_completed_execution_skips_waiting(self, httpx_mock, devbox_payload):
        httpx_mock.add_response(
            method="GET",
            url=f"{BASE_URL}/v1/devboxes/dbx_123",
            json=devbox_payload(),
        )
        httpx_mock.add_response(
            method="POST",
            url=f"{BASE_URL}/v1/devboxes/dbx_123/execute_async",
            json={
                "devbox_id": "dbx_123",
                "execution_id": "exe_2",
                "status": "completed",
                "exit_status": 0,
                "stdout": "ok\n",
            },
        )

        async with RunloopClient(api_key="k", base_url=BASE_URL) as client:
            devbox = await client.get_devbox("dbx_123")
            result = await (await devbox.exec_async("true")).result()

        assert result.success is True
        assert result.stdout == "ok\n"
        assert len(httpx_mock.get_requests()) == 2

    @pytest.mark.asyncio
    async def test_get_state_and_kill(self, httpx_mock, devbox_payload):
        running = {"devbox_id": "dbx_123", "execution_id": "exe_3", "status": "running"}
        httpx_mock.add_response(
            method="GET",
            url=f"{BASE_URL}/v1/devboxes/dbx_123",
            json=devbox_payload(),
        )
        httpx_mock.add_response(
            method="POST",
            url=f"{BASE_URL}/v1/devboxes/dbx_123/execute_async",
            json=running,
        )
        httpx_mock.add_response(
            method="GET",
            url=f"{BASE_URL}/v1/devboxes/dbx_123/executions/exe_3",
            json=running,
        )
        httpx_mock.add_response(
            method="POST",
            url=f"{BASE_URL}/v1/devboxes/dbx_123/executions/exe_3/kill",
            json={**running, "status": "completed", "exit_status": 137},
        )

        async with RunloopClient(api_key="k", base_url=BASE_URL) as client:
            devbox = await client.get_devbox("dbx_123")
            execution = await devbox.exec_async("sleep 600")
            state = await execution.get_state()
            killed = await execution.kill(kill_process_group=True)

        assert state.status == "running"
        assert killed.exit_status == 137
        kill_body = json.loads(httpx_mock.get_requests()[3].content)
        assert kill_body == {"kill_process_group": True}


class TestBlueprint:
    @pytest.mark.asyncio
    async def test_create_waits_for_build_then_logs_and_delete(self, httpx_mock):
        httpx_mock.add_response(
            method="POST",
            url=f"{BASE_URL}/v1/blueprints",
            json={"id": "bpt_1", "name": "py", "status": "provisioning"},
        )
        httpx_mock.add_response(
            method="GET",
            url=f"{BASE_URL}/v1/blueprints/bpt_1",
            json={"id": "bpt_1", "name": "py", "status": "build_complete"},
        )
        httpx_mock.add_response(
            method="GET",
            url=f"{BASE_URL}/v1/blueprints/bpt_1/logs",
            json={"blueprint_id": "bpt_1", "logs": [{"level": "info", "message": "done"}]},
        )
        httpx_mock.add_response(
            method="POST",
            url=f"{BASE_URL}/v1/blueprints/bpt_1/delete",
            json={},
        )

        async with RunloopClient(api_key="k", base_url=BASE_URL) as client:
            blueprint = await client.create_blueprint(
                name="py",
                dockerfile="FROM python:3.12",
                polling=FAST,
            )
            assert blueprint.status == "build_complete"

            logs = await blueprint.logs()
            await blueprint.delete()

        assert logs.logs[0].message == "done"
        assert repr(blueprint) == "Blueprint(id='bpt_1', name='py', status='build_complete')"

    @pytest.mark.asyncio
    async def test_refresh_updates_status(self, httpx_mock):
        httpx_mock.add_response(
            method="GET",
            url=f"{BASE_URL}/v1/blueprints/bpt_1",
            json={"id": "bpt_1", "name": "py", "status": "building"},
        )
        httpx_mock.add_response(
            method="GET",
            url=f"{BASE_URL}/v1/blueprints/bpt_1",
            json={"id": "bpt_1", "name": "py", "status": "failed"},
        )

        async with RunloopClient(api_key="k", base_url=BASE_URL) as client:
            blueprint = await client.get_blueprint("bpt_1")
            assert blueprint.status == "building"
            await blueprint.refresh()

        assert blueprint.status == "failed"


class TestSnapshot:
    @pytest.mark.asyncio
    async def test_async_snapshot_completes_and_updates(self, httpx_mock, devbox_payload):
        httpx_mock.add_response(
            method="GET",
            url=f"{BASE_URL}/v1/devboxes/dbx_123",
            json=devbox_payload(),
        )
        httpx_mock.add_response(
            method="POST",
            url=f"{BASE_URL}/v1/devboxes/dbx_123/snapshot_disk_async",
            json={"id": "snp_1", "source_devbox_id": "dbx_123"},
        )
        httpx_mock.add_response(
            method="GET",
            url=f"{BASE_URL}/v1/devboxes/disk_snapshots/snp_1/status",
            json={
                "status": "complete",
                "snapshot": {"id": "snp_1", "source_devbox_id": "dbx_123", "name": "base"},
            },
        )
        httpx_mock.add_response(
            method="POST",
            url=f"{BASE_URL}/v1/devboxes/disk_snapshots/snp_1",
            json={"id": "snp_1", "source_devbox_id": "dbx_123", "name": "golden"},
        )

        async with RunloopClient(api_key="k", base_url=BASE_URL) as client:
            devbox = await client.get_devbox("dbx_123")
            snapshot = await devbox.snapshot_disk_async(name="base")
            assert snapshot.name is None

            status = await snapshot.await_completed(polling=FAST)
            assert status.status == "complete"
            assert snapshot.name == "base"

            await snapshot.update(name="golden")

        assert snapshot.name == "golden"
        assert snapshot.source_devbox_id == "dbx_123"

    @pytest.mark.asyncio
    async def test_get_snapshot_walks_list(self, httpx_mock):
        httpx_mock.add_response(
            method="GET",
            url=f"{BASE_URL}/v1/devboxes/disk_snapshots",
            json={
                "snapshots": [
                    {"id": "snp_1", "source_devbox_id": "dbx_1"},
                    {"id": "snp_2", "source_devbox_id": "dbx_2"},
                ],
                "has_more": False,
            },
        )

        async with RunloopClient(api_key="k", base_url=BASE_URL) as client:
            snapshot = await client.get_snapshot("snp_2")

        assert snapshot.source_devbox_id == "dbx_2"

    @pytest.mark.asyncio
    async def test_get_missing_snapshot_raises_not_found(self, httpx_mock):
        httpx_mock.add_response(
            method="GET",
            url=f"{BASE_URL}/v1/devboxes/disk_snapshots",
            json={"snapshots": [{"id": "snp_1"}], "has_more": False},
        )

        async with RunloopClient(api_key="k", base_url=BASE_URL) as client:
            with pytest.raises(NotFoundError, match="snp_9"):
                await client.get_snapshot("snp_9")

    @pytest.mark.asyncio
    async def test_list_snapshots_for_devbox(self, httpx_mock):
        httpx_mock.add_response(
            method="GET",
            url=f"{BASE_URL}/v1/devboxes/disk_snapshots?devbox_id=dbx_1",
            json={"snapshots": [{"id": "snp_1", "source_devbox_id": "dbx_1"}], "has_more": False},
        )
        httpx_mock.add_response(
            method="POST",
            url=f"{BASE_URL}/v1/devboxes/disk_snapshots/snp_1/delete",
            json={},
        )

        async with RunloopClient(api_key="k", base_url=BASE_URL) as client:
            snapshots = await client.list_snapshots(devbox_id="dbx_1")
            await snapshots[0].delete()

        assert [s.id for s in snapshots] == ["snp_1"]
