"""Tests for resource groups and their waiters."""

from __future__ import annotations

import json

import pytest

from runloop_client import RunloopClient
from runloop_client.errors import UnexpectedStateError
from runloop_client.polling import PollingOptions
from runloop_client.resources.blueprints import (
    FILE_MOUNT_MAX_SIZE_BYTES,
    validate_file_mounts,
)

BASE_URL = "https://api.runloop.test"

FAST = PollingOptions(initial_delay=0, interval=0)


def _run(state: str, **extra: object) -> dict[str, object]:
    return {"id": "scr_1", "devbox_id": "dbx_1", "scenario_id": "scn_1", "state": state, **extra}


class TestExecutions:
    @pytest.mark.asyncio
    async def test_execute_and_await_completion(self, httpx_mock):
        httpx_mock.add_response(
            method="POST",
            url=f"{BASE_URL}/v1/devboxes/dbx_1/execute_async",
            json={"devbox_id": "dbx_1", "execution_id": "exe_1", "status": "running"},
        )
        wait_url = f"{BASE_URL}/v1/devboxes/dbx_1/executions/exe_1/wait_for_status"
        httpx_mock.add_response(method="POST", url=wait_url, status_code=408, json={})
        httpx_mock.add_response(
            method="POST",
            url=wait_url,
            json={
                "devbox_id": "dbx_1",
                "execution_id": "exe_1",
                "status": "completed",
                "exit_status": 0,
                "stdout": "done\n",
            },
        )

        async with RunloopClient(api_key="k", base_url=BASE_URL, max_retries=0) as client:
            result = await client.devboxes.executions.execute_and_await_completion(
                "dbx_1", command="make test", polling=FAST
            )

        assert result.status == "completed"
        assert result.exit_status == 0
        assert result.stdout == "done\n"

    @pytest.mark.asyncio
    async def test_completed_execution_skips_waiting(self, httpx_mock):
        httpx_mock.add_response(
            method="POST",
            url=f"{BASE_URL}/v1/devboxes/dbx_1/execute_async",
            json={
                "devbox_id": "dbx_1",
                "execution_id": "exe_1",
                "status": "completed",
                "exit_status": 1,
            },
        )

        async with RunloopClient(api_key="k", base_url=BASE_URL) as client:
            result = await client.devboxes.executions.execute_and_await_completion(
                "dbx_1", command="false"
            )

        assert result.exit_status == 1
        assert len(httpx_mock.get_requests()) == 1


class TestDiskSnapshots:
    @pytest.mark.asyncio
    async def test_await_completed_error_raises(self, httpx_mock):
        status_url = f"{BASE_URL}/v1/devboxes/disk_snapshots/snp_1/status"
        httpx_mock.add_response(method="GET", url=status_url, json={"status": "in_progress"})
        httpx_mock.add_response(
            method="GET",
            url=status_url,
            json={"status": "error", "error_message": "disk full"},
        )

        async with RunloopClient(api_key="k", base_url=BASE_URL) as client:
            with pytest.raises(UnexpectedStateError, match="disk full"):
                await client.devboxes.disk_snapshots.await_completed("snp_1", polling=FAST)


class TestBlueprints:
    def test_file_mounts_within_limits(self):
        validate_file_mounts({"/app/a.txt": "a" * 10, "/app/b.txt": "b"})
        validate_file_mounts(None)

    def test_single_file_mount_too_large(self):
        with pytest.raises(ValueError, match="/app/big.bin"):
            validate_file_mounts({"/app/big.bin": "x" * (FILE_MOUNT_MAX_SIZE_BYTES + 1)})

    def test_total_file_mounts_too_large(self):
        mounts = {f"/app/{i}.txt": "x" * FILE_MOUNT_MAX_SIZE_BYTES for i in range(11)}
        with pytest.raises(ValueError, match="total size"):
            validate_file_mounts(mounts)

    @pytest.mark.asyncio
    async def test_create_rejects_oversized_mounts_before_request(self, httpx_mock):
        async with RunloopClient(api_key="k", base_url=BASE_URL) as client:
            with pytest.raises(ValueError):
                await client.blueprints.create(
                    name="big",
                    file_mounts={"/big": "x" * (FILE_MOUNT_MAX_SIZE_BYTES + 1)},
                )

        assert httpx_mock.get_requests() == []

    @pytest.mark.asyncio
    async def test_create_and_await_build_complete(self, httpx_mock):
        httpx_mock.add_response(
            method="POST",
            url=f"{BASE_URL}/v1/blueprints",
            json={"id": "bpt_1", "name": "py", "status": "provisioning"},
        )
        for status in ("building", "build_complete"):
            httpx_mock.add_response(
                method="GET",
                url=f"{BASE_URL}/v1/blueprints/bpt_1",
                json={"id": "bpt_1", "name": "py", "status": status},
            )

        async with RunloopClient(api_key="k", base_url=BASE_URL) as client:
            blueprint = await client.blueprints.create_and_await_build_complete(
                name="py",
                dockerfile="FROM python:3.12",
                polling=FAST,
            )

        assert blueprint.status == "build_complete"
        body = json.loads(httpx_mock.get_requests()[0].content)
        assert body == {"name": "py", "dockerfile": "FROM python:3.12"}

    @pytest.mark.asyncio
    async def test_failed_build_raises(self, httpx_mock):
        httpx_mock.add_response(
            method="GET",
            url=f"{BASE_URL}/v1/blueprints/bpt_1",
            json={"id": "bpt_1", "name": "py", "status": "failed", "failure_reason": "build_failed"},
        )

        async with RunloopClient(api_key="k", base_url=BASE_URL) as client:
            with pytest.raises(UnexpectedStateError) as exc_info:
                await client.blueprints.await_build_complete("bpt_1", polling=FAST)

        assert exc_info.value.state == "failed"


class TestScenarioRuns:
    @pytest.mark.asyncio
    async def test_score_and_complete(self, httpx_mock):
        httpx_mock.add_response(
            method="POST",
            url=f"{BASE_URL}/v1/scenarios/runs/scr_1/score",
            json=_run("scoring"),
        )
        httpx_mock.add_response(
            method="GET",
            url=f"{BASE_URL}/v1/scenarios/runs/scr_1",
            json=_run("scoring"),
        )
        httpx_mock.add_response(
            method="GET",
            url=f"{BASE_URL}/v1/scenarios/runs/scr_1",
            json=_run(
                "scored",
                scoring_contract_result={
                    "score": 0.75,
                    "scoring_function_results": [
                        {"scoring_function_name": "tests", "score": 0.75, "output": "3/4"}
                    ],
                },
            ),
        )
        httpx_mock.add_response(
            method="POST",
            url=f"{BASE_URL}/v1/scenarios/runs/scr_1/complete",
            json=_run("completed", scoring_contract_result={"score": 0.75}),
        )

        async with RunloopClient(api_key="k", base_url=BASE_URL) as client:
            run = await client.scenarios.runs.score_and_complete("scr_1", polling=FAST)

        assert run.state == "completed"
        assert run.scoring_contract_result.score == 0.75

    @pytest.mark.asyncio
    async def test_await_scored_rejects_other_terminal_states(self, httpx_mock):
        httpx_mock.add_response(
            method="GET",
            url=f"{BASE_URL}/v1/scenarios/runs/scr_1",
            json=_run("timeout"),
        )

        async with RunloopClient(api_key="k", base_url=BASE_URL) as client:
            with pytest.raises(UnexpectedStateError) as exc_info:
                await client.scenarios.runs.await_scored("scr_1", polling=FAST)

        assert exc_info.value.state == "timeout"
        assert exc_info.value.resource_id == "scr_1"

    @pytest.mark.asyncio
    async def test_start_run_and_await_env_ready(self, httpx_mock):
        httpx_mock.add_response(
            method="POST",
            url=f"{BASE_URL}/v1/scenarios/start_run",
            json=_run("running"),
        )
        httpx_mock.add_response(
            method="POST",
            url=f"{BASE_URL}/v1/devboxes/dbx_1/wait_for_status",
            json={"id": "dbx_1", "status": "running"},
        )
        httpx_mock.add_response(
            method="GET",
            url=f"{BASE_URL}/v1/scenarios/runs/scr_1",
            json=_run("running"),
        )

        async with RunloopClient(api_key="k", base_url=BASE_URL) as client:
            run = await client.scenarios.start_run_and_await_env_ready(
                scenario_id="scn_1",
                run_name="attempt-1",
                run_profile={"envVars": {"A": "1"}},
                polling=FAST,
            )

        assert run.state == "running"
        body = json.loads(httpx_mock.get_requests()[0].content)
        assert body == {
            "scenario_id": "scn_1",
            "run_name": "attempt-1",
            "runProfile": {"envVars": {"A": "1"}},
        }

    @pytest.mark.asyncio
    async def test_download_logs_returns_bytes(self, httpx_mock):
        httpx_mock.add_response(
            method="POST",
            url=f"{BASE_URL}/v1/scenarios/runs/scr_1/download_logs",
            content=b"PK\x03\x04zip",
            headers={"Content-Type": "application/zip"},
        )

        async with RunloopClient(api_key="k", base_url=BASE_URL) as client:
            data = await client.scenarios.runs.download_logs("scr_1")

        assert data.startswith(b"PK")


class TestBenchmarks:
    @pytest.mark.asyncio
    async def test_scenario_ids_alias(self, httpx_mock):
        httpx_mock.add_response(
            method="GET",
            url=f"{BASE_URL}/v1/benchmarks/bmd_1",
            json={"id": "bmd_1", "name": "swe", "scenarioIds": ["scn_1", "scn_2"]},
        )

        async with RunloopClient(api_key="k", base_url=BASE_URL) as client:
            benchmark = await client.benchmarks.retrieve("bmd_1")

        assert benchmark.scenario_ids == ["scn_1", "scn_2"]


class TestObjectsAndSecrets:
    @pytest.mark.asyncio
    async def test_object_create_complete_download_endpoints(self, httpx_mock):
        httpx_mock.add_response(
            method="POST",
            url=f"{BASE_URL}/v1/objects",
            json={
                "id": "obj_1",
                "name": "data.tgz",
                "content_type": "tgz",
                "state": "UPLOADING",
                "upload_url": "https://uploads.runloop.test/obj_1",
            },
        )
        httpx_mock.add_response(
            method="POST",
            url=f"{BASE_URL}/v1/objects/obj_1/complete",
            json={"id": "obj_1", "name": "data.tgz", "state": "READ_ONLY"},
        )
        httpx_mock.add_response(
            method="GET",
            url=f"{BASE_URL}/v1/objects/obj_1/download?duration_seconds=60",
            json={"download_url": "https://downloads.runloop.test/obj_1"},
        )

        async with RunloopClient(api_key="k", base_url=BASE_URL) as client:
            created = await client.objects.create(name="data.tgz", content_type="tgz")
            completed = await client.objects.complete(created.id)
            link = await client.objects.download(created.id, duration_seconds=60)

        assert created.upload_url.endswith("/obj_1")
        assert completed.state == "READ_ONLY"
        assert link.download_url == "https://downloads.runloop.test/obj_1"

    @pytest.mark.asyncio
    async def test_secrets_lifecycle(self, httpx_mock):
        httpx_mock.add_response(
            method="POST",
            url=f"{BASE_URL}/v1/secrets",
            json={"id": "sec_1", "name": "TOKEN"},
        )
        httpx_mock.add_response(
            method="GET",
            url=f"{BASE_URL}/v1/secrets?limit=5",
            json={"secrets": [{"id": "sec_1", "name": "TOKEN"}], "has_more": False, "total_count": 1},
        )
        httpx_mock.add_response(
            method="POST",
            url=f"{BASE_URL}/v1/secrets/TOKEN/delete",
            json={"id": "sec_1", "name": "TOKEN"},
        )

        async with RunloopClient(api_key="k", base_url=BASE_URL) as client:
            await client.secrets.create(name="TOKEN", value="s3cr3t")
            listing = await client.secrets.list(limit=5)
            deleted = await client.secrets.delete("TOKEN")

        assert [s.name for s in listing.secrets] == ["TOKEN"]
        assert deleted.name == "TOKEN"
        assert json.loads(httpx_mock.get_requests()[0].content) == {
            "name": "TOKEN",
            "value": "s3cr3t",
        }
