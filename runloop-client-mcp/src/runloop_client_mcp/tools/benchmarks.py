"""Benchmark tools."""

from __future__ import annotations

from typing import Any

from runloop_client_mcp.arguments import (
    optional_dict,
    optional_str,
    page_params,
    require_str,
)
from runloop_client_mcp.endpoints import endpoint, to_jsonable

_ID = {"type": "string", "description": "The benchmark ID."}
_RUN_ID = {"type": "string", "description": "The benchmark run ID."}
_PAGE: dict[str, Any] = {
    "limit": {"type": "integer", "description": "The limit of items to return. Default is 20."},
    "starting_after": {
        "type": "string",
        "description": "Load the next page of data starting after the item with the given ID.",
    },
}
_DEFINITION: dict[str, Any] = {
    "name": {"type": "string"},
    "scenario_ids": {"type": "array", "items": {"type": "string"}},
    "description": {"type": "string"},
    "metadata": {"type": "object", "additionalProperties": {"type": "string"}},
}


def _scenario_ids(args: dict[str, Any]) -> list[str] | None:
    value = args.get("scenario_ids")
    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValueError("field 'scenario_ids' must be an array of strings")
    return value


async def _create(client, args: dict[str, Any]) -> Any:
    result = await client.benchmarks.create(
        name=require_str(args, "name"),
        scenario_ids=_scenario_ids(args),
        description=optional_str(args, "description"),
        metadata=optional_dict(args, "metadata"),
    )
    return to_jsonable(result)


async def _retrieve(client, args: dict[str, Any]) -> Any:
    return to_jsonable(await client.benchmarks.retrieve(require_str(args, "id")))


async def _update(client, args: dict[str, Any]) -> Any:
    result = await client.benchmarks.update(
        require_str(args, "id"),
        name=optional_str(args, "name"),
        scenario_ids=_scenario_ids(args),
        description=optional_str(args, "description"),
        metadata=optional_dict(args, "metadata"),
    )
    return to_jsonable(result)


async def _list(client, args: dict[str, Any]) -> Any:
    return to_jsonable(await client.benchmarks.list(**page_params(args)))


async def _list_public(client, args: dict[str, Any]) -> Any:
    return to_jsonable(await client.benchmarks.list_public(**page_params(args)))


async def _definitions(client, args: dict[str, Any]) -> Any:
    page = await client.benchmarks.definitions(require_str(args, "id"), **page_params(args))
    return to_jsonable(page)


async def _start_run(client, args: dict[str, Any]) -> Any:
    result = await client.benchmarks.start_run(
        benchmark_id=require_str(args, "benchmark_id"),
        run_name=optional_str(args, "run_name"),
        metadata=optional_dict(args, "metadata"),
    )
    return to_jsonable(result)


async def _retrieve_run(client, args: dict[str, Any]) -> Any:
    return to_jsonable(await client.benchmarks.runs.retrieve(require_str(args, "id")))


async def _list_runs(client, args: dict[str, Any]) -> Any:
    page = await client.benchmarks.runs.list(
        benchmark_id=optional_str(args, "benchmark_id"),
        **page_params(args),
    )
    return to_jsonable(page)


async def _cancel_run(client, args: dict[str, Any]) -> Any:
    return to_jsonable(await client.benchmarks.runs.cancel(require_str(args, "id")))


async def _complete_run(client, args: dict[str, Any]) -> Any:
    return to_jsonable(await client.benchmarks.runs.complete(require_str(args, "id")))


async def _list_scenario_runs(client, args: dict[str, Any]) -> Any:
    page = await client.benchmarks.runs.list_scenario_runs(
        require_str(args, "id"),
        state=optional_str(args, "state"),
        **page_params(args),
    )
    return to_jsonable(page)


ENDPOINTS = [
    endpoint(
        "create_benchmarks",
        "Create a benchmark from a set of scenarios.",
        resource="benchmarks",
        operation="write",
        http_method="post",
        http_path="/v1/benchmarks",
        operation_id="createBenchmark",
        properties=_DEFINITION,
        required=["name"],
        handler=_create,
    ),
    endpoint(
        "retrieve_benchmarks",
        "Get a benchmark.",
        resource="benchmarks",
        operation="read",
        http_method="get",
        http_path="/v1/benchmarks/{id}",
        operation_id="getBenchmark",
        properties={"id": _ID},
        required=["id"],
        handler=_retrieve,
    ),
    endpoint(
        "update_benchmarks",
        "Update a benchmark.",
        resource="benchmarks",
        operation="write",
        http_method="post",
        http_path="/v1/benchmarks/{id}",
        operation_id="updateBenchmark",
        properties={"id": _ID, **_DEFINITION},
        required=["id"],
        handler=_update,
    ),
    endpoint(
        "list_benchmarks",
        "List benchmarks.",
        resource="benchmarks",
        operation="read",
        http_method="get",
        http_path="/v1/benchmarks",
        operation_id="listBenchmarks",
        properties=_PAGE,
        handler=_list,
    ),
    endpoint(
        "list_public_benchmarks",
        "List public benchmarks.",
        resource="benchmarks",
        operation="read",
        http_method="get",
        http_path="/v1/benchmarks/list_public",
        operation_id="listPublicBenchmarks",
        properties=_PAGE,
        handler=_list_public,
    ),
    endpoint(
        "definitions_benchmarks",
        "List the scenario definitions of a benchmark.",
        resource="benchmarks",
        operation="read",
        http_method="get",
        http_path="/v1/benchmarks/{id}/definitions",
        operation_id="getBenchmarkDefinitions",
        properties={"id": _ID, **_PAGE},
        required=["id"],
        handler=_definitions,
    ),
    endpoint(
        "start_run_benchmarks",
        "Start a benchmark run, launching one scenario run per scenario.",
        resource="benchmarks",
        operation="write",
        http_method="post",
        http_path="/v1/benchmarks/start_run",
        operation_id="startBenchmarkRun",
        properties={
            "benchmark_id": _ID,
            "run_name": {"type": "string"},
            "metadata": {"type": "object", "additionalProperties": {"type": "string"}},
        },
        required=["benchmark_id"],
        handler=_start_run,
    ),
    endpoint(
        "retrieve_benchmarks_runs",
        "Get a benchmark run.",
        resource="benchmarks.runs",
        operation="read",
        http_method="get",
        http_path="/v1/benchmarks/runs/{id}",
        operation_id="getBenchmarkRun",
        properties={"id": _RUN_ID},
        required=["id"],
        handler=_retrieve_run,
    ),
    endpoint(
        "list_benchmarks_runs",
        "List benchmark runs, optionally for one benchmark.",
        resource="benchmarks.runs",
        operation="read",
        http_method="get",
        http_path="/v1/benchmarks/runs",
        operation_id="listBenchmarkRuns",
        properties={"benchmark_id": _ID, **_PAGE},
        handler=_list_runs,
    ),
    endpoint(
        "cancel_benchmarks_runs",
        "Cancel a benchmark run.",
        resource="benchmarks.runs",
        operation="write",
        http_method="post",
        http_path="/v1/benchmarks/runs/{id}/cancel",
        operation_id="cancelBenchmarkRun",
        properties={"id": _RUN_ID},
        required=["id"],
        handler=_cancel_run,
    ),
    endpoint(
        "complete_benchmarks_runs",
        "Complete a benchmark run.",
        resource="benchmarks.runs",
        operation="write",
        http_method="post",
        http_path="/v1/benchmarks/runs/{id}/complete",
        operation_id="completeBenchmarkRun",
        properties={"id": _RUN_ID},
        required=["id"],
        handler=_complete_run,
    ),
    endpoint(
        "list_scenario_runs_benchmarks_runs",
        "List the scenario runs of a benchmark run.",
        resource="benchmarks.runs",
        operation="read",
        http_method="get",
        http_path="/v1/benchmarks/runs/{id}/scenario_runs",
        operation_id="listBenchmarkRunScenarioRuns",
        properties={"id": _RUN_ID, "state": {"type": "string"}, **_PAGE},
        required=["id"],
        handler=_list_scenario_runs,
    ),
]
