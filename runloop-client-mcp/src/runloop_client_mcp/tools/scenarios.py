"""Scenario, scenario run and scorer tools."""

from __future__ import annotations

import base64
from typing import Any

from runloop_client_mcp.arguments import (
    body_without,
    optional_dict,
    optional_str,
    page_params,
    require_str,
)
from runloop_client_mcp.endpoints import endpoint, to_jsonable

_ID = {"type": "string", "description": "The scenario ID."}
_RUN_ID = {"type": "string", "description": "The scenario run ID."}
_SCORER_ID = {"type": "string", "description": "The scorer ID."}
_PAGE: dict[str, Any] = {
    "limit": {"type": "integer", "description": "The limit of items to return. Default is 20."},
    "starting_after": {
        "type": "string",
        "description": "Load the next page of data starting after the item with the given ID.",
    },
}
_SCENARIO_PROPERTIES: dict[str, Any] = {
    "name": {"type": "string"},
    "input_context": {
        "type": "object",
        "description": "Problem statement and additional context given to the agent.",
        "properties": {
            "problem_statement": {"type": "string"},
            "additional_context": {"type": "object"},
        },
    },
    "scoring_contract": {
        "type": "object",
        "description": "Weighted scoring functions used to score runs.",
    },
    "environment_parameters": {"type": "object"},
    "metadata": {"type": "object", "additionalProperties": {"type": "string"}},
    "reference_output": {"type": "string"},
}
_SCORER_PROPERTIES: dict[str, Any] = {
    "type": {"type": "string", "description": "Name of the scorer type."},
    "bash_script": {
        "type": "string",
        "description": "Bash script printing a score between 0.0 and 1.0 on its last line.",
    },
}


# Scenarios


async def _create(client, args: dict[str, Any]) -> Any:
    input_context = optional_dict(args, "input_context")
    scoring_contract = optional_dict(args, "scoring_contract")
    if input_context is None:
        raise ValueError("missing required field: input_context")
    if scoring_contract is None:
        raise ValueError("missing required field: scoring_contract")
    result = await client.scenarios.create(
        name=require_str(args, "name"),
        input_context=input_context,
        scoring_contract=scoring_contract,
        **body_without(args, "name", "input_context", "scoring_contract"),
    )
    return to_jsonable(result)


async def _retrieve(client, args: dict[str, Any]) -> Any:
    return to_jsonable(await client.scenarios.retrieve(require_str(args, "id")))


async def _update(client, args: dict[str, Any]) -> Any:
    result = await client.scenarios.update(require_str(args, "id"), **body_without(args, "id"))
    return to_jsonable(result)


async def _list(client, args: dict[str, Any]) -> Any:
    page = await client.scenarios.list(
        name=optional_str(args, "name"),
        benchmark_id=optional_str(args, "benchmark_id"),
        **page_params(args),
    )
    return to_jsonable(page)


async def _list_public(client, args: dict[str, Any]) -> Any:
    page = await client.scenarios.list_public(name=optional_str(args, "name"), **page_params(args))
    return to_jsonable(page)


async def _start_run(client, args: dict[str, Any]) -> Any:
    result = await client.scenarios.start_run(
        scenario_id=require_str(args, "scenario_id"),
        benchmark_run_id=optional_str(args, "benchmark_run_id"),
        run_name=optional_str(args, "run_name"),
        metadata=optional_dict(args, "metadata"),
    )
    return to_jsonable(result)


# Runs


async def _retrieve_run(client, args: dict[str, Any]) -> Any:
    return to_jsonable(await client.scenarios.runs.retrieve(require_str(args, "id")))


async def _list_runs(client, args: dict[str, Any]) -> Any:
    page = await client.scenarios.runs.list(
        scenario_id=optional_str(args, "scenario_id"),
        benchmark_run_id=optional_str(args, "benchmark_run_id"),
        state=optional_str(args, "state"),
        **page_params(args),
    )
    return to_jsonable(page)


async def _cancel_run(client, args: dict[str, Any]) -> Any:
    return to_jsonable(await client.scenarios.runs.cancel(require_str(args, "id")))


async def _complete_run(client, args: dict[str, Any]) -> Any:
    return to_jsonable(await client.scenarios.runs.complete(require_str(args, "id")))


async def _score_run(client, args: dict[str, Any]) -> Any:
    return to_jsonable(await client.scenarios.runs.score(require_str(args, "id")))


async def _download_logs(client, args: dict[str, Any]) -> Any:
    run_id = require_str(args, "id")
    content = await client.scenarios.runs.download_logs(run_id)
    return {
        "run_id": run_id,
        "content_type": "application/zip",
        "size_bytes": len(content),
        "content_base64": base64.b64encode(content).decode("ascii"),
    }


# Scorers


async def _create_scorer(client, args: dict[str, Any]) -> Any:
    result = await client.scenarios.scorers.create(
        bash_script=require_str(args, "bash_script"),
        type=require_str(args, "type"),
    )
    return to_jsonable(result)


async def _retrieve_scorer(client, args: dict[str, Any]) -> Any:
    return to_jsonable(await client.scenarios.scorers.retrieve(require_str(args, "id")))


async def _update_scorer(client, args: dict[str, Any]) -> Any:
    result = await client.scenarios.scorers.update(
        require_str(args, "id"),
        bash_script=require_str(args, "bash_script"),
        type=require_str(args, "type"),
    )
    return to_jsonable(result)


async def _list_scorers(client, args: dict[str, Any]) -> Any:
    return to_jsonable(await client.scenarios.scorers.list(**page_params(args)))


async def _validate_scorer(client, args: dict[str, Any]) -> Any:
    if "scoring_context" not in args:
        raise ValueError("missing required field: scoring_context")
    result = await client.scenarios.scorers.validate(
        require_str(args, "id"),
        scoring_context=args["scoring_context"],
        environment_parameters=optional_dict(args, "environment_parameters"),
    )
    return to_jsonable(result)


ENDPOINTS = [
    endpoint(
        "create_scenarios",
        "Create a scenario: a problem statement, an environment and a scoring contract.",
        resource="scenarios",
        operation="write",
        http_method="post",
        http_path="/v1/scenarios",
        operation_id="createScenario",
        properties=_SCENARIO_PROPERTIES,
        required=["name", "input_context", "scoring_contract"],
        handler=_create,
    ),
    endpoint(
        "retrieve_scenarios",
        "Get a scenario.",
        resource="scenarios",
        operation="read",
        http_method="get",
        http_path="/v1/scenarios/{id}",
        operation_id="getScenario",
        properties={"id": _ID},
        required=["id"],
        handler=_retrieve,
    ),
    endpoint(
        "update_scenarios",
        "Update a scenario. Only the provided fields change.",
        resource="scenarios",
        operation="write",
        http_method="post",
        http_path="/v1/scenarios/{id}",
        operation_id="updateScenario",
        properties={"id": _ID, **_SCENARIO_PROPERTIES},
        required=["id"],
        handler=_update,
    ),
    endpoint(
        "list_scenarios",
        "List scenarios.",
        resource="scenarios",
        operation="read",
        http_method="get",
        http_path="/v1/scenarios",
        operation_id="listScenarios",
        properties={
            "name": {"type": "string"},
            "benchmark_id": {"type": "string"},
            **_PAGE,
        },
        handler=_list,
    ),
    endpoint(
        "list_public_scenarios",
        "List public scenarios.",
        resource="scenarios",
        operation="read",
        http_method="get",
        http_path="/v1/scenarios/list_public",
        operation_id="listPublicScenarios",
        properties={"name": {"type": "string"}, **_PAGE},
        handler=_list_public,
    ),
    endpoint(
        "start_run_scenarios",
        "Start a scenario run on a new devbox.",
        resource="scenarios",
        operation="write",
        http_method="post",
        http_path="/v1/scenarios/start_run",
        operation_id="startScenarioRun",
        properties={
            "scenario_id": _ID,
            "benchmark_run_id": {"type": "string"},
            "run_name": {"type": "string"},
            "metadata": {"type": "object", "additionalProperties": {"type": "string"}},
        },
        required=["scenario_id"],
        handler=_start_run,
    ),
    endpoint(
        "retrieve_scenarios_runs",
        "Get a scenario run, including its score once scored.",
        resource="scenarios.runs",
        operation="read",
        http_method="get",
        http_path="/v1/scenarios/runs/{id}",
        operation_id="getScenarioRun",
        properties={"id": _RUN_ID},
        required=["id"],
        handler=_retrieve_run,
    ),
    endpoint(
        "list_scenarios_runs",
        "List scenario runs.",
        resource="scenarios.runs",
        operation="read",
        http_method="get",
        http_path="/v1/scenarios/runs",
        operation_id="listScenarioRuns",
        properties={
            "scenario_id": {"type": "string"},
            "benchmark_run_id": {"type": "string"},
            "state": {"type": "string"},
            **_PAGE,
        },
        handler=_list_runs,
    ),
    endpoint(
        "cancel_scenarios_runs",
        "Cancel a scenario run and shut down its devbox.",
        resource="scenarios.runs",
        operation="write",
        http_method="post",
        http_path="/v1/scenarios/runs/{id}/cancel",
        operation_id="cancelScenarioRun",
        properties={"id": _RUN_ID},
        required=["id"],
        handler=_cancel_run,
    ),
    endpoint(
        "complete_scenarios_runs",
        "Complete a scenario run and shut down its devbox.",
        resource="scenarios.runs",
        operation="write",
        http_method="post",
        http_path="/v1/scenarios/runs/{id}/complete",
        operation_id="completeScenarioRun",
        properties={"id": _RUN_ID},
        required=["id"],
        handler=_complete_run,
    ),
    endpoint(
        "score_scenarios_runs",
        "Score a scenario run using its scoring contract.",
        resource="scenarios.runs",
        operation="write",
        http_method="post",
        http_path="/v1/scenarios/runs/{id}/score",
        operation_id="scoreScenarioRun",
        properties={"id": _RUN_ID},
        required=["id"],
        handler=_score_run,
    ),
    endpoint(
        "download_logs_scenarios_runs",
        "Download a zip file of all logs of a scenario run, base64 encoded.",
        resource="scenarios.runs",
        operation="write",
        http_method="post",
        http_path="/v1/scenarios/runs/{id}/download_logs",
        operation_id="downloadScenarioRunLogs",
        properties={"id": _RUN_ID},
        required=["id"],
        handler=_download_logs,
    ),
    endpoint(
        "create_scenarios_scorers",
        "Create a custom scorer.",
        resource="scenarios.scorers",
        operation="write",
        http_method="post",
        http_path="/v1/scenarios/scorers",
        operation_id="createScenarioScorer",
        properties=_SCORER_PROPERTIES,
        required=["type", "bash_script"],
        handler=_create_scorer,
    ),
    endpoint(
        "retrieve_scenarios_scorers",
        "Get a custom scorer.",
        resource="scenarios.scorers",
        operation="read",
        http_method="get",
        http_path="/v1/scenarios/scorers/{id}",
        operation_id="getScenarioScorer",
        properties={"id": _SCORER_ID},
        required=["id"],
        handler=_retrieve_scorer,
    ),
    endpoint(
        "update_scenarios_scorers",
        "Update a custom scorer.",
        resource="scenarios.scorers",
        operation="write",
        http_method="post",
        http_path="/v1/scenarios/scorers/{id}",
        operation_id="updateScenarioScorer",
        properties={"id": _SCORER_ID, **_SCORER_PROPERTIES},
        required=["id", "type", "bash_script"],
        handler=_update_scorer,
    ),
    endpoint(
        "list_scenarios_scorers",
        "List custom scorers.",
        resource="scenarios.scorers",
        operation="read",
        http_method="get",
        http_path="/v1/scenarios/scorers",
        operation_id="listScenarioScorers",
        properties=_PAGE,
        handler=_list_scorers,
    ),
    endpoint(
        "validate_scenarios_scorers",
        "Run a scorer against a sample scoring context.",
        resource="scenarios.scorers",
        operation="write",
        http_method="post",
        http_path="/v1/scenarios/scorers/{id}/validate",
        operation_id="validateScenarioScorer",
        properties={
            "id": _SCORER_ID,
            "scoring_context": {"type": "object"},
            "environment_parameters": {"type": "object"},
        },
        required=["id", "scoring_context"],
        handler=_validate_scorer,
    ),
]
