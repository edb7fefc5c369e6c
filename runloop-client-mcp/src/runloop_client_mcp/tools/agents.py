"""Agent tools."""

from __future__ import annotations

from typing import Any

from runloop_client_mcp.arguments import (
    optional_bool,
    optional_dict,
    optional_str,
    page_params,
    require_str,
)
from runloop_client_mcp.endpoints import endpoint, to_jsonable

_ID = {"type": "string", "description": "The agent ID."}


async def _create(client, args: dict[str, Any]) -> Any:
    result = await client.agents.create(
        name=require_str(args, "name"),
        source=optional_dict(args, "source"),
    )
    return to_jsonable(result)


async def _retrieve(client, args: dict[str, Any]) -> Any:
    return to_jsonable(await client.agents.retrieve(require_str(args, "id")))


async def _list(client, args: dict[str, Any]) -> Any:
    page = await client.agents.list(
        name=optional_str(args, "name"),
        is_public=optional_bool(args, "is_public"),
        **page_params(args),
    )
    return to_jsonable(page)


ENDPOINTS = [
    endpoint(
        "create_agents",
        "Register an agent from an npm, pip, git or object source.",
        resource="agents",
        operation="write",
        http_method="post",
        http_path="/v1/agents",
        operation_id="createAgent",
        properties={
            "name": {"type": "string"},
            "source": {
                "type": "object",
                "description": "Where the agent is installed from, e.g. {\"type\": \"npm\", \"npm\": {...}}.",
            },
        },
        required=["name"],
        handler=_create,
    ),
    endpoint(
        "retrieve_agents",
        "Get an agent.",
        resource="agents",
        operation="read",
        http_method="get",
        http_path="/v1/agents/{id}",
        operation_id="getAgent",
        properties={"id": _ID},
        required=["id"],
        handler=_retrieve,
    ),
    endpoint(
        "list_agents",
        "List agents.",
        resource="agents",
        operation="read",
        http_method="get",
        http_path="/v1/agents",
        operation_id="listAgents",
        properties={
            "name": {"type": "string"},
            "is_public": {"type": "boolean"},
            "limit": {"type": "integer"},
            "starting_after": {"type": "string"},
        },
        handler=_list,
    ),
]
