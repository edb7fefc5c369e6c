"""Secret tools."""

from __future__ import annotations

from typing import Any

from runloop_client_mcp.arguments import optional_int, require_str
from runloop_client_mcp.endpoints import endpoint, to_jsonable

_NAME = {
    "type": "string",
    "description": "Secret name; devboxes reference secrets by this name.",
}


def _value(args: dict[str, Any]) -> str:
    value = args.get("value")
    if not isinstance(value, str):
        raise ValueError("missing required field: value")
    return value


async def _create(client, args: dict[str, Any]) -> Any:
    result = await client.secrets.create(name=require_str(args, "name"), value=_value(args))
    return to_jsonable(result)


async def _update(client, args: dict[str, Any]) -> Any:
    result = await client.secrets.update(require_str(args, "name"), value=_value(args))
    return to_jsonable(result)


async def _list(client, args: dict[str, Any]) -> Any:
    return to_jsonable(await client.secrets.list(limit=optional_int(args, "limit", min_value=1)))


async def _delete(client, args: dict[str, Any]) -> Any:
    return to_jsonable(await client.secrets.delete(require_str(args, "name")))


ENDPOINTS = [
    endpoint(
        "create_secrets",
        "Create a secret. The value is never returned by the API.",
        resource="secrets",
        operation="write",
        http_method="post",
        http_path="/v1/secrets",
        operation_id="createSecret",
        properties={"name": _NAME, "value": {"type": "string"}},
        required=["name", "value"],
        handler=_create,
    ),
    endpoint(
        "update_secrets",
        "Update the value of a secret.",
        resource="secrets",
        operation="write",
        http_method="post",
        http_path="/v1/secrets/{name}",
        operation_id="updateSecret",
        properties={"name": _NAME, "value": {"type": "string"}},
        required=["name", "value"],
        handler=_update,
    ),
    endpoint(
        "list_secrets",
        "List secrets (names only).",
        resource="secrets",
        operation="read",
        http_method="get",
        http_path="/v1/secrets",
        operation_id="listSecrets",
        properties={"limit": {"type": "integer"}},
        handler=_list,
    ),
    endpoint(
        "delete_secrets",
        "Delete a secret.",
        resource="secrets",
        operation="write",
        http_method="post",
        http_path="/v1/secrets/{name}/delete",
        operation_id="deleteSecret",
        properties={"name": _NAME},
        required=["name"],
        handler=_delete,
    ),
]
