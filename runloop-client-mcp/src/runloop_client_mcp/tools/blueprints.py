"""Blueprint tools."""

from __future__ import annotations

from typing import Any

from runloop_client_mcp.arguments import body_without, optional_str, page_params, require_str
from runloop_client_mcp.endpoints import endpoint, to_jsonable

_ID = {"type": "string", "description": "The blueprint ID."}
_LIST_PROPERTIES: dict[str, Any] = {
    "name": {"type": "string", "description": "Filter by name."},
    "limit": {"type": "integer", "description": "The limit of items to return. Default is 20."},
    "starting_after": {
        "type": "string",
        "description": "Load the next page of data starting after the item with the given ID.",
    },
}
_BUILD_PROPERTIES: dict[str, Any] = {
    "name": {"type": "string", "description": "Name of the blueprint."},
    "dockerfile": {"type": "string", "description": "Dockerfile contents used to build the image."},
    "system_setup_commands": {
        "type": "array",
        "items": {"type": "string"},
        "description": "Commands run after the image is built.",
    },
    "file_mounts": {
        "type": "object",
        "description": "Map of paths to inline file contents (786000 bytes max per file).",
        "additionalProperties": {"type": "string"},
    },
    "code_mounts": {"type": "array", "items": {"type": "object"}},
    "launch_parameters": {"type": "object"},
    "base_blueprint_id": {"type": "string"},
    "metadata": {"type": "object", "additionalProperties": {"type": "string"}},
}


async def _create(client, args: dict[str, Any]) -> Any:
    result = await client.blueprints.create(
        name=require_str(args, "name"),
        **body_without(args, "name"),
    )
    return to_jsonable(result)


async def _retrieve(client, args: dict[str, Any]) -> Any:
    return to_jsonable(await client.blueprints.retrieve(require_str(args, "id")))


async def _list(client, args: dict[str, Any]) -> Any:
    page = await client.blueprints.list(name=optional_str(args, "name"), **page_params(args))
    return to_jsonable(page)


async def _list_public(client, args: dict[str, Any]) -> Any:
    page = await client.blueprints.list_public(name=optional_str(args, "name"), **page_params(args))
    return to_jsonable(page)


async def _delete(client, args: dict[str, Any]) -> Any:
    return to_jsonable(await client.blueprints.delete(require_str(args, "id")))


async def _logs(client, args: dict[str, Any]) -> Any:
    return to_jsonable(await client.blueprints.logs(require_str(args, "id")))


async def _preview(client, args: dict[str, Any]) -> Any:
    result = await client.blueprints.preview(
        name=require_str(args, "name"),
        **body_without(args, "name"),
    )
    return to_jsonable(result)


ENDPOINTS = [
    endpoint(
        "create_blueprints",
        "Start building a blueprint, a reusable devbox image.",
        resource="blueprints",
        operation="write",
        http_method="post",
        http_path="/v1/blueprints",
        operation_id="createBlueprint",
        properties=_BUILD_PROPERTIES,
        required=["name"],
        handler=_create,
    ),
    endpoint(
        "retrieve_blueprints",
        "Get the details and build status of a blueprint.",
        resource="blueprints",
        operation="read",
        http_method="get",
        http_path="/v1/blueprints/{id}",
        operation_id="getBlueprint",
        properties={"id": _ID},
        required=["id"],
        handler=_retrieve,
    ),
    endpoint(
        "list_blueprints",
        "List blueprints.",
        resource="blueprints",
        operation="read",
        http_method="get",
        http_path="/v1/blueprints",
        operation_id="listBlueprints",
        properties=_LIST_PROPERTIES,
        handler=_list,
    ),
    endpoint(
        "list_public_blueprints",
        "List public blueprints shared by Runloop.",
        resource="blueprints",
        operation="read",
        http_method="get",
        http_path="/v1/blueprints/list_public",
        operation_id="listPublicBlueprints",
        properties=_LIST_PROPERTIES,
        handler=_list_public,
    ),
    endpoint(
        "delete_blueprints",
        "Delete a blueprint.",
        resource="blueprints",
        operation="write",
        http_method="post",
        http_path="/v1/blueprints/{id}/delete",
        operation_id="deleteBlueprint",
        properties={"id": _ID},
        required=["id"],
        handler=_delete,
    ),
    endpoint(
        "logs_blueprints",
        "Get the build logs of a blueprint.",
        resource="blueprints",
        operation="read",
        http_method="get",
        http_path="/v1/blueprints/{id}/logs",
        operation_id="getBlueprintBuildLogs",
        properties={"id": _ID},
        required=["id"],
        handler=_logs,
    ),
    endpoint(
        "preview_blueprints",
        "Preview the Dockerfile a blueprint build would use, without building it.",
        resource="blueprints",
        operation="write",
        http_method="post",
        http_path="/v1/blueprints/preview",
        operation_id="previewBlueprint",
        properties=_BUILD_PROPERTIES,
        required=["name"],
        handler=_preview,
    ),
]
