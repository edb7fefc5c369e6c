"""Object storage tools."""

from __future__ import annotations

from typing import Any

from runloop_client_mcp.arguments import (
    optional_dict,
    optional_int,
    optional_str,
    page_params,
    require_str,
)
from runloop_client_mcp.endpoints import endpoint, to_jsonable

_ID = {"type": "string", "description": "The object ID."}
_LIST_PROPERTIES: dict[str, Any] = {
    "name": {"type": "string", "description": "Filter objects by name (partial match supported)."},
    "content_type": {"type": "string", "description": "Filter objects by content type."},
    "state": {
        "type": "string",
        "description": "Filter objects by state (UPLOADING, READ_ONLY, DELETED).",
    },
    "search": {"type": "string", "description": "Search by object ID or name."},
    "limit": {"type": "integer", "description": "The limit of items to return. Default is 20."},
    "starting_after": {
        "type": "string",
        "description": "Load the next page of data starting after the item with the given ID.",
    },
}


def _list_filters(args: dict[str, Any]) -> dict[str, Any]:
    return {
        "name": optional_str(args, "name"),
        "content_type": optional_str(args, "content_type"),
        "state": optional_str(args, "state"),
        "search": optional_str(args, "search"),
        **page_params(args),
    }


async def _create(client, args: dict[str, Any]) -> Any:
    result = await client.objects.create(
        name=require_str(args, "name"),
        content_type=require_str(args, "content_type"),
        metadata=optional_dict(args, "metadata"),
    )
    return to_jsonable(result)


async def _retrieve(client, args: dict[str, Any]) -> Any:
    return to_jsonable(await client.objects.retrieve(require_str(args, "id")))


async def _list(client, args: dict[str, Any]) -> Any:
    return to_jsonable(await client.objects.list(**_list_filters(args)))


async def _list_public(client, args: dict[str, Any]) -> Any:
    return to_jsonable(await client.objects.list_public(**_list_filters(args)))


async def _delete(client, args: dict[str, Any]) -> Any:
    return to_jsonable(await client.objects.delete(require_str(args, "id")))


async def _complete(client, args: dict[str, Any]) -> Any:
    return to_jsonable(await client.objects.complete(require_str(args, "id")))


async def _download(client, args: dict[str, Any]) -> Any:
    result = await client.objects.download(
        require_str(args, "id"),
        duration_seconds=optional_int(args, "duration_seconds", min_value=1),
    )
    return to_jsonable(result)


ENDPOINTS = [
    endpoint(
        "create_objects",
        "Create an object and get a presigned URL to upload its contents.",
        resource="objects",
        operation="write",
        http_method="post",
        http_path="/v1/objects",
        operation_id="createObject",
        properties={
            "name": {"type": "string"},
            "content_type": {
                "type": "string",
                "enum": ["unspecified", "text", "binary", "gzip", "tar", "tgz"],
            },
            "metadata": {"type": "object", "additionalProperties": {"type": "string"}},
        },
        required=["name", "content_type"],
        handler=_create,
    ),
    endpoint(
        "retrieve_objects",
        "Get an object.",
        resource="objects",
        operation="read",
        http_method="get",
        http_path="/v1/objects/{id}",
        operation_id="getObject",
        properties={"id": _ID},
        required=["id"],
        handler=_retrieve,
    ),
    endpoint(
        "list_objects",
        "List objects of the account.",
        resource="objects",
        operation="read",
        http_method="get",
        http_path="/v1/objects",
        operation_id="listObjects",
        properties=_LIST_PROPERTIES,
        handler=_list,
    ),
    endpoint(
        "list_public_objects",
        "List public objects.",
        resource="objects",
        operation="read",
        http_method="get",
        http_path="/v1/objects/list_public",
        operation_id="listPublicObjects",
        properties=_LIST_PROPERTIES,
        handler=_list_public,
    ),
    endpoint(
        "delete_objects",
        "Delete an object.",
        resource="objects",
        operation="write",
        http_method="post",
        http_path="/v1/objects/{id}/delete",
        operation_id="deleteObject",
        properties={"id": _ID},
        required=["id"],
        handler=_delete,
    ),
    endpoint(
        "complete_objects",
        "Mark an object upload complete, making it read-only.",
        resource="objects",
        operation="write",
        http_method="post",
        http_path="/v1/objects/{id}/complete",
        operation_id="completeObject",
        properties={"id": _ID},
        required=["id"],
        handler=_complete,
    ),
    endpoint(
        "download_objects",
        "Get a presigned download URL for an object.",
        resource="objects",
        operation="read",
        http_method="get",
        http_path="/v1/objects/{id}/download",
        operation_id="downloadObject",
        properties={
            "id": _ID,
            "duration_seconds": {
                "type": "integer",
                "description": "Seconds the URL stays valid. Default is 3600.",
            },
        },
        required=["id"],
        handler=_download,
    ),
]
