"""Repository connection tools."""

from __future__ import annotations

from typing import Any

from runloop_client_mcp.arguments import optional_str, page_params, require_str
from runloop_client_mcp.endpoints import endpoint, to_jsonable

_ID = {"type": "string", "description": "The repository connection ID."}
_AUTH = {
    "blueprint_id": {
        "type": "string",
        "description": "Blueprint used as the base image for inspection.",
    },
    "github_auth_token": {"type": "string", "description": "GitHub token for private repositories."},
}


async def _create(client, args: dict[str, Any]) -> Any:
    result = await client.repositories.create(
        name=require_str(args, "name"),
        owner=require_str(args, "owner"),
        blueprint_id=optional_str(args, "blueprint_id"),
        github_auth_token=optional_str(args, "github_auth_token"),
    )
    return to_jsonable(result)


async def _retrieve(client, args: dict[str, Any]) -> Any:
    return to_jsonable(await client.repositories.retrieve(require_str(args, "id")))


async def _list(client, args: dict[str, Any]) -> Any:
    page = await client.repositories.list(
        name=optional_str(args, "name"),
        owner=optional_str(args, "owner"),
        **page_params(args),
    )
    return to_jsonable(page)


async def _delete(client, args: dict[str, Any]) -> Any:
    return to_jsonable(await client.repositories.delete(require_str(args, "id")))


async def _list_inspections(client, args: dict[str, Any]) -> Any:
    return to_jsonable(await client.repositories.list_inspections(require_str(args, "id")))


async def _refresh(client, args: dict[str, Any]) -> Any:
    result = await client.repositories.refresh(
        require_str(args, "id"),
        blueprint_id=optional_str(args, "blueprint_id"),
        github_auth_token=optional_str(args, "github_auth_token"),
    )
    return to_jsonable(result)


ENDPOINTS = [
    endpoint(
        "create_repositories",
        "Connect a GitHub repository and start inspecting it.",
        resource="repositories",
        operation="write",
        http_method="post",
        http_path="/v1/repositories",
        operation_id="createRepositoryConnection",
        properties={
            "name": {"type": "string", "description": "Repository name."},
            "owner": {"type": "string", "description": "Account or organization owning the repository."},
            **_AUTH,
        },
        required=["name", "owner"],
        handler=_create,
    ),
    endpoint(
        "retrieve_repositories",
        "Get a repository connection.",
        resource="repositories",
        operation="read",
        http_method="get",
        http_path="/v1/repositories/{id}",
        operation_id="getRepositoryConnection",
        properties={"id": _ID},
        required=["id"],
        handler=_retrieve,
    ),
    endpoint(
        "list_repositories",
        "List repository connections.",
        resource="repositories",
        operation="read",
        http_method="get",
        http_path="/v1/repositories",
        operation_id="listRepositoryConnections",
        properties={
            "name": {"type": "string"},
            "owner": {"type": "string"},
            "limit": {"type": "integer"},
            "starting_after": {"type": "string"},
        },
        handler=_list,
    ),
    endpoint(
        "delete_repositories",
        "Delete a repository connection.",
        resource="repositories",
        operation="write",
        http_method="post",
        http_path="/v1/repositories/{id}/delete",
        operation_id="deleteRepositoryConnection",
        properties={"id": _ID},
        required=["id"],
        handler=_delete,
    ),
    endpoint(
        "list_inspections_repositories",
        "List the inspections of a repository connection.",
        resource="repositories",
        operation="read",
        http_method="get",
        http_path="/v1/repositories/{id}/inspections",
        operation_id="listRepositoryInspections",
        properties={"id": _ID},
        required=["id"],
        handler=_list_inspections,
    ),
    endpoint(
        "refresh_repositories",
        "Re-inspect a repository at its latest commit.",
        resource="repositories",
        operation="write",
        http_method="post",
        http_path="/v1/repositories/{id}/refresh",
        operation_id="refreshRepositoryConnection",
        properties={"id": _ID, **_AUTH},
        required=["id"],
        handler=_refresh,
    ),
]
