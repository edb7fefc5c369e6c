"""Devbox tools."""

from __future__ import annotations

import base64
from typing import Any

from runloop_client_mcp.arguments import (
    body_without,
    optional_bool,
    optional_dict,
    optional_int,
    optional_str,
    page_params,
    read_int,
    require_str,
    require_str_list,
)
from runloop_client_mcp.endpoints import endpoint, to_jsonable

_ID = {"type": "string", "description": "The devbox ID."}
_NAME = {"type": "string", "description": "Display name."}
_METADATA = {
    "type": "object",
    "description": "User defined metadata.",
    "additionalProperties": {"type": "string"},
}
_LIMIT = {"type": "integer", "description": "The limit of items to return. Default is 20."}
_STARTING_AFTER = {
    "type": "string",
    "description": "Load the next page of data starting after the item with the given ID.",
}
_COMMAND = {"type": "string", "description": "The shell command to execute."}
_SHELL_NAME = {
    "type": "string",
    "description": "Named shell to run in; state such as cwd and env persists between commands.",
}


# Devboxes


async def _create(client, args: dict[str, Any]) -> Any:
    return to_jsonable(await client.devboxes.create(**body_without(args)))


async def _retrieve(client, args: dict[str, Any]) -> Any:
    return to_jsonable(await client.devboxes.retrieve(require_str(args, "id")))


async def _update(client, args: dict[str, Any]) -> Any:
    result = await client.devboxes.update(
        require_str(args, "id"),
        name=optional_str(args, "name"),
        metadata=optional_dict(args, "metadata"),
    )
    return to_jsonable(result)


async def _list(client, args: dict[str, Any]) -> Any:
    page = await client.devboxes.list(status=optional_str(args, "status"), **page_params(args))
    return to_jsonable(page)


async def _create_ssh_key(client, args: dict[str, Any]) -> Any:
    return to_jsonable(await client.devboxes.create_ssh_key(require_str(args, "id")))


async def _create_tunnel(client, args: dict[str, Any]) -> Any:
    result = await client.devboxes.create_tunnel(
        require_str(args, "id"),
        port=read_int(args, "port", min_value=1, max_value=65535),
    )
    return to_jsonable(result)


async def _remove_tunnel(client, args: dict[str, Any]) -> Any:
    result = await client.devboxes.remove_tunnel(
        require_str(args, "id"),
        port=read_int(args, "port", min_value=1, max_value=65535),
    )
    return to_jsonable(result)


async def _keep_alive(client, args: dict[str, Any]) -> Any:
    return to_jsonable(await client.devboxes.keep_alive(require_str(args, "id")))


async def _suspend(client, args: dict[str, Any]) -> Any:
    return to_jsonable(await client.devboxes.suspend(require_str(args, "id")))


async def _resume(client, args: dict[str, Any]) -> Any:
    return to_jsonable(await client.devboxes.resume(require_str(args, "id")))


async def _shutdown(client, args: dict[str, Any]) -> Any:
    return to_jsonable(await client.devboxes.shutdown(require_str(args, "id")))


async def _snapshot_disk(client, args: dict[str, Any]) -> Any:
    result = await client.devboxes.snapshot_disk(
        require_str(args, "id"),
        name=optional_str(args, "name"),
        metadata=optional_dict(args, "metadata"),
    )
    return to_jsonable(result)


async def _snapshot_disk_async(client, args: dict[str, Any]) -> Any:
    result = await client.devboxes.snapshot_disk_async(
        require_str(args, "id"),
        name=optional_str(args, "name"),
        metadata=optional_dict(args, "metadata"),
    )
    return to_jsonable(result)


async def _read_file_contents(client, args: dict[str, Any]) -> Any:
    return await client.devboxes.read_file_contents(
        require_str(args, "id"),
        file_path=require_str(args, "file_path"),
    )


async def _write_file_contents(client, args: dict[str, Any]) -> Any:
    contents = args.get("contents")
    if not isinstance(contents, str):
        raise ValueError("field 'contents' must be a string")
    result = await client.devboxes.write_file_contents(
        require_str(args, "id"),
        file_path=require_str(args, "file_path"),
        contents=contents,
    )
    return to_jsonable(result)


async def _upload_file(client, args: dict[str, Any]) -> Any:
    contents = args.get("file", "")
    if not isinstance(contents, str):
        raise ValueError("field 'file' must be a string")
    result = await client.devboxes.upload_file(
        require_str(args, "id"),
        path=require_str(args, "path"),
        file=contents.encode("utf-8"),
    )
    return to_jsonable(result)


async def _download_file(client, args: dict[str, Any]) -> Any:
    path = require_str(args, "path")
    content = await client.devboxes.download_file(require_str(args, "id"), path=path)
    return {
        "path": path,
        "size_bytes": len(content),
        "content_base64": base64.b64encode(content).decode("ascii"),
    }


async def _execute(client, args: dict[str, Any]) -> Any:
    result = await client.devboxes.execute(
        require_str(args, "id"),
        command=require_str(args, "command"),
        command_id=optional_str(args, "command_id"),
        shell_name=optional_str(args, "shell_name"),
        optimistic_timeout=optional_int(args, "optimistic_timeout", min_value=0),
    )
    return to_jsonable(result)


async def _execute_sync(client, args: dict[str, Any]) -> Any:
    result = await client.devboxes.execute_sync(
        require_str(args, "id"),
        command=require_str(args, "command"),
        shell_name=optional_str(args, "shell_name"),
    )
    return to_jsonable(result)


async def _execute_async(client, args: dict[str, Any]) -> Any:
    result = await client.devboxes.execute_async(
        require_str(args, "id"),
        command=require_str(args, "command"),
        shell_name=optional_str(args, "shell_name"),
    )
    return to_jsonable(result)


async def _wait_for_command(client, args: dict[str, Any]) -> Any:
    result = await client.devboxes.wait_for_command(
        require_str(args, "id"),
        require_str(args, "execution_id"),
        statuses=require_str_list(args, "statuses"),
        timeout_seconds=optional_int(args, "timeout_seconds", min_value=1),
    )
    return to_jsonable(result)


async def _list_disk_snapshots(client, args: dict[str, Any]) -> Any:
    page = await client.devboxes.list_disk_snapshots(
        devbox_id=optional_str(args, "devbox_id"),
        **page_params(args),
    )
    return to_jsonable(page)


async def _delete_disk_snapshot(client, args: dict[str, Any]) -> Any:
    return to_jsonable(await client.devboxes.delete_disk_snapshot(require_str(args, "id")))


# Executions


async def _retrieve_execution(client, args: dict[str, Any]) -> Any:
    result = await client.devboxes.executions.retrieve(
        require_str(args, "devbox_id"),
        require_str(args, "execution_id"),
    )
    return to_jsonable(result)


async def _kill_execution(client, args: dict[str, Any]) -> Any:
    result = await client.devboxes.executions.kill(
        require_str(args, "devbox_id"),
        require_str(args, "execution_id"),
        kill_process_group=optional_bool(args, "kill_process_group"),
    )
    return to_jsonable(result)


# Disk snapshots


async def _update_disk_snapshot(client, args: dict[str, Any]) -> Any:
    result = await client.devboxes.disk_snapshots.update(
        require_str(args, "id"),
        name=optional_str(args, "name"),
        metadata=optional_dict(args, "metadata"),
    )
    return to_jsonable(result)


async def _query_disk_snapshot_status(client, args: dict[str, Any]) -> Any:
    return to_jsonable(await client.devboxes.disk_snapshots.query_status(require_str(args, "id")))


# Logs, browsers, computers


async def _list_logs(client, args: dict[str, Any]) -> Any:
    result = await client.devboxes.logs.list(
        require_str(args, "id"),
        execution_id=optional_str(args, "execution_id"),
        shell_name=optional_str(args, "shell_name"),
    )
    return to_jsonable(result)


async def _create_browser(client, args: dict[str, Any]) -> Any:
    return to_jsonable(await client.devboxes.browsers.create(name=optional_str(args, "name")))


async def _retrieve_browser(client, args: dict[str, Any]) -> Any:
    return to_jsonable(await client.devboxes.browsers.retrieve(require_str(args, "id")))


async def _create_computer(client, args: dict[str, Any]) -> Any:
    result = await client.devboxes.computers.create(
        name=optional_str(args, "name"),
        display_dimensions=optional_dict(args, "display_dimensions"),
    )
    return to_jsonable(result)


async def _retrieve_computer(client, args: dict[str, Any]) -> Any:
    return to_jsonable(await client.devboxes.computers.retrieve(require_str(args, "id")))


async def _keyboard_interaction(client, args: dict[str, Any]) -> Any:
    result = await client.devboxes.computers.keyboard_interaction(
        require_str(args, "id"),
        action=require_str(args, "action"),
        text=optional_str(args, "text"),
    )
    return to_jsonable(result)


async def _mouse_interaction(client, args: dict[str, Any]) -> Any:
    result = await client.devboxes.computers.mouse_interaction(
        require_str(args, "id"),
        action=require_str(args, "action"),
        coordinates=optional_dict(args, "coordinates"),
    )
    return to_jsonable(result)


async def _screen_interaction(client, args: dict[str, Any]) -> Any:
    result = await client.devboxes.computers.screen_interaction(
        require_str(args, "id"),
        action=require_str(args, "action"),
    )
    return to_jsonable(result)


_CREATE_PROPERTIES: dict[str, Any] = {
    "name": _NAME,
    "blueprint_id": {
        "type": "string",
        "description": "Blueprint to launch from. Only one of snapshot_id, blueprint_id and blueprint_name may be set.",
    },
    "blueprint_name": {
        "type": "string",
        "description": "Launch from the latest successful build of the blueprint with this name.",
    },
    "snapshot_id": {"type": "string", "description": "Disk snapshot to launch from."},
    "entrypoint": {
        "type": "string",
        "description": "Script run as the devbox main process; the devbox shuts down when it exits.",
    },
    "environment_variables": {"type": "object", "additionalProperties": {"type": "string"}},
    "file_mounts": {
        "type": "object",
        "description": "Map of paths to file contents written before setup.",
        "additionalProperties": {"type": "string"},
    },
    "launch_parameters": {
        "type": "object",
        "description": "Resource size, keep-alive time, available ports and launch commands.",
    },
    "metadata": _METADATA,
    "secrets": {
        "type": "object",
        "description": 'Map of environment variable names to secret names, e.g. {"DB_PASS": "DATABASE_PASSWORD"}.',
        "additionalProperties": {"type": "string"},
    },
}

_INTERACTION_ID = {"type": "string", "description": "The computer ID."}

ENDPOINTS = [
    endpoint(
        "create_devboxes",
        "Create a devbox and begin the boot process. The devbox launches in the "
        "'provisioning' state, runs its setup in 'initializing' and is ready in 'running'.",
        resource="devboxes",
        operation="write",
        http_method="post",
        http_path="/v1/devboxes",
        operation_id="createDevbox",
        properties=_CREATE_PROPERTIES,
        handler=_create,
    ),
    endpoint(
        "retrieve_devboxes",
        "Get the latest details and status of a devbox.",
        resource="devboxes",
        operation="read",
        http_method="get",
        http_path="/v1/devboxes/{id}",
        operation_id="getDevbox",
        properties={"id": _ID},
        required=["id"],
        handler=_retrieve,
    ),
    endpoint(
        "update_devboxes",
        "Update the name or metadata of a devbox.",
        resource="devboxes",
        operation="write",
        http_method="post",
        http_path="/v1/devboxes/{id}",
        operation_id="updateDevbox",
        properties={"id": _ID, "name": _NAME, "metadata": _METADATA},
        required=["id"],
        handler=_update,
    ),
    endpoint(
        "list_devboxes",
        "List devboxes, optionally filtered by status.",
        resource="devboxes",
        operation="read",
        http_method="get",
        http_path="/v1/devboxes",
        operation_id="listDevboxes",
        properties={
            "status": {
                "type": "string",
                "enum": [
                    "provisioning",
                    "initializing",
                    "running",
                    "suspending",
                    "suspended",
                    "resuming",
                    "failure",
                    "shutdown",
                ],
            },
            "limit": _LIMIT,
            "starting_after": _STARTING_AFTER,
        },
        handler=_list,
    ),
    endpoint(
        "create_ssh_key_devboxes",
        "Create an SSH key for a devbox.",
        resource="devboxes",
        operation="write",
        http_method="post",
        http_path="/v1/devboxes/{id}/create_ssh_key",
        operation_id="createDevboxSshKey",
        properties={"id": _ID},
        required=["id"],
        handler=_create_ssh_key,
    ),
    endpoint(
        "create_tunnel_devboxes",
        "Create a live tunnel to an available port on the devbox.",
        resource="devboxes",
        operation="write",
        http_method="post",
        http_path="/v1/devboxes/{id}/create_tunnel",
        operation_id="createDevboxTunnel",
        properties={
            "id": _ID,
            "port": {"type": "integer", "description": "Devbox port the tunnel exposes."},
        },
        required=["id", "port"],
        handler=_create_tunnel,
    ),
    endpoint(
        "remove_tunnel_devboxes",
        "Remove a previously opened tunnel.",
        resource="devboxes",
        operation="write",
        http_method="post",
        http_path="/v1/devboxes/{id}/remove_tunnel",
        operation_id="removeDevboxTunnel",
        properties={"id": _ID, "port": {"type": "integer"}},
        required=["id", "port"],
        handler=_remove_tunnel,
    ),
    endpoint(
        "keep_alive_devboxes",
        "Reset the idle timer of a devbox.",
        resource="devboxes",
        operation="write",
        http_method="post",
        http_path="/v1/devboxes/{id}/keep_alive",
        operation_id="keepAliveDevbox",
        properties={"id": _ID},
        required=["id"],
        handler=_keep_alive,
    ),
    endpoint(
        "suspend_devboxes",
        "Suspend a running devbox, keeping its disk so it can be resumed.",
        resource="devboxes",
        operation="write",
        http_method="post",
        http_path="/v1/devboxes/{id}/suspend",
        operation_id="suspendDevbox",
        properties={"id": _ID},
        required=["id"],
        handler=_suspend,
    ),
    endpoint(
        "resume_devboxes",
        "Resume a suspended devbox.",
        resource="devboxes",
        operation="write",
        http_method="post",
        http_path="/v1/devboxes/{id}/resume",
        operation_id="resumeDevbox",
        properties={"id": _ID},
        required=["id"],
        handler=_resume,
    ),
    endpoint(
        "shutdown_devboxes",
        "Shut down a devbox permanently.",
        resource="devboxes",
        operation="write",
        http_method="post",
        http_path="/v1/devboxes/{id}/shutdown",
        operation_id="shutdownDevbox",
        properties={"id": _ID},
        required=["id"],
        handler=_shutdown,
    ),
    endpoint(
        "snapshot_disk_devboxes",
        "Create a disk snapshot of a devbox and wait for it to finish.",
        resource="devboxes",
        operation="write",
        http_method="post",
        http_path="/v1/devboxes/{id}/snapshot_disk",
        operation_id="snapshotDevboxDisk",
        properties={"id": _ID, "name": _NAME, "metadata": _METADATA},
        required=["id"],
        handler=_snapshot_disk,
    ),
    endpoint(
        "snapshot_disk_async_devboxes",
        "Start a disk snapshot of a devbox without waiting for it.",
        resource="devboxes",
        operation="write",
        http_method="post",
        http_path="/v1/devboxes/{id}/snapshot_disk_async",
        operation_id="snapshotDevboxDiskAsync",
        properties={"id": _ID, "name": _NAME, "metadata": _METADATA},
        required=["id"],
        handler=_snapshot_disk_async,
    ),
    endpoint(
        "read_file_contents_devboxes",
        "Read a UTF-8 text file from the devbox.",
        resource="devboxes",
        operation="write",
        http_method="post",
        http_path="/v1/devboxes/{id}/read_file_contents",
        operation_id="readDevboxFileContents",
        properties={
            "id": _ID,
            "file_path": {
                "type": "string",
                "description": "Path of the file, relative to the user home directory.",
            },
        },
        required=["id", "file_path"],
        handler=_read_file_contents,
    ),
    endpoint(
        "write_file_contents_devboxes",
        "Write a UTF-8 text file on the devbox, creating parent directories.",
        resource="devboxes",
        operation="write",
        http_method="post",
        http_path="/v1/devboxes/{id}/write_file_contents",
        operation_id="writeDevboxFileContents",
        properties={
            "id": _ID,
            "file_path": {"type": "string"},
            "contents": {"type": "string"},
        },
        required=["id", "file_path", "contents"],
        handler=_write_file_contents,
    ),
    endpoint(
        "upload_file_devboxes",
        "Upload a file to the devbox.",
        resource="devboxes",
        operation="write",
        http_method="post",
        http_path="/v1/devboxes/{id}/upload_file",
        operation_id="uploadDevboxFile",
        properties={
            "id": _ID,
            "path": {
                "type": "string",
                "description": "Destination path, relative to the user home directory.",
            },
            "file": {"type": "string", "description": "File contents."},
        },
        required=["id", "path"],
        handler=_upload_file,
    ),
    endpoint(
        "download_file_devboxes",
        "Download a file from the devbox. Contents are returned base64 encoded.",
        resource="devboxes",
        operation="write",
        http_method="post",
        http_path="/v1/devboxes/{id}/download_file",
        operation_id="downloadDevboxFile",
        properties={"id": _ID, "path": {"type": "string"}},
        required=["id", "path"],
        handler=_download_file,
    ),
    endpoint(
        "execute_devboxes",
        "Execute a command, returning early with the result if it finishes within "
        "optimistic_timeout seconds.",
        resource="devboxes",
        operation="write",
        http_method="post",
        http_path="/v1/devboxes/{id}/execute",
        operation_id="executeDevbox",
        properties={
            "id": _ID,
            "command": _COMMAND,
            "command_id": {"type": "string", "description": "Client generated command ID."},
            "shell_name": _SHELL_NAME,
            "optimistic_timeout": {"type": "integer"},
        },
        required=["id", "command"],
        handler=_execute,
    ),
    endpoint(
        "execute_sync_devboxes",
        "Execute a command and wait for it to exit.",
        resource="devboxes",
        operation="write",
        http_method="post",
        http_path="/v1/devboxes/{id}/execute_sync",
        operation_id="executeDevboxSync",
        properties={"id": _ID, "command": _COMMAND, "shell_name": _SHELL_NAME},
        required=["id", "command"],
        handler=_execute_sync,
    ),
    endpoint(
        "execute_async_devboxes",
        "Start a command without waiting; returns the execution ID.",
        resource="devboxes",
        operation="write",
        http_method="post",
        http_path="/v1/devboxes/{id}/execute_async",
        operation_id="executeDevboxAsync",
        properties={"id": _ID, "command": _COMMAND, "shell_name": _SHELL_NAME},
        required=["id", "command"],
        handler=_execute_async,
    ),
    endpoint(
        "wait_for_command_devboxes",
        "Wait until an execution reaches one of the given statuses.",
        resource="devboxes",
        operation="write",
        http_method="post",
        http_path="/v1/devboxes/{id}/executions/{execution_id}/wait_for_status",
        operation_id="waitForDevboxCommand",
        properties={
            "id": _ID,
            "execution_id": {"type": "string"},
            "statuses": {
                "type": "array",
                "items": {"type": "string", "enum": ["queued", "running", "completed"]},
            },
            "timeout_seconds": {"type": "integer"},
        },
        required=["id", "execution_id", "statuses"],
        handler=_wait_for_command,
    ),
    endpoint(
        "list_disk_snapshots_devboxes",
        "List disk snapshots, optionally for one devbox.",
        resource="devboxes",
        operation="read",
        http_method="get",
        http_path="/v1/devboxes/disk_snapshots",
        operation_id="listDevboxDiskSnapshots",
        properties={
            "devbox_id": {"type": "string"},
            "limit": _LIMIT,
            "starting_after": _STARTING_AFTER,
        },
        handler=_list_disk_snapshots,
    ),
    endpoint(
        "delete_disk_snapshot_devboxes",
        "Delete a disk snapshot.",
        resource="devboxes",
        operation="write",
        http_method="post",
        http_path="/v1/devboxes/disk_snapshots/{id}/delete",
        operation_id="deleteDevboxDiskSnapshot",
        properties={"id": {"type": "string", "description": "The snapshot ID."}},
        required=["id"],
        handler=_delete_disk_snapshot,
    ),
    endpoint(
        "retrieve_devboxes_executions",
        "Get the status and output of an execution.",
        resource="devboxes.executions",
        operation="read",
        http_method="get",
        http_path="/v1/devboxes/{devbox_id}/executions/{execution_id}",
        operation_id="getDevboxExecution",
        properties={"devbox_id": {"type": "string"}, "execution_id": {"type": "string"}},
        required=["devbox_id", "execution_id"],
        handler=_retrieve_execution,
    ),
    endpoint(
        "kill_devboxes_executions",
        "Kill a running execution.",
        resource="devboxes.executions",
        operation="write",
        http_method="post",
        http_path="/v1/devboxes/{devbox_id}/executions/{execution_id}/kill",
        operation_id="killDevboxExecution",
        properties={
            "devbox_id": {"type": "string"},
            "execution_id": {"type": "string"},
            "kill_process_group": {"type": "boolean"},
        },
        required=["devbox_id", "execution_id"],
        handler=_kill_execution,
    ),
    endpoint(
        "update_devboxes_disk_snapshots",
        "Update the name or metadata of a disk snapshot.",
        resource="devboxes.disk_snapshots",
        operation="write",
        http_method="post",
        http_path="/v1/devboxes/disk_snapshots/{id}",
        operation_id="updateDiskSnapshot",
        properties={"id": {"type": "string"}, "name": _NAME, "metadata": _METADATA},
        required=["id"],
        handler=_update_disk_snapshot,
    ),
    endpoint(
        "query_status_devboxes_disk_snapshots",
        "Get the status of an asynchronous disk snapshot.",
        resource="devboxes.disk_snapshots",
        operation="read",
        http_method="get",
        http_path="/v1/devboxes/disk_snapshots/{id}/status",
        operation_id="queryDiskSnapshotStatus",
        properties={"id": {"type": "string"}},
        required=["id"],
        handler=_query_disk_snapshot_status,
    ),
    endpoint(
        "list_devboxes_logs",
        "Get the logs of a devbox, optionally for one execution or shell.",
        resource="devboxes.logs",
        operation="read",
        http_method="get",
        http_path="/v1/devboxes/{id}/logs",
        operation_id="listDevboxLogs",
        properties={
            "id": _ID,
            "execution_id": {"type": "string"},
            "shell_name": _SHELL_NAME,
        },
        required=["id"],
        handler=_list_logs,
    ),
    endpoint(
        "create_devboxes_browsers",
        "Create a devbox running a browser reachable over CDP.",
        resource="devboxes.browsers",
        operation="write",
        http_method="post",
        http_path="/v1/devboxes/browsers",
        operation_id="createBrowser",
        properties={"name": _NAME},
        handler=_create_browser,
    ),
    endpoint(
        "retrieve_devboxes_browsers",
        "Get a browser devbox and its connection URL.",
        resource="devboxes.browsers",
        operation="read",
        http_method="get",
        http_path="/v1/devboxes/browsers/{id}",
        operation_id="getBrowser",
        properties={"id": {"type": "string"}},
        required=["id"],
        handler=_retrieve_browser,
    ),
    endpoint(
        "create_devboxes_computers",
        "Create a devbox exposing a desktop for computer-use agents.",
        resource="devboxes.computers",
        operation="write",
        http_method="post",
        http_path="/v1/devboxes/computers",
        operation_id="createComputer",
        properties={
            "name": _NAME,
            "display_dimensions": {
                "type": "object",
                "properties": {
                    "display_width_px": {"type": "integer"},
                    "display_height_px": {"type": "integer"},
                },
            },
        },
        handler=_create_computer,
    ),
    endpoint(
        "retrieve_devboxes_computers",
        "Get a computer devbox and its live screen URL.",
        resource="devboxes.computers",
        operation="read",
        http_method="get",
        http_path="/v1/devboxes/computers/{id}",
        operation_id="getComputer",
        properties={"id": _INTERACTION_ID},
        required=["id"],
        handler=_retrieve_computer,
    ),
    endpoint(
        "keyboard_interaction_devboxes_computers",
        "Press a key combination or type text on a computer devbox.",
        resource="devboxes.computers",
        operation="write",
        http_method="post",
        http_path="/v1/devboxes/computers/{id}/keyboard_interaction",
        operation_id="computerKeyboardInteraction",
        properties={
            "id": _INTERACTION_ID,
            "action": {"type": "string", "enum": ["key", "type"]},
            "text": {"type": "string"},
        },
        required=["id", "action"],
        handler=_keyboard_interaction,
    ),
    endpoint(
        "mouse_interaction_devboxes_computers",
        "Move, click or drag the mouse on a computer devbox.",
        resource="devboxes.computers",
        operation="write",
        http_method="post",
        http_path="/v1/devboxes/computers/{id}/mouse_interaction",
        operation_id="computerMouseInteraction",
        properties={
            "id": _INTERACTION_ID,
            "action": {
                "type": "string",
                "enum": [
                    "mouse_move",
                    "left_click",
                    "left_click_drag",
                    "right_click",
                    "middle_click",
                    "double_click",
                ],
            },
            "coordinates": {
                "type": "object",
                "properties": {"x": {"type": "integer"}, "y": {"type": "integer"}},
            },
        },
        required=["id", "action"],
        handler=_mouse_interaction,
    ),
    endpoint(
        "screen_interaction_devboxes_computers",
        "Take a screenshot or read the cursor position of a computer devbox.",
        resource="devboxes.computers",
        operation="write",
        http_method="post",
        http_path="/v1/devboxes/computers/{id}/screen_interaction",
        operation_id="computerScreenInteraction",
        properties={
            "id": _INTERACTION_ID,
            "action": {"type": "string", "enum": ["screenshot", "cursor_position"]},
        },
        required=["id", "action"],
        handler=_screen_interaction,
    ),
]
