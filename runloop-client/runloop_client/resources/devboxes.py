"""Devbox resource."""

from __future__ import annotations

import uuid
from typing import Any

from runloop_client.pagination import CursorPage
from runloop_client.polling import PollingOptions, await_devbox_state
from runloop_client.resources.base import APIResource, compact
from runloop_client.resources.computers import BrowsersResource, ComputersResource, LogsResource
from runloop_client.resources.disk_snapshots import DiskSnapshotsResource
from runloop_client.resources.executions import ExecutionsResource
from runloop_client.types import (
    DevboxAsyncExecutionDetailView,
    DevboxCreateSSHKeyResponse,
    DevboxExecutionDetailView,
    DevboxSnapshotView,
    DevboxStatus,
    DevboxTunnelView,
    DevboxView,
)

_BASE = "/v1/devboxes"


class DevboxesResource(APIResource):
    """Devbox lifecycle, files and command execution.

    A devbox moves through ``provisioning`` and ``initializing`` to
    ``running``; it can be suspended, resumed and finally shut down.
    """

    def __init__(self, http) -> None:
        super().__init__(http)
        self.executions = ExecutionsResource(http)
        self.disk_snapshots = DiskSnapshotsResource(http)
        self.logs = LogsResource(http)
        self.browsers = BrowsersResource(http)
        self.computers = ComputersResource(http)

    # Lifecycle

    async def create(
        self,
        *,
        name: str | None = None,
        blueprint_id: str | None = None,
        blueprint_name: str | None = None,
        snapshot_id: str | None = None,
        entrypoint: str | None = None,
        environment_variables: dict[str, str] | None = None,
        file_mounts: dict[str, str] | None = None,
        launch_parameters: dict[str, Any] | None = None,
        metadata: dict[str, str] | None = None,
        secrets: dict[str, str] | None = None,
        idempotency_key: str | None = None,
        **extra: Any,
    ) -> DevboxView:
        """Create a devbox.

        At most one of ``blueprint_id``, ``blueprint_name`` and
        ``snapshot_id`` selects the image; without any the default image is
        used. The devbox starts in ``provisioning``; use
        ``await_running`` or ``create_and_await_running`` to wait.

        Args:
            name: Optional display name
            blueprint_id: Blueprint to launch from
            blueprint_name: Latest successful blueprint with this name
            snapshot_id: Disk snapshot to launch from
            entrypoint: Command run when the devbox starts
            environment_variables: Environment for the devbox
            file_mounts: Map of path to file contents
            launch_parameters: Resource size, keep-alive and ports
            metadata: User metadata
            secrets: Map of environment variable to secret name
            idempotency_key: Optional key for safe retries
            **extra: Additional request body fields

        Returns:
            DevboxView for the new devbox
        """
        chosen = [v for v in (blueprint_id, blueprint_name, snapshot_id) if v]
        if len(chosen) > 1:
            raise ValueError(
                "only one of blueprint_id, blueprint_name or snapshot_id may be set"
            )
        body = compact(
            {
                "name": name,
                "blueprint_id": blueprint_id,
                "blueprint_name": blueprint_name,
                "snapshot_id": snapshot_id,
                "entrypoint": entrypoint,
                "environment_variables": environment_variables,
                "file_mounts": file_mounts,
                "launch_parameters": launch_parameters,
                "metadata": metadata,
                "secrets": secrets,
                **extra,
            }
        )
        response = await self._http.post(_BASE, json=body, idempotency_key=idempotency_key)
        return DevboxView.model_validate(response)

    async def retrieve(self, devbox_id: str) -> DevboxView:
        """Get a devbox.

        Raises:
            NotFoundError: If the devbox doesn't exist
        """
        response = await self._http.get(f"{_BASE}/{devbox_id}")
        return DevboxView.model_validate(response)

    async def update(
        self,
        devbox_id: str,
        *,
        name: str | None = None,
        metadata: dict[str, str] | None = None,
    ) -> DevboxView:
        response = await self._http.post(
            f"{_BASE}/{devbox_id}",
            json=compact({"name": name, "metadata": metadata}),
        )
        return DevboxView.model_validate(response)

    async def list(
        self,
        *,
        limit: int | None = None,
        starting_after: str | None = None,
        status: DevboxStatus | str | None = None,
    ) -> CursorPage[DevboxView]:
        """List devboxes.

        Args:
            limit: Max items per page
            starting_after: Cursor (ID of the last item of the previous page)
            status: Filter by status (DevboxStatus enum or string)
        """
        status_value = status.value if isinstance(status, DevboxStatus) else status
        return await self._list(
            _BASE,
            model=DevboxView,
            items_key="devboxes",
            params={
                "limit": limit,
                "starting_after": starting_after,
                "status": status_value,
            },
        )

    async def suspend(self, devbox_id: str) -> DevboxView:
        """Suspend a running devbox, keeping its disk."""
        response = await self._http.post(f"{_BASE}/{devbox_id}/suspend")
        return DevboxView.model_validate(response)

    async def resume(self, devbox_id: str) -> DevboxView:
        response = await self._http.post(f"{_BASE}/{devbox_id}/resume")
        return DevboxView.model_validate(response)

    async def shutdown(self, devbox_id: str) -> DevboxView:
        """Shut the devbox down permanently."""
        response = await self._http.post(f"{_BASE}/{devbox_id}/shutdown")
        return DevboxView.model_validate(response)

    async def keep_alive(self, devbox_id: str) -> Any:
        """Reset the devbox idle timer."""
        return await self._http.post(f"{_BASE}/{devbox_id}/keep_alive")

    # Networking

    async def create_ssh_key(self, devbox_id: str) -> DevboxCreateSSHKeyResponse:
        response = await self._http.post(f"{_BASE}/{devbox_id}/create_ssh_key")
        return DevboxCreateSSHKeyResponse.model_validate(response)

    async def create_tunnel(self, devbox_id: str, *, port: int) -> DevboxTunnelView:
        """Expose a devbox port on a public URL."""
        response = await self._http.post(
            f"{_BASE}/{devbox_id}/create_tunnel",
            json={"port": port},
        )
        return DevboxTunnelView.model_validate(response)

    async def remove_tunnel(self, devbox_id: str, *, port: int) -> Any:
        return await self._http.post(
            f"{_BASE}/{devbox_id}/remove_tunnel",
            json={"port": port},
        )

    # Files

    async def read_file_contents(self, devbox_id: str, *, file_path: str) -> str:
        """Read a UTF-8 text file from the devbox."""
        return await self._http.post_text(
            f"{_BASE}/{devbox_id}/read_file_contents",
            json={"file_path": file_path},
        )

    async def write_file_contents(
        self,
        devbox_id: str,
        *,
        file_path: str,
        contents: str,
    ) -> DevboxExecutionDetailView:
        """Write a UTF-8 text file, creating parent directories."""
        response = await self._http.post(
            f"{_BASE}/{devbox_id}/write_file_contents",
            json={"file_path": file_path, "contents": contents},
        )
        return DevboxExecutionDetailView.model_validate(response)

    async def upload_file(self, devbox_id: str, *, path: str, file: bytes) -> Any:
        """Upload a binary file via multipart/form-data."""
        return await self._http.upload(
            f"{_BASE}/{devbox_id}/upload_file",
            file_content=file,
            data={"path": path},
        )

    async def download_file(self, devbox_id: str, *, path: str) -> bytes:
        return await self._http.download(
            "POST",
            f"{_BASE}/{devbox_id}/download_file",
            json={"path": path},
        )

    # Execution

    async def execute(
        self,
        devbox_id: str,
        *,
        command: str,
        command_id: str | None = None,
        shell_name: str | None = None,
        optimistic_timeout: int | None = None,
    ) -> DevboxAsyncExecutionDetailView:
        """Execute a command, returning early if it finishes quickly.

        The server waits up to ``optimistic_timeout`` seconds; if the command
        is still running the returned status is not ``completed`` and the
        execution can be awaited with ``executions.await_completed``.
        """
        response = await self._http.post(
            f"{_BASE}/{devbox_id}/execute",
            json=compact(
                {
                    "command": command,
                    "command_id": command_id or str(uuid.uuid4()),
                    "shell_name": shell_name,
                    "optimistic_timeout": optimistic_timeout,
                }
            ),
        )
        return DevboxAsyncExecutionDetailView.model_validate(response)

    async def execute_sync(
        self,
        devbox_id: str,
        *,
        command: str,
        shell_name: str | None = None,
    ) -> DevboxExecutionDetailView:
        return await self.executions.execute_sync(
            devbox_id, command=command, shell_name=shell_name
        )

    async def execute_async(
        self,
        devbox_id: str,
        *,
        command: str,
        shell_name: str | None = None,
    ) -> DevboxAsyncExecutionDetailView:
        return await self.executions.execute_async(
            devbox_id, command=command, shell_name=shell_name
        )

    async def wait_for_command(
        self,
        devbox_id: str,
        execution_id: str,
        *,
        statuses: list[str],
        timeout_seconds: int | None = None,
    ) -> DevboxAsyncExecutionDetailView:
        """Long-poll until an execution reaches one of ``statuses``.

        Raises:
            RequestTimeoutError: If the server-side wait elapsed first
        """
        response = await self._http.post(
            f"{_BASE}/{devbox_id}/executions/{execution_id}/wait_for_status",
            json=compact({"statuses": statuses, "timeout_seconds": timeout_seconds}),
        )
        return DevboxAsyncExecutionDetailView.model_validate(response)

    # Snapshots

    async def snapshot_disk(
        self,
        devbox_id: str,
        *,
        name: str | None = None,
        metadata: dict[str, str] | None = None,
    ) -> DevboxSnapshotView:
        """Snapshot the devbox disk and wait for the snapshot to finish."""
        response = await self._http.post(
            f"{_BASE}/{devbox_id}/snapshot_disk",
            json=compact({"name": name, "metadata": metadata}),
        )
        return DevboxSnapshotView.model_validate(response)

    async def snapshot_disk_async(
        self,
        devbox_id: str,
        *,
        name: str | None = None,
        metadata: dict[str, str] | None = None,
    ) -> DevboxSnapshotView:
        """Start a disk snapshot; await it with ``disk_snapshots.await_completed``."""
        response = await self._http.post(
            f"{_BASE}/{devbox_id}/snapshot_disk_async",
            json=compact({"name": name, "metadata": metadata}),
        )
        return DevboxSnapshotView.model_validate(response)

    async def list_disk_snapshots(
        self,
        *,
        devbox_id: str | None = None,
        limit: int | None = None,
        starting_after: str | None = None,
    ) -> CursorPage[DevboxSnapshotView]:
        return await self.disk_snapshots.list(
            devbox_id=devbox_id,
            limit=limit,
            starting_after=starting_after,
        )

    async def delete_disk_snapshot(self, snapshot_id: str) -> Any:
        return await self.disk_snapshots.delete(snapshot_id)

    # Waiting

    async def await_running(
        self,
        devbox_id: str,
        *,
        polling: PollingOptions[DevboxView] | None = None,
    ) -> DevboxView:
        """Wait for a devbox to finish provisioning.

        Raises:
            UnexpectedStateError: If the devbox failed or was shut down
            PollingTimeoutError: If ``polling.timeout`` elapsed
        """
        return await await_devbox_state(
            self._http,
            devbox_id,
            target=DevboxStatus.RUNNING.value,
            statuses_to_check=["running", "failure", "shutdown"],
            transition_states=["provisioning", "initializing"],
            options=polling,
        )

    async def await_suspended(
        self,
        devbox_id: str,
        *,
        polling: PollingOptions[DevboxView] | None = None,
    ) -> DevboxView:
        """Wait for a suspend request to complete."""
        return await await_devbox_state(
            self._http,
            devbox_id,
            target=DevboxStatus.SUSPENDED.value,
            statuses_to_check=["suspended", "failure", "shutdown"],
            transition_states=["suspending"],
            options=polling,
        )

    async def create_and_await_running(
        self,
        *,
        polling: PollingOptions[DevboxView] | None = None,
        **create_params: Any,
    ) -> DevboxView:
        """Create a devbox and wait until it is running."""
        devbox = await self.create(**create_params)
        return await self.await_running(devbox.id, polling=polling)
