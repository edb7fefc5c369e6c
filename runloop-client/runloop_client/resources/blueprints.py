"""Blueprint resource."""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from runloop_client.errors import UnexpectedStateError
from runloop_client.pagination import CursorPage
from runloop_client.polling import PollingOptions, poll
from runloop_client.resources.base import APIResource, compact
from runloop_client.types import (
    BlueprintBuildLogsListView,
    BlueprintPreviewView,
    BlueprintStatus,
    BlueprintView,
)

_BASE = "/v1/blueprints"

FILE_MOUNT_MAX_SIZE_BYTES = 786_000
FILE_MOUNT_TOTAL_MAX_SIZE_BYTES = FILE_MOUNT_MAX_SIZE_BYTES * 10

_BUILDING_STATES = frozenset({BlueprintStatus.PROVISIONING.value, BlueprintStatus.BUILDING.value})


def validate_file_mounts(file_mounts: dict[str, str] | None) -> None:
    """Check inline file mounts against the per-file and total size limits.

    Raises:
        ValueError: If a single mount or all mounts together are too large
    """
    if not file_mounts:
        return
    total = 0
    oversized: list[str] = []
    for path, contents in file_mounts.items():
        size = len(contents.encode("utf-8"))
        total += size
        if size > FILE_MOUNT_MAX_SIZE_BYTES:
            oversized.append(f"{path} ({size} bytes)")
    if oversized:
        raise ValueError(
            f"file_mounts entries exceed {FILE_MOUNT_MAX_SIZE_BYTES} bytes: "
            + ", ".join(oversized)
        )
    if total > FILE_MOUNT_TOTAL_MAX_SIZE_BYTES:
        raise ValueError(
            f"file_mounts total size {total} bytes exceeds "
            f"{FILE_MOUNT_TOTAL_MAX_SIZE_BYTES} bytes"
        )


class BlueprintsResource(APIResource):
    """Blueprints are reusable devbox images built from a Dockerfile."""

    def _body(
        self,
        *,
        name: str | None,
        dockerfile: str | None,
        system_setup_commands: list[str] | None,
        launch_parameters: dict[str, Any] | None,
        file_mounts: dict[str, str] | None,
        code_mounts: list[dict[str, Any]] | None,
        base_blueprint_id: str | None,
        metadata: dict[str, str] | None,
        extra: dict[str, Any],
    ) -> dict[str, Any]:
        validate_file_mounts(file_mounts)
        return compact(
            {
                "name": name,
                "dockerfile": dockerfile,
                "system_setup_commands": system_setup_commands,
                "launch_parameters": launch_parameters,
                "file_mounts": file_mounts,
                "code_mounts": code_mounts,
                "base_blueprint_id": base_blueprint_id,
                "metadata": metadata,
                **extra,
            }
        )

    async def create(
        self,
        *,
        name: str,
        dockerfile: str | None = None,
        system_setup_commands: list[str] | None = None,
        launch_parameters: dict[str, Any] | None = None,
        file_mounts: dict[str, str] | None = None,
        code_mounts: list[dict[str, Any]] | None = None,
        base_blueprint_id: str | None = None,
        metadata: dict[str, str] | None = None,
        idempotency_key: str | None = None,
        **extra: Any,
    ) -> BlueprintView:
        """Start a blueprint build.

        Args:
            name: Blueprint name; devboxes can launch from the latest
                successful build with ``blueprint_name``
            dockerfile: Dockerfile contents
            system_setup_commands: Commands run after the image is built
            launch_parameters: Defaults for devboxes launched from it
            file_mounts: Map of path to inline file contents
            code_mounts: Repositories to clone into the image
            base_blueprint_id: Blueprint to build on top of
            metadata: User metadata
            idempotency_key: Optional key for safe retries

        Raises:
            ValueError: If ``file_mounts`` exceed the size limits
        """
        body = self._body(
            name=name,
            dockerfile=dockerfile,
            system_setup_commands=system_setup_commands,
            launch_parameters=launch_parameters,
            file_mounts=file_mounts,
            code_mounts=code_mounts,
            base_blueprint_id=base_blueprint_id,
            metadata=metadata,
            extra=extra,
        )
        response = await self._http.post(_BASE, json=body, idempotency_key=idempotency_key)
        return BlueprintView.model_validate(response)

    async def retrieve(self, blueprint_id: str) -> BlueprintView:
        response = await self._http.get(f"{_BASE}/{blueprint_id}")
        return BlueprintView.model_validate(response)

    async def list(
        self,
        *,
        limit: int | None = None,
        starting_after: str | None = None,
        name: str | None = None,
    ) -> CursorPage[BlueprintView]:
        return await self._list(
            _BASE,
            model=BlueprintView,
            items_key="blueprints",
            params={"limit": limit, "starting_after": starting_after, "name": name},
        )

    async def list_public(
        self,
        *,
        limit: int | None = None,
        starting_after: str | None = None,
        name: str | None = None,
    ) -> CursorPage[BlueprintView]:
        """List blueprints shared publicly by Runloop."""
        return await self._list(
            f"{_BASE}/list_public",
            model=BlueprintView,
            items_key="blueprints",
            params={"limit": limit, "starting_after": starting_after, "name": name},
        )

    async def delete(self, blueprint_id: str) -> Any:
        return await self._http.post(f"{_BASE}/{blueprint_id}/delete")

    async def logs(self, blueprint_id: str) -> BlueprintBuildLogsListView:
        """Get the build logs of a blueprint."""
        response = await self._http.get(f"{_BASE}/{blueprint_id}/logs")
        return BlueprintBuildLogsListView.model_validate(response)

    async def preview(
        self,
        *,
        name: str,
        dockerfile: str | None = None,
        system_setup_commands: list[str] | None = None,
        launch_parameters: dict[str, Any] | None = None,
        file_mounts: dict[str, str] | None = None,
        code_mounts: list[dict[str, Any]] | None = None,
        base_blueprint_id: str | None = None,
        metadata: dict[str, str] | None = None,
        **extra: Any,
    ) -> BlueprintPreviewView:
        """Render the Dockerfile a blueprint build would use, without building."""
        body = self._body(
            name=name,
            dockerfile=dockerfile,
            system_setup_commands=system_setup_commands,
            launch_parameters=launch_parameters,
            file_mounts=file_mounts,
            code_mounts=code_mounts,
            base_blueprint_id=base_blueprint_id,
            metadata=metadata,
            extra=extra,
        )
        response = await self._http.post(f"{_BASE}/preview", json=body)
        return BlueprintPreviewView.model_validate(response)

    async def await_build_complete(
        self,
        blueprint_id: str,
        *,
        polling: PollingOptions[BlueprintView] | None = None,
    ) -> BlueprintView:
        """Wait for a blueprint build to finish.

        Raises:
            UnexpectedStateError: If the build failed
        """

        async def request() -> BlueprintView:
            return await self.retrieve(blueprint_id)

        result = await poll(
            request,
            request,
            replace(
                polling or PollingOptions(),
                should_stop=lambda blueprint: blueprint.status not in _BUILDING_STATES,
            ),
        )
        if result.status != BlueprintStatus.BUILD_COMPLETE.value:
            raise UnexpectedStateError(
                f"Blueprint {blueprint_id} is in non-build_complete state {result.status}",
                resource_id=blueprint_id,
                state=result.status,
                last_result=result,
            )
        return result

    async def create_and_await_build_complete(
        self,
        *,
        polling: PollingOptions[BlueprintView] | None = None,
        **create_params: Any,
    ) -> BlueprintView:
        blueprint = await self.create(**create_params)
        return await self.await_build_complete(blueprint.id, polling=polling)
