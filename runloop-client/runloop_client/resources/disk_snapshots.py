"""Devbox disk snapshots."""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from runloop_client.errors import UnexpectedStateError
from runloop_client.pagination import CursorPage
from runloop_client.polling import PollingOptions, poll
from runloop_client.resources.base import APIResource, compact
from runloop_client.types import DevboxSnapshotAsyncStatusView, DevboxSnapshotView

_BASE = "/v1/devboxes/disk_snapshots"


class DiskSnapshotsResource(APIResource):
    """Disk snapshots taken from devboxes.

    Snapshots can seed new devboxes via ``devboxes.create(snapshot_id=...)``.
    """

    async def update(
        self,
        snapshot_id: str,
        *,
        name: str | None = None,
        metadata: dict[str, str] | None = None,
    ) -> DevboxSnapshotView:
        response = await self._http.post(
            f"{_BASE}/{snapshot_id}",
            json=compact({"name": name, "metadata": metadata}),
        )
        return DevboxSnapshotView.model_validate(response)

    async def list(
        self,
        *,
        devbox_id: str | None = None,
        limit: int | None = None,
        starting_after: str | None = None,
        metadata: dict[str, str] | None = None,
    ) -> CursorPage[DevboxSnapshotView]:
        """List disk snapshots, optionally for a single devbox.

        Args:
            devbox_id: Only list snapshots of this devbox
            limit: Max items per page
            starting_after: Cursor (ID of the last item of the previous page)
            metadata: Filter by metadata key/value pairs
        """
        params: dict[str, Any] = {
            "devbox_id": devbox_id,
            "limit": limit,
            "starting_after": starting_after,
        }
        for key, value in (metadata or {}).items():
            params[f"metadata[{key}]"] = value
        return await self._list(
            _BASE,
            model=DevboxSnapshotView,
            items_key="snapshots",
            params=params,
        )

    async def delete(self, snapshot_id: str) -> Any:
        return await self._http.post(f"{_BASE}/{snapshot_id}/delete")

    async def query_status(self, snapshot_id: str) -> DevboxSnapshotAsyncStatusView:
        """Get the status of an asynchronous snapshot operation."""
        response = await self._http.get(f"{_BASE}/{snapshot_id}/status")
        return DevboxSnapshotAsyncStatusView.model_validate(response)

    async def await_completed(
        self,
        snapshot_id: str,
        *,
        polling: PollingOptions[DevboxSnapshotAsyncStatusView] | None = None,
    ) -> DevboxSnapshotAsyncStatusView:
        """Wait for an asynchronous snapshot to finish.

        Raises:
            UnexpectedStateError: If the snapshot operation failed
        """

        async def request() -> DevboxSnapshotAsyncStatusView:
            return await self.query_status(snapshot_id)

        result = await poll(
            request,
            request,
            replace(
                polling or PollingOptions(),
                should_stop=lambda status: status.status != "in_progress",
            ),
        )
        if result.status == "error":
            raise UnexpectedStateError(
                f"Snapshot {snapshot_id} failed: {result.error_message or 'unknown error'}",
                resource_id=snapshot_id,
                state=result.status,
                last_result=result,
            )
        return result
