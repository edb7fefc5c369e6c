"""Disk snapshot object wrapper."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from runloop_client.polling import PollingOptions
from runloop_client.types import DevboxSnapshotAsyncStatusView, DevboxSnapshotView

if TYPE_CHECKING:
    from runloop_client.resources.disk_snapshots import DiskSnapshotsResource


class Snapshot:
    """A devbox disk snapshot.

    The API has no retrieve call for snapshots; ``refresh`` reads the
    snapshot from its status endpoint instead.
    """

    def __init__(self, disk_snapshots: DiskSnapshotsResource, info: DevboxSnapshotView) -> None:
        self._disk_snapshots = disk_snapshots
        self._info = info

    @property
    def id(self) -> str:
        return self._info.id

    @property
    def name(self) -> str | None:
        return self._info.name

    @property
    def source_devbox_id(self) -> str | None:
        return self._info.source_devbox_id

    @property
    def metadata(self) -> dict[str, str]:
        return self._info.metadata

    @property
    def info(self) -> DevboxSnapshotView:
        return self._info

    async def query_status(self) -> DevboxSnapshotAsyncStatusView:
        return await self._disk_snapshots.query_status(self.id)

    async def refresh(self) -> DevboxSnapshotView:
        status = await self.query_status()
        if status.snapshot is not None:
            self._info = status.snapshot
        return self._info

    async def await_completed(
        self,
        *,
        polling: PollingOptions[DevboxSnapshotAsyncStatusView] | None = None,
    ) -> DevboxSnapshotAsyncStatusView:
        status = await self._disk_snapshots.await_completed(self.id, polling=polling)
        if status.snapshot is not None:
            self._info = status.snapshot
        return status

    async def update(
        self,
        *,
        name: str | None = None,
        metadata: dict[str, str] | None = None,
    ) -> DevboxSnapshotView:
        self._info = await self._disk_snapshots.update(self.id, name=name, metadata=metadata)
        return self._info

    async def delete(self) -> Any:
        return await self._disk_snapshots.delete(self.id)

    def __repr__(self) -> str:
        return f"Snapshot(id={self.id!r}, source_devbox_id={self.source_devbox_id!r})"
