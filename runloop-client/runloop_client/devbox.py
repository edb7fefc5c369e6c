"""Devbox object wrapper."""

from __future__ import annotations

from typing import TYPE_CHECKING

from runloop_client.execution import Execution
from runloop_client.polling import PollingOptions
from runloop_client.snapshot import Snapshot
from runloop_client.types import (
    DevboxExecutionDetailView,
    DevboxTunnelView,
    DevboxView,
)

if TYPE_CHECKING:
    from runloop_client.resources.devboxes import DevboxesResource


class Devbox:
    """A single devbox.

    Wraps ``client.devboxes`` calls bound to one devbox ID and caches the
    last ``DevboxView`` seen. Lifecycle calls update the cache; ``refresh``
    fetches the current state.
    """

    def __init__(self, devboxes: DevboxesResource, info: DevboxView) -> None:
        """Initialize Devbox.

        Args:
            devboxes: Devbox resource for making requests
            info: Devbox information from API
        """
        self._devboxes = devboxes
        self._info = info

    @property
    def id(self) -> str:
        return self._info.id

    @property
    def status(self) -> str:
        """Current status (may be stale; call refresh() for latest)."""
        return self._info.status

    @property
    def info(self) -> DevboxView:
        return self._info

    async def refresh(self) -> DevboxView:
        self._info = await self._devboxes.retrieve(self.id)
        return self._info

    # Commands

    async def exec(
        self,
        command: str,
        *,
        shell_name: str | None = None,
    ) -> DevboxExecutionDetailView:
        """Run a command and wait for it to exit."""
        return await self._devboxes.execute_sync(self.id, command=command, shell_name=shell_name)

    async def exec_async(
        self,
        command: str,
        *,
        shell_name: str | None = None,
    ) -> Execution:
        """Start a command; call ``result()`` on the returned handle to wait for it."""
        view = await self._devboxes.execute_async(self.id, command=command, shell_name=shell_name)
        return Execution(self._devboxes.executions, view)

    # Files

    async def read_file(self, file_path: str) -> str:
        return await self._devboxes.read_file_contents(self.id, file_path=file_path)

    async def write_file(self, file_path: str, contents: str) -> DevboxExecutionDetailView:
        return await self._devboxes.write_file_contents(
            self.id, file_path=file_path, contents=contents
        )

    # Lifecycle

    async def suspend(self) -> DevboxView:
        self._info = await self._devboxes.suspend(self.id)
        return self._info

    async def resume(self) -> DevboxView:
        self._info = await self._devboxes.resume(self.id)
        return self._info

    async def shutdown(self) -> DevboxView:
        self._info = await self._devboxes.shutdown(self.id)
        return self._info

    async def keep_alive(self) -> None:
        await self._devboxes.keep_alive(self.id)

    async def await_running(
        self,
        *,
        polling: PollingOptions[DevboxView] | None = None,
    ) -> DevboxView:
        self._info = await self._devboxes.await_running(self.id, polling=polling)
        return self._info

    async def await_suspended(
        self,
        *,
        polling: PollingOptions[DevboxView] | None = None,
    ) -> DevboxView:
        self._info = await self._devboxes.await_suspended(self.id, polling=polling)
        return self._info

    async def snapshot_disk(
        self,
        *,
        name: str | None = None,
        metadata: dict[str, str] | None = None,
    ) -> Snapshot:
        """Snapshot the disk and wait for the snapshot to finish."""
        view = await self._devboxes.snapshot_disk(self.id, name=name, metadata=metadata)
        return Snapshot(self._devboxes.disk_snapshots, view)

    async def snapshot_disk_async(
        self,
        *,
        name: str | None = None,
        metadata: dict[str, str] | None = None,
    ) -> Snapshot:
        """Start a disk snapshot; call ``await_completed()`` on the result to wait."""
        view = await self._devboxes.snapshot_disk_async(self.id, name=name, metadata=metadata)
        return Snapshot(self._devboxes.disk_snapshots, view)

    async def create_tunnel(self, port: int) -> DevboxTunnelView:
        return await self._devboxes.create_tunnel(self.id, port=port)

    def __repr__(self) -> str:
        return f"Devbox(id={self.id!r}, status={self.status!r})"
