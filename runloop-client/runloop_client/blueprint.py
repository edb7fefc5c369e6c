"""Blueprint object wrapper."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from runloop_client.polling import PollingOptions
from runloop_client.types import BlueprintBuildLogsListView, BlueprintView

if TYPE_CHECKING:
    from runloop_client.resources.blueprints import BlueprintsResource


class Blueprint:
    """A single blueprint, caching the last ``BlueprintView`` seen."""

    def __init__(self, blueprints: BlueprintsResource, info: BlueprintView) -> None:
        self._blueprints = blueprints
        self._info = info

    @property
    def id(self) -> str:
        return self._info.id

    @property
    def name(self) -> str:
        return self._info.name

    @property
    def status(self) -> str | None:
        """Build status (may be stale; call refresh() for latest)."""
        return self._info.status

    @property
    def info(self) -> BlueprintView:
        return self._info

    async def refresh(self) -> BlueprintView:
        self._info = await self._blueprints.retrieve(self.id)
        return self._info

    async def logs(self) -> BlueprintBuildLogsListView:
        return await self._blueprints.logs(self.id)

    async def await_build_complete(
        self,
        *,
        polling: PollingOptions[BlueprintView] | None = None,
    ) -> BlueprintView:
        self._info = await self._blueprints.await_build_complete(self.id, polling=polling)
        return self._info

    async def delete(self) -> Any:
        return await self._blueprints.delete(self.id)

    def __repr__(self) -> str:
        return f"Blueprint(id={self.id!r}, name={self.name!r}, status={self.status!r})"
