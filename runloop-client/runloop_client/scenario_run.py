"""Scenario run object wrapper."""

from __future__ import annotations

from typing import TYPE_CHECKING

from runloop_client.devbox import Devbox
from runloop_client.polling import PollingOptions
from runloop_client.types import (
    DevboxView,
    ScenarioRunView,
    ScoringContractResultView,
)

if TYPE_CHECKING:
    from runloop_client.resources.devboxes import DevboxesResource
    from runloop_client.resources.scenarios import ScenarioRunsResource


class ScenarioRun:
    """A scenario run and the devbox it runs on.

    Typical flow: ``await_env_ready``, let an agent work on ``devbox``, then
    ``score_and_complete``.
    """

    def __init__(
        self,
        runs: ScenarioRunsResource,
        devboxes: DevboxesResource,
        run_id: str,
        devbox_id: str,
    ) -> None:
        self._runs = runs
        self._devboxes = devboxes
        self._id = run_id
        self._devbox_id = devbox_id
        self._devbox: Devbox | None = None

    @property
    def id(self) -> str:
        return self._id

    @property
    def devbox_id(self) -> str:
        return self._devbox_id

    @property
    def devbox(self) -> Devbox:
        """Devbox of this run, built on first access without an API call.

        Its cached status is a placeholder until ``refresh`` or
        ``await_env_ready`` is called.
        """
        if self._devbox is None:
            self._devbox = Devbox(
                self._devboxes,
                DevboxView(id=self._devbox_id, status="provisioning"),
            )
        return self._devbox

    async def get_info(self) -> ScenarioRunView:
        return await self._runs.retrieve(self._id)

    async def await_env_ready(
        self,
        *,
        polling: PollingOptions[DevboxView] | None = None,
    ) -> ScenarioRunView:
        """Wait for the run's devbox to be running, then return the run state."""
        await self.devbox.await_running(polling=polling)
        return await self.get_info()

    async def score(self) -> ScenarioRunView:
        return await self._runs.score(self._id)

    async def await_scored(
        self,
        *,
        polling: PollingOptions[ScenarioRunView] | None = None,
    ) -> ScenarioRunView:
        return await self._runs.await_scored(self._id, polling=polling)

    async def score_and_await(
        self,
        *,
        polling: PollingOptions[ScenarioRunView] | None = None,
    ) -> ScenarioRunView:
        return await self._runs.score_and_await(self._id, polling=polling)

    async def score_and_complete(
        self,
        *,
        polling: PollingOptions[ScenarioRunView] | None = None,
    ) -> ScenarioRunView:
        return await self._runs.score_and_complete(self._id, polling=polling)

    async def complete(self) -> ScenarioRunView:
        return await self._runs.complete(self._id)

    async def cancel(self) -> ScenarioRunView:
        return await self._runs.cancel(self._id)

    async def download_logs(self) -> bytes:
        """Download the run logs as zip archive bytes."""
        return await self._runs.download_logs(self._id)

    async def get_score(self) -> ScoringContractResultView | None:
        """Current scoring result, or None if the run has not been scored."""
        info = await self.get_info()
        return info.scoring_contract_result

    def __repr__(self) -> str:
        return f"ScenarioRun(id={self._id!r}, devbox_id={self._devbox_id!r})"
