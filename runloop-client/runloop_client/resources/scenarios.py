"""Scenario resource: scenarios, scenario runs and scorers."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any

from runloop_client.errors import UnexpectedStateError
from runloop_client.pagination import CursorPage
from runloop_client.polling import PollingOptions, await_devbox_state, poll
from runloop_client.resources.base import APIResource, compact
from runloop_client.types import (
    DevboxView,
    ScenarioRunState,
    ScenarioRunView,
    ScenarioView,
    ScorerValidateResponse,
    ScorerView,
)

logger = logging.getLogger("runloop_client")

_BASE = "/v1/scenarios"

TERMINAL_RUN_STATES = frozenset(
    {
        ScenarioRunState.SCORED.value,
        ScenarioRunState.COMPLETED.value,
        ScenarioRunState.CANCELED.value,
        ScenarioRunState.TIMEOUT.value,
        ScenarioRunState.FAILED.value,
    }
)


class ScenarioRunsResource(APIResource):
    """Scenario runs: one scenario executing on one devbox."""

    async def retrieve(self, run_id: str) -> ScenarioRunView:
        response = await self._http.get(f"{_BASE}/runs/{run_id}")
        return ScenarioRunView.model_validate(response)

    async def list(
        self,
        *,
        scenario_id: str | None = None,
        benchmark_run_id: str | None = None,
        state: str | None = None,
        limit: int | None = None,
        starting_after: str | None = None,
    ) -> CursorPage[ScenarioRunView]:
        return await self._list(
            f"{_BASE}/runs",
            model=ScenarioRunView,
            items_key="runs",
            params={
                "scenario_id": scenario_id,
                "benchmark_run_id": benchmark_run_id,
                "state": state,
                "limit": limit,
                "starting_after": starting_after,
            },
        )

    async def cancel(self, run_id: str) -> ScenarioRunView:
        """Cancel a run and shut down its devbox."""
        response = await self._http.post(f"{_BASE}/runs/{run_id}/cancel")
        return ScenarioRunView.model_validate(response)

    async def complete(self, run_id: str) -> ScenarioRunView:
        """Mark a run complete and shut down its devbox."""
        response = await self._http.post(f"{_BASE}/runs/{run_id}/complete")
        return ScenarioRunView.model_validate(response)

    async def score(self, run_id: str) -> ScenarioRunView:
        """Start scoring a run; the devbox is kept for inspection."""
        response = await self._http.post(f"{_BASE}/runs/{run_id}/score")
        return ScenarioRunView.model_validate(response)

    async def download_logs(self, run_id: str) -> bytes:
        """Download the run's devbox logs as a zip archive."""
        return await self._http.download("POST", f"{_BASE}/runs/{run_id}/download_logs")

    async def await_scored(
        self,
        run_id: str,
        *,
        polling: PollingOptions[ScenarioRunView] | None = None,
    ) -> ScenarioRunView:
        """Wait until scoring finishes.

        Polls ``retrieve`` until the run reaches a terminal state.

        Raises:
            UnexpectedStateError: If the run ended in a state other than ``scored``
        """

        async def request() -> ScenarioRunView:
            return await self.retrieve(run_id)

        result = await poll(
            request,
            request,
            replace(
                polling or PollingOptions(),
                should_stop=lambda run: run.state in TERMINAL_RUN_STATES,
            ),
        )
        if result.state != ScenarioRunState.SCORED.value:
            raise UnexpectedStateError(
                f"Scenario run {run_id} is in non-scored state {result.state}",
                resource_id=run_id,
                state=result.state,
                last_result=result,
            )
        return result

    async def score_and_await(
        self,
        run_id: str,
        *,
        polling: PollingOptions[ScenarioRunView] | None = None,
    ) -> ScenarioRunView:
        await self.score(run_id)
        return await self.await_scored(run_id, polling=polling)

    async def score_and_complete(
        self,
        run_id: str,
        *,
        polling: PollingOptions[ScenarioRunView] | None = None,
    ) -> ScenarioRunView:
        """Score a run, wait for the score, then complete the run."""
        await self.score_and_await(run_id, polling=polling)
        return await self.complete(run_id)


class ScorersResource(APIResource):
    """Custom bash scorers usable from scoring contracts."""

    async def create(self, *, bash_script: str, type: str) -> ScorerView:
        response = await self._http.post(
            f"{_BASE}/scorers",
            json={"bash_script": bash_script, "type": type},
        )
        return ScorerView.model_validate(response)

    async def retrieve(self, scorer_id: str) -> ScorerView:
        response = await self._http.get(f"{_BASE}/scorers/{scorer_id}")
        return ScorerView.model_validate(response)

    async def update(self, scorer_id: str, *, bash_script: str, type: str) -> ScorerView:
        response = await self._http.post(
            f"{_BASE}/scorers/{scorer_id}",
            json={"bash_script": bash_script, "type": type},
        )
        return ScorerView.model_validate(response)

    async def list(
        self,
        *,
        limit: int | None = None,
        starting_after: str | None = None,
    ) -> CursorPage[ScorerView]:
        return await self._list(
            f"{_BASE}/scorers",
            model=ScorerView,
            items_key="scorers",
            params={"limit": limit, "starting_after": starting_after},
        )

    async def validate(
        self,
        scorer_id: str,
        *,
        scoring_context: Any,
        environment_parameters: dict[str, Any] | None = None,
    ) -> ScorerValidateResponse:
        """Run a scorer against a sample context without a scenario run."""
        response = await self._http.post(
            f"{_BASE}/scorers/{scorer_id}/validate",
            json=compact(
                {
                    "scoring_context": scoring_context,
                    "environment_parameters": environment_parameters,
                }
            ),
        )
        return ScorerValidateResponse.model_validate(response)


class ScenariosResource(APIResource):
    """Scenarios pair a problem statement and environment with a scoring contract."""

    def __init__(self, http) -> None:
        super().__init__(http)
        self.runs = ScenarioRunsResource(http)
        self.scorers = ScorersResource(http)

    async def create(
        self,
        *,
        name: str,
        input_context: dict[str, Any],
        scoring_contract: dict[str, Any],
        environment_parameters: dict[str, Any] | None = None,
        metadata: dict[str, str] | None = None,
        reference_output: str | None = None,
        **extra: Any,
    ) -> ScenarioView:
        response = await self._http.post(
            _BASE,
            json=compact(
                {
                    "name": name,
                    "input_context": input_context,
                    "scoring_contract": scoring_contract,
                    "environment_parameters": environment_parameters,
                    "metadata": metadata,
                    "reference_output": reference_output,
                    **extra,
                }
            ),
        )
        return ScenarioView.model_validate(response)

    async def retrieve(self, scenario_id: str) -> ScenarioView:
        response = await self._http.get(f"{_BASE}/{scenario_id}")
        return ScenarioView.model_validate(response)

    async def update(self, scenario_id: str, **fields: Any) -> ScenarioView:
        response = await self._http.post(f"{_BASE}/{scenario_id}", json=compact(fields))
        return ScenarioView.model_validate(response)

    async def list(
        self,
        *,
        name: str | None = None,
        benchmark_id: str | None = None,
        limit: int | None = None,
        starting_after: str | None = None,
    ) -> CursorPage[ScenarioView]:
        return await self._list(
            _BASE,
            model=ScenarioView,
            items_key="scenarios",
            params={
                "name": name,
                "benchmark_id": benchmark_id,
                "limit": limit,
                "starting_after": starting_after,
            },
        )

    async def list_public(
        self,
        *,
        name: str | None = None,
        limit: int | None = None,
        starting_after: str | None = None,
    ) -> CursorPage[ScenarioView]:
        return await self._list(
            f"{_BASE}/list_public",
            model=ScenarioView,
            items_key="scenarios",
            params={"name": name, "limit": limit, "starting_after": starting_after},
        )

    async def start_run(
        self,
        *,
        scenario_id: str,
        benchmark_run_id: str | None = None,
        run_name: str | None = None,
        metadata: dict[str, str] | None = None,
        run_profile: dict[str, Any] | None = None,
    ) -> ScenarioRunView:
        """Start a scenario run on a fresh devbox."""
        response = await self._http.post(
            f"{_BASE}/start_run",
            json=compact(
                {
                    "scenario_id": scenario_id,
                    "benchmark_run_id": benchmark_run_id,
                    "run_name": run_name,
                    "metadata": metadata,
                    "runProfile": run_profile,
                }
            ),
        )
        return ScenarioRunView.model_validate(response)

    async def start_run_and_await_env_ready(
        self,
        *,
        polling: PollingOptions[DevboxView] | None = None,
        **start_params: Any,
    ) -> ScenarioRunView:
        """Start a run and wait until its devbox is running."""
        run = await self.start_run(**start_params)
        logger.debug("scenario_run_started run_id=%s devbox_id=%s", run.id, run.devbox_id)
        await await_devbox_state(
            self._http,
            run.devbox_id,
            target="running",
            statuses_to_check=["running", "failure", "shutdown"],
            transition_states=["provisioning", "initializing"],
            options=polling,
        )
        return await self.runs.retrieve(run.id)
