"""Benchmark resource."""

from __future__ import annotations

from typing import Any

from runloop_client.pagination import CursorPage
from runloop_client.resources.base import APIResource, compact
from runloop_client.types import BenchmarkRunView, BenchmarkView, ScenarioRunView, ScenarioView

_BASE = "/v1/benchmarks"


class BenchmarkRunsResource(APIResource):
    """Runs of a benchmark, each grouping one scenario run per scenario."""

    async def retrieve(self, run_id: str) -> BenchmarkRunView:
        response = await self._http.get(f"{_BASE}/runs/{run_id}")
        return BenchmarkRunView.model_validate(response)

    async def list(
        self,
        *,
        benchmark_id: str | None = None,
        limit: int | None = None,
        starting_after: str | None = None,
    ) -> CursorPage[BenchmarkRunView]:
        return await self._list(
            f"{_BASE}/runs",
            model=BenchmarkRunView,
            items_key="runs",
            params={
                "benchmark_id": benchmark_id,
                "limit": limit,
                "starting_after": starting_after,
            },
        )

    async def cancel(self, run_id: str) -> BenchmarkRunView:
        """Cancel a benchmark run and its running scenario runs."""
        response = await self._http.post(f"{_BASE}/runs/{run_id}/cancel")
        return BenchmarkRunView.model_validate(response)

    async def complete(self, run_id: str) -> BenchmarkRunView:
        response = await self._http.post(f"{_BASE}/runs/{run_id}/complete")
        return BenchmarkRunView.model_validate(response)

    async def list_scenario_runs(
        self,
        run_id: str,
        *,
        state: str | None = None,
        limit: int | None = None,
        starting_after: str | None = None,
    ) -> CursorPage[ScenarioRunView]:
        return await self._list(
            f"{_BASE}/runs/{run_id}/scenario_runs",
            model=ScenarioRunView,
            items_key="runs",
            params={"state": state, "limit": limit, "starting_after": starting_after},
        )


class BenchmarksResource(APIResource):
    """Benchmarks group scenarios that are run together."""

    def __init__(self, http) -> None:
        super().__init__(http)
        self.runs = BenchmarkRunsResource(http)

    async def create(
        self,
        *,
        name: str,
        scenario_ids: list[str] | None = None,
        description: str | None = None,
        metadata: dict[str, str] | None = None,
        **extra: Any,
    ) -> BenchmarkView:
        response = await self._http.post(
            _BASE,
            json=compact(
                {
                    "name": name,
                    "scenario_ids": scenario_ids,
                    "description": description,
                    "metadata": metadata,
                    **extra,
                }
            ),
        )
        return BenchmarkView.model_validate(response)

    async def retrieve(self, benchmark_id: str) -> BenchmarkView:
        response = await self._http.get(f"{_BASE}/{benchmark_id}")
        return BenchmarkView.model_validate(response)

    async def update(
        self,
        benchmark_id: str,
        *,
        name: str | None = None,
        scenario_ids: list[str] | None = None,
        description: str | None = None,
        metadata: dict[str, str] | None = None,
    ) -> BenchmarkView:
        response = await self._http.post(
            f"{_BASE}/{benchmark_id}",
            json=compact(
                {
                    "name": name,
                    "scenario_ids": scenario_ids,
                    "description": description,
                    "metadata": metadata,
                }
            ),
        )
        return BenchmarkView.model_validate(response)

    async def list(
        self,
        *,
        limit: int | None = None,
        starting_after: str | None = None,
    ) -> CursorPage[BenchmarkView]:
        return await self._list(
            _BASE,
            model=BenchmarkView,
            items_key="benchmarks",
            params={"limit": limit, "starting_after": starting_after},
        )

    async def list_public(
        self,
        *,
        limit: int | None = None,
        starting_after: str | None = None,
    ) -> CursorPage[BenchmarkView]:
        return await self._list(
            f"{_BASE}/list_public",
            model=BenchmarkView,
            items_key="benchmarks",
            params={"limit": limit, "starting_after": starting_after},
        )

    async def definitions(
        self,
        benchmark_id: str,
        *,
        limit: int | None = None,
        starting_after: str | None = None,
    ) -> CursorPage[ScenarioView]:
        """List the scenario definitions of a benchmark."""
        return await self._list(
            f"{_BASE}/{benchmark_id}/definitions",
            model=ScenarioView,
            items_key="scenarios",
            params={"limit": limit, "starting_after": starting_after},
        )

    async def start_run(
        self,
        *,
        benchmark_id: str,
        run_name: str | None = None,
        metadata: dict[str, str] | None = None,
        run_profile: dict[str, Any] | None = None,
    ) -> BenchmarkRunView:
        """Start a benchmark run, launching a scenario run per scenario."""
        response = await self._http.post(
            f"{_BASE}/start_run",
            json=compact(
                {
                    "benchmark_id": benchmark_id,
                    "run_name": run_name,
                    "metadata": metadata,
                    "runProfile": run_profile,
                }
            ),
        )
        return BenchmarkRunView.model_validate(response)
