"""RunloopClient - main entry point for the Runloop client."""

from __future__ import annotations

import os
from types import TracebackType
from typing import Any

from runloop_client._http import HTTPClient
from runloop_client.blueprint import Blueprint
from runloop_client.devbox import Devbox
from runloop_client.errors import NotFoundError
from runloop_client.polling import PollingOptions
from runloop_client.resources import (
    AgentsResource,
    BenchmarksResource,
    BlueprintsResource,
    DevboxesResource,
    ObjectsResource,
    RepositoriesResource,
    ScenariosResource,
    SecretsResource,
)
from runloop_client.scenario_run import ScenarioRun
from runloop_client.snapshot import Snapshot
from runloop_client.storage_object import StorageObject
from runloop_client.types import BlueprintView

DEFAULT_BASE_URL = "https://api.runloop.ai"
DEFAULT_TIMEOUT = 60.0
DEFAULT_MAX_RETRIES = 2


class RunloopClient:
    """Main client for the Runloop API.

    Use as an async context manager to ensure proper cleanup.

    Example:
        async with RunloopClient(api_key="...") as client:
            devbox = await client.create_devbox(name="dev")
            await devbox.await_running()
            result = await devbox.exec("echo hello")
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        max_retries: int = DEFAULT_MAX_RETRIES,
    ) -> None:
        """Initialize Runloop client.

        Args:
            api_key: Bearer token. Falls back to RUNLOOP_API_KEY env var.
            base_url: API base URL. Falls back to RUNLOOP_BASE_URL env var,
                then https://api.runloop.ai.
            timeout: Default request timeout in seconds. Falls back to RUNLOOP_TIMEOUT env var.
            max_retries: Maximum retry attempts. Falls back to RUNLOOP_MAX_RETRIES env var.

        Raises:
            ValueError: If api_key not provided and not in env.
        """
        self._api_key = api_key or os.environ.get("RUNLOOP_API_KEY")
        self._base_url = base_url or os.environ.get("RUNLOOP_BASE_URL") or DEFAULT_BASE_URL

        if not self._api_key:
            raise ValueError("api_key required (or set RUNLOOP_API_KEY env var)")

        timeout_str = os.environ.get("RUNLOOP_TIMEOUT")
        if timeout_str and timeout == DEFAULT_TIMEOUT:  # Only if default
            timeout = float(timeout_str)

        retries_str = os.environ.get("RUNLOOP_MAX_RETRIES")
        if retries_str and max_retries == DEFAULT_MAX_RETRIES:  # Only if default
            max_retries = int(retries_str)

        self._timeout = timeout
        self._max_retries = max_retries
        self._http: HTTPClient | None = None

        self._devboxes: DevboxesResource | None = None
        self._blueprints: BlueprintsResource | None = None
        self._benchmarks: BenchmarksResource | None = None
        self._scenarios: ScenariosResource | None = None
        self._objects: ObjectsResource | None = None
        self._repositories: RepositoriesResource | None = None
        self._secrets: SecretsResource | None = None
        self._agents: AgentsResource | None = None

    @property
    def base_url(self) -> str:
        return self._base_url

    async def __aenter__(self) -> RunloopClient:
        """Enter async context, initializing HTTP client."""
        self._http = HTTPClient(
            base_url=self._base_url,
            api_key=self._api_key,
            timeout=self._timeout,
            max_retries=self._max_retries,
        )
        await self._http.__aenter__()
        self._devboxes = DevboxesResource(self._http)
        self._blueprints = BlueprintsResource(self._http)
        self._benchmarks = BenchmarksResource(self._http)
        self._scenarios = ScenariosResource(self._http)
        self._objects = ObjectsResource(self._http)
        self._repositories = RepositoriesResource(self._http)
        self._secrets = SecretsResource(self._http)
        self._agents = AgentsResource(self._http)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit async context, closing HTTP client."""
        if self._http:
            await self._http.__aexit__(exc_type, exc_val, exc_tb)
            self._http = None
            self._devboxes = None
            self._blueprints = None
            self._benchmarks = None
            self._scenarios = None
            self._objects = None
            self._repositories = None
            self._secrets = None
            self._agents = None

    def _require(self, resource: Any) -> Any:
        if resource is None:
            raise RuntimeError("RunloopClient not initialized. Use 'async with' context.")
        return resource

    @property
    def http(self) -> HTTPClient:
        """Get the HTTP client."""
        return self._require(self._http)

    @property
    def devboxes(self) -> DevboxesResource:
        return self._require(self._devboxes)

    @property
    def blueprints(self) -> BlueprintsResource:
        return self._require(self._blueprints)

    @property
    def benchmarks(self) -> BenchmarksResource:
        return self._require(self._benchmarks)

    @property
    def scenarios(self) -> ScenariosResource:
        return self._require(self._scenarios)

    @property
    def objects(self) -> ObjectsResource:
        return self._require(self._objects)

    @property
    def repositories(self) -> RepositoriesResource:
        return self._require(self._repositories)

    @property
    def secrets(self) -> SecretsResource:
        return self._require(self._secrets)

    @property
    def agents(self) -> AgentsResource:
        return self._require(self._agents)

    # Object wrappers

    async def create_devbox(self, **create_params: Any) -> Devbox:
        """Create a devbox.

        Accepts the same keyword arguments as ``devboxes.create``. The
        returned devbox may still be provisioning; call ``await_running``.
        """
        info = await self.devboxes.create(**create_params)
        return Devbox(self.devboxes, info)

    async def get_devbox(self, devbox_id: str) -> Devbox:
        """Get an existing devbox.

        Raises:
            NotFoundError: If the devbox doesn't exist
        """
        info = await self.devboxes.retrieve(devbox_id)
        return Devbox(self.devboxes, info)

    async def start_scenario_run(
        self,
        *,
        scenario_id: str,
        run_name: str | None = None,
        benchmark_run_id: str | None = None,
        metadata: dict[str, str] | None = None,
    ) -> ScenarioRun:
        """Start a scenario run; the run's devbox starts provisioning."""
        view = await self.scenarios.start_run(
            scenario_id=scenario_id,
            run_name=run_name,
            benchmark_run_id=benchmark_run_id,
            metadata=metadata,
        )
        return ScenarioRun(self.scenarios.runs, self.devboxes, view.id, view.devbox_id)

    async def create_blueprint(
        self,
        *,
        polling: PollingOptions[BlueprintView] | None = None,
        **create_params: Any,
    ) -> Blueprint:
        """Build a blueprint and wait for the build to finish.

        Accepts the same keyword arguments as ``blueprints.create``.

        Raises:
            UnexpectedStateError: If the build failed
        """
        info = await self.blueprints.create_and_await_build_complete(
            polling=polling, **create_params
        )
        return Blueprint(self.blueprints, info)

    async def get_blueprint(self, blueprint_id: str) -> Blueprint:
        info = await self.blueprints.retrieve(blueprint_id)
        return Blueprint(self.blueprints, info)

    async def get_snapshot(self, snapshot_id: str) -> Snapshot:
        """Find a disk snapshot by ID.

        There is no retrieve endpoint for snapshots, so this walks the
        snapshot list.

        Raises:
            NotFoundError: If no snapshot has this ID
        """
        page = await self.devboxes.disk_snapshots.list()
        async for view in page:
            if view.id == snapshot_id:
                return Snapshot(self.devboxes.disk_snapshots, view)
        raise NotFoundError(
            f"Snapshot {snapshot_id} not found",
            {"snapshot_id": snapshot_id},
        )

    async def list_snapshots(
        self,
        *,
        devbox_id: str | None = None,
        metadata: dict[str, str] | None = None,
    ) -> list[Snapshot]:
        """Collect every disk snapshot across pages."""
        page = await self.devboxes.disk_snapshots.list(devbox_id=devbox_id, metadata=metadata)
        return [Snapshot(self.devboxes.disk_snapshots, view) async for view in page]

    async def create_object(
        self,
        *,
        name: str,
        content_type: str,
        metadata: dict[str, str] | None = None,
    ) -> StorageObject:
        """Create a stored object in the UPLOADING state.

        Upload with ``upload_content`` and finish with ``complete``.
        """
        info = await self.objects.create(name=name, content_type=content_type, metadata=metadata)
        return StorageObject(self.objects, info)

    async def upload_object(
        self,
        *,
        name: str,
        content: str | bytes,
        content_type: str,
        metadata: dict[str, str] | None = None,
    ) -> StorageObject:
        """Create, upload and complete a stored object in one call."""
        obj = await self.create_object(name=name, content_type=content_type, metadata=metadata)
        await obj.upload_content(content)
        await obj.complete()
        return obj

    async def get_object(self, object_id: str) -> StorageObject:
        info = await self.objects.retrieve(object_id)
        return StorageObject(self.objects, info)

    async def list_objects(self, **list_params: Any) -> list[StorageObject]:
        """Collect every stored object across pages.

        Accepts the same filters as ``objects.list``.
        """
        page = await self.objects.list(**list_params)
        return [StorageObject(self.objects, view) async for view in page]
