"""Type definitions for the Runloop client.

Pydantic models for response deserialization. Views accept fields they do
not declare so new service fields pass through untouched.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class _View(BaseModel):
    model_config = ConfigDict(extra="allow")


class DevboxStatus(str, Enum):
    """Devbox lifecycle status."""

    PROVISIONING = "provisioning"
    INITIALIZING = "initializing"
    RUNNING = "running"
    SUSPENDING = "suspending"
    SUSPENDED = "suspended"
    RESUMING = "resuming"
    FAILURE = "failure"
    SHUTDOWN = "shutdown"


class ScenarioRunState(str, Enum):
    """Scenario run state."""

    RUNNING = "running"
    SCORING = "scoring"
    SCORED = "scored"
    COMPLETED = "completed"
    CANCELED = "canceled"
    TIMEOUT = "timeout"
    FAILED = "failed"


class BlueprintStatus(str, Enum):
    """Blueprint build status."""

    PROVISIONING = "provisioning"
    BUILDING = "building"
    FAILED = "failed"
    BUILD_COMPLETE = "build_complete"


# Devboxes


class LaunchParameters(_View):
    """Launch parameters shared by devboxes and blueprints."""

    after_idle: dict[str, Any] | None = None
    available_ports: list[int] | None = None
    keep_alive_time_seconds: int | None = None
    launch_commands: list[str] | None = None
    resource_size_request: str | None = None


class DevboxView(_View):
    """Devbox information."""

    id: str
    status: str
    create_time_ms: int | None = None
    end_time_ms: int | None = None
    name: str | None = None
    blueprint_id: str | None = None
    snapshot_id: str | None = None
    initiator_id: str | None = None
    initiator_type: str | None = None
    launch_parameters: LaunchParameters | None = None
    metadata: dict[str, str] = Field(default_factory=dict)
    failure_reason: str | None = None
    shutdown_reason: str | None = None


class DevboxTunnelView(_View):
    """Public tunnel to a devbox port."""

    devbox_id: str
    port: int
    url: str


class DevboxCreateSSHKeyResponse(_View):
    id: str
    ssh_private_key: str
    url: str


class DevboxExecutionDetailView(_View):
    """Result of a synchronous command execution."""

    devbox_id: str
    exit_status: int
    stdout: str = ""
    stderr: str = ""
    shell_name: str | None = None


class DevboxAsyncExecutionDetailView(_View):
    """Asynchronous command execution status."""

    devbox_id: str
    execution_id: str
    status: str
    exit_status: int | None = None
    stdout: str | None = None
    stderr: str | None = None
    shell_name: str | None = None


class DevboxSnapshotView(_View):
    """Disk snapshot of a devbox."""

    id: str
    source_devbox_id: str | None = None
    create_time_ms: int | None = None
    name: str | None = None
    metadata: dict[str, str] = Field(default_factory=dict)


class DevboxSnapshotAsyncStatusView(_View):
    """Status of an asynchronous disk snapshot operation."""

    status: str
    error_message: str | None = None
    snapshot: DevboxSnapshotView | None = None


class DevboxLogView(_View):
    level: str | None = None
    message: str = ""
    source: str | None = None
    timestamp_ms: int | None = None
    cmd: str | None = None
    cmd_id: str | None = None
    exit_code: int | None = None
    shell_name: str | None = None


class DevboxLogsListView(_View):
    logs: list[DevboxLogView] = Field(default_factory=list)


class BrowserView(_View):
    """Browser-enabled devbox."""

    connection_url: str | None = None
    devbox: DevboxView


class ComputerView(_View):
    """Computer-use enabled devbox."""

    devbox: DevboxView
    live_screen_url: str | None = None


# Blueprints


class BlueprintView(_View):
    """Blueprint information."""

    id: str
    name: str
    status: str | None = None
    create_time_ms: int | None = None
    failure_reason: str | None = None
    is_public: bool | None = None
    parameters: dict[str, Any] | None = None
    metadata: dict[str, str] = Field(default_factory=dict)


class BlueprintBuildLog(_View):
    level: str | None = None
    message: str = ""
    timestamp_ms: int | None = None


class BlueprintBuildLogsListView(_View):
    blueprint_id: str
    logs: list[BlueprintBuildLog] = Field(default_factory=list)


class BlueprintPreviewView(_View):
    dockerfile: str


# Benchmarks


class BenchmarkView(_View):
    """A grouped set of scenarios forming a benchmark."""

    id: str
    name: str
    metadata: dict[str, str] = Field(default_factory=dict)
    scenario_ids: list[str] = Field(default_factory=list, alias="scenarioIds")
    description: str | None = None
    is_public: bool | None = None

    model_config = ConfigDict(extra="allow", populate_by_name=True)


class BenchmarkRunView(_View):
    """A run of a benchmark."""

    id: str
    benchmark_id: str | None = None
    state: str
    start_time_ms: int | None = None
    duration_ms: int | None = None
    name: str | None = None
    score: float | None = None
    metadata: dict[str, str] = Field(default_factory=dict)


# Scenarios


class InputContext(_View):
    problem_statement: str
    additional_context: Any = None


class ScoringFunction(_View):
    name: str
    weight: float
    scorer: dict[str, Any] | None = None
    bash_script: str | None = None


class ScoringContract(_View):
    scoring_function_parameters: list[ScoringFunction] = Field(default_factory=list)


class ScoringFunctionResultView(_View):
    scoring_function_name: str
    score: float
    output: str = ""
    state: str | None = None


class ScoringContractResultView(_View):
    score: float
    scoring_function_results: list[ScoringFunctionResultView] = Field(default_factory=list)


class ScenarioView(_View):
    """Scenario definition."""

    id: str
    name: str
    input_context: InputContext | None = None
    scoring_contract: ScoringContract | None = None
    environment: dict[str, Any] | None = None
    is_public: bool | None = None
    metadata: dict[str, str] = Field(default_factory=dict)


class ScenarioRunView(_View):
    """A run of a scenario on a devbox."""

    id: str
    devbox_id: str
    scenario_id: str | None = None
    state: str
    benchmark_run_id: str | None = None
    duration_ms: int | None = None
    name: str | None = None
    start_time_ms: int | None = None
    scoring_contract_result: ScoringContractResultView | None = None
    metadata: dict[str, str] = Field(default_factory=dict)


class ScorerView(_View):
    """Custom scenario scorer."""

    id: str
    type: str
    bash_script: str | None = None


class ScorerValidateResponse(_View):
    name: str
    scoring_context: Any = None
    scoring_result: ScoringFunctionResultView | None = None


# Objects


class ObjectView(_View):
    """Stored object."""

    id: str
    name: str
    content_type: str | None = None
    state: str | None = None
    size_bytes: int | None = None
    create_time_ms: int | None = None
    upload_url: str | None = None
    metadata: dict[str, str] = Field(default_factory=dict)


class ObjectDownloadURLView(_View):
    download_url: str


# Repositories


class RepositoryConnectionView(_View):
    id: str
    name: str
    owner: str
    status: str | None = None
    failure_reason: str | None = None


class RepositoryInspectionDetails(_View):
    id: str
    status: str
    commit_sha: str | None = None
    create_time_ms: int | None = None


class RepositoryInspectionListView(_View):
    inspections: list[RepositoryInspectionDetails] = Field(default_factory=list)


# Secrets


class SecretView(_View):
    id: str
    name: str
    create_time_ms: int | None = None
    update_time_ms: int | None = None


class SecretListView(_View):
    secrets: list[SecretView] = Field(default_factory=list)
    has_more: bool = False
    total_count: int = 0


# Agents


class AgentView(_View):
    id: str
    name: str
    create_time_ms: int | None = None
    is_public: bool | None = None
    source: dict[str, Any] | None = None
