"""Runloop Python client.

An async client for the Runloop API - remote devboxes, blueprints,
scenarios and benchmarks for AI agents.
"""

from importlib.metadata import PackageNotFoundError, version as _pkg_version

from runloop_client.blueprint import Blueprint
from runloop_client.client import RunloopClient
from runloop_client.devbox import Devbox
from runloop_client.errors import (
    APIConnectionError,
    APIError,
    APITimeoutError,
    AuthenticationError,
    BadRequestError,
    ConflictError,
    InternalServerError,
    MaxAttemptsExceededError,
    NotFoundError,
    PermissionDeniedError,
    PollingTimeoutError,
    RateLimitError,
    RequestTimeoutError,
    RunloopError,
    UnexpectedStateError,
    UnprocessableEntityError,
)
from runloop_client.execution import Execution, ExecutionResult
from runloop_client.pagination import CursorPage
from runloop_client.polling import PollingOptions, poll
from runloop_client.scenario_run import ScenarioRun
from runloop_client.snapshot import Snapshot
from runloop_client.storage_object import StorageObject
from runloop_client.types import (
    AgentView,
    BenchmarkRunView,
    BenchmarkView,
    BlueprintStatus,
    BlueprintView,
    DevboxAsyncExecutionDetailView,
    DevboxExecutionDetailView,
    DevboxSnapshotView,
    DevboxStatus,
    DevboxView,
    ObjectView,
    RepositoryConnectionView,
    ScenarioRunState,
    ScenarioRunView,
    ScenarioView,
    ScorerView,
    SecretView,
)

__all__ = [
    # Client
    "RunloopClient",
    "Devbox",
    "ScenarioRun",
    "Execution",
    "ExecutionResult",
    "Blueprint",
    "Snapshot",
    "StorageObject",
    "CursorPage",
    "PollingOptions",
    "poll",
    # Types
    "DevboxStatus",
    "DevboxView",
    "DevboxExecutionDetailView",
    "DevboxAsyncExecutionDetailView",
    "DevboxSnapshotView",
    "BlueprintStatus",
    "BlueprintView",
    "BenchmarkView",
    "BenchmarkRunView",
    "ScenarioRunState",
    "ScenarioView",
    "ScenarioRunView",
    "ScorerView",
    "ObjectView",
    "RepositoryConnectionView",
    "SecretView",
    "AgentView",
    # Errors
    "RunloopError",
    "APIError",
    "BadRequestError",
    "AuthenticationError",
    "PermissionDeniedError",
    "NotFoundError",
    "RequestTimeoutError",
    "ConflictError",
    "UnprocessableEntityError",
    "RateLimitError",
    "InternalServerError",
    "APIConnectionError",
    "APITimeoutError",
    "PollingTimeoutError",
    "MaxAttemptsExceededError",
    "UnexpectedStateError",
]

try:
    __version__ = _pkg_version("runloop-client")
except PackageNotFoundError:
    __version__ = "unknown"
