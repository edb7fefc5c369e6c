"""Resource groups of the Runloop API."""

from runloop_client.resources.agents import AgentsResource
from runloop_client.resources.base import APIResource
from runloop_client.resources.benchmarks import BenchmarkRunsResource, BenchmarksResource
from runloop_client.resources.blueprints import BlueprintsResource
from runloop_client.resources.computers import BrowsersResource, ComputersResource, LogsResource
from runloop_client.resources.devboxes import DevboxesResource
from runloop_client.resources.disk_snapshots import DiskSnapshotsResource
from runloop_client.resources.executions import ExecutionsResource
from runloop_client.resources.objects import ObjectsResource
from runloop_client.resources.repositories import RepositoriesResource
from runloop_client.resources.scenarios import (
    ScenarioRunsResource,
    ScenariosResource,
    ScorersResource,
)
from runloop_client.resources.secrets import SecretsResource

__all__ = [
    "APIResource",
    "AgentsResource",
    "BenchmarkRunsResource",
    "BenchmarksResource",
    "BlueprintsResource",
    "BrowsersResource",
    "ComputersResource",
    "DevboxesResource",
    "DiskSnapshotsResource",
    "ExecutionsResource",
    "LogsResource",
    "ObjectsResource",
    "RepositoriesResource",
    "ScenarioRunsResource",
    "ScenariosResource",
    "ScorersResource",
    "SecretsResource",
]
