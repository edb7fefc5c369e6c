"""All endpoints exposed as MCP tools."""

from runloop_client_mcp.endpoints import Endpoint
from runloop_client_mcp.tools import (
    agents,
    benchmarks,
    blueprints,
    devboxes,
    objects,
    repositories,
    scenarios,
    secrets,
)

endpoints: list[Endpoint] = [
    *devboxes.ENDPOINTS,
    *blueprints.ENDPOINTS,
    *benchmarks.ENDPOINTS,
    *scenarios.ENDPOINTS,
    *objects.ENDPOINTS,
    *repositories.ENDPOINTS,
    *secrets.ENDPOINTS,
    *agents.ENDPOINTS,
]

__all__ = ["endpoints"]
