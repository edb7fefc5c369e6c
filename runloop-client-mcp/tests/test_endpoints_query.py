"""Tests for the endpoint registry and tool selection."""

from __future__ import annotations

import pytest

from runloop_client_mcp.endpoints import (
    Filter,
    UnmatchedFiltersError,
    endpoint,
    query,
    to_jsonable,
)
from runloop_client_mcp.tools import endpoints as all_endpoints
from runloop_client.types import DevboxView


async def _noop(client, args):
    return {}


def _ep(name: str, resource: str, operation: str = "read", tags: tuple[str, ...] = ()):
    return endpoint(
        name,
        f"{name} endpoint",
        resource=resource,
        operation=operation,
        http_method="get" if operation == "read" else "post",
        http_path=f"/v1/{resource}",
        operation_id=name,
        handler=_noop,
        tags=tags,
    )


ENDPOINTS = [
    _ep("retrieve_devboxes", "devboxes"),
    _ep("create_devboxes", "devboxes", "write"),
    _ep("retrieve_devboxes_executions", "devboxes.executions"),
    _ep("kill_devboxes_executions", "devboxes.executions", "write", tags=("exec",)),
    _ep("list_secrets", "secrets"),
]


def _names(selected):
    return [e.tool.name for e in selected]


class TestQuery:
    def test_include_starts_from_nothing(self):
        selected = query([Filter("resource", "include", "secrets")], ENDPOINTS)
        assert _names(selected) == ["list_secrets"]

    def test_all_excludes_start_from_everything(self):
        selected = query([Filter("operation", "exclude", "write")], ENDPOINTS)
        assert _names(selected) == [
            "retrieve_devboxes",
            "retrieve_devboxes_executions",
            "list_secrets",
        ]

    def test_last_matching_filter_wins(self):
        filters = [
            Filter("resource", "include", "devboxes*"),
            Filter("operation", "exclude", "write"),
            Filter("tool", "include", "create_devboxes"),
        ]
        selected = query(filters, ENDPOINTS)
        assert _names(selected) == [
            "retrieve_devboxes",
            "create_devboxes",
            "retrieve_devboxes_executions",
        ]

    def test_resource_wildcard_requires_full_match(self):
        selected = query([Filter("resource", "include", "devboxes.*")], ENDPOINTS)
        assert _names(selected) == ["retrieve_devboxes_executions", "kill_devboxes_executions"]

    def test_resource_match_ignores_case_and_stray_characters(self):
        selected = query([Filter("resource", "include", " Secrets! ")], ENDPOINTS)
        assert _names(selected) == ["list_secrets"]

    def test_tag_filter(self):
        selected = query([Filter("tag", "include", "exec")], ENDPOINTS)
        assert _names(selected) == ["kill_devboxes_executions"]

    def test_unmatched_resource_and_tool_filters_raise(self):
        filters = [
            Filter("resource", "include", "widgets"),
            Filter("tool", "exclude", "nope"),
            Filter("tag", "include", "missing-tag"),
        ]
        with pytest.raises(UnmatchedFiltersError) as exc_info:
            query(filters, ENDPOINTS)

        assert str(exc_info.value) == (
            "The following filters did not match any endpoints: resource=widgets, tool=nope"
        )
        assert [f.value for f in exc_info.value.filters] == ["widgets", "nope"]

    def test_unmatched_filters_error_is_value_error(self):
        assert issubclass(UnmatchedFiltersError, ValueError)


class TestEndpoint:
    def test_tool_accepts_jq_filter(self):
        tool = _ep("list_secrets", "secrets").tool
        assert "jq_filter" in tool.inputSchema["properties"]
        assert tool.description.endswith("list_secrets endpoint")
        assert "jq_filter" in tool.description

    def test_read_tools_are_marked_read_only(self):
        assert _ep("list_secrets", "secrets").tool.annotations.readOnlyHint is True
        assert _ep("create_devboxes", "devboxes", "write").tool.annotations is None

    def test_to_jsonable_handles_models_and_lists(self):
        devbox = DevboxView(id="dbx_1", status="running")
        assert to_jsonable(devbox) == {"id": "dbx_1", "status": "running", "metadata": {}}
        assert to_jsonable([devbox])[0]["id"] == "dbx_1"
        assert to_jsonable({"already": "json"}) == {"already": "json"}


class TestRegistry:
    def test_tool_names_are_unique(self):
        names = _names(all_endpoints)
        assert len(names) == len(set(names))

    def test_every_tool_accepts_jq_filter(self):
        for e in all_endpoints:
            assert "jq_filter" in e.tool.inputSchema["properties"], e.tool.name

    def test_required_fields_are_declared_properties(self):
        for e in all_endpoints:
            schema = e.tool.inputSchema
            for field in schema["required"]:
                assert field in schema["properties"], f"{e.tool.name}: {field}"

    def test_covers_every_resource(self):
        resources = {e.metadata.resource for e in all_endpoints}
        assert {
            "devboxes",
            "devboxes.executions",
            "devboxes.disk_snapshots",
            "blueprints",
            "benchmarks",
            "benchmarks.runs",
            "scenarios",
            "scenarios.runs",
            "scenarios.scorers",
            "objects",
            "repositories",
            "secrets",
            "agents",
        } <= resources

    def test_devboxes_wildcard_selects_sub_resources(self):
        selected = query([Filter("resource", "include", "devboxes.*")], all_endpoints)
        assert selected
        assert all(e.metadata.resource.startswith("devboxes.") for e in selected)
