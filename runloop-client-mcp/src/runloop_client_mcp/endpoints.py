"""Endpoint registry types and the tool selection query.

Every REST endpoint exposed over MCP is an ``Endpoint``: metadata describing
the endpoint, the MCP ``Tool`` definition, and an async handler calling the
Runloop client. ``query`` selects endpoints with include/exclude filters on
resource, operation, tag or tool name.
"""

from __future__ import annotations

import re
from collections.abc import Awaitable, Callable, Iterable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Literal

from mcp.types import Tool, ToolAnnotations

from runloop_client.resources.base import dump_model

if TYPE_CHECKING:
    from runloop_client import RunloopClient

Handler = Callable[["RunloopClient", dict[str, Any]], Awaitable[Any]]

FilterType = Literal["resource", "operation", "tag", "tool"]
FilterOp = Literal["include", "exclude"]

JQ_FILTER_PROPERTY: dict[str, Any] = {
    "type": "string",
    "title": "jq Filter",
    "description": (
        "A jq filter to apply to the response to include certain fields. "
        "For example: to include only the `id` field of every devbox in a list "
        'response, provide ".devboxes[].id". '
        "See https://jqlang.org/manual/ for the filter syntax."
    ),
}

_JQ_HINT = (
    "When using this tool, use the `jq_filter` parameter to reduce the "
    "response size.\n\n"
)


@dataclass(frozen=True)
class Metadata:
    resource: str
    operation: Literal["read", "write"]
    http_method: str
    http_path: str
    operation_id: str
    tags: tuple[str, ...] = ()


@dataclass(frozen=True)
class Endpoint:
    metadata: Metadata
    tool: Tool
    handler: Handler


@dataclass(frozen=True)
class Filter:
    type: FilterType
    op: FilterOp
    value: str


class UnmatchedFiltersError(ValueError):
    """A resource or tool filter matched no endpoint."""

    def __init__(self, filters: Sequence[Filter]) -> None:
        self.filters = list(filters)
        described = ", ".join(f"{f.type}={f.value}" for f in self.filters)
        super().__init__(f"The following filters did not match any endpoints: {described}")


def endpoint(
    name: str,
    description: str,
    *,
    resource: str,
    operation: Literal["read", "write"],
    http_method: str,
    http_path: str,
    operation_id: str,
    handler: Handler,
    properties: dict[str, Any] | None = None,
    required: Sequence[str] = (),
    tags: Sequence[str] = (),
) -> Endpoint:
    """Build an ``Endpoint`` whose tool also accepts ``jq_filter``."""
    schema_properties = dict(properties or {})
    schema_properties["jq_filter"] = JQ_FILTER_PROPERTY
    annotations = ToolAnnotations(readOnlyHint=True) if operation == "read" else None
    tool = Tool(
        name=name,
        description=_JQ_HINT + description,
        inputSchema={
            "type": "object",
            "properties": schema_properties,
            "required": list(required),
        },
        annotations=annotations,
    )
    return Endpoint(
        metadata=Metadata(
            resource=resource,
            operation=operation,
            http_method=http_method,
            http_path=http_path,
            operation_id=operation_id,
            tags=tuple(tags),
        ),
        tool=tool,
        handler=handler,
    )


def to_jsonable(value: Any) -> Any:
    """Convert client results (models, pages, lists) to JSON-compatible data."""
    if hasattr(value, "to_dict") and callable(value.to_dict):
        return value.to_dict()
    if isinstance(value, list):
        return [to_jsonable(item) for item in value]
    return dump_model(value)


def _normalize_resource(resource: str) -> str:
    return re.sub(r"[^a-z.*\-_]", "", resource.lower())


def match(filter_: Filter, endpoint_: Endpoint) -> bool:
    """Return True when ``filter_`` applies to ``endpoint_``."""
    if filter_.type == "resource":
        pattern = "^" + _normalize_resource(filter_.value).replace("*", ".*") + "$"
        return re.match(pattern, _normalize_resource(endpoint_.metadata.resource)) is not None
    if filter_.type == "operation":
        return endpoint_.metadata.operation == filter_.value
    if filter_.type == "tag":
        return filter_.value in endpoint_.metadata.tags
    if filter_.type == "tool":
        return endpoint_.tool.name == filter_.value
    raise ValueError(f"unknown filter type: {filter_.type}")


def query(filters: Sequence[Filter], endpoints: Iterable[Endpoint]) -> list[Endpoint]:
    """Select the endpoints matching ``filters``.

    Filters apply in order and the last matching filter decides. When all
    filters are excludes, endpoints start out included; otherwise they start
    excluded.

    Raises:
        UnmatchedFiltersError: If a ``resource`` or ``tool`` filter matched
            no endpoint
    """
    all_excludes = bool(filters) and all(f.op == "exclude" for f in filters)
    unmatched = set(range(len(filters)))

    selected: list[Endpoint] = []
    for endpoint_ in endpoints:
        included = all_excludes
        for index, filter_ in enumerate(filters):
            if match(filter_, endpoint_):
                unmatched.discard(index)
                included = filter_.op == "include"
        if included:
            selected.append(endpoint_)

    missing = [
        filters[index]
        for index in sorted(unmatched)
        if filters[index].type in ("tool", "resource")
    ]
    if missing:
        raise UnmatchedFiltersError(missing)
    return selected
