"""Runloop MCP Server implementation.

This server exposes the Runloop API through the MCP protocol, one tool per
REST endpoint, so AI agents can create devboxes, run commands and drive
scenarios. Command-line filters select which tools are exposed.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys
from collections.abc import Iterable, Sequence
from contextlib import asynccontextmanager
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import (
    TextContent,
    Tool,
)

from runloop_client import APIError, RunloopClient, RunloopError
from runloop_client_mcp.endpoints import Endpoint, Filter, UnmatchedFiltersError, query
from runloop_client_mcp.filtering import maybe_filter
from runloop_client_mcp.tools import endpoints as all_endpoints


logger = logging.getLogger("runloop_client_mcp")


# Global client instance (managed by lifespan)
_client: RunloopClient | None = None
# Tools exposed by this server, by name
_endpoints: dict[str, Endpoint] = {e.tool.name: e for e in all_endpoints}


def _read_positive_int_env(name: str, default: int) -> int:
    value = os.environ.get(name)
    if value is None:
        return default
    try:
        parsed = int(value)
    except ValueError:
        return default
    if parsed <= 0:
        return default
    return parsed


_MAX_TOOL_TEXT_CHARS = _read_positive_int_env("RUNLOOP_MCP_MAX_TOOL_TEXT_CHARS", 12000)
_CALL_TIMEOUT = _read_positive_int_env("RUNLOOP_MCP_CALL_TIMEOUT", 600)


def _truncate_text(text: str | None, *, limit: int | None = None) -> str:
    if limit is None:
        limit = _MAX_TOOL_TEXT_CHARS
    if text is None:
        return ""
    if len(text) <= limit:
        return text
    trimmed = text[:limit]
    hidden = len(text) - limit
    return f"{trimmed}\n\n...[truncated {hidden} chars; original={len(text)}]"


def _format_result(result: Any) -> str:
    if isinstance(result, str):
        return result
    return json.dumps(result, indent=2, ensure_ascii=False, default=str)


def _format_runloop_error(error: RunloopError) -> str:
    suffix = ""
    if error.details:
        serialized = json.dumps(error.details, ensure_ascii=False, default=str)
        suffix = f"\n\ndetails: {_truncate_text(serialized, limit=1000)}"
    if isinstance(error, APIError):
        return f"**API Error:** [{error.status_code}] {error.message}{suffix}"
    return f"**API Error:** {error.message}{suffix}"


def get_config() -> dict[str, Any]:
    """Get configuration from environment variables."""
    api_key = os.environ.get("RUNLOOP_API_KEY")
    if not api_key:
        raise ValueError(
            "RUNLOOP_API_KEY environment variable is required. "
            "Set it in your MCP configuration."
        )
    return {
        "api_key": api_key,
        "base_url": os.environ.get("RUNLOOP_BASE_URL") or None,
    }


@asynccontextmanager
async def lifespan(server: Server):
    """Manage the RunloopClient lifecycle."""
    global _client
    config = get_config()

    _client = RunloopClient(api_key=config["api_key"], base_url=config["base_url"])
    await _client.__aenter__()

    try:
        yield
    finally:
        await _client.__aexit__(None, None, None)
        _client = None


# Create MCP server
server = Server("runloop-client-mcp")


def init_server(selected: Iterable[Endpoint]) -> Server:
    """Expose ``selected`` endpoints as the server's tools."""
    global _endpoints
    _endpoints = {e.tool.name: e for e in selected}
    logger.debug("tools_selected count=%d", len(_endpoints))
    return server


@server.list_tools()
async def list_tools() -> list[Tool]:
    """List available tools."""
    return [e.tool for e in _endpoints.values()]


@server.call_tool()
async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
    """Handle tool calls."""
    if _client is None:
        return [TextContent(type="text", text="Error: RunloopClient not initialized")]

    endpoint = _endpoints.get(name)
    if endpoint is None:
        return [TextContent(type="text", text=f"Unknown tool: {name}")]

    try:
        args = dict(arguments or {})
        jq_filter = args.pop("jq_filter", None)
        if jq_filter is not None and not isinstance(jq_filter, str):
            raise ValueError("field 'jq_filter' must be a string")

        async with asyncio.timeout(_CALL_TIMEOUT):
            result = await endpoint.handler(_client, args)
        result = maybe_filter(jq_filter, result)

        logger.debug("tool_called tool=%s filtered=%s", name, bool(jq_filter))
        return [TextContent(type="text", text=_truncate_text(_format_result(result)))]

    except ValueError as e:
        return [TextContent(type="text", text=f"**Validation Error:** {e!s}")]
    except TimeoutError:
        logger.warning("tool_timeout tool=%s timeout=%ds", name, _CALL_TIMEOUT)
        return [
            TextContent(
                type="text",
                text=f"**Timeout Error:** API call timed out after {_CALL_TIMEOUT}s",
            )
        ]
    except RunloopError as e:
        logger.warning("runloop_error tool=%s error=%s message=%s", name, type(e).__name__, e.message)
        return [TextContent(type="text", text=_format_runloop_error(e))]
    except Exception as e:
        logger.exception("unexpected_error tool=%s", name)
        return [TextContent(type="text", text=f"**Error:** {e!s}")]


class _FilterAction(argparse.Action):
    """Append a Filter to a shared list, keeping command-line order."""

    def __init__(self, option_strings, dest, filter_type: str, filter_op: str, **kwargs):
        self.filter_type = filter_type
        self.filter_op = filter_op
        super().__init__(option_strings, dest, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        filters = list(getattr(namespace, self.dest, None) or [])
        filters.append(Filter(type=self.filter_type, op=self.filter_op, value=values))
        setattr(namespace, self.dest, filters)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="runloop-client-mcp",
        description=(
            "Run the Runloop MCP server over stdio. Filters apply in order; "
            "the last matching filter decides whether a tool is exposed."
        ),
    )
    flags = [
        ("resource", "resource name, '*' wildcards allowed (e.g. devboxes.*)"),
        ("operation", "operation kind: read or write"),
        ("tag", "endpoint tag"),
        ("tool", "tool name"),
    ]
    for filter_type, help_text in flags:
        parser.add_argument(
            f"--{filter_type}",
            dest="filters",
            action=_FilterAction,
            filter_type=filter_type,
            filter_op="include",
            metavar=filter_type.upper(),
            help=f"include tools by {help_text}",
        )
        parser.add_argument(
            f"--no-{filter_type}",
            dest="filters",
            action=_FilterAction,
            filter_type=filter_type,
            filter_op="exclude",
            metavar=filter_type.upper(),
            help=f"exclude tools by {help_text}",
        )
    parser.add_argument(
        "--list",
        action="store_true",
        help="print the selected tools and exit",
    )
    return parser


def select_endpoints(filters: Sequence[Filter]) -> list[Endpoint]:
    """Endpoints selected by ``filters``; all endpoints when there are none."""
    if not filters:
        return list(all_endpoints)
    return query(filters, all_endpoints)


async def run_server():
    """Run the MCP server."""
    async with lifespan(server):
        async with stdio_server() as (read_stream, write_stream):
            await server.run(
                read_stream,
                write_stream,
                server.create_initialization_options(),
            )


def main(argv: Sequence[str] | None = None):
    """Main entry point."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=os.environ.get("RUNLOOP_MCP_LOG_LEVEL", "WARNING").upper(),
        stream=sys.stderr,
    )

    try:
        selected = select_endpoints(args.filters or [])
    except UnmatchedFiltersError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)

    if args.list:
        for e in selected:
            print(f"{e.tool.name} ({e.metadata.resource}, {e.metadata.operation})")
        return

    init_server(selected)
    try:
        asyncio.run(run_server())
    except KeyboardInterrupt:
        pass
    except Exception as e:
        print(f"Server error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
