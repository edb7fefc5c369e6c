"""jq filtering of tool responses."""

from __future__ import annotations

from typing import Any

import jq


def maybe_filter(jq_filter: str | None, response: Any) -> Any:
    """Apply a jq expression to a JSON-compatible response.

    Without a filter the response is returned unchanged. A filter yielding a
    single value returns that value; several values are returned as a list.

    Raises:
        ValueError: If the expression does not compile or fails on the input
    """
    if not jq_filter:
        return response
    try:
        program = jq.compile(jq_filter)
    except ValueError as e:
        raise ValueError(f"invalid jq filter: {e}") from e
    try:
        results = program.input_value(response).all()
    except ValueError as e:
        raise ValueError(f"jq filter failed: {e}") from e
    if len(results) == 1:
        return results[0]
    return results
