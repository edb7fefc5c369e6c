"""Validation of tool call arguments.

Readers raise ``ValueError`` with a message naming the field; the server
renders those as validation errors.
"""

from __future__ import annotations

from typing import Any


def require_str(arguments: dict[str, Any], key: str) -> str:
    value = arguments.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"missing required field: {key}")
    return value


def optional_str(arguments: dict[str, Any], key: str) -> str | None:
    value = arguments.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"field '{key}' must be a string")
    return value


def read_int(
    arguments: dict[str, Any],
    key: str,
    default: int | None = None,
    *,
    min_value: int | None = None,
    max_value: int | None = None,
) -> int:
    value = arguments.get(key, default)
    if value is None:
        raise ValueError(f"missing required field: {key}")
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"field '{key}' must be an integer")
    if min_value is not None and value < min_value:
        raise ValueError(f"field '{key}' must be >= {min_value}")
    if max_value is not None and value > max_value:
        raise ValueError(f"field '{key}' must be <= {max_value}")
    return value


def optional_int(
    arguments: dict[str, Any],
    key: str,
    *,
    min_value: int | None = None,
) -> int | None:
    if arguments.get(key) is None:
        return None
    return read_int(arguments, key, min_value=min_value)


def optional_bool(arguments: dict[str, Any], key: str) -> bool | None:
    value = arguments.get(key)
    if value is None or isinstance(value, bool):
        return value
    raise ValueError(f"field '{key}' must be a boolean")


def optional_dict(arguments: dict[str, Any], key: str) -> dict[str, Any] | None:
    value = arguments.get(key)
    if value is None:
        return None
    if not isinstance(value, dict):
        raise ValueError(f"field '{key}' must be an object")
    return value


def require_str_list(arguments: dict[str, Any], key: str) -> list[str]:
    value = arguments.get(key)
    if not isinstance(value, list) or not value:
        raise ValueError(f"field '{key}' must be a non-empty array of strings")
    if not all(isinstance(item, str) and item.strip() for item in value):
        raise ValueError(f"field '{key}' must be a non-empty array of strings")
    return value


def page_params(arguments: dict[str, Any]) -> dict[str, Any]:
    """Common ``limit``/``starting_after`` list arguments."""
    return {
        "limit": optional_int(arguments, "limit", min_value=1),
        "starting_after": optional_str(arguments, "starting_after"),
    }


def body_without(arguments: dict[str, Any], *keys: str) -> dict[str, Any]:
    """Request body fields: every argument except path parameters."""
    return {k: v for k, v in arguments.items() if k not in keys and v is not None}
