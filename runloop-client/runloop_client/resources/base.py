"""Base resource class."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

from runloop_client.pagination import CursorPage, ItemT

if TYPE_CHECKING:
    from runloop_client._http import HTTPClient


def compact(body: dict[str, Any]) -> dict[str, Any]:
    """Drop None values so optional fields are omitted from the payload."""
    return {k: v for k, v in body.items() if v is not None}


class APIResource:
    """Base class for API resource groups.

    Each resource (devboxes, blueprints, scenarios, ...) wraps HTTP calls
    to one family of REST endpoints.
    """

    def __init__(self, http: HTTPClient) -> None:
        """Initialize resource.

        Args:
            http: HTTP client for making requests
        """
        self._http = http

    async def _list(
        self,
        path: str,
        *,
        model: type[ItemT],
        items_key: str,
        params: dict[str, Any] | None = None,
    ) -> CursorPage[ItemT]:
        return await CursorPage.fetch(
            self._http,
            path,
            model=model,
            items_key=items_key,
            params=compact(params or {}),
        )


def dump_model(value: Any) -> Any:
    """Serialize a pydantic model to its API JSON shape."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True, exclude_none=True)
    return value
