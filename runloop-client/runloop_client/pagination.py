"""Cursor pagination for list endpoints.

Every list endpoint returns the same envelope under a resource-specific key::

    {"devboxes": [...], "has_more": true, "total_count": 42, "remaining_count": 32}

The next page is requested with ``starting_after=<id of the last item>``.

Example:
    page = await client.devboxes.list(limit=50)
    async for devbox in page:  # fetches following pages on demand
        process(devbox)
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from pydantic import BaseModel

if TYPE_CHECKING:
    from runloop_client._http import HTTPClient

ItemT = TypeVar("ItemT", bound=BaseModel)


class CursorPage(Generic[ItemT]):
    """One page of a cursor-paginated list."""

    def __init__(
        self,
        http: HTTPClient,
        *,
        path: str,
        model: type[ItemT],
        items_key: str,
        params: dict[str, Any] | None,
        body: dict[str, Any],
    ) -> None:
        self._http = http
        self._path = path
        self._model = model
        self._items_key = items_key
        self._params = dict(params or {})

        raw_items = body.get(items_key) or []
        self.items: list[ItemT] = [model.model_validate(item) for item in raw_items]
        self.has_more: bool = bool(body.get("has_more", False))
        self.total_count: int = body.get("total_count") or 0
        self.remaining_count: int | None = body.get("remaining_count")

    @classmethod
    async def fetch(
        cls,
        http: HTTPClient,
        path: str,
        *,
        model: type[ItemT],
        items_key: str,
        params: dict[str, Any] | None = None,
    ) -> CursorPage[ItemT]:
        """Fetch the first page for ``path``."""
        body = await http.get(path, params=params)
        if not isinstance(body, dict):
            body = {}
        return cls(
            http,
            path=path,
            model=model,
            items_key=items_key,
            params=params,
            body=body,
        )

    def __len__(self) -> int:
        return len(self.items)

    def has_next_page(self) -> bool:
        if not self.has_more:
            return False
        return self.next_page_params() is not None

    def next_page_params(self) -> dict[str, Any] | None:
        """Query params for the following page, or None on the last page."""
        if not self.items:
            return None
        last_id = getattr(self.items[-1], "id", None)
        if not last_id:
            return None
        return {"starting_after": last_id}

    async def get_next_page(self) -> CursorPage[ItemT]:
        next_params = self.next_page_params()
        if not self.has_more or next_params is None:
            raise RuntimeError(
                "No next page expected; check `has_next_page()` before calling `get_next_page()`."
            )
        return await self.fetch(
            self._http,
            self._path,
            model=self._model,
            items_key=self._items_key,
            params={**self._params, **next_params},
        )

    async def iter_pages(self) -> AsyncIterator[CursorPage[ItemT]]:
        """Yield this page and every following page."""
        page: CursorPage[ItemT] = self
        while True:
            yield page
            if not page.has_next_page():
                return
            page = await page.get_next_page()

    async def __aiter__(self) -> AsyncIterator[ItemT]:
        async for page in self.iter_pages():
            for item in page.items:
                yield item

    def to_dict(self) -> dict[str, Any]:
        """Rebuild the list envelope as returned by the API."""
        body: dict[str, Any] = {
            self._items_key: [
                item.model_dump(mode="json", by_alias=True, exclude_none=True)
                for item in self.items
            ],
            "has_more": self.has_more,
            "total_count": self.total_count,
        }
        if self.remaining_count is not None:
            body["remaining_count"] = self.remaining_count
        return body

    def __repr__(self) -> str:
        return (
            f"CursorPage(path={self._path!r}, items={len(self.items)}, "
            f"has_more={self.has_more}, total_count={self.total_count})"
        )
