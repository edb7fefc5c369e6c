"""Object storage resource."""

from __future__ import annotations

from typing import Any

from runloop_client.pagination import CursorPage
from runloop_client.resources.base import APIResource, compact
from runloop_client.types import ObjectDownloadURLView, ObjectView

_BASE = "/v1/objects"


class ObjectsResource(APIResource):
    """Stored objects.

    Uploads are two-phase: ``create`` returns an object in the ``UPLOADING``
    state with a presigned ``upload_url``; after the caller PUTs the bytes,
    ``complete`` marks the object ``READ_ONLY``.
    """

    async def create(
        self,
        *,
        name: str,
        content_type: str,
        metadata: dict[str, str] | None = None,
    ) -> ObjectView:
        response = await self._http.post(
            _BASE,
            json=compact({"name": name, "content_type": content_type, "metadata": metadata}),
        )
        return ObjectView.model_validate(response)

    async def retrieve(self, object_id: str) -> ObjectView:
        response = await self._http.get(f"{_BASE}/{object_id}")
        return ObjectView.model_validate(response)

    def _list_params(
        self,
        *,
        name: str | None,
        content_type: str | None,
        state: str | None,
        search: str | None,
        limit: int | None,
        starting_after: str | None,
    ) -> dict[str, Any]:
        return {
            "name": name,
            "content_type": content_type,
            "state": state,
            "search": search,
            "limit": limit,
            "starting_after": starting_after,
        }

    async def list(
        self,
        *,
        name: str | None = None,
        content_type: str | None = None,
        state: str | None = None,
        search: str | None = None,
        limit: int | None = None,
        starting_after: str | None = None,
    ) -> CursorPage[ObjectView]:
        return await self._list(
            _BASE,
            model=ObjectView,
            items_key="objects",
            params=self._list_params(
                name=name,
                content_type=content_type,
                state=state,
                search=search,
                limit=limit,
                starting_after=starting_after,
            ),
        )

    async def list_public(
        self,
        *,
        name: str | None = None,
        content_type: str | None = None,
        state: str | None = None,
        search: str | None = None,
        limit: int | None = None,
        starting_after: str | None = None,
    ) -> CursorPage[ObjectView]:
        return await self._list(
            f"{_BASE}/list_public",
            model=ObjectView,
            items_key="objects",
            params=self._list_params(
                name=name,
                content_type=content_type,
                state=state,
                search=search,
                limit=limit,
                starting_after=starting_after,
            ),
        )

    async def delete(self, object_id: str) -> ObjectView:
        response = await self._http.post(f"{_BASE}/{object_id}/delete")
        return ObjectView.model_validate(response)

    async def complete(self, object_id: str) -> ObjectView:
        """Mark an upload finished; the object becomes read-only."""
        response = await self._http.post(f"{_BASE}/{object_id}/complete")
        return ObjectView.model_validate(response)

    async def download(
        self,
        object_id: str,
        *,
        duration_seconds: int | None = None,
    ) -> ObjectDownloadURLView:
        """Get a presigned download URL, valid for ``duration_seconds``."""
        response = await self._http.get(
            f"{_BASE}/{object_id}/download",
            params={"duration_seconds": duration_seconds},
        )
        return ObjectDownloadURLView.model_validate(response)
