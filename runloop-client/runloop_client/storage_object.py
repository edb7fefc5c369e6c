"""Stored object wrapper."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx

from runloop_client.errors import APIConnectionError, APIError, APITimeoutError, RunloopError
from runloop_client.types import ObjectDownloadURLView, ObjectView

if TYPE_CHECKING:
    from runloop_client.resources.objects import ObjectsResource

logger = logging.getLogger("runloop_client")

DEFAULT_TRANSFER_TIMEOUT = 300.0


async def _transfer(
    method: str,
    url: str,
    *,
    content: bytes | None = None,
    headers: dict[str, str] | None = None,
    timeout: float,
) -> httpx.Response:
    """Send a request to a presigned storage URL.

    Presigned URLs carry their own credentials, so the request goes through
    a plain client without the API key.
    """
    async with httpx.AsyncClient(timeout=httpx.Timeout(timeout)) as client:
        try:
            response = await client.request(method, url, content=content, headers=headers)
        except httpx.TimeoutException as exc:
            raise APITimeoutError(f"{method} to presigned URL timed out: {exc}") from exc
        except httpx.TransportError as exc:
            raise APIConnectionError(f"{method} to presigned URL failed: {exc}") from exc

    if response.status_code >= 400:
        action = "Upload" if method == "PUT" else "Download"
        raise APIError(
            f"{action} failed: {response.status_code} {response.reason_phrase}",
            status_code=response.status_code,
            body=response.text[:500],
        )
    return response


class StorageObject:
    """A stored object.

    Upload flow: ``client.create_object``, then ``upload_content`` to PUT the
    bytes to the presigned upload URL, then ``complete`` to make the object
    read-only. Downloads fetch a presigned URL first and read from it.
    """

    def __init__(
        self,
        objects: ObjectsResource,
        info: ObjectView,
        *,
        transfer_timeout: float = DEFAULT_TRANSFER_TIMEOUT,
    ) -> None:
        self._objects = objects
        self._info = info
        self._transfer_timeout = transfer_timeout

    @property
    def id(self) -> str:
        return self._info.id

    @property
    def name(self) -> str:
        return self._info.name

    @property
    def content_type(self) -> str | None:
        return self._info.content_type

    @property
    def state(self) -> str | None:
        """UPLOADING, READ_ONLY or DELETED (may be stale; call refresh())."""
        return self._info.state

    @property
    def size_bytes(self) -> int | None:
        return self._info.size_bytes

    @property
    def upload_url(self) -> str | None:
        """Presigned upload URL, only set between creation and completion."""
        return self._info.upload_url

    @property
    def info(self) -> ObjectView:
        return self._info

    async def refresh(self) -> ObjectView:
        self._info = await self._objects.retrieve(self.id)
        return self._info

    async def upload_content(
        self,
        content: str | bytes,
        *,
        content_type: str | None = None,
    ) -> None:
        """PUT content to the presigned upload URL.

        Args:
            content: Text (UTF-8 encoded) or bytes to upload
            content_type: Optional Content-Type header for the upload

        Raises:
            RunloopError: If the object has no upload URL
            APIError: If the storage service rejects the upload
        """
        if not self.upload_url:
            raise RunloopError(
                f"Object {self.id} has no upload URL; it may already be completed or deleted"
            )
        data = content.encode("utf-8") if isinstance(content, str) else content
        headers = {"Content-Type": content_type} if content_type else None
        await _transfer(
            "PUT",
            self.upload_url,
            content=data,
            headers=headers,
            timeout=self._transfer_timeout,
        )
        logger.debug("object_uploaded id=%s size=%d", self.id, len(data))

    async def complete(self) -> ObjectView:
        self._info = await self._objects.complete(self.id)
        return self._info

    async def get_download_url(
        self,
        *,
        duration_seconds: int | None = None,
    ) -> ObjectDownloadURLView:
        return await self._objects.download(self.id, duration_seconds=duration_seconds)

    async def download_as_bytes(self) -> bytes:
        url = await self.get_download_url()
        response = await _transfer("GET", url.download_url, timeout=self._transfer_timeout)
        return response.content

    async def download_as_text(self) -> str:
        url = await self.get_download_url()
        response = await _transfer("GET", url.download_url, timeout=self._transfer_timeout)
        return response.text

    async def delete(self) -> ObjectView:
        self._info = await self._objects.delete(self.id)
        return self._info

    def __repr__(self) -> str:
        return f"StorageObject(id={self.id!r}, name={self.name!r}, state={self.state!r})"
