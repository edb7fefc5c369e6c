"""HTTP client wrapper for the Runloop API.

Handles connection pooling, retries, error mapping, and request/response
serialization.
"""

from __future__ import annotations

import asyncio
import logging
from types import TracebackType
from typing import Any

import httpx

from runloop_client.errors import (
    APIConnectionError,
    APITimeoutError,
    raise_for_status_code,
)

logger = logging.getLogger("runloop_client")

_RETRYABLE_STATUS = frozenset({408, 409, 429})
_SNIPPET_LIMIT = 500


class HTTPClient:
    """Async HTTP client for the Runloop API.

    Wraps httpx.AsyncClient with:
    - Connection pooling
    - Bearer authentication
    - Retries with exponential backoff for transient failures
    - Automatic error response mapping to APIError
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 60.0,
        max_retries: int = 2,
    ) -> None:
        """Initialize HTTP client.

        Args:
            base_url: API base URL (e.g., "https://api.runloop.ai")
            api_key: Bearer token for authentication
            timeout: Default request timeout in seconds
            max_retries: Maximum retry attempts for transient errors
        """
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout
        self._max_retries = max_retries
        self._client: httpx.AsyncClient | None = None

    @staticmethod
    def _should_retry(response: httpx.Response) -> bool:
        should_retry = response.headers.get("x-should-retry")
        if should_retry == "true":
            return True
        if should_retry == "false":
            return False
        return response.status_code in _RETRYABLE_STATUS or response.status_code >= 500

    @staticmethod
    def _retry_delay_seconds(attempt: int, response: httpx.Response | None = None) -> float:
        if response is not None:
            retry_after = response.headers.get("retry-after")
            if retry_after:
                try:
                    return min(max(float(retry_after), 0.0), 60.0)
                except ValueError:
                    pass
        # attempt is zero-based retry attempt index
        return min(0.5 * (2**attempt), 8.0)

    @staticmethod
    def _parse_body(response: httpx.Response) -> Any:
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError:
            if response.status_code >= 400:
                raw_text = response.text or ""
                return {
                    "error": {
                        "message": f"HTTP {response.status_code} returned non-JSON error response",
                        "details": {
                            "raw_response_snippet": raw_text[:_SNIPPET_LIMIT],
                            "raw_response_truncated": len(raw_text) > _SNIPPET_LIMIT,
                        },
                    }
                }
            return response.text

    async def __aenter__(self) -> HTTPClient:
        """Enter async context, creating HTTP client."""
        # Content-Type is set per request so multipart uploads can set their own
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=httpx.Timeout(self._timeout),
            headers={
                "Authorization": f"Bearer {self._api_key}",
                "Accept": "application/json",
            },
        )
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit async context, closing HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get the underlying httpx client."""
        if self._client is None:
            raise RuntimeError("HTTPClient not initialized. Use 'async with' context.")
        return self._client

    async def _send(
        self,
        method: str,
        path: str,
        **kwargs: Any,
    ) -> httpx.Response:
        """Send a request, retrying transient failures.

        Returns the final response; error statuses are left to the caller.
        """
        max_attempts = self._max_retries + 1

        for attempt in range(max_attempts):
            try:
                response = await self.client.request(method, path, **kwargs)
            except httpx.TimeoutException as exc:
                if attempt < max_attempts - 1:
                    logger.debug("retry method=%s path=%s reason=timeout attempt=%d", method, path, attempt + 1)
                    await asyncio.sleep(self._retry_delay_seconds(attempt))
                    continue
                raise APITimeoutError(str(exc) or None) from exc
            except httpx.TransportError as exc:
                if attempt < max_attempts - 1:
                    logger.debug("retry method=%s path=%s reason=transport attempt=%d", method, path, attempt + 1)
                    await asyncio.sleep(self._retry_delay_seconds(attempt))
                    continue
                raise APIConnectionError(str(exc) or None) from exc

            logger.debug("Response: %s %s %s", response.status_code, method, path)

            if (
                response.status_code >= 400
                and attempt < max_attempts - 1
                and self._should_retry(response)
            ):
                logger.debug(
                    "retry method=%s path=%s status=%d attempt=%d",
                    method,
                    path,
                    response.status_code,
                    attempt + 1,
                )
                await asyncio.sleep(self._retry_delay_seconds(attempt, response))
                continue

            return response

        # Loop always returns or raises.
        raise RuntimeError("HTTP request attempt loop exhausted unexpectedly")

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
        idempotency_key: str | None = None,
        timeout: float | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """Make an HTTP request to the Runloop API.

        Args:
            method: HTTP method (GET, POST, DELETE, etc.)
            path: API path (e.g., "/v1/devboxes")
            json: Request body (will be serialized)
            params: Query parameters; None values are dropped
            idempotency_key: Optional idempotency key header
            timeout: Override default timeout for this request
            headers: Extra request headers

        Returns:
            Parsed response body ({} for empty responses)

        Raises:
            APIError: On API error responses
            APIConnectionError: When the API cannot be reached
        """
        request_headers: dict[str, str] = dict(headers or {})
        if idempotency_key:
            request_headers["Idempotency-Key"] = idempotency_key
        if json is not None:
            request_headers["Content-Type"] = "application/json"

        if params:
            params = {k: v for k, v in params.items() if v is not None}

        logger.debug("Request: %s %s", method, path)

        response = await self._send(
            method,
            path,
            json=json,
            params=params or None,
            headers=request_headers or None,
            timeout=timeout if timeout is not None else httpx.USE_CLIENT_DEFAULT,
        )

        if response.status_code == 204:
            return {}

        body = self._parse_body(response)
        if response.status_code >= 400:
            raise_for_status_code(response.status_code, body)
        return body

    async def get(
        self,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        timeout: float | None = None,
    ) -> Any:
        """Make a GET request."""
        return await self.request("GET", path, params=params, timeout=timeout)

    async def post(
        self,
        path: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
        idempotency_key: str | None = None,
        timeout: float | None = None,
    ) -> Any:
        """Make a POST request."""
        return await self.request(
            "POST",
            path,
            json=json,
            params=params,
            idempotency_key=idempotency_key,
            timeout=timeout,
        )

    async def delete(
        self,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        timeout: float | None = None,
    ) -> Any:
        """Make a DELETE request."""
        return await self.request("DELETE", path, params=params, timeout=timeout)

    async def post_text(
        self,
        path: str,
        *,
        json: Any = None,
        timeout: float | None = None,
    ) -> str:
        """POST and return the response body as plain text."""
        response = await self._send(
            "POST",
            path,
            json=json,
            headers={"Accept": "text/plain", "Content-Type": "application/json"},
            timeout=timeout if timeout is not None else httpx.USE_CLIENT_DEFAULT,
        )
        if response.status_code >= 400:
            raise_for_status_code(response.status_code, self._parse_body(response))
        return response.text

    async def upload(
        self,
        path: str,
        *,
        file_content: bytes,
        data: dict[str, Any] | None = None,
        timeout: float | None = None,
    ) -> Any:
        """Upload a file via multipart/form-data.

        Args:
            path: API path
            file_content: Binary file content
            data: Extra form fields
            timeout: Override default timeout

        Returns:
            Parsed JSON response
        """
        files = {"file": ("upload", file_content, "application/octet-stream")}
        form = {k: v for k, v in (data or {}).items() if v is not None}

        # httpx sets Content-Type: multipart/form-data with boundary
        response = await self._send(
            "POST",
            path,
            files=files,
            data=form,
            timeout=timeout if timeout is not None else httpx.USE_CLIENT_DEFAULT,
        )

        body = self._parse_body(response)
        if response.status_code >= 400:
            raise_for_status_code(response.status_code, body)
        return body

    async def download(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
        timeout: float | None = None,
    ) -> bytes:
        """Download a response as binary content.

        Args:
            method: HTTP method
            path: API path
            json: Optional request body
            params: Query parameters
            timeout: Override default timeout

        Returns:
            Binary response content
        """
        if params:
            params = {k: v for k, v in params.items() if v is not None}

        response = await self._send(
            method,
            path,
            json=json,
            params=params or None,
            headers={"Accept": "application/octet-stream"},
            timeout=timeout if timeout is not None else httpx.USE_CLIENT_DEFAULT,
        )
        if response.status_code >= 400:
            raise_for_status_code(response.status_code, self._parse_body(response))
        return response.content
