"""Runloop client error types.

HTTP errors are mapped by status code so callers can catch the narrowest
class they care about. Polling helpers raise their own errors that carry the
last observed result.
"""

from __future__ import annotations

from typing import Any


class RunloopError(Exception):
    """Base error for all Runloop client exceptions."""

    message: str = "An error occurred"

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message or self.__class__.message
        self.details = details or {}
        super().__init__(self.message)


class APIError(RunloopError):
    """Error response returned by the Runloop API."""

    message = "API error"
    status_code: int | None = None

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
        *,
        status_code: int | None = None,
        body: Any = None,
    ) -> None:
        super().__init__(message, details)
        if status_code is not None:
            self.status_code = status_code
        self.body = body


class BadRequestError(APIError):
    """Malformed request (400)."""

    message = "Bad request"
    status_code = 400


class AuthenticationError(APIError):
    """Missing or invalid API key (401)."""

    message = "Authentication required"
    status_code = 401


class PermissionDeniedError(APIError):
    """Permission denied (403)."""

    message = "Permission denied"
    status_code = 403


class NotFoundError(APIError):
    """Resource not found (404)."""

    message = "Resource not found"
    status_code = 404


class RequestTimeoutError(APIError):
    """Server-side request timeout (408).

    Long-poll endpoints such as ``wait_for_status`` answer 408 when the
    awaited state was not reached in time.

    Note: Named to avoid shadowing Python's builtin TimeoutError.
    """

    message = "Request timed out"
    status_code = 408


class ConflictError(APIError):
    """State conflict (409)."""

    message = "Conflict"
    status_code = 409


class UnprocessableEntityError(APIError):
    """Request failed validation (422)."""

    message = "Unprocessable entity"
    status_code = 422


class RateLimitError(APIError):
    """Rate limit exceeded (429)."""

    message = "Rate limit exceeded"
    status_code = 429


class InternalServerError(APIError):
    """Server error (5xx)."""

    message = "Internal server error"
    status_code = 500


class APIConnectionError(RunloopError):
    """The API could not be reached."""

    message = "Connection error"


class APITimeoutError(APIConnectionError):
    """The request timed out on the client side."""

    message = "Request timed out"


class PollingTimeoutError(RunloopError):
    """Polling did not reach a stop condition before the deadline."""

    message = "Polling timed out"

    def __init__(self, message: str | None = None, last_result: Any = None) -> None:
        super().__init__(message, {"last_result": _describe(last_result)})
        self.last_result = last_result


class MaxAttemptsExceededError(RunloopError):
    """Polling ran out of attempts before reaching a stop condition."""

    message = "Polling exceeded maximum attempts"

    def __init__(self, message: str | None = None, last_result: Any = None) -> None:
        super().__init__(message, {"last_result": _describe(last_result)})
        self.last_result = last_result


class UnexpectedStateError(RunloopError):
    """A resource settled in a state other than the awaited one."""

    message = "Resource reached an unexpected state"

    def __init__(
        self,
        message: str | None = None,
        *,
        resource_id: str | None = None,
        state: str | None = None,
        last_result: Any = None,
    ) -> None:
        super().__init__(message, {"resource_id": resource_id, "state": state})
        self.resource_id = resource_id
        self.state = state
        self.last_result = last_result


def _describe(result: Any) -> Any:
    dump = getattr(result, "model_dump", None)
    if callable(dump):
        return dump(mode="json")
    return result


# Status code to exception class mapping
STATUS_CODE_MAP: dict[int, type[APIError]] = {
    400: BadRequestError,
    401: AuthenticationError,
    403: PermissionDeniedError,
    404: NotFoundError,
    408: RequestTimeoutError,
    409: ConflictError,
    422: UnprocessableEntityError,
    429: RateLimitError,
}


def raise_for_status_code(status_code: int, response_body: Any) -> None:
    """Raise the APIError subclass matching an error response.

    Args:
        status_code: HTTP status code
        response_body: Parsed response body (dict for JSON errors)

    Raises:
        APIError: Appropriate subclass based on status code
    """
    message: str | None = None
    details: dict[str, Any] = {}
    if isinstance(response_body, dict):
        error_data = response_body.get("error")
        if isinstance(error_data, dict):
            message = error_data.get("message")
            details = error_data.get("details") or {}
        elif isinstance(error_data, str):
            message = error_data
        message = message or response_body.get("message")

    error_class = STATUS_CODE_MAP.get(status_code)
    if error_class is None:
        error_class = InternalServerError if status_code >= 500 else APIError
    raise error_class(
        message=message or f"HTTP {status_code}",
        details=details,
        status_code=status_code,
        body=response_body,
    )
