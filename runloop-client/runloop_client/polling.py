"""Polling helpers for asynchronous state transitions.

Devboxes, executions, snapshots, blueprints and scenario runs all move
through transitional states on the server. ``poll`` repeats a request until
a stop condition holds; ``await_devbox_state`` builds on the service's
``wait_for_status`` long-poll endpoint.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Collection
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from runloop_client.errors import (
    APIError,
    MaxAttemptsExceededError,
    PollingTimeoutError,
    RequestTimeoutError,
    UnexpectedStateError,
)
from runloop_client.types import DevboxView

if TYPE_CHECKING:
    from runloop_client._http import HTTPClient

logger = logging.getLogger("runloop_client")

T = TypeVar("T")


@dataclass
class PollingOptions(Generic[T]):
    """Polling configuration.

    Attributes:
        initial_delay: Seconds to wait after the initial request
        interval: Seconds to wait between polling attempts
        max_attempts: Polling attempts allowed after the initial request
        timeout: Seconds allowed for the whole operation (None or 0 = unbounded)
        should_stop: Returns True once polling should stop
        on_attempt: Called with (attempt, result) after each polling attempt
        on_error: Called with an APIError; its return value is used as the
            result and polling continues. Raise to stop polling.
    """

    initial_delay: float = 1.0
    interval: float = 1.0
    max_attempts: int = 120
    timeout: float | None = None
    should_stop: Callable[[T], bool] | None = None
    on_attempt: Callable[[int, T], None] | None = None
    on_error: Callable[[APIError], T] | None = None


async def _run_request(
    request: Callable[[], Awaitable[T]],
    on_error: Callable[[APIError], T] | None,
) -> T:
    try:
        return await request()
    except APIError as error:
        if on_error is None:
            raise
        return on_error(error)


async def poll(
    initial_request: Callable[[], Awaitable[T]],
    polling_request: Callable[[], Awaitable[T]],
    options: PollingOptions[T] | None = None,
) -> T:
    """Poll until ``options.should_stop`` returns True.

    Args:
        initial_request: Performs the first request
        polling_request: Performs each subsequent request
        options: Polling configuration

    Returns:
        The result that satisfied the stop condition

    Raises:
        PollingTimeoutError: If ``options.timeout`` elapses first
        MaxAttemptsExceededError: If attempts run out first
    """
    opts = options or PollingOptions()
    should_stop = opts.should_stop or (lambda _result: False)
    last: list[Any] = [None]

    async def _loop() -> T:
        result = await _run_request(initial_request, opts.on_error)
        last[0] = result
        if should_stop(result):
            return result

        await asyncio.sleep(opts.initial_delay)

        for attempt in range(1, opts.max_attempts + 1):
            result = await _run_request(polling_request, opts.on_error)
            last[0] = result
            logger.debug("poll_attempt attempt=%d max_attempts=%d", attempt, opts.max_attempts)
            if opts.on_attempt is not None:
                opts.on_attempt(attempt, result)
            if should_stop(result):
                return result
            if attempt < opts.max_attempts:
                await asyncio.sleep(opts.interval)

        raise MaxAttemptsExceededError(
            f"Polling exceeded maximum attempts ({opts.max_attempts})",
            last[0],
        )

    if not opts.timeout:
        return await _loop()

    try:
        async with asyncio.timeout(opts.timeout):
            return await _loop()
    except TimeoutError as exc:
        raise PollingTimeoutError(
            f"Polling timed out after {opts.timeout}s",
            last[0],
        ) from exc


async def await_devbox_state(
    http: HTTPClient,
    devbox_id: str,
    *,
    target: str,
    statuses_to_check: Collection[str],
    transition_states: Collection[str],
    options: PollingOptions[DevboxView] | None = None,
) -> DevboxView:
    """Wait for a devbox to leave its transition states.

    Long-polls ``POST /v1/devboxes/{id}/wait_for_status``. The endpoint
    returns the devbox once its status is in ``statuses_to_check`` and
    answers 408 when the server-side wait elapsed, which counts as still
    transitioning.

    Raises:
        UnexpectedStateError: If the devbox settles in a status other than ``target``
    """
    transition = list(transition_states)

    async def long_poll() -> DevboxView:
        response = await http.post(
            f"/v1/devboxes/{devbox_id}/wait_for_status",
            json={"statuses": list(statuses_to_check)},
        )
        return DevboxView.model_validate(response)

    def on_error(error: APIError) -> DevboxView:
        if isinstance(error, RequestTimeoutError):
            return DevboxView(id=devbox_id, status=transition[0])
        raise error

    base = options or PollingOptions()
    final = await poll(
        long_poll,
        long_poll,
        replace(
            base,
            should_stop=lambda result: result.status not in transition,
            on_error=on_error,
        ),
    )

    if final.status != target:
        raise UnexpectedStateError(
            f"Devbox {devbox_id} is in non-{target} state {final.status}",
            resource_id=devbox_id,
            state=final.status,
            last_result=final,
        )
    return final
