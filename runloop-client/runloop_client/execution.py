"""Asynchronous execution handle and its result."""

from __future__ import annotations

from typing import TYPE_CHECKING

from runloop_client.polling import PollingOptions
from runloop_client.types import DevboxAsyncExecutionDetailView

if TYPE_CHECKING:
    from runloop_client.resources.executions import ExecutionsResource


class ExecutionResult:
    """Outcome of a completed execution."""

    def __init__(self, view: DevboxAsyncExecutionDetailView) -> None:
        self._view = view

    @property
    def exit_code(self) -> int | None:
        return self._view.exit_status

    @property
    def stdout(self) -> str:
        return self._view.stdout or ""

    @property
    def stderr(self) -> str:
        return self._view.stderr or ""

    @property
    def success(self) -> bool:
        return self.exit_code == 0

    @property
    def failed(self) -> bool:
        """True when the command exited with a non-zero status."""
        return self.exit_code is not None and self.exit_code != 0

    @property
    def view(self) -> DevboxAsyncExecutionDetailView:
        return self._view

    def __repr__(self) -> str:
        return f"ExecutionResult(execution_id={self._view.execution_id!r}, exit_code={self.exit_code!r})"


class Execution:
    """A command started with ``execute_async``.

    Use ``result`` to wait for the command to exit, ``get_state`` to look
    at it without waiting, or ``kill`` to stop it.
    """

    def __init__(
        self,
        executions: ExecutionsResource,
        initial: DevboxAsyncExecutionDetailView,
    ) -> None:
        self._executions = executions
        self._initial = initial

    @property
    def execution_id(self) -> str:
        return self._initial.execution_id

    @property
    def devbox_id(self) -> str:
        return self._initial.devbox_id

    async def result(
        self,
        *,
        polling: PollingOptions[DevboxAsyncExecutionDetailView] | None = None,
    ) -> ExecutionResult:
        """Wait for the command to complete.

        Returns immediately when the command had already completed when it
        was started.
        """
        if self._initial.status == "completed":
            return ExecutionResult(self._initial)
        view = await self._executions.await_completed(
            self.devbox_id,
            self.execution_id,
            polling=polling,
        )
        return ExecutionResult(view)

    async def get_state(self) -> DevboxAsyncExecutionDetailView:
        return await self._executions.retrieve(self.devbox_id, self.execution_id)

    async def kill(self, *, kill_process_group: bool | None = None) -> DevboxAsyncExecutionDetailView:
        return await self._executions.kill(
            self.devbox_id,
            self.execution_id,
            kill_process_group=kill_process_group,
        )

    def __repr__(self) -> str:
        return f"Execution(devbox_id={self.devbox_id!r}, execution_id={self.execution_id!r})"
