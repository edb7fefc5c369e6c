"""Devbox command executions."""

from __future__ import annotations

from dataclasses import replace

from runloop_client.errors import APIError, RequestTimeoutError
from runloop_client.polling import PollingOptions, poll
from runloop_client.resources.base import APIResource, compact
from runloop_client.types import DevboxAsyncExecutionDetailView, DevboxExecutionDetailView


class ExecutionsResource(APIResource):
    """Commands running on a devbox.

    Synchronous executions block until the command exits. Asynchronous
    executions return an execution ID that can be polled, awaited or killed.
    """

    def _path(self, devbox_id: str, execution_id: str) -> str:
        return f"/v1/devboxes/{devbox_id}/executions/{execution_id}"

    async def retrieve(self, devbox_id: str, execution_id: str) -> DevboxAsyncExecutionDetailView:
        response = await self._http.get(self._path(devbox_id, execution_id))
        return DevboxAsyncExecutionDetailView.model_validate(response)

    async def execute_async(
        self,
        devbox_id: str,
        *,
        command: str,
        shell_name: str | None = None,
    ) -> DevboxAsyncExecutionDetailView:
        """Start a command without waiting for it to finish.

        Args:
            devbox_id: Devbox to run on
            command: Shell command to execute
            shell_name: Named shell to run in, keeping state between commands

        Returns:
            Execution details including the execution ID
        """
        response = await self._http.post(
            f"/v1/devboxes/{devbox_id}/execute_async",
            json=compact({"command": command, "shell_name": shell_name}),
        )
        return DevboxAsyncExecutionDetailView.model_validate(response)

    async def execute_sync(
        self,
        devbox_id: str,
        *,
        command: str,
        shell_name: str | None = None,
    ) -> DevboxExecutionDetailView:
        """Run a command and wait for it to exit."""
        response = await self._http.post(
            f"/v1/devboxes/{devbox_id}/execute_sync",
            json=compact({"command": command, "shell_name": shell_name}),
        )
        return DevboxExecutionDetailView.model_validate(response)

    async def kill(
        self,
        devbox_id: str,
        execution_id: str,
        *,
        kill_process_group: bool | None = None,
    ) -> DevboxAsyncExecutionDetailView:
        response = await self._http.post(
            f"{self._path(devbox_id, execution_id)}/kill",
            json=compact({"kill_process_group": kill_process_group}),
        )
        return DevboxAsyncExecutionDetailView.model_validate(response)

    async def await_completed(
        self,
        devbox_id: str,
        execution_id: str,
        *,
        polling: PollingOptions[DevboxAsyncExecutionDetailView] | None = None,
    ) -> DevboxAsyncExecutionDetailView:
        """Wait until an asynchronous execution completes.

        Long-polls the execution's ``wait_for_status`` endpoint; a 408 from
        the server means the command is still running.
        """

        async def long_poll() -> DevboxAsyncExecutionDetailView:
            response = await self._http.post(
                f"{self._path(devbox_id, execution_id)}/wait_for_status",
                json={"statuses": ["completed"]},
            )
            return DevboxAsyncExecutionDetailView.model_validate(response)

        def on_error(error: APIError) -> DevboxAsyncExecutionDetailView:
            if isinstance(error, RequestTimeoutError):
                return DevboxAsyncExecutionDetailView(
                    devbox_id=devbox_id,
                    execution_id=execution_id,
                    status="running",
                )
            raise error

        return await poll(
            long_poll,
            long_poll,
            replace(
                polling or PollingOptions(),
                should_stop=lambda result: result.status == "completed",
                on_error=on_error,
            ),
        )

    async def execute_and_await_completion(
        self,
        devbox_id: str,
        *,
        command: str,
        shell_name: str | None = None,
        polling: PollingOptions[DevboxAsyncExecutionDetailView] | None = None,
    ) -> DevboxAsyncExecutionDetailView:
        """Start a command asynchronously and wait for it to complete."""
        execution = await self.execute_async(devbox_id, command=command, shell_name=shell_name)
        if execution.status == "completed":
            return execution
        return await self.await_completed(
            devbox_id,
            execution.execution_id,
            polling=polling,
        )
