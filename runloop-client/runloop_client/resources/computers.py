"""Browser and computer-use devboxes, plus devbox logs."""

from __future__ import annotations

from typing import Any

from runloop_client.resources.base import APIResource, compact
from runloop_client.types import BrowserView, ComputerView, DevboxLogsListView


class LogsResource(APIResource):
    """Devbox logs."""

    async def list(
        self,
        devbox_id: str,
        *,
        execution_id: str | None = None,
        shell_name: str | None = None,
    ) -> DevboxLogsListView:
        response = await self._http.get(
            f"/v1/devboxes/{devbox_id}/logs",
            params={"execution_id": execution_id, "shell_name": shell_name},
        )
        return DevboxLogsListView.model_validate(response)


class BrowsersResource(APIResource):
    """Devboxes running a browser reachable over CDP."""

    async def create(self, *, name: str | None = None) -> BrowserView:
        response = await self._http.post(
            "/v1/devboxes/browsers",
            json=compact({"name": name}),
        )
        return BrowserView.model_validate(response)

    async def retrieve(self, browser_id: str) -> BrowserView:
        response = await self._http.get(f"/v1/devboxes/browsers/{browser_id}")
        return BrowserView.model_validate(response)


class ComputersResource(APIResource):
    """Devboxes exposing a desktop for computer-use agents."""

    async def create(
        self,
        *,
        name: str | None = None,
        display_dimensions: dict[str, int] | None = None,
    ) -> ComputerView:
        response = await self._http.post(
            "/v1/devboxes/computers",
            json=compact({"name": name, "display_dimensions": display_dimensions}),
        )
        return ComputerView.model_validate(response)

    async def retrieve(self, computer_id: str) -> ComputerView:
        response = await self._http.get(f"/v1/devboxes/computers/{computer_id}")
        return ComputerView.model_validate(response)

    async def keyboard_interaction(
        self,
        computer_id: str,
        *,
        action: str,
        text: str | None = None,
    ) -> Any:
        """Send a keyboard action (``key`` or ``type``)."""
        return await self._http.post(
            f"/v1/devboxes/computers/{computer_id}/keyboard_interaction",
            json=compact({"action": action, "text": text}),
        )

    async def mouse_interaction(
        self,
        computer_id: str,
        *,
        action: str,
        coordinates: dict[str, int] | None = None,
    ) -> Any:
        """Send a mouse action such as ``left_click`` or ``mouse_move``."""
        return await self._http.post(
            f"/v1/devboxes/computers/{computer_id}/mouse_interaction",
            json=compact({"action": action, "coordinates": coordinates}),
        )

    async def screen_interaction(self, computer_id: str, *, action: str) -> Any:
        """Take a screenshot or read the cursor position."""
        return await self._http.post(
            f"/v1/devboxes/computers/{computer_id}/screen_interaction",
            json={"action": action},
        )
