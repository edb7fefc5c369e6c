"""Agent resource."""

from __future__ import annotations

from typing import Any

from runloop_client.pagination import CursorPage
from runloop_client.resources.base import APIResource, compact
from runloop_client.types import AgentView

_BASE = "/v1/agents"


class AgentsResource(APIResource):
    """Registered agents that can be mounted into devboxes."""

    async def create(
        self,
        *,
        name: str,
        source: dict[str, Any] | None = None,
    ) -> AgentView:
        response = await self._http.post(_BASE, json=compact({"name": name, "source": source}))
        return AgentView.model_validate(response)

    async def retrieve(self, agent_id: str) -> AgentView:
        response = await self._http.get(f"{_BASE}/{agent_id}")
        return AgentView.model_validate(response)

    async def list(
        self,
        *,
        name: str | None = None,
        is_public: bool | None = None,
        limit: int | None = None,
        starting_after: str | None = None,
    ) -> CursorPage[AgentView]:
        return await self._list(
            _BASE,
            model=AgentView,
            items_key="agents",
            params={
                "name": name,
                "is_public": is_public,
                "limit": limit,
                "starting_after": starting_after,
            },
        )
