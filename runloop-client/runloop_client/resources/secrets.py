"""Secret resource.

Secrets are addressed by name. Their values are write-only: no endpoint
returns them, devboxes receive them as environment variables.
"""

from __future__ import annotations

from runloop_client.resources.base import APIResource, compact
from runloop_client.types import SecretListView, SecretView

_BASE = "/v1/secrets"


class SecretsResource(APIResource):
    async def create(self, *, name: str, value: str) -> SecretView:
        response = await self._http.post(_BASE, json={"name": name, "value": value})
        return SecretView.model_validate(response)

    async def update(self, name: str, *, value: str) -> SecretView:
        response = await self._http.post(f"{_BASE}/{name}", json={"value": value})
        return SecretView.model_validate(response)

    async def list(self, *, limit: int | None = None) -> SecretListView:
        response = await self._http.get(_BASE, params=compact({"limit": limit}))
        return SecretListView.model_validate(response)

    async def delete(self, name: str) -> SecretView:
        response = await self._http.post(f"{_BASE}/{name}/delete")
        return SecretView.model_validate(response)
