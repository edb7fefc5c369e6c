"""Repository connection resource."""

from __future__ import annotations

from typing import Any

from runloop_client.pagination import CursorPage
from runloop_client.resources.base import APIResource, compact
from runloop_client.types import RepositoryConnectionView, RepositoryInspectionListView

_BASE = "/v1/repositories"


class RepositoriesResource(APIResource):
    """Git repositories connected to the account.

    Connected repositories are inspected to infer a blueprint that can build
    them.
    """

    async def create(
        self,
        *,
        name: str,
        owner: str,
        blueprint_id: str | None = None,
        github_auth_token: str | None = None,
    ) -> RepositoryConnectionView:
        response = await self._http.post(
            _BASE,
            json=compact(
                {
                    "name": name,
                    "owner": owner,
                    "blueprint_id": blueprint_id,
                    "github_auth_token": github_auth_token,
                }
            ),
        )
        return RepositoryConnectionView.model_validate(response)

    async def retrieve(self, repository_id: str) -> RepositoryConnectionView:
        response = await self._http.get(f"{_BASE}/{repository_id}")
        return RepositoryConnectionView.model_validate(response)

    async def list(
        self,
        *,
        name: str | None = None,
        owner: str | None = None,
        limit: int | None = None,
        starting_after: str | None = None,
    ) -> CursorPage[RepositoryConnectionView]:
        return await self._list(
            _BASE,
            model=RepositoryConnectionView,
            items_key="repositories",
            params={
                "name": name,
                "owner": owner,
                "limit": limit,
                "starting_after": starting_after,
            },
        )

    async def delete(self, repository_id: str) -> Any:
        return await self._http.post(f"{_BASE}/{repository_id}/delete")

    async def list_inspections(self, repository_id: str) -> RepositoryInspectionListView:
        response = await self._http.get(f"{_BASE}/{repository_id}/inspections")
        return RepositoryInspectionListView.model_validate(response)

    async def refresh(
        self,
        repository_id: str,
        *,
        blueprint_id: str | None = None,
        github_auth_token: str | None = None,
    ) -> Any:
        """Re-inspect the repository at its latest commit."""
        return await self._http.post(
            f"{_BASE}/{repository_id}/refresh",
            json=compact({"blueprint_id": blueprint_id, "github_auth_token": github_auth_token}),
        )
