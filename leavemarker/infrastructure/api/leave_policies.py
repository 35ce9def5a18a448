"""Leave policies resource."""

from __future__ import annotations

from typing import Any, Mapping

from ..http.client import ApiClient
from ..http.envelope import ApiEnvelope


class LeavePoliciesApi:
    def __init__(self, client: ApiClient) -> None:
        self._api = client

    async def list_all(self) -> ApiEnvelope:
        return await self._api.get("/leave-policies")

    async def list_active(self) -> ApiEnvelope:
        return await self._api.get("/leave-policies/active")

    async def get(self, policy_id: int) -> ApiEnvelope:
        return await self._api.get(f"/leave-policies/{policy_id}")

    async def create(self, data: Mapping[str, Any]) -> ApiEnvelope:
        return await self._api.post("/leave-policies", json=dict(data))

    async def update(self, policy_id: int, data: Mapping[str, Any]) -> ApiEnvelope:
        return await self._api.put(f"/leave-policies/{policy_id}", json=dict(data))

    async def delete(self, policy_id: int) -> ApiEnvelope:
        return await self._api.delete(f"/leave-policies/{policy_id}")
