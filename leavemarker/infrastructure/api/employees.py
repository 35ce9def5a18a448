"""Employees resource (mutations are restricted server-side to admin roles)."""

from __future__ import annotations

from typing import Any, Mapping

from ..http.client import ApiClient
from ..http.envelope import ApiEnvelope


class EmployeesApi:
    def __init__(self, client: ApiClient) -> None:
        self._api = client

    async def list_all(self) -> ApiEnvelope:
        return await self._api.get("/employees")

    async def list_active(self) -> ApiEnvelope:
        return await self._api.get("/employees/active")

    async def count_active(self) -> ApiEnvelope:
        return await self._api.get("/employees/active/count")

    async def get(self, employee_id: int) -> ApiEnvelope:
        return await self._api.get(f"/employees/{employee_id}")

    async def create(self, data: Mapping[str, Any]) -> ApiEnvelope:
        return await self._api.post("/employees", json=dict(data))

    async def update(self, employee_id: int, data: Mapping[str, Any]) -> ApiEnvelope:
        return await self._api.put(f"/employees/{employee_id}", json=dict(data))

    async def deactivate(self, employee_id: int) -> ApiEnvelope:
        return await self._api.delete(f"/employees/{employee_id}")

    async def reactivate(self, employee_id: int) -> ApiEnvelope:
        return await self._api.put(f"/employees/{employee_id}/reactivate")
