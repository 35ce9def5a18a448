"""Holidays resource."""

from __future__ import annotations

from datetime import date
from typing import Any, Mapping

from ..http.client import ApiClient
from ..http.envelope import ApiEnvelope


class HolidaysApi:
    def __init__(self, client: ApiClient) -> None:
        self._api = client

    async def list_all(self) -> ApiEnvelope:
        return await self._api.get("/holidays")

    async def list_active(self) -> ApiEnvelope:
        return await self._api.get("/holidays/active")

    async def list_by_date_range(self, start_date: date, end_date: date) -> ApiEnvelope:
        return await self._api.get(
            "/holidays/date-range",
            params={"startDate": start_date.isoformat(), "endDate": end_date.isoformat()},
        )

    async def create(self, data: Mapping[str, Any]) -> ApiEnvelope:
        return await self._api.post("/holidays", json=dict(data))

    async def update(self, holiday_id: int, data: Mapping[str, Any]) -> ApiEnvelope:
        return await self._api.put(f"/holidays/{holiday_id}", json=dict(data))

    async def delete(self, holiday_id: int) -> ApiEnvelope:
        return await self._api.delete(f"/holidays/{holiday_id}")
