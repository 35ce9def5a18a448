"""Leave balance resource (year defaults to the current one server-side)."""

from __future__ import annotations

from ..http.client import ApiClient
from ..http.envelope import ApiEnvelope


class LeaveBalanceApi:
    def __init__(self, client: ApiClient) -> None:
        self._api = client

    async def my_balance(self, year: int | None = None) -> ApiEnvelope:
        return await self._api.get("/leave-balance/my-balance", params={"year": year})

    async def initialize(self, year: int | None = None) -> ApiEnvelope:
        return await self._api.post("/leave-balance/initialize", params={"year": year})
