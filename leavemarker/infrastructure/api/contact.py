"""Public contact form resource (no session required)."""

from __future__ import annotations

from ..http.client import ApiClient
from ..http.envelope import ApiEnvelope
from .schemas import ContactRequest


class ContactApi:
    def __init__(self, client: ApiClient) -> None:
        self._api = client

    async def send_message(self, data: ContactRequest) -> ApiEnvelope:
        # phone es opcional: no se envía si falta.
        return await self._api.post("/contact", json=data.to_body(exclude_none=True))
