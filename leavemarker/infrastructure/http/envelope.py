"""
Name: API response envelope

Responsibilities:
  - Model the backend's `{success, message?, data?}` wrapper with pydantic
  - Provide tolerant parsing of error bodies (which may not be envelopes)

Collaborators:
  - infrastructure.http.client (parses every JSON response)
  - crosscutting.exceptions.ApiError (keeps the raw payload)
"""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict

from ...crosscutting.exceptions import ApiError


class ApiEnvelope(BaseModel):
    """Conventional wrapper returned by every JSON endpoint."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    success: bool
    message: str | None = None
    data: Any = None

    def unwrap(self, fallback_message: str = "Operation failed") -> Any:
        """
        `data` of a successful envelope.

        Raises:
            ApiError: when success is False (domain/business failure), keeping
                the envelope as payload so the message can be surfaced.
        """
        if not self.success:
            raise ApiError(
                self.message or fallback_message,
                status_code=200,
                payload=self.model_dump(),
            )
        return self.data

    def data_as_dict(self) -> dict[str, Any]:
        return self.data if isinstance(self.data, dict) else {}

    def data_as_list(self) -> list[Any]:
        return self.data if isinstance(self.data, list) else []


def read_json_payload(response: httpx.Response) -> dict[str, Any] | None:
    """Body as a dict, or None when it is empty / not JSON / not an object."""
    if not response.content:
        return None
    try:
        payload = response.json()
    except ValueError:
        return None
    return payload if isinstance(payload, dict) else None
