"""
Name: Auth resource

Responsibilities:
  - Credential exchange (login / signup), logout, session verification
  - Password reset request / confirmation

Collaborators:
  - infrastructure.http.client.ApiClient
  - application.session_store (only caller of login/signup/logout/verify)
"""

from __future__ import annotations

from ..http.client import ApiClient
from ..http.envelope import ApiEnvelope
from .schemas import LoginRequest, PasswordResetConfirmRequest, SignupRequest


class AuthApi:
    def __init__(self, client: ApiClient) -> None:
        self._api = client

    async def signup(self, data: SignupRequest) -> ApiEnvelope:
        return await self._api.post("/auth/signup", json=data.to_body())

    async def login(self, data: LoginRequest) -> ApiEnvelope:
        return await self._api.post("/auth/login", json=data.to_body())

    async def logout(self) -> ApiEnvelope:
        return await self._api.post("/auth/logout")

    async def verify_session(self) -> ApiEnvelope:
        """Identidad actual si la cookie de sesión es válida; 401 si no."""
        return await self._api.get("/auth/verify-session")

    async def request_password_reset(self, email: str) -> ApiEnvelope:
        return await self._api.post(
            "/auth/password-reset-request", json={"email": email}
        )

    async def reset_password(self, data: PasswordResetConfirmRequest) -> ApiEnvelope:
        return await self._api.post("/auth/password-reset-confirm", json=data.to_body())
