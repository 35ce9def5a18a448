"""
============================================================
TARJETA CRC — infrastructure/http/credentials.py
============================================================
Class: CookieCredentials, TokenCredentials

Responsibilities:
  - Estrategia de credenciales elegida UNA vez al arrancar (auth_mode).
  - Cookie (primaria): la sesión vive en una cookie httpOnly que maneja el
    servidor; el cliente solo transporta el cookie jar. La identidad se
    recupera verificando la sesión contra el backend.
  - Token (legacy): bearer token + identidad serializada en storage durable;
    la identidad se recupera localmente, sin llamada de red.

Collaborators:
  - infrastructure.http.client (apply() en cada request)
  - application.session_store (persist / restore / clear)
  - domain.ports.KeyValueStorage (storage durable en modo token)
============================================================
"""

from __future__ import annotations

import json
from http.cookiejar import CookieJar
from typing import Awaitable, Callable, Protocol

import httpx

from ...crosscutting.logger import logger
from ...domain.identity import Identity
from ...domain.ports import KeyValueStorage

IdentityVerifier = Callable[[], Awaitable[Identity | None]]


class CredentialStrategy(Protocol):
    mode: str
    cookie_jar: CookieJar | None

    def apply(self, request: httpx.Request) -> None:
        """Adjunta credenciales a un request saliente."""
        ...

    def persist(self, identity: Identity, access_token: str | None) -> None:
        """Guarda lo necesario tras login/signup exitoso."""
        ...

    async def restore(self, verify: IdentityVerifier) -> Identity | None:
        """Recupera la identidad al cargar la aplicación."""
        ...

    def clear(self) -> None:
        """Olvida credenciales locales (logout o sesión rechazada)."""
        ...


class CookieCredentials:
    """Sesión por cookie gestionada por el servidor; nada durable en el cliente."""

    mode = "cookie"

    def __init__(self, jar: CookieJar | None = None) -> None:
        # httpx comparte (no copia) un CookieJar crudo: clear() afecta al cliente.
        self.cookie_jar = jar if jar is not None else CookieJar()

    def apply(self, request: httpx.Request) -> None:
        # El cookie jar del AsyncClient ya adjunta la cookie de sesión.
        return None

    def persist(self, identity: Identity, access_token: str | None) -> None:
        # El token viaja en la cookie httpOnly seteada por el backend.
        return None

    async def restore(self, verify: IdentityVerifier) -> Identity | None:
        return await verify()

    def clear(self) -> None:
        self.cookie_jar.clear()


class TokenCredentials:
    """Modo legacy: bearer token + identidad en storage durable."""

    mode = "token"
    # Sin transporte de cookies: el backend autentica por header.
    cookie_jar = None

    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        token_key: str = "auth_token",
        user_key: str = "user",
    ) -> None:
        self._storage = storage
        self._token_key = token_key
        self._user_key = user_key

    @property
    def token(self) -> str | None:
        return self._storage.get(self._token_key)

    def apply(self, request: httpx.Request) -> None:
        token = self.token
        if token:
            request.headers["Authorization"] = f"Bearer {token}"

    def persist(self, identity: Identity, access_token: str | None) -> None:
        if access_token:
            self._storage.set(self._token_key, access_token)
        self._storage.set(self._user_key, json.dumps(identity.to_payload()))

    async def restore(self, verify: IdentityVerifier) -> Identity | None:
        saved_user = self._storage.get(self._user_key)
        if not saved_user or not self.token:
            return None
        try:
            return Identity.from_payload(json.loads(saved_user))
        except (ValueError, KeyError, TypeError) as exc:
            logger.warning(
                "stored identity is unreadable; ignoring it",
                extra={"error": str(exc)},
            )
            return None

    def clear(self) -> None:
        self._storage.remove(self._token_key)
        self._storage.remove(self._user_key)
