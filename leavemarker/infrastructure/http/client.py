"""
============================================================
TARJETA CRC — infrastructure/http/client.py
============================================================
Class: ApiClient

Responsibilities:
  - Único punto de salida hacia el backend REST (httpx.AsyncClient).
  - Transportar credenciales: cookie jar (modo cookie) o header Bearer
    (modo token), según la estrategia elegida al arrancar.
  - Parsear el envelope `{success, message?, data?}` de cada respuesta.
  - Ante 401: publicar AuthenticationLost en el bus y lanzar el
    UnauthorizedError SIN modificarlo (quien llama puede manejarlo igual).
  - Resto de errores (no-401, red): se propagan tipados, sin efectos globales.
  - Retry con backoff + jitter solo para GET idempotentes y errores transitorios.
  - Registrar métricas (conteo por status class, latencia) y contexto de logs.

Collaborators:
  - infrastructure.http.credentials (CredentialStrategy)
  - infrastructure.http.retry (política de reintentos, tenacity)
  - domain.events (AuthEventBus, AuthenticationLost)
  - crosscutting.metrics / crosscutting.logger / context
  - httpx (HTTP client)
============================================================
"""

from __future__ import annotations

import time
from typing import Any, Mapping
from uuid import uuid4

import httpx
from pydantic import ValidationError

from ...context import clear_context, set_request_context
from ...crosscutting.exceptions import ApiError, NetworkError, UnauthorizedError
from ...crosscutting.logger import logger
from ...crosscutting.metrics import observe_api_latency, record_api_request
from ...domain.events import AuthenticationLost, AuthEventBus
from .credentials import CredentialStrategy
from .envelope import ApiEnvelope, read_json_payload
from .retry import IDEMPOTENT_METHODS, create_async_retrying

_REQUEST_ID_HEADER = "X-Request-Id"


def _drop_none(params: Mapping[str, Any] | None) -> dict[str, Any] | None:
    """Query params sin valores None (httpx los serializaría como "")."""
    if not params:
        return None
    cleaned = {k: v for k, v in params.items() if v is not None}
    return cleaned or None


class ApiClient:
    """
    Cliente HTTP del backend.

    No conoce navegación ni UI: la reacción a un 401 vive en los
    suscriptores del AuthEventBus.
    """

    def __init__(
        self,
        base_url: str,
        *,
        credentials: CredentialStrategy,
        events: AuthEventBus,
        timeout_s: float = 5.0,
        retry_max_attempts: int = 3,
        retry_base_delay_s: float = 0.5,
        retry_max_delay_s: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        if not base_url:
            raise ValueError("base_url is required for ApiClient")
        self._credentials = credentials
        self._events = events
        self._retry_max = retry_max_attempts
        self._retry_base = retry_base_delay_s
        self._retry_max_delay = retry_max_delay_s
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers={"Content-Type": "application/json"},
            cookies=credentials.cookie_jar,
            timeout=timeout_s,
            transport=transport,
        )

    @property
    def events(self) -> AuthEventBus:
        return self._events

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Envío (interno)
    # ------------------------------------------------------------------

    async def _send(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: Mapping[str, Any] | None = None,
    ) -> httpx.Response:
        request_id = str(uuid4())
        set_request_context(request_id=request_id, method=method, path=path)

        request = self._client.build_request(
            method,
            path,
            json=json,
            params=_drop_none(params),
            headers={_REQUEST_ID_HEADER: request_id},
        )
        self._credentials.apply(request)

        started = time.perf_counter()
        try:
            response = await self._client.send(request)
        except httpx.TransportError as exc:
            record_api_request(method, None)
            logger.warning(
                "API call failed without response",
                extra={"error": str(exc), "error_type": type(exc).__name__},
            )
            clear_context()
            raise NetworkError(
                f"Network error calling {method} {path}", original_error=exc
            ) from exc
        finally:
            observe_api_latency(method, time.perf_counter() - started)

        record_api_request(method, response.status_code)

        try:
            if response.status_code == 401:
                await self._events.publish(
                    AuthenticationLost(method=method, path=path)
                )
                raise self._error_from(response, UnauthorizedError)

            if response.status_code >= 400:
                raise self._error_from(response, ApiError)
        finally:
            clear_context()

        return response

    async def _send_with_policy(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: Mapping[str, Any] | None = None,
    ) -> httpx.Response:
        method = method.upper()
        if method not in IDEMPOTENT_METHODS or self._retry_max <= 1:
            return await self._send(method, path, json=json, params=params)

        retrying = create_async_retrying(
            max_attempts=self._retry_max,
            base_delay=self._retry_base,
            max_delay=self._retry_max_delay,
        )
        async for attempt in retrying:
            with attempt:
                response = await self._send(method, path, json=json, params=params)
        return response

    @staticmethod
    def _error_from(response: httpx.Response, error_cls: type[ApiError]) -> ApiError:
        payload = read_json_payload(response)
        message = None
        if payload and isinstance(payload.get("message"), str):
            message = payload["message"]
        return error_cls(
            message or f"HTTP {response.status_code}",
            status_code=response.status_code,
            payload=payload,
            method=response.request.method,
            path=response.request.url.path,
        )

    # ------------------------------------------------------------------
    # API pública
    # ------------------------------------------------------------------

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: Mapping[str, Any] | None = None,
    ) -> ApiEnvelope:
        """Ejecuta la llamada y devuelve el envelope (aunque success sea False)."""
        response = await self._send_with_policy(method, path, json=json, params=params)
        if not response.content:
            # 204 / body vacío: éxito sin data.
            return ApiEnvelope(success=True)
        payload = read_json_payload(response)
        if payload is None:
            raise ApiError(
                "Unexpected response from server",
                status_code=response.status_code,
                method=method,
                path=path,
            )
        try:
            return ApiEnvelope.model_validate(payload)
        except ValidationError as exc:
            raise ApiError(
                "Unexpected response from server",
                status_code=response.status_code,
                payload=payload,
                method=method,
                path=path,
            ) from exc

    async def get(
        self, path: str, *, params: Mapping[str, Any] | None = None
    ) -> ApiEnvelope:
        return await self.request("GET", path, params=params)

    async def post(
        self,
        path: str,
        *,
        json: Any = None,
        params: Mapping[str, Any] | None = None,
    ) -> ApiEnvelope:
        return await self.request("POST", path, json=json, params=params)

    async def put(self, path: str, *, json: Any = None) -> ApiEnvelope:
        return await self.request("PUT", path, json=json)

    async def delete(self, path: str) -> ApiEnvelope:
        return await self.request("DELETE", path)

    async def download(
        self, path: str, *, params: Mapping[str, Any] | None = None
    ) -> bytes:
        """GET binario (reportes): devuelve el body crudo."""
        response = await self._send_with_policy("GET", path, params=params)
        return response.content
