# leavemarker/crosscutting/exceptions.py
"""
===============================================================================
MÓDULO: Excepciones tipadas del cliente
===============================================================================

Objetivo
--------
Tener excepciones coherentes para toda la capa cliente, con:
- error_code estable
- error_id para correlación con logs
- message "humana" (la del servidor cuando existe)

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  LeaveMarkerError + subclases

Responsabilidades:
  - Representar fallas del backend (ApiError / UnauthorizedError)
  - Representar fallas de transporte (NetworkError)
  - Representar fallas locales recuperables (auth, entitlement, checkout)

Colaboradores:
  - infrastructure/http/client.py (lanza ApiError / NetworkError)
  - crosscutting/error_messages.py (convierte a texto para UI)
===============================================================================
"""

from __future__ import annotations

from typing import Any
from uuid import uuid4


class LeaveMarkerError(Exception):
    """Base para errores del cliente: error_code + error_id + message."""

    error_code: str = "LEAVEMARKER_ERROR"

    def __init__(
        self,
        message: str,
        error_id: str | None = None,
        original_error: Exception | None = None,
    ):
        self.message = message
        self.error_id = error_id or str(uuid4())
        self.original_error = original_error
        super().__init__(message)


class ApiError(LeaveMarkerError):
    """
    Respuesta de error del backend.

    Cubre respuestas no-2xx y envelopes con success=false. `payload` es el
    body parseado (envelope) si el servidor devolvió JSON.
    """

    error_code: str = "API_ERROR"

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        payload: dict[str, Any] | None = None,
        method: str = "",
        path: str = "",
    ):
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload
        self.method = method
        self.path = path

    @property
    def server_message(self) -> str | None:
        if not self.payload:
            return None
        message = self.payload.get("message")
        return message if isinstance(message, str) and message else None

    @property
    def data(self) -> Any:
        return self.payload.get("data") if self.payload else None


class UnauthorizedError(ApiError):
    """401: la sesión no existe, expiró o fue rechazada."""

    error_code: str = "UNAUTHORIZED"


class NetworkError(LeaveMarkerError):
    """Falla de transporte (timeout, conexión) sin respuesta del servidor."""

    error_code: str = "NETWORK_ERROR"


class AuthenticationFailedError(LeaveMarkerError):
    """Login/signup rechazado; el mensaje es apto para mostrar en UI."""

    error_code: str = "AUTHENTICATION_FAILED"


class EntitlementRequiredError(LeaveMarkerError):
    """Acción de un feature que el plan actual no habilita."""

    error_code: str = "ENTITLEMENT_REQUIRED"

    def __init__(self, message: str, *, feature: str, upgrade_path: str):
        super().__init__(message)
        self.feature = feature
        self.upgrade_path = upgrade_path


class CheckoutDismissedError(LeaveMarkerError):
    """El usuario cerró el widget de checkout sin pagar."""

    error_code: str = "CHECKOUT_DISMISSED"
