"""
===============================================================================
TARJETA CRC — domain/events.py
===============================================================================

Módulo:
    Evento "authentication-lost" y su bus

Responsabilidades:
    - Definir AuthenticationLost (publicado por la capa HTTP ante un 401).
    - Definir AuthEventBus: suscripción/publicación de handlers sync o async.

Colaboradores:
    - infrastructure/http/client.py: publica.
    - application/session_store.py, application/auth_redirect.py: suscriben.

Notas:
    - La publicación es fire-and-forget: un handler que falla se loguea y
      NO reemplaza el error original que recibe quien hizo la llamada.
    - La capa HTTP no conoce navegación ni UI; solo publica el evento.
===============================================================================
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Union

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AuthenticationLost:
    """El backend rechazó la sesión (401) en una llamada."""

    method: str
    path: str
    status_code: int = 401


AuthHandler = Callable[[AuthenticationLost], Union[None, Awaitable[None]]]


class AuthEventBus:
    """Bus mínimo in-process; el orden de suscripción es el orden de entrega."""

    def __init__(self) -> None:
        self._handlers: list[AuthHandler] = []

    def subscribe(self, handler: AuthHandler) -> Callable[[], None]:
        """Registra un handler y devuelve la función para desuscribirlo."""
        self._handlers.append(handler)

        def _unsubscribe() -> None:
            if handler in self._handlers:
                self._handlers.remove(handler)

        return _unsubscribe

    async def publish(self, event: AuthenticationLost) -> None:
        for handler in list(self._handlers):
            try:
                result = handler(event)
                if inspect.isawaitable(result):
                    await result
            except Exception:
                logger.exception(
                    "authentication-lost handler failed",
                    extra={"handler": getattr(handler, "__qualname__", repr(handler))},
                )

    def __len__(self) -> int:
        return len(self._handlers)
