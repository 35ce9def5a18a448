"""
===============================================================================
TARJETA CRC — domain/ports.py
===============================================================================

Módulo:
    Puertos hacia el "navegador" y el proveedor de pagos

Responsabilidades:
    - Navigator: ubicación actual + navegación soft/hard.
    - KeyValueStorage: session storage / local storage.
    - DownloadSink: destino de blobs descargados (reportes).
    - CheckoutProvider: widget de checkout de terceros.

Colaboradores:
    - infrastructure/navigation.py, infrastructure/storage.py,
      infrastructure/downloads.py: implementaciones concretas.
    - application/*: dependen solo de estos contratos.

Principios:
    - Sin dependencias a httpx ni a frameworks.
    - Solo interfaces + DTOs puros.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol


class Navigator(Protocol):
    def current_path(self) -> str:
        """Path de la ubicación actual (p.ej. "/dashboard")."""
        ...

    def navigate(self, path: str) -> None:
        """Navegación client-side (router push); el estado en memoria sobrevive."""
        ...

    def hard_navigate(self, path: str) -> None:
        """Navegación completa: equivale a una recarga de la aplicación."""
        ...


class KeyValueStorage(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class DownloadSink(Protocol):
    def save(self, filename: str, content: bytes) -> Path:
        """Persiste `content` con el nombre sugerido y devuelve la ruta final."""
        ...


@dataclass(frozen=True)
class CheckoutOrder:
    """Parámetros que el cliente entrega al widget de checkout."""

    key_id: str
    order_id: str
    amount: int
    currency: str
    name: str
    description: str
    prefill_name: str | None = None
    prefill_email: str | None = None
    theme_color: str | None = None
    notes: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class CheckoutResult:
    """Payload del callback del proveedor, reenviado tal cual a /payments/verify."""

    provider_order_id: str
    provider_payment_id: str
    provider_signature: str


class CheckoutProvider(Protocol):
    async def create_checkout(self, order: CheckoutOrder) -> CheckoutResult:
        """
        Abre el checkout y espera el resultado.

        Raises:
            CheckoutDismissedError si el usuario cierra el widget.
        """
        ...
