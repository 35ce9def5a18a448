"""
===============================================================================
TARJETA CRC — domain/__init__.py
===============================================================================

Módulo:
    Exportaciones de la Capa de Dominio

Responsabilidades:
    - Centralizar exports para imports limpios en application/container.

Reglas:
    - Solo re-exporta contratos/entidades del dominio.
    - No importar infraestructura aquí.
===============================================================================
"""

from .entitlements import DEFAULT_ENTITLEMENTS, EntitlementSnapshot, Feature, Tier
from .events import AuthenticationLost, AuthEventBus
from .identity import Identity, Role, SessionState
from .navigation import NAVIGATION, NavEntry, filter_navigation
from .ports import (
    CheckoutOrder,
    CheckoutProvider,
    CheckoutResult,
    DownloadSink,
    KeyValueStorage,
    Navigator,
)

__all__ = [
    # Identity
    "Identity",
    "Role",
    "SessionState",
    # Entitlements
    "DEFAULT_ENTITLEMENTS",
    "EntitlementSnapshot",
    "Feature",
    "Tier",
    # Navigation
    "NAVIGATION",
    "NavEntry",
    "filter_navigation",
    # Events
    "AuthenticationLost",
    "AuthEventBus",
    # Ports
    "CheckoutOrder",
    "CheckoutProvider",
    "CheckoutResult",
    "DownloadSink",
    "KeyValueStorage",
    "Navigator",
]
