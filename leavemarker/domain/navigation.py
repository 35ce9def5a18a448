"""
===============================================================================
TARJETA CRC — domain/navigation.py
===============================================================================

Módulo:
    Navegación gateada por rol

Responsabilidades:
    - Declarar la tabla estática ruta -> roles (NAVIGATION).
    - Filtrar la tabla contra la Identity actual (función pura).

Colaboradores:
    - domain/identity.py (Role, Identity)

Notas:
    - filter_navigation se recalcula en cada render: la Identity puede
      cambiar entre dos llamadas (p.ej. justo después de logout).
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .identity import Identity, Role


@dataclass(frozen=True, slots=True)
class NavEntry:
    """Entrada de navegación. roles=None significa "sin restricción"."""

    name: str
    href: str
    icon: str
    roles: frozenset[Role] | None = None

    def is_visible_to(self, identity: Identity | None) -> bool:
        if self.roles is None:
            return True
        return identity is not None and identity.role in self.roles


_ADMINS = frozenset({Role.SUPER_ADMIN, Role.HR_ADMIN})

NAVIGATION: tuple[NavEntry, ...] = (
    NavEntry(name="Dashboard", href="/dashboard", icon="building"),
    NavEntry(
        name="Employees", href="/dashboard/employees", icon="users", roles=_ADMINS
    ),
    NavEntry(
        name="Leave Policies",
        href="/dashboard/leave-policies",
        icon="file-text",
        roles=_ADMINS,
    ),
    NavEntry(
        name="Holidays", href="/dashboard/holidays", icon="calendar", roles=_ADMINS
    ),
    NavEntry(
        name="Leave Applications",
        href="/dashboard/leave-applications",
        icon="clipboard-list",
    ),
    NavEntry(
        name="Reports",
        href="/dashboard/reports",
        icon="bar-chart",
        roles=_ADMINS | {Role.MANAGER},
    ),
)


def filter_navigation(
    entries: Iterable[NavEntry], identity: Identity | None
) -> list[NavEntry]:
    """Entradas visibles para `identity`, preservando el orden."""
    return [entry for entry in entries if entry.is_visible_to(identity)]
