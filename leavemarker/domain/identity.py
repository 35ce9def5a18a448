"""
===============================================================================
TARJETA CRC — domain/identity.py
===============================================================================

Módulo:
    Identidad del usuario autenticado

Responsabilidades:
    - Definir el enum de roles (Role) del producto.
    - Definir Identity (dataclass inmutable) y su parsing desde payloads del
      backend (login/signup devuelven `userId`, verify-session devuelve `id`).
    - Definir los estados del ciclo de vida de la sesión (SessionState).

Colaboradores:
    - application/session_store.py: único escritor de Identity.
    - domain/navigation.py: filtra entradas por Role.
    - infrastructure/http/credentials.py: serializa Identity en modo token.

Notas:
    - Este módulo NO contiene I/O: solo "shapes" de datos.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping


class Role(str, Enum):
    """Roles soportados por el backend."""

    SUPER_ADMIN = "SUPER_ADMIN"
    HR_ADMIN = "HR_ADMIN"
    MANAGER = "MANAGER"
    EMPLOYEE = "EMPLOYEE"


class SessionState(str, Enum):
    """Estados de la sesión cliente."""

    UNKNOWN = "unknown"
    ANONYMOUS = "anonymous"
    AUTHENTICATED = "authenticated"


@dataclass(frozen=True, slots=True)
class Identity:
    """Usuario autenticado (una sola por sesión de navegador, o ninguna)."""

    id: int
    email: str
    full_name: str
    role: Role
    company_id: int

    @classmethod
    def from_payload(
        cls, data: Mapping[str, Any], *, email: str | None = None
    ) -> "Identity":
        """
        Construye Identity desde `data` del envelope.

        Acepta ambas formas del backend (`id` o `userId`). `email` permite
        forzar el email ingresado en login, como hace la UI.

        Raises:
            KeyError / ValueError / TypeError si el payload no es una identidad.
        """
        raw_id = data["id"] if "id" in data else data["userId"]
        return cls(
            id=int(raw_id),
            email=email or str(data["email"]),
            full_name=str(data.get("fullName") or ""),
            role=Role(data["role"]),
            company_id=int(data["companyId"]),
        )

    def to_payload(self) -> dict[str, Any]:
        """Forma serializada (camelCase) usada en el storage durable."""
        return {
            "id": self.id,
            "email": self.email,
            "fullName": self.full_name,
            "role": self.role.value,
            "companyId": self.company_id,
        }

    @property
    def initials(self) -> str:
        """Iniciales (máx. 2) para el avatar del menú de usuario."""
        parts = [p for p in self.full_name.split(" ") if p]
        return "".join(p[0] for p in parts).upper()[:2]
