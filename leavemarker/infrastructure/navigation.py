"""
============================================================
TARJETA CRC — infrastructure/navigation.py
============================================================
Class: InMemoryNavigator

Responsibilities:
  - Implementar Navigator sin navegador real.
  - Registrar el historial (soft vs hard) para inspección/tests.
  - Contar "page loads": cada hard navigation es una recarga completa.

Collaborators:
  - domain.ports.Navigator
  - application.session_store / application.auth_redirect (hard navigation)
============================================================
"""

from __future__ import annotations

from dataclasses import dataclass

from ..crosscutting.logger import logger


@dataclass(frozen=True, slots=True)
class NavigationRecord:
    path: str
    hard: bool


class InMemoryNavigator:
    def __init__(self, initial_path: str = "/") -> None:
        self._path = initial_path
        self.history: list[NavigationRecord] = []
        self.page_loads = 0

    def current_path(self) -> str:
        return self._path

    def navigate(self, path: str) -> None:
        self._path = path
        self.history.append(NavigationRecord(path=path, hard=False))

    def hard_navigate(self, path: str) -> None:
        logger.info("full navigation", extra={"target_path": path})
        self._path = path
        self.page_loads += 1
        self.history.append(NavigationRecord(path=path, hard=True))

    def hard_navigations(self) -> list[str]:
        return [record.path for record in self.history if record.hard]
