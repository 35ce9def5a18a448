"""
Name: Logout-in-progress flag

Responsibilities:
  - Mark, in session storage, that a deliberate logout is underway
  - Survive the hard navigation that ends the logout; cleared on next load

Collaborators:
  - application.session_store (sets / clears)
  - application.auth_redirect (reads)
"""

from __future__ import annotations

from ..domain.ports import KeyValueStorage

_SET_VALUE = "true"


class LogoutFlag:
    def __init__(self, storage: KeyValueStorage, key: str = "isLoggingOut") -> None:
        self._storage = storage
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def is_set(self) -> bool:
        return self._storage.get(self._key) == _SET_VALUE

    def set(self) -> None:
        self._storage.set(self._key, _SET_VALUE)

    def clear(self) -> None:
        self._storage.remove(self._key)
