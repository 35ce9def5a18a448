"""
============================================================
TARJETA CRC — infrastructure/storage.py
============================================================
Class: InMemoryStorage, JsonFileStorage

Responsibilities:
  - Implementar KeyValueStorage para session storage (memoria del proceso).
  - Implementar KeyValueStorage durable (archivo JSON) para el modo token.
  - Escrituras atómicas (tmp + os.replace) para no dejar archivos a medias.

Collaborators:
  - domain.ports.KeyValueStorage
  - application.logout_flag (session storage)
  - infrastructure.http.credentials.TokenCredentials (storage durable)
============================================================
"""

from __future__ import annotations

import json
import os
import tempfile
import threading
from pathlib import Path

from ..crosscutting.logger import logger


class InMemoryStorage:
    """Storage con vida igual a la del proceso (sessionStorage)."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def snapshot(self) -> dict[str, str]:
        return dict(self._data)


class JsonFileStorage:
    """Storage durable respaldado por un archivo JSON (localStorage)."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            logger.warning(
                "local storage file is not valid JSON; starting empty",
                extra={"storage_path": str(self._path)},
            )
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def _write(self, data: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self._path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh, ensure_ascii=False)
            os.replace(tmp, self._path)
        finally:
            if os.path.exists(tmp):
                os.unlink(tmp)

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            data = self._read()
            data[key] = value
            self._write(data)

    def remove(self, key: str) -> None:
        with self._lock:
            data = self._read()
            if key in data:
                del data[key]
                self._write(data)
