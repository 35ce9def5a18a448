"""
============================================================
TARJETA CRC — infrastructure/__init__.py
============================================================
Responsibilities:
  - Re-exportar los adaptadores concretos de los puertos del dominio
    (storage, navegación, descargas).

Policy:
  - Solo re-exporta símbolos; sin side effects.
============================================================
"""

from .downloads import FileSystemDownloadSink
from .navigation import InMemoryNavigator, NavigationRecord
from .storage import InMemoryStorage, JsonFileStorage

__all__ = [
    "FileSystemDownloadSink",
    "InMemoryNavigator",
    "InMemoryStorage",
    "JsonFileStorage",
    "NavigationRecord",
]
