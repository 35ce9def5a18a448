"""
============================================================
TARJETA CRC — infrastructure/downloads.py
============================================================
Class: FileSystemDownloadSink

Responsibilities:
  - Implementar DownloadSink escribiendo reportes en un directorio local.
  - Escribir primero en un archivo temporal y luego renombrar al nombre
    sugerido (atómico en el mismo filesystem).
  - Liberar SIEMPRE el temporal, haya éxito o error (equivalente a revocar
    el object URL en el navegador).

Collaborators:
  - domain.ports.DownloadSink
  - application.usecases.download_report
============================================================
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

from ..crosscutting.logger import logger


class FileSystemDownloadSink:
    def __init__(self, directory: str | Path) -> None:
        self._directory = Path(directory)

    @property
    def directory(self) -> Path:
        return self._directory

    def save(self, filename: str, content: bytes) -> Path:
        # El nombre sugerido no puede escapar del directorio destino.
        safe_name = Path(filename).name
        if not safe_name:
            raise ValueError("filename is required")

        self._directory.mkdir(parents=True, exist_ok=True)
        target = self._directory / safe_name

        fd, tmp = tempfile.mkstemp(dir=self._directory, suffix=".part")
        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(content)
            os.replace(tmp, target)
        finally:
            if os.path.exists(tmp):
                os.unlink(tmp)

        logger.info(
            "report saved",
            extra={"report_file": safe_name, "size_bytes": len(content)},
        )
        return target
