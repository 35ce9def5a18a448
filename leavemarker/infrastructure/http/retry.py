"""leavemarker.infrastructure.http.retry

Name: Retry policy for idempotent API calls

Qué es
------
Utilidad de **resiliencia** para las lecturas (GET) contra el backend:
  - Clasificación de errores: **transient** (reintentar) vs **permanent** (fail-fast)
  - `tenacity.AsyncRetrying` con **exponential backoff + jitter**
  - Logging estructurado de cada reintento

CRC (Component Card)
--------------------
Component: retry helper
Responsibilities:
  - Decidir qué errores son reintentables
  - Construir el AsyncRetrying estándar (tenacity) con backoff+jitter
  - Loguear intentos para debugging
Collaborators:
  - tenacity (motor de retry)
  - crosscutting.exceptions (ApiError / NetworkError)
  - crosscutting.metrics (record_api_retry)
Constraints:
  - Reintentar SOLO timeouts/conexión y 408/429/5xx
  - NUNCA reintentar 4xx (en particular 401: dispara authentication-lost)
  - Solo para métodos idempotentes; los POST/PUT/DELETE van directo
"""

from __future__ import annotations

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential_jitter,
)

from ...crosscutting.exceptions import ApiError, NetworkError, UnauthorizedError
from ...crosscutting.logger import logger
from ...crosscutting.metrics import record_api_retry

TRANSIENT_HTTP_CODES: frozenset[int] = frozenset(
    {
        408,  # Request Timeout
        429,  # Too Many Requests
        500,
        502,
        503,
        504,
    }
)

IDEMPOTENT_METHODS: frozenset[str] = frozenset({"GET", "HEAD", "OPTIONS"})


def is_transient_error(exception: BaseException) -> bool:
    """Decide si un error de llamada al backend es transitorio."""
    if isinstance(exception, UnauthorizedError):
        return False
    if isinstance(exception, NetworkError):
        return True
    if isinstance(exception, ApiError):
        return exception.status_code in TRANSIENT_HTTP_CODES
    return False


def _retry_reason(exception: BaseException | None) -> str:
    if isinstance(exception, ApiError):
        return f"http_{exception.status_code}"
    if isinstance(exception, NetworkError):
        return "network"
    return "other"


def _log_retry(retry_state: RetryCallState) -> None:
    """Loguea cada intento antes de dormir (before_sleep)."""
    exc: BaseException | None = None
    if retry_state.outcome is not None:
        exc = retry_state.outcome.exception()

    wait_time = retry_state.next_action.sleep if retry_state.next_action else 0
    reason = _retry_reason(exc)
    record_api_retry(reason)

    logger.warning(
        "Retrying API call",
        extra={
            "attempt": retry_state.attempt_number,
            "wait_seconds": round(float(wait_time), 2),
            "reason": reason,
            "error": str(exc) if exc else None,
        },
    )


def create_async_retrying(
    *,
    max_attempts: int,
    base_delay: float,
    max_delay: float,
) -> AsyncRetrying:
    """
    Crea un `AsyncRetrying` con exponential backoff + jitter.

    - reraise=True: agotados los intentos se propaga la última excepción
      original (ApiError / NetworkError), no un RetryError.
    """
    if max_attempts <= 0:
        raise ValueError("max_attempts must be > 0")
    if base_delay < 0:
        raise ValueError("base_delay must be >= 0")
    if max_delay < 0:
        raise ValueError("max_delay must be >= 0")

    return AsyncRetrying(
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential_jitter(
            multiplier=base_delay, max=max_delay, jitter=base_delay
        ),
        retry=retry_if_exception(is_transient_error),
        before_sleep=_log_retry,
        reraise=True,
    )
