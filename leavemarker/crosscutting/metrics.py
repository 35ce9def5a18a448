"""
===============================================================================
ARCHIVO: crosscutting/metrics.py
===============================================================================

CRC CARD (Módulo)
-------------------------------------------------------------------------------
Nombre:
    Métricas (Prometheus) del cliente

Responsabilidades:
    - Definir métricas Prometheus en un registry propio (no el global).
    - Proveer funciones pequeñas y estables para registrar eventos/duraciones.
    - Cuidar cardinalidad (NO user_id, NO paths con ids, NO emails).
    - Exponer el texto de exposición para debugging/scraping.

Colaboradores:
    - infrastructure/http/client.py: latencia y conteo de llamadas.
    - application/auth_redirect.py: eventos de sesión perdida.
    - application/entitlement_store.py: fallbacks al snapshot FREE.
===============================================================================
"""

from __future__ import annotations

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

_registry = CollectorRegistry()

# ------------------------
# HTTP saliente
# ------------------------
_requests_total = Counter(
    "leavemarker_api_requests_total",
    "Total de llamadas al backend",
    ["method", "status_class"],
    registry=_registry,
)

_request_latency = Histogram(
    "leavemarker_api_request_latency_seconds",
    "Latencia de llamadas al backend (segundos)",
    ["method"],
    buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
    registry=_registry,
)

_request_retries_total = Counter(
    "leavemarker_api_request_retries_total",
    "Reintentos de llamadas idempotentes",
    ["reason"],
    registry=_registry,
)

# ------------------------
# Sesión / entitlement
# ------------------------
_auth_lost_total = Counter(
    "leavemarker_auth_lost_total",
    "Respuestas 401 recibidas, por reacción aplicada",
    ["reaction"],
    registry=_registry,
)

_entitlement_fallback_total = Counter(
    "leavemarker_entitlement_fallback_total",
    "Veces que se usó el snapshot FREE por defecto",
    ["reason"],
    registry=_registry,
)


def status_class(status_code: int | None) -> str:
    """Agrupa status en clases (2xx/4xx/5xx) o 'network' si no hubo respuesta."""
    if status_code is None:
        return "network"
    return f"{status_code // 100}xx"


def record_api_request(method: str, status_code: int | None) -> None:
    _requests_total.labels(method=method, status_class=status_class(status_code)).inc()


def observe_api_latency(method: str, seconds: float) -> None:
    _request_latency.labels(method=method).observe(seconds)


def record_api_retry(reason: str) -> None:
    _request_retries_total.labels(reason=reason).inc()


def record_auth_lost(reaction: str) -> None:
    """reaction ∈ {redirect, ignored_logout, ignored_public}."""
    _auth_lost_total.labels(reaction=reaction).inc()


def record_entitlement_fallback(reason: str) -> None:
    """reason ∈ {anonymous, unsuccessful, error}."""
    _entitlement_fallback_total.labels(reason=reason).inc()


def get_metrics_response() -> tuple[bytes, str]:
    """Devuelve (body, content_type) en formato de exposición Prometheus."""
    return generate_latest(_registry), CONTENT_TYPE_LATEST
