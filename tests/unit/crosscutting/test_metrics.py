"""
Name: Client Metrics Tests

Responsibilities:
  - Status class grouping
  - Exposition output contains the client metric families
"""

import pytest

from leavemarker.crosscutting.metrics import (
    get_metrics_response,
    record_auth_lost,
    record_entitlement_fallback,
    status_class,
)

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    "status_code, expected",
    [(200, "2xx"), (204, "2xx"), (401, "4xx"), (503, "5xx"), (None, "network")],
)
def test_status_class(status_code, expected):
    assert status_class(status_code) == expected


def test_exposition_contains_client_metrics():
    record_auth_lost("redirect")
    record_entitlement_fallback("error")

    body, content_type = get_metrics_response()
    text = body.decode()

    assert content_type.startswith("text/plain")
    assert 'leavemarker_auth_lost_total{reaction="redirect"}' in text
    assert 'leavemarker_entitlement_fallback_total{reason="error"}' in text
