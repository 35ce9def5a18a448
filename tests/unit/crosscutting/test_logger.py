"""
Name: JSON Logger Tests

Responsibilities:
  - Secrets never reach log output
  - Per-call context (request id, method, path) enriches records
"""

import json
import logging

import pytest

from leavemarker.context import clear_context, set_request_context
from leavemarker.crosscutting.logger import JSONFormatter

pytestmark = pytest.mark.unit


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="leavemarker.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="hello %s",
        args=("world",),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formats_one_json_object():
    payload = json.loads(JSONFormatter().format(_record()))

    assert payload["message"] == "hello world"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "leavemarker.test"


def test_redacts_sensitive_keys():
    payload = json.loads(
        JSONFormatter().format(
            _record(
                accessToken="jwt-token",
                body={"password": "hunter22", "email": "ada@acme.test"},
                razorpaySignature="sig",
            )
        )
    )

    assert payload["accessToken"] == "***REDACTED***"
    assert payload["razorpaySignature"] == "***REDACTED***"
    assert payload["body"]["password"] == "***REDACTED***"
    assert payload["body"]["email"] == "ada@acme.test"


def test_binary_values_are_summarized():
    payload = json.loads(JSONFormatter().format(_record(content=b"\x00" * 10)))

    assert payload["content"] == "<bytes 10B>"


def test_includes_call_context():
    set_request_context(request_id="req-1", method="GET", path="/employees")
    try:
        payload = json.loads(JSONFormatter().format(_record()))
    finally:
        clear_context()

    assert payload["request_id"] == "req-1"
    assert payload["method"] == "GET"
    assert payload["path"] == "/employees"
