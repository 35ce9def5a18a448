"""
Name: FeatureGate Tests

Responsibilities:
  - LOADING while entitlements are unresolved (never premature)
  - GRANTED / UPGRADE_REQUIRED strictly from the flag
"""

from unittest.mock import Mock

import pytest

from leavemarker.application.feature_gate import FeatureGate, GateStatus
from leavemarker.crosscutting.exceptions import EntitlementRequiredError
from leavemarker.domain.entitlements import (
    DEFAULT_ENTITLEMENTS,
    EntitlementSnapshot,
    Feature,
)

from conftest import features_payload

pytestmark = pytest.mark.unit

PAID = EntitlementSnapshot.from_payload(features_payload())


def _gate(snapshot, *, loading=False) -> FeatureGate:
    entitlements = Mock()
    entitlements.snapshot = snapshot
    entitlements.loading = loading
    return FeatureGate(entitlements, upgrade_path="/pricing")


def test_loading_while_snapshot_missing():
    decision = _gate(None).decision(Feature.ADVANCED_REPORTS)

    assert decision.status is GateStatus.LOADING
    assert decision.message is None


def test_loading_while_refreshing():
    decision = _gate(PAID, loading=True).decision(Feature.ADVANCED_REPORTS)

    assert decision.status is GateStatus.LOADING


def test_granted_when_flag_is_on():
    decision = _gate(PAID).decision(Feature.ADVANCED_REPORTS)

    assert decision.granted


def test_upgrade_required_when_flag_is_off():
    decision = _gate(DEFAULT_ENTITLEMENTS).decision(Feature.ADVANCED_REPORTS)

    assert decision.status is GateStatus.UPGRADE_REQUIRED
    assert decision.upgrade_path == "/pricing"
    assert decision.message == (
        "Reports are available on Pro and Enterprise plans. Please upgrade to access."
    )


def test_require_returns_snapshot_when_granted():
    assert _gate(PAID).require(Feature.ATTENDANCE_TRACKING) is PAID


def test_require_raises_when_not_granted():
    with pytest.raises(EntitlementRequiredError) as exc_info:
        _gate(DEFAULT_ENTITLEMENTS).require(Feature.API_ACCESS)

    assert exc_info.value.feature == "apiAccess"
    assert exc_info.value.upgrade_path == "/pricing"


def test_require_assumes_least_privilege_while_loading():
    with pytest.raises(EntitlementRequiredError):
        _gate(None).require(Feature.ADVANCED_REPORTS)
