"""
Name: Page-level feature gate

Responsibilities:
  - Turn an entitlement flag into LOADING / GRANTED / UPGRADE_REQUIRED
  - Point the upgrade call to action at the pricing route

Notes:
  - While entitlements load the decision is LOADING: neither the feature nor
    the interstitial is shown.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..crosscutting.exceptions import EntitlementRequiredError
from ..domain.entitlements import EntitlementSnapshot, Feature
from .entitlement_store import EntitlementStore

UPGRADE_MESSAGES: dict[Feature, str] = {
    Feature.ADVANCED_REPORTS: (
        "Reports are available on Pro and Enterprise plans. Please upgrade to access."
    ),
    Feature.ATTENDANCE_TRACKING: (
        "Attendance tracking is available on paid plans. Please upgrade to access."
    ),
    Feature.ATTENDANCE_RATE_ANALYTICS: (
        "Attendance rate analytics is available on paid plans. Please upgrade to access."
    ),
}
DEFAULT_UPGRADE_MESSAGE = "This feature is not included in your plan. Please upgrade to access."
LOADING_MESSAGE = "Checking your plan. Please try again in a moment."


class GateStatus(str, Enum):
    LOADING = "loading"
    GRANTED = "granted"
    UPGRADE_REQUIRED = "upgrade_required"


@dataclass(frozen=True)
class GateDecision:
    status: GateStatus
    feature: Feature
    upgrade_path: str
    message: str | None = None

    @property
    def granted(self) -> bool:
        return self.status is GateStatus.GRANTED


class FeatureGate:
    def __init__(self, entitlements: EntitlementStore, *, upgrade_path: str = "/pricing"):
        self._entitlements = entitlements
        self._upgrade_path = upgrade_path

    @property
    def upgrade_path(self) -> str:
        return self._upgrade_path

    def decision(self, feature: Feature) -> GateDecision:
        snapshot = self._entitlements.snapshot
        if self._entitlements.loading or snapshot is None:
            return GateDecision(GateStatus.LOADING, feature, self._upgrade_path)
        if snapshot.has_feature(feature):
            return GateDecision(GateStatus.GRANTED, feature, self._upgrade_path)
        return GateDecision(
            GateStatus.UPGRADE_REQUIRED,
            feature,
            self._upgrade_path,
            UPGRADE_MESSAGES.get(feature, DEFAULT_UPGRADE_MESSAGE),
        )

    def require(self, feature: Feature) -> EntitlementSnapshot:
        """
        Snapshot granting `feature`.

        Raises:
            EntitlementRequiredError: the flag is off, or entitlements are
                still loading (least privilege).
        """
        snapshot = self._entitlements.snapshot
        decision = self.decision(feature)
        if decision.granted and snapshot is not None:
            return snapshot
        raise EntitlementRequiredError(
            decision.message or LOADING_MESSAGE,
            feature=feature.value,
            upgrade_path=self._upgrade_path,
        )
