"""
===============================================================================
TARJETA CRC — domain/entitlements.py
===============================================================================

Módulo:
    Snapshot de entitlements de la suscripción

Responsabilidades:
    - Definir Tier y Feature (flags booleanos que gatean páginas).
    - Definir EntitlementSnapshot, parseado desde /subscriptions/features.
    - Definir DEFAULT_ENTITLEMENTS: el snapshot FREE de mínimo privilegio.

Colaboradores:
    - application/entitlement_store.py: cachea el snapshot vigente.
    - application/feature_gate.py: decide feature vs. upgrade.

Notas:
    - Los contadores "remaining_*" son autoritativos del servidor: el cliente
      los lee tal cual, nunca los recalcula.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping


class Tier(str, Enum):
    FREE = "FREE"
    PRO = "PRO"
    ENTERPRISE = "ENTERPRISE"
    # Nombre del tier pago en el backend Go.
    MID_TIER = "MID_TIER"

    @property
    def is_paid(self) -> bool:
        return self is not Tier.FREE


class Feature(str, Enum):
    """Flags opcionales; el valor es la clave del payload del backend."""

    ATTENDANCE_TRACKING = "attendanceTracking"
    ADVANCED_REPORTS = "advancedReports"
    ATTENDANCE_RATE_ANALYTICS = "attendanceRateAnalytics"
    CUSTOM_LEAVE_TYPES = "customLeaveTypes"
    API_ACCESS = "apiAccess"
    PRIORITY_SUPPORT = "prioritySupport"


@dataclass(frozen=True, slots=True)
class EntitlementSnapshot:
    has_active_subscription: bool
    subscription_id: int | None
    is_paid: bool
    is_valid: bool
    tier: Tier
    plan_name: str | None
    max_employees: int
    current_employees: int
    remaining_employee_slots: int
    max_leave_policies: int
    current_leave_policies: int
    remaining_leave_policy_slots: int
    attendance_tracking: bool
    advanced_reports: bool
    attendance_rate_analytics: bool
    custom_leave_types: bool
    api_access: bool
    priority_support: bool
    current_period_end: str | None

    def has_feature(self, feature: Feature) -> bool:
        return bool(getattr(self, _FEATURE_ATTRS[feature]))

    @property
    def enabled_features(self) -> frozenset[Feature]:
        return frozenset(f for f in Feature if self.has_feature(f))

    @classmethod
    def from_payload(cls, data: Mapping[str, Any]) -> "EntitlementSnapshot":
        """
        Parsea el `data` de /subscriptions/features.

        Claves ausentes toman el valor del snapshot por defecto; un tier
        desconocido lanza ValueError (el store cae al default).
        """
        d = DEFAULT_ENTITLEMENTS

        def _int(key: str, default: int) -> int:
            value = data.get(key)
            return default if value is None else int(value)

        def _bool(key: str, default: bool) -> bool:
            value = data.get(key)
            return default if value is None else bool(value)

        subscription_id = data.get("subscriptionId")
        return cls(
            has_active_subscription=_bool(
                "hasActiveSubscription", d.has_active_subscription
            ),
            subscription_id=int(subscription_id) if subscription_id is not None else None,
            is_paid=_bool("isPaid", d.is_paid),
            is_valid=_bool("isValid", d.is_valid),
            tier=Tier(data.get("tier") or d.tier.value),
            plan_name=data.get("planName"),
            max_employees=_int("maxEmployees", d.max_employees),
            current_employees=_int("currentEmployees", d.current_employees),
            remaining_employee_slots=_int(
                "remainingEmployeeSlots", d.remaining_employee_slots
            ),
            max_leave_policies=_int("maxLeavePolicies", d.max_leave_policies),
            current_leave_policies=_int(
                "currentLeavePolicies", d.current_leave_policies
            ),
            remaining_leave_policy_slots=_int(
                "remainingLeavePolicySlots", d.remaining_leave_policy_slots
            ),
            attendance_tracking=_bool(Feature.ATTENDANCE_TRACKING.value, False),
            advanced_reports=_bool(Feature.ADVANCED_REPORTS.value, False),
            attendance_rate_analytics=_bool(
                Feature.ATTENDANCE_RATE_ANALYTICS.value, False
            ),
            custom_leave_types=_bool(Feature.CUSTOM_LEAVE_TYPES.value, False),
            api_access=_bool(Feature.API_ACCESS.value, False),
            priority_support=_bool(Feature.PRIORITY_SUPPORT.value, False),
            current_period_end=data.get("currentPeriodEnd"),
        )


_FEATURE_ATTRS: dict[Feature, str] = {
    Feature.ATTENDANCE_TRACKING: "attendance_tracking",
    Feature.ADVANCED_REPORTS: "advanced_reports",
    Feature.ATTENDANCE_RATE_ANALYTICS: "attendance_rate_analytics",
    Feature.CUSTOM_LEAVE_TYPES: "custom_leave_types",
    Feature.API_ACCESS: "api_access",
    Feature.PRIORITY_SUPPORT: "priority_support",
}

# Snapshot de mínimo privilegio: sin suscripción, FREE, caps mínimos.
DEFAULT_ENTITLEMENTS = EntitlementSnapshot(
    has_active_subscription=False,
    subscription_id=None,
    is_paid=False,
    is_valid=False,
    tier=Tier.FREE,
    plan_name=None,
    max_employees=10,
    current_employees=0,
    remaining_employee_slots=10,
    max_leave_policies=3,
    current_leave_policies=0,
    remaining_leave_policy_slots=3,
    attendance_tracking=False,
    advanced_reports=False,
    attendance_rate_analytics=False,
    custom_leave_types=False,
    api_access=False,
    priority_support=False,
    current_period_end=None,
)
