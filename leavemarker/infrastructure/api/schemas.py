"""
Name: REST request/response schemas

Responsibilities:
  - Pydantic models for the bodies the client sends (camelCase on the wire)
  - Pydantic models for the few responses the client logic reads
    (plans, payment orders)

Collaborators:
  - infrastructure.api.* resources (serialise with `to_body()`)
  - application.usecases.subscribe_to_plan (Plan, PaymentOrder)

Notes:
  - Free-form admin payloads (employees, policies, holidays, manual
    attendance) are passed through as mappings; the backend validates them
    and answers "Validation failed" with a field map.
"""

from __future__ import annotations

from datetime import date, time
from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class WorkType(str, Enum):
    OFFICE = "OFFICE"
    REMOTE = "REMOTE"
    HYBRID = "HYBRID"
    FIELD_WORK = "FIELD_WORK"
    CLIENT_SITE = "CLIENT_SITE"


class BillingCycle(str, Enum):
    MONTHLY = "MONTHLY"
    YEARLY = "YEARLY"


class _Body(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    def to_body(self, *, exclude_none: bool = False) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json", exclude_none=exclude_none)


# =============================================================================
# Auth
# =============================================================================


class LoginRequest(_Body):
    email: str
    password: str


class SignupRequest(_Body):
    """Alta de empresa + su primer administrador."""

    company_name: str = Field(max_length=200)
    company_email: str = Field(max_length=100)
    full_name: str = Field(max_length=100)
    email: str = Field(max_length=100)
    password: str = Field(min_length=6)
    employee_id: str = Field(max_length=50)
    work_location: str


class PasswordResetConfirmRequest(_Body):
    token: str
    new_password: str = Field(min_length=6)


# =============================================================================
# Leave / attendance
# =============================================================================


class ApprovalDecision(_Body):
    approved: bool
    reason: str | None = None


class PunchRequest(_Body):
    punch_date: date = Field(alias="date")
    punch_time: time
    is_punch_in: bool
    work_type: WorkType | None = None


class AttendanceCorrectionRequest(_Body):
    punch_in_time: time | None = None
    punch_out_time: time | None = None
    work_type: WorkType | None = None
    remarks: str | None = Field(default=None, max_length=500)


# =============================================================================
# Billing
# =============================================================================


class SubscriptionRequest(_Body):
    plan_id: int
    billing_cycle: BillingCycle
    auto_renew: bool = True


class PaymentInitiateRequest(_Body):
    plan_id: int
    billing_cycle: BillingCycle


class PaymentVerifyRequest(_Body):
    """Callback del proveedor reenviado al backend (nombres del proveedor)."""

    provider_order_id: str = Field(alias="razorpayOrderId")
    provider_payment_id: str = Field(alias="razorpayPaymentId")
    provider_signature: str = Field(alias="razorpaySignature")


class ContactRequest(_Body):
    name: str
    email: str
    phone: str | None = None
    message: str


# =============================================================================
# Responses read by client logic
# =============================================================================


class Plan(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore"
    )

    id: int
    name: str
    tier: str
    monthly_price: float = 0
    yearly_price: float = 0
    description: str | None = None

    @property
    def is_free(self) -> bool:
        return self.tier.upper() == "FREE"

    def price(self, billing_cycle: BillingCycle) -> float:
        if self.is_free:
            return 0
        if billing_cycle is BillingCycle.YEARLY:
            return self.yearly_price
        return self.monthly_price

    def yearly_savings_percentage(self) -> int:
        """% ahorrado pagando anual vs. 12 meses (redondeado)."""
        if self.is_free or not self.monthly_price:
            return 0
        yearly_equivalent = self.monthly_price * 12
        return round((yearly_equivalent - self.yearly_price) / yearly_equivalent * 100)


class PaymentOrder(BaseModel):
    """
    Orden devuelta por /payments/initiate.

    Acepta los dos nombres que exponen los backends (`razorpayOrderId` u
    `orderId`, `razorpayKeyId` o `keyId`).
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    order_id: str = Field(validation_alias=AliasChoices("razorpayOrderId", "orderId"))
    key_id: str = Field(validation_alias=AliasChoices("razorpayKeyId", "keyId"))
    amount: int
    currency: str = "INR"
    employee_count: int | None = Field(
        default=None, validation_alias=AliasChoices("employeeCount")
    )
    price_per_employee: int | None = Field(
        default=None, validation_alias=AliasChoices("pricePerEmployee")
    )
    company_name: str | None = Field(
        default=None, validation_alias=AliasChoices("companyName")
    )
    company_email: str | None = Field(
        default=None, validation_alias=AliasChoices("companyEmail")
    )
