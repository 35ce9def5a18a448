"""
Name: Subscribe To Plan Use Case

Responsibilities:
  - Pricing-page flow: login required -> same tier short-circuit ->
    FREE: create subscription directly / paid: provider checkout
  - Relay the checkout callback to /payments/verify
  - Force an entitlement refresh once the server-side plan changed

Collaborators:
  - application.session_store / application.entitlement_store
  - infrastructure.api.billing (SubscriptionsApi, PaymentsApi)
  - domain.ports.CheckoutProvider / Navigator

Notes:
  - Direct checkout variant: the subscription is created server-side after
    a verified payment, not before.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pydantic import ValidationError

from ...crosscutting.error_messages import get_error_message
from ...crosscutting.exceptions import CheckoutDismissedError, LeaveMarkerError
from ...crosscutting.logger import logger
from ...domain.ports import CheckoutOrder, CheckoutProvider, Navigator
from ...infrastructure.api.billing import PaymentsApi, SubscriptionsApi
from ...infrastructure.api.schemas import (
    BillingCycle,
    PaymentInitiateRequest,
    PaymentOrder,
    PaymentVerifyRequest,
    Plan,
    SubscriptionRequest,
)
from ..entitlement_store import EntitlementStore
from ..session_store import SessionStore

ALREADY_ON_PLAN_MESSAGE = "You are already on this plan"
FREE_SUBSCRIBED_MESSAGE = "Successfully subscribed to Free plan!"
PAYMENT_SUCCESS_MESSAGE = "Payment successful! Subscription activated."
PAYMENT_FAILED_MESSAGE = "Payment verification failed"
CHECKOUT_DISMISSED_MESSAGE = "Payment cancelled"
SUBSCRIBE_FAILED_MESSAGE = "Failed to subscribe"


class SubscribeOutcome(str, Enum):
    LOGIN_REQUIRED = "login_required"
    ALREADY_ON_PLAN = "already_on_plan"
    SUBSCRIBED_FREE = "subscribed_free"
    PAYMENT_VERIFIED = "payment_verified"
    PAYMENT_FAILED = "payment_failed"
    CHECKOUT_DISMISSED = "checkout_dismissed"
    FAILED = "failed"


@dataclass(frozen=True)
class CheckoutPaths:
    login: str = "/login"
    dashboard: str = "/dashboard"
    payment_success: str = "/payment/success"
    payment_cancel: str = "/payment/cancel"


@dataclass(frozen=True)
class SubscribeInput:
    plan: Plan
    billing_cycle: BillingCycle = BillingCycle.MONTHLY


@dataclass(frozen=True)
class SubscribeResult:
    outcome: SubscribeOutcome
    message: str | None = None
    redirect_to: str | None = None


def _format_rupees(paise: int) -> str:
    if paise % 100:
        return f"{paise / 100:,.2f}"
    return f"{paise // 100:,}"


def describe_order(plan: Plan, order: PaymentOrder, billing_cycle: BillingCycle) -> str:
    """Línea de detalle del checkout, p.ej. "Pro - 12 employees × ₹50/month"."""
    if order.employee_count is None or order.price_per_employee is None:
        return plan.name
    plural = "s" if order.employee_count > 1 else ""
    period = "year" if billing_cycle is BillingCycle.YEARLY else "month"
    return (
        f"{plan.name} - {order.employee_count} employee{plural} × "
        f"₹{_format_rupees(order.price_per_employee)}/{period}"
    )


class SubscribeToPlanUseCase:
    """R: Move the caller's company onto the selected plan."""

    def __init__(
        self,
        session: SessionStore,
        entitlements: EntitlementStore,
        subscriptions_api: SubscriptionsApi,
        payments_api: PaymentsApi,
        checkout: CheckoutProvider,
        navigator: Navigator,
        *,
        paths: CheckoutPaths | None = None,
        brand_name: str = "LeaveMarker",
        theme_color: str | None = None,
    ):
        self.session = session
        self.entitlements = entitlements
        self.subscriptions_api = subscriptions_api
        self.payments_api = payments_api
        self.checkout = checkout
        self.navigator = navigator
        self.paths = paths or CheckoutPaths()
        self.brand_name = brand_name
        self.theme_color = theme_color

    def _finish(self, outcome: SubscribeOutcome, message: str | None, path: str | None):
        if path:
            self.navigator.navigate(path)
        return SubscribeResult(outcome=outcome, message=message, redirect_to=path)

    async def execute(self, input_data: SubscribeInput) -> SubscribeResult:
        if self.session.identity is None:
            return self._finish(SubscribeOutcome.LOGIN_REQUIRED, None, self.paths.login)

        current = self.entitlements.snapshot
        # El snapshot FREE de respaldo no es una suscripción real.
        if (
            current is not None
            and current.has_active_subscription
            and current.tier.value == input_data.plan.tier.upper()
        ):
            return SubscribeResult(
                outcome=SubscribeOutcome.ALREADY_ON_PLAN, message=ALREADY_ON_PLAN_MESSAGE
            )

        try:
            if input_data.plan.is_free:
                return await self._subscribe_free(input_data)
            return await self._subscribe_paid(input_data)
        except LeaveMarkerError as exc:
            logger.warning(
                "subscription failed",
                extra={"plan_id": input_data.plan.id, "error_type": type(exc).__name__},
            )
            return SubscribeResult(
                outcome=SubscribeOutcome.FAILED,
                message=get_error_message(exc, SUBSCRIBE_FAILED_MESSAGE),
            )

    async def _subscribe_free(self, input_data: SubscribeInput) -> SubscribeResult:
        envelope = await self.subscriptions_api.create(
            SubscriptionRequest(
                plan_id=input_data.plan.id,
                billing_cycle=input_data.billing_cycle,
                auto_renew=True,
            )
        )
        envelope.unwrap(SUBSCRIBE_FAILED_MESSAGE)
        await self.entitlements.refresh()
        return self._finish(
            SubscribeOutcome.SUBSCRIBED_FREE, FREE_SUBSCRIBED_MESSAGE, self.paths.dashboard
        )

    async def _subscribe_paid(self, input_data: SubscribeInput) -> SubscribeResult:
        envelope = await self.payments_api.initiate(
            PaymentInitiateRequest(
                plan_id=input_data.plan.id, billing_cycle=input_data.billing_cycle
            )
        )
        data = envelope.unwrap(SUBSCRIBE_FAILED_MESSAGE)
        try:
            order = PaymentOrder.model_validate(data)
        except ValidationError as exc:
            logger.warning("unexpected payment order payload", extra={"error": str(exc)})
            return SubscribeResult(
                outcome=SubscribeOutcome.FAILED, message=SUBSCRIBE_FAILED_MESSAGE
            )

        try:
            result = await self.checkout.create_checkout(
                CheckoutOrder(
                    key_id=order.key_id,
                    order_id=order.order_id,
                    amount=order.amount,
                    currency=order.currency,
                    name=self.brand_name,
                    description=describe_order(
                        input_data.plan, order, input_data.billing_cycle
                    ),
                    prefill_name=order.company_name,
                    prefill_email=order.company_email,
                    theme_color=self.theme_color,
                )
            )
        except CheckoutDismissedError:
            return SubscribeResult(
                outcome=SubscribeOutcome.CHECKOUT_DISMISSED,
                message=CHECKOUT_DISMISSED_MESSAGE,
            )

        try:
            verified = await self.payments_api.verify(
                PaymentVerifyRequest(
                    provider_order_id=result.provider_order_id,
                    provider_payment_id=result.provider_payment_id,
                    provider_signature=result.provider_signature,
                )
            )
        except LeaveMarkerError as exc:
            logger.warning(
                "payment verification failed",
                extra={"order_id": order.order_id, "error_type": type(exc).__name__},
            )
            verified = None

        if verified is None or not verified.success:
            return self._finish(
                SubscribeOutcome.PAYMENT_FAILED,
                PAYMENT_FAILED_MESSAGE,
                self.paths.payment_cancel,
            )

        await self.entitlements.refresh()
        return self._finish(
            SubscribeOutcome.PAYMENT_VERIFIED,
            PAYMENT_SUCCESS_MESSAGE,
            self.paths.payment_success,
        )
