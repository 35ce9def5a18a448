"""
============================================================
TARJETA CRC — infrastructure/api/billing.py
============================================================
Class: PlansApi, SubscriptionsApi, PaymentsApi

Responsibilities:
  - Catálogo de planes (lectura pública + CRUD de super admin).
  - Suscripción de la empresa y snapshot de features/límites.
  - Pagos: iniciar orden del proveedor, verificar callback, reintentar.

Collaborators:
  - application.entitlement_store (SubscriptionsApi.features)
  - application.usecases.subscribe_to_plan
============================================================
"""

from __future__ import annotations

from typing import Any, Mapping

from ..http.client import ApiClient
from ..http.envelope import ApiEnvelope
from .schemas import (
    PaymentInitiateRequest,
    PaymentVerifyRequest,
    SubscriptionRequest,
)


class PlansApi:
    def __init__(self, client: ApiClient) -> None:
        self._api = client

    async def list_all(self) -> ApiEnvelope:
        return await self._api.get("/plans")

    async def list_active(self) -> ApiEnvelope:
        return await self._api.get("/plans/active")

    async def get(self, plan_id: int) -> ApiEnvelope:
        return await self._api.get(f"/plans/{plan_id}")

    async def create(self, data: Mapping[str, Any]) -> ApiEnvelope:
        return await self._api.post("/plans", json=dict(data))

    async def update(self, plan_id: int, data: Mapping[str, Any]) -> ApiEnvelope:
        return await self._api.put(f"/plans/{plan_id}", json=dict(data))

    async def delete(self, plan_id: int) -> ApiEnvelope:
        return await self._api.delete(f"/plans/{plan_id}")


class SubscriptionsApi:
    def __init__(self, client: ApiClient) -> None:
        self._api = client

    async def active(self) -> ApiEnvelope:
        return await self._api.get("/subscriptions/active")

    async def company_subscriptions(self) -> ApiEnvelope:
        return await self._api.get("/subscriptions")

    async def features(self) -> ApiEnvelope:
        return await self._api.get("/subscriptions/features")

    async def create(self, data: SubscriptionRequest) -> ApiEnvelope:
        return await self._api.post("/subscriptions", json=data.to_body())

    async def update(self, subscription_id: int, data: Mapping[str, Any]) -> ApiEnvelope:
        return await self._api.put(f"/subscriptions/{subscription_id}", json=dict(data))

    async def cancel(self, subscription_id: int) -> ApiEnvelope:
        return await self._api.post(f"/subscriptions/{subscription_id}/cancel")


class PaymentsApi:
    def __init__(self, client: ApiClient) -> None:
        self._api = client

    async def company_payments(self) -> ApiEnvelope:
        return await self._api.get("/payments")

    async def get(self, payment_id: int) -> ApiEnvelope:
        return await self._api.get(f"/payments/{payment_id}")

    async def initiate(self, data: PaymentInitiateRequest) -> ApiEnvelope:
        return await self._api.post("/payments/initiate", json=data.to_body())

    async def verify(self, data: PaymentVerifyRequest) -> ApiEnvelope:
        return await self._api.post("/payments/verify", json=data.to_body())

    async def retry(self, payment_id: int) -> ApiEnvelope:
        return await self._api.post(f"/payments/{payment_id}/retry")
