"""
Name: Leave applications resource

Responsibilities:
  - Apply / cancel / list leave requests
  - Two-stage approval (manager, then HR) through one decision body:
    approve -> {approved: true, reason: null},
    reject  -> {approved: false, reason: <comments>}
"""

from __future__ import annotations

from datetime import date
from typing import Any, Mapping

from ..http.client import ApiClient
from ..http.envelope import ApiEnvelope
from .schemas import ApprovalDecision

_MANAGER = "manager"
_HR = "hr"


class LeaveApplicationsApi:
    def __init__(self, client: ApiClient) -> None:
        self._api = client

    async def apply(self, data: Mapping[str, Any]) -> ApiEnvelope:
        return await self._api.post("/leave-applications", json=dict(data))

    async def my_applications(self) -> ApiEnvelope:
        return await self._api.get("/leave-applications/my-leaves")

    async def my_pending_count(self) -> ApiEnvelope:
        return await self._api.get("/leave-applications/my-leaves/pending/count")

    async def get(self, application_id: int) -> ApiEnvelope:
        return await self._api.get(f"/leave-applications/{application_id}")

    async def pending_manager_approvals(self) -> ApiEnvelope:
        return await self._api.get(f"/leave-applications/pending-approvals/{_MANAGER}")

    async def pending_hr_approvals(self) -> ApiEnvelope:
        return await self._api.get(f"/leave-applications/pending-approvals/{_HR}")

    async def list_by_date_range(self, start_date: date, end_date: date) -> ApiEnvelope:
        return await self._api.get(
            "/leave-applications/date-range",
            params={"startDate": start_date.isoformat(), "endDate": end_date.isoformat()},
        )

    async def _decide(
        self, application_id: int, stage: str, decision: ApprovalDecision
    ) -> ApiEnvelope:
        return await self._api.post(
            f"/leave-applications/{application_id}/approve/{stage}",
            json=decision.to_body(),
        )

    async def manager_approve(self, application_id: int) -> ApiEnvelope:
        return await self._decide(
            application_id, _MANAGER, ApprovalDecision(approved=True)
        )

    async def manager_reject(self, application_id: int, comments: str) -> ApiEnvelope:
        return await self._decide(
            application_id, _MANAGER, ApprovalDecision(approved=False, reason=comments)
        )

    async def hr_approve(self, application_id: int) -> ApiEnvelope:
        return await self._decide(application_id, _HR, ApprovalDecision(approved=True))

    async def hr_reject(self, application_id: int, comments: str) -> ApiEnvelope:
        return await self._decide(
            application_id, _HR, ApprovalDecision(approved=False, reason=comments)
        )

    async def cancel(self, application_id: int) -> ApiEnvelope:
        return await self._api.post(f"/leave-applications/{application_id}/cancel")
