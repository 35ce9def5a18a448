"""
============================================================
TARJETA CRC — infrastructure/api/attendance.py
============================================================
Class: AttendanceApi

Responsibilities:
  - Punch in / punch out contra el único endpoint /attendance/punch
    (la dirección la decide `isPunchIn`).
  - Fecha y hora del punch salen del reloj LOCAL del cliente.
  - Consultas propias / de empresa, correcciones y marcado manual.

Collaborators:
  - infrastructure.http.client.ApiClient
  - schemas.PunchRequest / AttendanceCorrectionRequest
============================================================
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Callable, Mapping

from ..http.client import ApiClient
from ..http.envelope import ApiEnvelope
from .schemas import AttendanceCorrectionRequest, PunchRequest, WorkType

Clock = Callable[[], datetime]


def _date_range(start_date: date, end_date: date) -> dict[str, str]:
    return {"startDate": start_date.isoformat(), "endDate": end_date.isoformat()}


class AttendanceApi:
    def __init__(self, client: ApiClient, *, clock: Clock = datetime.now) -> None:
        self._api = client
        self._clock = clock

    def build_punch(self, *, is_punch_in: bool, work_type: WorkType | None) -> PunchRequest:
        now = self._clock()
        return PunchRequest(
            punch_date=now.date(),
            punch_time=now.time().replace(microsecond=0),
            is_punch_in=is_punch_in,
            work_type=work_type,
        )

    async def punch_in(self, work_type: WorkType = WorkType.OFFICE) -> ApiEnvelope:
        body = self.build_punch(is_punch_in=True, work_type=work_type)
        return await self._api.post("/attendance/punch", json=body.to_body())

    async def punch_out(self) -> ApiEnvelope:
        # workType viaja explícitamente como null al salir.
        body = self.build_punch(is_punch_in=False, work_type=None)
        return await self._api.post("/attendance/punch", json=body.to_body())

    async def today(self) -> ApiEnvelope:
        return await self._api.get("/attendance/today")

    async def my_attendance(self) -> ApiEnvelope:
        return await self._api.get("/attendance/my-attendance")

    async def my_attendance_by_date_range(
        self, start_date: date, end_date: date
    ) -> ApiEnvelope:
        return await self._api.get(
            "/attendance/my-attendance/date-range",
            params=_date_range(start_date, end_date),
        )

    async def my_attendance_rate(
        self, *, year: int | None = None, month: int | None = None
    ) -> ApiEnvelope:
        return await self._api.get(
            "/attendance/my-attendance/rate", params={"year": year, "month": month}
        )

    async def company_attendance_by_date_range(
        self, start_date: date, end_date: date
    ) -> ApiEnvelope:
        return await self._api.get(
            "/attendance/date-range", params=_date_range(start_date, end_date)
        )

    async def request_correction(
        self, attendance_id: int, data: AttendanceCorrectionRequest
    ) -> ApiEnvelope:
        return await self._api.post(
            f"/attendance/{attendance_id}/request-correction",
            json=data.to_body(exclude_none=True),
        )

    async def approve_correction(self, correction_id: int) -> ApiEnvelope:
        return await self._api.post(f"/attendance/corrections/{correction_id}/approve")

    async def reject_correction(self, correction_id: int) -> ApiEnvelope:
        return await self._api.post(f"/attendance/corrections/{correction_id}/reject")

    async def pending_corrections(self) -> ApiEnvelope:
        return await self._api.get("/attendance/corrections/pending")

    async def mark_manually(self, data: Mapping[str, Any]) -> ApiEnvelope:
        return await self._api.post("/attendance/mark", json=dict(data))
