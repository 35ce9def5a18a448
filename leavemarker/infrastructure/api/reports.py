"""
Name: Reports resource

Responsibilities:
  - Fetch report files as raw bytes (excel / csv)
  - Build the per-report query (leave-balance takes no date range)

Notes:
  - Entitlement gating and file naming live in
    application.usecases.download_report.
"""

from __future__ import annotations

from datetime import date
from enum import Enum

from ..http.client import ApiClient


class ReportType(str, Enum):
    LEAVE_BALANCE = "leave-balance"
    ATTENDANCE = "attendance"
    LEAVE_USAGE = "leave-usage"

    @property
    def needs_date_range(self) -> bool:
        return self is not ReportType.LEAVE_BALANCE


class ReportFormat(str, Enum):
    EXCEL = "excel"
    CSV = "csv"

    @property
    def extension(self) -> str:
        return "xlsx" if self is ReportFormat.EXCEL else "csv"


class ReportsApi:
    def __init__(self, client: ApiClient) -> None:
        self._api = client

    async def download(
        self,
        report_type: ReportType,
        report_format: ReportFormat,
        *,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> bytes:
        params = None
        if report_type.needs_date_range:
            if start_date is None or end_date is None:
                raise ValueError(f"{report_type.value} report requires a date range")
            params = {
                "startDate": start_date.isoformat(),
                "endDate": end_date.isoformat(),
            }
        return await self._api.download(
            f"/reports/{report_type.value}/{report_format.value}", params=params
        )
