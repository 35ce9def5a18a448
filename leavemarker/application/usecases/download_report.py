"""
Name: Download Report Use Case

Responsibilities:
  - Gate report downloads on the advancedReports entitlement
  - Default the date range to the last 30 days (attendance / leave usage)
  - Fetch the report bytes and hand them to the download sink under
    `{type}-report-{UTC ISO date}.{xlsx|csv}`

Collaborators:
  - infrastructure.api.reports.ReportsApi
  - application.feature_gate.FeatureGate
  - domain.ports.DownloadSink
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from pathlib import Path
from typing import Callable

from ...crosscutting.error_messages import get_error_message
from ...crosscutting.exceptions import EntitlementRequiredError, LeaveMarkerError
from ...crosscutting.logger import logger
from ...domain.entitlements import Feature
from ...domain.ports import DownloadSink
from ...infrastructure.api.reports import ReportFormat, ReportsApi, ReportType
from ..feature_gate import FeatureGate

DOWNLOAD_FAILED_MESSAGE = "Failed to download report"


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def report_filename(
    report_type: ReportType, report_format: ReportFormat, on: date
) -> str:
    """R: Suggested filename, e.g. attendance-report-2026-03-01.xlsx."""
    return f"{report_type.value}-report-{on.isoformat()}.{report_format.extension}"


@dataclass(frozen=True)
class DownloadReportInput:
    report_type: ReportType
    report_format: ReportFormat
    start_date: date | None = None
    end_date: date | None = None


@dataclass(frozen=True)
class DownloadReportResult:
    filename: str | None = None
    path: Path | None = None
    error: str | None = None
    upgrade_path: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class DownloadReportUseCase:
    """R: Gated report download into a local file."""

    def __init__(
        self,
        reports_api: ReportsApi,
        gate: FeatureGate,
        sink: DownloadSink,
        *,
        today: Callable[[], date] = utc_today,
        default_range_days: int = 30,
    ):
        self.reports_api = reports_api
        self.gate = gate
        self.sink = sink
        self.today = today
        self.default_range_days = default_range_days

    def default_range(self, today: date | None = None) -> tuple[date, date]:
        end = today or self.today()
        return end - timedelta(days=self.default_range_days), end

    async def execute(self, input_data: DownloadReportInput) -> DownloadReportResult:
        try:
            self.gate.require(Feature.ADVANCED_REPORTS)
        except EntitlementRequiredError as exc:
            return DownloadReportResult(error=exc.message, upgrade_path=exc.upgrade_path)

        # Una sola lectura del reloj: rango y nombre del archivo coinciden.
        today = self.today()
        start_date, end_date = input_data.start_date, input_data.end_date
        if input_data.report_type.needs_date_range and (
            start_date is None or end_date is None
        ):
            default_start, default_end = self.default_range(today)
            start_date = start_date or default_start
            end_date = end_date or default_end

        try:
            content = await self.reports_api.download(
                input_data.report_type,
                input_data.report_format,
                start_date=start_date,
                end_date=end_date,
            )
        except LeaveMarkerError as exc:
            logger.warning(
                "report download failed",
                extra={
                    "report_type": input_data.report_type.value,
                    "error_type": type(exc).__name__,
                },
            )
            return DownloadReportResult(
                error=get_error_message(exc, DOWNLOAD_FAILED_MESSAGE)
            )

        filename = report_filename(
            input_data.report_type, input_data.report_format, today
        )
        try:
            path = self.sink.save(filename, content)
        except OSError as exc:
            logger.warning(
                "report could not be saved",
                extra={"report_file": filename, "error": str(exc)},
            )
            return DownloadReportResult(filename=filename, error=DOWNLOAD_FAILED_MESSAGE)
        return DownloadReportResult(filename=filename, path=path)
