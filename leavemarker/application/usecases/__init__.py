"""
Use Cases Layer

    from leavemarker.application.usecases import DownloadReportUseCase
"""

from .download_report import (
    DownloadReportInput,
    DownloadReportResult,
    DownloadReportUseCase,
    report_filename,
)
from .subscribe_to_plan import (
    CheckoutPaths,
    SubscribeInput,
    SubscribeOutcome,
    SubscribeResult,
    SubscribeToPlanUseCase,
)

__all__ = [
    "CheckoutPaths",
    "DownloadReportInput",
    "DownloadReportResult",
    "DownloadReportUseCase",
    "SubscribeInput",
    "SubscribeOutcome",
    "SubscribeResult",
    "SubscribeToPlanUseCase",
    "report_filename",
]
