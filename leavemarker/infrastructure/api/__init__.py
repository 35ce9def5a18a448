"""
Name: REST resource facade

Responsibilities:
  - Group every per-resource wrapper over one shared ApiClient

Collaborators:
  - container.build_container (creates one LeaveMarkerApi per client)
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable

from ..http.client import ApiClient
from .attendance import AttendanceApi
from .auth import AuthApi
from .billing import PaymentsApi, PlansApi, SubscriptionsApi
from .contact import ContactApi
from .employees import EmployeesApi
from .holidays import HolidaysApi
from .leave_applications import LeaveApplicationsApi
from .leave_balance import LeaveBalanceApi
from .leave_policies import LeavePoliciesApi
from .reports import ReportFormat, ReportsApi, ReportType


class LeaveMarkerApi:
    def __init__(
        self, client: ApiClient, *, clock: Callable[[], datetime] = datetime.now
    ) -> None:
        self.client = client
        self.auth = AuthApi(client)
        self.employees = EmployeesApi(client)
        self.leave_policies = LeavePoliciesApi(client)
        self.holidays = HolidaysApi(client)
        self.leave_applications = LeaveApplicationsApi(client)
        self.attendance = AttendanceApi(client, clock=clock)
        self.leave_balance = LeaveBalanceApi(client)
        self.reports = ReportsApi(client)
        self.plans = PlansApi(client)
        self.subscriptions = SubscriptionsApi(client)
        self.payments = PaymentsApi(client)
        self.contact = ContactApi(client)


__all__ = [
    "AttendanceApi",
    "AuthApi",
    "ContactApi",
    "EmployeesApi",
    "HolidaysApi",
    "LeaveApplicationsApi",
    "LeaveBalanceApi",
    "LeaveMarkerApi",
    "LeavePoliciesApi",
    "PaymentsApi",
    "PlansApi",
    "ReportFormat",
    "ReportType",
    "ReportsApi",
    "SubscriptionsApi",
]
