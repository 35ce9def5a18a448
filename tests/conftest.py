"""
Name: Pytest Configuration and Shared Fixtures

Responsibilities:
  - Provide reusable test fixtures (settings, navigator, storages)
  - Fake the LeaveMarker backend behind httpx.MockTransport
  - Build an isolated ClientContainer per test

Collaborators:
  - pytest / pytest-asyncio: Test framework (asyncio_mode = auto)
  - httpx.MockTransport: In-process fake backend
  - leavemarker.container: Composition root under test

Notes:
  - Every test gets its own stores: nothing is shared between tests
  - FakeBackend routes are keyed by (METHOD, path without the /api prefix)
"""

from __future__ import annotations

import json
import sys
from datetime import date, datetime
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from leavemarker.crosscutting import config as app_config  # noqa: E402

app_config.Settings.model_config["env_file"] = None

from leavemarker.container import ClientContainer, build_container  # noqa: E402
from leavemarker.crosscutting.config import Settings  # noqa: E402
from leavemarker.crosscutting.exceptions import CheckoutDismissedError  # noqa: E402
from leavemarker.domain.ports import CheckoutOrder, CheckoutResult  # noqa: E402
from leavemarker.infrastructure.navigation import InMemoryNavigator  # noqa: E402
from leavemarker.infrastructure.storage import InMemoryStorage  # noqa: E402

API_PREFIX = "/api"

Responder = Callable[[httpx.Request], httpx.Response]


def pytest_configure(config) -> None:
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )


# ============================================================================
# Fake backend
# ============================================================================


def envelope(
    data: Any = None, *, success: bool = True, message: str | None = None
) -> dict[str, Any]:
    """R: Backend response wrapper."""
    body: dict[str, Any] = {"success": success}
    if message is not None:
        body["message"] = message
    if data is not None:
        body["data"] = data
    return body


def reply(
    status_code: int = 200,
    *,
    json_body: Any = None,
    content: bytes | None = None,
    headers: dict[str, str] | None = None,
) -> Responder:
    """R: Build a fresh httpx.Response per call."""

    def _respond(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            status_code, json=json_body, content=content, headers=headers
        )

    return _respond


def ok(data: Any = None, message: str | None = None) -> Responder:
    return reply(200, json_body=envelope(data, message=message))


def fail(status_code: int, message: str | None = None, data: Any = None) -> Responder:
    return reply(
        status_code, json_body=envelope(data, success=False, message=message)
    )


class FakeBackend:
    """
    R: Scriptable backend.

    Each route holds a queue of responders (or exceptions to raise); the
    last one keeps answering once the queue is drained.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], list[Responder | Exception]] = {}
        self.requests: list[httpx.Request] = []

    def on(self, method: str, path: str, *responses: Responder | Exception) -> "FakeBackend":
        self.routes[(method.upper(), API_PREFIX + path)] = list(responses)
        return self

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        queue = self.routes.get((request.method, request.url.path))
        if not queue:
            return httpx.Response(
                404, json=envelope(success=False, message="Not found")
            )
        item = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(item, Exception):
            raise item
        return item(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        target = API_PREFIX + path
        return [
            r for r in self.requests if r.method == method.upper() and r.url.path == target
        ]

    def bodies(self, method: str, path: str) -> list[Any]:
        return [json.loads(r.content) for r in self.calls(method, path)]


class FakeCheckout:
    """R: Stand-in for the provider widget."""

    def __init__(
        self,
        result: CheckoutResult | None = None,
        *,
        dismiss: bool = False,
    ) -> None:
        self.result = result or CheckoutResult(
            provider_order_id="order_1",
            provider_payment_id="pay_1",
            provider_signature="sig_1",
        )
        self.dismiss = dismiss
        self.orders: list[CheckoutOrder] = []

    async def create_checkout(self, order: CheckoutOrder) -> CheckoutResult:
        self.orders.append(order)
        if self.dismiss:
            raise CheckoutDismissedError("Checkout closed by user")
        return self.result


# ============================================================================
# Payload factories
# ============================================================================


def login_payload(**overrides: Any) -> dict[str, Any]:
    data = {
        "accessToken": "jwt-token",
        "userId": 7,
        "fullName": "Ada Lovelace",
        "role": "HR_ADMIN",
        "companyId": 3,
    }
    data.update(overrides)
    return data


def session_payload(**overrides: Any) -> dict[str, Any]:
    data = {
        "id": 7,
        "email": "ada@acme.test",
        "fullName": "Ada Lovelace",
        "role": "HR_ADMIN",
        "companyId": 3,
    }
    data.update(overrides)
    return data


def features_payload(**overrides: Any) -> dict[str, Any]:
    data = {
        "hasActiveSubscription": True,
        "subscriptionId": 11,
        "isPaid": True,
        "isValid": True,
        "tier": "PRO",
        "planName": "Pro",
        "maxEmployees": 50,
        "currentEmployees": 12,
        "remainingEmployeeSlots": 38,
        "maxLeavePolicies": 20,
        "currentLeavePolicies": 4,
        "remainingLeavePolicySlots": 16,
        "attendanceTracking": True,
        "advancedReports": True,
        "attendanceRateAnalytics": True,
        "customLeaveTypes": True,
        "apiAccess": False,
        "prioritySupport": False,
        "currentPeriodEnd": "2026-12-31T23:59:59",
    }
    data.update(overrides)
    return data


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """R: Test settings (no real backend, no retry delays)."""
    return Settings(
        api_base_url="http://testserver/api",
        app_env="test",
        retry_base_delay_seconds=0,
        retry_max_delay_seconds=0,
        download_dir=str(tmp_path / "downloads"),
    )


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def navigator() -> InMemoryNavigator:
    return InMemoryNavigator("/")


@pytest.fixture
def session_storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def local_storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def checkout() -> FakeCheckout:
    return FakeCheckout()


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    return lambda: datetime(2026, 3, 1, 9, 30, 15, 123456)


@pytest.fixture
def fixed_today() -> Callable[[], date]:
    return lambda: date(2026, 3, 1)


@pytest.fixture
async def make_container(
    settings: Settings,
    backend: FakeBackend,
    navigator: InMemoryNavigator,
    session_storage: InMemoryStorage,
    local_storage: InMemoryStorage,
    checkout: FakeCheckout,
    fixed_clock,
    fixed_today,
):
    """R: Factory for containers sharing this test's fakes."""
    built: list[ClientContainer] = []

    def _make(**overrides: Any) -> ClientContainer:
        kwargs: dict[str, Any] = dict(
            navigator=navigator,
            session_storage=session_storage,
            local_storage=local_storage,
            checkout=checkout,
            transport=backend.transport,
            clock=fixed_clock,
            today=fixed_today,
        )
        container_settings = overrides.pop("settings", settings)
        kwargs.update(overrides)
        container = build_container(container_settings, **kwargs)
        built.append(container)
        return container

    yield _make
    for c in built:
        await c.client.aclose()


@pytest.fixture
def container(make_container) -> ClientContainer:
    """R: Wired, not yet started, client."""
    return make_container()
