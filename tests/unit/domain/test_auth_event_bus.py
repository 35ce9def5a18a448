"""
Name: AuthEventBus Tests

Responsibilities:
  - Sync and async handlers receive events in subscription order
  - A failing handler never breaks delivery to the others
  - Unsubscribe stops delivery
"""

from unittest.mock import AsyncMock, Mock

import pytest

from leavemarker.domain.events import AuthenticationLost, AuthEventBus

pytestmark = pytest.mark.unit

EVENT = AuthenticationLost(method="GET", path="/employees")


async def test_delivers_to_sync_and_async_handlers_in_order():
    bus = AuthEventBus()
    received = []

    async def first(event):
        received.append(("first", event))

    def second(event):
        received.append(("second", event))

    bus.subscribe(first)
    bus.subscribe(second)

    await bus.publish(EVENT)

    assert received == [("first", EVENT), ("second", EVENT)]


async def test_failing_handler_is_isolated():
    bus = AuthEventBus()
    broken = Mock(side_effect=RuntimeError("boom"))
    healthy = AsyncMock()
    bus.subscribe(broken)
    bus.subscribe(healthy)

    await bus.publish(EVENT)

    healthy.assert_awaited_once_with(EVENT)


async def test_unsubscribe_stops_delivery():
    bus = AuthEventBus()
    handler = Mock(return_value=None)
    unsubscribe = bus.subscribe(handler)

    unsubscribe()
    unsubscribe()
    await bus.publish(EVENT)

    handler.assert_not_called()


def test_event_defaults_to_401():
    assert EVENT.status_code == 401
