import json
from decimal import Decimal

import pytest

from confirmation.infrastructure.storage import InMemoryStore
from confirmation.config.storage_config import LEDGER_KEY, ORDER_BATCH_KEY
from confirmation.tools.services import metrics
from confirmation.tools.services.adapters.in_memory_adapter import (
    InMemoryDeliveryClient,
    InMemoryNotificationClient,
    InMemoryOrderClient,
    InMemoryRestaurantClient,
)
from confirmation.utils.models import Coordinates, OrderDetail


def order(order_id, restaurant_id="R1", amount="12.50"):
    return OrderDetail(order_id=order_id, restaurant_id=restaurant_id, total_amount=Decimal(amount))


def ledger_value(store):
    raw = store.get(LEDGER_KEY)
    return json.loads(raw) if raw else []


@pytest.fixture(autouse=True)
def _reset_metrics():
    metrics.reset()
    yield
    metrics.reset()


@pytest.fixture
def session_store():
    return InMemoryStore()


@pytest.fixture
def ledger_store():
    return InMemoryStore()


@pytest.fixture
def restaurants():
    return InMemoryRestaurantClient(
        locations={"R1": Coordinates(6.90, 79.80), "R2": Coordinates(6.91, 79.81)},
    )


@pytest.fixture
def orders():
    return InMemoryOrderClient(default=Coordinates(6.95, 79.85))


@pytest.fixture
def deliveries():
    return InMemoryDeliveryClient()


@pytest.fixture
def notifications():
    return InMemoryNotificationClient()


@pytest.fixture
def registry(restaurants, orders, deliveries, notifications, session_store, ledger_store):
    return {
        "restaurants": restaurants,
        "orders": orders,
        "deliveries": deliveries,
        "notifications": notifications,
        "session_store": session_store,
        "ledger_store": ledger_store,
    }


@pytest.fixture
def place_batch(session_store):
    """Write raw order dicts into the session store the way checkout does."""
    def _place(entries):
        session_store.set(ORDER_BATCH_KEY, json.dumps(entries))
    return _place
