import json

import pytest

from confirmation.audit import InMemoryAuditStore
from confirmation.config.storage_config import LEDGER_KEY, ORDER_BATCH_KEY
from confirmation.orchestrators import ConfirmationOrchestrator, Registry
from confirmation.tools.services.exceptions import ServiceError
from confirmation.infrastructure.storage import InMemoryStore
from confirmation.utils.models import ALREADY_CREATED, DELIVERY_UNRECORDED, LEDGER_UNAVAILABLE
from conftest import ledger_value

BATCH = [
    {"orderId": "A", "restaurantId": "R1", "totalAmount": 12.50},
    {"orderId": "B", "restaurantId": "R2", "totalAmount": 8.00},
    {"orderId": "C", "restaurantId": "R1", "totalAmount": 3.75},
]


def test_run_notifies_once_and_dispatches_all(registry, place_batch, notifications, deliveries, ledger_store):
    place_batch(BATCH)
    result = ConfirmationOrchestrator(registry).run("jane@example.com")
    assert result.notification.sent
    assert len(notifications.calls) == 1
    assert notifications.calls[0]["orderId"] == "C"
    assert [c["orderId"] for c in deliveries.calls] == ["A", "B", "C"]
    assert [(s.order_id, s.success) for s in result.statuses] == [("A", True), ("B", True), ("C", True)]
    assert ledger_value(ledger_store) == ["A", "B", "C"]


def test_single_order_scenario(registry, place_batch, ledger_store):
    place_batch([{"orderId": "A", "restaurantId": "R1", "totalAmount": 12.50}])
    result = ConfirmationOrchestrator(registry).run("jane@example.com")
    assert [(s.order_id, s.success) for s in result.statuses] == [("A", True)]
    assert ledger_value(ledger_store) == ["A"]


def test_server_error_scenario_then_reload(registry, place_batch, deliveries, ledger_store):
    place_batch([{"orderId": "A", "restaurantId": "R1", "totalAmount": 12.50}])
    deliveries.failures["A"] = ServiceError("deliveries create_delivery: HTTP 500", status_code=500)
    result = ConfirmationOrchestrator(registry).run("jane@example.com")
    assert [(s.order_id, s.success) for s in result.statuses] == [("A", False)]
    assert ledger_value(ledger_store) == []

    deliveries.failures.clear()
    result = ConfirmationOrchestrator(registry).run("jane@example.com")
    assert [(s.order_id, s.success) for s in result.statuses] == [("A", True)]
    assert [c["orderId"] for c in deliveries.calls] == ["A", "A"]


def test_reload_reports_already_created(registry, place_batch, deliveries):
    place_batch(BATCH[:2])
    ConfirmationOrchestrator(registry).run("jane@example.com")
    result = ConfirmationOrchestrator(registry).run("jane@example.com")
    assert result.live_statuses == []
    assert [(s.order_id, s.message) for s in result.statuses] == [("A", ALREADY_CREATED), ("B", ALREADY_CREATED)]
    assert len(deliveries.calls) == 2


def test_same_instance_does_not_resend_notification(registry, place_batch, notifications):
    place_batch(BATCH)
    orch = ConfirmationOrchestrator(registry)
    orch.run("jane@example.com")
    second = orch.run("jane@example.com")
    assert second.notification.skipped
    assert len(notifications.calls) == 1
    # live results from the first run are still shown
    assert all(s.success for s in orch.statuses())


def test_notification_failure_does_not_block_dispatch(registry, place_batch, notifications, deliveries):
    place_batch(BATCH)
    notifications.fail_with = ServiceError("notifications: HTTP 503", status_code=503)
    result = ConfirmationOrchestrator(registry).run("jane@example.com")
    assert result.notification.error
    assert len(deliveries.calls) == 3


def test_explicit_batch_argument(registry, deliveries):
    from conftest import order

    result = ConfirmationOrchestrator(registry).run("jane@example.com", batch=[order("Q")])
    assert [s.order_id for s in result.statuses] == ["Q"]
    assert deliveries.calls[0]["orderId"] == "Q"


def test_empty_session_is_noop(registry, notifications, deliveries):
    result = ConfirmationOrchestrator(registry).run("jane@example.com")
    assert result.notification.skipped
    assert result.statuses == []
    assert notifications.calls == [] and deliveries.calls == []


def test_end_session_keeps_ledger(registry, place_batch, session_store, ledger_store):
    place_batch(BATCH[:1])
    orch = ConfirmationOrchestrator(registry)
    orch.run("jane@example.com")
    orch.end_session()
    assert session_store.get(ORDER_BATCH_KEY) is None
    assert json.loads(ledger_store.get(LEDGER_KEY)) == ["A"]
    assert orch.statuses() == []


def test_audit_store_records_runs_and_order_failures(registry, place_batch, deliveries):
    audit = InMemoryAuditStore()
    place_batch(BATCH[:1])
    ConfirmationOrchestrator({**registry, "audit": audit}).run("jane@example.com")
    assert len(audit.runs) == 1
    assert audit.runs[0]["succeeded"] == 1 and audit.runs[0]["failed"] == []
    assert audit.runs[0]["statuses"][0]["orderId"] == "A"

    place_batch(BATCH[1:2])
    deliveries.failures["B"] = ServiceError("deliveries create_delivery: HTTP 500", status_code=500)
    ConfirmationOrchestrator({**registry, "audit": audit}).run("jane@example.com")
    ConfirmationOrchestrator({**registry, "audit": audit}).run("jane@example.com")
    assert audit.runs[-1]["failed"] == ["B"]
    history = audit.failures_for("B")
    assert len(history) == 2
    assert history[0]["run_id"] != history[1]["run_id"]
    assert "order B" in history[0]["message"]
    assert audit.failures_for("A") == []


def test_accepts_registry_object(registry, place_batch):
    reg = Registry()
    for name, obj in registry.items():
        reg.register(name, obj)
    place_batch(BATCH[:1])
    assert ConfirmationOrchestrator(reg).run("jane@example.com").statuses[0].success


def test_missing_collaborator_raises(registry):
    del registry["deliveries"]
    with pytest.raises(RuntimeError, match="deliveries"):
        ConfirmationOrchestrator(registry)


class FlakyStore(InMemoryStore):
    """Durable store that can be switched to fail reads and/or writes."""

    def __init__(self, fail_get=False, fail_set=False):
        super().__init__()
        self.fail_get = fail_get
        self.fail_set = fail_set

    def get(self, key):
        if self.fail_get:
            raise ConnectionError("ledger store down")
        return super().get(key)

    def set(self, key, value):
        if self.fail_set:
            raise ConnectionError("ledger store down")
        super().set(key, value)


def test_ledger_write_failure_does_not_stop_the_batch(registry, place_batch, deliveries):
    store = FlakyStore(fail_set=True)
    place_batch(BATCH[:2])
    result = ConfirmationOrchestrator({**registry, "ledger_store": store}).run("jane@example.com")
    assert [c["orderId"] for c in deliveries.calls] == ["A", "B"]
    assert [s.order_id for s in result.statuses] == ["A", "B"]
    assert all(s.message == DELIVERY_UNRECORDED for s in result.statuses)
    assert store.get(LEDGER_KEY) is None

    # store back up: both orders are still unrecorded, so the next view re-dispatches them
    store.fail_set = False
    ConfirmationOrchestrator({**registry, "ledger_store": store}).run("jane@example.com")
    assert [c["orderId"] for c in deliveries.calls] == ["A", "B", "A", "B"]
    assert json.loads(store.get(LEDGER_KEY)) == ["A", "B"]


def test_ledger_read_failure_dispatches_nothing(registry, place_batch, deliveries, notifications):
    place_batch(BATCH[:2])
    result = ConfirmationOrchestrator({**registry, "ledger_store": FlakyStore(fail_get=True)}).run("jane@example.com")
    assert deliveries.calls == []
    assert [(s.order_id, s.success, s.message) for s in result.statuses] == [
        ("A", False, LEDGER_UNAVAILABLE),
        ("B", False, LEDGER_UNAVAILABLE),
    ]
    assert result.notification.sent
    assert len(notifications.calls) == 1


def test_session_store_failure_reads_as_no_orders(registry, deliveries):
    result = ConfirmationOrchestrator({**registry, "session_store": FlakyStore(fail_get=True)}).run("jane@example.com")
    assert result.statuses == []
    assert deliveries.calls == []


def test_registry_rejects_none_and_reports_missing():
    reg = Registry({"orders": object()})
    with pytest.raises(ValueError):
        reg.register("audit", None)
    assert "deliveries" in reg.missing()
    assert "orders" not in reg.missing()
