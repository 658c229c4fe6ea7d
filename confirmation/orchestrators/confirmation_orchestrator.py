import logging
import traceback
from typing import Any, Dict, List, Optional, Sequence, Union

from confirmation.audit import summarize
from confirmation.operational import (
    ConfirmationNotifier,
    DispatchCoordinator,
    IdempotencyLedger,
    aggregate_statuses,
    clear_order_batch,
    read_order_batch,
)
from confirmation.utils.models import LEDGER_UNAVAILABLE, ConfirmationResult, DeliveryStatus, OrderDetail
from platform_monitoring import log_event
from .base_orchestrator import BaseOrchestrator
from .registry import Registry


class ConfirmationOrchestrator(BaseOrchestrator):
    """Runs once when the order-confirmation view opens.

    Registry entries:
      restaurants, orders, deliveries, notifications -> service clients
      ledger_store  -> durable KeyValueStore holding the ledger
      session_store -> ephemeral KeyValueStore holding the order batch
      audit         -> optional AuditStore (run summaries, per-order failures)

    One instance corresponds to one mounted confirmation view: the notifier's
    "already sent" flag and the live dispatch results belong to it.
    """

    def __init__(self, registry: Union[Registry, Dict[str, Any], None] = None):
        super().__init__(registry)
        missing = self.registry.missing()
        if missing:
            raise RuntimeError(f"not available in registry: {', '.join(missing)}")
        self.session_store = self.require("session_store")
        self.ledger = IdempotencyLedger(self.require("ledger_store"))
        self.notifier = ConfirmationNotifier(self.require("notifications"))
        self.coordinator = DispatchCoordinator(
            self.require("restaurants"),
            self.require("orders"),
            self.require("deliveries"),
            self.ledger,
        )
        self.audit = self.get_collaborator("audit")
        self.batch: List[OrderDetail] = []
        self.live_statuses: List[DeliveryStatus] = []

    def run(self, email: Optional[str], batch: Optional[Sequence[OrderDetail]] = None) -> ConfirmationResult:
        run_id = self.make_run_id("confirm")
        self.batch = list(batch) if batch is not None else read_order_batch(self.session_store)
        try:
            self.ledger.load()
            ledger_ok = True
        except Exception as e:
            log_event("ledger.load.failed", {"run_id": run_id, "error_type": type(e).__name__, "error": str(e)}, level=logging.WARNING)
            ledger_ok = False
        log_event("confirmation.run.start", {"run_id": run_id, "orders": len(self.batch), "ledger": len(self.ledger.entries())})

        notification = self.notifier.notify(email, self.batch)
        if ledger_ok:
            results = self.coordinator.dispatch(self.batch)
        else:
            # without the history every order looks new; dispatch nothing this run
            results = [DeliveryStatus(o.order_id, False, LEDGER_UNAVAILABLE) for o in self.coordinator.pending(self.batch)]
        # keep earlier results for orders this run did not touch
        fresh = {s.order_id for s in results}
        self.live_statuses = [s for s in self.live_statuses if s.order_id not in fresh] + results

        result = ConfirmationResult(
            run_id=run_id,
            notification=notification,
            live_statuses=list(results),
            statuses=self.statuses(),
        )
        log_event("confirmation.run.finish", {
            "run_id": run_id,
            "dispatched": len(results),
            "failed": sum(1 for s in results if not s.success),
            "notification_sent": notification.sent,
        })
        self._audit(run_id, result)
        return result

    def statuses(self) -> List[DeliveryStatus]:
        """Aggregated, display-ready view over the current batch, results and ledger."""
        return aggregate_statuses(self.batch, self.live_statuses, self.ledger.entries())

    def end_session(self) -> None:
        """Clear the ephemeral batch. The ledger survives."""
        clear_order_batch(self.session_store)
        self.batch = []
        self.live_statuses = []

    def _audit(self, run_id: str, result: ConfirmationResult) -> None:
        if not self.audit:
            return
        try:
            for status in result.live_statuses:
                if not status.success:
                    self.audit.record_order_failure(run_id, status.order_id, status.message)
            self.audit.record_run(run_id, summarize(result))
        except Exception:
            log_event("confirmation.audit.error", {"run_id": run_id, "error": traceback.format_exc()}, level=logging.ERROR)


ORCHESTRATOR_CLASS = ConfirmationOrchestrator
