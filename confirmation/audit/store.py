"""Audit trail for confirmation runs.

One summary per run plus a per-order failure history, so an operator can see
how many attempts an order took before its delivery was created.
"""
from __future__ import annotations

from typing import Protocol, Dict, Any, List


class AuditStore(Protocol):

    def record_run(self, run_id: str, summary: Dict[str, Any]) -> None:
        ...

    def record_order_failure(self, run_id: str, order_id: str, message: str) -> None:
        ...


class InMemoryAuditStore:
    """In-memory audit store for tests and local runs."""

    def __init__(self):
        self.runs: List[Dict[str, Any]] = []
        self.order_failures: Dict[str, List[Dict[str, str]]] = {}

    def record_run(self, run_id: str, summary: Dict[str, Any]) -> None:
        self.runs.append({"run_id": run_id, **summary})

    def record_order_failure(self, run_id: str, order_id: str, message: str) -> None:
        self.order_failures.setdefault(order_id, []).append({"run_id": run_id, "message": message})

    def failures_for(self, order_id: str) -> List[Dict[str, str]]:
        return list(self.order_failures.get(order_id, []))


def summarize(result) -> Dict[str, Any]:
    """Flatten a ConfirmationResult into the per-run audit summary."""
    live = result.live_statuses
    return {
        "orders": len(result.statuses),
        "dispatched": len(live),
        "succeeded": sum(1 for s in live if s.success),
        "failed": [s.order_id for s in live if not s.success],
        "notification_sent": result.notification.sent,
        "notification_error": result.notification.error,
        "statuses": [s.to_dict() for s in result.statuses],
    }


__all__ = ["AuditStore", "InMemoryAuditStore", "summarize"]
