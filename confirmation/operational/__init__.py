"""Operational components of the confirmation flow.

Leaves first: batch reader, ledger, notifier, dispatch coordinator, status
aggregator. The ConfirmationOrchestrator wires them together.
"""
from .order_batch_reader import read_order_batch, write_order_batch, clear_order_batch
from .idempotency_ledger import IdempotencyLedger
from .confirmation_notifier import ConfirmationNotifier
from .dispatch_coordinator import DispatchCoordinator
from .status_aggregator import aggregate_statuses

__all__ = [
    "read_order_batch",
    "write_order_batch",
    "clear_order_batch",
    "IdempotencyLedger",
    "ConfirmationNotifier",
    "DispatchCoordinator",
    "aggregate_statuses",
]
