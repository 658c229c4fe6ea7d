"""Delivery Dispatch Coordinator.

For every order in the batch that is not in the ledger: resolve pickup
coordinates (restaurant), resolve drop-off coordinates (order), create the
delivery, and merge the order id into the ledger on success.

Orders run strictly one at a time through a SequentialRunner so the ledger
check and the ledger write for an order never interleave with another order's
calls. A failing order is recorded and the loop moves on.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from confirmation.infrastructure.dispatcher import SequentialRunner
from confirmation.operational.idempotency_ledger import IdempotencyLedger
from confirmation.tools.services.exceptions import DataError, DispatchError, NetworkError, ServiceError
from confirmation.tools.services.interface import DeliveryClient, OrderClient, RestaurantClient
from confirmation.utils.models import DELIVERY_CREATED, DELIVERY_UNRECORDED, DeliveryStatus, OrderDetail
from platform_monitoring import log_event

logger = logging.getLogger(__name__)


def _failure_message(order_id: str, exc: Exception) -> str:
    if isinstance(exc, DataError):
        return f"Delivery pending for order {order_id}: {exc}"
    if isinstance(exc, NetworkError):
        return f"Delivery pending for order {order_id}: service unreachable"
    if isinstance(exc, ServiceError):
        return f"Delivery failed for order {order_id}: {exc}"
    return f"Delivery failed for order {order_id}: unexpected error"


class DispatchCoordinator:
    def __init__(
        self,
        restaurants: RestaurantClient,
        orders: OrderClient,
        deliveries: DeliveryClient,
        ledger: IdempotencyLedger,
        runner: Optional[SequentialRunner] = None,
    ):
        self.restaurants = restaurants
        self.orders = orders
        self.deliveries = deliveries
        self.ledger = ledger
        self.runner = runner or SequentialRunner()

    def pending(self, batch: Sequence[OrderDetail]) -> List[OrderDetail]:
        """Orders not in the ledger snapshot, first occurrence of each id only."""
        seen = set()
        out = []
        for order in batch:
            if order.order_id in seen or self.ledger.contains(order.order_id):
                continue
            seen.add(order.order_id)
            out.append(order)
        return out

    def dispatch(self, batch: Sequence[OrderDetail]) -> List[DeliveryStatus]:
        todo = self.pending(batch)
        skipped = len(batch) - len(todo)
        if skipped:
            log_event("dispatch.order.skipped", {"count": skipped})
        if not todo:
            return []

        results: List[DeliveryStatus] = []
        for order in todo:
            status = self.runner.submit(f"dispatch:{order.order_id}", self._dispatch_one, order)
            results.append(status)
        return results

    def _dispatch_one(self, order: OrderDetail) -> DeliveryStatus:
        try:
            pickup = self.restaurants.get_location(order.restaurant_id)
            destination = self.orders.get_destination(order.order_id)
            self.deliveries.create_delivery(order.order_id, pickup, destination)
        except DispatchError as e:
            log_event(
                "dispatch.order.failed",
                {"order_id": order.order_id, "error_type": type(e).__name__, "error": str(e)},
                level=logging.WARNING,
            )
            return DeliveryStatus(order.order_id, False, _failure_message(order.order_id, e))
        except Exception as e:
            logger.exception("unexpected error dispatching order %s", order.order_id)
            return DeliveryStatus(order.order_id, False, _failure_message(order.order_id, e))

        try:
            self.ledger.merge(order.order_id)
        except Exception as e:
            # delivery exists but is unrecorded: the next run dispatches it again
            log_event(
                "ledger.merge.failed",
                {"order_id": order.order_id, "error_type": type(e).__name__, "error": str(e)},
                level=logging.WARNING,
            )
            return DeliveryStatus(order.order_id, True, DELIVERY_UNRECORDED)
        log_event("dispatch.order.success", {"order_id": order.order_id})
        return DeliveryStatus(order.order_id, True, DELIVERY_CREATED)


__all__ = ["DispatchCoordinator"]
