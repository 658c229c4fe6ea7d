"""Order Batch Reader.

The checkout flow leaves the batch of just-placed orders in session storage as
a JSON array of {orderId, restaurantId, totalAmount}. Reading never fails: an
absent or unparseable batch is "no orders".
"""
from __future__ import annotations

import json
import logging
from typing import Iterable, List

from confirmation.config.storage_config import ORDER_BATCH_KEY, SESSION_KEYS
from confirmation.infrastructure.storage.interface import KeyValueStore
from confirmation.utils.models import OrderDetail
from platform_monitoring import log_event

logger = logging.getLogger(__name__)


def read_order_batch(session_store: KeyValueStore, key: str = ORDER_BATCH_KEY) -> List[OrderDetail]:
	try:
		raw = session_store.get(key)
	except Exception as e:
		log_event("batch.read_error", {"key": key, "error_type": type(e).__name__, "error": str(e)}, level=logging.WARNING)
		return []
	if raw is None:
		return []
	try:
		entries = json.loads(raw)
	except (TypeError, ValueError) as e:
		log_event("batch.parse_error", {"key": key, "error": str(e)}, level=logging.WARNING)
		return []
	if not isinstance(entries, list):
		log_event("batch.parse_error", {"key": key, "error": f"expected array, got {type(entries).__name__}"}, level=logging.WARNING)
		return []

	orders: List[OrderDetail] = []
	for idx, entry in enumerate(entries):
		if not isinstance(entry, dict):
			logger.warning("dropping batch entry %d: not an object", idx)
			continue
		try:
			orders.append(OrderDetail.from_dict(entry))
		except (KeyError, ValueError) as e:
			logger.warning("dropping batch entry %d: %s", idx, e)
	return orders


def write_order_batch(session_store: KeyValueStore, orders: Iterable[OrderDetail], key: str = ORDER_BATCH_KEY) -> List[OrderDetail]:
	"""Append orders to the session batch (what checkout does) and return the full batch."""
	batch = read_order_batch(session_store, key) + list(orders)
	session_store.set(key, json.dumps([o.to_dict() for o in batch]))
	return batch


def clear_order_batch(session_store: KeyValueStore) -> None:
	"""Session teardown: drop session-scoped keys. The ledger is not one of them."""
	for key in SESSION_KEYS:
		session_store.delete(key)


__all__ = ["read_order_batch", "write_order_batch", "clear_order_batch"]
