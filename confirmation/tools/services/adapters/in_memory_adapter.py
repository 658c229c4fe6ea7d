"""In-memory service clients.

Test/dry-run doubles implementing the client protocols. Each records its calls
in `calls` and can be scripted to fail per id by registering an exception in
`failures`. Not thread-safe.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List, Optional

from confirmation.utils.models import Coordinates
from ..exceptions import DataError


class _Recorder:
	def __init__(self, failures: Optional[Dict[str, Exception]] = None) -> None:
		self.calls: List[Dict[str, Any]] = []
		self.failures: Dict[str, Exception] = dict(failures or {})

	def _maybe_fail(self, key: str) -> None:
		exc = self.failures.get(key)
		if exc is not None:
			raise exc


class InMemoryRestaurantClient(_Recorder):
	def __init__(
		self,
		locations: Optional[Dict[str, Coordinates]] = None,
		failures: Optional[Dict[str, Exception]] = None,
		default: Optional[Coordinates] = None,
	) -> None:
		super().__init__(failures)
		self.locations: Dict[str, Coordinates] = dict(locations or {})
		self.default = default

	def get_location(self, restaurant_id: str) -> Coordinates:
		self.calls.append({"restaurant_id": restaurant_id})
		self._maybe_fail(restaurant_id)
		loc = self.locations.get(restaurant_id, self.default)
		if loc is None:
			raise DataError(f"restaurant {restaurant_id}: missing coordinates")
		return loc


class InMemoryOrderClient(_Recorder):
	def __init__(
		self,
		destinations: Optional[Dict[str, Coordinates]] = None,
		failures: Optional[Dict[str, Exception]] = None,
		default: Optional[Coordinates] = None,
	) -> None:
		super().__init__(failures)
		self.destinations: Dict[str, Coordinates] = dict(destinations or {})
		self.default = default

	def get_destination(self, order_id: str) -> Coordinates:
		self.calls.append({"order_id": order_id})
		self._maybe_fail(order_id)
		dest = self.destinations.get(order_id, self.default)
		if dest is None:
			raise DataError(f"order {order_id}: missing coordinates")
		return dest


class InMemoryDeliveryClient(_Recorder):
	"""Keeps created deliveries in `created`; repeated ids are recorded again, not rejected."""

	def __init__(self, failures: Optional[Dict[str, Exception]] = None) -> None:
		super().__init__(failures)
		self.created: List[Dict[str, Any]] = []

	def create_delivery(self, order_id: str, pickup: Coordinates, destination: Coordinates) -> None:
		payload = {
			"orderId": order_id,
			"shopLatitude": pickup.latitude,
			"shopLongitude": pickup.longitude,
			"destinationLatitude": destination.latitude,
			"destinationLongitude": destination.longitude,
		}
		self.calls.append(payload)
		self._maybe_fail(order_id)
		self.created.append(payload)


class InMemoryNotificationClient(_Recorder):
	def __init__(self, fail_with: Optional[Exception] = None) -> None:
		super().__init__()
		self.fail_with = fail_with
		self.sent: List[Dict[str, Any]] = []

	def send_order_confirmation(self, email: str, order_id: str, total_amount: Decimal) -> None:
		payload = {"email": email, "orderId": order_id, "totalAmount": total_amount}
		self.calls.append(payload)
		if self.fail_with is not None:
			raise self.fail_with
		self.sent.append(payload)


__all__ = [
	"InMemoryRestaurantClient",
	"InMemoryOrderClient",
	"InMemoryDeliveryClient",
	"InMemoryNotificationClient",
]
