"""Value types exchanged between the confirmation components."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional

ALREADY_CREATED = "already created"
DELIVERY_CREATED = "Delivery created"
DELIVERY_UNRECORDED = "Delivery created but not recorded; it may be dispatched again"
LEDGER_UNAVAILABLE = "Delivery pending: dispatch history unavailable"


@dataclass(frozen=True)
class OrderDetail:
	"""One order placed at checkout. Read-only input to the orchestrator."""
	order_id: str
	restaurant_id: str
	total_amount: Decimal

	@classmethod
	def from_dict(cls, d: Dict[str, Any]) -> "OrderDetail":
		"""Build from the camelCase session payload.

		Raises ValueError/KeyError when a field is missing or unusable.
		"""
		order_id = d["orderId"]
		restaurant_id = d["restaurantId"]
		if order_id in (None, "") or restaurant_id in (None, ""):
			raise ValueError("orderId and restaurantId are required")
		raw_amount = d["totalAmount"]
		if raw_amount is None or isinstance(raw_amount, bool):
			raise ValueError(f"invalid totalAmount: {raw_amount!r}")
		try:
			amount = Decimal(str(raw_amount))
		except InvalidOperation as e:
			raise ValueError(f"invalid totalAmount: {raw_amount!r}") from e
		if not amount.is_finite():
			raise ValueError(f"invalid totalAmount: {raw_amount!r}")
		return cls(order_id=str(order_id), restaurant_id=str(restaurant_id), total_amount=amount)

	def to_dict(self) -> Dict[str, Any]:
		return {
			"orderId": self.order_id,
			"restaurantId": self.restaurant_id,
			"totalAmount": str(self.total_amount),
		}


@dataclass(frozen=True)
class DeliveryStatus:
	"""Outcome of one dispatch attempt, or a synthetic ledger hit."""
	order_id: str
	success: bool
	message: str

	def to_dict(self) -> Dict[str, Any]:
		return {"orderId": self.order_id, "success": self.success, "message": self.message}


@dataclass(frozen=True)
class Coordinates:
	latitude: float
	longitude: float


@dataclass
class NotificationResult:
	sent: bool = False
	skipped: bool = False
	error: Optional[str] = None

	def to_dict(self) -> Dict[str, Any]:
		return asdict(self)


@dataclass
class ConfirmationResult:
	"""What one orchestrator run produced."""
	run_id: str
	notification: NotificationResult
	live_statuses: List[DeliveryStatus] = field(default_factory=list)
	statuses: List[DeliveryStatus] = field(default_factory=list)

	def to_dict(self) -> Dict[str, Any]:
		return {
			"run_id": self.run_id,
			"notification": self.notification.to_dict(),
			"live_statuses": [s.to_dict() for s in self.live_statuses],
			"statuses": [s.to_dict() for s in self.statuses],
		}


__all__ = [
	"ALREADY_CREATED",
	"DELIVERY_CREATED",
	"DELIVERY_UNRECORDED",
	"LEDGER_UNAVAILABLE",
	"OrderDetail",
	"DeliveryStatus",
	"Coordinates",
	"NotificationResult",
	"ConfirmationResult",
]
