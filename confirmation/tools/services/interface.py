from __future__ import annotations

from decimal import Decimal
from typing import Protocol

from confirmation.utils.models import Coordinates


class RestaurantClient(Protocol):
    """Resolves pickup coordinates for a restaurant.

    Raises DataError when the restaurant has no usable latitude/longitude,
    NetworkError / ServiceError on transport or status failures.
    """

    def get_location(self, restaurant_id: str) -> Coordinates:
        ...


class OrderClient(Protocol):
    """Resolves the drop-off coordinates stored on an order."""

    def get_destination(self, order_id: str) -> Coordinates:
        ...


class DeliveryClient(Protocol):
    """Creates a delivery record. Returning normally means the delivery exists."""

    def create_delivery(self, order_id: str, pickup: Coordinates, destination: Coordinates) -> None:
        ...


class NotificationClient(Protocol):
    def send_order_confirmation(self, email: str, order_id: str, total_amount: Decimal) -> None:
        ...


__all__ = ["RestaurantClient", "OrderClient", "DeliveryClient", "NotificationClient"]
