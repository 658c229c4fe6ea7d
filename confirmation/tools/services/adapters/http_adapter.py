"""HTTP clients for the restaurant, order, delivery and notification services.

All four share `_HttpService`, which wraps every call to add timing, metrics
and translation of `requests` failures into the dispatch error taxonomy:

- connection errors / timeouts      -> NetworkError
- non-2xx responses                 -> ServiceError (status + body kept)
- undecodable / incomplete payloads -> DataError

No retries are mounted on the session; a failed call is reported once and the
next orchestrator run is the retry path.
"""
from __future__ import annotations

import logging
import time
from decimal import Decimal
from typing import Any, Callable, Dict, Optional

import requests

from config import settings
from confirmation.utils.models import Coordinates
from .. import metrics
from ..exceptions import DataError, NetworkError, ServiceError

logger = logging.getLogger(__name__)


def _build_session() -> requests.Session:
    session = requests.Session()
    session.headers.update({"Accept": "application/json"})
    return session


def _parse_coordinates(payload: Any, what: str) -> Coordinates:
    """Extract latitude/longitude from a response body.

    Accepts the gateway's StandardResponse wrapper ({code, message, data}) as
    well as a bare object.
    """
    if isinstance(payload, dict) and isinstance(payload.get("data"), dict):
        payload = payload["data"]
    if not isinstance(payload, dict):
        raise DataError(f"{what}: response is not an object")
    lat = payload.get("latitude")
    lng = payload.get("longitude")
    if lat is None or lng is None:
        raise DataError(f"{what}: missing coordinates")
    try:
        return Coordinates(latitude=float(lat), longitude=float(lng))
    except (TypeError, ValueError) as e:
        raise DataError(f"{what}: invalid coordinates {lat!r}, {lng!r}") from e


class _HttpService:
    service_name = "http"

    def __init__(
        self,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session or _build_session()
        self.timeout = settings.HTTP_TIMEOUT_SECONDS if timeout is None else timeout

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _invoke(self, op: str, func: Callable[[], requests.Response]) -> requests.Response:
        start = time.time()
        failed = True
        try:
            try:
                resp = func()
            except (requests.ConnectionError, requests.Timeout) as e:
                raise NetworkError(f"{self.service_name} {op}: {e}") from e
            except requests.RequestException as e:
                raise NetworkError(f"{self.service_name} {op}: request failed: {e}") from e
            if not 200 <= resp.status_code < 300:
                raise ServiceError(
                    f"{self.service_name} {op}: HTTP {resp.status_code}",
                    status_code=resp.status_code,
                    body=resp.text,
                )
            failed = False
            return resp
        finally:
            duration = (time.time() - start) * 1000.0
            metrics.inc(op, self.service_name, error=failed)
            metrics.observe(op, self.service_name, duration)
            logger.debug("op=%s service=%s ms=%.1f failed=%s", op, self.service_name, duration, failed)

    def _json(self, op: str, resp: requests.Response) -> Any:
        try:
            return resp.json()
        except ValueError as e:
            raise DataError(f"{self.service_name} {op}: response is not JSON") from e


class HttpRestaurantClient(_HttpService):
    """GET {API_BASE_URL}/restaurants/{id} -> StandardResponse{data: {latitude, longitude}}"""

    service_name = "restaurants"

    def __init__(self, base_url: Optional[str] = None, **kwargs):
        super().__init__(base_url or settings.API_BASE_URL, **kwargs)

    def get_location(self, restaurant_id: str) -> Coordinates:
        resp = self._invoke(
            "get_location",
            lambda: self.session.get(self._url(f"restaurants/{restaurant_id}"), timeout=self.timeout),
        )
        return _parse_coordinates(self._json("get_location", resp), f"restaurant {restaurant_id}")


class HttpOrderClient(_HttpService):
    """GET {API_BASE_URL}/orders/{id} -> order with destination latitude/longitude."""

    service_name = "orders"

    def __init__(self, base_url: Optional[str] = None, **kwargs):
        super().__init__(base_url or settings.API_BASE_URL, **kwargs)

    def get_destination(self, order_id: str) -> Coordinates:
        resp = self._invoke(
            "get_destination",
            lambda: self.session.get(self._url(f"orders/{order_id}"), timeout=self.timeout),
        )
        return _parse_coordinates(self._json("get_destination", resp), f"order {order_id}")


class HttpDeliveryClient(_HttpService):
    """POST {API_BASE_URL}/delivery/create; the service reads its inputs from query params."""

    service_name = "deliveries"

    def __init__(self, base_url: Optional[str] = None, **kwargs):
        super().__init__(base_url or settings.API_BASE_URL, **kwargs)

    def create_delivery(self, order_id: str, pickup: Coordinates, destination: Coordinates) -> None:
        params: Dict[str, Any] = {
            "orderId": order_id,
            "shopLatitude": pickup.latitude,
            "shopLongitude": pickup.longitude,
            "destinationLatitude": destination.latitude,
            "destinationLongitude": destination.longitude,
        }
        self._invoke(
            "create_delivery",
            lambda: self.session.post(self._url("delivery/create"), params=params, timeout=self.timeout),
        )


class HttpNotificationClient(_HttpService):
    """POST {NOTIFICATION_BASE_URL}/notifications/order-confirmation"""

    service_name = "notifications"

    def __init__(self, base_url: Optional[str] = None, **kwargs):
        super().__init__(base_url or settings.NOTIFICATION_BASE_URL, **kwargs)

    def send_order_confirmation(self, email: str, order_id: str, total_amount: Decimal) -> None:
        params = {"email": email, "orderId": order_id, "totalAmount": str(total_amount)}
        self._invoke(
            "send_order_confirmation",
            lambda: self.session.post(
                self._url("notifications/order-confirmation"), params=params, timeout=self.timeout
            ),
        )


def build_http_clients(session: Optional[requests.Session] = None) -> Dict[str, Any]:
    """Build all four clients sharing one session, keyed by registry name."""
    session = session or _build_session()
    return {
        "restaurants": HttpRestaurantClient(session=session),
        "orders": HttpOrderClient(session=session),
        "deliveries": HttpDeliveryClient(session=session),
        "notifications": HttpNotificationClient(session=session),
    }


__all__ = [
    "HttpRestaurantClient",
    "HttpOrderClient",
    "HttpDeliveryClient",
    "HttpNotificationClient",
    "build_http_clients",
]
