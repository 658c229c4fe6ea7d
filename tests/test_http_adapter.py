from decimal import Decimal
from unittest.mock import MagicMock

import pytest
import requests

from confirmation.tools.services import metrics
from confirmation.tools.services.adapters.http_adapter import (
    HttpDeliveryClient,
    HttpNotificationClient,
    HttpOrderClient,
    HttpRestaurantClient,
    build_http_clients,
)
from confirmation.tools.services.exceptions import DataError, NetworkError, ServiceError
from confirmation.utils.models import Coordinates

BASE = "http://gateway/api/v1"


def response(status=200, payload=None, text=""):
    resp = MagicMock()
    resp.status_code = status
    resp.text = text
    if isinstance(payload, Exception):
        resp.json.side_effect = payload
    else:
        resp.json.return_value = payload
    return resp


def test_restaurant_location_unwraps_standard_response():
    session = MagicMock()
    session.get.return_value = response(payload={"code": 200, "message": "Restaurant data!", "data": {"latitude": 6.9, "longitude": 79.8}})
    client = HttpRestaurantClient(BASE, session=session, timeout=3)
    assert client.get_location("R1") == Coordinates(6.9, 79.8)
    session.get.assert_called_once_with(f"{BASE}/restaurants/R1", timeout=3)


def test_order_destination_bare_object():
    session = MagicMock()
    session.get.return_value = response(payload={"orderId": "A", "latitude": "6.95", "longitude": 79.85})
    assert HttpOrderClient(BASE, session=session).get_destination("A") == Coordinates(6.95, 79.85)
    assert session.get.call_args[0][0] == f"{BASE}/orders/A"


def test_missing_coordinates_is_data_error():
    session = MagicMock()
    session.get.return_value = response(payload={"orderId": "A", "latitude": None, "longitude": 79.85})
    with pytest.raises(DataError):
        HttpOrderClient(BASE, session=session).get_destination("A")


def test_non_json_body_is_data_error():
    session = MagicMock()
    session.get.return_value = response(payload=ValueError("no json"))
    with pytest.raises(DataError):
        HttpRestaurantClient(BASE, session=session).get_location("R1")


def test_non_success_status_is_service_error():
    session = MagicMock()
    session.post.return_value = response(status=500, text="Internal Server Error")
    client = HttpDeliveryClient(BASE, session=session)
    with pytest.raises(ServiceError) as exc_info:
        client.create_delivery("A", Coordinates(6.9, 79.8), Coordinates(6.95, 79.85))
    assert exc_info.value.status_code == 500
    assert exc_info.value.body == "Internal Server Error"


def test_connection_error_is_network_error():
    session = MagicMock()
    session.get.side_effect = requests.ConnectionError("refused")
    with pytest.raises(NetworkError):
        HttpRestaurantClient(BASE, session=session).get_location("R1")


def test_timeout_is_network_error():
    session = MagicMock()
    session.post.side_effect = requests.Timeout("slow")
    with pytest.raises(NetworkError):
        HttpNotificationClient("http://notify/api", session=session).send_order_confirmation("a@b.co", "A", Decimal("1"))


def test_delivery_create_sends_query_params():
    session = MagicMock()
    session.post.return_value = response(status=200, text="Delivery created!")
    HttpDeliveryClient(BASE, session=session, timeout=5).create_delivery(
        "A", Coordinates(6.90, 79.80), Coordinates(6.95, 79.85)
    )
    session.post.assert_called_once_with(
        f"{BASE}/delivery/create",
        params={
            "orderId": "A",
            "shopLatitude": 6.90,
            "shopLongitude": 79.80,
            "destinationLatitude": 6.95,
            "destinationLongitude": 79.85,
        },
        timeout=5,
    )


def test_notification_sends_email_order_and_amount():
    session = MagicMock()
    session.post.return_value = response(status=200)
    HttpNotificationClient("http://notify/api/", session=session).send_order_confirmation("jane@example.com", "C", Decimal("12.50"))
    args, kwargs = session.post.call_args
    assert args[0] == "http://notify/api/notifications/order-confirmation"
    assert kwargs["params"] == {"email": "jane@example.com", "orderId": "C", "totalAmount": "12.50"}


def test_calls_are_counted_in_metrics():
    session = MagicMock()
    session.get.side_effect = [response(payload={"latitude": 1, "longitude": 2}), response(status=404)]
    client = HttpRestaurantClient(BASE, session=session)
    client.get_location("R1")
    with pytest.raises(ServiceError):
        client.get_location("R2")
    rows = metrics.snapshot()
    assert rows[0]["op"] == "get_location" and rows[0]["service"] == "restaurants"
    assert rows[0]["count"] == 2 and rows[0]["errors"] == 1


def test_build_http_clients_shares_session():
    session = MagicMock()
    clients = build_http_clients(session=session)
    assert set(clients) == {"restaurants", "orders", "deliveries", "notifications"}
    assert all(c.session is session for c in clients.values())
