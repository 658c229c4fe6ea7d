"""
Service clients for the collaborators the orchestrator depends on.

Protocols live in `interface`, the HTTP implementations in
`adapters.http_adapter`, and test doubles in `adapters.in_memory_adapter`.
"""

from confirmation.tools.services.exceptions import (
    DispatchError,
    DataError,
    NetworkError,
    ServiceError,
)
from confirmation.tools.services.interface import (
    RestaurantClient,
    OrderClient,
    DeliveryClient,
    NotificationClient,
)

__all__ = [
    "DispatchError",
    "DataError",
    "NetworkError",
    "ServiceError",
    "RestaurantClient",
    "OrderClient",
    "DeliveryClient",
    "NotificationClient",
]
