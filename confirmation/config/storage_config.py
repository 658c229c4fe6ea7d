"""Central configuration for storage keys and backends.

Scopes
------
* session  -> ephemeral per-session storage (holds the checkout order batch).
* durable  -> storage that survives reloads and re-login (holds the ledger).

Environment Override Precedence:
* STORE_BACKEND        -> ``memory`` (default) or ``redis``
* STORE_NAMESPACE      -> key prefix used by the Redis backend
* SESSION_TTL_SECONDS  -> expiry applied to session-scoped keys in Redis
* ORDER_BATCH_KEY / LEDGER_KEY -> storage key names

The ledger key is deliberately absent from ``SESSION_KEYS``: ending a session
clears the batch but keeps the record of dispatched orders.
"""

from __future__ import annotations

import os
from typing import List

ORDER_BATCH_KEY = os.getenv("ORDER_BATCH_KEY", "orderDetails")
LEDGER_KEY = os.getenv("LEDGER_KEY", "createdDeliveries")

STORE_BACKEND = os.getenv("STORE_BACKEND", "memory").lower()
STORE_NAMESPACE = os.getenv("STORE_NAMESPACE", "confirmation")

# 0 disables expiry
SESSION_TTL_SECONDS = int(os.getenv("SESSION_TTL_SECONDS", "86400"))

SCOPE_SESSION = "session"
SCOPE_DURABLE = "durable"

# Keys removed when a session ends
SESSION_KEYS: List[str] = [ORDER_BATCH_KEY]


def ttl_for_scope(scope: str) -> int | None:
    """Return the key expiry (seconds) for a storage scope, or None for no expiry."""
    if scope == SCOPE_SESSION and SESSION_TTL_SECONDS > 0:
        return SESSION_TTL_SECONDS
    return None


__all__ = [
    "ORDER_BATCH_KEY",
    "LEDGER_KEY",
    "STORE_BACKEND",
    "STORE_NAMESPACE",
    "SESSION_TTL_SECONDS",
    "SCOPE_SESSION",
    "SCOPE_DURABLE",
    "SESSION_KEYS",
    "ttl_for_scope",
]
