from typing import Optional

from confirmation.config.storage_config import (
    SCOPE_DURABLE,
    SCOPE_SESSION,
    STORE_BACKEND,
    ttl_for_scope,
)
from .in_memory import InMemoryStore
from .interface import KeyValueStore


def build_store(scope: str = SCOPE_DURABLE, backend: Optional[str] = None) -> KeyValueStore:
    """Build the store for a scope ('session' or 'durable').

    `backend` falls back to STORE_BACKEND ('memory' or 'redis').
    """
    if scope not in (SCOPE_SESSION, SCOPE_DURABLE):
        raise ValueError(f"unknown storage scope: {scope}")
    backend = (backend or STORE_BACKEND or "memory").lower()
    if backend == "redis":
        from .adapters.redis_store import RedisStore  # local import: memory runs never load redis

        return RedisStore(ttl=ttl_for_scope(scope))
    if backend != "memory":
        raise ValueError(f"unknown store backend: {backend}")
    return InMemoryStore()


__all__ = ["build_store"]
