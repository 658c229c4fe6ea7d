"""Key-value storage for the session (order batch) and durable (ledger) scopes."""

from .interface import KeyValueStore
from .in_memory import InMemoryStore
from .factory import build_store

__all__ = ["KeyValueStore", "InMemoryStore", "build_store"]
