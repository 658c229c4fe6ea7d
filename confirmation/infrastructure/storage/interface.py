from typing import Optional, Protocol


class KeyValueStore(Protocol):
    """String key-value contract shared by the session and durable scopes.

    Values are opaque strings; callers own their encoding (the order batch and
    the ledger are both JSON arrays). Implementations: `InMemoryStore` for tests
    and single-process runs, `RedisStore` for anything that must outlive the
    process.
    """

    def get(self, key: str) -> Optional[str]:
        """Return the stored value or None if the key is absent."""

    def set(self, key: str, value: str) -> None:
        """Store `value` under `key`, replacing any previous value."""

    def delete(self, key: str) -> None:
        """Remove `key` (no-op if absent)."""
