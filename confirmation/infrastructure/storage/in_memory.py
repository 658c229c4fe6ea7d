import threading
from typing import Dict, Optional

from confirmation.infrastructure.storage.interface import KeyValueStore


class InMemoryStore(KeyValueStore):
    """Thread-safe dict-backed store for local development and tests."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value

    def delete(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)

    def keys(self):
        """Test helper: list stored keys."""
        with self._lock:
            return list(self._data.keys())
