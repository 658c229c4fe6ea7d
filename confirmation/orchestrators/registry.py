from typing import Any, Dict, Iterable, List, Optional

# Collaborators the confirmation flow cannot run without
REQUIRED = ("restaurants", "orders", "deliveries", "notifications", "ledger_store", "session_store")


class Registry:
    """Named collaborators (service clients, stores, audit) injected into orchestrators."""

    def __init__(self, items: Optional[Dict[str, Any]] = None):
        self._items: Dict[str, Any] = {}
        for name, obj in (items or {}).items():
            self.register(name, obj)

    def register(self, name: str, obj: Any):
        if obj is None:
            raise ValueError(f"cannot register {name} as None")
        self._items[name] = obj

    def get(self, name: str) -> Optional[Any]:
        return self._items.get(name)

    def missing(self, names: Iterable[str] = REQUIRED) -> List[str]:
        return [n for n in names if n not in self._items]

    def list(self):
        return list(self._items.keys())
