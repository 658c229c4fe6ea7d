from typing import Any, Dict, Optional, Union
from datetime import datetime, timezone
import uuid

from .registry import Registry


class BaseOrchestrator:
    """Minimal base class for orchestrators.

    Collaborators are injected through a registry (a `Registry` or a plain
    dict) so tests can substitute in-memory doubles. Implementations override
    `run`.
    """

    def __init__(self, registry: Union[Registry, Dict[str, Any], None] = None):
        if isinstance(registry, Registry):
            self.registry = registry
        else:
            self.registry = Registry(registry or {})

    def make_run_id(self, prefix: str = "run") -> str:
        ts = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
        return f"{prefix}-{ts}-{uuid.uuid4().hex[:8]}"

    def get_collaborator(self, name: str) -> Optional[Any]:
        """Return a registered collaborator by name or None."""
        return self.registry.get(name)

    def require(self, name: str) -> Any:
        """Return a registered collaborator or raise RuntimeError naming it."""
        obj = self.registry.get(name)
        if obj is None:
            raise RuntimeError(f"{name} not available in registry")
        return obj

    def run(self, *args, **kwargs) -> Any:
        raise NotImplementedError()
