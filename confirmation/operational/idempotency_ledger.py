"""Idempotency Ledger: durable record of order ids whose delivery was created.

Stored as a JSON array of order ids under LEDGER_KEY. Membership means a
delivery was created at least once; absence means no confirmed success.

`merge` is a plain read-modify-write against the store. The in-process lock
only orders merges made from the same process; two processes (or tabs) that
both load before either writes will each dispatch and each merge the same id.
The persisted array still ends up correct.
"""
from __future__ import annotations

import json
import logging
import threading
from typing import List, Set

from confirmation.config.storage_config import LEDGER_KEY
from confirmation.infrastructure.storage.interface import KeyValueStore
from platform_monitoring import log_event

logger = logging.getLogger(__name__)


class IdempotencyLedger:

    def __init__(self, store: KeyValueStore, key: str = LEDGER_KEY):
        self.store = store
        self.key = key
        self._snapshot: List[str] = []
        self._lock = threading.Lock()

    def _read(self) -> List[str]:
        raw = self.store.get(self.key)
        if raw is None:
            return []
        try:
            value = json.loads(raw)
        except (TypeError, ValueError):
            logger.warning("ledger %s is not valid JSON; treating as empty", self.key)
            return []
        if not isinstance(value, list):
            logger.warning("ledger %s is not an array; treating as empty", self.key)
            return []
        out: List[str] = []
        for item in value:
            sid = str(item)
            if sid not in out:
                out.append(sid)
        return out

    def load(self) -> Set[str]:
        """Read the persisted ledger and keep it as the working snapshot."""
        self._snapshot = self._read()
        return set(self._snapshot)

    def contains(self, order_id: str) -> bool:
        return order_id in self._snapshot

    def entries(self) -> List[str]:
        """Snapshot in insertion order."""
        return list(self._snapshot)

    def merge(self, order_id: str) -> None:
        """Add `order_id` and persist the full resulting set."""
        with self._lock:
            current = self._read()
            if order_id not in current:
                current.append(order_id)
                self.store.set(self.key, json.dumps(current))
            for sid in current:
                if sid not in self._snapshot:
                    self._snapshot.append(sid)
        log_event("ledger.merge", {"order_id": order_id, "size": len(current)})


__all__ = ["IdempotencyLedger"]
