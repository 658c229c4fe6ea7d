"""Redis-backed key-value store.

Environment variables supported:
- REDIS_URL: full connection URL (preferred)
- REDIS_HOST (default: localhost)
- REDIS_PORT (default: 6379)
- REDIS_DB (default: 0)
- REDIS_PASSWORD (optional)
"""
from __future__ import annotations

import os
from typing import Any, Optional

import redis

from confirmation.config.storage_config import STORE_NAMESPACE


class RedisStore:
	"""Namespaced string store on top of redis-py.

	If REDIS_URL is set, it is preferred (handles TLS via rediss://). Otherwise,
	falls back to host/port/db/password envs. A `ttl` (seconds) is applied on
	every write, which is how the session scope expires; the durable scope is
	built without one.
	"""

	def __init__(
		self,
		url: Optional[str] = None,
		host: Optional[str] = None,
		port: Optional[int] = None,
		db: Optional[int] = None,
		password: Optional[str] = None,
		namespace: Optional[str] = None,
		ttl: Optional[int] = None,
		client: Optional[Any] = None,
	):
		self.ns = STORE_NAMESPACE if namespace is None else namespace
		self.ttl = ttl
		if client is not None:
			self.client = client
			return
		url = url or os.getenv("REDIS_URL")
		if url:
			self.client = redis.from_url(url, decode_responses=True)
		else:
			self.client = redis.Redis(
				host=host or os.getenv("REDIS_HOST", "localhost"),
				port=int(port or os.getenv("REDIS_PORT", "6379")),
				db=int(db or os.getenv("REDIS_DB", "0")),
				password=password or os.getenv("REDIS_PASSWORD"),
				decode_responses=True,
			)

	def _key(self, key: str) -> str:
		"""Prefix key with namespace."""
		return f"{self.ns}:{key}" if self.ns else key

	def get(self, key: str) -> Optional[str]:
		value = self.client.get(self._key(key))
		if isinstance(value, bytes):
			value = value.decode("utf-8")
		return value

	def set(self, key: str, value: str) -> None:
		if self.ttl:
			self.client.set(self._key(key), value, ex=self.ttl)
		else:
			self.client.set(self._key(key), value)

	def delete(self, key: str) -> None:
		self.client.delete(self._key(key))

	def close(self) -> None:
		self.client.close()


__all__ = ["RedisStore"]
