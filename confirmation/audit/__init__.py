from .store import AuditStore, InMemoryAuditStore, summarize

__all__ = ["AuditStore", "InMemoryAuditStore", "summarize"]
