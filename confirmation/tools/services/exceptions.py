"""Exception hierarchy for collaborator calls.

The coordinator and the notifier catch these at per-order / per-call
granularity; none of them is allowed to escape an orchestrator run.
"""

from __future__ import annotations

from typing import Optional


class DispatchError(Exception):
    """Base class for all collaborator related errors."""


class DataError(DispatchError):
    """Raised when a payload is missing, undecodable, or lacks required fields (e.g. coordinates)."""


class NetworkError(DispatchError):
    """Raised when the request never reached the collaborator (connection refused, timeout)."""


class ServiceError(DispatchError):
    """Raised when the collaborator answered with a non-success HTTP status."""

    def __init__(self, message: str, *, status_code: Optional[int] = None, body: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


__all__ = [
    "DispatchError",
    "DataError",
    "NetworkError",
    "ServiceError",
]
