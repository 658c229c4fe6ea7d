"""Orchestrators.

`ConfirmationOrchestrator` is the explicit entry point invoked once by the
confirmation view; it stays thin and delegates to the operational components.
"""
from .base_orchestrator import BaseOrchestrator
from .confirmation_orchestrator import ConfirmationOrchestrator
from .registry import Registry

__all__ = [
	"BaseOrchestrator",
	"ConfirmationOrchestrator",
	"Registry",
]
