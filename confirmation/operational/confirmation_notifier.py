"""Confirmation Notifier: one purchase confirmation per checkout session.

Only the last order of the batch is notified. The `already_sent` flag lives on
the instance, so repeated calls on the same notifier are no-ops once a send
succeeded, while a fresh instance (a new confirmation view) starts clean.
Failures leave the flag unset and are reported, never retried here.
"""
from __future__ import annotations

import logging
from typing import Optional, Sequence

from confirmation.tools.services.exceptions import DispatchError
from confirmation.tools.services.interface import NotificationClient
from confirmation.utils.models import NotificationResult, OrderDetail
from platform_monitoring import log_event

logger = logging.getLogger(__name__)


class ConfirmationNotifier:
    def __init__(self, client: NotificationClient):
        self.client = client
        self.already_sent = False

    def notify(self, email: Optional[str], orders: Sequence[OrderDetail]) -> NotificationResult:
        if self.already_sent:
            log_event("notification.skipped", {"reason": "already_sent"})
            return NotificationResult(skipped=True)
        if not orders:
            log_event("notification.skipped", {"reason": "empty_batch"})
            return NotificationResult(skipped=True)
        if not email or not email.strip():
            log_event("notification.failed", {"error": "missing purchaser email"}, level=logging.WARNING)
            return NotificationResult(error="Could not send confirmation: missing purchaser email")

        latest = orders[-1]
        try:
            self.client.send_order_confirmation(email.strip(), latest.order_id, latest.total_amount)
        except DispatchError as e:
            log_event("notification.failed", {"order_id": latest.order_id, "error": str(e)}, level=logging.WARNING)
            return NotificationResult(error=f"Could not send confirmation for order {latest.order_id}: {e}")
        except Exception as e:
            logger.exception("unexpected error sending confirmation for order %s", latest.order_id)
            return NotificationResult(error=f"Could not send confirmation for order {latest.order_id}: {e}")

        self.already_sent = True
        log_event("notification.sent", {"order_id": latest.order_id, "email": email})
        return NotificationResult(sent=True)


__all__ = ["ConfirmationNotifier"]
