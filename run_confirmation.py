"""Minimal runner for the confirmation orchestrator.

Usage: python run_confirmation.py --email jane@example.com --batch-file batch.json

The batch file is a JSON array of {orderId, restaurantId, totalAmount}; it is
appended to the session store before the run, the way checkout would. With
--dry-run the services are replaced by in-memory doubles that succeed for every
order.
"""
import argparse
import json
import logging
from pathlib import Path

from confirmation.config.storage_config import SCOPE_DURABLE, SCOPE_SESSION
from confirmation.infrastructure.storage import build_store
from confirmation.operational import write_order_batch
from confirmation.orchestrators import ConfirmationOrchestrator
from confirmation.tools.services import metrics
from confirmation.utils.models import Coordinates, OrderDetail

parser = argparse.ArgumentParser(description='Send the purchase confirmation and dispatch deliveries for the session batch')
parser.add_argument('--email', required=True, help='Purchaser e-mail for the confirmation notification')
parser.add_argument('--batch-file', help='JSON array of orders to place in the session store before running')
parser.add_argument('--backend', choices=['memory', 'redis'], default=None, help='Store backend (default: STORE_BACKEND env)')
parser.add_argument('--dry-run', action='store_true', help='Use in-memory service doubles instead of HTTP')
parser.add_argument('--json', action='store_true', help='Emit raw JSON output instead of human-readable summary')
parser.add_argument('-v', '--verbose', action='store_true', help='Log monitoring events to stderr')
args = parser.parse_args()

logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format="%(asctime)s | %(levelname)s | %(name)s | %(message)s")

session_store = build_store(SCOPE_SESSION, backend=args.backend)
ledger_store = build_store(SCOPE_DURABLE, backend=args.backend)

if args.batch_file:
	raw = json.loads(Path(args.batch_file).read_text())
	write_order_batch(session_store, [OrderDetail.from_dict(d) for d in raw])

if args.dry_run:
	from confirmation.tools.services.adapters.in_memory_adapter import (
		InMemoryDeliveryClient,
		InMemoryNotificationClient,
		InMemoryOrderClient,
		InMemoryRestaurantClient,
	)

	anywhere = Coordinates(0.0, 0.0)
	clients = {
		"restaurants": InMemoryRestaurantClient(default=anywhere),
		"orders": InMemoryOrderClient(default=anywhere),
		"deliveries": InMemoryDeliveryClient(),
		"notifications": InMemoryNotificationClient(),
	}
else:
	from confirmation.tools.services.adapters.http_adapter import build_http_clients

	clients = build_http_clients()

orch = ConfirmationOrchestrator({**clients, "session_store": session_store, "ledger_store": ledger_store})
result = orch.run(args.email)

if args.json:
	out = result.to_dict()
	out["metrics"] = metrics.snapshot()
	print(json.dumps(out, default=str, ensure_ascii=False, indent=2))
else:
	note = result.notification
	if note.sent:
		print("Confirmation e-mail sent.")
	elif note.error:
		print(note.error)
	if not result.statuses:
		print("No orders to dispatch.")
	for status in result.statuses:
		mark = "OK " if status.success else "ERR"
		print(f"[{mark}] order {status.order_id}: {status.message}")
