from typing import Iterable, List, Sequence

from confirmation.utils.models import ALREADY_CREATED, DeliveryStatus, OrderDetail


def aggregate_statuses(
    batch: Sequence[OrderDetail],
    live_statuses: Iterable[DeliveryStatus],
    ledger_ids: Iterable[str],
) -> List[DeliveryStatus]:
    """Merge this run's results with ledger history, in batch order.

    Live result if one exists, else a synthetic "already created" success for a
    ledger hit, else nothing (not processed yet). One entry per order id.
    """
    live = {}
    for status in live_statuses:
        live[status.order_id] = status
    done = set(ledger_ids)

    out: List[DeliveryStatus] = []
    emitted = set()
    for order in batch:
        oid = order.order_id
        if oid in emitted:
            continue
        if oid in live:
            out.append(live[oid])
        elif oid in done:
            out.append(DeliveryStatus(oid, True, ALREADY_CREATED))
        else:
            continue
        emitted.add(oid)
    return out


__all__ = ["aggregate_statuses"]
