# namapp/services/orders.py
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from namapp.core.datastore import AdminDataStore
from namapp.core.errors import BackendError, NotFound, ValidationError
from namapp.schemas.order import ORDER_STATUSES

logger = logging.getLogger("namapp.orders")

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _as_datetime(value: Any) -> Optional[datetime]:
    """Firestore Timestamp or ISO string -> aware datetime; anything else -> None."""
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, str) and value:
        try:
            dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
        return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)
    return None


def sort_newest_first(orders: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Sort by created_at descending; orders without a usable date go last."""
    return sorted(
        orders,
        key=lambda o: _as_datetime(o.get("created_at")) or _EPOCH,
        reverse=True,
    )


async def list_orders(store: AdminDataStore) -> List[Dict[str, Any]]:
    try:
        orders = await store.list_documents("orders")
    except Exception as e:
        logger.exception("Admin orders fetch error")
        raise BackendError(str(e))
    return sort_newest_first(orders)


async def update_order_status(store: AdminDataStore, order_id: Any, new_status: Any) -> Dict[str, Any]:
    """
    Sets an order's status and stamps updated_at.
    Input is checked before anything is written; last writer wins.
    """
    if not order_id or not new_status:
        raise ValidationError("id and status required")
    if not isinstance(order_id, str):
        raise ValidationError("Invalid id")
    if not isinstance(new_status, str) or new_status not in ORDER_STATUSES:
        raise ValidationError("Invalid status")

    patch = {"status": new_status, "updated_at": datetime.now(timezone.utc)}
    try:
        updated = await store.update_document("orders", order_id, patch)
    except Exception as e:
        logger.exception("Admin order update error")
        raise BackendError(str(e))

    if updated is None:
        raise NotFound("Order not found")
    logger.info("Order %s -> %s", order_id, new_status)
    return updated
