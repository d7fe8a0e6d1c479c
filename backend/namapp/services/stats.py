"""
Dashboard statistics.

`compute_snapshot` issues the nine source reads concurrently, parses each
result into its record type and folds everything into an `AggregateSnapshot`.
A source that fails is logged and counted as empty; the rest of the snapshot
is unaffected.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Dict, List, Sequence, Type, TypeVar

from pydantic import BaseModel

from namapp.core.datastore import AdminDataStore
from namapp.core.errors import SourceUnavailable
from namapp.schemas.records import (
    AppRecord,
    BookingRecord,
    OrderRecord,
    ProductRecord,
    RatingRecord,
)
from namapp.schemas.stats import AggregateSnapshot

logger = logging.getLogger("namapp.stats")

R = TypeVar("R", bound=BaseModel)

PENDING = "pending"
NEW = "new"


def _parse(model: Type[R], rows: Sequence[Dict[str, Any]]) -> List[R]:
    return [model.model_validate(row) for row in rows]


def _count_status(records: Sequence[Any], status: str) -> int:
    return sum(1 for r in records if r.status == status)


async def _records(store: AdminDataStore, collection: str, model: Type[R], fields: List[str]) -> List[R]:
    return _parse(model, await store.fetch(collection, fields))


async def _absorb(source: str, read: Awaitable, default):
    """Await one source read; on failure log it and return `default`."""
    try:
        return await read
    except Exception as exc:
        logger.warning("Stats source unavailable: %s", SourceUnavailable(source, exc))
        return default


async def compute_snapshot(store: AdminDataStore) -> AggregateSnapshot:
    (
        users_count,
        apps,
        products,
        orders,
        ratings,
        contacts_count,
        new_contacts_count,
        packages_count,
        bookings,
    ) = await asyncio.gather(
        _absorb("users", store.count("users"), 0),
        _absorb("apps", _records(store, "apps", AppRecord, ["status", "downloads"]), []),
        _absorb("products", _records(store, "products", ProductRecord, ["status"]), []),
        _absorb("orders", _records(store, "orders", OrderRecord, ["status", "total_amount"]), []),
        _absorb("product_ratings", _records(store, "product_ratings", RatingRecord, ["rating"]), []),
        _absorb("contact_messages", store.count("contact_messages"), 0),
        _absorb("contact_messages[new]", store.count("contact_messages", status=NEW), 0),
        _absorb("driving_school_packages", store.count("driving_school_packages"), 0),
        _absorb("driving_school_bookings", _records(store, "driving_school_bookings", BookingRecord, ["status"]), []),
    )

    total_ratings = len(ratings)
    average_rating = sum(r.rating for r in ratings) / total_ratings if total_ratings > 0 else 0

    return AggregateSnapshot(
        total_users=users_count,
        total_apps=len(apps),
        pending_apps=_count_status(apps, PENDING),
        total_downloads=sum(a.downloads for a in apps),
        total_products=len(products),
        pending_products=_count_status(products, PENDING),
        total_orders=len(orders),
        pending_orders=_count_status(orders, PENDING),
        total_order_value=sum(o.total_amount for o in orders),
        total_ratings=total_ratings,
        average_rating=average_rating,
        total_contacts=contacts_count,
        new_contacts=new_contacts_count,
        driving_school_packages=packages_count,
        driving_school_bookings=len(bookings),
        driving_school_pending_bookings=_count_status(bookings, PENDING),
    )
