"""
namapp/schemas/stats.py
Dashboard summary returned by GET /admin/stats.
"""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class AggregateSnapshot(BaseModel):
    """Counts and sums across every tracked collection; serialized with camelCase keys."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    total_users: int = 0
    total_apps: int = 0
    pending_apps: int = 0
    total_downloads: int = 0
    total_products: int = 0
    pending_products: int = 0
    total_orders: int = 0
    pending_orders: int = 0
    total_order_value: float = 0
    total_ratings: int = 0
    average_rating: float = 0
    total_contacts: int = 0
    new_contacts: int = 0
    driving_school_packages: int = 0
    driving_school_bookings: int = 0
    driving_school_pending_bookings: int = 0
