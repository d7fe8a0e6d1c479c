from __future__ import annotations

from typing import Any, Literal, Optional, get_args

from pydantic import BaseModel, ConfigDict

# Order statuses an admin may set
OrderStatus = Literal["pending", "confirmed", "shipped", "delivered", "cancelled"]
ORDER_STATUSES = frozenset(get_args(OrderStatus))


# Keep extra fields (the frontend stores customer and line-item details freely)
class _Base(BaseModel):
    model_config = ConfigDict(extra="allow")


# (Output) order document with its id. Stored values are passed through as-is:
# one odd document must not break the whole admin list.
class OrderOut(_Base):
    id: str
    status: Optional[Any] = None
    total_amount: Optional[Any] = None
    created_at: Optional[Any] = None
    updated_at: Optional[Any] = None
