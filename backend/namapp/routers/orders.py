from __future__ import annotations

from typing import Any, List

from fastapi import APIRouter, Body, Depends

from namapp.core.auth import AdminContext, get_current_admin
from namapp.schemas.order import OrderOut
from namapp.services.orders import list_orders, update_order_status

admin_router = APIRouter(prefix="/orders", tags=["Admin Orders"])


@admin_router.get("", response_model=List[OrderOut])
async def admin_list_orders(ctx: AdminContext = Depends(get_current_admin)):
    """All orders, newest first."""
    return await list_orders(ctx.store)


@admin_router.patch("", response_model=OrderOut)
async def admin_update_order_status(
    payload: Any = Body(None),
    ctx: AdminContext = Depends(get_current_admin),
):
    """
    Body: {"id": "...", "status": "pending|confirmed|shipped|delivered|cancelled"}
    Updates the status, stamps updated_at and returns the stored order.
    Any other body shape is a 400.
    """
    body = payload if isinstance(payload, dict) else {}
    return await update_order_status(ctx.store, body.get("id"), body.get("status"))
