"""
Admin Dashboard Router
Handles admin dashboard statistics
"""
import logging

from fastapi import APIRouter, Depends

from namapp.core.auth import AdminContext, get_current_admin
from namapp.core.errors import BackendError
from namapp.schemas.stats import AggregateSnapshot
from namapp.services.stats import compute_snapshot

logger = logging.getLogger("namapp.admin")

router = APIRouter(tags=["Admin: Dashboard"])


@router.get("/stats", response_model=AggregateSnapshot)
async def get_dashboard_stats(ctx: AdminContext = Depends(get_current_admin)) -> AggregateSnapshot:
    """
    Get dashboard statistics for admin panel.
    Unavailable sources count as empty; they never fail the request.
    """
    try:
        return await compute_snapshot(ctx.store)
    except Exception as e:
        logger.exception("Admin stats API error")
        raise BackendError(f"Failed to fetch dashboard stats: {e}")
