"""Seller dashboard API."""

from typing import Annotated

from fastapi import APIRouter, Depends

from craftly.api.v1.dependencies import CurrentUserId, get_dashboard_service
from craftly.application.services.dashboard_service import DashboardService
from craftly.schemas.common import success_response

router = APIRouter()


@router.get("/seller-stats")
async def get_seller_stats(
    uid: CurrentUserId,
    dashboard_service: Annotated[DashboardService, Depends(get_dashboard_service)],
):
    """Products, orders, revenue, recent sales and low stock for the calling seller."""
    return success_response(await dashboard_service.seller_stats(uid))
