"""
Admin / observability endpoints
===============================

GET /api/v1/admin/orders -- list every order held by this process
GET /api/v1/admin/health -- simple health check
"""

from fastapi import APIRouter, Depends

from taxi.api.dependencies import get_orders
from taxi.api.schemas import HealthResponse, OrderResponse
from taxi.infrastructure.repositories import OrderRepository

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get(
    "/orders",
    response_model=list[OrderResponse],
    summary="List all orders with their drivers",
)
async def list_orders(
    orders: OrderRepository = Depends(get_orders),
):
    return [OrderResponse.from_order(o) for o in orders.list_orders()]


@router.get("/health", response_model=HealthResponse, summary="Health check")
async def health():
    return HealthResponse()
