"""FastAPI dependency injection helpers."""

from fastapi import HTTPException, Request

from taxi.domain.entities import TaxiOrder
from taxi.infrastructure.repositories import OrderRepository
from taxi.services.taxi_api import TaxiApi


def get_taxi_api(request: Request) -> TaxiApi:
    return request.app.state.taxi_api


def get_orders(request: Request) -> OrderRepository:
    return request.app.state.orders


def get_order(order_id: int, request: Request) -> TaxiOrder:
    """Resolve the ``order_id`` path parameter or answer 404."""
    order = get_orders(request).get_by_id(order_id)
    if order is None:
        raise HTTPException(status_code=404, detail="Order not found")
    return order
