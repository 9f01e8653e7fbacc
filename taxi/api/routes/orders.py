"""
Order endpoints
===============

POST   /api/v1/orders                       -- create an order (no destination yet)
GET    /api/v1/orders/{order_id}            -- order state and timestamps
GET    /api/v1/orders/{order_id}/summary    -- human-readable order / driver info
PATCH  /api/v1/orders/{order_id}/destination
POST   /api/v1/orders/{order_id}/driver     -- assign a driver
DELETE /api/v1/orders/{order_id}/driver     -- unassign the driver
POST   /api/v1/orders/{order_id}/cancel
POST   /api/v1/orders/{order_id}/start
POST   /api/v1/orders/{order_id}/finish

Guard violations surface as 409 and unknown drivers as 404 through the
exception handlers registered in ``taxi.api.app``.  Rate limiting is
applied app-wide by the middleware installed there.
"""

from fastapi import APIRouter, Depends

from taxi.api.dependencies import get_order, get_orders, get_taxi_api
from taxi.api.schemas import (
    DestinationUpdateRequest,
    DriverAssignRequest,
    ErrorResponse,
    OrderCreateRequest,
    OrderResponse,
    OrderSummaryResponse,
)
from taxi.domain.entities import TaxiOrder
from taxi.infrastructure.repositories import OrderRepository
from taxi.services.taxi_api import TaxiApi

router = APIRouter(prefix="/orders", tags=["orders"])

NOT_FOUND = {404: {"model": ErrorResponse, "description": "Order not found."}}
TRANSITION_ERRORS = {
    **NOT_FOUND,
    409: {"model": ErrorResponse, "description": "Transition not allowed in the current state."},
}


@router.post(
    "",
    status_code=201,
    response_model=OrderResponse,
    summary="Create an order without destination",
)
async def create_order(
    body: OrderCreateRequest,
    api: TaxiApi = Depends(get_taxi_api),
    orders: OrderRepository = Depends(get_orders),
):
    order = api.create_order_without_destination(
        body.first_name, body.last_name, body.street, body.building
    )
    orders.add(order)
    return OrderResponse.from_order(order)


@router.get(
    "/{order_id}",
    response_model=OrderResponse,
    summary="Get an order",
    responses=NOT_FOUND,
)
async def get_order_detail(order: TaxiOrder = Depends(get_order)):
    return OrderResponse.from_order(order)


@router.get(
    "/{order_id}/summary",
    response_model=OrderSummaryResponse,
    summary="Short order info and full driver info",
    responses=NOT_FOUND,
)
async def get_order_summary(
    order: TaxiOrder = Depends(get_order),
    api: TaxiApi = Depends(get_taxi_api),
):
    return OrderSummaryResponse(
        order=api.get_short_order_info(order),
        driver=api.get_driver_full_info(order),
    )


@router.patch(
    "/{order_id}/destination",
    response_model=OrderResponse,
    summary="Set or change the destination",
    description="Allowed in every status, including after the ride.",
    responses=NOT_FOUND,
)
async def update_destination(
    body: DestinationUpdateRequest,
    order: TaxiOrder = Depends(get_order),
    api: TaxiApi = Depends(get_taxi_api),
):
    api.update_destination(order, body.street, body.building)
    return OrderResponse.from_order(order)


@router.post(
    "/{order_id}/driver",
    response_model=OrderResponse,
    summary="Assign a driver",
    description="404 also covers a driver id unknown to the driver directory.",
    responses=TRANSITION_ERRORS,
)
async def assign_driver(
    body: DriverAssignRequest,
    order: TaxiOrder = Depends(get_order),
    api: TaxiApi = Depends(get_taxi_api),
):
    api.assign_driver(order, body.driver_id)
    return OrderResponse.from_order(order)


@router.delete(
    "/{order_id}/driver",
    response_model=OrderResponse,
    summary="Unassign the driver",
    responses=TRANSITION_ERRORS,
)
async def unassign_driver(
    order: TaxiOrder = Depends(get_order),
    api: TaxiApi = Depends(get_taxi_api),
):
    api.unassign_driver(order)
    return OrderResponse.from_order(order)


@router.post(
    "/{order_id}/cancel",
    response_model=OrderResponse,
    summary="Cancel an order",
    description="Rejected with 409 once the ride has started.",
    responses=TRANSITION_ERRORS,
)
async def cancel_order(
    order: TaxiOrder = Depends(get_order),
    api: TaxiApi = Depends(get_taxi_api),
):
    api.cancel(order)
    return OrderResponse.from_order(order)


@router.post(
    "/{order_id}/start",
    response_model=OrderResponse,
    summary="Start the ride",
    responses=TRANSITION_ERRORS,
)
async def start_ride(
    order: TaxiOrder = Depends(get_order),
    api: TaxiApi = Depends(get_taxi_api),
):
    api.start_ride(order)
    return OrderResponse.from_order(order)


@router.post(
    "/{order_id}/finish",
    response_model=OrderResponse,
    summary="Finish the ride",
    responses=TRANSITION_ERRORS,
)
async def finish_ride(
    order: TaxiOrder = Depends(get_order),
    api: TaxiApi = Depends(get_taxi_api),
):
    api.finish_ride(order)
    return OrderResponse.from_order(order)
