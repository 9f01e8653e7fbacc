"""Pydantic request / response schemas for the REST API."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from taxi.domain.entities import TaxiOrder
from taxi.domain.enums import TaxiOrderStatus


# ── Requests ──────────────────────────────────────────────────────────


class OrderCreateRequest(BaseModel):
    first_name: str = Field(..., max_length=120)
    last_name: str = Field(..., max_length=120)
    street: str = Field(..., max_length=255)
    building: str = Field(..., max_length=32)


class DestinationUpdateRequest(BaseModel):
    street: str = Field(..., max_length=255)
    building: str = Field(..., max_length=32)


class DriverAssignRequest(BaseModel):
    driver_id: int = Field(..., gt=0, description="Id known to the driver directory.")


# ── Responses ─────────────────────────────────────────────────────────


class AddressResponse(BaseModel):
    street: str
    building: str

    model_config = {"from_attributes": True}


class PersonNameResponse(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    model_config = {"from_attributes": True}


class CarResponse(BaseModel):
    color: Optional[str] = None
    model: Optional[str] = None
    plate_number: Optional[str] = None

    model_config = {"from_attributes": True}


class DriverResponse(BaseModel):
    id: int
    name: PersonNameResponse
    car: CarResponse

    model_config = {"from_attributes": True}


class OrderResponse(BaseModel):
    id: int
    status: TaxiOrderStatus
    client_name: PersonNameResponse
    start: AddressResponse
    destination: AddressResponse
    driver: DriverResponse
    creation_time: datetime
    driver_assignment_time: Optional[datetime] = None
    cancel_time: Optional[datetime] = None
    start_ride_time: Optional[datetime] = None
    finish_ride_time: Optional[datetime] = None
    last_progress_time: Optional[datetime] = None
    is_terminal: bool = False

    @classmethod
    def from_order(cls, order: TaxiOrder) -> OrderResponse:
        return cls(
            id=order.id,
            status=order.status,
            client_name=PersonNameResponse.model_validate(order.client_name),
            start=AddressResponse.model_validate(order.start),
            destination=AddressResponse.model_validate(order.destination),
            driver=DriverResponse(
                id=order.driver.id,
                name=PersonNameResponse.model_validate(order.driver.name),
                car=CarResponse.model_validate(order.driver.car),
            ),
            creation_time=order.creation_time,
            driver_assignment_time=order.driver_assignment_time,
            cancel_time=order.cancel_time,
            start_ride_time=order.start_ride_time,
            finish_ride_time=order.finish_ride_time,
            last_progress_time=order.last_progress_time(),
            is_terminal=order.is_terminal,
        )


class OrderSummaryResponse(BaseModel):
    order: str
    driver: Optional[str] = None


class HealthResponse(BaseModel):
    status: str = "ok"


class ErrorResponse(BaseModel):
    detail: str
