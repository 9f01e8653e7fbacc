"""Human-readable summaries of an order and its driver."""

from __future__ import annotations

from typing import Optional

from taxi.domain.entities import TaxiOrder
from taxi.domain.enums import TaxiOrderStatus


def _join_present(first: Optional[str], second: Optional[str]) -> str:
    if not first and not second:
        return ""
    return " ".join(part for part in (first, second) if part is not None)


def format_name(first_name: Optional[str], last_name: Optional[str]) -> str:
    return _join_present(first_name, last_name)


def format_address(street: Optional[str], building: Optional[str]) -> str:
    return _join_present(street, building)


def driver_full_info(order: TaxiOrder) -> Optional[str]:
    """``None`` while the order still waits for a driver."""
    if order.status == TaxiOrderStatus.WAITING_FOR_DRIVER:
        return None
    driver = order.driver
    return " ".join(
        [
            f"Id: {driver.id}",
            f"DriverName: {format_name(driver.name.first_name, driver.name.last_name)}",
            f"Color: {driver.car.color or ''}",
            f"CarModel: {driver.car.model or ''}",
            f"PlateNumber: {driver.car.plate_number or ''}",
        ]
    )


def short_order_info(order: TaxiOrder, timestamp_format: str) -> str:
    last_progress = order.last_progress_time()
    return " ".join(
        [
            f"OrderId: {order.id}",
            f"Status: {order.status}",
            f"Client: {format_name(order.client_name.first_name, order.client_name.last_name)}",
            f"Driver: {format_name(order.driver.name.first_name, order.driver.name.last_name)}",
            f"From: {format_address(order.start.street, order.start.building)}",
            f"To: {format_address(order.destination.street, order.destination.building)}",
            "LastProgressTime: "
            + (last_progress.strftime(timestamp_format) if last_progress else ""),
        ]
    )
