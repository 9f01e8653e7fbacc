"""
Repository Pattern -- in-process stand-ins for driver and order storage.

``InMemoryDriverRepository`` is the driver directory used by
``TaxiOrder.assign_driver``; ``OrderRepository`` lets the HTTP layer find
orders by id between requests.  Neither persists anything.
"""

from __future__ import annotations

from typing import Mapping, Optional

from taxi.domain.drivers import DriverDirectory, DriverNotFound
from taxi.domain.entities import TaxiOrder
from taxi.domain.values import Car, DriverDetails, PersonName

DEFAULT_DRIVERS: dict[int, DriverDetails] = {
    15: DriverDetails(
        name=PersonName("Drive", "Driverson"),
        car=Car(color="Baklazhan", model="Lada sedan", plate_number="A123BT 66"),
    ),
}


class InMemoryDriverRepository(DriverDirectory):
    def __init__(self, drivers: Optional[Mapping[int, DriverDetails]] = None):
        self._drivers = dict(drivers or {})

    @classmethod
    def with_default_drivers(cls) -> InMemoryDriverRepository:
        return cls(DEFAULT_DRIVERS)

    def add(self, driver_id: int, details: DriverDetails) -> None:
        self._drivers[driver_id] = details

    def enrich(self, driver_id: int) -> DriverDetails:
        try:
            return self._drivers[driver_id]
        except KeyError:
            raise DriverNotFound(driver_id) from None


class OrderRepository:
    def __init__(self) -> None:
        self._orders: dict[int, TaxiOrder] = {}

    def add(self, order: TaxiOrder) -> TaxiOrder:
        self._orders[order.id] = order
        return order

    def get_by_id(self, order_id: int) -> Optional[TaxiOrder]:
        return self._orders.get(order_id)

    def list_orders(self) -> list[TaxiOrder]:
        return list(self._orders.values())
