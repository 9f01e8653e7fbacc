"""
Domain entities with business logic.

Patterns used
-------------
- **Entity**: ``Driver`` and ``TaxiOrder`` compare by identity (``id``),
  unlike the value objects in ``values.py``.
- **State machine** on ``TaxiOrder``: every transition checks its guard
  before touching the order, then sets the status and stamps its time
  (WaitingForDriver -> WaitingCarArrival -> InProgress -> Finished,
  Canceled from either waiting state).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from .drivers import DriverDirectory, DriverNotFound
from .enums import TERMINAL_STATUSES, TaxiOrderStatus
from .values import Address, Car, PersonName

NO_DRIVER_ID = 0


class InvalidOrderState(Exception):
    """Raised when a transition's precondition does not hold."""


class UnsupportedOrderStatus(Exception):
    """Raised for a status outside the known lifecycle."""


# ── Entities ──────────────────────────────────────────────────────────


@dataclass(eq=False)
class Entity:
    """Compared by ``id``.  Unhashable: ``id`` changes over the lifecycle."""

    id: int

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.id == other.id

    __hash__ = None  # type: ignore[assignment]


@dataclass(eq=False)
class Driver(Entity):
    name: PersonName = field(default_factory=PersonName.empty)
    car: Car = field(default_factory=Car.empty)

    @classmethod
    def unassigned(cls) -> Driver:
        return cls(NO_DRIVER_ID)

    @property
    def is_assigned(self) -> bool:
        return self.id != NO_DRIVER_ID

    def clear_details(self) -> None:
        self.name = PersonName.empty()
        self.car = Car.empty()


@dataclass(eq=False)
class TaxiOrder(Entity):
    client_name: PersonName
    start: Address
    destination: Address
    creation_time: datetime
    driver: Driver = field(default_factory=Driver.unassigned)
    status: TaxiOrderStatus = TaxiOrderStatus.WAITING_FOR_DRIVER
    driver_assignment_time: Optional[datetime] = None
    cancel_time: Optional[datetime] = None
    start_ride_time: Optional[datetime] = None
    finish_ride_time: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        order_id: int,
        client_name: PersonName,
        start: Address,
        destination: Address,
        now: datetime,
    ) -> TaxiOrder:
        return cls(
            id=order_id,
            client_name=client_name,
            start=start,
            destination=destination,
            creation_time=now,
        )

    @property
    def ride_started(self) -> bool:
        return self.start_ride_time is not None

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    # ── Transitions ───────────────────────────────────────────────

    def update_destination(self, address: Address) -> None:
        # Allowed at any status, including after the ride.
        self.destination = address

    def assign_driver(
        self,
        driver_id: int,
        now: datetime,
        drivers: DriverDirectory,
        *,
        rollback_on_failure: bool = False,
    ) -> None:
        """Bind *driver_id* to the order and fill in name/car from *drivers*.

        The status change happens before the lookup. With
        ``rollback_on_failure`` unset a ``DriverNotFound`` leaves the order
        in WaitingCarArrival with the unknown id and empty details.
        """
        if self.driver.is_assigned:
            raise InvalidOrderState(
                f"Order {self.id}: driver {self.driver.id} is already assigned"
            )

        previous = (self.status, self.driver_assignment_time)
        self.driver.id = driver_id
        self.driver_assignment_time = now
        self.status = TaxiOrderStatus.WAITING_CAR_ARRIVAL

        try:
            details = drivers.enrich(driver_id)
        except DriverNotFound:
            if rollback_on_failure:
                self.driver.id = NO_DRIVER_ID
                self.status, self.driver_assignment_time = previous
            raise

        self.driver.name = details.name
        self.driver.car = details.car

    def unassign_driver(self, *, reset_driver_id: bool = False) -> None:
        if not self.driver.is_assigned:
            raise InvalidOrderState(
                f"Order {self.id}: cannot unassign a driver in status {self.status}"
            )
        if self.ride_started:
            raise InvalidOrderState(
                f"Order {self.id}: cannot unassign a driver, the ride has already started"
            )

        self.driver.clear_details()
        if reset_driver_id:
            self.driver.id = NO_DRIVER_ID
            self.driver_assignment_time = None
        self.status = TaxiOrderStatus.WAITING_FOR_DRIVER

    def cancel(self, now: datetime) -> None:
        if self.ride_started:
            raise InvalidOrderState(
                f"Order {self.id}: cannot cancel, the ride has already started"
            )
        self.status = TaxiOrderStatus.CANCELED
        self.cancel_time = now

    def start_ride(self, now: datetime) -> None:
        if not self.driver.is_assigned:
            raise InvalidOrderState(
                f"Order {self.id}: the driver must be assigned to start the ride"
            )
        self.status = TaxiOrderStatus.IN_PROGRESS
        self.start_ride_time = now

    def finish_ride(self, now: datetime) -> None:
        if not self.ride_started:
            raise InvalidOrderState(
                f"Order {self.id}: the ride has to be started before it can finish"
            )
        self.status = TaxiOrderStatus.FINISHED
        self.finish_ride_time = now

    # ── Queries ───────────────────────────────────────────────────

    def last_progress_time(self) -> Optional[datetime]:
        """Timestamp of the transition that produced the current status."""
        if self.status == TaxiOrderStatus.WAITING_FOR_DRIVER:
            return self.creation_time
        if self.status == TaxiOrderStatus.WAITING_CAR_ARRIVAL:
            return self.driver_assignment_time
        if self.status == TaxiOrderStatus.IN_PROGRESS:
            return self.start_ride_time
        if self.status == TaxiOrderStatus.FINISHED:
            return self.finish_ride_time
        if self.status == TaxiOrderStatus.CANCELED:
            return self.cancel_time
        raise UnsupportedOrderStatus(str(self.status))
