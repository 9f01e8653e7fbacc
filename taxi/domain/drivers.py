"""Driver enrichment contract consumed by ``TaxiOrder.assign_driver``."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .values import DriverDetails


class DriverNotFound(LookupError):
    """Raised when the directory has no record for a driver id."""

    def __init__(self, driver_id: int):
        super().__init__(f"Unknown driver id {driver_id}")
        self.driver_id = driver_id


class DriverDirectory(ABC):
    @abstractmethod
    def enrich(self, driver_id: int) -> DriverDetails: ...
