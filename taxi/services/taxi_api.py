"""
Taxi API facade
===============

Single entry point used by the HTTP layer and by scripts.  Owns the three
collaborators the order itself does not know about:

* **clock** -- every transition is stamped with ``clock()``, never with the
  system time directly, so tests can pin it.
* **driver directory** -- passed to ``TaxiOrder.assign_driver`` for
  enrichment.
* **id generator** -- supplies order ids (defaults to a counter starting at
  ``settings.first_order_id``).
"""

from __future__ import annotations

import itertools
import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Callable, Iterator, Optional

from taxi.config import Settings, settings as default_settings
from taxi.domain.drivers import DriverDirectory, DriverNotFound
from taxi.domain.entities import InvalidOrderState, TaxiOrder
from taxi.domain.values import Address, PersonName

from .formatting import driver_full_info, short_order_info

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]
IdGenerator = Callable[[], int]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TaxiApi:
    def __init__(
        self,
        drivers: DriverDirectory,
        clock: Clock = utc_now,
        id_generator: Optional[IdGenerator] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or default_settings
        self.drivers = drivers
        self.clock = clock
        self.next_id = id_generator or itertools.count(self.settings.first_order_id).__next__

    # ── Construction ──────────────────────────────────────────────

    def create_order_without_destination(
        self, first_name: str, last_name: str, street: str, building: str
    ) -> TaxiOrder:
        order = TaxiOrder.create(
            self.next_id(),
            PersonName(first_name, last_name),
            Address(street, building),
            Address.empty(),
            self.clock(),
        )
        logger.info("Order %d created for %s %s", order.id, first_name, last_name)
        return order

    # ── Mutators ──────────────────────────────────────────────────

    def update_destination(self, order: TaxiOrder, street: str, building: str) -> None:
        order.update_destination(Address(street, building))
        logger.info("Order %d destination set to %s %s", order.id, street, building)

    def assign_driver(self, order: TaxiOrder, driver_id: int) -> None:
        try:
            with _log_rejection(order, "assign driver"):
                order.assign_driver(
                    driver_id,
                    self.clock(),
                    self.drivers,
                    rollback_on_failure=self.settings.rollback_failed_assignment,
                )
        except DriverNotFound:
            logger.error(
                "Order %d: driver %d not found (status now %s)",
                order.id,
                driver_id,
                order.status,
            )
            raise
        logger.info("Order %d: driver %d assigned", order.id, driver_id)

    def unassign_driver(self, order: TaxiOrder) -> None:
        driver_id = order.driver.id
        with _log_rejection(order, "unassign driver"):
            order.unassign_driver(
                reset_driver_id=self.settings.unassign_resets_driver_id
            )
        logger.info("Order %d: driver %d unassigned", order.id, driver_id)

    def cancel(self, order: TaxiOrder) -> None:
        with _log_rejection(order, "cancel"):
            order.cancel(self.clock())
        logger.info("Order %d canceled", order.id)

    def start_ride(self, order: TaxiOrder) -> None:
        with _log_rejection(order, "start ride"):
            order.start_ride(self.clock())
        logger.info("Order %d: ride started", order.id)

    def finish_ride(self, order: TaxiOrder) -> None:
        with _log_rejection(order, "finish ride"):
            order.finish_ride(self.clock())
        logger.info("Order %d: ride finished", order.id)

    # ── Queries ───────────────────────────────────────────────────

    def get_last_progress_time(self, order: TaxiOrder) -> Optional[datetime]:
        return order.last_progress_time()

    def get_driver_full_info(self, order: TaxiOrder) -> Optional[str]:
        return driver_full_info(order)

    def get_short_order_info(self, order: TaxiOrder) -> str:
        return short_order_info(order, self.settings.timestamp_format)


@contextmanager
def _log_rejection(order: TaxiOrder, action: str) -> Iterator[None]:
    """Log a rejected transition at WARNING and let the error propagate."""
    try:
        yield
    except InvalidOrderState as exc:
        logger.warning(
            "Order %d: %s rejected in status %s: %s", order.id, action, order.status, exc
        )
        raise
