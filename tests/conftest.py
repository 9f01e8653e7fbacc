"""
Shared test fixtures.

Time is driven by ``StepClock`` so every transition gets a predictable
timestamp, and drivers come from an in-memory directory that knows only
driver 15.
"""

from datetime import datetime, timedelta

import pytest

from taxi.config import Settings
from taxi.domain.entities import TaxiOrder
from taxi.domain.values import Address, PersonName
from taxi.infrastructure.repositories import InMemoryDriverRepository
from taxi.services.taxi_api import TaxiApi

T0 = datetime(2024, 1, 1, 10, 0, 0)


class StepClock:
    """Returns ``start``, then ``start + step``, ``start + 2*step`` ..."""

    def __init__(self, start: datetime = T0, step: timedelta = timedelta(minutes=5)):
        self.now = start
        self.step = step
        self.calls = 0

    def __call__(self) -> datetime:
        current = self.now
        self.now += self.step
        self.calls += 1
        return current


# ── Fixtures ──────────────────────────────────────────────────────────


@pytest.fixture
def clock() -> StepClock:
    return StepClock()


@pytest.fixture
def drivers() -> InMemoryDriverRepository:
    return InMemoryDriverRepository.with_default_drivers()


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def api(drivers, clock, settings) -> TaxiApi:
    return TaxiApi(drivers, clock=clock, settings=settings)


@pytest.fixture
def order() -> TaxiOrder:
    return TaxiOrder.create(
        1,
        PersonName("Anna", "Ivanova"),
        Address("Main St", "5"),
        Address.empty(),
        T0,
    )
