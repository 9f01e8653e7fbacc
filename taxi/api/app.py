"""
FastAPI application factory.

* Builds the ``TaxiApi`` facade (driver directory + clock) and the
  in-process order registry, and stores both on ``app.state``.
* Maps domain errors to HTTP responses.
* Applies rate-limiting middleware with ``settings.rate_limit``.
* Swagger / OpenAPI UI available at ``/docs``.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from taxi.api.middleware import build_limiter
from taxi.api.routes import admin, orders
from taxi.config import Settings, settings as default_settings
from taxi.domain.drivers import DriverNotFound
from taxi.domain.entities import InvalidOrderState, UnsupportedOrderStatus
from taxi.infrastructure.repositories import InMemoryDriverRepository, OrderRepository
from taxi.services.taxi_api import TaxiApi

logger = logging.getLogger(__name__)


async def _invalid_state_handler(request: Request, exc: InvalidOrderState):
    return JSONResponse(status_code=409, content={"detail": str(exc)})


async def _driver_not_found_handler(request: Request, exc: DriverNotFound):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


async def _unsupported_status_handler(request: Request, exc: UnsupportedOrderStatus):
    logger.error("Order in unsupported status: %s", exc)
    return JSONResponse(
        status_code=500, content={"detail": f"Unsupported order status {exc}"}
    )


def create_app(
    settings: Optional[Settings] = None, taxi_api: Optional[TaxiApi] = None
) -> FastAPI:
    settings = settings or default_settings
    logging.basicConfig(level=settings.log_level)

    app = FastAPI(
        title=settings.app_title,
        description=(
            "Tracks a taxi order from creation through driver assignment, "
            "ride start and finish, or cancellation.  Every transition is "
            "guarded and timestamped."
        ),
        version="1.0.0",
    )

    app.state.taxi_api = taxi_api or TaxiApi(
        InMemoryDriverRepository.with_default_drivers(), settings=settings
    )
    app.state.orders = OrderRepository()

    # Rate limiter
    app.state.limiter = build_limiter(settings)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # Domain errors
    app.add_exception_handler(InvalidOrderState, _invalid_state_handler)
    app.add_exception_handler(DriverNotFound, _driver_not_found_handler)
    app.add_exception_handler(UnsupportedOrderStatus, _unsupported_status_handler)

    # Routers
    app.include_router(orders.router, prefix="/api/v1")
    app.include_router(admin.router, prefix="/api/v1")

    return app
