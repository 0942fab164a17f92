# main.py

"""In-memory FastAPI application serving the demo order tracker."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import Settings, get_settings

from .middlewares import LoggingMiddleware, RequestIdMiddleware
from .obs import configure_logging, level_from_name
from .repos.memory_orders_repo import InMemoryOrdersRepo
from .repos.orders_repo import OrdersRepo
from .routes_orders import router as orders_router
from .utils.responses import err

logger = logging.getLogger("api")


def create_app(
    settings: Settings | None = None, orders: OrdersRepo | None = None
) -> FastAPI:
    """Build the tracker application around an explicitly owned store.

    Without ``orders`` a fresh store is seeded with the two startup orders.
    """

    settings = settings or get_settings()
    if orders is None:
        orders = InMemoryOrdersRepo.from_seed(
            threshold=settings.advance_threshold,
            tracker_link_base=settings.tracker_link_base,
        )

    app = FastAPI(title="Order Tracker Demo", version="1.0.0")
    app.state.settings = settings
    app.state.orders = orders

    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(LoggingMiddleware)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        logger.warning(
            exc.detail,
            extra={"status": exc.status_code, "route": request.url.path},
        )
        return JSONResponse(err(exc.status_code, str(exc.detail)), status_code=exc.status_code)

    @app.exception_handler(Exception)
    async def general_error_handler(request: Request, exc: Exception):
        logger.exception(
            "unhandled_error",
            extra={"status": 500, "route": request.url.path},
        )
        return JSONResponse(err(500, "Internal Server Error"), status_code=500)

    app.include_router(orders_router)
    return app


settings = get_settings()
configure_logging(level_from_name(settings.log_level))
app = create_app(settings)
