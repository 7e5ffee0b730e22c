"""stockroom HTTP API — FastAPI application factory.

- Routes registered explicitly
- Global error handlers map domain/store errors to ``{"error": ...}`` bodies
- CORS configured from settings
- The Database is created on startup and disposed on shutdown, unless one
  is injected (tests), in which case its owner manages it
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from stockroom.infrastructure import bootstrap
from stockroom.infrastructure.api.error_handlers import register_error_handlers
from stockroom.infrastructure.api.routes import health, orders, products
from stockroom.infrastructure.config import Settings, get_settings
from stockroom.infrastructure.observability import setup_logging
from stockroom.infrastructure.persistence.database import Database

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format)

    owns_database = app.state.database is None
    if owns_database:
        app.state.database = bootstrap.open_database(settings)

    logger.info("stockroom API started")
    yield
    logger.info("stockroom API shutting down")

    if owns_database:
        app.state.database.dispose()
        app.state.database = None


def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(title="stockroom", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.database = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(products.router)
    app.include_router(orders.router)

    register_error_handlers(app)
    return app
